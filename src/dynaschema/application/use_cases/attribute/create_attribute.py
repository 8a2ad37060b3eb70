"""Create attribute use case."""

import logging

from dynaschema.application.dto.attribute_input import AttributeInput
from dynaschema.application.ports import DocumentStoreFactory, SchemaQueue
from dynaschema.application.services.lookup import get_collection, purge_collection
from dynaschema.application.services.mirror_saga import PrimaryOnly, create_with_mirror
from dynaschema.application.services.schema_keys import element_id
from dynaschema.application.services.store_errors import store_errors
from dynaschema.domain.entities import Attribute, Collection, RelationshipOptions
from dynaschema.domain.exceptions import AlreadyExists, InvalidValue, NotFound
from dynaschema.domain.value_objects import AttributeType, RelationSide, RelationType, Status

logger = logging.getLogger(__name__)


class CreateAttributeUseCase:
    """Persist a new attribute as an intent and hand the physical change to the worker.

    The attribute is stored in ``processing``; it becomes ``available`` only
    once the worker confirms the change. Two-way relationships also get a
    mirror attribute on the related collection.
    """

    def __init__(self, store_factory: DocumentStoreFactory, schema_queue: SchemaQueue) -> None:
        self._store_factory = store_factory
        self._schema_queue = schema_queue

    async def execute(
        self, database_id: str, collection_id: str, data: AttributeInput
    ) -> Attribute:
        _validate_definition(data)

        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)

            related: Collection | None = None
            options: RelationshipOptions | None = None
            if data.relationship is not None:
                rel = data.relationship
                related = await store.collections.get_by_id(database, rel.related_collection)
                if not related:
                    raise NotFound("Collection", rel.related_collection)
                _check_relationship_conflicts(collection, data)
                options = RelationshipOptions(
                    related_collection=related.id,
                    relation_type=rel.relation_type,
                    two_way=rel.two_way,
                    two_way_key=rel.two_way_key or related.id,
                    on_delete=rel.on_delete,
                    side=RelationSide.PARENT,
                )

            attribute = Attribute(
                id=element_id(database, collection, data.key),
                key=data.key,
                type=data.type,
                collection_id=collection.id,
                collection_internal_id=collection.internal_id,
                database_internal_id=database.internal_id,
                status=Status.PROCESSING,
                size=data.size,
                required=data.required,
                array=data.array,
                default=data.default,
                format=data.format,
                format_options=dict(data.format_options),
                filters=list(data.filters),
                options=options,
            )

            mirror: Attribute | None = None
            if related is not None and attribute.is_two_way:
                mirror = Attribute(
                    id=element_id(database, related, options.two_way_key),
                    key=options.two_way_key,
                    type=AttributeType.RELATIONSHIP,
                    collection_id=related.id,
                    collection_internal_id=related.internal_id,
                    database_internal_id=database.internal_id,
                    status=Status.PROCESSING,
                    options=options.mirrored(collection.id, attribute.key),
                )

            with store_errors("Attribute"):
                store.adapter.check_attribute(collection, attribute)
                if mirror is not None:
                    store.adapter.check_attribute(related, mirror)
                result = await create_with_mirror(store.attributes, attribute, mirror)

            if isinstance(result, PrimaryOnly):
                if not result.compensated:
                    logger.error(
                        "attribute_orphaned",
                        extra={"attribute_id": attribute.id, "collection_id": collection.id},
                    )
                with store_errors("Attribute"):
                    raise result.cause

            await purge_collection(store, collection.id)
            if related is not None:
                await purge_collection(store, related.id)

            await self._schema_queue.notify_create_attribute(database, collection, result.primary)

        logger.info(
            "attribute_created",
            extra={
                "attribute_id": result.primary.id,
                "collection_id": collection.id,
                "mirror_id": result.mirror.id if result.mirror else None,
            },
        )
        return result.primary


def _validate_definition(data: AttributeInput) -> None:
    if data.format is not None and not data.format.supports(data.type):
        raise InvalidValue(
            f'Format "{data.format}" is not supported for "{data.type}" attributes',
            code="attribute_format_unsupported",
        )
    if data.default is not None and data.required:
        raise InvalidValue(
            "Cannot set default value for required attribute",
            code="attribute_default_unsupported",
        )
    if data.default is not None and data.array:
        raise InvalidValue(
            "Cannot set default value for array attributes",
            code="attribute_default_unsupported",
        )
    if (data.type == AttributeType.RELATIONSHIP) != (data.relationship is not None):
        raise InvalidValue(
            "Relationship options are required for, and only allowed on, relationship attributes",
            code="attribute_value_invalid",
        )


def _check_relationship_conflicts(collection: Collection, data: AttributeInput) -> None:
    rel = data.relationship
    two_way_key = (rel.two_way_key or rel.related_collection).lower()
    for existing in collection.relationship_attributes():
        if existing.key.lower() == data.key.lower():
            raise AlreadyExists(
                "Attribute with the requested key already exists",
                code="attribute_already_exists",
            )
        if existing.options.related_collection != rel.related_collection:
            continue
        if (existing.options.two_way_key or "").lower() == two_way_key:
            raise AlreadyExists(
                "Attribute with the requested two-way key already exists",
                code="attribute_already_exists",
            )
        if (
            rel.relation_type == RelationType.MANY_TO_MANY
            and existing.options.relation_type == RelationType.MANY_TO_MANY
        ):
            raise InvalidValue(
                "Creating more than one manyToMany relationship on the same collection "
                "is currently not permitted",
                code="attribute_value_invalid",
            )
