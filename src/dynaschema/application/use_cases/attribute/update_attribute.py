"""Update attribute use case."""

import logging
from copy import deepcopy
from dataclasses import replace
from typing import Any

from dynaschema.application.dto.attribute_input import (
    FLOAT_MAX,
    FLOAT_MIN,
    INT_MAX,
    INT_MIN,
    AttributeUpdate,
    validate_enum_elements,
)
from dynaschema.application.ports import (
    DocumentStore,
    DocumentStoreFactory,
    SchemaQueue,
    StoreException,
)
from dynaschema.application.services.lookup import (
    get_attribute,
    get_collection,
    purge_collection,
)
from dynaschema.application.services.schema_keys import element_id
from dynaschema.application.services.store_errors import store_errors
from dynaschema.domain.entities import Attribute, Collection, Database
from dynaschema.domain.exceptions import InvalidValue, NotFound, TypeMismatch
from dynaschema.domain.validators import RangeValidator, TextValidator
from dynaschema.domain.value_objects import AttributeFormat, AttributeType, Status

logger = logging.getLogger(__name__)

_RANGE_FORMATS = (AttributeFormat.INT_RANGE, AttributeFormat.FLOAT_RANGE)


class UpdateAttributeUseCase:
    """Change an available attribute.

    A new key is applied by deleting the old record and creating one under
    the new deterministic id; the previous record is restored when the
    create fails. Relationship changes are propagated to the mirror.
    """

    def __init__(self, store_factory: DocumentStoreFactory, schema_queue: SchemaQueue) -> None:
        self._store_factory = store_factory
        self._schema_queue = schema_queue

    async def execute(
        self, database_id: str, collection_id: str, key: str, data: AttributeUpdate
    ) -> Attribute:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)
            attribute = await get_attribute(store, element_id(database, collection, key), key)
            original = deepcopy(attribute)

            _check_updatable(attribute, data)
            attribute.required = data.required
            attribute.default = data.default
            if data.size is not None:
                attribute.size = data.size
            attribute.format_options = _format_options(attribute, data)

            mirror: tuple[Collection, Attribute] | None = None
            if attribute.is_relationship:
                mirror = await self._update_relationship(
                    store, database, collection, attribute, data
                )
            else:
                with store_errors("Attribute"):
                    await store.adapter.update_attribute(
                        collection,
                        key,
                        type=attribute.type,
                        size=attribute.size,
                        required=attribute.required,
                        default=attribute.default,
                        format_options=attribute.format_options,
                        new_key=data.new_key,
                    )

            if data.new_key and data.new_key != key:
                attribute = await _rename(
                    store, database, collection, original, attribute, data.new_key
                )
            else:
                attribute = await store.attributes.update(attribute)

            if mirror is not None:
                await _update_mirror(store, *mirror, attribute)

            await purge_collection(store, collection.id)
            await self._schema_queue.notify_update_attribute(database, collection, attribute)

        logger.info(
            "attribute_updated",
            extra={"attribute_id": attribute.id, "collection_id": collection.id, "key": key},
        )
        return attribute

    async def _update_relationship(
        self,
        store: DocumentStore,
        database: Database,
        collection: Collection,
        attribute: Attribute,
        data: AttributeUpdate,
    ) -> tuple[Collection, Attribute] | None:
        """Apply the physical change and return the related collection and mirror, if any."""
        options = attribute.options
        if data.on_delete is not None:
            options = replace(options, on_delete=data.on_delete)

        with store_errors("Attribute"):
            await store.adapter.update_relationship(
                collection, attribute.key, new_key=data.new_key, on_delete=options.on_delete
            )
        attribute.options = options

        if not options.two_way:
            return None

        related = await store.collections.get_by_id(database, options.related_collection)
        if not related:
            raise NotFound("Collection", options.related_collection)
        mirror = await get_attribute(
            store, element_id(database, related, options.two_way_key), options.two_way_key
        )
        return related, mirror


def _check_updatable(attribute: Attribute, data: AttributeUpdate) -> None:
    if attribute.status != Status.AVAILABLE:
        raise InvalidValue("Attribute is not available", code="attribute_not_available")
    if attribute.type != data.type:
        raise TypeMismatch(f'Attribute is of type "{attribute.type}", not "{data.type}"')
    if data.format is not None and data.format != attribute.format:
        raise TypeMismatch("Attribute format cannot be changed")
    if data.filters is not None and sorted(data.filters) != sorted(attribute.filters):
        raise TypeMismatch("Attribute filters cannot be changed")
    if data.default is not None and data.required:
        raise InvalidValue(
            "Cannot set default value for required attribute",
            code="attribute_default_unsupported",
        )
    if data.default is not None and attribute.array:
        raise InvalidValue(
            "Cannot set default value for array attributes",
            code="attribute_default_unsupported",
        )


def _format_options(attribute: Attribute, data: AttributeUpdate) -> dict[str, Any]:
    options = dict(attribute.format_options)

    if attribute.format in _RANGE_FORMATS:
        if attribute.type == AttributeType.INTEGER:
            lower, upper = INT_MIN, INT_MAX
        else:
            lower, upper = FLOAT_MIN, FLOAT_MAX
        minimum = _first_set(data.min, options.get("min"), lower)
        maximum = _first_set(data.max, options.get("max"), upper)
        if minimum > maximum:
            raise InvalidValue(
                "Minimum value must be lesser than maximum value",
                code="attribute_value_invalid",
            )
        validator = RangeValidator(minimum, maximum, attribute.type)
        if data.default is not None and not validator.is_valid(data.default):
            raise InvalidValue(validator.description, code="attribute_value_invalid")
        options.update(min=minimum, max=maximum)

    elif attribute.format == AttributeFormat.ENUM:
        elements = data.elements if data.elements is not None else options.get("elements")
        validate_enum_elements(elements, data.default)
        options["elements"] = list(elements)

    elif attribute.type == AttributeType.STRING and data.default is not None:
        validator = TextValidator(attribute.size)
        if not validator.is_valid(data.default):
            raise InvalidValue(validator.description, code="attribute_value_invalid")

    return options


def _first_set(*values: Any) -> Any:
    return next(value for value in values if value is not None)


async def _update_mirror(
    store: DocumentStore, related: Collection, mirror: Attribute, attribute: Attribute
) -> None:
    """Point the mirror back at ``attribute`` once the primary record is settled."""
    mirror.options = replace(
        mirror.options, on_delete=attribute.options.on_delete, two_way_key=attribute.key
    )
    await store.attributes.update(mirror)
    await purge_collection(store, related.id)


async def _rename(
    store: DocumentStore,
    database: Database,
    collection: Collection,
    original: Attribute,
    attribute: Attribute,
    new_key: str,
) -> Attribute:
    renamed = replace(attribute, id=element_id(database, collection, new_key), key=new_key)
    await store.attributes.delete(original.id)
    try:
        return await store.attributes.create(renamed)
    except StoreException as exc:
        await store.attributes.create(original)
        logger.warning(
            "attribute_rename_reverted",
            extra={"attribute_id": original.id, "new_key": new_key},
        )
        with store_errors("Attribute"):
            raise exc
