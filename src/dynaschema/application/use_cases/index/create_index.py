"""Create index use case."""

import logging

from dynaschema.application.ports import DocumentStoreFactory, SchemaQueue
from dynaschema.application.services.lookup import get_collection, purge_collection
from dynaschema.application.services.schema_keys import element_id
from dynaschema.application.services.store_errors import store_errors
from dynaschema.domain.entities import Attribute, Collection, Index
from dynaschema.domain.exceptions import InvalidValue, LimitExceeded
from dynaschema.domain.validators import IndexValidator
from dynaschema.domain.validators.index import DEFAULT_ARRAY_INDEX_LENGTH
from dynaschema.domain.value_objects import AttributeType, IndexOrder, IndexType, Status

logger = logging.getLogger(__name__)

ID_SIZE = 36

SYSTEM_ATTRIBUTES = (
    Attribute(
        id="$id", key="$id", type=AttributeType.STRING, size=ID_SIZE, status=Status.AVAILABLE
    ),
    Attribute(
        id="$createdAt", key="$createdAt", type=AttributeType.DATETIME, status=Status.AVAILABLE
    ),
    Attribute(
        id="$updatedAt", key="$updatedAt", type=AttributeType.DATETIME, status=Status.AVAILABLE
    ),
)


class CreateIndexUseCase:
    """Persist a new index as an intent and hand the physical change to the worker."""

    def __init__(
        self,
        store_factory: DocumentStoreFactory,
        schema_queue: SchemaQueue,
        array_index_length: int = DEFAULT_ARRAY_INDEX_LENGTH,
    ) -> None:
        self._store_factory = store_factory
        self._schema_queue = schema_queue
        self._array_index_length = array_index_length

    async def execute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        type: IndexType,
        attributes: list[str],
        orders: list[IndexOrder | None] | None = None,
    ) -> Index:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)

            limit = store.adapter.limit_for_indexes()
            if len(collection.indexes) >= limit:
                raise LimitExceeded(
                    f"Index limit of {limit} exceeded", code="index_limit_exceeded"
                )

            known = indexable_attributes(collection)
            lengths, resolved_orders = self._lengths_and_orders(known, attributes, orders or [])

            index = Index(
                id=element_id(database, collection, key),
                key=key,
                type=type,
                attributes=list(attributes),
                lengths=lengths,
                orders=resolved_orders,
                collection_id=collection.id,
                collection_internal_id=collection.internal_id,
                database_internal_id=database.internal_id,
                status=Status.PROCESSING,
            )

            validator = IndexValidator(
                known, store.adapter.max_index_length(), self._array_index_length
            )
            if not validator.is_valid(index):
                raise InvalidValue(validator.description, code="index_invalid")

            with store_errors("Index"):
                index = await store.indexes.create(index)

            await purge_collection(store, collection.id)
            await self._schema_queue.notify_create_index(database, collection, index)

        logger.info("index_created", extra={"index_id": index.id, "collection_id": collection.id})
        return index

    def _lengths_and_orders(
        self,
        known: list[Attribute],
        keys: list[str],
        orders: list[IndexOrder | None],
    ) -> tuple[list[int | None], list[IndexOrder | None]]:
        by_key = {a.key: a for a in known}
        lengths: list[int | None] = []
        resolved: list[IndexOrder | None] = []
        for position, key in enumerate(keys):
            attribute = by_key.get(key)
            if attribute is None:
                raise InvalidValue(f"Unknown attribute: {key}", code="attribute_unknown")
            _check_indexable(attribute)

            order = orders[position] if position < len(orders) else None
            if attribute.array:
                lengths.append(self._array_index_length)
                order = None
            elif attribute.type == AttributeType.STRING:
                lengths.append(attribute.size)
            else:
                lengths.append(None)
            resolved.append(order)
        return lengths, resolved


def _check_indexable(attribute: Attribute) -> None:
    if attribute.is_relationship:
        raise InvalidValue(
            f'Cannot create an index for the relationship attribute "{attribute.key}"',
            code="attribute_type_invalid",
        )
    if attribute.status != Status.AVAILABLE:
        raise InvalidValue(
            f'Attribute "{attribute.key}" is not available', code="attribute_not_available"
        )


def indexable_attributes(collection: Collection) -> list[Attribute]:
    """Attributes an index of ``collection`` may reference."""
    return [*collection.attributes, *SYSTEM_ATTRIBUTES]
