"""Delete index use case."""

import logging

from dynaschema.application.ports import DocumentStoreFactory, SchemaQueue
from dynaschema.application.services.lifecycle import transition
from dynaschema.application.services.lookup import get_collection, get_index, purge_collection
from dynaschema.application.services.schema_keys import element_id
from dynaschema.domain.entities import Index
from dynaschema.domain.value_objects import Status

logger = logging.getLogger(__name__)


class DeleteIndexUseCase:
    """Mark an index for removal; the worker drops it physically."""

    def __init__(self, store_factory: DocumentStoreFactory, schema_queue: SchemaQueue) -> None:
        self._store_factory = store_factory
        self._schema_queue = schema_queue

    async def execute(self, database_id: str, collection_id: str, key: str) -> Index:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)
            index = await get_index(store, element_id(database, collection, key), key)

            if index.status == Status.AVAILABLE:
                transition(index, Status.DELETING)
                index = await store.indexes.update(index)

            await purge_collection(store, collection.id)
            await self._schema_queue.notify_delete_index(database, collection, index)

        logger.info(
            "index_delete_requested",
            extra={"index_id": index.id, "status": str(index.status)},
        )
        return index
