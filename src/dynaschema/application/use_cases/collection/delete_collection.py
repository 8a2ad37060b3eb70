"""Delete collection use case."""

import logging

from dynaschema.application.ports import DocumentStoreFactory, SchemaQueue
from dynaschema.application.services.lookup import get_collection, purge_collection
from dynaschema.application.services.store_errors import store_errors
from dynaschema.domain.exceptions import DynaSchemaError

logger = logging.getLogger(__name__)


class DeleteCollectionUseCase:
    """Remove collection metadata and enqueue removal of its storage."""

    def __init__(self, store_factory: DocumentStoreFactory, schema_queue: SchemaQueue) -> None:
        self._store_factory = store_factory
        self._schema_queue = schema_queue

    async def execute(self, database_id: str, collection_id: str) -> None:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)

            with store_errors("Collection"):
                deleted = await store.collections.delete(collection)
            if not deleted:
                raise DynaSchemaError(
                    "Failed to remove collection from DB", code="general_server_error"
                )

            await self._schema_queue.notify_delete_collection(database, collection)
            await purge_collection(store, collection.id)

        logger.info("collection_deleted", extra={"collection_id": collection_id})
