"""Confirm index use case - worker report on a physical index change."""

import logging

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lifecycle import confirm
from dynaschema.application.services.lookup import get_collection, get_index, purge_collection
from dynaschema.application.services.schema_keys import element_id
from dynaschema.domain.entities import Index
from dynaschema.domain.value_objects import WorkerOutcome

logger = logging.getLogger(__name__)


class ConfirmIndexUseCase:
    """Advance an index's status from the worker's outcome; None once removed."""

    def __init__(self, store_factory: DocumentStoreFactory) -> None:
        self._store_factory = store_factory

    async def execute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        outcome: WorkerOutcome,
        error: str | None = None,
    ) -> Index | None:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)
            index = await get_index(store, element_id(database, collection, key), key)

            if confirm(index, outcome, error):
                await store.indexes.delete(index.id)
                result = None
            else:
                result = await store.indexes.update(index)

            await purge_collection(store, collection.id)

        logger.info("index_confirmed", extra={"index_id": index.id, "outcome": str(outcome)})
        return result
