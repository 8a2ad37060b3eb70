"""Get collection use case."""

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lookup import get_collection
from dynaschema.domain.entities import Collection


class GetCollectionUseCase:
    def __init__(self, store_factory: DocumentStoreFactory) -> None:
        self._store_factory = store_factory

    async def execute(self, database_id: str, collection_id: str) -> Collection:
        async with self._store_factory() as store:
            _, collection = await get_collection(store, database_id, collection_id)
        return collection
