"""Get index use case."""

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lookup import get_collection, get_index
from dynaschema.application.services.schema_keys import element_id
from dynaschema.domain.entities import Index


class GetIndexUseCase:
    def __init__(self, store_factory: DocumentStoreFactory) -> None:
        self._store_factory = store_factory

    async def execute(self, database_id: str, collection_id: str, key: str) -> Index:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)
            return await get_index(store, element_id(database, collection, key), key)
