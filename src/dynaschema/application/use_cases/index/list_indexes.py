"""List indexes use case."""

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lookup import get_collection, list_with_total
from dynaschema.application.services.schema_keys import element_id
from dynaschema.domain.entities import Index
from dynaschema.domain.value_objects import Query


class ListIndexesUseCase:
    """List indexes of a collection. The cursor value is an index key."""

    def __init__(self, store_factory: DocumentStoreFactory, limit_count: int = 5000) -> None:
        self._store_factory = store_factory
        self._limit_count = limit_count

    async def execute(
        self, database_id: str, collection_id: str, queries: list[Query] | None = None
    ) -> tuple[list[Index], int]:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)

            async def load_cursor(key: str) -> Index | None:
                return await store.indexes.get_by_id(element_id(database, collection, key))

            async def find(resolved: list[Query]) -> list[Index]:
                return await store.indexes.find(collection, resolved)

            async def count(filters: list[Query], max_count: int) -> int:
                return await store.indexes.count(collection, filters, max_count)

            return await list_with_total(
                list(queries or []),
                load_cursor=load_cursor,
                find=find,
                count=count,
                limit_count=self._limit_count,
            )
