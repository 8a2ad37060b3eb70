"""List collections use case."""

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lookup import get_database, list_with_total
from dynaschema.domain.entities import Collection
from dynaschema.domain.value_objects import Query

SEARCH_ATTRIBUTE = "search"


class ListCollectionsUseCase:
    """List collections of a database, optionally narrowed by a full-text search term."""

    def __init__(self, store_factory: DocumentStoreFactory, limit_count: int = 5000) -> None:
        self._store_factory = store_factory
        self._limit_count = limit_count

    async def execute(
        self,
        database_id: str,
        queries: list[Query] | None = None,
        search: str | None = None,
    ) -> tuple[list[Collection], int]:
        queries = list(queries or [])
        if search:
            queries.append(Query.search(SEARCH_ATTRIBUTE, search))

        async with self._store_factory() as store:
            database = await get_database(store, database_id)

            async def load_cursor(collection_id: str) -> Collection | None:
                return await store.collections.get_by_id(database, collection_id)

            async def find(resolved: list[Query]) -> list[Collection]:
                return await store.collections.find(database, resolved)

            async def count(filters: list[Query], max_count: int) -> int:
                return await store.collections.count(database, filters, max_count)

            return await list_with_total(
                queries,
                load_cursor=load_cursor,
                find=find,
                count=count,
                limit_count=self._limit_count,
            )
