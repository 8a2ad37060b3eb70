"""Collection repository port."""

from typing import Protocol

from dynaschema.domain.entities import Collection, Database
from dynaschema.domain.value_objects import Query


class CollectionRepository(Protocol):
    """Port for collection metadata persistence.

    Collections are returned with their attributes and indexes attached.
    """

    async def get_by_id(self, database: Database, collection_id: str) -> Collection | None: ...

    async def find(self, database: Database, queries: list[Query]) -> list[Collection]: ...

    async def count(self, database: Database, filters: list[Query], max_count: int) -> int: ...

    async def create(self, collection: Collection) -> Collection: ...

    async def update(self, collection: Collection) -> Collection: ...

    async def delete(self, collection: Collection) -> bool: ...
