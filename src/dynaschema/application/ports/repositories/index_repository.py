"""Index repository port."""

from typing import Protocol

from dynaschema.domain.entities import Collection, Index
from dynaschema.domain.value_objects import Query


class IndexRepository(Protocol):
    """Port for index metadata persistence."""

    async def get_by_id(self, index_id: str) -> Index | None: ...

    async def find(self, collection: Collection, queries: list[Query]) -> list[Index]: ...

    async def count(self, collection: Collection, filters: list[Query], max_count: int) -> int: ...

    async def create(self, index: Index) -> Index: ...

    async def update(self, index: Index) -> Index: ...

    async def delete(self, index_id: str) -> bool: ...
