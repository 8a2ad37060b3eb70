"""Database repository port."""

from typing import Protocol

from dynaschema.domain.entities import Database


class DatabaseRepository(Protocol):
    """Port for database metadata lookup."""

    async def get_by_id(self, database_id: str) -> Database | None: ...
