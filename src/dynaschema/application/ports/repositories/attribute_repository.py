"""Attribute repository port."""

from typing import Protocol

from dynaschema.domain.entities import Attribute, Collection
from dynaschema.domain.value_objects import Query


class AttributeRepository(Protocol):
    """Port for attribute metadata persistence.

    ``create`` raises DuplicateException when the id is taken.
    """

    async def get_by_id(self, attribute_id: str) -> Attribute | None: ...

    async def find(self, collection: Collection, queries: list[Query]) -> list[Attribute]: ...

    async def count(self, collection: Collection, filters: list[Query], max_count: int) -> int: ...

    async def create(self, attribute: Attribute) -> Attribute: ...

    async def update(self, attribute: Attribute) -> Attribute: ...

    async def delete(self, attribute_id: str) -> bool: ...
