"""Document repository port."""

from typing import Protocol

from dynaschema.domain.entities import Collection, Document
from dynaschema.domain.value_objects import Query


class DocumentRepository(Protocol):
    """Port for documents stored in a runtime-defined collection.

    ``create`` and ``update`` persist nested related documents as part of
    the same call.
    """

    async def get_by_id(self, collection: Collection, document_id: str) -> Document | None: ...

    async def find(self, collection: Collection, queries: list[Query]) -> list[Document]: ...

    async def count(self, collection: Collection, filters: list[Query], max_count: int) -> int: ...

    async def create(self, collection: Collection, document: Document) -> Document: ...

    async def update(self, collection: Collection, document: Document) -> Document: ...

    async def delete(self, collection: Collection, document_id: str) -> bool: ...
