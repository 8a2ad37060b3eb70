"""Document store port - metadata repositories, physical primitives and caches."""

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

from dynaschema.application.ports.repositories import (
    AttributeRepository,
    CollectionRepository,
    DatabaseRepository,
    DocumentRepository,
    IndexRepository,
)
from dynaschema.domain.entities import Attribute, Collection
from dynaschema.domain.value_objects import AttributeType, OnDelete

META_COLLECTIONS = "collections"


class StoreException(Exception):
    """Base exception raised by document store adapters."""


class DuplicateException(StoreException):
    """Record with the same id or unique key already exists."""


class LimitException(StoreException):
    """Store-side cap on schema elements or collections reached."""


class TruncateException(StoreException):
    """Physical resize would discard existing data."""


class StructureException(StoreException):
    """Document does not match its collection's structure."""


class StoreAuthorizationException(StoreException):
    """Store refused the operation for the current roles."""


class StoreAdapter(Protocol):
    """Physical schema primitives of the underlying storage engine."""

    def check_attribute(self, collection: Collection, attribute: Attribute) -> None:
        """Raise LimitException when ``attribute`` does not fit ``collection``."""
        ...

    async def update_attribute(
        self,
        collection: Collection,
        key: str,
        *,
        type: AttributeType,
        size: int | None = None,
        required: bool | None = None,
        default: Any = None,
        format_options: dict[str, Any] | None = None,
        new_key: str | None = None,
    ) -> None: ...

    async def update_relationship(
        self,
        collection: Collection,
        key: str,
        *,
        new_key: str | None = None,
        on_delete: OnDelete | None = None,
    ) -> None: ...

    def limit_for_indexes(self) -> int: ...

    def max_index_length(self) -> int: ...


class DocumentStore(Protocol):
    """Document store scope opened once per use case call.

    There is no transaction spanning several calls: every write is
    committed independently.
    """

    @property
    def databases(self) -> DatabaseRepository: ...

    @property
    def collections(self) -> CollectionRepository: ...

    @property
    def attributes(self) -> AttributeRepository: ...

    @property
    def indexes(self) -> IndexRepository: ...

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def adapter(self) -> StoreAdapter: ...

    async def purge_cached_document(self, collection_id: str, document_id: str) -> None: ...

    async def purge_cached_collection(self, collection_id: str) -> None: ...


class DocumentStoreFactory(Protocol):
    """Factory for opening DocumentStore scopes."""

    def __call__(self) -> AbstractAsyncContextManager[DocumentStore]: ...
