"""Application ports - interfaces for external adapters."""

from dynaschema.application.ports.document_store import (
    META_COLLECTIONS,
    DocumentStore,
    DocumentStoreFactory,
    DuplicateException,
    LimitException,
    StoreAdapter,
    StoreAuthorizationException,
    StoreException,
    StructureException,
    TruncateException,
)
from dynaschema.application.ports.schema_queue import SchemaQueue

__all__ = [
    "DocumentStore",
    "DocumentStoreFactory",
    "DuplicateException",
    "LimitException",
    "META_COLLECTIONS",
    "SchemaQueue",
    "StoreAdapter",
    "StoreAuthorizationException",
    "StoreException",
    "StructureException",
    "TruncateException",
]
