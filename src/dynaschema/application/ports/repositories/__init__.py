"""Repository ports."""

from dynaschema.application.ports.repositories.attribute_repository import AttributeRepository
from dynaschema.application.ports.repositories.collection_repository import (
    CollectionRepository,
)
from dynaschema.application.ports.repositories.database_repository import DatabaseRepository
from dynaschema.application.ports.repositories.document_repository import DocumentRepository
from dynaschema.application.ports.repositories.index_repository import IndexRepository

__all__ = [
    "AttributeRepository",
    "CollectionRepository",
    "DatabaseRepository",
    "DocumentRepository",
    "IndexRepository",
]
