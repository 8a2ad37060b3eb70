"""Domain entities."""

from dynaschema.domain.entities.attribute import Attribute, RelationshipOptions
from dynaschema.domain.entities.collection import Collection
from dynaschema.domain.entities.database import Database
from dynaschema.domain.entities.document import UNIQUE_ID, Document
from dynaschema.domain.entities.index import Index

__all__ = [
    "Attribute",
    "Collection",
    "Database",
    "Document",
    "Index",
    "RelationshipOptions",
    "UNIQUE_ID",
]
