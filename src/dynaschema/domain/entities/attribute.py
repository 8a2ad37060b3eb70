"""Attribute entity - one schema element of a collection."""

from dataclasses import dataclass, field, replace
from typing import Any

from dynaschema.domain.value_objects import (
    AttributeFormat,
    AttributeType,
    OnDelete,
    RelationSide,
    RelationType,
    Status,
)


@dataclass
class RelationshipOptions:
    """Options carried by attributes of type ``relationship``."""

    related_collection: str
    relation_type: RelationType
    two_way: bool = False
    two_way_key: str | None = None
    on_delete: OnDelete = OnDelete.RESTRICT
    side: RelationSide = RelationSide.PARENT

    def mirrored(self, collection_id: str, key: str) -> "RelationshipOptions":
        """Options for the mirror attribute living on the related collection."""
        return replace(
            self,
            related_collection=collection_id,
            two_way_key=key,
            side=RelationSide.CHILD,
        )


@dataclass
class Attribute:
    """Attribute - typed field definition with lifecycle status."""

    id: str
    key: str
    type: AttributeType
    collection_id: str = ""
    collection_internal_id: str = ""
    database_internal_id: str = ""
    status: Status = Status.PROCESSING
    size: int = 0
    required: bool = False
    array: bool = False
    default: Any = None
    format: AttributeFormat | None = None
    format_options: dict[str, Any] = field(default_factory=dict)
    filters: list[str] = field(default_factory=list)
    options: RelationshipOptions | None = None
    error: str | None = None

    @property
    def is_relationship(self) -> bool:
        return self.type == AttributeType.RELATIONSHIP

    @property
    def is_two_way(self) -> bool:
        return self.options is not None and self.options.two_way
