"""Index entity."""

from dataclasses import dataclass, field

from dynaschema.domain.value_objects import IndexOrder, IndexType, Status


@dataclass
class Index:
    """Index - ordered attribute list with per-attribute key lengths."""

    id: str
    key: str
    type: IndexType
    attributes: list[str]
    lengths: list[int | None] = field(default_factory=list)
    orders: list[IndexOrder | None] = field(default_factory=list)
    collection_id: str = ""
    collection_internal_id: str = ""
    database_internal_id: str = ""
    status: Status = Status.PROCESSING
    error: str | None = None
