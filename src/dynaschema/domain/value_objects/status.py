"""Lifecycle status of schema elements (attributes and indexes)."""

from enum import StrEnum


class Status(StrEnum):
    """Lifecycle stage of an attribute or index."""

    PROCESSING = "processing"
    AVAILABLE = "available"
    FAILED = "failed"
    DELETING = "deleting"

    def can_transition_to(self, target: "Status") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[Status, frozenset[Status]] = {
    Status.PROCESSING: frozenset({Status.AVAILABLE, Status.FAILED}),
    Status.AVAILABLE: frozenset({Status.DELETING}),
    Status.FAILED: frozenset(),
    Status.DELETING: frozenset(),
}


class WorkerOutcome(StrEnum):
    """Result reported by the worker that applies physical schema changes."""

    APPLIED = "applied"
    FAILED = "failed"
    REMOVED = "removed"
