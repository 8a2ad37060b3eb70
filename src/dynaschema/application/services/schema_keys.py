"""Identifiers of schema elements and documents."""

from uuid import uuid4

from dynaschema.domain.entities import UNIQUE_ID, Collection, Database


def element_id(database: Database, collection: Collection, key: str) -> str:
    """Deterministic id of an attribute or index.

    The same key on the same collection always maps to the same id, so a
    repeated create collides with the store's uniqueness check.
    """
    return f"{database.internal_id}_{collection.internal_id}_{key}"


def unique_id() -> str:
    return uuid4().hex


def resolve_id(requested: str | None) -> str:
    """Replace the ``unique()`` placeholder (or a missing id) with a fresh id."""
    if not requested or requested == UNIQUE_ID:
        return unique_id()
    return requested
