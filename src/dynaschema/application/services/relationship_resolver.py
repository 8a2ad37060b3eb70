"""Traversal of documents along their relationship attributes.

Both walks use an explicit work stack, carry the depth of each entry and
remember visited ``(collection, document)`` pairs, so self-referential
schemas terminate.
"""

import logging
from dataclasses import dataclass
from typing import Any

from dynaschema.application.ports import DocumentStore
from dynaschema.application.services.document_access import authorize
from dynaschema.application.services.schema_keys import resolve_id
from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import UNIQUE_ID, Attribute, Collection, Database, Document
from dynaschema.domain.exceptions import InvalidValue, NotFound
from dynaschema.domain.value_objects import PermissionAction

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    collection: Collection
    document: Document
    depth: int


def nested_documents(value: Any) -> list[Document]:
    """Related documents held by a relationship value; bare ids are skipped."""
    if value is None:
        return []
    values = value if isinstance(value, list) else [value]
    return [item for item in values if isinstance(item, Document)]


class RelationshipResolver:
    """Walks relationship-bearing documents of one database.

    Related collection definitions are schema, not data: they are loaded
    without consulting the request's authorization and cached for the
    lifetime of the resolver.
    """

    def __init__(self, store: DocumentStore, database: Database, max_depth: int) -> None:
        self._store = store
        self._database = database
        self._max_depth = max_depth
        self._collections: dict[str, Collection | None] = {}

    async def process(self, collection: Collection, document: Document) -> Document:
        """Stamp database and collection ids on ``document`` and its related documents.

        Nothing but the two ids is changed. Related documents nested deeper
        than ``max_depth`` are left as they are.
        """
        stack = [_Entry(collection, document, 0)]
        visited: set[tuple[str, str]] = set()
        while stack:
            entry = stack.pop()
            marker = (entry.collection.id, entry.document.id)
            if marker in visited:
                logger.debug(
                    "resolver_cycle_skipped",
                    extra={"collection_id": marker[0], "document_id": marker[1]},
                )
                continue
            visited.add(marker)

            entry.document.database_id = self._database.id
            entry.document.collection_id = entry.collection.id

            for attribute in entry.collection.relationship_attributes():
                children = nested_documents(entry.document.get(attribute.key))
                if not children:
                    continue
                if entry.depth >= self._max_depth:
                    logger.debug(
                        "resolver_depth_truncated",
                        extra={"collection_id": entry.collection.id, "attribute": attribute.key},
                    )
                    continue
                related = await self._related_collection(attribute)
                if related is None:
                    continue
                stack.extend(_Entry(related, child, entry.depth + 1) for child in children)
        return document

    async def prepare(
        self, auth: Authorization, collection: Collection, document: Document
    ) -> None:
        """Check and complete the related documents written along with ``document``.

        New related documents get a fresh id and require ``create`` on their
        collection. Existing ones that carry field changes require
        ``update``. Nesting deeper than ``max_depth`` is rejected.
        """
        stack = [_Entry(collection, document, 0)]
        visited: set[tuple[str, str]] = {(collection.id, document.id)}
        while stack:
            entry = stack.pop()
            for attribute in entry.collection.relationship_attributes():
                children = nested_documents(entry.document.get(attribute.key))
                if not children:
                    continue
                if entry.depth >= self._max_depth:
                    raise InvalidValue(
                        f"Related documents may be nested at most {self._max_depth} levels deep",
                        code="relationship_depth_exceeded",
                    )
                related = await self._related_collection(attribute)
                if related is None:
                    raise NotFound("Collection", attribute.options.related_collection)

                for child in children:
                    if (related.id, child.id) in visited:
                        continue
                    await self._authorize_nested(auth, related, child)
                    visited.add((related.id, child.id))
                    stack.append(_Entry(related, child, entry.depth + 1))

    async def _authorize_nested(
        self, auth: Authorization, related: Collection, child: Document
    ) -> None:
        existing = None
        if child.id and child.id != UNIQUE_ID:
            existing = await self._store.documents.get_by_id(related, child.id)

        if existing is None:
            child.id = resolve_id(child.id)
            authorize(auth, PermissionAction.CREATE, related)
        elif _changes(child, existing):
            authorize(auth, PermissionAction.UPDATE, related, existing)

    async def _related_collection(self, attribute: Attribute) -> Collection | None:
        related_id = attribute.options.related_collection
        if related_id not in self._collections:
            self._collections[related_id] = await self._store.collections.get_by_id(
                self._database, related_id
            )
        return self._collections[related_id]


def _comparable(value: Any) -> Any:
    if isinstance(value, Document):
        return value.id
    if isinstance(value, list):
        return [_comparable(item) for item in value]
    return value


def _changes(child: Document, existing: Document) -> bool:
    """Whether ``child`` carries a value that differs from the stored document.

    Related documents are compared by id only.
    """
    return any(
        _comparable(value) != _comparable(existing.get(key))
        for key, value in child.fields.items()
    )
