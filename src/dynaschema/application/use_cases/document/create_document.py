"""Create document use case."""

import logging
from typing import Any

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.document_access import authorize
from dynaschema.application.services.permission_input import ensure_grantable, parse_permissions
from dynaschema.application.services.relationship_resolver import RelationshipResolver
from dynaschema.application.services.schema_keys import resolve_id
from dynaschema.application.services.store_errors import store_errors
from dynaschema.application.use_cases.document._shared import load_collection
from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import Document
from dynaschema.domain.value_objects import (
    DOCUMENT_ACTIONS,
    Permission,
    PermissionAction,
    Role,
    RoleKind,
)

logger = logging.getLogger(__name__)


class CreateDocumentUseCase:
    """Create a document together with any nested related documents."""

    def __init__(
        self, store_factory: DocumentStoreFactory, max_depth: int = 3, max_roles: int = 100
    ) -> None:
        self._store_factory = store_factory
        self._max_depth = max_depth
        self._max_roles = max_roles

    async def execute(
        self,
        auth: Authorization,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
        permissions: list[str] | None = None,
    ) -> Document:
        aggregated = parse_permissions(permissions, DOCUMENT_ACTIONS, self._max_roles)
        if aggregated is None:
            aggregated = _creator_permissions(auth)
        ensure_grantable(auth, aggregated)

        async with self._store_factory() as store:
            database, collection = await load_collection(store, auth, database_id, collection_id)
            authorize(auth, PermissionAction.CREATE, collection)

            document = Document(
                id=resolve_id(document_id), fields=dict(data), permissions=aggregated
            )
            resolver = RelationshipResolver(store, database, self._max_depth)
            await resolver.prepare(auth, collection, document)

            with store_errors("Document"):
                document = await store.documents.create(collection, document)
            await resolver.process(collection, document)

        logger.info(
            "document_created",
            extra={"document_id": document.id, "collection_id": collection.id},
        )
        return document


def _creator_permissions(auth: Authorization) -> list[str]:
    """Default grants: every user role of the caller may read, update and delete."""
    granted: list[str] = []
    for value in auth.get_roles():
        kind, _, identifier = value.partition(":")
        if kind == RoleKind.USER and identifier and ":" not in identifier:
            role = Role.user(identifier)
            granted.extend(Permission.for_action(action, role) for action in DOCUMENT_ACTIONS)
    return granted
