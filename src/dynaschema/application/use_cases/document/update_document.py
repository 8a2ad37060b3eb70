"""Update document use case."""

import logging
from typing import Any

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.document_access import authorize
from dynaschema.application.services.permission_input import ensure_grantable, parse_permissions
from dynaschema.application.services.relationship_resolver import RelationshipResolver
from dynaschema.application.services.store_errors import store_errors
from dynaschema.application.use_cases.document._shared import load_collection
from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import Document
from dynaschema.domain.exceptions import InvalidValue, NotFound
from dynaschema.domain.value_objects import DOCUMENT_ACTIONS, PermissionAction

logger = logging.getLogger(__name__)


class UpdateDocumentUseCase:
    """Merge new field values and/or replace permissions of a document."""

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
        data: dict[str, Any] | None = None,
        permissions: list[str] | None = None,
    ) -> Document:
        if not data and permissions is None:
            raise InvalidValue(
                "The document data and permissions are missing. You must provide either "
                "document data or permissions to be updated.",
                code="document_missing_payload",
            )
        aggregated = parse_permissions(permissions, DOCUMENT_ACTIONS, self._max_roles)
        if aggregated is not None:
            ensure_grantable(auth, aggregated)

        async with self._store_factory() as store:
            database, collection = await load_collection(store, auth, database_id, collection_id)

            existing = await store.documents.get_by_id(collection, document_id)
            if not existing:
                raise NotFound("Document", document_id)
            authorize(auth, PermissionAction.UPDATE, collection, existing)

            document = Document(
                id=existing.id,
                fields={**existing.fields, **(data or {})},
                permissions=aggregated if aggregated is not None else list(existing.permissions),
                created_at=existing.created_at,
            )
            resolver = RelationshipResolver(store, database, self._max_depth)
            await resolver.prepare(auth, collection, document)

            with store_errors("Document"):
                document = await store.documents.update(collection, document)
            await store.purge_cached_document(collection.id, document.id)
            await resolver.process(collection, document)

        logger.info(
            "document_updated",
            extra={"document_id": document.id, "collection_id": collection.id},
        )
        return document
