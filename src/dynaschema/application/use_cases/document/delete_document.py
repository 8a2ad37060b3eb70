"""Delete document use case."""

import logging

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.document_access import authorize
from dynaschema.application.services.relationship_resolver import RelationshipResolver
from dynaschema.application.services.store_errors import store_errors
from dynaschema.application.use_cases.document._shared import load_collection
from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import Document
from dynaschema.domain.exceptions import NotFound
from dynaschema.domain.value_objects import PermissionAction

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """Delete a document. Related documents follow the relationship's onDelete in the store."""

    def __init__(self, store_factory: DocumentStoreFactory, max_depth: int = 3) -> None:
        self._store_factory = store_factory
        self._max_depth = max_depth

    async def execute(
        self, auth: Authorization, database_id: str, collection_id: str, document_id: str
    ) -> Document:
        """Returns the removed document."""
        async with self._store_factory() as store:
            database, collection = await load_collection(store, auth, database_id, collection_id)

            document = await store.documents.get_by_id(collection, document_id)
            if not document:
                raise NotFound("Document", document_id)
            authorize(auth, PermissionAction.DELETE, collection, document)

            with store_errors("Document"):
                await store.documents.delete(collection, document.id)
            await store.purge_cached_document(collection.id, document.id)

            resolver = RelationshipResolver(store, database, self._max_depth)
            await resolver.process(collection, document)

        logger.info(
            "document_deleted",
            extra={"document_id": document.id, "collection_id": collection.id},
        )
        return document
