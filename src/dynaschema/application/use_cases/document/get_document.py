"""Get document use case."""

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.document_access import authorize
from dynaschema.application.services.relationship_resolver import RelationshipResolver
from dynaschema.application.use_cases.document._shared import load_collection
from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import Document
from dynaschema.domain.exceptions import NotFound
from dynaschema.domain.value_objects import PermissionAction


class GetDocumentUseCase:
    """Get one document, annotated with its database and collection ids."""

    def __init__(self, store_factory: DocumentStoreFactory, max_depth: int = 3) -> None:
        self._store_factory = store_factory
        self._max_depth = max_depth

    async def execute(
        self, auth: Authorization, database_id: str, collection_id: str, document_id: str
    ) -> Document:
        async with self._store_factory() as store:
            database, collection = await load_collection(store, auth, database_id, collection_id)
            authorize(auth, PermissionAction.READ, collection)

            document = await store.documents.get_by_id(collection, document_id)
            if not document:
                raise NotFound("Document", document_id)
            authorize(auth, PermissionAction.READ, collection, document)

            resolver = RelationshipResolver(store, database, self._max_depth)
            return await resolver.process(collection, document)
