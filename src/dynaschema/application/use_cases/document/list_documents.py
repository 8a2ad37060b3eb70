"""List documents use case."""

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.document_access import authorize, can_access
from dynaschema.application.services.lookup import list_with_total
from dynaschema.application.services.relationship_resolver import RelationshipResolver
from dynaschema.application.use_cases.document._shared import load_collection
from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import Document
from dynaschema.domain.value_objects import PermissionAction, Query


class ListDocumentsUseCase:
    """List documents of a collection. The cursor value is a document id.

    Under document security, documents the caller may not read are left out
    of the page; the total is counted by the store over the filters alone.
    """

    def __init__(
        self, store_factory: DocumentStoreFactory, max_depth: int = 3, limit_count: int = 5000
    ) -> None:
        self._store_factory = store_factory
        self._max_depth = max_depth
        self._limit_count = limit_count

    async def execute(
        self,
        auth: Authorization,
        database_id: str,
        collection_id: str,
        queries: list[Query] | None = None,
    ) -> tuple[list[Document], int]:
        async with self._store_factory() as store:
            database, collection = await load_collection(store, auth, database_id, collection_id)
            authorize(auth, PermissionAction.READ, collection)

            async def load_cursor(document_id: str) -> Document | None:
                return await store.documents.get_by_id(collection, document_id)

            async def find(resolved: list[Query]) -> list[Document]:
                return await store.documents.find(collection, resolved)

            async def count(filters: list[Query], max_count: int) -> int:
                return await store.documents.count(collection, filters, max_count)

            documents, total = await list_with_total(
                list(queries or []),
                load_cursor=load_cursor,
                find=find,
                count=count,
                limit_count=self._limit_count,
            )

            resolver = RelationshipResolver(store, database, self._max_depth)
            visible = [
                await resolver.process(collection, document)
                for document in documents
                if can_access(auth, PermissionAction.READ, collection, document)
            ]
        return visible, total
