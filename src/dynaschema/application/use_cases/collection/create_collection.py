"""Create collection use case."""

import logging

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lookup import get_database
from dynaschema.application.services.permission_input import parse_permissions
from dynaschema.application.services.schema_keys import resolve_id
from dynaschema.application.services.store_errors import store_errors
from dynaschema.domain.entities import Collection
from dynaschema.domain.value_objects import CONCRETE_ACTIONS

logger = logging.getLogger(__name__)


class CreateCollectionUseCase:
    """Create an empty collection. ``unique()`` as id generates one."""

    def __init__(self, store_factory: DocumentStoreFactory, max_roles: int = 100) -> None:
        self._store_factory = store_factory
        self._max_roles = max_roles

    async def execute(
        self,
        database_id: str,
        collection_id: str,
        name: str,
        permissions: list[str] | None = None,
        document_security: bool = False,
        enabled: bool = True,
    ) -> Collection:
        aggregated = parse_permissions(permissions, CONCRETE_ACTIONS, self._max_roles) or []

        async with self._store_factory() as store:
            database = await get_database(store, database_id)
            collection = Collection(
                id=resolve_id(collection_id),
                internal_id="",
                database_id=database.id,
                name=name,
                enabled=enabled,
                document_security=document_security,
                permissions=aggregated,
            )
            with store_errors("Collection"):
                collection = await store.collections.create(collection)

        logger.info(
            "collection_created",
            extra={"collection_id": collection.id, "database_id": database.id},
        )
        return collection
