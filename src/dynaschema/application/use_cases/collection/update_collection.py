"""Update collection use case."""

import logging

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lookup import get_collection, purge_collection
from dynaschema.application.services.permission_input import parse_permissions
from dynaschema.application.services.store_errors import store_errors
from dynaschema.domain.entities import Collection
from dynaschema.domain.value_objects import CONCRETE_ACTIONS

logger = logging.getLogger(__name__)


class UpdateCollectionUseCase:
    """Update collection settings. Omitted permissions are kept as they are."""

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
        aggregated = parse_permissions(permissions, CONCRETE_ACTIONS, self._max_roles)

        async with self._store_factory() as store:
            _, collection = await get_collection(store, database_id, collection_id)
            collection.name = name
            collection.document_security = document_security
            collection.enabled = enabled
            if aggregated is not None:
                collection.permissions = aggregated

            with store_errors("Collection"):
                collection = await store.collections.update(collection)
            await purge_collection(store, collection.id)

        logger.info("collection_updated", extra={"collection_id": collection.id})
        return collection
