"""Collection lookup shared by document use cases."""

from dynaschema.application.ports import DocumentStore
from dynaschema.application.services.document_access import ensure_enabled
from dynaschema.application.services.lookup import get_collection
from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import Collection, Database


async def load_collection(
    store: DocumentStore, auth: Authorization, database_id: str, collection_id: str
) -> tuple[Database, Collection]:
    """Load a collection definition; its lookup does not consult the caller's roles.

    Disabled collections are reported as missing to unprivileged callers.
    """
    database, collection = await get_collection(store, database_id, collection_id)
    ensure_enabled(auth, collection)
    return database, collection
