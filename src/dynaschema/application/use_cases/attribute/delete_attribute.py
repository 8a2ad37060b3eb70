"""Delete attribute use case."""

import logging

from dynaschema.application.ports import DocumentStore, DocumentStoreFactory, SchemaQueue
from dynaschema.application.services.lifecycle import transition
from dynaschema.application.services.lookup import (
    get_attribute,
    get_collection,
    purge_collection,
)
from dynaschema.application.services.schema_keys import element_id
from dynaschema.domain.entities import Attribute, Database
from dynaschema.domain.exceptions import NotFound
from dynaschema.domain.value_objects import Status

logger = logging.getLogger(__name__)


class DeleteAttributeUseCase:
    """Mark an attribute for removal.

    The record is never removed here: an available attribute moves to
    ``deleting`` and the worker drops it once the column is gone. The
    mirror of a two-way relationship follows the same transition.
    """

    def __init__(self, store_factory: DocumentStoreFactory, schema_queue: SchemaQueue) -> None:
        self._store_factory = store_factory
        self._schema_queue = schema_queue

    async def execute(self, database_id: str, collection_id: str, key: str) -> Attribute:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)
            attribute = await get_attribute(store, element_id(database, collection, key), key)

            if attribute.status == Status.AVAILABLE:
                transition(attribute, Status.DELETING)
                attribute = await store.attributes.update(attribute)

            if attribute.is_two_way:
                await _mark_mirror(store, database, attribute)

            await purge_collection(store, collection.id)
            await self._schema_queue.notify_delete_attribute(database, collection, attribute)

        logger.info(
            "attribute_delete_requested",
            extra={"attribute_id": attribute.id, "status": str(attribute.status)},
        )
        return attribute


async def _mark_mirror(store: DocumentStore, database: Database, attribute: Attribute) -> None:
    options = attribute.options
    related = await store.collections.get_by_id(database, options.related_collection)
    if not related:
        raise NotFound("Collection", options.related_collection)
    mirror = await get_attribute(
        store, element_id(database, related, options.two_way_key), options.two_way_key
    )
    if mirror.status == Status.AVAILABLE:
        transition(mirror, Status.DELETING)
        await store.attributes.update(mirror)
    await purge_collection(store, related.id)
