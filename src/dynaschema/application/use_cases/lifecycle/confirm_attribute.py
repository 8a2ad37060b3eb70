"""Confirm attribute use case - worker report on a physical attribute change."""

import logging

from dynaschema.application.ports import DocumentStoreFactory
from dynaschema.application.services.lifecycle import confirm
from dynaschema.application.services.lookup import (
    get_attribute,
    get_collection,
    purge_collection,
)
from dynaschema.application.services.schema_keys import element_id
from dynaschema.domain.entities import Attribute
from dynaschema.domain.value_objects import WorkerOutcome

logger = logging.getLogger(__name__)


class ConfirmAttributeUseCase:
    """Advance an attribute's status from the worker's outcome.

    Returns the updated attribute, or None when the outcome removed it.
    """

    def __init__(self, store_factory: DocumentStoreFactory) -> None:
        self._store_factory = store_factory

    async def execute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        outcome: WorkerOutcome,
        error: str | None = None,
    ) -> Attribute | None:
        async with self._store_factory() as store:
            database, collection = await get_collection(store, database_id, collection_id)
            attribute = await get_attribute(store, element_id(database, collection, key), key)

            if confirm(attribute, outcome, error):
                await store.attributes.delete(attribute.id)
                result = None
            else:
                result = await store.attributes.update(attribute)

            await purge_collection(store, collection.id)

        logger.info(
            "attribute_confirmed",
            extra={"attribute_id": attribute.id, "outcome": str(outcome)},
        )
        return result
