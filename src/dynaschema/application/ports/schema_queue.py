"""Schema queue port - fire-and-forget notifications to the schema worker."""

from typing import Protocol

from dynaschema.domain.entities import Attribute, Collection, Database, Index


class SchemaQueue(Protocol):
    """Port for enqueuing physical schema changes.

    The worker applies the change and later reports the outcome, which
    moves the element's status forward.
    """

    async def notify_create_attribute(
        self, database: Database, collection: Collection, attribute: Attribute
    ) -> None: ...

    async def notify_update_attribute(
        self, database: Database, collection: Collection, attribute: Attribute
    ) -> None: ...

    async def notify_delete_attribute(
        self, database: Database, collection: Collection, attribute: Attribute
    ) -> None: ...

    async def notify_create_index(
        self, database: Database, collection: Collection, index: Index
    ) -> None: ...

    async def notify_delete_index(
        self, database: Database, collection: Collection, index: Index
    ) -> None: ...

    async def notify_delete_collection(
        self, database: Database, collection: Collection
    ) -> None: ...
