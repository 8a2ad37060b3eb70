"""Document entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from dynaschema.domain.value_objects import PermissionAction, roles_for_action

UNIQUE_ID = "unique()"


@dataclass
class Document:
    """Document - field values plus document-level permissions.

    Relationship fields hold a nested Document, a list of Documents, a bare
    related document id, or None.
    """

    id: str
    fields: dict[str, Any] = field(default_factory=dict)
    permissions: list[str] = field(default_factory=list)
    collection_id: str | None = None
    database_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def set(self, key: str, value: Any) -> "Document":
        self.fields[key] = value
        return self

    def roles_for(self, action: PermissionAction) -> list[str]:
        """Roles granted ``action`` at document level."""
        return roles_for_action(self.permissions, action)
