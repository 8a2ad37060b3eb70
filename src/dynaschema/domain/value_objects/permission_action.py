"""Permission actions for document and collection access."""

from enum import StrEnum


class PermissionAction(StrEnum):
    """Actions a role can be granted on a collection or document."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    WRITE = "write"

    @property
    def expands_to(self) -> tuple["PermissionAction", ...]:
        """Concrete actions this action stands for."""
        if self is PermissionAction.WRITE:
            return (PermissionAction.CREATE, PermissionAction.UPDATE, PermissionAction.DELETE)
        return (self,)


CONCRETE_ACTIONS = (
    PermissionAction.READ,
    PermissionAction.CREATE,
    PermissionAction.UPDATE,
    PermissionAction.DELETE,
)

DOCUMENT_ACTIONS = (
    PermissionAction.READ,
    PermissionAction.UPDATE,
    PermissionAction.DELETE,
)
