"""Permission value object - an (action, role) grant."""

from collections.abc import Iterable
from dataclasses import dataclass

from dynaschema.domain.exceptions import InvalidValue
from dynaschema.domain.value_objects.permission_action import PermissionAction
from dynaschema.domain.value_objects.role import Role


@dataclass(frozen=True)
class Permission:
    """Permission - grants ``role`` the right to perform ``action``."""

    action: PermissionAction
    role: Role

    def __str__(self) -> str:
        return f"{self.action}:{self.role}"

    @classmethod
    def parse(cls, value: str) -> "Permission":
        """Parse ``action:role`` into a Permission."""
        action, sep, role = value.partition(":")
        if not sep or not role:
            raise InvalidValue(
                f'Permission "{value}" must be of the form "action:role".',
                code="permission_invalid",
            )
        try:
            permission_action = PermissionAction(action)
        except ValueError:
            allowed = ", ".join(a.value for a in PermissionAction)
            raise InvalidValue(
                f'Permission action "{action}" is not allowed. Must be one of: {allowed}.',
                code="permission_invalid",
            ) from None
        return cls(permission_action, Role.parse(role))

    @classmethod
    def for_action(cls, action: PermissionAction | str, role: Role) -> str:
        """Canonical permission string for ``action`` granted to ``role``."""
        return str(cls(PermissionAction(action), role))

    @classmethod
    def read(cls, role: Role) -> str:
        return cls.for_action(PermissionAction.READ, role)

    @classmethod
    def create(cls, role: Role) -> str:
        return cls.for_action(PermissionAction.CREATE, role)

    @classmethod
    def update(cls, role: Role) -> str:
        return cls.for_action(PermissionAction.UPDATE, role)

    @classmethod
    def delete(cls, role: Role) -> str:
        return cls.for_action(PermissionAction.DELETE, role)

    @classmethod
    def write(cls, role: Role) -> str:
        return cls.for_action(PermissionAction.WRITE, role)

    @classmethod
    def aggregate(
        cls,
        raw: list[str] | None,
        allowed: Iterable[PermissionAction] = (),
    ) -> list[str] | None:
        """Expand, filter and deduplicate raw permission strings.

        ``write`` expands to ``create``, ``update`` and ``delete``. When
        ``allowed`` is non-empty, any permission whose action (after
        expansion) falls entirely outside it rejects the whole list and
        ``None`` is returned. ``None`` input also yields ``None``. An empty
        list means no permissions are granted.
        """
        if raw is None:
            return None

        allowed_actions = set(allowed)
        result: list[str] = []
        seen: set[str] = set()
        for value in raw:
            permission = cls.parse(value)
            actions = permission.action.expands_to
            if allowed_actions:
                actions = tuple(a for a in actions if a in allowed_actions)
                if not actions:
                    return None
            for action in actions:
                canonical = str(cls(action, permission.role))
                if canonical not in seen:
                    seen.add(canonical)
                    result.append(canonical)
        return result


def roles_for_action(permissions: Iterable[str], action: PermissionAction) -> list[str]:
    """Role strings granted ``action`` by ``permissions``."""
    roles: list[str] = []
    for value in permissions:
        permission = Permission.parse(value)
        if action in permission.action.expands_to and str(permission.role) not in roles:
            roles.append(str(permission.role))
    return roles
