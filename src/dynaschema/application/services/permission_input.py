"""Validation of caller-supplied permission lists."""

from collections.abc import Iterable

from dynaschema.domain.authorization import Authorization
from dynaschema.domain.exceptions import InvalidValue, Unauthorized
from dynaschema.domain.validators import RolesValidator
from dynaschema.domain.value_objects import Permission, PermissionAction


def parse_permissions(
    raw: list[str] | None,
    allowed: Iterable[PermissionAction],
    max_roles: int,
) -> list[str] | None:
    """Validate roles and aggregate ``raw``; ``None`` means nothing was supplied."""
    if raw is None:
        return None

    validator = RolesValidator(length=max_roles)
    if not validator.is_valid([value.partition(":")[2] for value in raw]):
        raise InvalidValue(validator.description, code="permission_invalid")

    allowed = tuple(allowed)
    aggregated = Permission.aggregate(raw, allowed)
    if aggregated is None:
        names = ", ".join(str(a) for a in allowed)
        raise Unauthorized(f"Permissions must be one of: {names}", code="user_unauthorized")
    return aggregated


def ensure_grantable(auth: Authorization, permissions: list[str]) -> None:
    """Callers may only grant permissions to roles they hold themselves."""
    if not auth.enabled or auth.is_privileged():
        return
    for value in permissions:
        role = str(Permission.parse(value).role)
        if not auth.is_role(role):
            raise Unauthorized(
                f'Permissions must be one of: ({", ".join(auth.get_roles())})',
                code="user_unauthorized",
            )
