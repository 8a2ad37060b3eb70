"""Per-request authorization context.

One ``Authorization`` instance is created for every inbound request and
passed explicitly through the call chain; it is never shared between
requests.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from dynaschema.domain.value_objects import PermissionAction, RoleKind

T = TypeVar("T")

PRIVILEGED_ROLES = frozenset({"owner", "developer", "admin"})
APP_ROLE = "apps"

logger = logging.getLogger(__name__)


class Authorization:
    """Evaluates permission lists against the request's active role set.

    While ``enabled`` is False every check passes (bypass mode).
    """

    def __init__(self, roles: Iterable[str] | None = None, enabled: bool = True) -> None:
        self._roles: dict[str, None] = dict.fromkeys(
            roles if roles is not None else [RoleKind.ANY.value]
        )
        self.enabled = enabled
        self.default_enabled = enabled
        self.last_message = "Authorization Error"

    def is_valid(self, action: PermissionAction | str, permissions: Iterable[str]) -> bool:
        """Whether any active role is granted ``action`` by ``permissions``.

        ``permissions`` may hold ``action:role`` strings (only those for
        ``action`` are considered) or bare role strings already selected
        for ``action``.
        """
        if not self.enabled:
            return True

        action = PermissionAction(action)
        granted = _granted_roles(action, permissions)
        if not granted:
            self.last_message = f"No permissions provided for action '{action}'"
            logger.info("authorization_denied", extra={"action": str(action), "reason": "empty"})
            return False

        for role in granted:
            if role in self._roles:
                return True

        self.last_message = (
            f'Missing "{action}" permission for role "{granted[0]}". '
            f'Only "{json.dumps(self.get_roles())}" scopes are allowed and '
            f'"{json.dumps(granted)}" was given.'
        )
        logger.info(
            "authorization_denied",
            extra={"action": str(action), "roles": self.get_roles(), "required": granted},
        )
        return False

    def set_role(self, role: str) -> None:
        self._roles[role] = None

    def unset_role(self, role: str) -> None:
        self._roles.pop(role, None)

    def get_roles(self) -> list[str]:
        return list(self._roles)

    def is_role(self, role: str) -> bool:
        return role in self._roles

    def clean_roles(self) -> None:
        self._roles.clear()

    def is_privileged(self) -> bool:
        """API keys and console team roles may see disabled collections."""
        return any(role in PRIVILEGED_ROLES or role == APP_ROLE for role in self._roles)

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        self.enabled = self.default_enabled

    @contextmanager
    def skipped(self) -> Iterator["Authorization"]:
        """Disable checks for the enclosed block and restore the prior state on exit."""
        initial = self.enabled
        self.enabled = False
        try:
            yield self
        finally:
            self.enabled = initial

    async def skip(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` with checks disabled."""
        with self.skipped():
            return await fn()


def _granted_roles(action: PermissionAction, permissions: Iterable[str]) -> list[str]:
    actions = {a.value for a in PermissionAction}
    roles: list[str] = []
    for entry in permissions:
        prefix, sep, rest = entry.partition(":")
        if sep and prefix in actions:
            if action not in PermissionAction(prefix).expands_to:
                continue
            entry = rest
        if entry not in roles:
            roles.append(entry)
    return roles
