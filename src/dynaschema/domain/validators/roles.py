"""Role list validation - table-driven grammar keyed by role kind."""

from collections.abc import Iterable
from dataclasses import dataclass

from dynaschema.domain.value_objects import USER_DIMENSIONS, RoleKind


@dataclass(frozen=True)
class _Slot:
    allowed: bool
    required: bool = False
    options: tuple[str, ...] | None = None


@dataclass(frozen=True)
class _RoleGrammar:
    identifier: _Slot
    dimension: _Slot


_FORBIDDEN = _Slot(allowed=False)

ROLE_GRAMMAR: dict[RoleKind, _RoleGrammar] = {
    RoleKind.ANY: _RoleGrammar(identifier=_FORBIDDEN, dimension=_FORBIDDEN),
    RoleKind.GUESTS: _RoleGrammar(identifier=_FORBIDDEN, dimension=_FORBIDDEN),
    RoleKind.USERS: _RoleGrammar(
        identifier=_FORBIDDEN,
        dimension=_Slot(allowed=True, options=USER_DIMENSIONS),
    ),
    RoleKind.USER: _RoleGrammar(
        identifier=_Slot(allowed=True, required=True),
        dimension=_Slot(allowed=True, options=USER_DIMENSIONS),
    ),
    RoleKind.TEAM: _RoleGrammar(
        identifier=_Slot(allowed=True, required=True),
        dimension=_Slot(allowed=True),
    ),
    RoleKind.MEMBER: _RoleGrammar(
        identifier=_Slot(allowed=True, required=True),
        dimension=_FORBIDDEN,
    ),
    RoleKind.LABEL: _RoleGrammar(
        identifier=_Slot(allowed=True, required=True),
        dimension=_FORBIDDEN,
    ),
}


class RolesValidator:
    """Validates a list of role strings.

    ``length`` caps the number of roles (0 disables the cap) and ``allowed``
    restricts which role kinds may appear. After a failed ``is_valid`` call
    ``description`` holds a human-readable reason.
    """

    def __init__(self, length: int = 0, allowed: Iterable[RoleKind] | None = None) -> None:
        self._length = length
        self._allowed = tuple(allowed) if allowed is not None else tuple(RoleKind)
        self.description = "Roles Error"

    def is_valid(self, roles: object) -> bool:
        if not isinstance(roles, list):
            self.description = "Roles must be an array of strings."
            return False

        if self._length and len(roles) > self._length:
            self.description = f"You can only provide up to {self._length} roles."
            return False

        for role in roles:
            if not isinstance(role, str):
                self.description = "Every role must be of type string."
                return False

            kind, _, rest = role.partition(":")
            identifier, _, dimension = rest.partition(":")
            if kind not in {k.value for k in self._allowed}:
                allowed = ", ".join(k.value for k in self._allowed)
                self.description = f'Role "{kind}" is not allowed. Must be one of: {allowed}.'
                return False

            if not self._is_valid_role(RoleKind(kind), identifier or None, dimension or None):
                return False

        return True

    def _is_valid_role(self, kind: RoleKind, identifier: str | None, dimension: str | None) -> bool:
        grammar = ROLE_GRAMMAR[kind]

        if not grammar.identifier.allowed and identifier:
            self.description = f'Role "{kind}" can not have an ID value.'
            return False

        if grammar.identifier.required and not identifier:
            self.description = f'Role "{kind}" must have an ID value.'
            return False

        if not grammar.dimension.allowed and dimension:
            self.description = f'Role "{kind}" can not have a dimension value.'
            return False

        if grammar.dimension.required and not dimension:
            self.description = f'Role "{kind}" must have a dimension value.'
            return False

        options = grammar.dimension.options
        if dimension and options is not None and dimension not in options:
            self.description = (
                f'Role "{kind}" dimension value is invalid. Must be one of: {", ".join(options)}.'
            )
            return False

        return True
