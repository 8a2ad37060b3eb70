"""Role value object - actor-class descriptor used in permission evaluation."""

from dataclasses import dataclass
from enum import StrEnum

from dynaschema.domain.exceptions import InvalidValue


class RoleKind(StrEnum):
    """Kinds of actors a permission can be granted to."""

    ANY = "any"
    GUESTS = "guests"
    USERS = "users"
    USER = "user"
    TEAM = "team"
    MEMBER = "member"
    LABEL = "label"


DIMENSION_VERIFIED = "verified"
DIMENSION_UNVERIFIED = "unverified"
USER_DIMENSIONS = (DIMENSION_VERIFIED, DIMENSION_UNVERIFIED)


@dataclass(frozen=True)
class Role:
    """Role - ``kind[:identifier[:dimension]]``.

    A dimension without an identifier serializes with an empty identifier
    slot (``users::verified``) so that parsing stays unambiguous.
    """

    kind: RoleKind
    identifier: str | None = None
    dimension: str | None = None

    def __str__(self) -> str:
        if self.dimension:
            return f"{self.kind}:{self.identifier or ''}:{self.dimension}"
        if self.identifier:
            return f"{self.kind}:{self.identifier}"
        return str(self.kind)

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Parse a role string into a Role."""
        kind, _, rest = value.partition(":")
        identifier, _, dimension = rest.partition(":")
        try:
            role_kind = RoleKind(kind)
        except ValueError:
            allowed = ", ".join(k.value for k in RoleKind)
            raise InvalidValue(
                f'Role "{kind}" is not allowed. Must be one of: {allowed}.',
                code="role_invalid",
            ) from None
        return cls(role_kind, identifier or None, dimension or None)

    @classmethod
    def any(cls) -> "Role":
        return cls(RoleKind.ANY)

    @classmethod
    def guests(cls) -> "Role":
        return cls(RoleKind.GUESTS)

    @classmethod
    def users(cls, dimension: str | None = None) -> "Role":
        return cls(RoleKind.USERS, None, dimension)

    @classmethod
    def user(cls, identifier: str, dimension: str | None = None) -> "Role":
        return cls(RoleKind.USER, identifier, dimension)

    @classmethod
    def team(cls, identifier: str, dimension: str | None = None) -> "Role":
        return cls(RoleKind.TEAM, identifier, dimension)

    @classmethod
    def member(cls, identifier: str) -> "Role":
        return cls(RoleKind.MEMBER, identifier)

    @classmethod
    def label(cls, identifier: str) -> "Role":
        return cls(RoleKind.LABEL, identifier)
