"""Roles and the authenticated principal passed into every service call."""

from dataclasses import dataclass
from enum import Enum

from troopfund.domain.errors import AuthorizationError, ValidationError, permission_denied


class Role(str, Enum):
    """User role. Viewers read, editors write the ledger, admins also manage users."""

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Parse a role name, case-insensitively.

        Raises:
            ValidationError: If the name is not a known role
        """
        if isinstance(value, Role):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ValidationError(f"Invalid role '{value}'. Must be one of: {valid}")


WRITE_ROLES = (Role.ADMIN, Role.EDITOR)


@dataclass(frozen=True)
class Principal:
    """Resolved identity of the caller."""

    id: int
    role: Role


def require_role(principal: Principal, *roles: Role, action: str = "perform this action") -> None:
    """Raise AuthorizationError unless the principal holds one of ``roles``."""
    if principal.role not in roles:
        raise AuthorizationError(permission_denied(principal.role.value, action))


def can_write(principal: Principal) -> bool:
    """Return True if the principal may mutate the ledger."""
    return principal.role in WRITE_ROLES
