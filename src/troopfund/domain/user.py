"""User administration domain service."""

import logging
from typing import TYPE_CHECKING, Optional

from troopfund.domain.audit import AuditService, USER_CREATE, USER_DELETE
from troopfund.domain.authorization import Principal, Role, require_role
from troopfund.domain.entities import User as UserEntity
from troopfund.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    user_not_found,
)

if TYPE_CHECKING:
    from troopfund.database.base import Database

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users and resolving principals."""

    def __init__(self, db: "Database", audit_service: Optional[AuditService] = None):
        """Initialize user service.

        Args:
            db: Database instance
            audit_service: Audit collaborator; defaults to one on the same database
        """
        self.db = db
        self.audit = audit_service if audit_service is not None else AuditService(db)

    def create_user(self, principal: Principal, username: str, role: str | Role) -> UserEntity:
        """Create a user.

        Raises:
            AuthorizationError: If the principal is not an admin
            ValidationError: If username is empty or role is unknown
            ConflictError: If the username is taken
        """
        require_role(principal, Role.ADMIN, action="manage users")
        user = self._create(username, Role.parse(role))
        self.audit.record(
            principal.id, USER_CREATE, f"Created user '{user.username}' with role {user.role}"
        )
        return user

    def bootstrap_admin(self, username: str) -> UserEntity:
        """Create the first admin user.

        Raises:
            ConflictError: If any user already exists
        """
        with self.db.atomic():
            if self.db.list_users():
                raise ConflictError("Users already exist; create further users as an admin")
            user = self._create(username, Role.ADMIN)
        self.audit.record(None, USER_CREATE, f"Bootstrapped admin user '{user.username}'")
        return user

    def _create(self, username: str, role: Role) -> UserEntity:
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")
        with self.db.atomic():
            if self.db.get_user_by_username(username) is not None:
                raise ConflictError(f"User '{username}' already exists")
            user_id = self.db.create_user(username=username, role=role.value)
            user = self.db.get_user(user_id)
        logger.info("Created user %s '%s' (%s)", user_id, username, role.value)
        return user

    def delete_user(self, principal: Principal, user_id: int) -> None:
        """Delete a user.

        Raises:
            AuthorizationError: If the principal is not an admin
            ValidationError: If an admin tries to delete themselves
            NotFoundError: If the user does not exist
        """
        require_role(principal, Role.ADMIN, action="manage users")
        if user_id == principal.id:
            raise ValidationError("You cannot delete your own user")
        with self.db.atomic():
            user = self.db.get_user(user_id)
            if user is None:
                raise NotFoundError(user_not_found(user_id))
            self.db.delete_user(user_id)
        logger.info("Deleted user %s '%s'", user_id, user.username)
        self.audit.record(principal.id, USER_DELETE, f"Deleted user '{user.username}'")

    def list_users(self, principal: Principal) -> list[UserEntity]:
        """List users.

        Raises:
            AuthorizationError: If the principal is not an admin
        """
        require_role(principal, Role.ADMIN, action="manage users")
        return self.db.list_users()

    def principal_for(self, username: str) -> Principal:
        """Resolve a username to the principal it acts as.

        Raises:
            NotFoundError: If no user has this username
        """
        user = self.db.get_user_by_username((username or "").strip())
        if user is None:
            raise NotFoundError(user_not_found(username))
        return Principal(id=user.id, role=Role(user.role))
