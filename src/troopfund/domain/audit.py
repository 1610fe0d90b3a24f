"""Audit trail domain service."""

import logging
from typing import TYPE_CHECKING, Optional

from troopfund.domain.authorization import Principal, Role, require_role
from troopfund.domain.entities import AuditEntry

if TYPE_CHECKING:
    from troopfund.database.base import Database

logger = logging.getLogger(__name__)

USER_CREATE = "USER_CREATE"
USER_DELETE = "USER_DELETE"


class AuditService:
    """Service for writing and reading the audit trail."""

    def __init__(self, db: "Database"):
        """Initialize audit service.

        Args:
            db: Database instance
        """
        self.db = db

    def record(self, principal_id: Optional[int], action_type: str, details: str) -> None:
        """Record an audit entry.

        Fire-and-forget: the action being audited has already committed, so a
        failure here is logged and not raised to the caller.
        """
        try:
            with self.db.atomic():
                self.db.add_audit_entry(
                    principal_id=principal_id, action_type=action_type, details=details
                )
        except Exception:
            logger.exception(
                "Failed to record audit entry %s for principal %s", action_type, principal_id
            )

    def list_entries(self, principal: Principal, limit: int = 100) -> list[AuditEntry]:
        """List audit entries, newest first.

        Raises:
            AuthorizationError: If the principal is not an admin
        """
        require_role(principal, Role.ADMIN, action="view the audit log")
        return self.db.list_audit_entries(limit=limit)
