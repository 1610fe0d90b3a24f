"""Domain layer for troopfund application."""

from troopfund.domain.ledger import LedgerService
from troopfund.domain.audit import AuditService
from troopfund.domain.user import UserService

__all__ = [
    "LedgerService",
    "AuditService",
    "UserService",
]
