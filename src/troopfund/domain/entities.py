"""Domain model entities for troopfund.

These are pure data classes representing ledger concepts, independent of
database schema. Services return them so callers never hold live ORM rows.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Account:
    """Scout or unit account domain entity."""

    id: int
    name: str
    balance: Decimal
    is_unit_account: bool


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction domain entity.

    Positive amounts are deposits, negative amounts are payments. Transfer
    legs carry the ``transfer_group_id`` shared with their partner.
    """

    id: int
    account_id: int
    description: str
    amount: Decimal
    category: str
    date: date
    transfer_group_id: Optional[str] = None

    @property
    def is_transfer(self) -> bool:
        return self.transfer_group_id is not None


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    username: str
    role: str
    created_at: datetime


@dataclass(frozen=True)
class AuditEntry:
    """Audit log entry domain entity."""

    id: int
    principal_id: Optional[int]
    action_type: str
    details: str
    created_at: datetime
