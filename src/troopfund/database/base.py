"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from troopfund.domain.entities import (
    Account,
    Transaction,
    User,
    AuditEntry,
)


class Database(ABC):
    """Abstract database interface for troopfund.

    Every primitive runs inside the unit of work opened by ``atomic()`` when
    one is active on the calling thread, and otherwise in a unit of its own.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open an all-or-nothing unit of work.

        Commits when the block exits normally and rolls back every write made
        inside it when the block raises. Nested calls join the outer unit.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, is_unit_account: bool = False) -> int:
        """Create a new account with a zero balance. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_unit_account(self) -> Optional[Account]:
        """Get the account flagged as the unit account."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts, unit account first, then by name."""
        pass

    @abstractmethod
    def update_account_name(self, account_id: int, name: str) -> None:
        """Update an account's name."""
        pass

    @abstractmethod
    def adjust_balance(self, account_id: int, delta: Decimal) -> None:
        """Add ``delta`` to the stored balance in a single relative update."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        description: str,
        amount: Decimal,
        category: str,
        date: date,
        transfer_group_id: Optional[str] = None,
    ) -> int:
        """Create a transaction row. Returns transaction ID.

        Balances are not touched; callers pair this with ``adjust_balance``.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int, for_update: bool = False) -> Optional[Transaction]:
        """Get transaction by ID, optionally locking the row."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[int] = None,
        transfer_group_id: Optional[str] = None,
        for_update: bool = False,
    ) -> list[Transaction]:
        """List transactions, newest date first, with optional filters."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        description: str,
        amount: Decimal,
        category: str,
        date: date,
    ) -> None:
        """Overwrite the editable fields of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction row."""
        pass

    @abstractmethod
    def get_transaction_totals(self) -> dict[int, Decimal]:
        """Return the sum of transaction amounts per account ID."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, username: str, role: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users by username."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        pass

    # Audit operations
    @abstractmethod
    def add_audit_entry(self, principal_id: Optional[int], action_type: str, details: str) -> int:
        """Append an audit log entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_audit_entries(self, limit: int = 100) -> list[AuditEntry]:
        """List audit entries, newest first."""
        pass
