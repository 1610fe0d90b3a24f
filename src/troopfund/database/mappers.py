"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so ORM rows never leave the
database package.
"""

from decimal import Decimal

from troopfund.domain import entities as domain
from troopfund.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    User as ORMUser,
    AuditLog as ORMAuditLog,
)

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Normalize a stored numeric value to a two-place Decimal."""
    return Decimal(str(value if value is not None else 0)).quantize(CENT)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        balance=to_money(orm_account.balance),
        is_unit_account=bool(orm_account.is_unit_account),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        description=orm_transaction.description,
        amount=to_money(orm_transaction.amount),
        category=orm_transaction.category,
        date=orm_transaction.date,
        transfer_group_id=orm_transaction.transfer_group_id,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        role=orm_user.role,
        created_at=orm_user.created_at,
    )


def audit_entry_to_domain(orm_entry: ORMAuditLog) -> domain.AuditEntry:
    """Convert SQLAlchemy AuditLog model to domain AuditEntry entity."""
    return domain.AuditEntry(
        id=orm_entry.id,
        principal_id=orm_entry.principal_id,
        action_type=orm_entry.action_type,
        details=orm_entry.details,
        created_at=orm_entry.created_at,
    )
