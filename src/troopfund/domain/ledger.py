"""Ledger domain service.

The ledger owns accounts and their transactions. Every mutating method runs
as one unit of work on the injected database: the transaction rows and the
balance adjustments they imply are committed together or not at all, and
balances are only ever changed by relative updates inside that unit.

Transfers are stored as two transactions, a debit on the source account and
a credit on the destination, linked by a generated transfer group ID. The
pair is created, edited and deleted as a whole.
"""

import logging
import uuid
from datetime import date as date_type
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Optional, Union

from troopfund.domain.authorization import Principal, WRITE_ROLES, require_role
from troopfund.domain.category import TRANSFER_CATEGORY, validate_category
from troopfund.domain.entities import Account, Transaction
from troopfund.domain.errors import (
    IntegrityError,
    NotFoundError,
    ValidationError,
    account_not_found,
    account_ref_not_found,
    transaction_not_found,
    transfer_pair_broken,
    unit_account_missing,
)

if TYPE_CHECKING:
    from troopfund.database.base import Database

logger = logging.getLogger(__name__)

UNIT_ACCOUNT_REF = "unit"
UNIT_ACCOUNT_NAME = "Unit Account"
DEFAULT_TRANSFER_DESCRIPTION = "Transfer"

AccountRef = Union[int, str]

_CENT = Decimal("0.01")

# Amount and balance columns are Numeric(12, 2)
MAX_AMOUNT = Decimal("10000000000")


def _require_text(value: Optional[str], field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def _to_amount(amount: Union[Decimal, int, str]) -> Decimal:
    """Coerce to a two-place Decimal, rejecting floats, sub-cent precision and
    amounts outside the stored column range."""
    if isinstance(amount, float):
        raise ValidationError("Amount must be a Decimal, not a float")
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError):
        raise ValidationError(f"Invalid amount '{amount}'")
    if not value.is_finite():
        raise ValidationError(f"Invalid amount '{amount}'")
    if abs(value) >= MAX_AMOUNT:
        raise ValidationError(f"Amount {amount} is too large; the limit is {MAX_AMOUNT - _CENT}")
    if value != value.quantize(_CENT):
        raise ValidationError(f"Amount {amount} has more than two decimal places")
    return value.quantize(_CENT)


def _require_date(value) -> date_type:
    if not isinstance(value, date_type):
        raise ValidationError("Date is required")
    return value


class LedgerService:
    """Service for accounts, transactions and transfers."""

    def __init__(self, db: "Database"):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    # Accounts

    def ensure_unit_account(self) -> Account:
        """Return the unit account, creating it if it does not exist yet.

        Safe to call on every startup. If two processes initialize at once,
        the unique index on the unit flag lets only one insert succeed.
        """
        unit = self.db.get_unit_account()
        if unit is not None:
            return unit
        try:
            with self.db.atomic():
                if self.db.get_unit_account() is None:
                    account_id = self.db.create_account(
                        name=UNIT_ACCOUNT_NAME, is_unit_account=True
                    )
                    logger.info("Provisioned unit account %s", account_id)
        except IntegrityError:
            logger.info("Unit account provisioned concurrently")
        unit = self.db.get_unit_account()
        if unit is None:
            raise IntegrityError(unit_account_missing())
        return unit

    def create_account(self, principal: Principal, name: str) -> Account:
        """Create a scout account with a zero balance.

        Raises:
            AuthorizationError: If the principal may not write
            ValidationError: If name is empty
        """
        require_role(principal, *WRITE_ROLES, action="create accounts")
        name = _require_text(name, "Account name")
        with self.db.atomic():
            account_id = self.db.create_account(name=name, is_unit_account=False)
            account = self.db.get_account(account_id)
        logger.info("Created account %s '%s'", account_id, name)
        return account

    def rename_account(self, principal: Principal, account_id: int, name: str) -> Account:
        """Rename a scout account.

        The unit account is not renameable and is reported as not found.

        Raises:
            AuthorizationError: If the principal may not write
            ValidationError: If name is empty
            NotFoundError: If no scout account has this ID
        """
        require_role(principal, *WRITE_ROLES, action="rename accounts")
        name = _require_text(name, "Account name")
        with self.db.atomic():
            account = self.db.get_account(account_id)
            if account is None or account.is_unit_account:
                raise NotFoundError(account_not_found(account_id))
            self.db.update_account_name(account_id, name)
            account = self.db.get_account(account_id)
        logger.info("Renamed account %s to '%s'", account_id, name)
        return account

    def get_account(self, account_id: int) -> Optional[Account]:
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> Account:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def get_unit_account(self) -> Account:
        """Get the unit account.

        Raises:
            IntegrityError: If the unit account has not been provisioned
        """
        unit = self.db.get_unit_account()
        if unit is None:
            raise IntegrityError(unit_account_missing())
        return unit

    def list_accounts(self) -> list[Account]:
        return self.db.list_accounts()

    def resolve_account_ref(self, ref: AccountRef) -> int:
        """Resolve an account ID or the ``"unit"`` sentinel to an account ID.

        Must be called inside the caller's unit of work when the result feeds
        a mutation.

        Raises:
            NotFoundError: If the account does not exist
            IntegrityError: If ``"unit"`` is given before provisioning
        """
        if isinstance(ref, str):
            if ref.strip().lower() == UNIT_ACCOUNT_REF:
                return self.get_unit_account().id
            try:
                ref = int(ref)
            except ValueError:
                raise NotFoundError(account_ref_not_found(ref))
        return self.require_account(ref).id

    # Transactions

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.db.get_transaction(transaction_id)

    def list_transactions(self, account_id: int) -> list[Transaction]:
        """List an account's transactions, newest first.

        Raises:
            NotFoundError: If the account does not exist
        """
        self.require_account(account_id)
        return self.db.list_transactions(account_id=account_id)

    def get_transfer_pair(self, transfer_group_id: str) -> tuple[Transaction, Transaction]:
        """Return the (debit, credit) legs of a transfer group.

        Raises:
            IntegrityError: If the group does not hold a well-formed pair
        """
        legs = self.db.list_transactions(transfer_group_id=transfer_group_id)
        return self._check_pair(transfer_group_id, legs)

    def post_transaction(
        self,
        principal: Principal,
        account_id: AccountRef,
        description: str,
        amount: Union[Decimal, int, str],
        category: str,
        date: date_type,
    ) -> Transaction:
        """Post a deposit (positive) or payment (negative) to an account.

        Raises:
            AuthorizationError: If the principal may not write
            ValidationError: If any field is missing or invalid, the amount
                is zero, or the category is the reserved transfer label
            NotFoundError: If the account does not exist
        """
        require_role(principal, *WRITE_ROLES, action="post transactions")
        description = _require_text(description, "Description")
        category = validate_category(category)
        amount = self._nonzero(amount)
        date = _require_date(date)

        with self.db.atomic():
            resolved_id = self.resolve_account_ref(account_id)
            transaction_id = self.db.create_transaction(
                account_id=resolved_id,
                description=description,
                amount=amount,
                category=category,
                date=date,
            )
            self.db.adjust_balance(resolved_id, amount)
            transaction = self.db.get_transaction(transaction_id)
        logger.info(
            "Posted transaction %s: %s to account %s", transaction_id, amount, resolved_id
        )
        return transaction

    def edit_transaction(
        self,
        principal: Principal,
        transaction_id: int,
        description: str,
        amount: Union[Decimal, int, str],
        category: str,
        date: date_type,
    ) -> Transaction:
        """Replace a transaction's description, amount, category and date.

        The owning account's balance moves by the difference between the new
        and old amounts. For a transfer leg the amount and category must stay
        as they are; a new description or date is written to both legs.

        Raises:
            AuthorizationError: If the principal may not write
            ValidationError: If a field is invalid or a transfer leg's amount
                or category would change
            NotFoundError: If the transaction does not exist
            IntegrityError: If a transfer leg has lost its partner
        """
        require_role(principal, *WRITE_ROLES, action="edit transactions")
        description = _require_text(description, "Description")
        amount = self._nonzero(amount)
        date = _require_date(date)
        category = (category or "").strip()

        with self.db.atomic():
            existing = self.db.get_transaction(transaction_id, for_update=True)
            if existing is None:
                raise NotFoundError(transaction_not_found(transaction_id))

            if existing.is_transfer:
                self._edit_transfer(existing, description, amount, category, date)
            else:
                category = validate_category(category)
                self.db.update_transaction(
                    transaction_id, description=description, amount=amount,
                    category=category, date=date,
                )
                delta = amount - existing.amount
                if delta:
                    self.db.adjust_balance(existing.account_id, delta)
            transaction = self.db.get_transaction(transaction_id)
        logger.info("Edited transaction %s", transaction_id)
        return transaction

    def _edit_transfer(
        self,
        leg: Transaction,
        description: str,
        amount: Decimal,
        category: str,
        date: date_type,
    ) -> None:
        if amount != leg.amount:
            raise ValidationError(
                "Cannot change the amount of a transfer; delete it and transfer again"
            )
        if category != TRANSFER_CATEGORY:
            raise ValidationError(f"Transfer transactions must keep category '{TRANSFER_CATEGORY}'")
        legs = self.db.list_transactions(
            transfer_group_id=leg.transfer_group_id, for_update=True
        )
        self._check_pair(leg.transfer_group_id, legs)
        for each in legs:
            self.db.update_transaction(
                each.id, description=description, amount=each.amount,
                category=TRANSFER_CATEGORY, date=date,
            )

    def delete_transaction(self, principal: Principal, transaction_id: int) -> None:
        """Delete a transaction and reverse its effect on the balance.

        Deleting either leg of a transfer deletes both legs.

        Raises:
            AuthorizationError: If the principal may not write
            NotFoundError: If the transaction does not exist
            IntegrityError: If a transfer leg has lost its partner
        """
        require_role(principal, *WRITE_ROLES, action="delete transactions")
        with self.db.atomic():
            existing = self.db.get_transaction(transaction_id, for_update=True)
            if existing is None:
                raise NotFoundError(transaction_not_found(transaction_id))

            if existing.is_transfer:
                legs = self.db.list_transactions(
                    transfer_group_id=existing.transfer_group_id, for_update=True
                )
                self._check_pair(existing.transfer_group_id, legs)
            else:
                legs = [existing]

            for leg in legs:
                self.db.delete_transaction(leg.id)
                self.db.adjust_balance(leg.account_id, -leg.amount)
        logger.info(
            "Deleted transaction%s %s",
            "s" if len(legs) > 1 else "",
            ", ".join(str(leg.id) for leg in legs),
        )

    # Transfers

    def transfer(
        self,
        principal: Principal,
        from_account: AccountRef,
        to_account: AccountRef,
        amount: Union[Decimal, int, str],
        description: Optional[str] = None,
        date: Optional[date_type] = None,
    ) -> tuple[Transaction, Transaction]:
        """Move funds between two accounts.

        Either side may be ``"unit"`` for the unit account. Returns the
        (debit, credit) transactions.

        Raises:
            AuthorizationError: If the principal may not write
            ValidationError: If amount is not positive or both sides are the
                same account
            NotFoundError: If either account does not exist
        """
        require_role(principal, *WRITE_ROLES, action="transfer funds")
        amount = _to_amount(amount)
        if amount <= 0:
            raise ValidationError("Transfer amount must be greater than zero")
        description = (description or "").strip() or DEFAULT_TRANSFER_DESCRIPTION
        date = date_type.today() if date is None else _require_date(date)

        with self.db.atomic():
            from_id = self.resolve_account_ref(from_account)
            to_id = self.resolve_account_ref(to_account)
            if from_id == to_id:
                raise ValidationError("Cannot transfer funds from an account to itself")

            transfer_group_id = uuid.uuid4().hex
            debit_id = self.db.create_transaction(
                account_id=from_id,
                description=description,
                amount=-amount,
                category=TRANSFER_CATEGORY,
                date=date,
                transfer_group_id=transfer_group_id,
            )
            credit_id = self.db.create_transaction(
                account_id=to_id,
                description=description,
                amount=amount,
                category=TRANSFER_CATEGORY,
                date=date,
                transfer_group_id=transfer_group_id,
            )
            self.db.adjust_balance(from_id, -amount)
            self.db.adjust_balance(to_id, amount)
            debit = self.db.get_transaction(debit_id)
            credit = self.db.get_transaction(credit_id)
        logger.info(
            "Transferred %s from account %s to account %s (group %s)",
            amount, from_id, to_id, transfer_group_id,
        )
        return debit, credit

    # Consistency

    def verify(self) -> list[str]:
        """Check stored balances and transfer pairs against transaction history.

        Returns:
            One message per discrepancy; empty when the ledger is consistent
        """
        problems = []
        with self.db.atomic():
            accounts = self.db.list_accounts()
            totals = self.db.get_transaction_totals()
            transactions = self.db.list_transactions()

        for account in accounts:
            expected = totals.get(account.id, Decimal("0.00"))
            if account.balance != expected:
                problems.append(
                    f"Account {account.id} '{account.name}' balance {account.balance} "
                    f"does not match transaction total {expected}"
                )

        groups: dict[str, list[Transaction]] = {}
        for txn in transactions:
            if txn.transfer_group_id is not None:
                groups.setdefault(txn.transfer_group_id, []).append(txn)
            elif txn.category == TRANSFER_CATEGORY:
                problems.append(f"Transaction {txn.id} is a transfer without a transfer group")
        for group_id, legs in groups.items():
            try:
                self._check_pair(group_id, legs)
            except IntegrityError as e:
                problems.append(str(e))
        return problems

    @staticmethod
    def _nonzero(amount) -> Decimal:
        value = _to_amount(amount)
        if value == 0:
            raise ValidationError("Amount must not be zero")
        return value

    @staticmethod
    def _check_pair(
        transfer_group_id: str, legs: list[Transaction]
    ) -> tuple[Transaction, Transaction]:
        """Validate a transfer group and return its (debit, credit) legs."""
        if len(legs) != 2:
            raise IntegrityError(transfer_pair_broken(transfer_group_id, len(legs)))
        debit, credit = sorted(legs, key=lambda t: t.amount)
        if (
            debit.account_id == credit.account_id
            or debit.amount + credit.amount != 0
            or debit.amount >= 0
            or debit.description != credit.description
            or debit.date != credit.date
        ):
            raise IntegrityError(f"Transfer group {transfer_group_id} legs do not match")
        return debit, credit
