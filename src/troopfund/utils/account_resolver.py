"""Utility for resolving account names to IDs."""

from troopfund.domain.errors import NotFoundError, account_not_found, account_ref_not_found
from troopfund.domain.ledger import LedgerService, UNIT_ACCOUNT_REF, AccountRef


def resolve_account(ledger: LedgerService, account: str | int) -> AccountRef:
    """Resolve an account name, ID or ``unit`` to an account reference.

    Args:
        ledger: LedgerService instance
        account: Account name, ID (int or string representation of int), or
            "unit" for the unit account

    Returns:
        Account ID, or the "unit" sentinel

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, str) and account.strip().lower() == UNIT_ACCOUNT_REF:
        return UNIT_ACCOUNT_REF

    # If it's already an integer, use it as ID
    if isinstance(account, int):
        if ledger.get_account(account) is None:
            raise NotFoundError(account_not_found(account))
        return account

    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None
    if account_id is not None:
        if ledger.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return account_id

    # Try to find by name
    for acc in ledger.list_accounts():
        if acc.name == account:
            return acc.id

    raise NotFoundError(account_ref_not_found(account))
