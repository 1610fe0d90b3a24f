"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested account, transaction or user does not exist."""


class AuthorizationError(DomainError):
    """The acting principal's role does not allow the operation."""


class IntegrityError(DomainError):
    """A ledger invariant cannot be satisfied, such as transfer pairing."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_ref_not_found(ref: str) -> str:
    """Return message for an account reference that matches nothing."""
    return f"Account '{ref}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def user_not_found(user_ref: int | str) -> str:
    """Return message for missing user."""
    if isinstance(user_ref, int):
        return f"User {user_ref} not found"
    return f"User '{user_ref}' not found"


def unit_account_missing() -> str:
    return "Unit account has not been provisioned"


def transfer_pair_broken(transfer_group_id: str, count: int) -> str:
    """Return message when a transfer group does not hold exactly two legs."""
    return (
        f"Transfer group {transfer_group_id} has {count} "
        f"transaction{'s' if count != 1 else ''}, expected 2"
    )


def permission_denied(role: str, action: str) -> str:
    """Return message for a role that may not perform an action."""
    return f"Role '{role}' is not allowed to {action}"
