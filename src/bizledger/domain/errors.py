"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Optional

from bizledger.utils.currency import format_inr


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    ``fields`` maps offending input field names to a message.
    """

    def __init__(self, message: str, fields: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.fields = dict(fields or {})


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class AccountNotFoundError(NotFoundError):
    """Bank account does not exist within the caller's company."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateAccountError(ConflictError):
    """Bank account number already registered for the company."""


class InsufficientFundsError(DomainError):
    """Expense exceeds the available balance of the bank account."""

    def __init__(self, requested: Decimal, available: Decimal, bank_name: str):
        super().__init__(insufficient_funds(requested, available, bank_name))
        self.requested = requested
        self.available = available
        self.bank_name = bank_name


class AuthenticationError(DomainError):
    """Missing, invalid or expired credential."""


class NoCompanyError(DomainError):
    """Authenticated user is not attached to a company yet."""


class PermissionDeniedError(DomainError):
    """Caller's role does not allow the operation."""


class CommitFailedError(Exception):
    """Storage failure inside an atomic unit of work; nothing was written."""


def account_not_found(account: str | int) -> str:
    """Return message for missing bank account."""
    if isinstance(account, int):
        return f"Bank account {account} not found"
    return f"Bank account '{account}' not found"


def duplicate_account_number(account_number: str) -> str:
    """Return message for a reused account number."""
    return f"Bank account with account number '{account_number}' already exists"


def insufficient_funds(requested: Decimal, available: Decimal, bank_name: str) -> str:
    """Return message for an expense larger than the account balance."""
    return (
        f"Transaction failed: Demanded amount ({format_inr(requested)}) is bigger "
        f"than current amount ({format_inr(available)}) in {bank_name}"
    )


def no_company(email: str) -> str:
    """Return message for a user without a company."""
    return f"User '{email}' is not associated with a company"


def project_not_found(project_id: int) -> str:
    """Return message for a project missing from the caller's view."""
    return f"Project {project_id} not found"


def task_not_found(task_id: int) -> str:
    """Return message for a task missing from the caller's view."""
    return f"Task {task_id} not found"


def commit_failed() -> str:
    """Return the caller-facing message for an aborted unit of work."""
    return "The transaction could not be saved. No changes were made; please retry."
