"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from bizledger.domain.entities import (
    Company,
    User,
    BankAccount,
    Transaction,
    NewTransaction,
    Project,
    Task,
)


class Database(ABC):
    """Abstract database interface for bizledger.

    Every bank account and transaction operation takes the owning
    company_id; rows of other companies are never returned or modified.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database and dispose of pooled connections."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def release_session(self) -> None:
        """Return the calling thread's session to the pool."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group the enclosed writes into one unit of work.

        Commits when the block exits normally. On any exception the unit is
        rolled back so none of its writes are observable; storage failures
        are re-raised as CommitFailedError, anything else as-is.
        """
        pass

    # Company operations
    @abstractmethod
    def create_company(self, name: str) -> int:
        """Create a company. Returns company ID."""
        pass

    @abstractmethod
    def get_company(self, company_id: int) -> Optional[Company]:
        """Get company by ID."""
        pass

    @abstractmethod
    def get_company_by_name(self, name: str) -> Optional[Company]:
        """Get company by name."""
        pass

    @abstractmethod
    def list_companies(self) -> list[Company]:
        """List all companies."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self, email: str, name: Optional[str], role: str, company_id: Optional[int] = None
    ) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def set_user_company(self, user_id: int, company_id: Optional[int]) -> None:
        """Attach a user to a company, or detach with None."""
        pass

    @abstractmethod
    def list_users(self, company_id: int) -> list[User]:
        """List users of a company."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self,
        company_id: int,
        bank_name: str,
        ifsc_code: str,
        account_number: str,
        account_type: str,
        current_amount: Decimal,
    ) -> int:
        """Create a bank account. Returns account ID.

        Raises:
            DuplicateAccountError: If the account number is already used
                within the company
        """
        pass

    @abstractmethod
    def get_bank_account(self, company_id: int, account_id: int) -> Optional[BankAccount]:
        """Get a company's bank account by ID."""
        pass

    @abstractmethod
    def get_bank_account_by_number(
        self, company_id: int, account_number: str
    ) -> Optional[BankAccount]:
        """Get a company's bank account by account number."""
        pass

    @abstractmethod
    def find_bank_accounts_by_name(self, company_id: int, bank_name: str) -> list[BankAccount]:
        """Find a company's bank accounts with the given bank name."""
        pass

    @abstractmethod
    def list_bank_accounts(self, company_id: int) -> list[BankAccount]:
        """List a company's bank accounts."""
        pass

    @abstractmethod
    def adjust_balance(self, company_id: int, account_id: int, delta: Decimal) -> bool:
        """Add delta to an account balance unless the result would be negative.

        The check and the write are a single conditional update, so two
        concurrent debits cannot both pass a stale balance check.

        Returns:
            True if the balance was changed, False if the account does not
            exist or the balance is too low
        """
        pass

    # Transaction operations
    @abstractmethod
    def insert_transaction(
        self, company_id: int, bank_account_id: int, transaction: NewTransaction
    ) -> int:
        """Insert a transaction record. Returns transaction ID.

        Raises:
            ConflictError: If the idempotency key is already used within
                the company
        """
        pass

    @abstractmethod
    def get_transaction(self, company_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get a company's transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_by_idempotency_key(
        self, company_id: int, idempotency_key: str
    ) -> Optional[Transaction]:
        """Get a company's transaction by idempotency key."""
        pass

    @abstractmethod
    def list_transactions(self, company_id: int) -> list[Transaction]:
        """List a company's transactions."""
        pass

    # Project operations
    @abstractmethod
    def create_project(
        self,
        company_id: int,
        name: str,
        description: str,
        client_name: str,
        start_date: datetime,
        end_date: datetime,
        project_head_id: int,
        employee_ids: list[int],
        total_revenue: Optional[Decimal] = None,
        cost: Optional[Decimal] = None,
    ) -> int:
        """Create a project staffed with the given users. Returns project ID."""
        pass

    @abstractmethod
    def get_project(self, company_id: int, project_id: int) -> Optional[Project]:
        """Get a company's project by ID."""
        pass

    @abstractmethod
    def list_projects(self, company_id: int, member_id: Optional[int] = None) -> list[Project]:
        """List a company's projects.

        Args:
            company_id: Company ID
            member_id: If given, only projects this user heads or is staffed on
        """
        pass

    # Task operations
    @abstractmethod
    def create_task(
        self,
        company_id: int,
        project_id: int,
        name: str,
        description: Optional[str] = None,
        assigned_to_id: Optional[int] = None,
    ) -> int:
        """Create a task in the To Do state. Returns task ID."""
        pass

    @abstractmethod
    def get_task(self, company_id: int, task_id: int) -> Optional[Task]:
        """Get a company's task by ID."""
        pass

    @abstractmethod
    def list_tasks(self, company_id: int, project_id: int) -> list[Task]:
        """List the tasks of a project."""
        pass

    @abstractmethod
    def update_task(self, company_id: int, task_id: int, changes: Mapping[str, Any]) -> None:
        """Update task columns.

        Args:
            company_id: Company ID
            task_id: Task ID
            changes: New values keyed by name, description, assigned_to_id,
                status or completion_date

        Raises:
            NotFoundError: If the task doesn't exist in the company
            ValueError: If changes names any other column
        """
        pass

    @abstractmethod
    def delete_task(self, company_id: int, task_id: int) -> bool:
        """Delete a task. Returns False if it didn't exist."""
        pass
