"""Domain model entities for bizledger.

These are pure data classes representing business concepts, independent of
database schema. Services and the HTTP layer only ever see these; the ORM
models stay inside the database package.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of bank account."""

    SAVING = "saving"
    CURRENT = "current"


class TransactionType(str, Enum):
    """Direction of a ledger transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class TaskStatus(str, Enum):
    """Progress of a project task."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


@dataclass(frozen=True)
class Company:
    """Tenant domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    email: str
    name: Optional[str]
    role: str
    company_id: Optional[int]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Principal:
    """Authenticated caller with tenant and role claims."""

    id: int
    email: str
    role: str
    company_id: Optional[int]


@dataclass(frozen=True)
class BankAccount:
    """Bank account domain entity."""

    id: int
    company_id: int
    bank_name: str
    ifsc_code: str
    account_number: str
    account_type: AccountType
    current_amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``account`` is the bank name of ``bank_account_id``, resolved when the
    transaction is read.
    """

    id: int
    company_id: int
    type: TransactionType
    amount: Decimal
    bank_account_id: int
    account: str
    category: str
    color: str
    department: str
    date: datetime
    description: Optional[str]
    notes: Optional[str]
    idempotency_key: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class NewTransaction:
    """Validated transaction input, ready to be written."""

    type: TransactionType
    amount: Decimal
    category: str
    color: str
    department: str
    date: datetime
    description: Optional[str] = None
    notes: Optional[str] = None
    idempotency_key: Optional[str] = None


@dataclass(frozen=True)
class RecordedTransaction:
    """Outcome of recording a transaction.

    ``created`` is False when an earlier transaction with the same
    idempotency key was returned instead of writing a new one.
    """

    transaction: Transaction
    balance: Decimal
    created: bool = True


@dataclass(frozen=True)
class Project:
    """Client project domain entity.

    ``employee_ids`` lists the users staffed on the project besides its head.
    """

    id: int
    company_id: int
    name: str
    description: str
    client_name: str
    start_date: datetime
    end_date: datetime
    project_head_id: int
    employee_ids: tuple[int, ...]
    total_revenue: Optional[Decimal]
    cost: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class Task:
    """Project task domain entity.

    ``completion_date`` is set while the task is Done.
    """

    id: int
    company_id: int
    project_id: int
    name: str
    description: Optional[str]
    assigned_to_id: Optional[int]
    status: TaskStatus
    completion_date: Optional[datetime]
    created_at: datetime
