"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain never handles ORM
instances.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from bizledger.domain import entities as domain
from bizledger.database.models import (
    Company as ORMCompany,
    User as ORMUser,
    BankAccount as ORMBankAccount,
    Transaction as ORMTransaction,
    Project as ORMProject,
    Task as ORMTask,
)
from bizledger.utils.amount_parser import CENT


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything is stored in UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _money(value) -> Decimal:
    return Decimal(value).quantize(CENT)


def company_to_domain(orm_company: ORMCompany) -> domain.Company:
    """Convert SQLAlchemy Company model to domain Company entity."""
    return domain.Company(
        id=orm_company.id,
        name=orm_company.name,
        created_at=_as_utc(orm_company.created_at),
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        name=orm_user.name,
        role=orm_user.role,
        company_id=orm_user.company_id,
        is_active=orm_user.is_active,
        created_at=_as_utc(orm_user.created_at),
    )


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        company_id=orm_account.company_id,
        bank_name=orm_account.bank_name,
        ifsc_code=orm_account.ifsc_code,
        account_number=orm_account.account_number,
        account_type=domain.AccountType(orm_account.account_type),
        current_amount=_money(orm_account.current_amount),
        created_at=_as_utc(orm_account.created_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity.

    The account display name comes from the joined bank account row.
    """
    return domain.Transaction(
        id=orm_transaction.id,
        company_id=orm_transaction.company_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=_money(orm_transaction.amount),
        bank_account_id=orm_transaction.bank_account_id,
        account=orm_transaction.bank_account.bank_name,
        category=orm_transaction.category,
        color=orm_transaction.color,
        department=orm_transaction.department,
        date=_as_utc(orm_transaction.date),
        description=orm_transaction.description,
        notes=orm_transaction.notes,
        idempotency_key=orm_transaction.idempotency_key,
        created_at=_as_utc(orm_transaction.created_at),
    )


def _optional_money(value) -> Optional[Decimal]:
    return _money(value) if value is not None else None


def project_to_domain(orm_project: ORMProject) -> domain.Project:
    """Convert SQLAlchemy Project model to domain Project entity."""
    return domain.Project(
        id=orm_project.id,
        company_id=orm_project.company_id,
        name=orm_project.name,
        description=orm_project.description,
        client_name=orm_project.client_name,
        start_date=_as_utc(orm_project.start_date),
        end_date=_as_utc(orm_project.end_date),
        project_head_id=orm_project.project_head_id,
        employee_ids=tuple(user.id for user in orm_project.employees),
        total_revenue=_optional_money(orm_project.total_revenue),
        cost=_optional_money(orm_project.cost),
        created_at=_as_utc(orm_project.created_at),
    )


def task_to_domain(orm_task: ORMTask) -> domain.Task:
    """Convert SQLAlchemy Task model to domain Task entity."""
    return domain.Task(
        id=orm_task.id,
        company_id=orm_task.company_id,
        project_id=orm_task.project_id,
        name=orm_task.name,
        description=orm_task.description,
        assigned_to_id=orm_task.assigned_to_id,
        status=domain.TaskStatus(orm_task.status),
        completion_date=_as_utc(orm_task.completion_date),
        created_at=_as_utc(orm_task.created_at),
    )
