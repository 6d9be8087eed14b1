"""JSON representations of domain entities.

Keys are camelCase, money is a JSON number and timestamps are ISO-8601.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from bizledger.domain.entities import BankAccount, Project, Task, Transaction, User


def _money(value: Decimal) -> float:
    return float(value)


def _optional_money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def _timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def bank_account_to_json(account: BankAccount) -> dict[str, Any]:
    return {
        "id": account.id,
        "companyId": account.company_id,
        "bankName": account.bank_name,
        "ifscCode": account.ifsc_code,
        "accountNumber": account.account_number,
        "accountType": account.account_type.value,
        "currentAmount": _money(account.current_amount),
        "createdAt": _timestamp(account.created_at),
    }


def transaction_to_json(transaction: Transaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "companyId": transaction.company_id,
        "type": transaction.type.value,
        "amount": _money(transaction.amount),
        "accountId": transaction.bank_account_id,
        "account": transaction.account,
        "category": transaction.category,
        "color": transaction.color,
        "department": transaction.department,
        "date": _timestamp(transaction.date),
        "description": transaction.description,
        "notes": transaction.notes,
        "idempotencyKey": transaction.idempotency_key,
        "createdAt": _timestamp(transaction.created_at),
    }


def team_member_to_json(user: User) -> dict[str, Any]:
    """Public view of a colleague."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }


def user_to_json(user: User) -> dict[str, Any]:
    """Full view of the caller's own record."""
    return {
        **team_member_to_json(user),
        "companyId": user.company_id,
        "isActive": user.is_active,
        "createdAt": _timestamp(user.created_at),
    }


def project_to_json(project: Project) -> dict[str, Any]:
    return {
        "id": project.id,
        "companyId": project.company_id,
        "name": project.name,
        "description": project.description,
        "clientName": project.client_name,
        "startDate": _timestamp(project.start_date),
        "endDate": _timestamp(project.end_date),
        "projectHead": project.project_head_id,
        "employees": list(project.employee_ids),
        "totalRevenue": _optional_money(project.total_revenue),
        "cost": _optional_money(project.cost),
        "createdAt": _timestamp(project.created_at),
    }


def task_to_json(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "projectId": task.project_id,
        "name": task.name,
        "description": task.description,
        "assignedTo": task.assigned_to_id,
        "status": task.status.value,
        "completionDate": _timestamp(task.completion_date),
        "createdAt": _timestamp(task.created_at),
    }
