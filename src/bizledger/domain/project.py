"""Project and task domain services.

Admins and owners see every project of their company. Everyone else sees
the projects they head or are staffed on. Tasks live inside a project and
are managed by admins, owners and the project head.
"""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Any, Mapping, Optional

from bizledger.database.base import Database
from bizledger.domain.company import is_manager, require_company
from bizledger.domain.entities import Principal, Project, Task, TaskStatus
from bizledger.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    project_not_found,
    task_not_found,
)
from bizledger.utils.amount_parser import money_error, parse_amount
from bizledger.utils.date_parser import parse_timestamp
from bizledger.utils.id_parser import parse_id

logger = logging.getLogger(__name__)

PROJECT_TEXT_FIELDS = ("name", "description", "clientName")
PROJECT_MONEY_FIELDS = ("totalRevenue", "cost")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def can_view_project(principal: Principal, project: Project) -> bool:
    """Whether the principal may see the project and its tasks."""
    return (
        is_manager(principal)
        or principal.id == project.project_head_id
        or principal.id in project.employee_ids
    )


def can_manage_tasks(principal: Principal, project: Project) -> bool:
    """Whether the principal may create, delete or move tasks of the project."""
    return is_manager(principal) or principal.id == project.project_head_id


class ProjectService:
    """Service for managing client projects."""

    def __init__(self, db: Database):
        """Initialize project service.

        Args:
            db: Database instance
        """
        self.db = db

    def company_member(self, company_id: int, value: Any) -> int:
        """Resolve a user ID that must belong to the company.

        Raises:
            ValueError: With a field message if the ID is malformed or the
                user is not a member of the company
        """
        try:
            user_id = parse_id(value)
        except ValueError:
            raise ValueError("must be a user ID") from None
        user = self.db.get_user(user_id)
        if user is None or user.company_id != company_id:
            raise ValueError(f"user {user_id} is not a member of the company")
        return user_id

    def create_project(self, principal: Principal, data: Mapping[str, Any]) -> Project:
        """Create a project for the caller's company.

        Args:
            principal: Authenticated caller, must be an admin or owner
            data: Input with name, description, clientName, startDate,
                endDate and projectHead (user ID); optionally employees
                (list of user IDs), totalRevenue and cost

        Returns:
            Created project

        Raises:
            NoCompanyError: If the caller has no company
            PermissionDeniedError: If the caller is not an admin or owner
            ValidationError: If a field is missing or malformed
        """
        company_id = require_company(principal)
        if not is_manager(principal):
            raise PermissionDeniedError("Only admins and owners can create projects")

        fields: dict[str, str] = {}
        for key in PROJECT_TEXT_FIELDS:
            if _optional_text(data.get(key)) is None:
                fields[key] = "is required"

        dates: dict[str, datetime] = {}
        for key in ("startDate", "endDate"):
            raw = data.get(key)
            if _is_blank(raw):
                fields[key] = "is required"
                continue
            try:
                dates[key] = parse_timestamp(raw)
            except ValueError:
                fields[key] = "must be an ISO-8601 date"
        if len(dates) == 2 and dates["endDate"] < dates["startDate"]:
            fields["endDate"] = "must not be before startDate"

        head_id = None
        if _is_blank(data.get("projectHead")):
            fields["projectHead"] = "is required"
        else:
            try:
                head_id = self.company_member(company_id, data["projectHead"])
            except ValueError as e:
                fields["projectHead"] = str(e)

        employee_ids: list[int] = []
        raw_employees = data.get("employees") or []
        if not isinstance(raw_employees, list):
            fields["employees"] = "must be a list of user IDs"
        else:
            try:
                employee_ids = sorted(
                    {self.company_member(company_id, value) for value in raw_employees}
                )
            except ValueError as e:
                fields["employees"] = str(e)

        money: dict[str, Optional[Decimal]] = {}
        for key in PROJECT_MONEY_FIELDS:
            money[key] = None
            raw = data.get(key)
            if _is_blank(raw):
                continue
            try:
                amount = parse_amount(raw)
            except ValueError:
                fields[key] = "must be a non-negative number"
                continue
            if amount < 0:
                fields[key] = "must be a non-negative number"
            elif money_error(amount) is not None:
                fields[key] = money_error(amount)
            else:
                money[key] = amount

        if fields:
            raise ValidationError("Invalid project", fields)

        project_id = self.db.create_project(
            company_id=company_id,
            name=_optional_text(data["name"]),
            description=_optional_text(data["description"]),
            client_name=_optional_text(data["clientName"]),
            start_date=dates["startDate"],
            end_date=dates["endDate"],
            project_head_id=head_id,
            employee_ids=employee_ids,
            total_revenue=money["totalRevenue"],
            cost=money["cost"],
        )
        logger.info("Created project %s for company %s", project_id, company_id)
        return self.db.get_project(company_id, project_id)

    def get_project(self, principal: Principal, project_id: int) -> Project:
        """Get a project the caller may see.

        Projects the caller does not work on are reported as missing.

        Raises:
            NotFoundError: If the project doesn't exist or is not visible
        """
        project = self.db.get_project(require_company(principal), project_id)
        if project is None or not can_view_project(principal, project):
            raise NotFoundError(project_not_found(project_id))
        return project

    def list_projects(self, principal: Principal) -> list[Project]:
        """List the projects visible to the caller."""
        company_id = require_company(principal)
        if is_manager(principal):
            return self.db.list_projects(company_id)
        return self.db.list_projects(company_id, member_id=principal.id)


class TaskService:
    """Service for managing project tasks."""

    def __init__(self, db: Database):
        """Initialize task service.

        Args:
            db: Database instance
        """
        self.db = db
        self.project_service = ProjectService(db)

    def _assignee(self, company_id: int, value: Any, fields: dict[str, str]) -> Optional[int]:
        if _is_blank(value):
            return None
        try:
            return self.project_service.company_member(company_id, value)
        except ValueError as e:
            fields["assignedTo"] = str(e)
            return None

    def _visible_task(self, principal: Principal, task_id: int) -> tuple[Task, Project]:
        task = self.db.get_task(require_company(principal), task_id)
        if task is None:
            raise NotFoundError(task_not_found(task_id))
        try:
            project = self.project_service.get_project(principal, task.project_id)
        except NotFoundError:
            raise NotFoundError(task_not_found(task_id)) from None
        return task, project

    def create_task(self, principal: Principal, data: Mapping[str, Any]) -> Task:
        """Create a task in one of the caller's projects.

        Args:
            principal: Authenticated caller
            data: Input with name and projectId; optionally description and
                assignedTo (user ID)

        Returns:
            Created task, in the To Do state

        Raises:
            ValidationError: If a field is missing or malformed
            NotFoundError: If the project doesn't exist or is not visible
            PermissionDeniedError: If the caller cannot manage the project's tasks
        """
        company_id = require_company(principal)

        fields: dict[str, str] = {}
        name = _optional_text(data.get("name"))
        if name is None:
            fields["name"] = "is required"

        project_id = None
        if _is_blank(data.get("projectId")):
            fields["projectId"] = "is required"
        else:
            try:
                project_id = parse_id(data["projectId"])
            except ValueError:
                fields["projectId"] = "must be a positive integer"

        assigned_to_id = self._assignee(company_id, data.get("assignedTo"), fields)

        if fields:
            raise ValidationError("Invalid task", fields)

        project = self.project_service.get_project(principal, project_id)
        if not can_manage_tasks(principal, project):
            raise PermissionDeniedError(
                "Only admins, owners and the project head can create tasks"
            )

        task_id = self.db.create_task(
            company_id=company_id,
            project_id=project.id,
            name=name,
            description=_optional_text(data.get("description")),
            assigned_to_id=assigned_to_id,
        )
        logger.info("Created task %s in project %s", task_id, project.id)
        return self.db.get_task(company_id, task_id)

    def update_task(self, principal: Principal, task_id: int, data: Mapping[str, Any]) -> Task:
        """Update a task.

        Anyone who can see the project may edit name, description and
        assignedTo. Changing status is limited to admins, owners and the
        project head. Moving to Done stamps completion_date; moving away
        from Done clears it.

        Raises:
            NotFoundError: If the task doesn't exist or is not visible
            ValidationError: If a field is malformed
            PermissionDeniedError: If the caller may not change the status
        """
        task, project = self._visible_task(principal, task_id)

        fields: dict[str, str] = {}
        changes: dict[str, Any] = {}
        if "name" in data:
            name = _optional_text(data["name"])
            if name is None:
                fields["name"] = "must not be blank"
            else:
                changes["name"] = name
        if "description" in data:
            changes["description"] = _optional_text(data["description"])
        if "assignedTo" in data:
            changes["assigned_to_id"] = self._assignee(
                task.company_id, data["assignedTo"], fields
            )

        status = None
        if not _is_blank(data.get("status")):
            try:
                status = TaskStatus(data["status"])
            except ValueError:
                allowed = ", ".join(s.value for s in TaskStatus)
                fields["status"] = f"must be one of {allowed}"

        if fields:
            raise ValidationError("Invalid task", fields)

        if status is not None:
            if not can_manage_tasks(principal, project):
                raise PermissionDeniedError(
                    "Only admins, owners and the project head can change task status"
                )
            changes["status"] = status.value
            if status is not TaskStatus.DONE:
                changes["completion_date"] = None
            elif task.status is not TaskStatus.DONE:
                changes["completion_date"] = datetime.now(UTC)

        if changes:
            self.db.update_task(task.company_id, task.id, changes)
            logger.info("Updated task %s: %s", task.id, ", ".join(sorted(changes)))
        return self.db.get_task(task.company_id, task.id)

    def delete_task(self, principal: Principal, task_id: int) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If the task doesn't exist or is not visible
            PermissionDeniedError: If the caller cannot manage the project's tasks
        """
        task, project = self._visible_task(principal, task_id)
        if not can_manage_tasks(principal, project):
            raise PermissionDeniedError(
                "Only admins, owners and the project head can delete tasks"
            )
        self.db.delete_task(task.company_id, task.id)
        logger.info("Deleted task %s from project %s", task.id, project.id)

    def list_tasks(self, principal: Principal, project_id: int) -> list[Task]:
        """List the tasks of a project the caller may see."""
        project = self.project_service.get_project(principal, project_id)
        return self.db.list_tasks(project.company_id, project.id)
