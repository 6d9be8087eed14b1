"""Domain tests for the project and task services."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from bizledger.domain.entities import Project, Task, TaskStatus
from bizledger.domain.errors import (
    NoCompanyError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


@pytest.fixture
def intern_principal(user_service, sample_company):
    """A company member with no project."""
    user_service.create_user(email="intern@acme.in", company_id=sample_company.id)
    return user_service.principal_for("intern@acme.in")


@pytest.fixture
def sample_task(task_service, lead_principal, sample_project):
    return task_service.create_task(
        lead_principal, {"projectId": sample_project.id, "name": "Collect payslips"}
    )


class TestCreateProject:
    """Creating projects."""

    def test_admin_creates_project(
        self, project_service, principal, project_data, lead_principal, employee_principal
    ):
        project = project_service.create_project(principal, project_data())

        assert isinstance(project, Project)
        assert project.company_id == principal.company_id
        assert project.client_name == "Acme Retail"
        assert project.start_date == datetime(2024, 4, 1, tzinfo=UTC)
        assert project.project_head_id == lead_principal.id
        assert project.employee_ids == (employee_principal.id,)
        assert project.total_revenue == Decimal("500000.00")
        assert project.cost == Decimal("320000.50")

    def test_owner_creates_project(
        self, project_service, user_service, sample_company, project_data
    ):
        user_service.create_user("founder@acme.in", role="owner", company_id=sample_company.id)
        owner = user_service.principal_for("founder@acme.in")

        project = project_service.create_project(owner, project_data())

        assert project.name == "Payroll revamp"

    def test_employee_cannot_create(self, project_service, lead_principal, project_data):
        with pytest.raises(PermissionDeniedError):
            project_service.create_project(lead_principal, project_data())

        assert project_service.list_projects(lead_principal) == []

    def test_optional_fields(self, project_service, principal, project_data):
        data = project_data()
        del data["employees"], data["totalRevenue"], data["cost"]

        project = project_service.create_project(principal, data)

        assert project.employee_ids == ()
        assert project.total_revenue is None
        assert project.cost is None

    def test_collects_missing_fields(self, project_service, principal):
        with pytest.raises(ValidationError) as excinfo:
            project_service.create_project(principal, {})

        assert set(excinfo.value.fields) == {
            "name",
            "description",
            "clientName",
            "startDate",
            "endDate",
            "projectHead",
        }

    def test_end_before_start(self, project_service, principal, project_data):
        with pytest.raises(ValidationError) as excinfo:
            project_service.create_project(
                principal, project_data(startDate="2024-09-30", endDate="2024-04-01")
            )

        assert excinfo.value.fields == {"endDate": "must not be before startDate"}

    def test_head_from_other_company(
        self, project_service, principal, project_data, other_principal
    ):
        with pytest.raises(ValidationError) as excinfo:
            project_service.create_project(
                principal, project_data(projectHead=other_principal.id)
            )

        assert "not a member" in excinfo.value.fields["projectHead"]

    @pytest.mark.parametrize("employees", ["dev@acme.in", [999], ["²"]])
    def test_invalid_employees(self, project_service, principal, project_data, employees):
        with pytest.raises(ValidationError) as excinfo:
            project_service.create_project(principal, project_data(employees=employees))

        assert "employees" in excinfo.value.fields

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("totalRevenue", -1, "must be a non-negative number"),
            ("cost", "lots", "must be a non-negative number"),
            ("cost", 10.555, "must have at most two decimal places"),
            ("totalRevenue", 1e20, "is too large"),
        ],
    )
    def test_invalid_money(self, project_service, principal, project_data, field, value, message):
        with pytest.raises(ValidationError) as excinfo:
            project_service.create_project(principal, project_data(**{field: value}))

        assert excinfo.value.fields == {field: message}

    def test_no_company(self, project_service, orphan_principal):
        with pytest.raises(NoCompanyError):
            project_service.create_project(orphan_principal, {})


class TestProjectVisibility:
    """Who sees which projects."""

    def test_admin_sees_all(self, project_service, principal, sample_project):
        assert [p.id for p in project_service.list_projects(principal)] == [sample_project.id]

    def test_head_and_employee_see_project(
        self, project_service, sample_project, lead_principal, employee_principal
    ):
        assert [p.id for p in project_service.list_projects(lead_principal)] == [
            sample_project.id
        ]
        assert [p.id for p in project_service.list_projects(employee_principal)] == [
            sample_project.id
        ]

    def test_outsider_sees_nothing(self, project_service, sample_project, intern_principal):
        assert project_service.list_projects(intern_principal) == []
        with pytest.raises(NotFoundError):
            project_service.get_project(intern_principal, sample_project.id)

    def test_other_company_sees_nothing(self, project_service, sample_project, other_principal):
        assert project_service.list_projects(other_principal) == []
        with pytest.raises(NotFoundError):
            project_service.get_project(other_principal, sample_project.id)


class TestCreateTask:
    """Creating tasks."""

    def test_head_creates_task(self, task_service, lead_principal, sample_project):
        task = task_service.create_task(
            lead_principal,
            {"projectId": sample_project.id, "name": "Collect payslips", "description": "FY24"},
        )

        assert isinstance(task, Task)
        assert task.project_id == sample_project.id
        assert task.status is TaskStatus.TODO
        assert task.completion_date is None
        assert task.description == "FY24"

    def test_admin_creates_assigned_task(
        self, task_service, principal, sample_project, employee_principal
    ):
        task = task_service.create_task(
            principal,
            {
                "projectId": str(sample_project.id),
                "name": "Draft policy",
                "assignedTo": employee_principal.id,
            },
        )

        assert task.assigned_to_id == employee_principal.id

    def test_employee_cannot_create(self, task_service, employee_principal, sample_project):
        with pytest.raises(PermissionDeniedError):
            task_service.create_task(
                employee_principal, {"projectId": sample_project.id, "name": "Sneaky"}
            )

    def test_outsider_gets_not_found(self, task_service, intern_principal, sample_project):
        with pytest.raises(NotFoundError):
            task_service.create_task(
                intern_principal, {"projectId": sample_project.id, "name": "Sneaky"}
            )

    def test_unknown_project(self, task_service, principal, sample_project):
        with pytest.raises(NotFoundError):
            task_service.create_task(principal, {"projectId": 999, "name": "Lost"})

    def test_validation(self, task_service, principal, sample_project, other_principal):
        with pytest.raises(ValidationError) as excinfo:
            task_service.create_task(
                principal, {"projectId": "²", "assignedTo": other_principal.id}
            )

        assert set(excinfo.value.fields) == {"name", "projectId", "assignedTo"}


class TestUpdateTask:
    """Editing tasks and moving them between statuses."""

    def test_done_sets_completion_date(self, task_service, lead_principal, sample_task):
        task = task_service.update_task(lead_principal, sample_task.id, {"status": "Done"})

        assert task.status is TaskStatus.DONE
        assert task.completion_date is not None
        assert task.completion_date.tzinfo is not None

    def test_leaving_done_clears_completion_date(
        self, task_service, lead_principal, sample_task
    ):
        task_service.update_task(lead_principal, sample_task.id, {"status": "Done"})

        task = task_service.update_task(
            lead_principal, sample_task.id, {"status": "In Progress"}
        )

        assert task.status is TaskStatus.IN_PROGRESS
        assert task.completion_date is None

    def test_done_again_keeps_completion_date(self, task_service, principal, sample_task):
        first = task_service.update_task(principal, sample_task.id, {"status": "Done"})

        again = task_service.update_task(principal, sample_task.id, {"status": "Done"})

        assert again.completion_date == first.completion_date

    def test_employee_cannot_change_status(
        self, task_service, employee_principal, sample_task
    ):
        with pytest.raises(PermissionDeniedError):
            task_service.update_task(employee_principal, sample_task.id, {"status": "Done"})

        assert task_service.list_tasks(employee_principal, sample_task.project_id)[0].status is (
            TaskStatus.TODO
        )

    def test_employee_edits_details(
        self, task_service, employee_principal, sample_task
    ):
        task = task_service.update_task(
            employee_principal,
            sample_task.id,
            {"name": "Collect all payslips", "assignedTo": employee_principal.id},
        )

        assert task.name == "Collect all payslips"
        assert task.assigned_to_id == employee_principal.id
        assert task.status is TaskStatus.TODO

    def test_unassign(self, task_service, lead_principal, employee_principal, sample_task):
        task_service.update_task(
            lead_principal, sample_task.id, {"assignedTo": employee_principal.id}
        )

        task = task_service.update_task(lead_principal, sample_task.id, {"assignedTo": None})

        assert task.assigned_to_id is None

    @pytest.mark.parametrize(
        "data,field", [({"status": "Finished"}, "status"), ({"name": "  "}, "name")]
    )
    def test_invalid_update(self, task_service, lead_principal, sample_task, data, field):
        with pytest.raises(ValidationError) as excinfo:
            task_service.update_task(lead_principal, sample_task.id, data)

        assert field in excinfo.value.fields

    def test_other_company_gets_not_found(self, task_service, other_principal, sample_task):
        with pytest.raises(NotFoundError):
            task_service.update_task(other_principal, sample_task.id, {"name": "Mine"})


class TestDeleteTask:
    """Deleting tasks."""

    def test_head_deletes(self, task_service, lead_principal, sample_task):
        task_service.delete_task(lead_principal, sample_task.id)

        assert task_service.list_tasks(lead_principal, sample_task.project_id) == []

    def test_employee_cannot_delete(self, task_service, employee_principal, sample_task):
        with pytest.raises(PermissionDeniedError):
            task_service.delete_task(employee_principal, sample_task.id)

        assert len(task_service.list_tasks(employee_principal, sample_task.project_id)) == 1

    def test_missing_task(self, task_service, principal, sample_project):
        with pytest.raises(NotFoundError):
            task_service.delete_task(principal, 999)
