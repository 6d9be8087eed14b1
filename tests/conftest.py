"""Shared pytest fixtures for bizledger tests."""

import tempfile
import os
import pytest

from bizledger.auth import TokenAuthenticator
from bizledger.config import Settings
from bizledger.database.factories import create_sqlite_database
from bizledger.domain.bank_account import BankAccountService
from bizledger.domain.company import CompanyService, UserService
from bizledger.domain.ledger import LedgerService
from bizledger.domain.project import ProjectService, TaskService

JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def company_service(temp_db):
    """Create a CompanyService with a temporary database."""
    return CompanyService(temp_db)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def bank_account_service(temp_db):
    """Create a BankAccountService with a temporary database."""
    return BankAccountService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def sample_company(company_service):
    """Create a sample company for testing."""
    company_id = company_service.create_company("Acme Pvt Ltd")
    return company_service.get_company(company_id)


@pytest.fixture
def principal(user_service, sample_company):
    """Create a user attached to the sample company and return its principal."""
    user_service.create_user(
        email="owner@acme.in", name="Asha", role="admin", company_id=sample_company.id
    )
    return user_service.principal_for("owner@acme.in")


@pytest.fixture
def orphan_principal(user_service):
    """Create a user without a company and return its principal."""
    user_service.create_user(email="drifter@example.com", name="Ravi")
    return user_service.principal_for("drifter@example.com")


@pytest.fixture
def other_principal(company_service, user_service):
    """Create a user in a second company."""
    company_id = company_service.create_company("Globex Ltd")
    user_service.create_user(email="cfo@globex.in", role="admin", company_id=company_id)
    return user_service.principal_for("cfo@globex.in")


@pytest.fixture
def lead_principal(user_service, sample_company):
    """Create an employee of the sample company who heads projects."""
    user_service.create_user(email="lead@acme.in", name="Meera", company_id=sample_company.id)
    return user_service.principal_for("lead@acme.in")


@pytest.fixture
def employee_principal(user_service, sample_company):
    """Create an employee of the sample company staffed on projects."""
    user_service.create_user(email="dev@acme.in", name="Kabir", company_id=sample_company.id)
    return user_service.principal_for("dev@acme.in")


def bank_input(**overrides):
    """Return valid bank account input, with overrides applied."""
    data = {
        "bankName": "Acme Bank",
        "ifscCode": "acmb0001234",
        "accountNumber": "50100012345678",
        "accountType": "current",
        "currentAmount": 1000,
    }
    data.update(overrides)
    return data


@pytest.fixture
def bank_data():
    """Factory for valid bank account input."""
    return bank_input


@pytest.fixture
def sample_bank(bank_account_service, principal):
    """Create the "Acme Bank" account with a balance of 1000.00."""
    return bank_account_service.create_bank_account(principal, bank_input())


@pytest.fixture
def settings(temp_db):
    """Settings pointing at the temporary database."""
    return Settings(database_url=f"sqlite:///{temp_db.database_path}", jwt_secret=JWT_SECRET)


@pytest.fixture
def authenticator(temp_db, settings):
    """Create a TokenAuthenticator for the temporary database."""
    return TokenAuthenticator.from_settings(temp_db, settings)


@pytest.fixture
def app(settings, temp_db, authenticator):
    """Create the Flask application sharing the temporary database."""
    from bizledger.web import create_app

    app = create_app(settings, db=temp_db, authenticator=authenticator)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def auth_headers(authenticator, user_service, principal):
    """Authorization header for the sample company owner."""
    token = authenticator.issue_token(user_service.get_user_by_email(principal.email))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def project_service(temp_db):
    """Create a ProjectService with a temporary database."""
    return ProjectService(temp_db)


@pytest.fixture
def task_service(temp_db):
    """Create a TaskService with a temporary database."""
    return TaskService(temp_db)


@pytest.fixture
def project_data(lead_principal, employee_principal):
    """Factory for valid project input headed by lead@acme.in with dev@acme.in staffed."""

    def make(**overrides):
        data = {
            "name": "Payroll revamp",
            "description": "Move payroll in-house",
            "clientName": "Acme Retail",
            "startDate": "2024-04-01",
            "endDate": "2024-09-30",
            "projectHead": lead_principal.id,
            "employees": [employee_principal.id],
            "totalRevenue": 500000,
            "cost": 320000.50,
        }
        data.update(overrides)
        return data

    return make


@pytest.fixture
def sample_project(project_service, principal, project_data):
    """Create the "Payroll revamp" project as the company admin."""
    return project_service.create_project(principal, project_data())
