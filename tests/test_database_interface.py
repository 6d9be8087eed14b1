"""Tests for Database interface returning domain models."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from bizledger.database.factories import create_sqlite_database
from bizledger.domain import entities
from bizledger.domain.errors import CommitFailedError, ConflictError


def new_txn(**overrides):
    fields = dict(
        type=entities.TransactionType.EXPENSE,
        amount=Decimal("100.00"),
        category="Travel",
        color="#14B8A6",
        department="All",
        date=datetime(2024, 1, 1, tzinfo=UTC),
    )
    fields.update(overrides)
    return entities.NewTransaction(**fields)


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_company_returns_domain_model(self, temp_db):
        company_id = temp_db.create_company("Acme Pvt Ltd")

        company = temp_db.get_company(company_id)

        assert isinstance(company, entities.Company)
        assert company.name == "Acme Pvt Ltd"
        assert company.created_at.tzinfo is not None

    def test_get_user_returns_domain_model(self, temp_db, sample_company):
        user_id = temp_db.create_user("owner@acme.in", "Asha", "admin", sample_company.id)

        user = temp_db.get_user(user_id)

        assert isinstance(user, entities.User)
        assert user.company_id == sample_company.id
        assert user.is_active is True

    def test_get_bank_account_returns_domain_model(self, temp_db, sample_bank):
        account = temp_db.get_bank_account(sample_bank.company_id, sample_bank.id)

        assert isinstance(account, entities.BankAccount)
        assert account.current_amount == Decimal("1000.00")
        assert account.account_type is entities.AccountType.CURRENT

    def test_get_bank_account_scoped_to_company(self, temp_db, sample_bank, other_principal):
        assert temp_db.get_bank_account(other_principal.company_id, sample_bank.id) is None

    def test_missing_rows_return_none(self, temp_db, sample_company):
        assert temp_db.get_company(999) is None
        assert temp_db.get_user(999) is None
        assert temp_db.get_bank_account(sample_company.id, 999) is None
        assert temp_db.get_transaction(sample_company.id, 999) is None

    def test_transaction_round_trip(self, temp_db, sample_bank):
        txn_id = temp_db.insert_transaction(
            sample_bank.company_id, sample_bank.id, new_txn(notes="Cab")
        )

        txn = temp_db.get_transaction(sample_bank.company_id, txn_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.account == "Acme Bank"
        assert txn.amount == Decimal("100.00")
        assert txn.notes == "Cab"

    def test_list_transactions_ordered_by_date(self, temp_db, sample_bank):
        company_id = sample_bank.company_id
        temp_db.insert_transaction(company_id, sample_bank.id, new_txn(
            date=datetime(2024, 3, 1, tzinfo=UTC)))
        temp_db.insert_transaction(company_id, sample_bank.id, new_txn(
            date=datetime(2024, 1, 1, tzinfo=UTC)))

        dates = [t.date for t in temp_db.list_transactions(company_id)]

        assert dates == sorted(dates)


class TestAdjustBalance:
    """Conditional balance updates."""

    def test_credit(self, temp_db, sample_bank):
        assert temp_db.adjust_balance(sample_bank.company_id, sample_bank.id, Decimal("50.25"))

        balance = temp_db.get_bank_account(sample_bank.company_id, sample_bank.id).current_amount
        assert balance == Decimal("1050.25")

    def test_debit_to_zero(self, temp_db, sample_bank):
        assert temp_db.adjust_balance(sample_bank.company_id, sample_bank.id, Decimal("-1000"))

        balance = temp_db.get_bank_account(sample_bank.company_id, sample_bank.id).current_amount
        assert balance == Decimal("0.00")

    def test_overdraw_refused(self, temp_db, sample_bank):
        assert not temp_db.adjust_balance(
            sample_bank.company_id, sample_bank.id, Decimal("-1000.01")
        )

        balance = temp_db.get_bank_account(sample_bank.company_id, sample_bank.id).current_amount
        assert balance == Decimal("1000.00")

    def test_other_company_refused(self, temp_db, sample_bank, other_principal):
        assert not temp_db.adjust_balance(
            other_principal.company_id, sample_bank.id, Decimal("10")
        )


class TestAtomic:
    """Unit of work semantics."""

    def test_commits_all_writes(self, temp_db, sample_bank):
        with temp_db.atomic():
            temp_db.insert_transaction(sample_bank.company_id, sample_bank.id, new_txn())
            temp_db.adjust_balance(sample_bank.company_id, sample_bank.id, Decimal("-100"))

        assert len(temp_db.list_transactions(sample_bank.company_id)) == 1
        balance = temp_db.get_bank_account(sample_bank.company_id, sample_bank.id).current_amount
        assert balance == Decimal("900.00")

    def test_exception_discards_all_writes(self, temp_db, sample_bank):
        with pytest.raises(KeyError):
            with temp_db.atomic():
                temp_db.insert_transaction(sample_bank.company_id, sample_bank.id, new_txn())
                temp_db.adjust_balance(sample_bank.company_id, sample_bank.id, Decimal("-100"))
                raise KeyError("boom")

        assert temp_db.list_transactions(sample_bank.company_id) == []
        balance = temp_db.get_bank_account(sample_bank.company_id, sample_bank.id).current_amount
        assert balance == Decimal("1000.00")

    def test_storage_error_becomes_commit_failed(self, temp_db, sample_bank):
        with pytest.raises(CommitFailedError) as excinfo:
            with temp_db.atomic():
                temp_db.insert_transaction(sample_bank.company_id, sample_bank.id, new_txn())
                # Violates the positive amount check
                temp_db.insert_transaction(
                    sample_bank.company_id, sample_bank.id, new_txn(amount=Decimal("-1"))
                )

        assert isinstance(excinfo.value.__cause__, IntegrityError)
        assert temp_db.list_transactions(sample_bank.company_id) == []

    def test_nested_blocks_join_outer(self, temp_db, sample_bank):
        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                with temp_db.atomic():
                    temp_db.insert_transaction(
                        sample_bank.company_id, sample_bank.id, new_txn()
                    )
                raise RuntimeError("outer fails")

        assert temp_db.list_transactions(sample_bank.company_id) == []


def test_duplicate_idempotency_key_is_conflict(temp_db, sample_bank):
    temp_db.insert_transaction(
        sample_bank.company_id, sample_bank.id, new_txn(idempotency_key="k1")
    )

    with pytest.raises(ConflictError):
        temp_db.insert_transaction(
            sample_bank.company_id, sample_bank.id, new_txn(idempotency_key="k1")
        )

    assert len(temp_db.list_transactions(sample_bank.company_id)) == 1


def test_balance_check_constraint(temp_db, sample_company):
    with pytest.raises(IntegrityError):
        temp_db.create_bank_account(
            sample_company.id, "Acme Bank", "ACMB0001234", "1", "current", Decimal("-5")
        )


def test_sqlite_factory_uses_given_path(tmp_path, monkeypatch):
    monkeypatch.setenv("BIZLEDGER_DB_PATH", str(tmp_path / "elsewhere.db"))
    db_path = tmp_path / "ledger.db"

    db = create_sqlite_database(str(db_path))
    try:
        assert db.database_url == f"sqlite:///{db_path}"
        assert db_path.exists()
        assert not (tmp_path / "elsewhere.db").exists()
    finally:
        db.disconnect()


class TestProjects:
    """Project and task storage."""

    def make_project(self, db, company_id, head_id, employee_ids=()):
        return db.create_project(
            company_id,
            "Payroll revamp",
            "Move payroll in-house",
            "Acme Retail",
            datetime(2024, 4, 1, tzinfo=UTC),
            datetime(2024, 9, 30, tzinfo=UTC),
            head_id,
            list(employee_ids),
        )

    def test_list_projects_for_member(
        self, temp_db, principal, lead_principal, employee_principal
    ):
        company_id = principal.company_id
        headed = self.make_project(temp_db, company_id, lead_principal.id)
        staffed = self.make_project(
            temp_db, company_id, principal.id, [employee_principal.id]
        )

        assert [p.id for p in temp_db.list_projects(company_id)] == [headed, staffed]
        assert [p.id for p in temp_db.list_projects(company_id, lead_principal.id)] == [headed]
        assert [p.id for p in temp_db.list_projects(company_id, employee_principal.id)] == [
            staffed
        ]

    def test_update_task_rejects_unknown_field(self, temp_db, principal):
        project_id = self.make_project(temp_db, principal.company_id, principal.id)
        task_id = temp_db.create_task(principal.company_id, project_id, "Collect payslips")

        with pytest.raises(ValueError):
            temp_db.update_task(principal.company_id, task_id, {"project_id": 2})

        assert temp_db.get_task(principal.company_id, task_id).project_id == project_id

    def test_delete_task(self, temp_db, principal):
        project_id = self.make_project(temp_db, principal.company_id, principal.id)
        task_id = temp_db.create_task(principal.company_id, project_id, "Collect payslips")

        assert temp_db.delete_task(principal.company_id, task_id) is True
        assert temp_db.delete_task(principal.company_id, task_id) is False
        assert temp_db.list_tasks(principal.company_id, project_id) == []
