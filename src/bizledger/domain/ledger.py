"""Ledger domain service.

Recording a transaction writes the transaction row and moves the bank
account balance as one unit of work: either both are committed or
neither is observable.
"""

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional

from bizledger.database.base import Database
from bizledger.domain.bank_account import BankAccountService
from bizledger.domain.categories import resolve_category_color, resolve_department
from bizledger.domain.company import require_company
from bizledger.domain.entities import (
    NewTransaction,
    Principal,
    RecordedTransaction,
    Transaction,
    TransactionType,
)
from bizledger.domain.errors import (
    ConflictError,
    InsufficientFundsError,
    ValidationError,
)
from bizledger.utils.amount_parser import CENT, money_error, parse_amount
from bizledger.utils.date_parser import parse_timestamp
from bizledger.utils.id_parser import parse_id

logger = logging.getLogger(__name__)

MAX_IDEMPOTENCY_KEY_LENGTH = 255


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class LedgerService:
    """Service for recording and listing ledger transactions."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = BankAccountService(db)

    def record_transaction(
        self,
        principal: Principal,
        data: Mapping[str, Any],
        idempotency_key: Optional[str] = None,
    ) -> RecordedTransaction:
        """Record an income or expense and adjust the account balance.

        Args:
            principal: Authenticated caller
            data: Input with type, amount, account (bank name) or accountId,
                category, date and optional department, description, notes
                and idempotencyKey
            idempotency_key: Overrides data["idempotencyKey"] when given

        Returns:
            The persisted transaction with the balance after the write.
            When the idempotency key was seen before, the earlier
            transaction is returned with created=False and nothing is written.

        Raises:
            NoCompanyError: If the caller has no company
            ValidationError: If the input is malformed
            AccountNotFoundError: If the account doesn't exist in the company
            InsufficientFundsError: If an expense exceeds the balance
            CommitFailedError: If storage failed; nothing was written
        """
        company_id = require_company(principal)
        new_txn, account_ref = self._parse_input(data, idempotency_key)

        if new_txn.idempotency_key is not None:
            existing = self.db.get_transaction_by_idempotency_key(
                company_id, new_txn.idempotency_key
            )
            if existing is not None:
                return self._replay(company_id, existing)

        account = self.account_service.resolve_account(principal, account_ref)

        if (
            new_txn.type is TransactionType.EXPENSE
            and account.current_amount < new_txn.amount
        ):
            logger.warning(
                "Rejected expense of %s on bank account %s: balance %s",
                new_txn.amount,
                account.id,
                account.current_amount,
            )
            raise InsufficientFundsError(
                new_txn.amount, account.current_amount, account.bank_name
            )

        delta = new_txn.amount if new_txn.type is TransactionType.INCOME else -new_txn.amount

        try:
            with self.db.atomic():
                transaction_id = self.db.insert_transaction(company_id, account.id, new_txn)
                if not self.db.adjust_balance(company_id, account.id, delta):
                    # A concurrent debit drained the account after our check
                    latest = self.db.get_bank_account(company_id, account.id)
                    available = latest.current_amount if latest else Decimal(0)
                    logger.warning(
                        "Rejected expense of %s on bank account %s: balance %s",
                        new_txn.amount,
                        account.id,
                        available,
                    )
                    raise InsufficientFundsError(new_txn.amount, available, account.bank_name)
        except ConflictError:
            # Same idempotency key committed by a concurrent request
            existing = self.db.get_transaction_by_idempotency_key(
                company_id, new_txn.idempotency_key
            )
            if existing is None:
                raise
            return self._replay(company_id, existing)

        transaction = self.db.get_transaction(company_id, transaction_id)
        balance = self.db.get_bank_account(company_id, account.id).current_amount
        logger.info(
            "Recorded %s %s of %s on bank account %s, balance now %s",
            new_txn.type.value,
            transaction_id,
            new_txn.amount,
            account.id,
            balance,
        )
        return RecordedTransaction(transaction=transaction, balance=balance, created=True)

    def list_transactions(self, principal: Principal) -> list[Transaction]:
        """List the caller's company transactions."""
        return self.db.list_transactions(require_company(principal))

    def _replay(self, company_id: int, existing: Transaction) -> RecordedTransaction:
        logger.info(
            "Idempotency key %r matched transaction %s; nothing written",
            existing.idempotency_key,
            existing.id,
        )
        account = self.db.get_bank_account(company_id, existing.bank_account_id)
        return RecordedTransaction(
            transaction=existing, balance=account.current_amount, created=False
        )

    def _parse_input(
        self, data: Mapping[str, Any], idempotency_key: Optional[str]
    ) -> tuple[NewTransaction, str | int]:
        """Validate raw input, collecting every field error before raising."""
        fields: dict[str, str] = {}

        txn_type = None
        try:
            txn_type = TransactionType(data.get("type"))
        except ValueError:
            fields["type"] = "must be either income or expense"

        amount = None
        raw_amount = data.get("amount")
        if raw_amount is None or raw_amount == "":
            fields["amount"] = "is required"
        else:
            try:
                amount = parse_amount(raw_amount)
            except ValueError:
                fields["amount"] = "must be a positive number"
            else:
                if amount <= 0:
                    fields["amount"] = "must be a positive number"
                elif money_error(amount) is not None:
                    fields["amount"] = money_error(amount)

        account_ref: str | int | None = None
        raw_account_id = data.get("accountId")
        if raw_account_id is not None and raw_account_id != "":
            try:
                account_ref = parse_id(raw_account_id)
            except ValueError:
                fields["accountId"] = "must be a positive integer"
        else:
            account_name = _optional_text(data.get("account"))
            if account_name is None:
                fields["account"] = "is required"
            else:
                account_ref = account_name

        category = _optional_text(data.get("category"))
        if category is None:
            fields["category"] = "is required"

        txn_date = None
        raw_date = data.get("date")
        if raw_date is None or raw_date == "":
            fields["date"] = "is required"
        else:
            try:
                txn_date = parse_timestamp(raw_date)
            except ValueError:
                fields["date"] = "must be an ISO-8601 date"

        if idempotency_key is None:
            idempotency_key = data.get("idempotencyKey")
        key = _optional_text(idempotency_key)
        if key is not None and len(key) > MAX_IDEMPOTENCY_KEY_LENGTH:
            fields["idempotencyKey"] = f"must be at most {MAX_IDEMPOTENCY_KEY_LENGTH} characters"

        if fields:
            raise ValidationError("Invalid transaction", fields)

        new_txn = NewTransaction(
            type=txn_type,
            amount=amount.quantize(CENT),
            category=category,
            color=resolve_category_color(category),
            department=resolve_department(data.get("department")),
            date=txn_date,
            description=_optional_text(data.get("description")),
            notes=_optional_text(data.get("notes")),
            idempotency_key=key,
        )
        return new_txn, account_ref
