"""Bank account domain service."""

import logging
from decimal import Decimal
from typing import Any, Mapping

from bizledger.database.base import Database
from bizledger.domain.company import require_company
from bizledger.domain.entities import AccountType, BankAccount, Principal
from bizledger.domain.errors import (
    AccountNotFoundError,
    DuplicateAccountError,
    ValidationError,
    account_not_found,
    duplicate_account_number,
)
from bizledger.utils.amount_parser import money_error, parse_amount

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("bankName", "ifscCode", "accountNumber", "accountType", "currentAmount")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value).strip()


class BankAccountService:
    """Service for managing company bank accounts."""

    def __init__(self, db: Database):
        """Initialize bank account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_bank_account(self, principal: Principal, data: Mapping[str, Any]) -> BankAccount:
        """Create a new bank account for the caller's company.

        Args:
            principal: Authenticated caller
            data: Input with bankName, ifscCode, accountNumber, accountType
                and currentAmount (opening balance)

        Returns:
            Created bank account

        Raises:
            NoCompanyError: If the caller has no company
            ValidationError: If a field is missing or malformed
            DuplicateAccountError: If the account number is already registered
        """
        company_id = require_company(principal)

        fields: dict[str, str] = {}
        for key in REQUIRED_FIELDS:
            if key == "currentAmount":
                if data.get(key) is None:
                    fields[key] = "is required"
            elif not _text(data, key):
                fields[key] = "is required"

        account_type = _text(data, "accountType")
        if "accountType" not in fields and account_type not in {t.value for t in AccountType}:
            fields["accountType"] = "must be either saving or current"

        opening_balance = Decimal(0)
        if "currentAmount" not in fields:
            raw = data.get("currentAmount")
            # Opening balance must be a number, not a numeric-looking string
            if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
                fields["currentAmount"] = "must be a non-negative number"
            else:
                try:
                    opening_balance = parse_amount(raw)
                except ValueError:
                    fields["currentAmount"] = "must be a non-negative number"
                else:
                    if opening_balance < 0:
                        fields["currentAmount"] = "must be a non-negative number"
                    elif money_error(opening_balance) is not None:
                        fields["currentAmount"] = money_error(opening_balance)

        if fields:
            raise ValidationError("Invalid bank account", fields)

        account_number = _text(data, "accountNumber")
        if self.db.get_bank_account_by_number(company_id, account_number) is not None:
            raise DuplicateAccountError(duplicate_account_number(account_number))

        account_id = self.db.create_bank_account(
            company_id=company_id,
            bank_name=_text(data, "bankName"),
            ifsc_code=_text(data, "ifscCode").upper(),
            account_number=account_number,
            account_type=account_type,
            current_amount=opening_balance,
        )
        logger.info("Created bank account %s for company %s", account_id, company_id)
        return self.get_bank_account(principal, account_id)

    def get_bank_account(self, principal: Principal, account_id: int) -> BankAccount:
        """Get one of the caller's company bank accounts.

        Raises:
            AccountNotFoundError: If the account doesn't exist in the company
        """
        account = self.db.get_bank_account(require_company(principal), account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def list_bank_accounts(self, principal: Principal) -> list[BankAccount]:
        """List the caller's company bank accounts."""
        return self.db.list_bank_accounts(require_company(principal))

    def resolve_account(self, principal: Principal, account: str | int) -> BankAccount:
        """Resolve a bank account by ID or bank name within the caller's company.

        Args:
            principal: Authenticated caller
            account: Account ID (int) or bank name (str)

        Raises:
            AccountNotFoundError: If no account matches
            ValidationError: If a bank name matches more than one account
        """
        company_id = require_company(principal)

        if isinstance(account, int) and not isinstance(account, bool):
            return self.get_bank_account(principal, account)

        name = str(account).strip()
        matches = self.db.find_bank_accounts_by_name(company_id, name)
        if not matches:
            raise AccountNotFoundError(account_not_found(name))
        if len(matches) > 1:
            raise ValidationError(
                f"More than one bank account is named '{name}'",
                {"account": "is ambiguous; send accountId instead"},
            )
        return matches[0]
