"""Bank account endpoints."""

from flask import Blueprint, jsonify

from bizledger.domain.bank_account import BankAccountService
from bizledger.web import get_services
from bizledger.web.auth import current_principal, login_required
from bizledger.web.payload import json_body
from bizledger.web.serializers import bank_account_to_json

banks_bp = Blueprint("banks", __name__, url_prefix="/banks")


def _service() -> BankAccountService:
    return BankAccountService(get_services().db)


@banks_bp.get("")
@login_required
def list_banks():
    """Fetch all bank accounts of the caller's company."""
    accounts = _service().list_bank_accounts(current_principal())
    return jsonify([bank_account_to_json(acc) for acc in accounts])


@banks_bp.post("")
@login_required
def create_bank():
    """Create a bank account for the caller's company."""
    account = _service().create_bank_account(current_principal(), json_body())
    return jsonify(bank_account_to_json(account)), 201


@banks_bp.get("/<int:account_id>")
@login_required
def get_bank(account_id: int):
    account = _service().get_bank_account(current_principal(), account_id)
    return jsonify(bank_account_to_json(account))
