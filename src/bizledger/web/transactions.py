"""Transaction endpoints."""

from flask import Blueprint, jsonify, request

from bizledger.domain.ledger import LedgerService
from bizledger.web import get_services
from bizledger.web.auth import current_principal, login_required
from bizledger.web.payload import json_body
from bizledger.web.serializers import transaction_to_json

transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")

IDEMPOTENCY_HEADER = "Idempotency-Key"


def _service() -> LedgerService:
    return LedgerService(get_services().db)


@transactions_bp.get("")
@login_required
def list_transactions():
    """Fetch all transactions of the caller's company."""
    transactions = _service().list_transactions(current_principal())
    return jsonify([transaction_to_json(txn) for txn in transactions])


@transactions_bp.post("")
@login_required
def create_transaction():
    """Record a transaction and adjust the bank account balance.

    Replaying a request with the same Idempotency-Key returns the original
    transaction with 200 instead of 201.
    """
    result = _service().record_transaction(
        current_principal(),
        json_body(),
        idempotency_key=request.headers.get(IDEMPOTENCY_HEADER),
    )
    body = transaction_to_json(result.transaction)
    body["accountBalance"] = float(result.balance)
    return jsonify(body), 201 if result.created else 200
