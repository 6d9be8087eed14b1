"""Transaction ledger commands."""

import click

from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.company import UserService
from bizledger.domain.entities import TransactionType
from bizledger.domain.errors import CommitFailedError, DomainError
from bizledger.domain.ledger import LedgerService
from bizledger.utils.currency import format_inr
from bizledger.utils.id_parser import parse_id


@click.group()
def transaction_group():
    """Record and list transactions."""
    pass


@transaction_group.command("record")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    required=True,
    help="Income credits the account, expense debits it",
)
@click.option("--amount", required=True, help="Positive amount")
@click.option("--account", required=True, help="Bank name or account ID")
@click.option("--category", required=True, help="Category, e.g. Travel or Revenue")
@click.option("--date", "txn_date", required=True, help="ISO-8601 date, e.g. 2024-01-15")
@click.option("--department", help="Department (defaults to All)")
@click.option("--description", help="Description")
@click.option("--notes", help="Notes")
@click.option("--idempotency-key", help="Reuse to make retries safe")
@click.pass_context
def record_transaction(
    ctx,
    email: str,
    txn_type: str,
    amount: str,
    account: str,
    category: str,
    txn_date: str,
    department: str | None,
    description: str | None,
    notes: str | None,
    idempotency_key: str | None,
):
    """Record a transaction and adjust the bank account balance.

    ACCOUNT can be a bank name or a bank account ID.

    Examples:
        bizledger transaction record --user owner@acme.in --type expense \\
            --amount 400 --account "Acme Bank" --category Travel --date 2024-01-01
    """
    db = ctx.obj["db"]

    data = {
        "type": txn_type,
        "amount": amount,
        "category": category,
        "date": txn_date,
        "department": department,
        "description": description,
        "notes": notes,
    }
    try:
        data["accountId"] = parse_id(account)
    except ValueError:
        data["account"] = account

    try:
        principal = UserService(db).principal_for(email)
        result = LedgerService(db).record_transaction(
            principal, data, idempotency_key=idempotency_key
        )
    except (DomainError, CommitFailedError) as e:
        handle_domain_error(ctx, e)

    txn = result.transaction
    if result.created:
        click.echo(f"Created transaction {txn.id} ({txn.type.value} {format_inr(txn.amount)})")
    else:
        click.echo(f"Transaction {txn.id} already recorded; nothing changed")
    click.echo(f"{txn.account} balance: {format_inr(result.balance)}")


@transaction_group.command("list")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.pass_context
def list_transactions(ctx, email: str):
    """List the transactions of the user's company."""
    db = ctx.obj["db"]

    try:
        principal = UserService(db).principal_for(email)
        transactions = LedgerService(db).list_transactions(principal)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 90)
    for txn in transactions:
        sign = "+" if txn.type is TransactionType.INCOME else "-"
        click.echo(
            f"ID: {txn.id:4d} | {txn.date.date().isoformat()} | {txn.account:20s} | "
            f"{txn.category:15s} | {txn.department:10s} | {sign}{format_inr(txn.amount)}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
