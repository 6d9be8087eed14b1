"""Bank account commands."""

import click

from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.bank_account import BankAccountService
from bizledger.domain.company import UserService
from bizledger.domain.entities import AccountType
from bizledger.domain.errors import DomainError
from bizledger.utils.amount_parser import parse_amount
from bizledger.utils.currency import format_inr


@click.group()
def bank_group():
    """Manage company bank accounts."""
    pass


@bank_group.command("create")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.option("--bank-name", required=True, help="Bank name, used to refer to the account")
@click.option("--ifsc", "ifsc_code", required=True, help="IFSC routing code")
@click.option("--account-number", required=True, help="Account number")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType]),
    default=AccountType.CURRENT.value,
    show_default=True,
    help="Account type",
)
@click.option("--opening-balance", default="0", show_default=True, help="Opening balance")
@click.pass_context
def create_bank(
    ctx,
    email: str,
    bank_name: str,
    ifsc_code: str,
    account_number: str,
    account_type: str,
    opening_balance: str,
):
    """Create a bank account for the user's company.

    Examples:
        bizledger bank create --user owner@acme.in --bank-name "Acme Bank" \\
            --ifsc hdfc0001234 --account-number 50100012345678 --opening-balance 1000
    """
    db = ctx.obj["db"]

    try:
        principal = UserService(db).principal_for(email)
        try:
            amount = parse_amount(opening_balance)
        except ValueError:
            # Let the service report it as a field error
            amount = opening_balance
        account = BankAccountService(db).create_bank_account(
            principal,
            {
                "bankName": bank_name,
                "ifscCode": ifsc_code,
                "accountNumber": account_number,
                "accountType": account_type,
                "currentAmount": amount,
            },
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created bank account '{account.bank_name}' (ID: {account.id})")
    click.echo(f"Opening balance: {format_inr(account.current_amount)}")


@bank_group.command("list")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.pass_context
def list_banks(ctx, email: str):
    """List the bank accounts of the user's company."""
    db = ctx.obj["db"]

    try:
        principal = UserService(db).principal_for(email)
        accounts = BankAccountService(db).list_bank_accounts(principal)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No bank accounts found.")
        return

    click.echo("\nBank accounts:")
    click.echo("-" * 80)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.bank_name:20s} | {acc.account_number:18s} | "
            f"{acc.account_type.value:7s} | {format_inr(acc.current_amount)}"
        )


def register_commands(cli):
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
