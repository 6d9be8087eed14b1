"""User management commands."""

import click

from bizledger.auth import TokenAuthenticator
from bizledger.cli.error_handling import handle_domain_error
from bizledger.config import ConfigError
from bizledger.domain.company import CompanyService, UserService, DEFAULT_ROLE
from bizledger.domain.errors import DomainError


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email", metavar="EMAIL")
@click.option("--name", help="Display name")
@click.option("--role", default=DEFAULT_ROLE, show_default=True, help="Role name")
@click.option("--company", "company", help="Company name or ID to attach the user to")
@click.pass_context
def create_user(ctx, email: str, name: str | None, role: str, company: str | None):
    """Create a new user.

    Examples:
        bizledger user create owner@acme.in --name "Asha" --role admin --company "Acme"
        bizledger user create new.hire@acme.in
    """
    db = ctx.obj["db"]

    try:
        company_id = None
        if company is not None:
            company_id = CompanyService(db).resolve_company(company).id
        user_id = UserService(db).create_user(
            email=email, name=name, role=role, company_id=company_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created user '{email.strip().lower()}' (ID: {user_id})")
    if company_id is None:
        click.echo("User is not attached to a company yet")


@user_group.command("assign")
@click.argument("email", metavar="EMAIL")
@click.argument("company", metavar="COMPANY")
@click.pass_context
def assign_user(ctx, email: str, company: str):
    """Attach a user to a company.

    COMPANY can be a company name or ID.
    """
    db = ctx.obj["db"]
    users = UserService(db)

    try:
        target = CompanyService(db).resolve_company(company)
        user = users.get_user_by_email(email)
        users.assign_company(user.id, target.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Assigned '{user.email}' to company '{target.name}'")


@user_group.command("token")
@click.argument("email", metavar="EMAIL")
@click.pass_context
def issue_token(ctx, email: str):
    """Print a signed API token for a user.

    Requires BIZLEDGER_JWT_SECRET.
    """
    db = ctx.obj["db"]

    try:
        user = UserService(db).get_user_by_email(email)
        authenticator = TokenAuthenticator.from_settings(db, ctx.obj["settings"])
    except DomainError as e:
        handle_domain_error(ctx, e)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(authenticator.issue_token(user))


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
