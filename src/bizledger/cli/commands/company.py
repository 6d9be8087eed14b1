"""Company management commands."""

import click

from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.company import CompanyService
from bizledger.domain.errors import DomainError


@click.group()
def company_group():
    """Manage companies."""
    pass


@company_group.command("create")
@click.argument("name", metavar="COMPANY_NAME")
@click.pass_context
def create_company(ctx, name: str):
    """Create a new company.

    Examples:
        bizledger company create "Acme Pvt Ltd"
    """
    service = CompanyService(ctx.obj["db"])

    try:
        company_id = service.create_company(name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created company '{name.strip()}' (ID: {company_id})")


@company_group.command("list")
@click.pass_context
def list_companies(ctx):
    """List all companies."""
    service = CompanyService(ctx.obj["db"])

    companies = service.list_companies()
    if not companies:
        click.echo("No companies found.")
        return

    click.echo("\nCompanies:")
    click.echo("-" * 60)
    for company in companies:
        click.echo(f"ID: {company.id:3d} | {company.name}")


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
