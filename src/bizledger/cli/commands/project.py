"""Project commands."""

import click

from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.company import UserService
from bizledger.domain.errors import DomainError
from bizledger.domain.project import ProjectService
from bizledger.utils.currency import format_inr


@click.group()
def project_group():
    """Manage client projects."""
    pass


@project_group.command("create")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.option("--name", required=True, help="Project name")
@click.option("--description", required=True, help="What the project delivers")
@click.option("--client", "client_name", required=True, help="Client name")
@click.option("--start", "start_date", required=True, help="Start date (ISO-8601)")
@click.option("--end", "end_date", required=True, help="End date (ISO-8601)")
@click.option("--head", "head_email", required=True, help="Project head (email)")
@click.option(
    "--employee", "employee_emails", multiple=True, help="Staffed employee (email, repeatable)"
)
@click.option("--revenue", help="Total revenue")
@click.option("--cost", help="Cost")
@click.pass_context
def create_project(
    ctx,
    email: str,
    name: str,
    description: str,
    client_name: str,
    start_date: str,
    end_date: str,
    head_email: str,
    employee_emails: tuple[str, ...],
    revenue: str | None,
    cost: str | None,
):
    """Create a project for the user's company.

    Examples:
        bizledger project create --user owner@acme.in --name "Payroll revamp" \\
            --description "Move payroll in-house" --client "Acme Retail" \\
            --start 2024-04-01 --end 2024-09-30 --head lead@acme.in --employee dev@acme.in
    """
    db = ctx.obj["db"]
    users = UserService(db)

    try:
        principal = users.principal_for(email)
        project = ProjectService(db).create_project(
            principal,
            {
                "name": name,
                "description": description,
                "clientName": client_name,
                "startDate": start_date,
                "endDate": end_date,
                "projectHead": users.get_user_by_email(head_email).id,
                "employees": [users.get_user_by_email(e).id for e in employee_emails],
                "totalRevenue": revenue,
                "cost": cost,
            },
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created project '{project.name}' (ID: {project.id})")


@project_group.command("list")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.pass_context
def list_projects(ctx, email: str):
    """List the projects the user may see."""
    db = ctx.obj["db"]

    try:
        principal = UserService(db).principal_for(email)
        projects = ProjectService(db).list_projects(principal)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not projects:
        click.echo("No projects found.")
        return

    click.echo("\nProjects:")
    click.echo("-" * 90)
    for p in projects:
        revenue = format_inr(p.total_revenue) if p.total_revenue is not None else "-"
        click.echo(
            f"ID: {p.id:3d} | {p.name:20s} | {p.client_name:15s} | "
            f"{p.start_date.date().isoformat()} to {p.end_date.date().isoformat()} | {revenue}"
        )


def register_commands(cli):
    """Register project commands with main CLI."""
    cli.add_command(project_group, name="project")
