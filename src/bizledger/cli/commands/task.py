"""Task commands."""

import click

from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.company import UserService
from bizledger.domain.entities import TaskStatus
from bizledger.domain.errors import DomainError
from bizledger.domain.project import TaskService


@click.group()
def task_group():
    """Manage project tasks."""
    pass


@task_group.command("create")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.option("--project", "project_id", type=int, required=True, help="Project ID")
@click.option("--name", required=True, help="Task name")
@click.option("--description", help="Task description")
@click.option("--assign", "assignee_email", help="Assign to this user (email)")
@click.pass_context
def create_task(
    ctx,
    email: str,
    project_id: int,
    name: str,
    description: str | None,
    assignee_email: str | None,
):
    """Create a task in a project."""
    db = ctx.obj["db"]
    users = UserService(db)

    try:
        principal = users.principal_for(email)
        data = {"projectId": project_id, "name": name, "description": description}
        if assignee_email:
            data["assignedTo"] = users.get_user_by_email(assignee_email).id
        task = TaskService(db).create_task(principal, data)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created task '{task.name}' (ID: {task.id})")


@task_group.command("status")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.argument("task_id", type=int)
@click.argument("status", type=click.Choice([s.value for s in TaskStatus]))
@click.pass_context
def set_status(ctx, email: str, task_id: int, status: str):
    """Move a task to another status.

    Examples:
        bizledger task status --user lead@acme.in 3 "In Progress"
    """
    db = ctx.obj["db"]

    try:
        principal = UserService(db).principal_for(email)
        task = TaskService(db).update_task(principal, task_id, {"status": status})
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Task {task.id} is now {task.status.value}")


@task_group.command("delete")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.argument("task_id", type=int)
@click.pass_context
def delete_task(ctx, email: str, task_id: int):
    db = ctx.obj["db"]

    try:
        principal = UserService(db).principal_for(email)
        TaskService(db).delete_task(principal, task_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted task {task_id}")


@task_group.command("list")
@click.option("--user", "email", required=True, help="Act as this user (email)")
@click.option("--project", "project_id", type=int, required=True, help="Project ID")
@click.pass_context
def list_tasks(ctx, email: str, project_id: int):
    """List the tasks of a project."""
    db = ctx.obj["db"]

    try:
        principal = UserService(db).principal_for(email)
        tasks = TaskService(db).list_tasks(principal, project_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not tasks:
        click.echo("No tasks found.")
        return

    click.echo("\nTasks:")
    click.echo("-" * 80)
    for t in tasks:
        done = t.completion_date.date().isoformat() if t.completion_date else "-"
        click.echo(f"ID: {t.id:3d} | {t.status.value:11s} | {t.name:30s} | {done}")


def register_commands(cli):
    """Register task commands with main CLI."""
    cli.add_command(task_group, name="task")
