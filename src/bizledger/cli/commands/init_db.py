"""Database initialization command."""

import click


@click.command("init-db")
@click.pass_context
def init_db(ctx):
    """Create the database tables if they do not exist yet."""
    db = ctx.obj["db"]
    db.initialize_schema()
    click.echo(f"Database ready at {ctx.obj['settings'].database_url}")


def register_commands(cli):
    """Register init-db command with main CLI."""
    cli.add_command(init_db)
