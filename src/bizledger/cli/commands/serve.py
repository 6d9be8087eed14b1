"""HTTP server command."""

import click

from bizledger.config import ConfigError
from bizledger.web import create_app


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=5000, show_default=True, type=int, help="Port to listen on")
@click.option("--debug", is_flag=True, help="Enable the Flask debugger and reloader")
@click.pass_context
def serve(ctx, host: str, port: int, debug: bool):
    """Run the HTTP API with the development server.

    Use a WSGI server such as gunicorn with bizledger.wsgi:app in production.
    """
    try:
        app = create_app(ctx.obj["settings"], db=ctx.obj["db"])
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    app.run(host=host, port=port, debug=debug)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
