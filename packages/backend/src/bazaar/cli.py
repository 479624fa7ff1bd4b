"""Bazaar command line.

Usage:
    bazaar serve                          # Run the API with uvicorn
    bazaar serve --reload --port 9000
    bazaar issue-token <user-id> --role seller   # Mint a token for local testing
"""

import click

from bazaar.config import settings


@click.group()
def cli():
    """Bazaar marketplace backend."""


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", type=int, default=None, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host, port, reload):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "bazaar.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload or settings.debug,
    )


@cli.command("issue-token")
@click.argument("user_id")
@click.option(
    "--role",
    type=click.Choice(["standard", "seller"]),
    default="standard",
    show_default=True,
)
def issue_token_cmd(user_id, role):
    """Print a signed identity token for USER_ID."""
    from bazaar.auth.tokens import Role, issue_token

    click.echo(issue_token(user_id, Role(role)))


def main():
    cli()


if __name__ == "__main__":
    main()
