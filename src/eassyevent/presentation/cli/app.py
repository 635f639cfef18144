"""EassyEvent CLI application using Typer.

This module provides command-line utilities for the EassyEvent backend:
secret generation for deployment configuration and a server launcher.
"""

import secrets
from typing import Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="eassyevent",
    help="EassyEvent - venue booking backend CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for EassyEvent configuration.

    Generates three required secrets:
    - JWT_SECRET_KEY: Secret for signing access tokens
    - JWT_REFRESH_SECRET_KEY: Separate secret for signing refresh tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]EassyEvent Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    jwt_refresh_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_REFRESH_SECRET_KEY[/cyan]={jwt_refresh_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    from eassyevent_config.settings import get_settings

    settings = get_settings()
    uvicorn.run(
        "eassyevent.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
