"""Main CLI application module."""

import typer

from src.app.runtime.context import get_config
from src.app.runtime.init_db import init_db as create_tables

from .user_commands import users_app
from .utils import console

# Create the main CLI application
app = typer.Typer(
    help="🛠️  Users API CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

db_app = typer.Typer(help="Database schema commands")

# Register command groups
app.add_typer(users_app, name="users")
app.add_typer(db_app, name="db")


@db_app.command("init")
def init_db() -> None:
    """Create all database tables."""
    create_tables()
    console.print("[green]✅ Database initialized[/green]")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    app_config = get_config().app
    uvicorn.run(
        "src.app.api.http.app:app",
        host=host or app_config.host,
        port=port or app_config.port,
        reload=reload,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
