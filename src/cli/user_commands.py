"""User management CLI commands."""

import typer
from pydantic import ValidationError
from rich.prompt import Confirm
from rich.table import Table

from src.app.entities.core.user import User

from .utils import console, print_validation_error, user_service_scope

# Create the users subcommand app
users_app = typer.Typer(help="Manage users stored in the configured database")


def _user_table(title: str, users: list[User]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Email", style="blue")
    table.add_column("Created", style="magenta")

    for user in users:
        table.add_row(
            str(user.id),
            user.name,
            user.email,
            user.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    return table


@users_app.command("create")
def create_user(
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
) -> None:
    """Create a new user."""
    with user_service_scope() as service:
        try:
            user = service.create_user(
                {"name": name, "email": email, "password": password}
            )
        except ValidationError as e:
            print_validation_error(e)
            raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user {user.id} ({user.email})[/green]")


@users_app.command("list")
def list_users() -> None:
    """List all users."""
    with user_service_scope() as service:
        users = list(service.get_all_users())

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    console.print(_user_table("Users", users))
    console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("show")
def show_user(
    user_id: int = typer.Argument(..., help="ID of the user"),
) -> None:
    """Show a single user."""
    with user_service_scope() as service:
        user = service.get_user_by_id(user_id)

    if user is None:
        console.print(f"[red]❌ User {user_id} not found[/red]")
        raise typer.Exit(code=1)

    console.print(_user_table(f"User {user_id}", [user]))


@users_app.command("update")
def update_user(
    user_id: int = typer.Argument(..., help="ID of the user"),
    name: str | None = typer.Option(None, "--name", "-n", help="New display name"),
    email: str | None = typer.Option(None, "--email", "-e", help="New email address"),
    password: str | None = typer.Option(None, "--password", "-p", help="New password"),
) -> None:
    """Update a user's name, email or password."""
    changes = {
        key: value
        for key, value in {"name": name, "email": email, "password": password}.items()
        if value is not None
    }
    if not changes:
        console.print("[yellow]Nothing to update[/yellow]")
        return

    with user_service_scope() as service:
        try:
            updated = service.update_user(user_id, changes)
        except ValidationError as e:
            print_validation_error(e)
            raise typer.Exit(code=1) from e

    if not updated:
        console.print(f"[red]❌ User {user_id} not found[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✅ Updated user {user_id}[/green]")


@users_app.command("delete")
def delete_user(
    user_id: int = typer.Argument(..., help="ID of the user"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a user."""
    if not force and not Confirm.ask(f"Are you sure you want to delete user {user_id}?"):
        console.print("[yellow]Deletion cancelled[/yellow]")
        return

    with user_service_scope() as service:
        deleted = service.delete_user(user_id)

    if not deleted:
        console.print(f"[red]❌ User {user_id} not found[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✅ Deleted user {user_id}[/green]")
