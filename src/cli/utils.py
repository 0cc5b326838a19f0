"""Shared utilities for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError
from rich.console import Console

from src.app.core.security import PasswordHasher
from src.app.core.services import (
    DbManageService,
    DbSessionService,
    MessageTemplate,
    UserService,
    build_notifier,
)
from src.app.entities.core.user import UserRepository
from src.app.runtime.context import get_config

# Initialize Rich console for colored output
console = Console()


@contextmanager
def user_service_scope() -> Iterator[UserService]:
    """Yield a user service bound to the configured database for one command."""
    config = get_config()
    database_service = DbSessionService(config.database)
    try:
        DbManageService(database_service).create_all()
        with database_service.session_scope() as session:
            yield UserService(
                repository=UserRepository(session),
                password_hasher=PasswordHasher(config.security.password_hashing),
                notifier=build_notifier(config.notifications),
                welcome_template=MessageTemplate.from_config(config.notifications.welcome),
            )
    finally:
        database_service.dispose()


def print_validation_error(error: ValidationError) -> None:
    """Print pydantic validation errors one field per line."""
    console.print("[red]❌ Invalid user data:[/red]")
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "data"
        console.print(f"  [red]- {location}: {item['msg']}[/red]")
