"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.app.api.http.app_data import ApplicationDependencies
from src.app.core.services import UserService
from src.app.entities.core.user import UserRepository, UserRepositoryInterface


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide dependency container."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a database session for the duration of one request."""
    with app_deps.database_service.session_scope() as session:
        yield session


def get_user_repository(
    session: Session = Depends(get_db_session),
) -> UserRepositoryInterface:
    """Get the user repository bound to the request's session."""
    return UserRepository(session)


def get_user_service(
    repository: UserRepositoryInterface = Depends(get_user_repository),
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> UserService:
    """Get the user service wired to the request's repository."""
    return UserService(
        repository=repository,
        password_hasher=app_deps.password_hasher,
        notifier=app_deps.notifier,
        welcome_template=app_deps.welcome_template,
    )
