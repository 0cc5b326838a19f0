"""User repository capability sets and implementations.

Reading and writing are separate capability sets so a store that can only
serve one of them implements just that interface. ``UserRepositoryInterface``
is the full set the user service depends on.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlmodel import Session, select

from src.app.entities.core._base import utc_now
from src.app.entities.core.user.entity import User, UserCreate, UserUpdate
from src.app.entities.core.user.table import UserTable


class UserReader(ABC):
    """Read capabilities over stored users."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return the user with ``user_id``, or None when it does not exist."""
        pass

    @abstractmethod
    def get_all(self) -> Iterator[User]:
        """Iterate over a snapshot of all users taken at call time.

        The iterator is single-pass; call again for a fresh snapshot.
        """
        pass


class UserWriter(ABC):
    """Write capabilities over stored users."""

    @abstractmethod
    def create(self, data: Mapping[str, Any]) -> User:
        """Store a new user and return it with its assigned identifier.

        Raises:
            pydantic.ValidationError: If required attributes are missing or invalid
        """
        pass

    @abstractmethod
    def update(self, user_id: int, data: Mapping[str, Any]) -> bool:
        """Apply ``data`` to an existing user.

        Returns:
            False if no user has ``user_id``; nothing is changed in that case
        """
        pass

    @abstractmethod
    def delete(self, user_id: int) -> bool:
        """Remove a user. Returns False if no user has ``user_id``."""
        pass


class UserRepositoryInterface(UserReader, UserWriter):
    """Complete persistence capability set for users."""


class UserRepository(UserRepositoryInterface):
    """Data-access layer for users backed by a SQLModel session.

    Every mutation runs in its own transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error(
                "User repository transaction failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise

    @staticmethod
    def _to_entity(row: UserTable) -> User:
        return User.model_validate(row, from_attributes=True)

    def create(self, data: Mapping[str, Any]) -> User:
        payload = UserCreate.model_validate(dict(data))
        row = UserTable(**payload.model_dump())
        with self._transaction():
            self._session.add(row)
        self._session.refresh(row)
        logger.debug("Stored user {}", row.id)
        return self._to_entity(row)

    def get_by_id(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_all(self) -> Iterator[User]:
        statement = select(UserTable).order_by(UserTable.id)
        rows = self._session.exec(statement).all()
        return iter([self._to_entity(row) for row in rows])

    def update(self, user_id: int, data: Mapping[str, Any]) -> bool:
        changes = UserUpdate.model_validate(dict(data)).changes()
        row = self._session.get(UserTable, user_id)
        if row is None:
            return False
        if not changes:
            return True

        with self._transaction():
            for field, value in changes.items():
                setattr(row, field, value)
            row.updated_at = utc_now()
            self._session.add(row)
        logger.debug("Updated user {} fields {}", user_id, sorted(changes))
        return True

    def delete(self, user_id: int) -> bool:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return False
        with self._transaction():
            self._session.delete(row)
        logger.debug("Deleted user {}", user_id)
        return True


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user store with sequential identifiers starting at 1."""

    def __init__(self) -> None:
        self._data: dict[int, User] = {}
        self._ids = itertools.count(1)

    def create(self, data: Mapping[str, Any]) -> User:
        payload = UserCreate.model_validate(dict(data))
        user = User(id=next(self._ids), **payload.model_dump())
        self._data[user.id] = user
        return user.model_copy()

    def get_by_id(self, user_id: int) -> User | None:
        user = self._data.get(user_id)
        if user is None:
            return None
        return user.model_copy()

    def get_all(self) -> Iterator[User]:
        return iter([user.model_copy() for user in self._data.values()])

    def update(self, user_id: int, data: Mapping[str, Any]) -> bool:
        changes = UserUpdate.model_validate(dict(data)).changes()
        if user_id not in self._data:
            return False
        if changes:
            self._data[user_id] = self._data[user_id].model_copy(
                update={**changes, "updated_at": utc_now()}
            )
        return True

    def delete(self, user_id: int) -> bool:
        return self._data.pop(user_id, None) is not None
