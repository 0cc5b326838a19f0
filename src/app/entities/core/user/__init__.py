"""Entity package: User."""

from .entity import User, UserCreate, UserUpdate
from .repository import (
    InMemoryUserRepository,
    UserReader,
    UserRepository,
    UserRepositoryInterface,
    UserWriter,
)
from .table import UserTable

__all__ = [
    "InMemoryUserRepository",
    "User",
    "UserCreate",
    "UserReader",
    "UserRepository",
    "UserRepositoryInterface",
    "UserTable",
    "UserUpdate",
    "UserWriter",
]
