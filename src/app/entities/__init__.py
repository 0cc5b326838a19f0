"""Entities module with hybrid entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and the payloads that create or change it
- table.py: Database persistence model
- repository.py: Capability interfaces and data access implementations
"""

from .core.user import User, UserRepository, UserRepositoryInterface, UserTable

__all__ = [
    "User",
    "UserRepository",
    "UserRepositoryInterface",
    "UserTable",
]
