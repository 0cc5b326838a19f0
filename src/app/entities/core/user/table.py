"""User database table model."""

from src.app.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Row layout of the ``users`` table. ``password`` holds the hash."""

    __tablename__ = "users"

    name: str
    email: str
    password: str
