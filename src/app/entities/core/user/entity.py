"""User domain entity and the payloads used to create and change it."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.app.entities.core._base import Entity


class User(Entity):
    """User entity representing a person in the system.

    ``password`` always holds the hashed secret. It is excluded from
    serialization and ``repr`` so the hash never leaves the service boundary.
    """

    name: str = Field(description="User's display name")
    email: str = Field(description="User's email address")
    password: str = Field(exclude=True, repr=False, description="Password hash")

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
            and self.password == other.password
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.email,
            self.password,
        ))


class UserCreate(BaseModel):
    """Attributes required to create a user.

    ``password`` is the raw input. It is replaced by its hash before
    reaching a repository.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1, examples=["Ann"])
    email: str = Field(min_length=3, examples=["ann@example.com"])
    password: str = Field(min_length=1, repr=False, examples=["s3cret"])


class UserUpdate(BaseModel):
    """Partial update of a user. Omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=3)
    password: str | None = Field(default=None, min_length=1, repr=False)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly provided with a non-null value."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
