from collections.abc import Iterator, Mapping
from typing import Any

from loguru import logger

from src.app.core.security import PasswordHasher
from src.app.core.services.notification import (
    MessageTemplate,
    NotificationError,
    Notifier,
)
from src.app.entities.core.user.entity import User, UserCreate, UserUpdate
from src.app.entities.core.user.repository import UserRepositoryInterface
from src.app.runtime.context import get_config


class UserService:
    """Use-case orchestration for users.

    The repository is always supplied by the caller; the service only relies on
    the ``UserRepositoryInterface`` capabilities. Input is validated and the
    password hashed here, so no repository ever sees a plaintext secret.
    """

    def __init__(
        self,
        repository: UserRepositoryInterface,
        password_hasher: PasswordHasher,
        notifier: Notifier | None = None,
        welcome_template: MessageTemplate | None = None,
    ):
        self._repository = repository
        self._password_hasher = password_hasher
        self._notifier = notifier
        self._welcome_template = welcome_template or MessageTemplate.from_config(
            get_config().notifications.welcome
        )

    def _notify_created(self, user: User) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.send(
                user.email, self._welcome_template, user.model_dump(mode="json")
            )
        except NotificationError:
            # Creation stands even when delivery fails
            logger.exception("Welcome notification for user {} failed", user.id)

    def create_user(self, data: Mapping[str, Any]) -> User:
        """Hash the password, store the user and send the welcome notification.

        Raises:
            pydantic.ValidationError: If required attributes are missing or invalid
        """
        payload = UserCreate.model_validate(dict(data))
        stored = payload.model_dump()
        stored["password"] = self._password_hasher.hash(payload.password)

        user = self._repository.create(stored)
        logger.info("Created user {}", user.id)
        self._notify_created(user)
        return user

    def get_user_by_id(self, user_id: int) -> User | None:
        return self._repository.get_by_id(user_id)

    def get_all_users(self) -> Iterator[User]:
        return self._repository.get_all()

    def update_user(self, user_id: int, data: Mapping[str, Any]) -> bool:
        """Apply the provided fields, hashing a new password.

        Raises:
            pydantic.ValidationError: If a field is unknown or invalid
        """
        changes = UserUpdate.model_validate(dict(data)).changes()
        if "password" in changes:
            changes["password"] = self._password_hasher.hash(changes["password"])

        updated = self._repository.update(user_id, changes)
        if updated:
            logger.info("Updated user {}", user_id)
        else:
            logger.info("Update skipped, user {} not found", user_id)
        return updated

    def delete_user(self, user_id: int) -> bool:
        deleted = self._repository.delete(user_id)
        if deleted:
            logger.info("Deleted user {}", user_id)
        return deleted
