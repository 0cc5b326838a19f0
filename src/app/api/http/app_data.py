from dataclasses import dataclass

from src.app.core.security import PasswordHasher
from src.app.core.services import (
    DbSessionService,
    MessageTemplate,
    Notifier,
    build_notifier,
)
from src.app.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    password_hasher: PasswordHasher
    notifier: Notifier
    welcome_template: MessageTemplate

    @classmethod
    def from_config(cls, config: ConfigData) -> "ApplicationDependencies":
        return cls(
            database_service=DbSessionService(config.database),
            password_hasher=PasswordHasher(config.security.password_hashing),
            notifier=build_notifier(config.notifications),
            welcome_template=MessageTemplate.from_config(config.notifications.welcome),
        )
