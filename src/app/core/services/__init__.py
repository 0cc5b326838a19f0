"""Core services exports."""

# Database Services
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

# Notification Services
from .notification import (
    EmailNotifier,
    LogNotifier,
    MessageTemplate,
    NotificationError,
    Notifier,
    NullNotifier,
    build_notifier,
)

# User Services
from .user.user_service import UserService

__all__ = [
    # Database Services
    "DbManageService",
    "DbSessionService",
    # Notification Services
    "EmailNotifier",
    "LogNotifier",
    "MessageTemplate",
    "NotificationError",
    "Notifier",
    "NullNotifier",
    "build_notifier",
    # User Services
    "UserService",
]
