from .notifier import (
    EmailNotifier,
    LogNotifier,
    MessageTemplate,
    NotificationError,
    Notifier,
    NullNotifier,
    RenderedMessage,
    build_notifier,
)

__all__ = [
    "EmailNotifier",
    "LogNotifier",
    "MessageTemplate",
    "NotificationError",
    "Notifier",
    "NullNotifier",
    "RenderedMessage",
    "build_notifier",
]
