"""Outbound notifications sent to users.

Notifiers render a ``MessageTemplate`` with the recipient's attributes and
deliver it through a backend: the application log, an HTTP email provider,
or nowhere when notifications are disabled.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel

from src.app.runtime.config.config_data import (
    EmailProviderConfig,
    MessageTemplateConfig,
    NotificationConfig,
)


class NotificationError(Exception):
    """A notification could not be delivered."""


class RenderedMessage(BaseModel):
    subject: str
    body: str


class MessageTemplate(BaseModel):
    """Subject and body with ``str.format`` placeholders."""

    subject: str
    body: str

    @classmethod
    def from_config(cls, config: MessageTemplateConfig) -> MessageTemplate:
        return cls(subject=config.subject, body=config.body)

    def render(self, context: Mapping[str, Any]) -> RenderedMessage:
        try:
            return RenderedMessage(
                subject=self.subject.format_map(context),
                body=self.body.format_map(context),
            )
        except (KeyError, IndexError, ValueError, AttributeError, TypeError) as e:
            raise NotificationError(f"Template placeholder not available: {e}") from e


class Notifier(ABC):
    """Delivers a rendered template to a single recipient."""

    @abstractmethod
    def send(
        self, recipient: str, template: MessageTemplate, context: Mapping[str, Any]
    ) -> None:
        """Render ``template`` with ``context`` and deliver it to ``recipient``.

        Raises:
            NotificationError: If rendering or delivery fails
        """
        pass


class NullNotifier(Notifier):
    """Discards every notification."""

    def send(
        self, recipient: str, template: MessageTemplate, context: Mapping[str, Any]
    ) -> None:
        return None


class LogNotifier(Notifier):
    """Writes notifications to the application log instead of delivering them."""

    def send(
        self, recipient: str, template: MessageTemplate, context: Mapping[str, Any]
    ) -> None:
        message = template.render(context)
        logger.bind(recipient=recipient).info(
            "notification: {} | {}", message.subject, message.body
        )


def _idempotency_key(to: str, message: RenderedMessage) -> str:
    """Stable key so the provider won't send duplicates of the same message."""
    payload_hash = hashlib.sha256(
        (to + "\x1f" + message.subject + "\x1f" + message.body).encode("utf-8")
    ).hexdigest()
    return f"email:{payload_hash}"


class EmailNotifier(Notifier):
    """Sends plain-text email through an HTTP provider API."""

    def __init__(self, config: EmailProviderConfig, client: httpx.Client | None = None):
        self._config = config
        self._client = client

    def _post(self, payload: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self._config.api_url, json=payload, headers=headers)
        with httpx.Client(timeout=self._config.timeout) as client:
            return client.post(self._config.api_url, json=payload, headers=headers)

    def send(
        self, recipient: str, template: MessageTemplate, context: Mapping[str, Any]
    ) -> None:
        if not self._config.api_url or not self._config.api_key:
            raise NotificationError("Email provider not configured")

        message = template.render(context)

        # JSON shaped like most providers' send endpoints
        payload = {
            "from": {"email": self._config.sender},
            "personalizations": [{"to": [{"email": recipient}], "subject": message.subject}],
            "content": [{"type": "text/plain", "value": message.body}],
        }
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Idempotency-Key": _idempotency_key(recipient, message),
            "Content-Type": "application/json",
        }

        try:
            resp = self._post(payload, headers)
        except httpx.HTTPError as e:
            raise NotificationError(f"Email provider unreachable: {e}") from e

        if resp.is_success:
            logger.info("Email sent to {}", recipient)
            return

        raise NotificationError(
            f"Email send failed {resp.status_code}: {resp.text[:200]}"
        )


def build_notifier(config: NotificationConfig) -> Notifier:
    """Select the notifier backend from configuration."""
    if not config.enabled:
        return NullNotifier()
    if config.backend == "email":
        return EmailNotifier(config.email)
    return LogNotifier()
