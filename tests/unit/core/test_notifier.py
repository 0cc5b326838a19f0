"""Unit tests for notification templates and backends."""

import json

import httpx
import pytest

from src.app.core.services.notification import (
    EmailNotifier,
    LogNotifier,
    MessageTemplate,
    NotificationError,
    NullNotifier,
    build_notifier,
)
from src.app.runtime.config.config_data import (
    EmailProviderConfig,
    MessageTemplateConfig,
    NotificationConfig,
)

CONTEXT = {"id": 1, "name": "Ann", "email": "a@x.com"}


@pytest.fixture
def email_config() -> EmailProviderConfig:
    return EmailProviderConfig(
        api_url="https://mail.example.com/v3/send",
        api_key="secret",
        sender="team@example.com",
    )


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestMessageTemplate:
    def test_render(self, welcome_template: MessageTemplate):
        message = welcome_template.render(CONTEXT)

        assert message.subject == "Welcome, Ann!"
        assert message.body == "Account 1 for a@x.com"

    def test_from_config(self):
        template = MessageTemplate.from_config(MessageTemplateConfig())

        assert template.render(CONTEXT).subject == "Welcome, Ann!"

    @pytest.mark.parametrize(
        "body",
        ["Hello {nickname}", "Hello {0}", "Hello {name", "Hello {name.first}", "Hello {id[0]}"],
    )
    def test_unusable_placeholder_raises(self, body: str):
        template = MessageTemplate(subject="Hi", body=body)

        with pytest.raises(NotificationError):
            template.render(CONTEXT)


class TestSimpleBackends:
    def test_null_notifier_renders_nothing(self):
        broken = MessageTemplate(subject="{missing}", body="")

        assert NullNotifier().send("a@x.com", broken, CONTEXT) is None

    def test_log_notifier_renders(self, welcome_template: MessageTemplate):
        LogNotifier().send("a@x.com", welcome_template, CONTEXT)

    def test_log_notifier_surfaces_render_errors(self):
        with pytest.raises(NotificationError):
            LogNotifier().send("a@x.com", MessageTemplate(subject="{missing}", body=""), {})


class TestEmailNotifier:
    def test_posts_message(self, email_config, welcome_template):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        notifier = EmailNotifier(email_config, client=_client(handler))
        notifier.send("a@x.com", welcome_template, CONTEXT)

        assert len(requests) == 1
        request = requests[0]
        assert str(request.url) == "https://mail.example.com/v3/send"
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.headers["Idempotency-Key"].startswith("email:")

        payload = json.loads(request.content)
        assert payload["from"] == {"email": "team@example.com"}
        assert payload["personalizations"][0]["to"] == [{"email": "a@x.com"}]
        assert payload["personalizations"][0]["subject"] == "Welcome, Ann!"
        assert payload["content"][0]["value"] == "Account 1 for a@x.com"

    def test_same_message_same_idempotency_key(self, email_config, welcome_template):
        keys: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            keys.append(request.headers["Idempotency-Key"])
            return httpx.Response(200)

        notifier = EmailNotifier(email_config, client=_client(handler))
        notifier.send("a@x.com", welcome_template, CONTEXT)
        notifier.send("a@x.com", welcome_template, CONTEXT)
        notifier.send("b@x.com", welcome_template, CONTEXT)

        assert keys[0] == keys[1]
        assert keys[0] != keys[2]

    def test_provider_error_status_raises(self, email_config, welcome_template):
        notifier = EmailNotifier(
            email_config, client=_client(lambda request: httpx.Response(503, text="down"))
        )

        with pytest.raises(NotificationError, match="503"):
            notifier.send("a@x.com", welcome_template, CONTEXT)

    def test_transport_error_raises(self, email_config, welcome_template):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        notifier = EmailNotifier(email_config, client=_client(handler))

        with pytest.raises(NotificationError, match="unreachable"):
            notifier.send("a@x.com", welcome_template, CONTEXT)

    def test_unconfigured_provider_raises(self, welcome_template):
        notifier = EmailNotifier(EmailProviderConfig())

        with pytest.raises(NotificationError, match="not configured"):
            notifier.send("a@x.com", welcome_template, CONTEXT)


class TestBuildNotifier:
    def test_disabled(self):
        assert isinstance(build_notifier(NotificationConfig(enabled=False)), NullNotifier)

    def test_log_backend(self):
        assert isinstance(build_notifier(NotificationConfig(backend="log")), LogNotifier)

    def test_email_backend(self, email_config):
        notifier = build_notifier(NotificationConfig(backend="email", email=email_config))

        assert isinstance(notifier, EmailNotifier)
