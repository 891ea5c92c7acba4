"""
Tests for notification message builders and delivery providers.

Outbound HTTP goes through httpx.MockTransport.
"""

import json
from datetime import datetime, timezone
from uuid import uuid4

import httpx
import pytest

from boringstatus.core import NotificationDeliveryException
from boringstatus.heartbeats.domain import AlertEvent, AlertKind
from boringstatus.monitors.domain import AlertRule
from boringstatus.notifications.domain import (
    build_discord_message,
    build_email,
    build_slack_message,
    build_webhook_payload,
)
from boringstatus.notifications.infrastructure import NotificationProviderRegistry
from boringstatus.shared.infrastructure.resilience import CircuitState

BASE_URL = "https://app.boringstatus.test"


@pytest.fixture
def down_event() -> AlertEvent:
    return AlertEvent(
        kind=AlertKind.STATUS_CHANGE,
        monitor_id=uuid4(),
        monitor_name="Checkout API",
        target="https://shop.example.com/api",
        status="down",
        previous_status="up",
        title="Checkout API is down",
        message="HTTP 503",
        time=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


class TestMessages:
    def test_slack_message_has_fallback_text_and_blocks(self, down_event):
        message = build_slack_message(down_event, BASE_URL, channel="#alerts")

        assert "Checkout API is down" in message["text"]
        assert message["channel"] == "#alerts"
        assert message["blocks"][0]["type"] == "header"
        context = message["blocks"][-1]["elements"][0]["text"]
        assert f"{BASE_URL}/monitors/{down_event.monitor_id}" in context

    def test_discord_embed(self, down_event):
        message = build_discord_message(down_event, BASE_URL)

        embed = message["embeds"][0]
        assert embed["title"] == "Checkout API is down"
        assert embed["description"] == "HTTP 503"
        assert embed["url"].endswith(str(down_event.monitor_id))

    def test_webhook_payload_includes_rule(self, down_event):
        down_event.kind = AlertKind.RULE_MATCH
        down_event.rule = AlertRule("status_code", "neq", "200")

        payload = build_webhook_payload(down_event)

        assert payload["event"] == "rule_match"
        assert payload["monitor"]["id"] == str(down_event.monitor_id)
        assert payload["rule"] == {"metric": "status_code", "operator": "neq", "value": "200"}
        json.dumps(payload)

    def test_test_email_is_marked(self):
        event = AlertEvent(
            kind=AlertKind.TEST,
            monitor_id=None,
            monitor_name="BoringStatus",
            target="",
            status="test",
            title="Test notification",
            message="Hello",
            time=datetime(2024, 5, 1, tzinfo=timezone.utc),
        )

        subject, body = build_email(event, BASE_URL)

        assert subject == "[Test] Test notification"
        assert "Hello" in body
        assert "/monitors/" not in body


class TestHttpProviders:
    async def test_slack_posts_block_kit(self, test_settings, down_event):
        received = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(request)
            return httpx.Response(200, text="ok")

        registry = NotificationProviderRegistry(test_settings, transport=httpx.MockTransport(handler))
        try:
            await registry.send("slack", {"webhook_url": "https://hooks.slack.test/T1"}, down_event)
        finally:
            await registry.close()

        assert len(received) == 1
        assert str(received[0].url) == "https://hooks.slack.test/T1"
        assert "blocks" in json.loads(received[0].content)

    async def test_error_status_raises_delivery_exception(self, test_settings, down_event):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        registry = NotificationProviderRegistry(test_settings, transport=transport)
        try:
            with pytest.raises(NotificationDeliveryException) as excinfo:
                await registry.send("webhook", {"webhook_url": "https://hooks.example.com/x"}, down_event)
        finally:
            await registry.close()

        assert excinfo.value.status_code == 502

    async def test_retries_until_success(self, test_settings, down_event):
        test_settings.notification_max_retries = 3
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(502 if len(attempts) < 3 else 204)

        registry = NotificationProviderRegistry(test_settings, transport=httpx.MockTransport(handler))
        try:
            await registry.send("discord", {"webhook_url": "https://discord.test/api/webhooks/1"}, down_event)
        finally:
            await registry.close()

        assert len(attempts) == 3

    async def test_circuit_opens_and_short_circuits(self, test_settings, down_event):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        registry = NotificationProviderRegistry(test_settings, transport=httpx.MockTransport(handler))
        config = {"webhook_url": "https://hooks.example.com/down"}
        try:
            for _ in range(test_settings.circuit_failure_threshold):
                with pytest.raises(NotificationDeliveryException):
                    await registry.send("webhook", config, down_event)

            breaker = registry.provider("webhook").circuit_breaker(config["webhook_url"])
            assert breaker.state == CircuitState.OPEN

            with pytest.raises(NotificationDeliveryException, match="Circuit breaker open"):
                await registry.send("webhook", config, down_event)
        finally:
            await registry.close()

        assert len(calls) == test_settings.circuit_failure_threshold

    async def test_open_circuit_only_blocks_its_own_url(self, test_settings, down_event):
        delivered = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "dead.example.com":
                return httpx.Response(503)
            delivered.append(request)
            return httpx.Response(200)

        registry = NotificationProviderRegistry(test_settings, transport=httpx.MockTransport(handler))
        try:
            for _ in range(test_settings.circuit_failure_threshold):
                with pytest.raises(NotificationDeliveryException):
                    await registry.send("slack", {"webhook_url": "https://dead.example.com/hook"}, down_event)

            await registry.send("slack", {"webhook_url": "https://healthy.example.com/hook"}, down_event)
        finally:
            await registry.close()

        provider = registry.provider("slack")
        assert provider.circuit_breaker("https://dead.example.com/hook").state == CircuitState.OPEN
        assert provider.circuit_breaker("https://healthy.example.com/hook").state == CircuitState.CLOSED
        assert len(delivered) == 1

    async def test_missing_webhook_url(self, test_settings, down_event):
        registry = NotificationProviderRegistry(test_settings)
        with pytest.raises(NotificationDeliveryException, match="Missing webhook URL"):
            await registry.send("slack", {}, down_event)


class TestEmailProvider:
    async def test_skipped_without_smtp_host(self, test_settings, down_event):
        test_settings.smtp_host = None
        registry = NotificationProviderRegistry(test_settings)

        await registry.send("email", {"email": "oncall@example.com"}, down_event)

    async def test_requires_recipient(self, test_settings, down_event):
        registry = NotificationProviderRegistry(test_settings)
        with pytest.raises(NotificationDeliveryException):
            await registry.send("email", {}, down_event)


async def test_unknown_channel_type(test_settings, down_event):
    registry = NotificationProviderRegistry(test_settings)
    with pytest.raises(NotificationDeliveryException, match="Unknown channel type"):
        await registry.send("pager", {}, down_event)
