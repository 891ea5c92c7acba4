"""
Notification Providers
======================

Outbound delivery of alert events:
- Slack incoming webhooks (Block Kit)
- Discord webhooks (content + embed)
- Generic JSON webhooks
- Email over SMTP

HTTP providers share one httpx client each. Every webhook URL has its own
circuit breaker, and requests retry with exponential backoff.
"""

import asyncio
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from functools import lru_cache
from typing import Any, Dict, Optional

import httpx

from boringstatus.config import ChannelType, Settings, settings
from boringstatus.core import NotificationDeliveryException
from boringstatus.heartbeats.domain import AlertEvent
from boringstatus.notifications.application.services import INotificationSender
from boringstatus.notifications.domain import (
    build_discord_message,
    build_email,
    build_slack_message,
    build_webhook_payload,
)
from boringstatus.shared.infrastructure.logging import get_logger
from boringstatus.shared.infrastructure.resilience import CircuitBreaker, retry_with_backoff

logger = get_logger(__name__)


class NotificationProvider(ABC):
    """Delivers events to one kind of destination."""

    channel_type: str

    @abstractmethod
    async def send(self, config: Dict[str, Any], event: AlertEvent) -> None:
        """Deliver or raise NotificationDeliveryException."""

    async def close(self) -> None:
        """Release resources."""


class HttpNotificationProvider(NotificationProvider):
    """
    POSTs JSON to a webhook URL with circuit breaker and retry logic.

    Handles:
    - One circuit breaker per webhook URL, so a dead endpoint only blocks itself
    - Exponential backoff retry
    - Timeout handling
    """

    def __init__(self, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = config
        self._transport = transport
        self._circuit_breakers: Dict[str, CircuitBreaker] = {}
        self._http_client: Optional[httpx.AsyncClient] = None

    def circuit_breaker(self, url: str) -> CircuitBreaker:
        """Get or create the breaker guarding one webhook URL."""
        breaker = self._circuit_breakers.get(url)
        if breaker is None:
            breaker = CircuitBreaker(
                name=f"notifications.{self.channel_type}",
                failure_threshold=self._settings.circuit_failure_threshold,
                recovery_timeout=self._settings.circuit_recovery_timeout
            )
            self._circuit_breakers[url] = breaker
        return breaker

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._settings.notification_timeout_seconds,
                transport=self._transport
            )
        return self._http_client

    @abstractmethod
    def build_payload(self, config: Dict[str, Any], event: AlertEvent) -> Dict[str, Any]:
        """Request body for one event."""

    async def send(self, config: Dict[str, Any], event: AlertEvent) -> None:
        url = config.get("webhook_url")
        if not url:
            raise NotificationDeliveryException(self.channel_type, "Missing webhook URL")

        circuit_breaker = self.circuit_breaker(url)
        if not circuit_breaker.allow_request():
            logger.warning(
                "Circuit breaker open, skipping notification",
                extra={"type": self.channel_type, "monitor_id": str(event.monitor_id)}
            )
            raise NotificationDeliveryException(self.channel_type, "Circuit breaker open")

        payload = self.build_payload(config, event)

        async def post() -> None:
            client = await self._get_client()
            response = await client.post(url, json=payload)
            response.raise_for_status()

        try:
            await retry_with_backoff(
                post,
                max_retries=self._settings.notification_max_retries,
                base_delay=self._settings.notification_retry_base_delay,
                description=f"{self.channel_type} notification"
            )
        except httpx.HTTPError as e:
            circuit_breaker.record_failure()
            raise NotificationDeliveryException(self.channel_type, str(e) or type(e).__name__) from e

        circuit_breaker.record_success()
        logger.info(
            "Notification sent",
            extra={"type": self.channel_type, "event": event.kind, "monitor_id": str(event.monitor_id)}
        )

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


class SlackProvider(HttpNotificationProvider):
    channel_type = ChannelType.SLACK

    def build_payload(self, config: Dict[str, Any], event: AlertEvent) -> Dict[str, Any]:
        return build_slack_message(event, self._settings.public_base_url, config.get("channel"))


class DiscordProvider(HttpNotificationProvider):
    channel_type = ChannelType.DISCORD

    def build_payload(self, config: Dict[str, Any], event: AlertEvent) -> Dict[str, Any]:
        return build_discord_message(event, self._settings.public_base_url)


class WebhookProvider(HttpNotificationProvider):
    channel_type = ChannelType.WEBHOOK

    def build_payload(self, config: Dict[str, Any], event: AlertEvent) -> Dict[str, Any]:
        return build_webhook_payload(event)


class EmailProvider(NotificationProvider):
    """
    Plain-text email over SMTP.

    Delivery is skipped (and logged) when no SMTP host is configured.
    """

    channel_type = ChannelType.EMAIL

    def __init__(self, config: Settings):
        self._settings = config

    async def send(self, config: Dict[str, Any], event: AlertEvent) -> None:
        recipient = config.get("email")
        if not recipient:
            raise NotificationDeliveryException(self.channel_type, "Missing email address")

        if not self._settings.smtp_host:
            logger.info(
                "SMTP not configured, skipping email notification",
                extra={"monitor_id": str(event.monitor_id)}
            )
            return

        subject, body = build_email(event, self._settings.public_base_url)
        message = EmailMessage()
        message["From"] = self._settings.smtp_sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)

        try:
            await retry_with_backoff(
                lambda: asyncio.to_thread(self._deliver, message),
                max_retries=self._settings.notification_max_retries,
                base_delay=self._settings.notification_retry_base_delay,
                description="email notification"
            )
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationDeliveryException(self.channel_type, str(e)) from e

        logger.info("Email notification sent", extra={"monitor_id": str(event.monitor_id)})

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self._settings.smtp_host,
            self._settings.smtp_port,
            timeout=self._settings.notification_timeout_seconds
        ) as smtp:
            if self._settings.smtp_use_tls:
                smtp.starttls()
            if self._settings.smtp_username:
                smtp.login(self._settings.smtp_username, self._settings.smtp_password or "")
            smtp.send_message(message)


class NotificationProviderRegistry(INotificationSender):
    """Routes events to the provider for a channel type."""

    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._providers: Dict[str, NotificationProvider] = {
            ChannelType.SLACK: SlackProvider(config, transport),
            ChannelType.DISCORD: DiscordProvider(config, transport),
            ChannelType.WEBHOOK: WebhookProvider(config, transport),
            ChannelType.EMAIL: EmailProvider(config),
        }

    def provider(self, channel_type: str) -> NotificationProvider:
        provider = self._providers.get(channel_type)
        if provider is None:
            raise NotificationDeliveryException(channel_type, "Unknown channel type")
        return provider

    async def send(self, channel_type: str, config: Dict[str, Any], event: AlertEvent) -> None:
        await self.provider(channel_type).send(config, event)

    async def close(self) -> None:
        for provider in self._providers.values():
            await provider.close()


@lru_cache()
def get_notification_sender() -> NotificationProviderRegistry:
    """Process-wide registry so circuit breakers survive across requests."""
    return NotificationProviderRegistry(settings)
