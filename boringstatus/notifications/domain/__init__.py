"""
Notifications Domain Layer
==========================

Payload builders for each channel type.
"""

from boringstatus.notifications.domain.messages import (
    build_discord_message,
    build_email,
    build_slack_message,
    build_webhook_payload,
    headline,
)

__all__ = [
    "build_slack_message",
    "build_discord_message",
    "build_webhook_payload",
    "build_email",
    "headline",
]
