"""
Notifications Infrastructure Layer
==================================

ORM model, repositories and delivery providers.
"""

from boringstatus.notifications.infrastructure.models import NotificationChannelModel
from boringstatus.notifications.infrastructure.providers import (
    DiscordProvider,
    EmailProvider,
    NotificationProviderRegistry,
    SlackProvider,
    WebhookProvider,
    get_notification_sender,
)
from boringstatus.notifications.infrastructure.repositories import (
    SQLAlchemyChannelRepository,
    SQLAlchemyMonitorOwnershipChecker,
)

__all__ = [
    "NotificationChannelModel",
    "SQLAlchemyChannelRepository",
    "SQLAlchemyMonitorOwnershipChecker",
    "NotificationProviderRegistry",
    "SlackProvider",
    "DiscordProvider",
    "WebhookProvider",
    "EmailProvider",
    "get_notification_sender",
]
