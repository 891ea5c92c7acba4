"""
Notification Background Tasks
=============================

Alert delivery scheduled after a heartbeat has been committed.
"""

from typing import Sequence
from uuid import UUID

from boringstatus.heartbeats.domain import AlertEvent
from boringstatus.infrastructure.database import get_session_context
from boringstatus.notifications.application import AlertDispatcher, INotificationSender
from boringstatus.notifications.infrastructure import SQLAlchemyChannelRepository
from boringstatus.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


async def dispatch_alerts(monitor_id: UUID, events: Sequence[AlertEvent], sender: INotificationSender) -> None:
    """Deliver events to the monitor's channels in a session of its own."""
    try:
        async with get_session_context() as session:
            dispatcher = AlertDispatcher(SQLAlchemyChannelRepository(session), sender)
            await dispatcher.dispatch(monitor_id, events)
    except Exception as e:
        logger.error(
            "Alert dispatch failed",
            extra={"monitor_id": str(monitor_id), "error": str(e)},
            exc_info=True
        )
