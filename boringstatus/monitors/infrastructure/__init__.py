"""
Monitors Infrastructure Layer
=============================

ORM models and repositories for monitors.
"""

from boringstatus.monitors.infrastructure.models import MonitorChannelLinkModel, MonitorModel
from boringstatus.monitors.infrastructure.repositories import (
    SQLAlchemyChannelOwnershipChecker,
    SQLAlchemyMonitorRepository,
)

__all__ = [
    "MonitorModel",
    "MonitorChannelLinkModel",
    "SQLAlchemyMonitorRepository",
    "SQLAlchemyChannelOwnershipChecker",
]
