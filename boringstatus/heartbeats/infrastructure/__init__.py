"""
Heartbeats Infrastructure Layer
===============================

ORM model and repositories for heartbeats.
"""

from boringstatus.heartbeats.infrastructure.models import HeartbeatModel
from boringstatus.heartbeats.infrastructure.repositories import (
    SQLAlchemyHeartbeatRepository,
    SQLAlchemyMonitorStateRepository,
)

__all__ = [
    "HeartbeatModel",
    "SQLAlchemyHeartbeatRepository",
    "SQLAlchemyMonitorStateRepository",
]
