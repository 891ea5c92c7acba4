"""
Heartbeats Application Layer
============================

Use cases and DTOs for heartbeat ingestion, history and dev tooling.
"""

from boringstatus.heartbeats.application.dto import (
    ClearHeartbeatsResponse,
    GenerateHeartbeatsDTO,
    GenerateHeartbeatsResponse,
    HeartbeatCreateDTO,
    HeartbeatRecordedResponse,
    HeartbeatResponse,
    SimulateHeartbeatsDTO,
    SimulateHeartbeatsResponse,
)
from boringstatus.heartbeats.application.services import (
    DevHeartbeatService,
    HeartbeatService,
    IHeartbeatRepository,
    IMonitorStateRepository,
)

__all__ = [
    "HeartbeatCreateDTO",
    "HeartbeatRecordedResponse",
    "HeartbeatResponse",
    "GenerateHeartbeatsDTO",
    "GenerateHeartbeatsResponse",
    "SimulateHeartbeatsDTO",
    "SimulateHeartbeatsResponse",
    "ClearHeartbeatsResponse",
    "HeartbeatService",
    "DevHeartbeatService",
    "IHeartbeatRepository",
    "IMonitorStateRepository",
]
