"""
Monitors Application Layer
==========================

Use cases and DTOs for monitor management and dashboards.
"""

from boringstatus.monitors.application.dto import (
    AlertRuleDTO,
    DashboardMonitorResponse,
    HttpMonitorDTO,
    MonitorDetailsResponse,
    MonitorListItem,
    MonitorResponse,
    MonitorWriteDTO,
    MonitorWriteRequest,
    MutationResponse,
    PingMonitorDTO,
    TcpMonitorDTO,
    ToggleActiveDTO,
)
from boringstatus.monitors.application.services import (
    IChannelOwnershipChecker,
    IMonitorRepository,
    MonitorInsightsService,
    MonitorService,
)

__all__ = [
    "AlertRuleDTO",
    "HttpMonitorDTO",
    "PingMonitorDTO",
    "TcpMonitorDTO",
    "MonitorWriteDTO",
    "MonitorWriteRequest",
    "ToggleActiveDTO",
    "MonitorResponse",
    "MonitorListItem",
    "MutationResponse",
    "DashboardMonitorResponse",
    "MonitorDetailsResponse",
    "MonitorService",
    "MonitorInsightsService",
    "IMonitorRepository",
    "IChannelOwnershipChecker",
]
