"""
Monitor Domain Entities
=======================

Pure Python view of a monitor and the issues derived from its heartbeats.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID

from boringstatus.config import MonitorStatus, MonitorType
from boringstatus.core.timeutils import as_utc
from boringstatus.monitors.domain.value_objects import AlertRule

SEVERITY_HIGH = "high"
SEVERITY_MEDIUM = "medium"


@dataclass
class Monitor:
    """
    A configured check and its cached state.

    status, last_check_at and next_check_at are a cache of the newest
    heartbeat; heartbeats remain the source of truth.
    """
    id: UUID
    organization_id: UUID
    type: str
    name: str
    target: str
    active: bool = True
    frequency: int = 300
    timeout: int = 10
    regions: List[str] = field(default_factory=lambda: ["default"])
    config: Dict[str, Any] = field(default_factory=dict)
    alert_rules: List[AlertRule] = field(default_factory=list)
    status: str = MonitorStatus.PENDING
    last_check_at: Optional[datetime] = None
    next_check_at: Optional[datetime] = None

    @property
    def display_target(self) -> str:
        """Target as shown to users; TCP monitors include the port."""
        if self.type == MonitorType.TCP and self.config.get("port"):
            return f"{self.target}:{self.config['port']}"
        return self.target

    def record_check(self, status: str, checked_at: datetime, now: datetime) -> None:
        """Refresh the cached state after a heartbeat."""
        self.status = status
        self.last_check_at = checked_at
        self.next_check_at = now + timedelta(seconds=self.frequency)

    def reset(self) -> None:
        self.status = MonitorStatus.PENDING
        self.last_check_at = None
        self.next_check_at = None

    @classmethod
    def from_model(cls, model: Any) -> "Monitor":
        return cls(
            id=model.id,
            organization_id=model.organization_id,
            type=model.type,
            name=model.name,
            target=model.target,
            active=model.active,
            frequency=model.frequency,
            timeout=model.timeout,
            regions=list(model.regions or []),
            config=dict(model.config or {}),
            alert_rules=[AlertRule.from_dict(r) for r in (model.alert_rules or [])],
            status=model.status,
            last_check_at=as_utc(model.last_check_at),
            next_check_at=as_utc(model.next_check_at),
        )


def issue_severity(status_code: Optional[int]) -> str:
    """Server errors are high severity; everything else is medium."""
    if status_code is not None and status_code >= 500:
        return SEVERITY_HIGH
    return SEVERITY_MEDIUM
