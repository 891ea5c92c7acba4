"""
Heartbeat Domain Entities
=========================

A heartbeat is one recorded check result. Heartbeats are append-only and
are the source of truth for monitor state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from boringstatus.config import HeartbeatStatus, UNHEALTHY_STATUSES
from boringstatus.core.timeutils import as_utc


@dataclass
class Heartbeat:
    """One check result as reported by an agent."""
    monitor_id: UUID
    time: datetime
    status: str
    region: str = "default"
    latency: Optional[int] = None
    message: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    run_id: Optional[str] = None
    id: Optional[UUID] = None

    @property
    def is_up(self) -> bool:
        return self.status == HeartbeatStatus.UP

    @property
    def is_unhealthy(self) -> bool:
        return self.status in UNHEALTHY_STATUSES

    @property
    def status_code(self) -> Optional[int]:
        code = self.metrics.get("status_code")
        return int(code) if isinstance(code, (int, float)) and not isinstance(code, bool) else None

    def observed_values(self) -> Dict[str, Any]:
        """
        Values alert rules can reference.

        Metric fields are exposed under their own names; `status` and
        `response_time` come from the heartbeat itself.
        """
        values = {k: v for k, v in self.metrics.items() if k != "type"}
        values["status"] = self.status
        values["response_time"] = self.latency
        values.setdefault("latency", self.latency)
        return values

    @classmethod
    def from_model(cls, model: Any) -> "Heartbeat":
        return cls(
            id=model.id,
            monitor_id=model.monitor_id,
            time=as_utc(model.time),
            status=model.status,
            region=model.region,
            latency=model.latency,
            message=model.message,
            metrics=dict(model.metrics or {}),
            run_id=model.run_id,
        )


def latency_from_metrics(metrics: Dict[str, Any]) -> Optional[int]:
    """Headline latency of a check: HTTP total, ping latency or TCP connect."""
    for key in ("total", "latency", "connect"):
        value = metrics.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return int(round(value))
    return None
