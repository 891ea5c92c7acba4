"""
Alert Evaluation
================

Decides which notifications a new heartbeat triggers.

Alerts are edge-triggered: a status flip between healthy and unhealthy, or
a rule that matches the new heartbeat but did not match the previous one.
A monitor that stays down does not alert on every check.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from boringstatus.heartbeats.domain.entities import Heartbeat
from boringstatus.monitors.domain import AlertRule


class AlertKind(str):
    STATUS_CHANGE = "status_change"
    RULE_MATCH = "rule_match"
    TEST = "test"


@dataclass
class AlertEvent:
    """Something worth telling a channel about."""
    kind: str
    monitor_id: Optional[UUID]
    monitor_name: str
    target: str
    status: str
    title: str
    message: str
    time: datetime
    previous_status: Optional[str] = None
    rule: Optional[AlertRule] = None

    @property
    def is_recovery(self) -> bool:
        return self.kind == AlertKind.STATUS_CHANGE and self.status == "up"


def evaluate_alerts(
    monitor_id: UUID,
    monitor_name: str,
    target: str,
    rules: Sequence[AlertRule],
    previous: Optional[Heartbeat],
    current: Heartbeat,
) -> List[AlertEvent]:
    events: List[AlertEvent] = []

    if previous is not None:
        went_down = previous.is_up and current.is_unhealthy
        recovered = previous.is_unhealthy and current.is_up
        if went_down or recovered:
            title = f"{monitor_name} is {'back up' if recovered else current.status}"
            events.append(AlertEvent(
                kind=AlertKind.STATUS_CHANGE,
                monitor_id=monitor_id,
                monitor_name=monitor_name,
                target=target,
                status=current.status,
                previous_status=previous.status,
                title=title,
                message=current.message or f"Status changed from {previous.status} to {current.status}",
                time=current.time,
            ))
    elif current.is_unhealthy:
        events.append(AlertEvent(
            kind=AlertKind.STATUS_CHANGE,
            monitor_id=monitor_id,
            monitor_name=monitor_name,
            target=target,
            status=current.status,
            title=f"{monitor_name} is {current.status}",
            message=current.message or f"First check reported {current.status}",
            time=current.time,
        ))

    observed = current.observed_values()
    previously_observed = previous.observed_values() if previous is not None else {}
    for rule in rules:
        if rule.matches(observed) and not rule.matches(previously_observed):
            events.append(AlertEvent(
                kind=AlertKind.RULE_MATCH,
                monitor_id=monitor_id,
                monitor_name=monitor_name,
                target=target,
                status=current.status,
                title=f"{monitor_name}: {rule.describe()}",
                message=f"Alert rule matched: {rule.describe()} (observed {observed.get(rule.metric)})",
                time=current.time,
                rule=rule,
            ))

    return events
