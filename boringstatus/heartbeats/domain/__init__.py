"""
Heartbeats Domain Layer
=======================

Heartbeat entity, hourly aggregation, alert evaluation and synthetic data.
"""

from boringstatus.heartbeats.domain.aggregation import (
    HourlyBucket,
    average_latency,
    hourly_buckets,
    last_24_hours,
    uptime_percentage,
)
from boringstatus.heartbeats.domain.alerts import AlertEvent, AlertKind, evaluate_alerts
from boringstatus.heartbeats.domain.entities import Heartbeat, latency_from_metrics
from boringstatus.heartbeats.domain.simulation import (
    PATTERNS,
    SimulationResult,
    generate_heartbeats,
    simulate_pattern,
)

__all__ = [
    "Heartbeat",
    "latency_from_metrics",
    "HourlyBucket",
    "hourly_buckets",
    "last_24_hours",
    "uptime_percentage",
    "average_latency",
    "AlertEvent",
    "AlertKind",
    "evaluate_alerts",
    "PATTERNS",
    "SimulationResult",
    "generate_heartbeats",
    "simulate_pattern",
]
