"""
Synthetic Heartbeats
====================

Generators for fake check results used by the development tools: random
statuses by probability, and named traffic patterns (stable, incident, ...).

Every function takes a random.Random so results are reproducible in tests.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Tuple
from uuid import UUID

from boringstatus.config import HeartbeatStatus, MonitorType
from boringstatus.heartbeats.domain.entities import Heartbeat, latency_from_metrics

PATTERNS = ["stable", "degrading", "incident", "recovery", "intermittent", "maintenance"]

FAILURE_MESSAGES = {
    HeartbeatStatus.DOWN: "Connection refused",
    HeartbeatStatus.ERROR: "Timeout exceeded",
}


# ========== Probability based ==========

def pick_status(rng: random.Random, up_probability: float, degraded_probability: float) -> str:
    """Draw a status; the remainder after up/degraded is split between down and error."""
    roll = rng.random()
    if roll < up_probability:
        return HeartbeatStatus.UP
    if roll < up_probability + degraded_probability:
        return HeartbeatStatus.DEGRADED
    remainder = max(0.0, 1 - up_probability - degraded_probability)
    if roll < up_probability + degraded_probability + remainder / 2:
        return HeartbeatStatus.DOWN
    return HeartbeatStatus.ERROR


def random_metrics(rng: random.Random, monitor_type: str, status: str) -> Dict[str, Any]:
    """Plausible metrics for a status; slower and lossier the worse it gets."""
    if monitor_type == MonitorType.PING:
        base = {HeartbeatStatus.UP: 25, HeartbeatStatus.DEGRADED: 150}.get(status, 500)
        return {
            "type": MonitorType.PING,
            "latency": round(base + (rng.random() - 0.5) * base * 0.4),
            "jitter": round(2 + rng.random() * 10),
            "packet_loss": {HeartbeatStatus.UP: 0, HeartbeatStatus.DEGRADED: 5}.get(status, 100),
        }

    if monitor_type == MonitorType.TCP:
        base = {HeartbeatStatus.UP: 15, HeartbeatStatus.DEGRADED: 100}.get(status, 5000)
        return {
            "type": MonitorType.TCP,
            "connect": round(base + (rng.random() - 0.5) * base * 0.3),
            "success": status not in (HeartbeatStatus.DOWN, HeartbeatStatus.ERROR),
        }

    base = {HeartbeatStatus.UP: 100, HeartbeatStatus.DEGRADED: 400}.get(status, 2000)
    dns = round(10 + rng.random() * 30)
    connect = round(20 + rng.random() * 50)
    tls = round(30 + rng.random() * 60)
    ttfb = round(base + (rng.random() - 0.5) * base * 0.3)
    return {
        "type": MonitorType.HTTP,
        "dns": dns,
        "connect": connect,
        "tls": tls,
        "ttfb": ttfb,
        "total": dns + connect + tls + ttfb + round(rng.random() * 50),
        "status_code": {HeartbeatStatus.UP: 200, HeartbeatStatus.DEGRADED: 500}.get(status, 0),
        "content_length": 12500 + round(rng.random() * 5000),
    }


def generate_heartbeats(
    rng: random.Random,
    monitor_id: UUID,
    monitor_type: str,
    now: datetime,
    count: int,
    interval_minutes: int,
    up_probability: float,
    degraded_probability: float,
) -> List[Heartbeat]:
    """count heartbeats going back from now, newest first."""
    heartbeats = []
    for i in range(count):
        status = pick_status(rng, up_probability, degraded_probability)
        metrics = random_metrics(rng, monitor_type, status)
        heartbeats.append(Heartbeat(
            monitor_id=monitor_id,
            time=now - timedelta(minutes=i * interval_minutes),
            status=status,
            latency=latency_from_metrics(metrics),
            message=FAILURE_MESSAGES.get(status),
            metrics=metrics,
        ))
    return heartbeats


# ========== Pattern based ==========

PatternStep = Tuple[str, float]


def _stable(rng: random.Random, pos: float) -> PatternStep:
    if rng.random() > 0.98:
        return HeartbeatStatus.DEGRADED, 1.5
    return HeartbeatStatus.UP, 0.8 + rng.random() * 0.4


def _degrading(rng: random.Random, pos: float) -> PatternStep:
    chance = pos * 0.6
    roll = rng.random()
    if roll < chance * 0.3:
        return HeartbeatStatus.DOWN, 5 + pos * 5
    if roll < chance:
        return HeartbeatStatus.DEGRADED, 2 + pos * 3
    return HeartbeatStatus.UP, 1 + pos * 2


def _incident(rng: random.Random, pos: float) -> PatternStep:
    if pos < 0.33:
        return HeartbeatStatus.UP, 0.8 + rng.random() * 0.3
    if pos < 0.66:
        phase = (pos - 0.33) / 0.33
        if phase < 0.1 or phase > 0.9:
            return HeartbeatStatus.DEGRADED, 2.5
        return (HeartbeatStatus.DOWN if rng.random() > 0.1 else HeartbeatStatus.ERROR), 10
    phase = (pos - 0.66) / 0.34
    if phase < 0.3:
        return (HeartbeatStatus.UP if rng.random() > 0.3 else HeartbeatStatus.DEGRADED), 1.5
    return HeartbeatStatus.UP, 1


def _recovery(rng: random.Random, pos: float) -> PatternStep:
    if pos < 0.2:
        return HeartbeatStatus.DOWN, 10
    if pos < 0.4:
        return (HeartbeatStatus.DOWN if rng.random() > 0.5 else HeartbeatStatus.DEGRADED), 5
    if pos < 0.6:
        return (HeartbeatStatus.DEGRADED if rng.random() > 0.3 else HeartbeatStatus.UP), 2
    if pos < 0.8:
        return (HeartbeatStatus.UP if rng.random() > 0.2 else HeartbeatStatus.DEGRADED), 1.3
    return HeartbeatStatus.UP, 1


def _intermittent(rng: random.Random, pos: float) -> PatternStep:
    roll = rng.random()
    if roll > 0.85:
        return HeartbeatStatus.DOWN, 8
    if roll > 0.7:
        return HeartbeatStatus.DEGRADED, 3
    if roll > 0.6:
        return HeartbeatStatus.ERROR, 10
    return HeartbeatStatus.UP, 1 + rng.random() * 2


def _maintenance(rng: random.Random, pos: float) -> PatternStep:
    if 0.4 < pos < 0.6:
        return HeartbeatStatus.DOWN, 0
    return HeartbeatStatus.UP, 0.9 + rng.random() * 0.2


PATTERN_GENERATORS: Dict[str, Callable[[random.Random, float], PatternStep]] = {
    "stable": _stable,
    "degrading": _degrading,
    "incident": _incident,
    "recovery": _recovery,
    "intermittent": _intermittent,
    "maintenance": _maintenance,
}


def pattern_metrics(rng: random.Random, monitor_type: str, latency_mult: float, status: str) -> Dict[str, Any]:
    base = {MonitorType.PING: 25, MonitorType.TCP: 15}.get(monitor_type, 100)
    latency = round(base * latency_mult * (0.8 + rng.random() * 0.4))

    if monitor_type == MonitorType.PING:
        return {
            "type": MonitorType.PING,
            "latency": latency,
            "jitter": round(2 + rng.random() * 10 * latency_mult),
            "packet_loss": {HeartbeatStatus.UP: 0, HeartbeatStatus.DEGRADED: 20}.get(status, 100),
        }
    if monitor_type == MonitorType.TCP:
        return {
            "type": MonitorType.TCP,
            "connect": latency,
            "success": status in (HeartbeatStatus.UP, HeartbeatStatus.DEGRADED),
        }
    return {
        "type": MonitorType.HTTP,
        "dns": round(10 + rng.random() * 20),
        "connect": round(20 + rng.random() * 30),
        "tls": round(30 + rng.random() * 40),
        "ttfb": round(latency * 0.6),
        "total": latency,
        "status_code": {HeartbeatStatus.UP: 200, HeartbeatStatus.DEGRADED: 503}.get(status, 0),
        "content_length": 12000 + round(rng.random() * 5000) if status == HeartbeatStatus.UP else 0,
    }


@dataclass
class SimulationResult:
    heartbeats: List[Heartbeat]
    pattern: str

    @property
    def count(self) -> int:
        return len(self.heartbeats)

    @property
    def uptime(self) -> int:
        if not self.heartbeats:
            return 100
        up = sum(1 for h in self.heartbeats if h.is_up)
        return round(up / len(self.heartbeats) * 100)

    @property
    def avg_latency(self) -> int:
        if not self.heartbeats:
            return 0
        return round(sum(h.latency or 0 for h in self.heartbeats) / len(self.heartbeats))


def simulate_pattern(
    rng: random.Random,
    monitor_id: UUID,
    monitor_type: str,
    now: datetime,
    pattern: str,
    minutes: int,
    interval: int,
) -> SimulationResult:
    """
    Heartbeats following pattern over the last `minutes`, one every
    `interval` minutes, oldest first.
    """
    generator = PATTERN_GENERATORS[pattern]
    count = minutes // interval

    heartbeats = []
    for i in range(count):
        pos = i / count
        status, latency_mult = generator(rng, pos)
        metrics = pattern_metrics(rng, monitor_type, latency_mult, status)
        heartbeats.append(Heartbeat(
            monitor_id=monitor_id,
            time=now - timedelta(minutes=(count - i) * interval),
            status=status,
            latency=latency_from_metrics(metrics),
            message=FAILURE_MESSAGES.get(status),
            metrics=metrics,
        ))

    return SimulationResult(heartbeats=heartbeats, pattern=pattern)
