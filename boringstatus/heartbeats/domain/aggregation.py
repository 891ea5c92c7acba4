"""
Heartbeat Aggregation
=====================

Hourly bucketing and uptime math over heartbeat windows. Runs in Python so
the same code serves PostgreSQL and SQLite.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from boringstatus.core.timeutils import as_utc, floor_to_hour
from boringstatus.heartbeats.domain.entities import Heartbeat

HOUR = timedelta(hours=1)


@dataclass
class HourlyBucket:
    """
    Aggregate of one clock hour.

    avg_latency and up are None when the hour has no heartbeats.
    up is True only when every heartbeat in the hour was up.
    """
    bucket: datetime
    total: int = 0
    up_count: int = 0
    latency_sum: int = 0
    latency_count: int = 0

    @property
    def avg_latency(self) -> Optional[int]:
        if not self.latency_count:
            return None
        return int(round(self.latency_sum / self.latency_count))

    @property
    def up(self) -> Optional[bool]:
        if not self.total:
            return None
        return self.up_count == self.total

    def add(self, heartbeat: Heartbeat) -> None:
        self.total += 1
        if heartbeat.is_up:
            self.up_count += 1
        if heartbeat.latency is not None:
            self.latency_sum += heartbeat.latency
            self.latency_count += 1


def hourly_buckets(heartbeats: Iterable[Heartbeat], start: datetime, end: datetime) -> List[HourlyBucket]:
    """
    Group heartbeats into one bucket per hour from start to end, inclusive.

    Both bounds are floored to the hour. Hours without data are still
    present so charts have a fixed number of points; heartbeats outside the
    window are ignored.
    """
    first = floor_to_hour(start)
    last = floor_to_hour(end)

    buckets: Dict[datetime, HourlyBucket] = {}
    cursor = first
    while cursor <= last:
        buckets[cursor] = HourlyBucket(bucket=cursor)
        cursor += HOUR

    for heartbeat in heartbeats:
        key = floor_to_hour(as_utc(heartbeat.time))
        bucket = buckets.get(key)
        if bucket is not None:
            bucket.add(heartbeat)

    return list(buckets.values())


def last_24_hours(now: datetime) -> Tuple[datetime, datetime]:
    """Start and end hour of the 24-bucket window ending in the current hour."""
    end = floor_to_hour(now)
    return end - 23 * HOUR, end


def uptime_percentage(up_count: int, total: int) -> float:
    """Share of up heartbeats, rounded to 2 decimals; 100 when there is no data."""
    if total <= 0:
        return 100.0
    return round(up_count / total * 100, 2)


def average_latency(heartbeats: Iterable[Heartbeat]) -> int:
    latencies = [h.latency for h in heartbeats if h.latency is not None]
    if not latencies:
        return 0
    return int(round(sum(latencies) / len(latencies)))
