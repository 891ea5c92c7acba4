"""
Unit tests for hourly bucketing and uptime math.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from boringstatus.heartbeats.domain import (
    Heartbeat,
    average_latency,
    hourly_buckets,
    last_24_hours,
    uptime_percentage,
)

NOW = datetime(2024, 5, 1, 12, 34, 56, tzinfo=timezone.utc)
MONITOR_ID = uuid4()


def beat(minutes_ago: int, status: str = "up", latency: int = 100) -> Heartbeat:
    return Heartbeat(
        monitor_id=MONITOR_ID,
        time=NOW - timedelta(minutes=minutes_ago),
        status=status,
        latency=latency,
    )


class TestHourlyBuckets:
    def test_window_has_one_bucket_per_hour_even_without_data(self):
        start, end = last_24_hours(NOW)
        buckets = hourly_buckets([], start, end)

        assert len(buckets) == 24
        assert buckets[0].bucket == datetime(2024, 4, 30, 13, tzinfo=timezone.utc)
        assert buckets[-1].bucket == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)
        assert all(b.avg_latency is None and b.up is None for b in buckets)

    def test_heartbeats_land_in_their_hour(self):
        start, end = last_24_hours(NOW)
        buckets = hourly_buckets(
            [beat(5, latency=100), beat(10, latency=200), beat(70, status="down", latency=900)],
            start,
            end,
        )

        current, previous = buckets[-1], buckets[-2]
        assert current.total == 2
        assert current.avg_latency == 150
        assert current.up is True
        assert previous.up is False
        assert previous.avg_latency == 900

    def test_mixed_hour_is_not_up(self):
        start, end = last_24_hours(NOW)
        buckets = hourly_buckets([beat(1), beat(2, status="degraded")], start, end)
        assert buckets[-1].up is False

    def test_heartbeats_outside_window_are_ignored(self):
        start, end = last_24_hours(NOW)
        buckets = hourly_buckets([beat(60 * 30)], start, end)
        assert sum(b.total for b in buckets) == 0

    def test_naive_times_are_treated_as_utc(self):
        start, end = last_24_hours(NOW)
        naive = Heartbeat(monitor_id=MONITOR_ID, time=datetime(2024, 5, 1, 12, 5), status="up", latency=40)
        buckets = hourly_buckets([naive], start, end)
        assert buckets[-1].total == 1


class TestUptime:
    def test_no_data_is_full_uptime(self):
        assert uptime_percentage(0, 0) == 100.0

    def test_rounds_to_two_decimals(self):
        assert uptime_percentage(2, 3) == 66.67

    def test_average_latency_skips_missing_values(self):
        beats = [beat(1, latency=100), beat(2, latency=300)]
        beats.append(Heartbeat(monitor_id=MONITOR_ID, time=NOW, status="error"))
        assert average_latency(beats) == 200
        assert average_latency([]) == 0
