"""
Unit tests for synthetic heartbeat generation.
"""

import random
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from boringstatus.heartbeats.domain import PATTERNS, generate_heartbeats, simulate_pattern

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestGenerateHeartbeats:
    def test_newest_first_at_fixed_interval(self):
        beats = generate_heartbeats(
            random.Random(7),
            monitor_id=uuid4(),
            monitor_type="http",
            now=NOW,
            count=10,
            interval_minutes=5,
            up_probability=0.9,
            degraded_probability=0.05,
        )

        assert len(beats) == 10
        assert beats[0].time == NOW
        assert (beats[0].time - beats[1].time).total_seconds() == 300

    def test_all_up_when_probability_is_one(self):
        beats = generate_heartbeats(random.Random(1), uuid4(), "ping", NOW, 20, 1, 1.0, 0.0)

        assert {b.status for b in beats} == {"up"}
        assert all(b.metrics["type"] == "ping" and b.metrics["packet_loss"] == 0 for b in beats)
        assert all(b.latency is not None for b in beats)

    def test_failures_carry_a_message(self):
        beats = generate_heartbeats(random.Random(3), uuid4(), "tcp", NOW, 30, 1, 0.0, 0.0)

        assert {b.status for b in beats} <= {"down", "error"}
        assert all(b.message for b in beats)
        assert all(b.metrics["success"] is False for b in beats)


class TestSimulatePattern:
    @pytest.mark.parametrize("pattern", PATTERNS)
    def test_every_pattern_fills_the_window(self, pattern):
        result = simulate_pattern(random.Random(11), uuid4(), "http", NOW, pattern, minutes=120, interval=5)

        assert result.count == 24
        assert result.pattern == pattern
        assert result.heartbeats[0].time < result.heartbeats[-1].time
        assert result.heartbeats[-1].time == datetime(2024, 5, 1, 11, 55, tzinfo=timezone.utc)
        assert 0 <= result.uptime <= 100

    def test_maintenance_window_is_down_in_the_middle(self):
        result = simulate_pattern(random.Random(5), uuid4(), "ping", NOW, "maintenance", minutes=100, interval=1)

        middle = result.heartbeats[45:55]
        assert {b.status for b in middle} == {"down"}
        assert result.heartbeats[0].status == "up"

    def test_recovery_ends_up(self):
        result = simulate_pattern(random.Random(9), uuid4(), "tcp", NOW, "recovery", minutes=100, interval=1)

        assert result.heartbeats[0].status == "down"
        assert {b.status for b in result.heartbeats[-10:]} == {"up"}
        assert result.uptime < 100

    def test_same_seed_same_history(self):
        first = simulate_pattern(random.Random(42), uuid4(), "http", NOW, "intermittent", 60, 5)
        second = simulate_pattern(random.Random(42), uuid4(), "http", NOW, "intermittent", 60, 5)
        assert [b.status for b in first.heartbeats] == [b.status for b in second.heartbeats]
