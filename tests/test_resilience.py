"""
Unit tests for the circuit breaker and retry helper.
"""

import pytest

from boringstatus.shared.infrastructure.resilience import CircuitBreaker, CircuitState, retry_with_backoff


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestCircuitBreaker:
    def test_opens_after_threshold(self):
        breaker = CircuitBreaker("test", failure_threshold=3, recovery_timeout=30, clock=FakeClock())

        breaker.record_failure()
        breaker.record_failure()
        assert breaker.allow_request()

        breaker.record_failure()
        assert breaker.state == CircuitState.OPEN
        assert not breaker.allow_request()

    def test_half_open_after_recovery_timeout(self):
        clock = FakeClock()
        breaker = CircuitBreaker("test", failure_threshold=1, recovery_timeout=30, clock=clock)
        breaker.record_failure()

        clock.now = 29
        assert breaker.state == CircuitState.OPEN

        clock.now = 30
        assert breaker.state == CircuitState.HALF_OPEN
        assert breaker.allow_request()

    def test_failure_while_half_open_reopens(self):
        clock = FakeClock()
        breaker = CircuitBreaker("test", failure_threshold=5, recovery_timeout=10, clock=clock)
        for _ in range(5):
            breaker.record_failure()

        clock.now = 10
        assert breaker.state == CircuitState.HALF_OPEN
        breaker.record_failure()
        assert breaker.state == CircuitState.OPEN

    def test_success_closes(self):
        breaker = CircuitBreaker("test", failure_threshold=1, recovery_timeout=0.5, clock=FakeClock())
        breaker.record_failure()
        breaker.record_success()

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 0


class TestRetryWithBackoff:
    async def test_returns_first_success(self):
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise ConnectionError("boom")
            return "ok"

        assert await retry_with_backoff(flaky, max_retries=3, base_delay=0) == "ok"
        assert len(calls) == 3

    async def test_reraises_last_error(self):
        async def broken():
            raise ValueError("still broken")

        with pytest.raises(ValueError, match="still broken"):
            await retry_with_backoff(broken, max_retries=2, base_delay=0)

    async def test_rejects_zero_attempts(self):
        calls = []

        async def never_called():
            calls.append(1)

        with pytest.raises(ValueError, match="max_retries must be at least 1"):
            await retry_with_backoff(never_called, max_retries=0)
        assert calls == []
