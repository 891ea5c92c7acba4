"""
Tests for application wiring: health, middleware headers, error bodies and
structured logging.
"""

import json
import logging

from boringstatus.shared.infrastructure.logging import REDACTED, CustomJsonFormatter


class TestApplication:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_correlation_id_is_echoed(self, client):
        response = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"
        assert response.headers["X-Response-Time"].endswith("s")

    async def test_request_log_carries_correlation_id(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="boringstatus.shared.api.middleware"):
            await client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        completed = [r for r in caplog.records if r.getMessage() == "Request completed"]
        assert [r.correlation_id for r in completed] == ["abc-123"]

    async def test_dashboard_query_latency_is_logged(self, client, tenant, caplog):
        with caplog.at_level(logging.INFO, logger="boringstatus.monitors.application.services"):
            response = await client.get("/monitors/dashboard", headers=tenant.headers)

        assert response.status_code == 200
        timed = [r for r in caplog.records if r.getMessage() == "dashboard_query completed"]
        assert len(timed) == 1
        assert timed[0].organization_id == str(tenant.organization_id)

    async def test_application_errors_carry_correlation_id(self, client):
        response = await client.get("/monitors", headers={"X-Correlation-ID": "req-9"})

        body = response.json()
        assert response.status_code == 401
        assert body["error_type"] == "UnauthorizedException"
        assert body["correlation_id"] == "req-9"


class TestJsonLogging:
    def format(self, **extra) -> dict:
        formatter = CustomJsonFormatter("%(name)s %(levelname)s %(message)s", environment="test")
        record = logging.LogRecord("boringstatus.test", logging.INFO, __file__, 1, "Hello", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return json.loads(formatter.format(record))

    def test_adds_context_fields(self):
        entry = self.format(monitor_id="m-1")

        assert entry["message"] == "Hello"
        assert entry["environment"] == "test"
        assert entry["monitor_id"] == "m-1"
        assert "timestamp" in entry

    def test_redacts_secrets(self):
        entry = self.format(password="hunter2", api_key="bs_secret", session_token="t", key="bs_x")

        assert entry["password"] == REDACTED
        assert entry["api_key"] == REDACTED
        assert entry["session_token"] == REDACTED
        assert entry["key"] == REDACTED

    def test_identifier_fields_are_kept(self):
        entry = self.format(api_key_id="2f1c0e9a", organization_id="org-1")

        assert entry["api_key_id"] == "2f1c0e9a"
        assert entry["organization_id"] == "org-1"
