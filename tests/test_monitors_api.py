"""
API tests for monitor management, tenant isolation and dashboards.
"""

from sqlalchemy import func, select

from boringstatus.heartbeats.infrastructure.models import HeartbeatModel
from boringstatus.infrastructure.database import get_session_context
from boringstatus.monitors.infrastructure.models import MonitorChannelLinkModel
from tests.factories import create_channel, create_monitor, http_heartbeat_payload, http_monitor_payload


def error_fields(response) -> set:
    return {part for error in response.json()["detail"] for part in error["loc"]}


class TestCreateMonitor:
    async def test_create_and_read_back(self, client, tenant):
        monitor_id = await create_monitor(
            client,
            tenant,
            alert_rules=[{"metric": "response_time", "operator": "gt", "value": 800}],
        )

        response = await client.get(f"/monitors/{monitor_id}", headers=tenant.headers)

        assert response.status_code == 200
        monitor = response.json()
        assert monitor["organization_id"] == str(tenant.organization_id)
        assert monitor["status"] == "pending"
        assert monitor["config"]["expected_status"] == "200-299"
        assert monitor["alert_rules"] == [{"metric": "response_time", "operator": "gt", "value": "800"}]
        assert monitor["channel_ids"] == []

    async def test_http_target_must_be_url(self, client, tenant):
        response = await client.post(
            "/monitors",
            json=http_monitor_payload(target="not-a-url"),
            headers=tenant.headers,
        )

        assert response.status_code == 422
        assert "target" in error_fields(response)

        listed = await client.get("/monitors", headers=tenant.headers)
        assert listed.json() == []

    async def test_ping_target_must_be_host(self, client, tenant):
        response = await client.post(
            "/monitors",
            json={"type": "ping", "name": "Gateway", "target": "https://example.com"},
            headers=tenant.headers,
        )
        assert response.status_code == 422
        assert "target" in error_fields(response)

    async def test_tcp_requires_valid_port(self, client, tenant):
        body = {"type": "tcp", "name": "Postgres", "target": "db.example.com", "config": {"port": 70000}}
        response = await client.post("/monitors", json=body, headers=tenant.headers)
        assert response.status_code == 422
        assert "port" in error_fields(response)

        body["config"]["port"] = 5432
        response = await client.post("/monitors", json=body, headers=tenant.headers)
        assert response.status_code == 201

    async def test_frequency_bounds(self, client, tenant):
        response = await client.post("/monitors", json=http_monitor_payload(frequency=30), headers=tenant.headers)
        assert response.status_code == 422

    async def test_body_rules_and_duplicates_are_dropped(self, client, tenant):
        rule = {"metric": "status_code", "operator": "neq", "value": "200"}
        monitor_id = await create_monitor(
            client,
            tenant,
            alert_rules=[rule, rule, {"metric": "body", "operator": "contains", "value": "error"}],
        )

        monitor = (await client.get(f"/monitors/{monitor_id}", headers=tenant.headers)).json()
        assert monitor["alert_rules"] == [rule]

    async def test_links_own_channels(self, client, tenant):
        channel_id = await create_channel(client, tenant)
        monitor_id = await create_monitor(client, tenant, channel_ids=[channel_id])

        listed = (await client.get("/monitors", headers=tenant.headers)).json()

        assert listed[0]["id"] == monitor_id
        assert listed[0]["channel_ids"] == [channel_id]
        assert listed[0]["channels"][0]["type"] == "webhook"

    async def test_foreign_channel_fails_whole_create(self, client, tenant, other_tenant):
        foreign_channel = await create_channel(client, other_tenant)

        response = await client.post(
            "/monitors",
            json=http_monitor_payload(channel_ids=[foreign_channel]),
            headers=tenant.headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "One or more channels not found or unauthorized"
        assert (await client.get("/monitors", headers=tenant.headers)).json() == []

        async with get_session_context() as session:
            links = await session.scalar(select(func.count()).select_from(MonitorChannelLinkModel))
        assert links == 0

    async def test_foreign_channel_fails_whole_update(self, client, tenant, other_tenant):
        own_channel = await create_channel(client, tenant)
        foreign_channel = await create_channel(client, other_tenant)
        monitor_id = await create_monitor(client, tenant, channel_ids=[own_channel])

        response = await client.put(
            f"/monitors/{monitor_id}",
            json=http_monitor_payload(name="Renamed", frequency=120, channel_ids=[own_channel, foreign_channel]),
            headers=tenant.headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "One or more channels not found or unauthorized"
        monitor = (await client.get(f"/monitors/{monitor_id}", headers=tenant.headers)).json()
        assert monitor["name"] == "Homepage"
        assert monitor["frequency"] == 60
        assert monitor["channel_ids"] == [own_channel]


class TestTenantIsolation:
    async def test_other_organization_cannot_see_or_change_monitor(self, client, tenant, other_tenant):
        monitor_id = await create_monitor(client, tenant)

        assert (await client.get("/monitors", headers=other_tenant.headers)).json() == []
        assert (await client.get(f"/monitors/{monitor_id}", headers=other_tenant.headers)).status_code == 404
        assert (await client.get(f"/monitors/{monitor_id}/details", headers=other_tenant.headers)).status_code == 404

        update = await client.put(
            f"/monitors/{monitor_id}",
            json=http_monitor_payload(name="Hijacked"),
            headers=other_tenant.headers,
        )
        assert update.status_code == 404

        toggle = await client.patch(
            f"/monitors/{monitor_id}/active",
            json={"active": False},
            headers=other_tenant.headers,
        )
        assert toggle.status_code == 404

        delete = await client.delete(f"/monitors/{monitor_id}", headers=other_tenant.headers)
        assert delete.status_code == 404

        monitor = (await client.get(f"/monitors/{monitor_id}", headers=tenant.headers)).json()
        assert monitor["name"] == "Homepage"
        assert monitor["active"] is True


class TestUpdateMonitor:
    async def test_update_replaces_fields_and_keeps_links_when_omitted(self, client, tenant):
        channel_id = await create_channel(client, tenant)
        monitor_id = await create_monitor(client, tenant, channel_ids=[channel_id])

        response = await client.put(
            f"/monitors/{monitor_id}",
            json=http_monitor_payload(name="Homepage (EU)", frequency=120),
            headers=tenant.headers,
        )
        assert response.status_code == 200

        monitor = (await client.get(f"/monitors/{monitor_id}", headers=tenant.headers)).json()
        assert monitor["name"] == "Homepage (EU)"
        assert monitor["frequency"] == 120
        assert monitor["channel_ids"] == [channel_id]

    async def test_update_with_empty_channels_unlinks(self, client, tenant):
        channel_id = await create_channel(client, tenant)
        monitor_id = await create_monitor(client, tenant, channel_ids=[channel_id])

        await client.put(
            f"/monitors/{monitor_id}",
            json=http_monitor_payload(channel_ids=[]),
            headers=tenant.headers,
        )

        monitor = (await client.get(f"/monitors/{monitor_id}", headers=tenant.headers)).json()
        assert monitor["channel_ids"] == []

    async def test_toggle_active(self, client, tenant):
        monitor_id = await create_monitor(client, tenant)

        response = await client.patch(f"/monitors/{monitor_id}/active", json={"active": False}, headers=tenant.headers)

        assert response.json() == {"success": True, "id": monitor_id}
        monitor = (await client.get(f"/monitors/{monitor_id}", headers=tenant.headers)).json()
        assert monitor["active"] is False


class TestDeleteMonitor:
    async def test_delete_removes_heartbeats_and_links(self, client, tenant):
        channel_id = await create_channel(client, tenant)
        monitor_id = await create_monitor(client, tenant, channel_ids=[channel_id])
        for status in ("up", "up", "down"):
            recorded = await client.post(
                "/heartbeats",
                json=http_heartbeat_payload(monitor_id, status),
                headers=tenant.api_headers,
            )
            assert recorded.status_code == 201

        response = await client.delete(f"/monitors/{monitor_id}", headers=tenant.headers)
        assert response.status_code == 200

        async with get_session_context() as session:
            heartbeats = await session.scalar(select(func.count()).select_from(HeartbeatModel))
            links = await session.scalar(select(func.count()).select_from(MonitorChannelLinkModel))
        assert heartbeats == 0
        assert links == 0

        channels = (await client.get("/channels", headers=tenant.headers)).json()
        assert [c["id"] for c in channels] == [channel_id]


class TestDashboard:
    async def test_dashboard_without_heartbeats(self, client, tenant):
        await create_monitor(client, tenant)

        dashboard = (await client.get("/monitors/dashboard", headers=tenant.headers)).json()

        assert len(dashboard) == 1
        assert dashboard[0]["uptime"] == 100.0
        assert len(dashboard[0]["latency_history"]) == 24
        assert dashboard[0]["issues"] == []

    async def test_dashboard_reports_uptime_and_issues(self, client, tenant):
        monitor_id = await create_monitor(client, tenant)
        for status in ("up", "up", "up", "down"):
            await client.post(
                "/heartbeats",
                json=http_heartbeat_payload(monitor_id, status, message="HTTP 503" if status == "down" else None),
                headers=tenant.api_headers,
            )

        entry = (await client.get("/monitors/dashboard", headers=tenant.headers)).json()[0]

        assert entry["status"] == "down"
        assert entry["uptime"] == 75.0
        assert entry["latency_history"][-1]["avg_latency"] == 180
        assert entry["latency_history"][-1]["up"] is False
        assert [i["message"] for i in entry["issues"]] == ["HTTP 503"]
        assert entry["issues"][0]["severity"] == "high"

    async def test_details(self, client, tenant):
        monitor_id = await create_monitor(client, tenant)
        for status in ("up", "down"):
            await client.post(
                "/heartbeats",
                json=http_heartbeat_payload(monitor_id, status),
                headers=tenant.api_headers,
            )

        details = (await client.get(f"/monitors/{monitor_id}/details", headers=tenant.headers)).json()

        assert details["monitor"]["id"] == monitor_id
        assert len(details["chart"]) == 24
        assert len(details["recent_checks"]) == 2
        assert details["stats"] == {"uptime_24h": 50.0, "uptime_30d": 50.0, "avg_latency": 180}
