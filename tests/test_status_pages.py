"""
Tests for status page management and the public view.
"""

import pytest

from tests.factories import create_monitor


def page_payload(**overrides) -> dict:
    payload = {
        "name": "Acme Status",
        "slug": "acme",
        "description": "Live status of Acme services",
        "monitor_ids": [],
    }
    payload.update(overrides)
    return payload


async def create_page(client, tenant, **overrides) -> str:
    response = await client.post("/status-pages", json=page_payload(**overrides), headers=tenant.headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestManageStatusPages:
    async def test_create_and_get(self, client, tenant):
        monitor_id = await create_monitor(client, tenant)
        page_id = await create_page(client, tenant, monitor_ids=[monitor_id], password="hunter2")

        page = (await client.get(f"/status-pages/{page_id}", headers=tenant.headers)).json()

        assert page["slug"] == "acme"
        assert page["is_private"] is True
        assert page["monitor_ids"] == [monitor_id]
        assert page["monitors"][0] == {"id": monitor_id, "name": "Homepage", "status": "pending"}
        assert "password" not in page

    @pytest.mark.parametrize("slug", ["Acme", "acme status", "acme_status", ""])
    async def test_slug_format(self, client, tenant, slug):
        response = await client.post("/status-pages", json=page_payload(slug=slug), headers=tenant.headers)
        assert response.status_code == 422

    async def test_empty_custom_domain_and_password_are_null(self, client, tenant):
        page_id = await create_page(client, tenant, custom_domain="", password="")

        page = (await client.get(f"/status-pages/{page_id}", headers=tenant.headers)).json()
        assert page["custom_domain"] is None
        assert page["is_private"] is False

    async def test_slug_is_globally_unique(self, client, tenant, other_tenant):
        await create_page(client, tenant)

        response = await client.post("/status-pages", json=page_payload(), headers=other_tenant.headers)

        assert response.status_code == 409
        assert response.json()["details"] == {"field": "slug"}

    async def test_custom_domain_is_unique(self, client, tenant):
        await create_page(client, tenant, custom_domain="status.acme.com")

        response = await client.post(
            "/status-pages",
            json=page_payload(slug="acme-eu", custom_domain="Status.Acme.com"),
            headers=tenant.headers,
        )
        assert response.status_code == 409

    async def test_foreign_monitors_are_rejected(self, client, tenant, other_tenant):
        foreign_monitor = await create_monitor(client, other_tenant)

        response = await client.post(
            "/status-pages",
            json=page_payload(monitor_ids=[foreign_monitor]),
            headers=tenant.headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "One or more monitors not found or unauthorized"
        assert (await client.get("/status-pages", headers=tenant.headers)).json() == []

    async def test_update_replaces_monitors_and_keeps_own_slug(self, client, tenant):
        first = await create_monitor(client, tenant)
        second = await create_monitor(client, tenant, name="API", target="https://api.example.com")
        page_id = await create_page(client, tenant, monitor_ids=[first])

        response = await client.put(
            f"/status-pages/{page_id}",
            json=page_payload(name="Acme", monitor_ids=[second]),
            headers=tenant.headers,
        )

        assert response.status_code == 200
        page = (await client.get(f"/status-pages/{page_id}", headers=tenant.headers)).json()
        assert page["name"] == "Acme"
        assert page["monitor_ids"] == [second]

    async def test_pages_are_tenant_scoped(self, client, tenant, other_tenant):
        page_id = await create_page(client, tenant)

        assert (await client.get("/status-pages", headers=other_tenant.headers)).json() == []
        assert (await client.get(f"/status-pages/{page_id}", headers=other_tenant.headers)).status_code == 404
        assert (await client.delete(f"/status-pages/{page_id}", headers=other_tenant.headers)).status_code == 404

    async def test_delete(self, client, tenant):
        page_id = await create_page(client, tenant)

        response = await client.delete(f"/status-pages/{page_id}", headers=tenant.headers)

        assert response.status_code == 200
        assert (await client.get("/status/acme")).status_code == 404

    async def test_deleting_a_monitor_removes_it_from_pages(self, client, tenant):
        monitor_id = await create_monitor(client, tenant)
        page_id = await create_page(client, tenant, monitor_ids=[monitor_id])

        await client.delete(f"/monitors/{monitor_id}", headers=tenant.headers)

        page = (await client.get(f"/status-pages/{page_id}", headers=tenant.headers)).json()
        assert page["monitor_ids"] == []


class TestPublicStatusPage:
    async def test_public_page_shows_monitor_status_only(self, client, tenant):
        monitor_id = await create_monitor(client, tenant)
        await create_page(client, tenant, monitor_ids=[monitor_id])

        response = await client.get("/status/acme")

        assert response.status_code == 200
        page = response.json()
        assert page["name"] == "Acme Status"
        assert page["monitors"] == [{"id": monitor_id, "name": "Homepage", "status": "pending"}]
        assert "organization_id" not in page
        assert "password" not in page

    async def test_unknown_slug(self, client, database):
        assert (await client.get("/status/nope")).status_code == 404

    async def test_private_page_needs_password(self, client, tenant):
        await create_page(client, tenant, password="hunter2")

        assert (await client.get("/status/acme")).status_code == 404
        wrong = await client.get("/status/acme", headers={"X-Status-Page-Password": "hunter3"})
        assert wrong.status_code == 404

        right = await client.get("/status/acme", headers={"X-Status-Page-Password": "hunter2"})
        assert right.status_code == 200
        assert "password" not in right.json()
