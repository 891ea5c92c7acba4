"""
API tests for session resolution and API key management.
"""

from tests.factories import create_tenant, http_heartbeat_payload


class TestSessions:
    async def test_missing_session_is_unauthorized(self, client):
        response = await client.get("/monitors")

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized: You must be in an active Organization."

    async def test_unknown_token_is_unauthorized(self, client):
        response = await client.get("/monitors", headers={"X-Session-Token": "nope"})
        assert response.status_code == 401

    async def test_session_without_active_organization(self, client, database):
        lonely = await create_tenant("Initech", active_organization=False)
        response = await client.get("/monitors", headers=lonely.headers)
        assert response.status_code == 401

    async def test_session_cookie_is_accepted(self, client, tenant):
        client.cookies.set("boringstatus_session", tenant.session_token)
        response = await client.get("/monitors")
        assert response.status_code == 200


class TestApiKeys:
    async def test_create_returns_secret_once(self, client, tenant):
        response = await client.post(
            "/api-keys",
            json={"name": "eu-west agent", "tags": ["eu"]},
            headers=tenant.headers,
        )

        assert response.status_code == 201
        created = response.json()
        assert created["key"].startswith("bs_")
        assert created["masked_key"] == f"bs_...{created['key'][-4:]}"

        listed = (await client.get("/api-keys", headers=tenant.headers)).json()
        assert created["id"] in [k["id"] for k in listed]
        assert all("key" not in k for k in listed)

    async def test_listing_is_scoped_to_organization(self, client, tenant, other_tenant):
        await client.post("/api-keys", json={"name": "acme"}, headers=tenant.headers)

        listed = (await client.get("/api-keys", headers=other_tenant.headers)).json()
        assert [k["name"] for k in listed] == ["Globex agent"]

    async def test_revoked_key_is_rejected(self, client, tenant):
        created = (await client.post("/api-keys", json={"name": "temp"}, headers=tenant.headers)).json()

        response = await client.post(f"/api-keys/{created['id']}/revoke", headers=tenant.headers)
        assert response.status_code == 200

        heartbeat = await client.post(
            "/heartbeats",
            json=http_heartbeat_payload("00000000-0000-0000-0000-000000000000"),
            headers={"Authorization": f"Bearer {created['key']}"},
        )
        assert heartbeat.status_code == 401

    async def test_cannot_revoke_other_organizations_key(self, client, tenant, other_tenant):
        created = (await client.post("/api-keys", json={"name": "mine"}, headers=tenant.headers)).json()

        response = await client.post(f"/api-keys/{created['id']}/revoke", headers=other_tenant.headers)
        assert response.status_code == 404
