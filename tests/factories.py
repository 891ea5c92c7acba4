"""
Test data builders: tenants, API keys and request payloads.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import httpx

from boringstatus.config import MemberRole
from boringstatus.core.timeutils import utcnow
from boringstatus.identity.domain import generate_api_key
from boringstatus.identity.infrastructure.models import (
    ApiKeyModel,
    MemberModel,
    OrganizationModel,
    SessionModel,
    UserModel,
)
from boringstatus.infrastructure.database import get_session_context


@dataclass
class Tenant:
    organization_id: UUID
    user_id: UUID
    session_token: str
    api_key: str

    @property
    def headers(self) -> Dict[str, str]:
        """Session-authenticated requests."""
        return {"X-Session-Token": self.session_token}

    @property
    def api_headers(self) -> Dict[str, str]:
        """Agent requests with the organization API key."""
        return {"Authorization": f"Bearer {self.api_key}"}


async def create_tenant(name: str, active_organization: bool = True) -> Tenant:
    organization_id = uuid4()
    user_id = uuid4()
    token = f"session-{uuid4().hex}"
    api_key = generate_api_key()

    async with get_session_context() as session:
        session.add(OrganizationModel(id=organization_id, name=name, slug=f"{name.lower()}-{uuid4().hex[:6]}"))
        session.add(UserModel(id=user_id, name=f"{name} Owner", email=f"owner-{uuid4().hex[:8]}@example.com"))
        await session.flush()
        session.add(MemberModel(organization_id=organization_id, user_id=user_id, role=MemberRole.OWNER))
        session.add(SessionModel(
            token=token,
            user_id=user_id,
            active_organization_id=organization_id if active_organization else None,
            expires_at=utcnow() + timedelta(days=1),
        ))
        session.add(ApiKeyModel(organization_id=organization_id, key=api_key, name=f"{name} agent"))

    return Tenant(organization_id=organization_id, user_id=user_id, session_token=token, api_key=api_key)


async def create_system_key(scopes: Optional[List[str]] = None) -> str:
    key = generate_api_key()
    async with get_session_context() as session:
        session.add(ApiKeyModel(organization_id=None, key=key, name="system", scopes=scopes or []))
    return key


def http_monitor_payload(**overrides) -> dict:
    payload = {
        "type": "http",
        "name": "Homepage",
        "target": "https://example.com",
        "frequency": 60,
        "config": {"method": "GET", "expected_status": "200-299"},
    }
    payload.update(overrides)
    return payload


def http_heartbeat_payload(monitor_id, status: str = "up", **overrides) -> dict:
    payload = {
        "monitor_id": str(monitor_id),
        "status": status,
        "metrics": {
            "type": "http",
            "dns": 12,
            "connect": 30,
            "ttfb": 120,
            "total": 180,
            "status_code": 200 if status == "up" else 503,
        },
    }
    payload.update(overrides)
    return payload


async def create_monitor(client: httpx.AsyncClient, tenant: Tenant, **overrides) -> str:
    response = await client.post("/monitors", json=http_monitor_payload(**overrides), headers=tenant.headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


async def create_channel(client: httpx.AsyncClient, tenant: Tenant, **config) -> str:
    body = {
        "name": "Ops webhook",
        "config": config or {"type": "webhook", "webhook_url": "https://hooks.example.com/ops"},
    }
    response = await client.post("/channels", json=body, headers=tenant.headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]
