"""
Shared pytest fixtures.

Fixture overview
----------------
database            - fresh in-memory SQLite schema per test
webhook_server      - records outbound notification requests (httpx.MockTransport)
notification_sender - provider registry wired to webhook_server
client              - httpx.AsyncClient against the FastAPI app
tenant / other_tenant - organization with a member session and an org API key
system_api_key      - organization-less key scoped to heartbeat:write
"""

import os
from typing import List, Set

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

import httpx
import pytest

from boringstatus.config import ApiKeyScope, Settings, get_settings
from boringstatus.infrastructure.database import close_database, create_tables, drop_tables, init_database
from boringstatus.main import create_app
from boringstatus.notifications.infrastructure import NotificationProviderRegistry, get_notification_sender
from tests.factories import Tenant, create_system_key, create_tenant

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ── Database ──────────────────────────────────────────────────────────────────


@pytest.fixture
async def database():
    init_database(TEST_DATABASE_URL)
    await create_tables()
    yield
    await drop_tables()
    await close_database()


# ── Outbound notifications ────────────────────────────────────────────────────


class FakeWebhookServer:
    """
    Answers every outbound request with `status_code` and keeps a copy.

    Hosts listed in `failing_hosts` always answer 503.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.failing_hosts: Set[str] = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code = 503 if request.url.host in self.failing_hosts else self.status_code
        return httpx.Response(status_code, json={"ok": status_code < 400})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def webhook_server() -> FakeWebhookServer:
    return FakeWebhookServer()


@pytest.fixture
def test_settings() -> Settings:
    """Fast delivery settings: one attempt, no backoff sleep."""
    return Settings(
        environment="test",
        notification_max_retries=1,
        notification_retry_base_delay=0,
        circuit_failure_threshold=3,
        public_base_url="https://app.boringstatus.test",
    )


@pytest.fixture
async def notification_sender(test_settings, webhook_server):
    registry = NotificationProviderRegistry(test_settings, transport=webhook_server.transport)
    yield registry
    await registry.close()


# ── Application ───────────────────────────────────────────────────────────────


@pytest.fixture
def app(database, notification_sender, test_settings):
    application = create_app()
    application.dependency_overrides[get_notification_sender] = lambda: notification_sender
    application.dependency_overrides[get_settings] = lambda: test_settings
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


# ── Tenants ───────────────────────────────────────────────────────────────────


@pytest.fixture
async def tenant(database) -> Tenant:
    return await create_tenant("Acme")


@pytest.fixture
async def other_tenant(database) -> Tenant:
    return await create_tenant("Globex")


@pytest.fixture
async def system_api_key(database) -> str:
    return await create_system_key([ApiKeyScope.HEARTBEAT_WRITE])
