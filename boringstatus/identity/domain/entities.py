"""
Identity Domain Entities
========================

Who is calling: a session-authenticated organization member, or a machine
client holding an API key.
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

API_KEY_PREFIX = "bs_"
API_KEY_RANDOM_BYTES = 24


def generate_api_key() -> str:
    """New secret: prefix plus 48 hex characters."""
    return f"{API_KEY_PREFIX}{secrets.token_hex(API_KEY_RANDOM_BYTES)}"


def mask_api_key(key: str) -> str:
    """Show only the prefix and last four characters of a key."""
    if len(key) <= len(API_KEY_PREFIX) + 4:
        return "*" * len(key)
    return f"{key[:len(API_KEY_PREFIX)]}...{key[-4:]}"


@dataclass(frozen=True)
class SessionPrincipal:
    """A logged-in user acting inside their active organization."""

    user_id: UUID
    organization_id: UUID


@dataclass
class ApiKeyPrincipal:
    """
    An authenticated API key.

    Organization keys act for their organization. System keys have no
    organization and may only do what their scopes name.
    """

    key_id: UUID
    organization_id: Optional[UUID]
    scopes: List[str] = field(default_factory=list)
    is_active: bool = True
    last_used_at: Optional[datetime] = None

    @property
    def is_system_key(self) -> bool:
        return self.organization_id is None

    def allows(self, scope: str) -> bool:
        """Whether this key may perform an action guarded by scope."""
        if not self.is_active:
            return False
        if self.is_system_key:
            return scope in self.scopes
        return True

    def can_access_organization(self, organization_id: UUID) -> bool:
        """System keys span tenants; organization keys see only their own."""
        return self.is_system_key or self.organization_id == organization_id
