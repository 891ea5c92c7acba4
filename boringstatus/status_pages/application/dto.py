"""
Status Pages Application DTOs
=============================

Pydantic models for status page management and the public view.
"""

import re
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

SLUG_PATTERN = r"^[a-z0-9-]+$"
DOMAIN_PATTERN = re.compile(r"^([a-z0-9]+(-[a-z0-9]+)*\.)+[a-z]{2,}$", re.IGNORECASE)


class StatusPageWriteDTO(BaseModel):
    """
    Request model for creating or replacing a status page.

    Empty custom_domain and password are stored as null. monitor_ids
    replaces the page's monitors on every write.
    """
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(
        ...,
        min_length=1,
        max_length=255,
        pattern=SLUG_PATTERN,
        description="Lowercase letters, numbers and hyphens"
    )
    description: Optional[str] = None
    custom_domain: Optional[str] = None
    password: Optional[str] = None
    monitor_ids: List[UUID] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("custom_domain")
    @classmethod
    def validate_custom_domain(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v.strip() == "":
            return None
        v = v.strip()
        if not DOMAIN_PATTERN.match(v):
            raise ValueError("Must be a valid domain")
        return v.lower()

    @field_validator("password")
    @classmethod
    def empty_password_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class StatusPageMonitor(BaseModel):
    """What a status page reveals about a monitor."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    status: str


class StatusPageResponse(BaseModel):
    """Status page as seen by its organization; the password is never returned."""
    id: UUID
    organization_id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    custom_domain: Optional[str] = None
    is_private: bool
    created_at: datetime
    updated_at: datetime
    monitor_ids: List[UUID] = Field(default_factory=list)
    monitors: List[StatusPageMonitor] = Field(default_factory=list)


class PublicStatusPageResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    custom_domain: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    monitors: List[StatusPageMonitor]


class StatusPageMutationResponse(BaseModel):
    success: bool = True
    id: UUID
