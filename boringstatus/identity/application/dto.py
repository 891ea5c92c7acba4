"""
Identity Application DTOs
=========================

Pydantic models for the API key endpoints.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApiKeyCreateDTO(BaseModel):
    """Request model for issuing an API key."""
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    tags: List[str] = Field(default_factory=lambda: ["default"], description="Free-form labels")
    scopes: List[str] = Field(default_factory=list, description="Granted scopes")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class ApiKeyResponse(BaseModel):
    """API key as listed; the secret is masked."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    masked_key: str
    tags: List[str]
    scopes: List[str]
    is_active: bool
    last_used_at: Optional[datetime] = None
    created_at: datetime


class ApiKeyCreatedResponse(ApiKeyResponse):
    """Returned once, at creation: includes the full secret."""
    key: str


class RevokeResponse(BaseModel):
    success: bool = True
