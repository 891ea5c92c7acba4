"""
Notifications Application DTOs
==============================

Pydantic models for channel management. The channel config is a
discriminated union on `type`; the type is stored on the channel row and
stripped from the persisted config.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Optional, Union
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, EmailStr, Field, field_validator


class EmailConfigDTO(BaseModel):
    type: Literal["email"]
    email: EmailStr


class WebhookConfigDTO(BaseModel):
    type: Literal["webhook"]
    webhook_url: AnyHttpUrl


class SlackConfigDTO(BaseModel):
    type: Literal["slack"]
    webhook_url: AnyHttpUrl
    channel: Optional[str] = None


class DiscordConfigDTO(BaseModel):
    type: Literal["discord"]
    webhook_url: AnyHttpUrl


ChannelConfigDTO = Annotated[
    Union[EmailConfigDTO, WebhookConfigDTO, SlackConfigDTO, DiscordConfigDTO],
    Field(discriminator="type")
]


class ChannelWriteDTO(BaseModel):
    """Request model for creating or replacing a channel."""
    name: str = Field(..., min_length=1, max_length=255)
    config: ChannelConfigDTO

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @property
    def type(self) -> str:
        return self.config.type

    def config_dict(self) -> Dict[str, Any]:
        return self.config.model_dump(mode="json", exclude={"type"}, exclude_none=True)


class ChannelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    name: str
    type: str
    config: Dict[str, Any]
    verified: bool
    last_failure_at: Optional[datetime] = None
    failure_count: int
    created_at: datetime


class NotificationTestResponse(BaseModel):
    success: bool = True
    message: str


class ChannelLinkResponse(BaseModel):
    success: bool = True


class ChannelDeletedResponse(BaseModel):
    success: bool = True
    id: UUID
