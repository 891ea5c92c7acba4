"""
Monitors Application DTOs
=========================

Pydantic models for monitor requests and responses.

Monitor writes are a discriminated union on `type`; each variant validates
its own target format and config shape before anything touches the database.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from boringstatus.monitors.domain import (
    MAX_ALERT_RULES,
    AlertRule,
    ExpectedStatus,
    is_hostname_or_ip,
    is_url,
    normalize_alert_rules,
)


# ========== Request DTOs ==========

class AlertRuleDTO(BaseModel):
    """One alert condition; value is always stored as a string."""
    metric: str = Field(..., min_length=1, max_length=64)
    operator: Literal["gt", "lt", "eq", "neq", "contains", "not_contains"]
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> str:
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(int(v)) if float(v).is_integer() else str(v)
        if isinstance(v, str):
            return v
        raise ValueError("Value must be a string, number or boolean")

    def to_rule(self) -> AlertRule:
        return AlertRule(metric=self.metric, operator=self.operator, value=self.value)


class HttpConfigDTO(BaseModel):
    """HTTP check settings."""
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = "GET"
    expected_status: str = Field(default="200", description="e.g. 200, 200,201 or 200-299")
    follow_redirects: bool = True
    headers: Optional[Dict[str, str]] = None
    body: Optional[str] = None
    includes_keyword: Optional[str] = None
    excludes_keyword: Optional[str] = None

    @field_validator("expected_status")
    @classmethod
    def validate_expected_status(cls, v: str) -> str:
        ExpectedStatus.parse(v)
        return v.strip()


class PingConfigDTO(BaseModel):
    """Ping checks take no settings."""


class TcpConfigDTO(BaseModel):
    """TCP/UDP port check settings."""
    port: int = Field(..., ge=1, le=65535)
    protocol: Literal["TCP", "UDP"] = "TCP"


class MonitorBaseDTO(BaseModel):
    """Fields shared by every monitor type."""
    name: str = Field(..., min_length=1, max_length=255)
    target: str = Field(..., min_length=1, max_length=2048)
    active: bool = True
    frequency: int = Field(default=300, ge=60, le=86400, description="Seconds between checks")
    timeout: int = Field(default=10, ge=1, le=60, description="Check timeout in seconds")
    regions: List[str] = Field(default_factory=lambda: ["default"])
    alert_rules: List[AlertRuleDTO] = Field(default_factory=list, max_length=MAX_ALERT_RULES)
    channel_ids: Optional[List[UUID]] = Field(
        default=None,
        description="Channels to notify; omitted on update keeps existing links"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @model_validator(mode="after")
    def dedupe_alert_rules(self):
        rules = normalize_alert_rules(r.to_rule() for r in self.alert_rules)
        self.alert_rules = [AlertRuleDTO(**r.to_dict()) for r in rules]
        return self

    def rules(self) -> List[AlertRule]:
        return [r.to_rule() for r in self.alert_rules]

    def config_dict(self) -> Dict[str, Any]:
        return self.config.model_dump(exclude_none=True)


class HttpMonitorDTO(MonitorBaseDTO):
    type: Literal["http"]
    config: HttpConfigDTO = Field(default_factory=HttpConfigDTO)

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        v = v.strip()
        if not is_url(v):
            raise ValueError("Target must be a valid URL")
        return v


class PingMonitorDTO(MonitorBaseDTO):
    type: Literal["ping"]
    config: PingConfigDTO = Field(default_factory=PingConfigDTO)

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        v = v.strip()
        if not is_hostname_or_ip(v):
            raise ValueError("Target must be a hostname or IP address")
        return v


class TcpMonitorDTO(MonitorBaseDTO):
    type: Literal["tcp"]
    config: TcpConfigDTO

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        v = v.strip()
        if not is_hostname_or_ip(v):
            raise ValueError("Target must be a hostname or IP address")
        return v


MonitorWriteDTO = Annotated[
    Union[HttpMonitorDTO, PingMonitorDTO, TcpMonitorDTO],
    Field(discriminator="type")
]


class MonitorWriteRequest(RootModel[MonitorWriteDTO]):
    """Monitor write body; `root` holds the variant selected by `type`."""


class ToggleActiveDTO(BaseModel):
    active: bool


# ========== Response DTOs ==========

class ChannelSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: str


class MonitorResponse(BaseModel):
    """Monitor as stored, with linked channel ids."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    type: str
    name: str
    target: str
    active: bool
    frequency: int
    timeout: int
    regions: List[str]
    config: Dict[str, Any]
    alert_rules: List[AlertRuleDTO]
    status: str
    last_check_at: Optional[datetime] = None
    next_check_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    channel_ids: List[UUID] = Field(default_factory=list)


class MonitorListItem(MonitorResponse):
    channels: List[ChannelSummary] = Field(default_factory=list)


class MutationResponse(BaseModel):
    success: bool = True
    id: UUID


class LatencyBucketResponse(BaseModel):
    """One hour of the latency chart; nulls mark hours without heartbeats."""
    bucket: datetime
    avg_latency: Optional[int] = None
    up: Optional[bool] = None


class MonitorIssueResponse(BaseModel):
    id: str
    message: str
    severity: Literal["high", "medium", "low"]
    time: datetime


class DashboardMonitorResponse(BaseModel):
    id: UUID
    name: str
    type: str
    target: str
    active: bool
    status: str
    uptime: float
    latency_history: List[LatencyBucketResponse]
    issues: List[MonitorIssueResponse]


class RecentCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    time: datetime
    region: str
    status: str
    latency: Optional[int] = None
    message: Optional[str] = None
    metrics: Optional[Dict[str, Any]] = None


class MonitorStatsResponse(BaseModel):
    uptime_24h: float
    uptime_30d: float
    avg_latency: int


class MonitorDetailsResponse(BaseModel):
    monitor: MonitorResponse
    chart: List[LatencyBucketResponse]
    recent_checks: List[RecentCheckResponse]
    stats: MonitorStatsResponse
    channel_ids: List[UUID]
