"""
Heartbeats Application DTOs
===========================

Pydantic models for heartbeat ingestion, history and the development tools.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from boringstatus.core.timeutils import as_utc


# ========== Metrics (discriminated on type) ==========

class HttpMetricsDTO(BaseModel):
    """Timings in milliseconds."""
    type: Literal["http"]
    dns: float = Field(..., ge=0)
    connect: float = Field(..., ge=0)
    ttfb: float = Field(..., ge=0)
    total: float = Field(..., ge=0)
    status_code: int
    tls: Optional[float] = Field(default=None, ge=0)
    content_length: Optional[int] = Field(default=None, ge=0)
    includes_keyword: Optional[bool] = None
    excludes_keyword: Optional[bool] = None


class PingMetricsDTO(BaseModel):
    type: Literal["ping"]
    latency: float = Field(..., ge=0)
    jitter: Optional[float] = Field(default=None, ge=0)
    packet_loss: float = Field(..., ge=0, le=100)


class TcpMetricsDTO(BaseModel):
    type: Literal["tcp"]
    connect: float = Field(..., ge=0)
    success: bool


HeartbeatMetricsDTO = Annotated[
    Union[HttpMetricsDTO, PingMetricsDTO, TcpMetricsDTO],
    Field(discriminator="type")
]


# ========== Request DTOs ==========

class HeartbeatCreateDTO(BaseModel):
    """Check result reported by an agent."""
    monitor_id: UUID
    status: Literal["up", "down", "degraded", "error"]
    metrics: HeartbeatMetricsDTO
    region: str = Field(default="default", min_length=1, max_length=64)
    run_id: Optional[str] = Field(default=None, max_length=255)
    latency: Optional[int] = Field(default=None, ge=0, description="Defaults to the headline metric")
    message: Optional[str] = None
    time: Optional[datetime] = Field(default=None, description="Defaults to the time of receipt")

    @field_validator("time")
    @classmethod
    def normalize_time(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class GenerateHeartbeatsDTO(BaseModel):
    """Random statuses by probability; down/error share the remainder."""
    count: int = Field(default=50, ge=1, le=500)
    interval_minutes: int = Field(default=5, ge=1, le=60)
    up_probability: float = Field(default=0.92, ge=0, le=1)
    degraded_probability: float = Field(default=0.05, ge=0, le=1)

    @model_validator(mode="after")
    def check_probabilities(self):
        if self.up_probability + self.degraded_probability > 1:
            raise ValueError("up_probability + degraded_probability must not exceed 1")
        return self


class SimulateHeartbeatsDTO(BaseModel):
    pattern: Literal["stable", "degrading", "incident", "recovery", "intermittent", "maintenance"]
    minutes: int = Field(default=1440, ge=1, le=43200, description="Window to fill, ending now")
    interval: int = Field(default=5, ge=1, le=60, description="Minutes between heartbeats")
    label: Optional[str] = None

    @model_validator(mode="after")
    def check_window(self):
        if self.minutes < self.interval:
            raise ValueError("minutes must be at least one interval")
        return self


# ========== Response DTOs ==========

class HeartbeatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    time: datetime
    monitor_id: UUID
    region: str
    run_id: Optional[str] = None
    status: str
    latency: Optional[int] = None
    message: Optional[str] = None
    metrics: Optional[Dict[str, Any]] = None


class HeartbeatRecordedResponse(BaseModel):
    success: bool = True
    id: UUID
    run_id: Optional[str] = None


class TimeRange(BaseModel):
    start: datetime
    end: datetime


class GenerateHeartbeatsResponse(BaseModel):
    success: bool = True
    generated: int
    monitor_id: UUID
    time_range: TimeRange
    status_breakdown: Dict[str, int]


class SimulateHeartbeatsResponse(BaseModel):
    count: int
    uptime: int
    avg_latency: int
    pattern: str
    label: Optional[str] = None


class ClearHeartbeatsResponse(BaseModel):
    success: bool = True
    monitor_id: UUID
