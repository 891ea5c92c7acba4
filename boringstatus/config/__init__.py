"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="boringstatus", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")
    public_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL used for links in notifications"
    )

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/boringstatus",
        description="Database connection URL (async driver)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)
    create_tables_on_startup: bool = Field(
        default=True,
        description="Create missing tables at startup (use migrations in production)"
    )

    # ========== Sessions ==========
    session_cookie_name: str = Field(
        default="boringstatus_session",
        description="Cookie carrying the session token issued by the auth service"
    )
    session_header_name: str = Field(
        default="X-Session-Token",
        description="Header alternative to the session cookie"
    )

    # ========== Notifications ==========
    notification_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for outbound notification calls",
        ge=0.1,
        le=30
    )
    notification_max_retries: int = Field(
        default=3,
        description="Delivery attempts per notification",
        ge=1,
        le=10
    )
    notification_retry_base_delay: float = Field(
        default=1.0,
        description="Base delay in seconds for exponential backoff",
        ge=0
    )
    circuit_failure_threshold: int = Field(
        default=5,
        description="Consecutive failures before a provider circuit opens",
        ge=1
    )
    circuit_recovery_timeout: float = Field(
        default=60.0,
        description="Seconds before an open circuit allows a trial request",
        ge=1
    )

    # ========== SMTP (email channels) ==========
    smtp_host: Optional[str] = Field(default=None, description="SMTP server host")
    smtp_port: int = Field(default=587, description="SMTP server port", ge=1, le=65535)
    smtp_username: Optional[str] = Field(default=None, description="SMTP username")
    smtp_password: Optional[str] = Field(default=None, description="SMTP password")
    smtp_use_tls: bool = Field(default=True, description="Use STARTTLS")
    smtp_sender: str = Field(
        default="alerts@boringstatus.local",
        description="From address for alert emails"
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "https://boringstatus.local"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production", "test"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class MonitorType(str):
    """Kinds of checks a monitor can run."""
    HTTP = "http"
    PING = "ping"
    TCP = "tcp"


class HeartbeatStatus(str):
    """Outcome of a single check execution."""
    UP = "up"
    DOWN = "down"
    DEGRADED = "degraded"
    ERROR = "error"


class MonitorStatus(HeartbeatStatus):
    """Cached monitor status: the last heartbeat status, or pending."""
    PENDING = "pending"


class ChannelType(str):
    """Notification channel destinations."""
    EMAIL = "email"
    WEBHOOK = "webhook"
    SLACK = "slack"
    DISCORD = "discord"


class AlertOperator(str):
    """Comparison operators for monitor alert rules."""
    GT = "gt"
    LT = "lt"
    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"


class MemberRole(str):
    """Organization membership roles."""
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


class ApiKeyScope(str):
    """Scopes a system API key can carry."""
    HEARTBEAT_WRITE = "heartbeat:write"


# Statuses that count as an outage
UNHEALTHY_STATUSES = [HeartbeatStatus.DOWN, HeartbeatStatus.ERROR]
