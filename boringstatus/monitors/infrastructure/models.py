"""
Monitors Infrastructure Models
==============================

SQLAlchemy ORM models for monitors and their notification channel links.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from boringstatus.config import MonitorStatus
from boringstatus.core.timeutils import utcnow
from boringstatus.infrastructure.database import Base


class MonitorModel(Base):
    """
    A configured check owned by one organization.

    status/last_check_at/next_check_at cache the newest heartbeat.
    """
    __tablename__ = "monitor"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    organization_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("organization.id", ondelete="CASCADE"),
        nullable=False
    )

    type: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target: Mapped[str] = mapped_column(String(2048), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False, default=300)
    timeout: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    regions: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=lambda: ["default"])
    config: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    alert_rules: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default=MonitorStatus.PENDING)
    last_check_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    next_check_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow
    )

    __table_args__ = (
        Index("idx_monitor_organization", "organization_id"),
        Index("idx_monitor_next_check", "next_check_at"),
    )


class MonitorChannelLinkModel(Base):
    """Which channels a monitor alerts."""
    __tablename__ = "monitors_to_channels"

    monitor_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("monitor.id", ondelete="CASCADE"),
        primary_key=True
    )
    channel_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("notification_channel.id", ondelete="CASCADE"),
        primary_key=True
    )
