"""
Heartbeats Infrastructure Models
================================

SQLAlchemy ORM model for the heartbeat time series.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from boringstatus.config import HeartbeatStatus
from boringstatus.core.timeutils import utcnow
from boringstatus.infrastructure.database import Base


class HeartbeatModel(Base):
    """
    One check result. Rows are append-only and go away with their monitor.
    """
    __tablename__ = "heartbeat"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    monitor_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("monitor.id", ondelete="CASCADE"),
        nullable=False
    )

    region: Mapped[str] = mapped_column(String(64), nullable=False, default="default")
    run_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=HeartbeatStatus.UP)
    latency: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    metrics: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)


Index("idx_heartbeat_monitor_time", HeartbeatModel.monitor_id, HeartbeatModel.time.desc())
