"""
Status Pages Infrastructure Models
==================================

SQLAlchemy ORM models for status pages and the monitors they show.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from boringstatus.core.timeutils import utcnow
from boringstatus.infrastructure.database import Base


class StatusPageModel(Base):
    """
    Public status page of one organization, addressed by slug or custom
    domain. A non-null password makes the page private.
    """
    __tablename__ = "status_page"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    organization_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("organization.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    custom_domain: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    password: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class StatusPageMonitorLinkModel(Base):
    __tablename__ = "status_page_to_monitors"

    status_page_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("status_page.id", ondelete="CASCADE"),
        primary_key=True
    )
    monitor_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("monitor.id", ondelete="CASCADE"),
        primary_key=True
    )
