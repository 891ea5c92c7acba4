"""
Heartbeats Application Services
===============================

Use cases for heartbeat ingestion and history, plus the development tools
that fill a monitor with synthetic data.
"""

import random
from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from boringstatus.config import HeartbeatStatus, Settings
from boringstatus.core import ForbiddenException, ResourceNotFoundException, ValidationException
from boringstatus.core.timeutils import as_utc, utcnow
from boringstatus.heartbeats.application.dto import (
    ClearHeartbeatsResponse,
    GenerateHeartbeatsDTO,
    GenerateHeartbeatsResponse,
    HeartbeatCreateDTO,
    HeartbeatRecordedResponse,
    HeartbeatResponse,
    SimulateHeartbeatsDTO,
    SimulateHeartbeatsResponse,
    TimeRange,
)
from boringstatus.heartbeats.domain import (
    AlertEvent,
    Heartbeat,
    evaluate_alerts,
    generate_heartbeats,
    latency_from_metrics,
    simulate_pattern,
)
from boringstatus.identity.domain import ApiKeyPrincipal
from boringstatus.monitors.domain import Monitor
from boringstatus.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class IHeartbeatRepository(ABC):
    """Interface for heartbeat data access."""

    @abstractmethod
    async def add(self, heartbeat: Heartbeat) -> Heartbeat:
        """Insert one heartbeat; returns it with its id."""

    @abstractmethod
    async def add_many(self, heartbeats: Sequence[Heartbeat]) -> None:
        """Bulk insert."""

    @abstractmethod
    async def list_range(self, monitor_id: UUID, start: datetime, end: datetime) -> List[Heartbeat]:
        """Heartbeats with start < time <= end, newest first."""

    @abstractmethod
    async def latest(self, monitor_id: UUID, before: Optional[datetime] = None) -> Optional[Heartbeat]:
        """Newest heartbeat, optionally only those at or before a time."""

    @abstractmethod
    async def recent(self, monitor_id: UUID, limit: int) -> List[Heartbeat]:
        """The newest `limit` heartbeats."""

    @abstractmethod
    async def list_since(self, monitor_ids: Sequence[UUID], since: datetime) -> List[Heartbeat]:
        """Heartbeats of several monitors with time >= since, oldest first."""

    @abstractmethod
    async def count_since(self, monitor_id: UUID, since: datetime) -> Tuple[int, int]:
        """(up, total) counts of heartbeats with time > since."""

    @abstractmethod
    async def delete_for_monitor(self, monitor_id: UUID) -> int:
        """Remove all heartbeats of a monitor; returns the number removed."""


class IMonitorStateRepository(ABC):
    """The part of monitor storage heartbeat ingestion needs."""

    @abstractmethod
    async def get(self, monitor_id: UUID) -> Optional[Monitor]:
        """Any monitor, regardless of organization."""

    @abstractmethod
    async def get_owned(self, organization_id: UUID, monitor_id: UUID) -> Optional[Monitor]:
        """Monitor if it belongs to the organization."""

    @abstractmethod
    async def save_state(self, monitor: Monitor) -> None:
        """Persist status, last_check_at and next_check_at."""


# ========== Application Services ==========

class HeartbeatService:
    """Heartbeat ingestion and history."""

    def __init__(self, heartbeat_repository: IHeartbeatRepository, monitor_repository: IMonitorStateRepository):
        self._heartbeats = heartbeat_repository
        self._monitors = monitor_repository

    async def record_heartbeat(
        self,
        principal: ApiKeyPrincipal,
        data: HeartbeatCreateDTO
    ) -> Tuple[HeartbeatRecordedResponse, List[AlertEvent]]:
        """
        Store a check result and refresh the monitor's cached state.

        Both writes share the caller's transaction. Returns the alert
        events the heartbeat triggers; delivering them is up to the caller
        once the transaction has committed.

        Raises:
            ResourceNotFoundException: unknown monitor, or a monitor of
                another organization for org-bound keys
            ValidationException: metrics type differs from the monitor type
        """
        monitor = await self._monitors.get(data.monitor_id)
        if monitor is None or not principal.can_access_organization(monitor.organization_id):
            raise ResourceNotFoundException("Monitor", str(data.monitor_id))

        if data.metrics.type != monitor.type:
            raise ValidationException(
                f"Metrics type '{data.metrics.type}' does not match monitor type '{monitor.type}'",
                field="metrics"
            )

        now = utcnow()
        checked_at = data.time or now
        metrics = data.metrics.model_dump(exclude_none=True)
        latency = data.latency if data.latency is not None else latency_from_metrics(metrics)

        previous = await self._heartbeats.latest(monitor.id, before=checked_at)

        heartbeat = await self._heartbeats.add(Heartbeat(
            monitor_id=monitor.id,
            time=checked_at,
            status=data.status,
            region=data.region,
            latency=latency,
            message=data.message,
            metrics=metrics,
            run_id=data.run_id,
        ))

        monitor.record_check(data.status, checked_at, now)
        await self._monitors.save_state(monitor)

        events = evaluate_alerts(
            monitor_id=monitor.id,
            monitor_name=monitor.name,
            target=monitor.display_target,
            rules=monitor.alert_rules,
            previous=previous,
            current=heartbeat,
        )

        logger.info(
            "Heartbeat recorded",
            extra={
                "monitor_id": str(monitor.id),
                "status": data.status,
                "latency_ms": latency,
                "alerts": len(events),
            }
        )

        return HeartbeatRecordedResponse(id=heartbeat.id, run_id=heartbeat.run_id), events

    async def get_heartbeats_for_monitor(
        self,
        organization_id: UUID,
        monitor_id: UUID,
        start: datetime,
        end: datetime
    ) -> List[HeartbeatResponse]:
        await self._require_monitor(organization_id, monitor_id)
        heartbeats = await self._heartbeats.list_range(monitor_id, as_utc(start), as_utc(end))
        return [HeartbeatResponse.model_validate(h, from_attributes=True) for h in heartbeats]

    async def get_latest_heartbeat(self, organization_id: UUID, monitor_id: UUID) -> Optional[HeartbeatResponse]:
        await self._require_monitor(organization_id, monitor_id)
        heartbeat = await self._heartbeats.latest(monitor_id)
        if heartbeat is None:
            return None
        return HeartbeatResponse.model_validate(heartbeat, from_attributes=True)

    async def _require_monitor(self, organization_id: UUID, monitor_id: UUID) -> Monitor:
        monitor = await self._monitors.get_owned(organization_id, monitor_id)
        if monitor is None:
            raise ResourceNotFoundException("Monitor", str(monitor_id))
        return monitor


class DevHeartbeatService:
    """
    Synthetic heartbeat tooling for local development.

    Every operation is refused in production.
    """

    def __init__(
        self,
        heartbeat_repository: IHeartbeatRepository,
        monitor_repository: IMonitorStateRepository,
        config: Settings,
        rng: Optional[random.Random] = None
    ):
        self._heartbeats = heartbeat_repository
        self._monitors = monitor_repository
        self._settings = config
        self._rng = rng or random.Random()

    async def generate_fake_heartbeats(
        self,
        organization_id: UUID,
        monitor_id: UUID,
        data: GenerateHeartbeatsDTO
    ) -> GenerateHeartbeatsResponse:
        monitor = await self._prepare(organization_id, monitor_id)
        now = utcnow()

        heartbeats = generate_heartbeats(
            self._rng,
            monitor_id=monitor.id,
            monitor_type=monitor.type,
            now=now,
            count=data.count,
            interval_minutes=data.interval_minutes,
            up_probability=data.up_probability,
            degraded_probability=data.degraded_probability,
        )
        await self._heartbeats.add_many(heartbeats)

        newest = heartbeats[0]
        monitor.record_check(newest.status, newest.time, now)
        await self._monitors.save_state(monitor)

        breakdown = Counter(h.status for h in heartbeats)
        logger.info(
            "Fake heartbeats generated",
            extra={"monitor_id": str(monitor_id), "count": len(heartbeats)}
        )

        return GenerateHeartbeatsResponse(
            generated=len(heartbeats),
            monitor_id=monitor_id,
            time_range=TimeRange(start=heartbeats[-1].time, end=newest.time),
            status_breakdown={
                HeartbeatStatus.UP: breakdown[HeartbeatStatus.UP],
                HeartbeatStatus.DEGRADED: breakdown[HeartbeatStatus.DEGRADED],
                HeartbeatStatus.DOWN: breakdown[HeartbeatStatus.DOWN],
                HeartbeatStatus.ERROR: breakdown[HeartbeatStatus.ERROR],
            },
        )

    async def simulate_heartbeats(
        self,
        organization_id: UUID,
        monitor_id: UUID,
        data: SimulateHeartbeatsDTO
    ) -> SimulateHeartbeatsResponse:
        """Replace the monitor's history with a pattern ending now."""
        monitor = await self._prepare(organization_id, monitor_id)
        now = utcnow()

        result = simulate_pattern(
            self._rng,
            monitor_id=monitor.id,
            monitor_type=monitor.type,
            now=now,
            pattern=data.pattern,
            minutes=data.minutes,
            interval=data.interval,
        )

        await self._heartbeats.delete_for_monitor(monitor.id)
        await self._heartbeats.add_many(result.heartbeats)

        latest = result.heartbeats[-1]
        monitor.record_check(latest.status, latest.time, now)
        await self._monitors.save_state(monitor)

        logger.info(
            "Heartbeat pattern simulated",
            extra={"monitor_id": str(monitor_id), "pattern": data.pattern, "count": result.count}
        )

        return SimulateHeartbeatsResponse(
            count=result.count,
            uptime=result.uptime,
            avg_latency=result.avg_latency,
            pattern=result.pattern,
            label=data.label,
        )

    async def clear_heartbeats(self, organization_id: UUID, monitor_id: UUID) -> ClearHeartbeatsResponse:
        monitor = await self._prepare(organization_id, monitor_id)

        removed = await self._heartbeats.delete_for_monitor(monitor.id)
        monitor.reset()
        await self._monitors.save_state(monitor)

        logger.info(
            "Heartbeats cleared",
            extra={"monitor_id": str(monitor_id), "count": removed}
        )
        return ClearHeartbeatsResponse(monitor_id=monitor_id)

    async def _prepare(self, organization_id: UUID, monitor_id: UUID) -> Monitor:
        if self._settings.is_production:
            raise ForbiddenException("This function is only available in development mode")

        monitor = await self._monitors.get_owned(organization_id, monitor_id)
        if monitor is None:
            raise ResourceNotFoundException("Monitor", str(monitor_id))
        return monitor
