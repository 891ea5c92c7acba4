"""
Monitors Application Services
=============================

Use cases for monitor management and the dashboard views built from
heartbeat history.

Every operation is scoped to one organization. A monitor of another
organization is reported exactly like a missing one.
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence, Set
from uuid import UUID

from boringstatus.config import HeartbeatStatus
from boringstatus.core import ResourceNotFoundException
from boringstatus.core.timeutils import utcnow
from boringstatus.heartbeats.application.services import IHeartbeatRepository
from boringstatus.heartbeats.domain import (
    HourlyBucket,
    average_latency,
    hourly_buckets,
    last_24_hours,
    uptime_percentage,
)
from boringstatus.monitors.application.dto import (
    ChannelSummary,
    DashboardMonitorResponse,
    LatencyBucketResponse,
    MonitorDetailsResponse,
    MonitorIssueResponse,
    MonitorListItem,
    MonitorResponse,
    MonitorStatsResponse,
    MonitorWriteDTO,
    MutationResponse,
    RecentCheckResponse,
)
from boringstatus.monitors.domain import Monitor, issue_severity
from boringstatus.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)

CHANNELS_NOT_FOUND = "One or more channels not found or unauthorized"
RECENT_CHECKS_LIMIT = 20
DASHBOARD_ISSUES_LIMIT = 3


# ========== Repository Interfaces (Dependency Inversion) ==========

class IMonitorRepository(ABC):
    """Interface for monitor data access."""

    @abstractmethod
    async def create(self, organization_id: UUID, data: MonitorWriteDTO) -> Any:
        """Insert a monitor in pending state."""

    @abstractmethod
    async def list_by_organization(self, organization_id: UUID) -> List[Any]:
        """Monitors of one organization, newest first."""

    @abstractmethod
    async def get(self, organization_id: UUID, monitor_id: UUID) -> Optional[Any]:
        """Monitor if it belongs to the organization."""

    @abstractmethod
    async def update(self, model: Any, data: MonitorWriteDTO) -> Any:
        """Replace the configurable fields and bump updated_at."""

    @abstractmethod
    async def set_active(self, model: Any, active: bool) -> Any:
        """Pause or resume checks."""

    @abstractmethod
    async def delete(self, model: Any) -> None:
        """Delete; heartbeats and links go with it."""

    @abstractmethod
    async def get_channel_ids(self, monitor_id: UUID) -> List[UUID]:
        """Ids of linked channels."""

    @abstractmethod
    async def get_channels(self, monitor_ids: Sequence[UUID]) -> Dict[UUID, List[Any]]:
        """Linked channels per monitor."""

    @abstractmethod
    async def replace_channels(self, monitor_id: UUID, channel_ids: Sequence[UUID]) -> None:
        """Make channel_ids the exact set of links."""


class IChannelOwnershipChecker(ABC):
    """Which channels an organization owns."""

    @abstractmethod
    async def owned_channel_ids(self, organization_id: UUID, channel_ids: Sequence[UUID]) -> Set[UUID]:
        """Subset of channel_ids belonging to the organization."""


# ========== Application Services ==========

class MonitorService:
    """Monitor CRUD with channel links."""

    def __init__(self, monitor_repository: IMonitorRepository, channel_checker: IChannelOwnershipChecker):
        self._monitors = monitor_repository
        self._channels = channel_checker

    async def create_monitor(self, organization_id: UUID, data: MonitorWriteDTO) -> MutationResponse:
        """
        Create a monitor and link its channels.

        Channels are checked before the insert; both writes share the
        request transaction, so a failure leaves neither behind.

        Raises:
            ResourceNotFoundException: a channel id is unknown or belongs
                to another organization
        """
        channel_ids = _unique(data.channel_ids or [])
        await self._check_channels(organization_id, channel_ids)

        model = await self._monitors.create(organization_id, data)
        if channel_ids:
            await self._monitors.replace_channels(model.id, channel_ids)

        logger.info(
            "Monitor created",
            extra={
                "organization_id": str(organization_id),
                "monitor_id": str(model.id),
                "type": data.type,
                "channels": len(channel_ids),
            }
        )
        return MutationResponse(id=model.id)

    async def list_monitors(self, organization_id: UUID) -> List[MonitorListItem]:
        models = await self._monitors.list_by_organization(organization_id)
        channels = await self._monitors.get_channels([m.id for m in models])

        items = []
        for model in models:
            linked = [ChannelSummary.model_validate(c) for c in channels.get(model.id, [])]
            items.append(MonitorListItem(
                **_monitor_fields(model),
                channel_ids=[c.id for c in linked],
                channels=linked,
            ))
        return items

    async def get_monitor(self, organization_id: UUID, monitor_id: UUID) -> MonitorResponse:
        model = await self._require(organization_id, monitor_id)
        channel_ids = await self._monitors.get_channel_ids(model.id)
        return MonitorResponse(**_monitor_fields(model), channel_ids=channel_ids)

    async def update_monitor(
        self,
        organization_id: UUID,
        monitor_id: UUID,
        data: MonitorWriteDTO
    ) -> MutationResponse:
        """
        Replace a monitor's configuration.

        channel_ids, when given, replaces the linked channels; when omitted
        the links are left alone.
        """
        model = await self._require(organization_id, monitor_id)

        channel_ids = None
        if data.channel_ids is not None:
            channel_ids = _unique(data.channel_ids)
            await self._check_channels(organization_id, channel_ids)

        await self._monitors.update(model, data)
        if channel_ids is not None:
            await self._monitors.replace_channels(model.id, channel_ids)

        logger.info(
            "Monitor updated",
            extra={"organization_id": str(organization_id), "monitor_id": str(monitor_id)}
        )
        return MutationResponse(id=model.id)

    async def delete_monitor(self, organization_id: UUID, monitor_id: UUID) -> MutationResponse:
        model = await self._require(organization_id, monitor_id)
        await self._monitors.delete(model)

        logger.info(
            "Monitor deleted",
            extra={"organization_id": str(organization_id), "monitor_id": str(monitor_id)}
        )
        return MutationResponse(id=monitor_id)

    async def toggle_monitor_active(self, organization_id: UUID, monitor_id: UUID, active: bool) -> MutationResponse:
        model = await self._require(organization_id, monitor_id)
        await self._monitors.set_active(model, active)

        logger.info(
            "Monitor toggled",
            extra={"monitor_id": str(monitor_id), "active": active}
        )
        return MutationResponse(id=model.id)

    async def _require(self, organization_id: UUID, monitor_id: UUID) -> Any:
        model = await self._monitors.get(organization_id, monitor_id)
        if model is None:
            raise ResourceNotFoundException("Monitor", str(monitor_id))
        return model

    async def _check_channels(self, organization_id: UUID, channel_ids: List[UUID]) -> None:
        if not channel_ids:
            return
        owned = await self._channels.owned_channel_ids(organization_id, channel_ids)
        if len(owned) != len(channel_ids):
            logger.warning(
                "Monitor write referenced foreign channels",
                extra={"organization_id": str(organization_id), "requested": len(channel_ids), "owned": len(owned)}
            )
            raise ResourceNotFoundException("Channel", message=CHANNELS_NOT_FOUND)


class MonitorInsightsService:
    """Dashboard and detail views computed from heartbeat history."""

    def __init__(self, monitor_repository: IMonitorRepository, heartbeat_repository: IHeartbeatRepository):
        self._monitors = monitor_repository
        self._heartbeats = heartbeat_repository

    async def get_monitors_dashboard(self, organization_id: UUID) -> List[DashboardMonitorResponse]:
        """
        Per monitor: 24h uptime, 24 hourly latency buckets and the latest
        issues. All heartbeats are fetched in one query.
        """
        now = utcnow()
        day_ago = now - timedelta(hours=24)
        start_hour, end_hour = last_24_hours(now)

        with log_latency(logger, "dashboard_query", organization_id=str(organization_id)):
            models = await self._monitors.list_by_organization(organization_id)
            heartbeats = await self._heartbeats.list_since([m.id for m in models], day_ago)

        by_monitor = defaultdict(list)
        for heartbeat in heartbeats:
            by_monitor[heartbeat.monitor_id].append(heartbeat)

        dashboard = []
        for model in models:
            monitor = Monitor.from_model(model)
            window = [h for h in by_monitor[monitor.id] if h.time > day_ago]
            up = sum(1 for h in window if h.is_up)

            issues = [h for h in window if h.status == HeartbeatStatus.DOWN and h.message]
            issues = list(reversed(issues[-DASHBOARD_ISSUES_LIMIT:]))

            dashboard.append(DashboardMonitorResponse(
                id=monitor.id,
                name=monitor.name,
                type=monitor.type,
                target=monitor.display_target,
                active=monitor.active,
                status=monitor.status,
                uptime=uptime_percentage(up, len(window)),
                latency_history=_chart(hourly_buckets(window, start_hour, end_hour)),
                issues=[
                    MonitorIssueResponse(
                        id=str(h.id),
                        message=h.message,
                        severity=issue_severity(h.status_code),
                        time=h.time,
                    )
                    for h in issues
                ],
            ))

        return dashboard

    async def get_monitor_details(self, organization_id: UUID, monitor_id: UUID) -> MonitorDetailsResponse:
        model = await self._monitors.get(organization_id, monitor_id)
        if model is None:
            raise ResourceNotFoundException("Monitor", str(monitor_id))

        now = utcnow()
        day_ago = now - timedelta(hours=24)
        start_hour, end_hour = last_24_hours(now)

        with log_latency(logger, "monitor_details_query", monitor_id=str(model.id)):
            last_day = [h for h in await self._heartbeats.list_since([model.id], day_ago) if h.time > day_ago]
            recent = await self._heartbeats.recent(model.id, RECENT_CHECKS_LIMIT)
            up_24h, total_24h = await self._heartbeats.count_since(model.id, day_ago)
            up_30d, total_30d = await self._heartbeats.count_since(model.id, now - timedelta(days=30))
            channel_ids = await self._monitors.get_channel_ids(model.id)

        return MonitorDetailsResponse(
            monitor=MonitorResponse(**_monitor_fields(model), channel_ids=channel_ids),
            chart=_chart(hourly_buckets(last_day, start_hour, end_hour)),
            recent_checks=[RecentCheckResponse.model_validate(h, from_attributes=True) for h in recent],
            stats=MonitorStatsResponse(
                uptime_24h=uptime_percentage(up_24h, total_24h),
                uptime_30d=uptime_percentage(up_30d, total_30d),
                avg_latency=average_latency(last_day),
            ),
            channel_ids=channel_ids,
        )


def _chart(buckets: List[HourlyBucket]) -> List[LatencyBucketResponse]:
    return [
        LatencyBucketResponse(bucket=b.bucket, avg_latency=b.avg_latency, up=b.up)
        for b in buckets
    ]


def _unique(ids: Sequence[UUID]) -> List[UUID]:
    return list(dict.fromkeys(ids))


def _monitor_fields(model: Any) -> dict:
    monitor = Monitor.from_model(model)
    return {
        "id": model.id,
        "organization_id": model.organization_id,
        "type": model.type,
        "name": model.name,
        "target": model.target,
        "active": model.active,
        "frequency": model.frequency,
        "timeout": model.timeout,
        "regions": list(model.regions or []),
        "config": dict(model.config or {}),
        "alert_rules": [r.to_dict() for r in monitor.alert_rules],
        "status": model.status,
        "last_check_at": monitor.last_check_at,
        "next_check_at": monitor.next_check_at,
        "created_at": model.created_at,
        "updated_at": model.updated_at,
    }
