"""
Notification Messages
=====================

Renders alert events into the payload each destination expects.
Pure functions; delivery lives in the infrastructure layer.
"""

from typing import Any, Dict, Optional, Tuple

from boringstatus.config import HeartbeatStatus
from boringstatus.heartbeats.domain import AlertEvent, AlertKind

STATUS_EMOJI = {
    HeartbeatStatus.UP: "✅",
    HeartbeatStatus.DEGRADED: "⚠️",
    HeartbeatStatus.DOWN: "🚨",
    HeartbeatStatus.ERROR: "🚨",
}

# Discord embed colors (decimal RGB)
STATUS_COLOR = {
    HeartbeatStatus.UP: 0x22C55E,
    HeartbeatStatus.DEGRADED: 0xF59E0B,
    HeartbeatStatus.DOWN: 0xEF4444,
    HeartbeatStatus.ERROR: 0xEF4444,
}
DEFAULT_COLOR = 0x6366F1


def headline(event: AlertEvent) -> str:
    emoji = STATUS_EMOJI.get(event.status, "🔔")
    return f"{emoji} {event.title}"


def monitor_link(event: AlertEvent, base_url: str) -> Optional[str]:
    if event.monitor_id is None:
        return None
    return f"{base_url.rstrip('/')}/monitors/{event.monitor_id}"


def build_slack_message(event: AlertEvent, base_url: str, channel: Optional[str] = None) -> Dict[str, Any]:
    """Slack Block Kit message."""
    fields = [
        {"type": "mrkdwn", "text": f"*Monitor:*\n{event.monitor_name}"},
        {"type": "mrkdwn", "text": f"*Status:*\n{event.status.upper()}"},
    ]
    if event.target:
        fields.append({"type": "mrkdwn", "text": f"*Target:*\n{event.target}"})
    if event.previous_status:
        fields.append({"type": "mrkdwn", "text": f"*Previous:*\n{event.previous_status.upper()}"})

    blocks = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": headline(event), "emoji": True}
        },
        {"type": "section", "fields": fields},
        {"type": "section", "text": {"type": "mrkdwn", "text": event.message}},
    ]

    link = monitor_link(event, base_url)
    context = f"{event.time.isoformat()}"
    if link:
        context += f" | <{link}|View monitor>"
    blocks.append({"type": "context", "elements": [{"type": "mrkdwn", "text": context}]})

    message: Dict[str, Any] = {"text": headline(event), "blocks": blocks}
    if channel:
        message["channel"] = channel
    return message


def build_discord_message(event: AlertEvent, base_url: str) -> Dict[str, Any]:
    embed: Dict[str, Any] = {
        "title": event.title,
        "description": event.message,
        "color": STATUS_COLOR.get(event.status, DEFAULT_COLOR),
        "timestamp": event.time.isoformat(),
        "fields": [
            {"name": "Monitor", "value": event.monitor_name, "inline": True},
            {"name": "Status", "value": event.status.upper(), "inline": True},
        ],
    }
    if event.target:
        embed["fields"].append({"name": "Target", "value": event.target, "inline": False})

    link = monitor_link(event, base_url)
    if link:
        embed["url"] = link

    return {"content": headline(event), "embeds": [embed]}


def build_webhook_payload(event: AlertEvent) -> Dict[str, Any]:
    """Generic JSON body for user-supplied webhooks."""
    return {
        "event": event.kind,
        "monitor": {
            "id": str(event.monitor_id) if event.monitor_id else None,
            "name": event.monitor_name,
            "target": event.target,
        },
        "status": event.status,
        "previous_status": event.previous_status,
        "title": event.title,
        "message": event.message,
        "rule": event.rule.to_dict() if event.rule else None,
        "time": event.time.isoformat(),
    }


def build_email(event: AlertEvent, base_url: str) -> Tuple[str, str]:
    """(subject, plain text body)."""
    prefix = "[Test] " if event.kind == AlertKind.TEST else ""
    subject = f"{prefix}{event.title}"

    lines = [
        event.message,
        "",
        f"Monitor: {event.monitor_name}",
        f"Status: {event.status}",
    ]
    if event.target:
        lines.append(f"Target: {event.target}")
    lines.append(f"Time: {event.time.isoformat()}")

    link = monitor_link(event, base_url)
    if link:
        lines += ["", link]

    return subject, "\n".join(lines)
