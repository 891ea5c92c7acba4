"""
Monitors Domain Layer
=====================

Monitor entity, target/status validation and alert rules.
"""

from boringstatus.monitors.domain.entities import (
    SEVERITY_HIGH,
    SEVERITY_MEDIUM,
    Monitor,
    issue_severity,
)
from boringstatus.monitors.domain.value_objects import (
    BODY_METRIC,
    MAX_ALERT_RULES,
    AlertRule,
    ExpectedStatus,
    is_hostname_or_ip,
    is_url,
    normalize_alert_rules,
)

__all__ = [
    "Monitor",
    "issue_severity",
    "SEVERITY_HIGH",
    "SEVERITY_MEDIUM",
    "AlertRule",
    "ExpectedStatus",
    "is_hostname_or_ip",
    "is_url",
    "normalize_alert_rules",
    "BODY_METRIC",
    "MAX_ALERT_RULES",
]
