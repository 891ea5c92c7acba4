"""
Monitor Value Objects
=====================

Immutable objects describing what a monitor checks and when it alerts.

Target and status-code formats follow what check agents accept:
- HTTP targets are absolute URLs
- ping/TCP targets are an IPv4 literal or a dotted hostname
- expected status is "200", "200,201" or "200-299" (and combinations)
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from boringstatus.config import AlertOperator

IPV4_PATTERN = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
HOSTNAME_PATTERN = re.compile(r"^([a-z0-9]+(-[a-z0-9]+)*\.)+[a-z]{2,}$", re.IGNORECASE)
EXPECTED_STATUS_PATTERN = re.compile(r"^(\d{3}(-\d{3})?)(,\s*\d{3}(-\d{3})?)*$")

MAX_ALERT_RULES = 256
BODY_METRIC = "body"


def is_hostname_or_ip(target: str) -> bool:
    """Whether target is usable by ping and TCP checks."""
    return bool(IPV4_PATTERN.match(target) or HOSTNAME_PATTERN.match(target))


def is_url(target: str) -> bool:
    """Absolute URL with a scheme and a host."""
    if not target or any(ch.isspace() for ch in target):
        return False
    try:
        parts = urlsplit(target)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


@dataclass(frozen=True)
class ExpectedStatus:
    """
    Accepted HTTP status codes.

    Parsed from the comma separated form, e.g. "200, 301-308".
    """

    ranges: Tuple[Tuple[int, int], ...]

    @classmethod
    def parse(cls, value: str) -> "ExpectedStatus":
        if not EXPECTED_STATUS_PATTERN.match(value.strip()):
            raise ValueError("Format: 200 or 200,201 or 200-299")

        ranges = []
        for part in value.split(","):
            part = part.strip()
            if "-" in part:
                low, high = (int(p) for p in part.split("-"))
                if low > high:
                    raise ValueError(f"Invalid status range: {part}")
            else:
                low = high = int(part)
            ranges.append((low, high))
        return cls(tuple(ranges))

    def matches(self, status_code: int) -> bool:
        return any(low <= status_code <= high for low, high in self.ranges)


@dataclass(frozen=True)
class AlertRule:
    """
    A single alert condition: "<metric> <operator> <value>".

    Values are stored as strings. gt/lt compare numerically; the other
    operators compare the string forms.
    """

    metric: str
    operator: str
    value: str

    def matches(self, observed: Mapping[str, Any]) -> bool:
        """
        Evaluate against the observed values of one heartbeat.

        A metric the heartbeat does not carry never matches.
        """
        if self.metric not in observed or observed[self.metric] is None:
            return False

        actual = observed[self.metric]

        if self.operator in (AlertOperator.GT, AlertOperator.LT):
            left = _as_number(actual)
            right = _as_number(self.value)
            if left is None or right is None:
                return False
            return left > right if self.operator == AlertOperator.GT else left < right

        actual_text = _as_text(actual)
        if self.operator == AlertOperator.EQ:
            return actual_text == self.value
        if self.operator == AlertOperator.NEQ:
            return actual_text != self.value
        if self.operator == AlertOperator.CONTAINS:
            return self.value in actual_text
        if self.operator == AlertOperator.NOT_CONTAINS:
            return self.value not in actual_text
        return False

    def describe(self) -> str:
        return f"{self.metric} {self.operator} {self.value}"

    def to_dict(self) -> dict:
        return {"metric": self.metric, "operator": self.operator, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AlertRule":
        return cls(
            metric=str(data["metric"]),
            operator=str(data["operator"]),
            value=_as_text(data["value"]),
        )


def normalize_alert_rules(rules: Iterable[AlertRule]) -> List[AlertRule]:
    """
    Drop duplicate rules (first occurrence wins) and body rules.

    Body checks are configured through the HTTP keyword settings instead.
    """
    seen = set()
    result = []
    for rule in rules:
        if rule in seen:
            continue
        seen.add(rule)
        if rule.metric == BODY_METRIC:
            continue
        result.append(rule)
    return result


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
