"""
Unit tests for monitor value objects: targets, expected status and alert rules.
"""

import pytest

from boringstatus.monitors.domain import (
    AlertRule,
    ExpectedStatus,
    is_hostname_or_ip,
    is_url,
    normalize_alert_rules,
)


class TestTargets:
    @pytest.mark.parametrize("target", ["https://example.com", "http://10.0.0.1:8080/health"])
    def test_valid_urls(self, target):
        assert is_url(target)

    @pytest.mark.parametrize("target", ["not-a-url", "example.com", "https://exa mple.com", ""])
    def test_invalid_urls(self, target):
        assert not is_url(target)

    @pytest.mark.parametrize("target", ["example.com", "api.eu-west.example.io", "192.168.1.10"])
    def test_hostnames_and_ips(self, target):
        assert is_hostname_or_ip(target)

    @pytest.mark.parametrize("target", ["localhost", "https://example.com", "-bad-.com", "example"])
    def test_rejected_hosts(self, target):
        assert not is_hostname_or_ip(target)


class TestExpectedStatus:
    def test_single_code(self):
        expected = ExpectedStatus.parse("200")
        assert expected.matches(200)
        assert not expected.matches(201)

    def test_list_and_range(self):
        expected = ExpectedStatus.parse("200, 301-308")
        assert expected.matches(200)
        assert expected.matches(302)
        assert not expected.matches(404)

    @pytest.mark.parametrize("value", ["ok", "20", "200-", "299-200"])
    def test_invalid_formats(self, value):
        with pytest.raises(ValueError):
            ExpectedStatus.parse(value)


class TestAlertRule:
    def test_numeric_comparison(self):
        rule = AlertRule(metric="response_time", operator="gt", value="500")
        assert rule.matches({"response_time": 750})
        assert not rule.matches({"response_time": 120})

    def test_less_than_uses_numbers_not_strings(self):
        rule = AlertRule(metric="status_code", operator="lt", value="1000")
        assert rule.matches({"status_code": 503})

    def test_string_equality(self):
        rule = AlertRule(metric="status", operator="eq", value="degraded")
        assert rule.matches({"status": "degraded"})
        assert not rule.matches({"status": "up"})

    def test_integral_float_compares_as_integer_text(self):
        rule = AlertRule(metric="status_code", operator="eq", value="503")
        assert rule.matches({"status_code": 503.0})

    def test_contains(self):
        rule = AlertRule(metric="message", operator="contains", value="timeout")
        assert rule.matches({"message": "Connection timeout after 10s"})
        assert not AlertRule(metric="message", operator="not_contains", value="timeout").matches(
            {"message": "Connection timeout after 10s"}
        )

    def test_missing_metric_never_matches(self):
        assert not AlertRule(metric="packet_loss", operator="neq", value="0").matches({"status": "up"})
        assert not AlertRule(metric="latency", operator="gt", value="5").matches({"latency": None})

    def test_round_trips_through_dict(self):
        rule = AlertRule(metric="total", operator="gt", value="1000")
        assert AlertRule.from_dict(rule.to_dict()) == rule


def test_normalize_drops_duplicates_and_body_rules():
    rules = [
        AlertRule("status_code", "neq", "200"),
        AlertRule("body", "contains", "error"),
        AlertRule("status_code", "neq", "200"),
        AlertRule("total", "gt", "800"),
    ]

    assert normalize_alert_rules(rules) == [
        AlertRule("status_code", "neq", "200"),
        AlertRule("total", "gt", "800"),
    ]
