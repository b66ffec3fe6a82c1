"""Tests for firewall rule evaluation and its report."""

import asyncio

import pytest

from conftest import connected, refused
from tcping_mcp.models import ConnectionTarget, FirewallRule, ProbeOutcome
from tcping_mcp.plugins import firewall, probe
from tcping_mcp.plugins.validators import HOST_INVALID


def rule(name, host, port, expected):
    return FirewallRule(name=name, target=ConnectionTarget(host=host, port=port), expected_reachable=expected)


class TestEvaluateRules:
    """Tests for evaluate_rules."""

    @pytest.mark.asyncio
    async def test_blocked_rule_passes_when_refused(self, fake_connect):
        """A rule expecting blocked traffic passes when the connect fails."""
        calls = fake_connect(lambda host, port: refused())

        report = await firewall.evaluate_rules([rule("SSH", "10.0.1.5", 22, False)])

        [result] = report.results
        assert not result.actual_reachable
        assert result.passed
        assert result.error_message == "Connection refused"
        assert calls == [("10.0.1.5", 22, 3000)]

    @pytest.mark.asyncio
    async def test_reachable_rule_fails_when_refused(self, fake_connect):
        """A rule expecting a connection fails when the connect fails."""
        fake_connect(lambda host, port: refused())

        report = await firewall.evaluate_rules([rule("HTTPS", "10.0.1.5", 443, True)])

        assert not report.results[0].passed
        assert report.passed_count == 0
        assert report.total_count == 1

    @pytest.mark.asyncio
    async def test_one_probe_per_rule_in_order(self, fake_connect):
        """Each rule is probed exactly once and results keep input order."""
        open_ports = {80, 443}
        calls = fake_connect(lambda host, port: connected(5) if port in open_ports else refused())
        rules = [
            rule("web", "10.0.0.1", 80, True),
            rule("ssh", "10.0.0.1", 22, False),
            rule("tls", "10.0.0.1", 443, False),
            rule("db", "10.0.0.1", 5432, True),
        ]

        report = await firewall.evaluate_rules(rules, timeout_ms=500)

        assert [r.rule.name for r in report.results] == ["web", "ssh", "tls", "db"]
        assert [c[1] for c in calls] == [80, 22, 443, 5432]
        assert all(c[2] == 500 for c in calls)
        for r in report.results:
            assert r.passed == (r.actual_reachable == r.rule.expected_reachable)
        assert [r.passed for r in report.results] == [True, True, False, False]
        assert report.passed_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_keeps_input_order(self, monkeypatch):
        """Completion order under concurrency does not reorder results."""
        async def connect(host, port, timeout_ms=3000):
            await asyncio.sleep((100 - port) * 0.005)
            return ProbeOutcome(success=True, response_time_ms=port)

        monkeypatch.setattr(probe, "tcp_connect", connect)
        rules = [rule(f"r{p}", "10.0.0.1", p, True) for p in (91, 95, 99)]

        report = await firewall.evaluate_rules(rules, concurrency=3)

        assert [r.rule.name for r in report.results] == ["r91", "r95", "r99"]
        assert [r.response_time_ms for r in report.results] == [91, 95, 99]

    @pytest.mark.asyncio
    async def test_invalid_target_not_probed(self, fake_connect):
        """A malformed target is reported as unreachable without probing."""
        calls = fake_connect(lambda host, port: connected(1))

        report = await firewall.evaluate_rules([
            rule("bad", "bad..host", 22, True),
            rule("good", "10.0.0.1", 22, True),
        ])

        bad, good = report.results
        assert not bad.actual_reachable
        assert bad.error_message == HOST_INVALID
        assert not bad.passed
        assert good.passed
        assert calls == [("10.0.0.1", 22, 3000)]

    @pytest.mark.asyncio
    async def test_empty_rule_list(self, fake_connect):
        """No rules means no probes and an empty report."""
        calls = fake_connect(lambda host, port: connected(1))

        report = await firewall.evaluate_rules([])

        assert calls == []
        assert report.total_count == 0


class TestFormatFirewallReport:
    """Tests for format_firewall_report."""

    @pytest.mark.asyncio
    async def test_report_layout(self, fake_connect):
        """The report lists every rule and ends with the pass count."""
        fake_connect(lambda host, port: connected(12) if port == 80 else refused("Connection refused"))

        report = await firewall.evaluate_rules([
            rule("Web", "10.0.0.1", 80, True),
            rule("SSH", "10.0.1.5", 22, True),
        ])
        text = firewall.format_firewall_report(report)

        assert text.startswith("Firewall Rule Validation Results:\n" + "=" * 50 + "\n\n")
        assert "Rule: Web\n  Target: 10.0.0.1:80\n  Expected: CONNECTED\n  Actual: CONNECTED\n  Status: ✅ PASS\n  Response Time: 12ms\n" in text
        assert "Rule: SSH\n  Target: 10.0.1.5:22\n  Expected: CONNECTED\n  Actual: BLOCKED/FAILED\n  Status: ❌ FAIL\n  Error: Connection refused\n" in text
        assert text.endswith("Overall Result: 1/2 rules passed\n")

    def test_expected_blocked_label(self):
        """Rules expecting no connection are labelled BLOCKED."""
        report = firewall.FirewallReport(results=[
            firewall.FirewallRuleResult(rule=rule("SSH", "10.0.1.5", 22, False), actual_reachable=False, error_message="x"),
        ])

        text = firewall.format_firewall_report(report)

        assert "  Expected: BLOCKED\n" in text
        assert "  Status: ✅ PASS\n" in text
