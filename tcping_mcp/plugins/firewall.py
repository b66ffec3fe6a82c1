"""
Copyright contributors to the tcping-mcp project
"""

"""Firewall rule validation.

Each rule names a target and whether traffic to it should get through.
A rule is checked with exactly one connection attempt; it passes when
the observed reachability matches the expectation, so a rule expecting
blocked traffic passes when the connect fails.
"""

from typing import List, Sequence
import logging

from tcping_mcp.models import (
    ConnectionTarget,
    FirewallReport,
    FirewallRule,
    FirewallRuleResult,
    FirewallValidationParams,
    ToolResult,
)
from tcping_mcp.plugins import probe
from tcping_mcp.plugins.utils import ok
from tcping_mcp.plugins.validators import validate_connection
from tcping_mcp.settings import SETTINGS

logger = logging.getLogger("mcp.firewall")


async def check_rule(rule: FirewallRule, timeout_ms: int = probe.DEFAULT_TIMEOUT_MS) -> FirewallRuleResult:
    """Probe one rule's target once. A target that fails validation is
    not probed and counts as unreachable."""
    target = rule.target
    check = validate_connection(target.host, target.port)
    if not check.is_valid:
        return FirewallRuleResult(rule=rule, actual_reachable=False, error_message=check.error)

    outcome = await probe.tcp_connect(target.host, target.port, timeout_ms)
    return FirewallRuleResult(
        rule=rule,
        actual_reachable=outcome.success,
        response_time_ms=outcome.response_time_ms,
        error_message=outcome.error_message,
    )


async def evaluate_rules(rules: Sequence[FirewallRule],
                         timeout_ms: int = probe.DEFAULT_TIMEOUT_MS,
                         concurrency: int = 1) -> FirewallReport:
    """Check every rule and return the results in input order."""
    async def _check(rule: FirewallRule) -> FirewallRuleResult:
        return await check_rule(rule, timeout_ms)

    results = await probe.run_bounded(_check, rules, concurrency)
    report = FirewallReport(results=results)
    for r in report.results:
        if not r.passed:
            logger.warning("firewall rule mismatch", extra={
                "rule": r.rule.name,
                "target": str(r.rule.target),
                "expected": r.rule.expected_reachable,
                "actual": r.actual_reachable,
            })
    return report


def format_firewall_report(report: FirewallReport) -> str:
    lines: List[str] = ["Firewall Rule Validation Results:", "=" * 50, ""]
    for r in report.results:
        lines.append(f"Rule: {r.rule.name}")
        lines.append(f"  Target: {r.rule.target}")
        lines.append(f"  Expected: {'CONNECTED' if r.rule.expected_reachable else 'BLOCKED'}")
        lines.append(f"  Actual: {'CONNECTED' if r.actual_reachable else 'BLOCKED/FAILED'}")
        lines.append(f"  Status: {'✅ PASS' if r.passed else '❌ FAIL'}")
        if r.actual_reachable and r.response_time_ms is not None:
            lines.append(f"  Response Time: {r.response_time_ms}ms")
        elif not r.actual_reachable and r.error_message:
            lines.append(f"  Error: {r.error_message}")
        lines.append("")
    lines.append(f"Overall Result: {report.passed_count}/{report.total_count} rules passed")
    return "\n".join(lines) + "\n"


async def run_validation(params: FirewallValidationParams) -> ToolResult:
    rules = [
        FirewallRule(
            name=p.name,
            target=ConnectionTarget(host=p.host, port=p.port),
            expected_reachable=p.expected,
        )
        for p in params.rules
    ]
    report = await evaluate_rules(rules, timeout_ms=params.timeout, concurrency=SETTINGS.probe_concurrency)
    return ok(format_firewall_report(report), report.model_dump())


def attach(mcp):
    """Register the firewall validation tool onto the given FastMCP instance."""
    from tcping_mcp.registry import invoke

    @mcp.tool(name="validate_firewall_rule")
    async def validate_firewall_rule(rules: List[dict], timeout: int = probe.DEFAULT_TIMEOUT_MS) -> str:
        """Validate firewall connectivity by testing multiple host:port combinations.

        Each rule is an object with ``name`` (str), ``host`` (str),
        ``port`` (int) and ``expected`` (bool: true = should connect,
        false = should be blocked). Every rule gets one connection
        attempt of at most ``timeout`` milliseconds.
        """
        return await invoke("validate_firewall_rule", {"rules": rules, "timeout": timeout})
