"""
Copyright contributors to the tcping-mcp project
"""

"""Port range scanning by TCP connect.

Every port in an inclusive range is probed once, in ascending order,
and the ports that accepted a connection are reported with their
handshake time. Closed, filtered and timed-out ports are probed but
left out of the result.
"""

from typing import List
import logging

from pydantic import StrictInt

from tcping_mcp.models import NetworkScanParams, OpenPort, ScanResult, ToolResult
from tcping_mcp.plugins import probe
from tcping_mcp.plugins.utils import ok, err
from tcping_mcp.plugins.validators import validate_connection
from tcping_mcp.settings import SETTINGS

logger = logging.getLogger("mcp.scan")


async def scan_ports(host: str,
                     start_port: int,
                     end_port: int,
                     timeout_ms: int = probe.DEFAULT_SCAN_TIMEOUT_MS,
                     concurrency: int = 1) -> ScanResult:
    """Scan ``start_port``..``end_port`` inclusive on ``host``.

    A range with ``start_port > end_port`` is empty: nothing is probed
    and no error is reported.
    """
    result = ScanResult(host=host, start_port=start_port, end_port=end_port)
    for port in (start_port, end_port):
        check = validate_connection(host, port)
        if not check.is_valid:
            result.error = check.error
            return result

    async def _probe(port: int):
        return port, await probe.tcp_connect(host, port, timeout_ms)

    outcomes = await probe.run_bounded(_probe, range(start_port, end_port + 1), concurrency)
    result.probed = len(outcomes)
    result.open_ports = [
        OpenPort(port=port, response_time_ms=outcome.response_time_ms)
        for port, outcome in outcomes
        if outcome.success
    ]
    logger.info("scan complete", extra={"host": host, "probed": result.probed, "open": [p.port for p in result.open_ports]})
    return result


def format_scan_report(result: ScanResult) -> str:
    lines: List[str] = [f"Network Scan: {result.host}:{result.start_port}-{result.end_port}", "=" * 50, ""]
    for p in result.open_ports:
        lines.append(f"Port {p.port}: OPEN ({p.response_time_ms}ms)")
    if not result.open_ports:
        lines.append("No open ports found in the specified range.")
    else:
        lines += ["", f"Summary: Found {len(result.open_ports)} open ports"]
    return "\n".join(lines) + "\n"


async def run_scan(params: NetworkScanParams) -> ToolResult:
    result = await scan_ports(
        params.host,
        params.startPort,
        params.endPort,
        timeout_ms=params.timeout,
        concurrency=SETTINGS.probe_concurrency,
    )
    data = result.model_dump()
    if result.error:
        return err(result.error, code="INVALID_TARGET", data=data)
    return ok(format_scan_report(result), data)


def attach(mcp):
    """Register the port scanning tool onto the given FastMCP instance."""
    from tcping_mcp.registry import invoke

    @mcp.tool(name="network_scan")
    async def network_scan(host: str, startPort: StrictInt, endPort: StrictInt, timeout: int = probe.DEFAULT_SCAN_TIMEOUT_MS) -> str:
        """Scan a range of ports on a target host.

        Probes every port from ``startPort`` to ``endPort`` inclusive,
        one connection attempt each with a ``timeout`` in milliseconds,
        and lists the open ones.
        """
        return await invoke("network_scan", {
            "host": host,
            "startPort": startPort,
            "endPort": endPort,
            "timeout": timeout,
        })
