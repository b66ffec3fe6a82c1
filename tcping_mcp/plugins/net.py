"""
Copyright contributors to the tcping-mcp project
"""

"""tcping: repeated TCP connectivity checks.

This module exposes the ``tcping`` tool, which attempts to establish a
TCP connection to a host and port several times at a fixed interval.
It reports the handshake time of each attempt, the success rate, and
min/avg/max response times over the successful attempts. Failures are
reported with the error message from the underlying connect.
"""

from typing import List
import logging

from pydantic import StrictInt

from tcping_mcp.models import AggregateResult, TcpingParams, ToolResult
from tcping_mcp.plugins import probe
from tcping_mcp.plugins.utils import ok, err

logger = logging.getLogger("mcp.net")


def format_tcping_report(result: AggregateResult) -> str:
    lines: List[str] = [f"TCPING {result.target}", "", "Results:"]
    for index, outcome in enumerate(result.results, start=1):
        if outcome.success:
            lines.append(f"  Attempt {index}: Connected - {outcome.response_time_ms}ms")
        else:
            lines.append(f"  Attempt {index}: Failed - {outcome.error_message}")

    lines += ["", "Summary:"]
    rate = probe.round_half_up(result.successful_attempts / result.attempts * 100) if result.attempts else 0
    lines.append(f"  Success Rate: {result.successful_attempts}/{result.attempts} ({rate}%)")
    if result.successful_attempts:
        lines.append(f"  Response Times: min={result.min_ms}ms, avg={result.average_ms}ms, max={result.max_ms}ms")
    return "\n".join(lines) + "\n"


async def run_tcping(params: TcpingParams) -> ToolResult:
    result = await probe.tcping(
        params.host,
        params.port,
        timeout_ms=params.timeout,
        count=params.count,
        interval_ms=params.interval,
    )
    data = result.model_dump()
    if result.error:
        return err(result.error, code="INVALID_TARGET", data=data)
    if not result.success:
        logger.info("tcping all attempts failed", extra={"host": params.host, "port": params.port, "attempts": result.attempts})
    return ok(format_tcping_report(result), data)


def attach(mcp):
    """Register the tcping tool onto the given FastMCP instance."""
    from tcping_mcp.registry import invoke

    @mcp.tool(name="tcping")
    async def tcping(host: str, port: StrictInt, timeout: int = probe.DEFAULT_TIMEOUT_MS,
                     count: int = probe.DEFAULT_COUNT, interval: int = probe.DEFAULT_INTERVAL_MS) -> str:
        """Test TCP connectivity to a host and port using tcping-like functionality.

        Parameters
        ----------
        host : str
            Target hostname or IP address.
        port : int
            Target port number.
        timeout : int, optional
            Connection timeout in milliseconds for each attempt.
        count : int, optional
            Number of connection attempts.
        interval : int, optional
            Interval between attempts in milliseconds.

        Returns
        -------
        str
            Per-attempt results followed by the success rate and
            min/avg/max response times.
        """
        return await invoke("tcping", {
            "host": host,
            "port": port,
            "timeout": timeout,
            "count": count,
            "interval": interval,
        })
