#
# Copyright contributors to the tcping-mcp project
#

"""TCP probing primitives.

``tcp_connect`` performs one connection attempt against a deadline and
reports the handshake time or the reason it failed. ``tcping`` repeats
that attempt at a fixed cadence and aggregates the results. Nothing is
sent over an established connection; it is closed as soon as the
handshake completes.
"""

from __future__ import annotations
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar
import asyncio
import logging
import math
import time

from tcping_mcp.models import AggregateResult, ConnectionTarget, ProbeOutcome
from tcping_mcp.plugins.validators import validate_connection

logger = logging.getLogger("mcp.probe")

DEFAULT_TIMEOUT_MS = 3000
DEFAULT_COUNT = 4
DEFAULT_INTERVAL_MS = 1000
DEFAULT_SCAN_TIMEOUT_MS = 1000

T = TypeVar("T")
R = TypeVar("R")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


async def tcp_connect(host: str, port: int, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> ProbeOutcome:
    """Attempt one TCP connection to ``host:port``.

    Whichever comes first decides the outcome: the handshake completing,
    the connect failing (refused, unreachable, name resolution), or
    ``timeout_ms`` elapsing. A timed-out connect is cancelled. The
    connection is closed on every path.
    """
    start = time.perf_counter()
    writer: Optional[asyncio.StreamWriter] = None
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout=timeout_ms / 1000.0)
        elapsed_ms = round_half_up((time.perf_counter() - start) * 1000.0)
        return ProbeOutcome(success=True, response_time_ms=elapsed_ms)
    except asyncio.TimeoutError as e:
        # On 3.11+ a kernel ETIMEDOUT shares this class; only wait_for's has no errno.
        if getattr(e, "errno", None) is not None:
            return ProbeOutcome(success=False, error_message=str(e))
        return ProbeOutcome(success=False, error_message=f"Connection timeout after {timeout_ms}ms")
    except (OSError, UnicodeError) as e:
        return ProbeOutcome(success=False, error_message=str(e) or e.__class__.__name__)
    finally:
        if writer is not None:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                logger.debug("error closing probe connection", extra={"host": host, "port": port})


async def tcping(host: str,
                 port: int,
                 timeout_ms: int = DEFAULT_TIMEOUT_MS,
                 count: int = DEFAULT_COUNT,
                 interval_ms: int = DEFAULT_INTERVAL_MS) -> AggregateResult:
    """Probe ``host:port`` ``count`` times and summarise the results.

    Attempts run one after another, with ``interval_ms`` between the end
    of one attempt and the start of the next (no wait after the last).
    An invalid target is reported without touching the network.
    """
    target = ConnectionTarget(host=host, port=port)
    check = validate_connection(host, port)
    if not check.is_valid:
        logger.info("tcping rejected target", extra={"host": host, "port": port, "error": check.error})
        return AggregateResult(target=target, error=check.error)

    results: List[ProbeOutcome] = []
    for i in range(count):
        outcome = await tcp_connect(host, port, timeout_ms)
        logger.debug("tcping attempt", extra={"host": host, "port": port, "attempt": i + 1, "success": outcome.success})
        results.append(outcome)
        if i < count - 1:
            await asyncio.sleep(interval_ms / 1000.0)

    times = [r.response_time_ms for r in results if r.success and r.response_time_ms is not None]
    result = AggregateResult(
        target=target,
        attempts=count,
        successful_attempts=sum(1 for r in results if r.success),
        results=results,
    )
    if times:
        result.average_ms = round_half_up(sum(times) / len(times))
        result.min_ms = min(times)
        result.max_ms = max(times)
    return result


async def run_bounded(func: Callable[[T], Awaitable[R]], items: Iterable[T], concurrency: int = 1) -> List[R]:
    """Apply ``func`` to every item with at most ``concurrency`` calls in
    flight. Results are returned in input order, not completion order.
    With ``concurrency`` of 1 the items are processed strictly in turn.
    If a call raises, the remaining workers are cancelled before the
    exception propagates."""
    q: asyncio.Queue = asyncio.Queue()
    count = 0
    for index, item in enumerate(items):
        q.put_nowait((index, item))
        count += 1
    results: List[Optional[R]] = [None] * count

    async def worker():
        while True:
            try:
                index, item = q.get_nowait()
            except asyncio.QueueEmpty:
                break
            results[index] = await func(item)

    workers = min(max(1, concurrency), max(1, count))
    tasks = [asyncio.ensure_future(worker()) for _ in range(workers)]
    try:
        await asyncio.gather(*tasks)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        # let cancelled workers unwind so their connections are closed
        await asyncio.gather(*tasks, return_exceptions=True)
    return results  # type: ignore[return-value]
