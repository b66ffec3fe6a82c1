#
# Copyright contributors to the tcping-mcp project
#

"""Tool lookup table and error boundary.

``TOOLS`` maps each tool name to the pydantic model its arguments must
satisfy and the coroutine that handles it. It is built once at import
time and never modified. ``call_tool`` is the single entry point used by
the MCP tool wrappers: it never raises, so one bad request cannot take
down the server.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Mapping, NamedTuple, Optional, Type
import logging

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, ValidationError

from tcping_mcp.models import FirewallValidationParams, NetworkScanParams, TcpingParams, ToolResult
from tcping_mcp.plugins import firewall, net, scan
from tcping_mcp.plugins.utils import err

logger = logging.getLogger("mcp.registry")


class RegisteredTool(NamedTuple):
    params: Type[BaseModel]
    handler: Callable[[Any], Awaitable[ToolResult]]


TOOLS: Mapping[str, RegisteredTool] = MappingProxyType({
    "tcping": RegisteredTool(TcpingParams, net.run_tcping),
    "validate_firewall_rule": RegisteredTool(FirewallValidationParams, firewall.run_validation),
    "network_scan": RegisteredTool(NetworkScanParams, scan.run_scan),
})


async def call_tool(name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
    """Validate ``arguments`` for tool ``name`` and run it.

    Unknown tools, malformed arguments and exceptions raised by the
    handler all come back as error results rather than exceptions.
    """
    entry = TOOLS.get(name)
    if entry is None:
        logger.warning("unknown tool requested", extra={"tool": name})
        return err(f"Unknown tool: {name}", code="UNKNOWN_TOOL")

    try:
        params = entry.params(**(arguments or {}))
    except ValidationError as e:
        logger.info("invalid tool arguments", extra={"tool": name, "error": str(e)})
        return err(f"invalid params: {e}", code="INVALID_PARAMS")

    try:
        return await entry.handler(params)
    except Exception as e:
        logger.exception("tool execution failed", extra={"tool": name})
        return err(str(e) or e.__class__.__name__, code="TOOL_ERROR")


async def invoke(name: str, arguments: Dict[str, Any]) -> str:
    """Run a tool for the MCP layer: return its text, or raise
    ``ToolError`` so that FastMCP flags the response as an error."""
    result = await call_tool(name, arguments)
    if result.is_error:
        raise ToolError(result.text)
    return result.text
