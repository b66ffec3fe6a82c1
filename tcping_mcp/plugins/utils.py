"""
Copyright contributors to the tcping-mcp project
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from tcping_mcp.models import ToolResult


def ok(text: str, data: Optional[Dict[str, Any]] = None) -> ToolResult:
    return ToolResult(text=text, data=data)


def err(message: str, *, code: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> ToolResult:
    payload: Dict[str, Any] = dict(data or {})
    if code:
        payload["code"] = code
    return ToolResult(text=f"Error: {message}", is_error=True, data=payload or None)
