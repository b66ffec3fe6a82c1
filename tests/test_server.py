"""Tests for MCP server wiring."""

import importlib

import pytest
from mcp.server.fastmcp import FastMCP

from tcping_mcp.server import create_app


@pytest.mark.parametrize("module", [
    "tcping_mcp.settings",
    "tcping_mcp.models",
    "tcping_mcp.registry",
    "tcping_mcp.server",
    "tcping_mcp.plugins.utils",
    "tcping_mcp.plugins.validators",
    "tcping_mcp.plugins.probe",
    "tcping_mcp.plugins.net",
    "tcping_mcp.plugins.firewall",
    "tcping_mcp.plugins.scan",
])
def test_module_imports(module):
    """Every module compiles and imports cleanly."""
    assert importlib.import_module(module) is not None


class TestCreateApp:
    """Tests for create_app."""

    def test_returns_fastmcp(self):
        """create_app builds a FastMCP instance."""
        assert isinstance(create_app(), FastMCP)

    @pytest.mark.asyncio
    async def test_registers_tools(self):
        """All three tools are exposed with their external parameter names."""
        tools = {t.name: t for t in await create_app().list_tools()}

        assert set(tools) == {"tcping", "validate_firewall_rule", "network_scan"}
        assert set(tools["tcping"].inputSchema["properties"]) == {"host", "port", "timeout", "count", "interval"}
        assert set(tools["network_scan"].inputSchema["properties"]) == {"host", "startPort", "endPort", "timeout"}
        assert set(tools["validate_firewall_rule"].inputSchema["properties"]) == {"rules", "timeout"}
        assert set(tools["tcping"].inputSchema["required"]) == {"host", "port"}
