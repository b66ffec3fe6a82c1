"""TCP connectivity testing and firewall validation over MCP."""

__version__ = "1.0.8"
