"""
Copyright contributors to the tcping-mcp project
"""

"""Application settings using Pydantic and dotenv.

This module loads environment variables from a `.env` file (if present)
and exposes a `Settings` object. By default the MCP server talks to its
host application over ``stdio``; the HTTP transports bind to all
interfaces on port 8000. These values, the log level and the probe
worker pool size can be overridden via environment variables.
"""

from pydantic import BaseModel
from dotenv import load_dotenv
import os

# Load environment variables from a .env file if present
load_dotenv()


class Settings(BaseModel):
    """Configuration values for the MCP server.

    Attributes
    ----------
    host : str
        Host address to bind the HTTP transports to. Defaults to
        ``0.0.0.0``.
    port : int
        Port number for the HTTP transports. Defaults to 8000.
    transport : str
        Transport mechanism used by FastMCP. Defaults to ``stdio``.
        ``sse`` and ``streamable-http`` are also accepted.
    log_level : str
        Root log level. Defaults to ``INFO``.
    probe_concurrency : int
        Maximum number of probes in flight for firewall validation and
        port scans. Defaults to 1, which probes strictly one target at a
        time. tcping is always sequential regardless of this value.
    """

    host: str = os.getenv("MCP_HOST", "0.0.0.0")
    port: int = int(os.getenv("MCP_PORT", "8000"))
    transport: str = os.getenv("MCP_TRANSPORT", "stdio")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    probe_concurrency: int = max(1, int(os.getenv("PROBE_CONCURRENCY", "1")))


# Expose a singleton settings object for convenient import
SETTINGS = Settings()
