#
# Copyright contributors to the tcping-mcp project
#
from __future__ import annotations
from mcp.server.fastmcp import FastMCP
import logging
from tcping_mcp.settings import SETTINGS
from tcping_mcp.plugins import net, firewall, scan


def create_app() -> FastMCP:
    """Create and configure a FastMCP instance with the connectivity tools."""
    # basic structured logging setup; stderr keeps stdout free for the stdio transport
    logging.basicConfig(level=SETTINGS.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logger = logging.getLogger("mcp.server")

    app = FastMCP(
        "tcping-mcp",
        instructions=(
            "Tests TCP connectivity to hosts and ports. Exposes tools to "
            "measure repeated connection times (tcping), validate firewall "
            "rules against expected reachability, and scan port ranges for "
            "open ports."
        ),
        host=SETTINGS.host,
        port=SETTINGS.port,
        log_level=SETTINGS.log_level,
    )

    # Attach plugin tool functions. Each plugin exposes its own attach() with @app.tool decorations.
    net.attach(app)
    firewall.attach(app)
    scan.attach(app)

    logger.info("tcping MCP server configured", extra={"transport": SETTINGS.transport, "probe_concurrency": SETTINGS.probe_concurrency})
    return app


def main() -> None:
    """Entry point for running the MCP server."""
    app = create_app()
    app.run(transport=SETTINGS.transport)


if __name__ == "__main__":
    main()
