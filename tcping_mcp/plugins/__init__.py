"""Plugin package exposing attach functions for each tool module.

Each of ``net``, ``firewall`` and ``scan`` defines an ``attach(app)``
function which registers its tool on the FastMCP app instance, next to
the coroutine that does the work. ``probe`` and ``validators`` hold the
shared connection primitive and input checks.
"""
from . import validators, probe, net, firewall, scan

__all__ = ["validators", "probe", "net", "firewall", "scan"]
