"""
Copyright contributors to the tcping-mcp project
"""

"""Host and port validation.

These checks run before any socket is opened so that malformed input is
rejected with a clear message instead of surfacing as an obscure
resolver or socket error. They are pure functions with no I/O.
"""

from typing import Any
import ipaddress
import re

from tcping_mcp.models import ValidationResult

HOST_REQUIRED = "Host must be a non-empty string"
HOST_INVALID = "Invalid hostname or IP address format"
PORT_INVALID = "Port must be an integer between 1 and 65535"

_IPV4_RE = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")
# Any all-numeric dotted string; one that is not a valid IPv4 address is
# rejected instead of being treated as a hostname.
_NUMERIC_DOTTED_RE = re.compile(r"[0-9]+(\.[0-9]+)*")
_LABEL = r"[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?"
_HOSTNAME_RE = re.compile(rf"({_LABEL}\.)*{_LABEL}")


def _is_ipv6(host: str) -> bool:
    if ":" not in host:
        return False
    try:
        ipaddress.IPv6Address(host)
    except ValueError:
        return False
    return True


def is_valid_host(host: Any) -> bool:
    """Return True for a dotted-quad IPv4 address, an IPv6 literal or a
    syntactically valid hostname."""
    if not host or not isinstance(host, str):
        return False

    m = _IPV4_RE.fullmatch(host)
    if m:
        return all(0 <= int(octet) <= 255 for octet in m.groups())

    if _is_ipv6(host):
        return True

    if _NUMERIC_DOTTED_RE.fullmatch(host):
        return False

    return _HOSTNAME_RE.fullmatch(host) is not None


def is_valid_port(port: Any) -> bool:
    """Return True if ``port`` is an int in [1, 65535]. Booleans and
    floats are rejected even when they compare equal to an integer."""
    if isinstance(port, bool) or not isinstance(port, int):
        return False
    return 1 <= port <= 65535


def validate_connection(host: Any, port: Any) -> ValidationResult:
    """Validate a (host, port) pair, reporting the first problem found."""
    if not host or not isinstance(host, str):
        return ValidationResult(is_valid=False, error=HOST_REQUIRED)
    if not is_valid_host(host):
        return ValidationResult(is_valid=False, error=HOST_INVALID)
    if not is_valid_port(port):
        return ValidationResult(is_valid=False, error=PORT_INVALID)
    return ValidationResult(is_valid=True)
