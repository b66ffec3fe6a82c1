#
# Copyright contributors to the tcping-mcp project
#

from pydantic import BaseModel, ConfigDict, Field, StrictInt, computed_field
from typing import Any, Dict, List, Optional


class ConnectionTarget(BaseModel):
    """A (host, port) pair under test.

    Attributes
    ----------
    host : str
        Hostname, IPv4 or IPv6 literal. Syntax is checked by the
        validators rather than by the model, so that a malformed target
        can still be carried into a result and reported.
    port : int
        TCP port number.
    """

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class ValidationResult(BaseModel):
    """Outcome of checking a host/port pair before any network I/O."""

    is_valid: bool
    error: Optional[str] = None


class ProbeOutcome(BaseModel):
    """Result of a single TCP connection attempt.

    On success ``response_time_ms`` is set and ``error_message`` is
    ``None``; on failure it is the other way around.
    """

    success: bool
    response_time_ms: Optional[int] = None
    error_message: Optional[str] = None


class AggregateResult(BaseModel):
    """Statistics over repeated probes of one target.

    ``average_ms``, ``min_ms`` and ``max_ms`` are only populated when at
    least one attempt succeeded and are computed over the successful
    attempts alone. ``error`` holds the validation failure when the
    target was rejected before probing.
    """

    target: ConnectionTarget
    attempts: int = 0
    successful_attempts: int = 0
    results: List[ProbeOutcome] = Field(default_factory=list)
    average_ms: Optional[int] = None
    min_ms: Optional[int] = None
    max_ms: Optional[int] = None
    error: Optional[str] = None

    @computed_field
    @property
    def success(self) -> bool:
        return self.successful_attempts > 0


class FirewallRule(BaseModel):
    """A target paired with the reachability the policy expects."""

    name: str
    target: ConnectionTarget
    expected_reachable: bool


class FirewallRuleResult(BaseModel):
    rule: FirewallRule
    actual_reachable: bool
    response_time_ms: Optional[int] = None
    error_message: Optional[str] = None

    @computed_field
    @property
    def passed(self) -> bool:
        return self.actual_reachable == self.rule.expected_reachable


class FirewallReport(BaseModel):
    """Per-rule results, in the order the rules were given."""

    results: List[FirewallRuleResult] = Field(default_factory=list)

    @computed_field
    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @computed_field
    @property
    def total_count(self) -> int:
        return len(self.results)


class OpenPort(BaseModel):
    port: int
    response_time_ms: int


class ScanResult(BaseModel):
    """Open ports found on one host over an inclusive port range.

    ``open_ports`` is in ascending port order. ``probed`` counts the
    connection attempts actually made, which is zero for an empty range
    or a rejected target.
    """

    host: str
    start_port: int
    end_port: int
    open_ports: List[OpenPort] = Field(default_factory=list)
    probed: int = 0
    error: Optional[str] = None


class ToolResult(BaseModel):
    """What a tool hands back across the MCP boundary: a text block for
    display plus the structured result for programmatic consumers."""

    text: str
    is_error: bool = False
    data: Optional[Dict[str, Any]] = None


class TcpingParams(BaseModel):
    model_config = ConfigDict(extra="ignore")
    host: str = Field(description="Target hostname or IP address")
    port: StrictInt = Field(description="Target port number")
    timeout: int = Field(3000, ge=1, description="Connection timeout in milliseconds")
    count: int = Field(4, ge=1, description="Number of connection attempts")
    interval: int = Field(1000, ge=0, description="Interval between attempts in milliseconds")


class FirewallRuleParams(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str = Field(description="Rule name or description")
    host: str = Field(description="Target hostname or IP address")
    port: StrictInt = Field(description="Target port number")
    expected: bool = Field(description="true = should connect, false = should be blocked")


class FirewallValidationParams(BaseModel):
    model_config = ConfigDict(extra="ignore")
    rules: List[FirewallRuleParams] = Field(description="Firewall rules to validate")
    timeout: int = Field(3000, ge=1, description="Connection timeout in milliseconds")


class NetworkScanParams(BaseModel):
    model_config = ConfigDict(extra="ignore")
    host: str = Field(description="Target hostname or IP address")
    startPort: StrictInt = Field(description="Starting port number")
    endPort: StrictInt = Field(description="Ending port number")
    timeout: int = Field(1000, ge=1, description="Connection timeout in milliseconds")
