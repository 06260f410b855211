"""
Typed intermediate representation of a service topology and the
findings computed over it.
"""

from .config_ir import (
    ConfigIR,
    ConfigMetadata,
    NetworkBinding,
    Protocol,
    ResourceLimits,
    Service,
    ServiceType,
    SourceFormat,
)
from .errors import ParseError
from .findings import (
    DiffResult,
    DiffSummary,
    InvariantViolation,
    RiskImpact,
    ServiceChange,
    Severity,
)
from .validation import ParseResult

__all__ = [
    "ConfigIR",
    "ConfigMetadata",
    "NetworkBinding",
    "Protocol",
    "ResourceLimits",
    "Service",
    "ServiceType",
    "SourceFormat",
    "ParseError",
    "ParseResult",
    "DiffResult",
    "DiffSummary",
    "InvariantViolation",
    "RiskImpact",
    "ServiceChange",
    "Severity",
]
