from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskImpact(str, Enum):
    RISK_INCREASE = "risk_increase"
    RISK_DECREASE = "risk_decrease"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class InvariantViolation:
    id: str  # stable rule identifier, e.g. R1_NO_PUBLIC_DB
    description: str
    service_name: str
    severity: Severity


@dataclass(frozen=True)
class ServiceChange:
    service_name: str
    messages: Tuple[str, ...]
    risk_impact: RiskImpact


@dataclass(frozen=True)
class DiffSummary:
    total_new_violations: int = 0
    total_resolved_violations: int = 0


@dataclass(frozen=True)
class DiffResult:
    summary: DiffSummary
    changes: Tuple[ServiceChange, ...] = ()
