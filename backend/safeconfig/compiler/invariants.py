"""
Invariant Engine - fixed battery of structural rules over a ConfigIR.

Each rule is a pure function Service -> Optional[InvariantViolation].
Rules are independent: they never read each other's output, and the
engine never stops early, so a service can trip any number of them.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from safeconfig.ir import (
    ConfigIR,
    InvariantViolation,
    Protocol,
    Service,
    ServiceType,
    Severity,
)

PUBLIC_BIND_HOST = "0.0.0.0"


@dataclass(frozen=True)
class Rule:
    id: str
    severity: Severity
    description: str
    check: Callable[[Service], bool]

    def __call__(self, service: Service) -> Optional[InvariantViolation]:
        if not self.check(service):
            return None
        return InvariantViolation(
            id=self.id,
            description=self.description,
            service_name=service.name,
            severity=self.severity,
        )


# R1: databases must not be public or bound to 0.0.0.0
def _database_is_exposed(service: Service) -> bool:
    if service.type != ServiceType.DB:
        return False
    return service.public or any(
        binding.host == PUBLIC_BIND_HOST for binding in service.network
    )


# R2: public services listening on http need at least one https binding.
# A public service with neither (e.g. tcp only) is not flagged.
def _public_http_without_tls(service: Service) -> bool:
    if not service.public:
        return False
    if service.has_protocol(Protocol.HTTPS):
        return False
    return service.has_protocol(Protocol.HTTP)


# R3: PII handlers must not be public
def _pii_exposed(service: Service) -> bool:
    return service.handles_pii and service.public


# R4: cpu and memory limits are both required
def _limits_missing(service: Service) -> bool:
    limits = service.resource_limits
    return limits is None or not limits.is_fully_defined


rule_no_public_database = Rule(
    id="R1_NO_PUBLIC_DB",
    severity=Severity.HIGH,
    description=(
        "Database service is exposed publicly (host=0.0.0.0 or marked public). "
        "Databases should not be directly reachable from the internet."
    ),
    check=_database_is_exposed,
)

rule_public_requires_tls = Rule(
    id="R2_PUBLIC_REQUIRES_TLS",
    severity=Severity.HIGH,
    description=(
        "Publicly exposed service listens on HTTP without any HTTPS endpoint. "
        "Public services must have TLS enabled."
    ),
    check=_public_http_without_tls,
)

rule_no_pii_public_exposure = Rule(
    id="R3_NO_PII_PUBLIC",
    severity=Severity.HIGH,
    description=(
        "Service that handles PII is marked as public. PII-handling services "
        "should not be directly exposed to the internet."
    ),
    check=_pii_exposed,
)

rule_resource_limits_defined = Rule(
    id="R4_RESOURCE_LIMITS",
    severity=Severity.MEDIUM,
    description=(
        "Service is missing CPU or memory limits. Resource limits are required "
        "for predictable capacity and to prevent noisy-neighbour issues."
    ),
    check=_limits_missing,
)

RULES = (
    rule_no_public_database,
    rule_public_requires_tls,
    rule_no_pii_public_exposure,
    rule_resource_limits_defined,
)


class InvariantEngine:
    """
    Runs every rule against every service.

    Usage:
        engine = InvariantEngine()
        violations = engine.evaluate(ir)
    """

    def __init__(self, rules: Sequence[Rule] = RULES):
        self.rules = tuple(rules)

    def evaluate(self, ir: ConfigIR) -> List[InvariantViolation]:
        violations: List[InvariantViolation] = []
        for service in ir.services:
            violations.extend(self.evaluate_service(service))
        return violations

    def evaluate_service(self, service: Service) -> List[InvariantViolation]:
        found = []
        for rule in self.rules:
            violation = rule(service)
            if violation is not None:
                found.append(violation)
        return found


def check_invariants(ir: ConfigIR) -> List[InvariantViolation]:
    """Convenience function to evaluate the built-in rule set."""
    return InvariantEngine().evaluate(ir)


def summarize_violations(violations: Iterable[InvariantViolation]) -> Dict[str, int]:
    counts = {severity.value: 0 for severity in (Severity.HIGH, Severity.MEDIUM, Severity.LOW)}
    for v in violations:
        counts[v.severity.value] += 1
    return counts
