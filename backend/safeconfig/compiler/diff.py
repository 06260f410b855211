from collections import defaultdict
from typing import Dict, List, Sequence

from safeconfig.ir import (
    ConfigIR,
    DiffResult,
    DiffSummary,
    InvariantViolation,
    RiskImpact,
    ServiceChange,
)


def index_by_service(
    violations: Sequence[InvariantViolation],
) -> Dict[str, List[InvariantViolation]]:
    index: Dict[str, List[InvariantViolation]] = defaultdict(list)
    for v in violations:
        index[v.service_name].append(v)
    return index


def _union_of_names(old_ir: ConfigIR, new_ir: ConfigIR) -> List[str]:
    # dict keeps first-seen order: old services, then new-only services
    return list(dict.fromkeys(old_ir.service_names() + new_ir.service_names()))


def _risk_impact(old_count: int, new_count: int) -> RiskImpact:
    if new_count > old_count:
        return RiskImpact.RISK_INCREASE
    if new_count < old_count:
        return RiskImpact.RISK_DECREASE
    return RiskImpact.NEUTRAL


def diff_configs(
    old_ir: ConfigIR,
    new_ir: ConfigIR,
    old_violations: Sequence[InvariantViolation],
    new_violations: Sequence[InvariantViolation],
) -> DiffResult:
    """
    Per-service drift in violation counts between two snapshots.

    Risk impact is derived from counts only, never from severity or rule
    identity: swapping one rule for another at the same count is neutral.
    """
    old_index = index_by_service(old_violations)
    new_index = index_by_service(new_violations)

    total_new = 0
    total_resolved = 0
    changes: List[ServiceChange] = []

    for name in _union_of_names(old_ir, new_ir):
        old_vs = old_index.get(name, [])
        new_vs = new_index.get(name, [])
        old_count, new_count = len(old_vs), len(new_vs)

        if old_count == 0 and new_count == 0:
            continue

        messages = []
        if old_count == 0:
            total_new += new_count
            messages.append(f"{new_count} new violation(s) introduced")
        elif new_count == 0:
            total_resolved += old_count
            messages.append(f"{old_count} violation(s) resolved")
        elif new_count > old_count:
            total_new += new_count - old_count
            messages.append(f"Violations increased from {old_count} to {new_count}")
        elif new_count < old_count:
            total_resolved += old_count - new_count
            messages.append(f"Violations decreased from {old_count} to {new_count}")
        else:
            messages.append(f"Violations count unchanged ({new_count})")

        if new_vs:
            messages.append(
                "Current violations: "
                + ", ".join(f"{v.id} ({v.severity.value})" for v in new_vs)
            )

        changes.append(
            ServiceChange(
                service_name=name,
                messages=tuple(messages),
                risk_impact=_risk_impact(old_count, new_count),
            )
        )

    return DiffResult(
        summary=DiffSummary(
            total_new_violations=total_new,
            total_resolved_violations=total_resolved,
        ),
        changes=tuple(changes),
    )
