from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from safeconfig.ir.serializers import serialize_ir
from safeconfig.compiler.diff import diff_configs
from safeconfig.compiler.invariants import check_invariants
from safeconfig.compiler.parser import parse_config
from safeconfig.ir import ConfigIR, DiffResult, InvariantViolation, SourceFormat


@dataclass
class AnalysisReport:
    ir: Optional[ConfigIR] = None
    violations: List[InvariantViolation] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.ir is not None

    def to_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"errors": list(self.errors)}
        return {
            "ir": serialize_ir(self.ir),
            "violations": serialize_ir(self.violations),
            "errors": list(self.errors),
        }


@dataclass
class DriftReport:
    diff: Optional[DiffResult] = None
    old_ir: Optional[ConfigIR] = None
    new_ir: Optional[ConfigIR] = None
    old_violations: List[InvariantViolation] = field(default_factory=list)
    new_violations: List[InvariantViolation] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.diff is not None

    def to_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"errors": list(self.errors)}
        return {
            "diff": serialize_ir(self.diff),
            "oldIr": serialize_ir(self.old_ir),
            "newIr": serialize_ir(self.new_ir),
            "oldViolations": serialize_ir(self.old_violations),
            "newViolations": serialize_ir(self.new_violations),
            "errors": list(self.errors),
        }


def analyze(raw_text: str, fmt: Union[SourceFormat, str]) -> AnalysisReport:
    parsed = parse_config(raw_text, fmt)
    if not parsed.is_valid:
        return AnalysisReport(errors=parsed.error_messages())

    return AnalysisReport(
        ir=parsed.ir,
        violations=check_invariants(parsed.ir),
        errors=parsed.error_messages(),
    )


def analyze_drift(
    old_raw: str,
    new_raw: str,
    fmt: Union[SourceFormat, str],
    new_fmt: Optional[Union[SourceFormat, str]] = None,
) -> DriftReport:
    """
    Parse both sides independently. If either side fails, no diff is
    computed and only the concatenated errors (old first) come back.

    `new_fmt` defaults to `fmt`; pass it when the two sides differ.
    """
    old_parsed = parse_config(old_raw, fmt)
    new_parsed = parse_config(new_raw, fmt if new_fmt is None else new_fmt)

    errors = old_parsed.error_messages() + new_parsed.error_messages()
    if not old_parsed.is_valid or not new_parsed.is_valid:
        return DriftReport(errors=errors)

    old_violations = check_invariants(old_parsed.ir)
    new_violations = check_invariants(new_parsed.ir)

    return DriftReport(
        diff=diff_configs(old_parsed.ir, new_parsed.ir, old_violations, new_violations),
        old_ir=old_parsed.ir,
        new_ir=new_parsed.ir,
        old_violations=old_violations,
        new_violations=new_violations,
        errors=errors,
    )
