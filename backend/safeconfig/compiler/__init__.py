from safeconfig.compiler.diff import diff_configs
from safeconfig.compiler.invariants import InvariantEngine, RULES, check_invariants
from safeconfig.compiler.parser import fingerprint, parse_config
from safeconfig.compiler.pipeline import AnalysisReport, DriftReport, analyze, analyze_drift

__all__ = [
    "AnalysisReport",
    "DriftReport",
    "InvariantEngine",
    "RULES",
    "analyze",
    "analyze_drift",
    "check_invariants",
    "diff_configs",
    "fingerprint",
    "parse_config",
]
