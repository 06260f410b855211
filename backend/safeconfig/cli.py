import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from safeconfig import config
from safeconfig.compiler import analyze, analyze_drift
from safeconfig.compiler.invariants import summarize_violations
from safeconfig.ir import Severity

log = logging.getLogger("safeconfig.cli")

SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


# ---------------- CLI ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safeconfig",
        description="SafeConfig: service topology invariant checks and drift diff",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze_cmd = sub.add_parser("analyze", help="Check one config against the invariants")
    analyze_cmd.add_argument("config_file")
    analyze_cmd.add_argument("--format", choices=["yaml", "json"])
    analyze_cmd.add_argument(
        "--fail-on",
        choices=[s.value for s in Severity],
        help="Exit 1 when a violation at or above this severity is found",
    )
    analyze_cmd.add_argument("--json", action="store_true", help="Print the raw result as JSON")

    diff_cmd = sub.add_parser("diff", help="Compare violations between two configs")
    diff_cmd.add_argument("old_file")
    diff_cmd.add_argument("new_file")
    diff_cmd.add_argument("--format", choices=["yaml", "json"])
    diff_cmd.add_argument("--json", action="store_true", help="Print the raw result as JSON")

    return parser


# ---------------- Helpers ----------------

def infer_format(path: Path, explicit: Optional[str] = None) -> str:
    if explicit:
        return explicit
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return config.DEFAULT_FORMAT


def read_config(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Cannot read {path.resolve()}: {exc.strerror or exc}", file=sys.stderr)
        return None


def print_errors(errors: List[str]) -> None:
    print("Parse / schema errors:", file=sys.stderr)
    for e in errors:
        print(f"  - {e}", file=sys.stderr)


# ---------------- Commands ----------------

def run_analyze(args) -> int:
    path = Path(args.config_file)
    raw = read_config(path)
    if raw is None:
        return 1

    fmt = infer_format(path, args.format)
    report = analyze(raw, fmt)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    elif not report.ok:
        print_errors(report.errors)
    else:
        print(f"Config hash: {report.ir.metadata.raw_hash}")
        print(f"Services: {len(report.ir.services)}")
        print("")
        if not report.violations:
            print("No invariant violations found.")
        else:
            counts = summarize_violations(report.violations)
            print(
                f"Found {len(report.violations)} violation(s) "
                f"(high={counts['high']}, medium={counts['medium']}, low={counts['low']}):"
            )
            for v in report.violations:
                print(
                    f"  [{v.severity.value.upper()}] {v.id} @ {v.service_name} -> {v.description}"
                )

    if not report.ok:
        log.warning("analyze failed for %s", path)
        return 1

    if args.fail_on:
        threshold = SEVERITY_RANK[Severity(args.fail_on)]
        if any(SEVERITY_RANK[v.severity] >= threshold for v in report.violations):
            return 1
    return 0


def run_diff(args) -> int:
    old_path, new_path = Path(args.old_file), Path(args.new_file)
    old_raw = read_config(old_path)
    new_raw = read_config(new_path)
    if old_raw is None or new_raw is None:
        return 1

    report = analyze_drift(
        old_raw,
        new_raw,
        infer_format(old_path, args.format),
        infer_format(new_path, args.format),
    )

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    elif not report.ok:
        print_errors(report.errors)
    else:
        summary = report.diff.summary
        print(f"Old hash: {report.old_ir.metadata.raw_hash}  New hash: {report.new_ir.metadata.raw_hash}")
        print(f"New violations: {summary.total_new_violations}")
        print(f"Resolved violations: {summary.total_resolved_violations}")
        for change in report.diff.changes:
            print("")
            print(f"{change.service_name} [{change.risk_impact.value}]")
            for message in change.messages:
                print(f"  - {message}")

    return 0 if report.ok else 1


# ---------------- Main ----------------

def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s [%(name)s] %(message)s")
    args = build_parser().parse_args(argv)

    if args.command == "analyze":
        return run_analyze(args)
    return run_diff(args)


if __name__ == "__main__":
    sys.exit(main())
