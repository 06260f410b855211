import hashlib
import json
from typing import Any, Union

import yaml
from pydantic import ValidationError

from safeconfig.ir import ParseError, ParseResult, SourceFormat
from safeconfig.ir.document import ConfigDocument

HASH_LENGTH = 12


# ============================================================
# FINGERPRINT
# ============================================================

def fingerprint(raw_text: str) -> str:
    """Short, deterministic content hash of the raw (unparsed) text."""
    # surrogatepass: lone surrogates are hashed, not rejected
    return hashlib.sha256(raw_text.encode("utf-8", "surrogatepass")).hexdigest()[:HASH_LENGTH]


# ============================================================
# SYNTAX STAGE
# ============================================================

def _load_tree(raw_text: str, fmt: SourceFormat) -> Any:
    if fmt == SourceFormat.YAML:
        return yaml.safe_load(raw_text)
    return json.loads(raw_text)


def _format_location(loc) -> str:
    if not loc:
        return "<root>"
    return ".".join(str(part) for part in loc)


def _schema_message(exc: ValidationError) -> str:
    issues = [
        f"{_format_location(err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return "Schema validation failed: " + "; ".join(issues)


def coerce_format(fmt: Union[SourceFormat, str]) -> SourceFormat:
    """Accept either the enum or its wire value. Raises ValueError otherwise."""
    if isinstance(fmt, SourceFormat):
        return fmt
    return SourceFormat(str(fmt).strip().lower())


# ============================================================
# PUBLIC ENTRY POINT
# ============================================================

def parse_config(raw_text: str, fmt: Union[SourceFormat, str]) -> ParseResult:
    """
    Turn raw YAML/JSON text into a ConfigIR.

    Never raises for bad input:
    - unknown format    -> one "format" error
    - malformed text    -> one "syntax" error, schema is not checked
    - shape violations  -> one aggregated "schema" error
    """
    try:
        source_format = coerce_format(fmt)
    except ValueError:
        return ParseResult.failure([
            ParseError(
                kind="format",
                message=f"Unsupported format '{fmt}'; expected yaml or json",
            )
        ])

    label = source_format.value
    try:
        tree = _load_tree(raw_text, source_format)
    # RecursionError: nesting deeper than the loaders can walk
    except (yaml.YAMLError, ValueError, RecursionError) as exc:
        return ParseResult.failure([
            ParseError(
                kind="syntax",
                message=f"Failed to parse {label.upper()} (format={label}): {exc}",
            )
        ])

    try:
        document = ConfigDocument.model_validate(tree)
    except ValidationError as exc:
        return ParseResult.failure([
            ParseError(kind="schema", message=_schema_message(exc))
        ])

    ir = document.to_ir(source_format, raw_hash=fingerprint(raw_text))
    return ParseResult.success(ir)
