import logging

from fastapi import APIRouter

from safeconfig.api.responses import AsciiJSONResponse
from safeconfig.compiler import analyze, analyze_drift
from safeconfig.schemas import AnalyzeRequest, DiffRequest

log = logging.getLogger("safeconfig.api")

router = APIRouter(default_response_class=AsciiJSONResponse)


@router.post("/api/analyze")
def analyze_config(request: AnalyzeRequest):
    report = analyze(request.config, request.format)

    if not report.ok:
        log.warning("analyze rejected (%s): %s", request.format, "; ".join(report.errors))
        return AsciiJSONResponse(status_code=400, content=report.to_dict())

    log.info(
        "analyze format=%s hash=%s services=%d violations=%d",
        request.format,
        report.ir.metadata.raw_hash,
        len(report.ir.services),
        len(report.violations),
    )
    return report.to_dict()


@router.post("/api/diff")
def diff_config(request: DiffRequest):
    report = analyze_drift(request.old_config, request.new_config, request.format)

    if not report.ok:
        log.warning("diff rejected (%s): %d error(s)", request.format, len(report.errors))
        return AsciiJSONResponse(status_code=400, content=report.to_dict())

    summary = report.diff.summary
    log.info(
        "diff format=%s old=%s new=%s new_violations=%d resolved=%d",
        request.format,
        report.old_ir.metadata.raw_hash,
        report.new_ir.metadata.raw_hash,
        summary.total_new_violations,
        summary.total_resolved_violations,
    )
    return report.to_dict()


@router.get("/health")
def health():
    return {"status": "ok", "service": "safeconfig-backend"}
