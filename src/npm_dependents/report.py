"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

from .models import Analysis

REPORT_VERSION = "1"


def _dependents(analysis: Analysis, names: tuple[str, ...]) -> list[dict[str, str]]:
    return [{"name": name, "version": analysis.version_of(name)} for name in names]


def aggregate(analysis: Analysis) -> dict[str, Any]:
    """Build a JSON-compatible report matching ``schemas/report.schema.json``."""
    result = analysis.result
    report: dict[str, Any] = {
        "version": REPORT_VERSION,
        "module": {
            "name": analysis.target,
            "version": analysis.target_version if analysis.found else None,
            "declared": analysis.is_direct,
        },
        "lockfile": {
            "format": analysis.lock_format,
            "path": analysis.lock.source,
        },
        "status": analysis.status,
        "found": analysis.found,
        "totals": {
            "edges": analysis.lock.edge_count,
            "modules": len(analysis.manifest),
            "direct": len(result.main),
            "indirect": len(result.depends),
        },
        "direct": _dependents(analysis, result.main),
        "indirect": _dependents(analysis, result.depends),
    }
    return report
