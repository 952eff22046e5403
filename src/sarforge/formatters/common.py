"""Shared helpers for report renderers."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from pydantic import ValidationError

from ..core.errors import ReportRenderError
from ..models.report import SEVERITY_ORDER, Finding, Report, Severity


def ensure_report(report: object) -> Report:
    """Accept a Report, or a mapping that validates as one.

    Raises:
        ReportRenderError: the value is missing required report fields.
    """
    if isinstance(report, Report):
        return report
    if isinstance(report, Mapping):
        try:
            return Report.model_validate(dict(report))
        except ValidationError as e:
            missing = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            raise ReportRenderError(
                f"Cannot render report: invalid or missing fields: {', '.join(missing)}"
            ) from e
    raise ReportRenderError(f"Cannot render {type(report).__name__}; expected a Report")


def group_by_severity(findings: tuple[Finding, ...]) -> list[tuple[Severity, list[Finding]]]:
    """Non-empty severity groups, critical first, findings in report order."""
    groups: list[tuple[Severity, list[Finding]]] = []
    for severity in sorted(Severity, key=SEVERITY_ORDER.__getitem__):
        members = [f for f in findings if f.severity is severity]
        if members:
            groups.append((severity, members))
    return groups


def fmt_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def fmt_pct(value: float) -> str:
    return f"{value:.1f}%"
