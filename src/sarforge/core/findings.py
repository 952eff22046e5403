"""Finding extraction: one gap record per control that is not fully compliant."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..models.assessment import Answer, AssessmentRecord
from ..models.catalogue import Catalogue, Control, Section
from ..models.report import SEVERITY_ORDER, ComplianceState, Finding, Severity
from .rules import (
    ANSWER_STATES,
    COST_RANGES,
    CURRENT_STATE_TEXT,
    FINDING_DUE_DAYS,
    IMPACT_TEXT,
    REMEDIATION_EFFORT,
    SEVERITY_RULES,
    format_id,
)


def determine_severity(control: Control, status: ComplianceState) -> Severity:
    return SEVERITY_RULES[(control.priority, status)]


def _gap_description(control: Control, status: ComplianceState) -> str:
    if status is ComplianceState.NON_COMPLIANT:
        return (
            f"The organization has not implemented {control.title}. "
            "This represents a compliance gap that must be addressed."
        )
    return (
        f"The organization has partially implemented {control.title}. "
        "Additional work is required to achieve full compliance."
    )


def _due_date(severity: Severity, now: datetime) -> datetime:
    return now + timedelta(days=FINDING_DUE_DAYS[severity])


def extract_findings(
    catalogue: Catalogue,
    assessment: AssessmentRecord,
    now: Optional[datetime] = None,
) -> list[Finding]:
    """Walk the catalogue against the assessment answers.

    Controls answered ``yes`` or ``not-applicable`` produce nothing; an
    unanswered control counts as ``no``. The result is ordered by severity
    (critical first) with catalogue order as the tie-break, and ids
    (F-001, F-002, ...) follow that final order.
    """
    if now is None:
        now = datetime.now()

    gaps: list[tuple[int, Section, Control, ComplianceState, Severity]] = []
    for section, control in catalogue.walk():
        answer = assessment.answer_for(control.id)
        if answer in (Answer.YES, Answer.NOT_APPLICABLE):
            continue
        status = ANSWER_STATES[answer]
        severity = determine_severity(control, status)
        gaps.append((len(gaps) + 1, section, control, status, severity))

    # sort is stable, so discovery order survives within a severity
    gaps.sort(key=lambda gap: SEVERITY_ORDER[gap[4]])

    findings: list[Finding] = []
    for number, (discovered, section, control, status, severity) in enumerate(gaps, start=1):
        findings.append(Finding(
            id=format_id("F", number),
            control_id=control.id,
            control_title=control.title,
            domain=section.name,
            domain_code=section.code,
            severity=severity,
            status=status,
            current_state=CURRENT_STATE_TEXT[status],
            required_state=control.guidance,
            gap_description=_gap_description(control, status),
            impact_analysis=f"This gap {IMPACT_TEXT[severity]}.",
            remediation_effort=REMEDIATION_EFFORT[severity],
            estimated_cost=COST_RANGES[severity],
            priority=discovered,
            due_date=_due_date(severity, now),
            evidence=tuple(assessment.evidence_for(control.id)),
        ))

    return findings


def count_by_severity(findings: list[Finding]) -> dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for finding in findings:
        counts[finding.severity] += 1
    return counts
