"""Report assembly: runs every analysis stage and composes the Report.

    report = generate_report(catalogue, assessment, assessor, now=fixed_clock)

Each call builds a fresh Report; nothing is cached between calls, so equal
inputs and an equal clock give equal reports.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..compliance.catalogue import validate_catalogue
from ..models.assessment import AssessmentRecord, AssessorInfo
from ..models.catalogue import Catalogue
from ..models.report import (
    Appendix,
    AppendixType,
    AssessmentPeriod,
    ComplianceLevel,
    Finding,
    Report,
    ScopeAndMethodology,
    Severity,
)
from .domains import analyze_domains
from .findings import extract_findings
from .readiness import evaluate_readiness
from .recommendations import plan_recommendations
from .risk import assess_risk
from .schedule import schedule_next_steps
from .summary import summarize

DEFAULT_ORGANIZATION = "Organization"

DEFAULT_STANDARDS = ("CMMC 2.0 Level 2", "NIST SP 800-171 Rev 2", "NIST SP 800-171A")
REFERENCE_STANDARDS = "CMMC 2.0 Level 2, NIST SP 800-171 Rev 2, NIST SP 800-171A, NIST SP 800-53 Rev 5"

DEFAULT_SCOPE: dict = {
    "assessment_type": "Gap Analysis",
    "assessment_scope": ["Information Systems", "Network Infrastructure", "CUI Processing"],
    "methodology": "NIST SP 800-171 based assessment aligned with CMMC Level 2 requirements",
    "systems_assessed": ["Primary Business Systems", "CUI Storage Systems", "Network Infrastructure"],
    "documentation_reviewed": [
        "System Security Plan",
        "Policies and Procedures",
        "Configuration Documentation",
    ],
    "interviews_conducted": ["IT Leadership", "Security Team", "System Administrators"],
}


def build_scope(
    catalogue: Catalogue,
    assessment: AssessmentRecord,
    scope_info: Optional[dict],
    now: datetime,
) -> ScopeAndMethodology:
    """Merge caller-supplied scope fields over the defaults."""
    scope = dict(DEFAULT_SCOPE)
    scope["standards"] = list(catalogue.standards or DEFAULT_STANDARDS)
    scope["assessment_period"] = {"start_date": assessment.created_at, "end_date": now}
    for key, value in (scope_info or {}).items():
        if value:
            scope[key] = value
    if isinstance(scope["assessment_period"], AssessmentPeriod):
        scope["assessment_period"] = scope["assessment_period"].model_dump()
    return ScopeAndMethodology.model_validate(scope)


def _control_matrix(findings: list[Finding]) -> str:
    return "\n".join(
        f"{f.control_id}: {f.status.value} ({f.severity.value})" for f in findings
    )


def _evidence_list(assessment: AssessmentRecord) -> str:
    lines = [
        f"{control_id}: {', '.join(items)}"
        for control_id, items in assessment.evidence.items()
        if items
    ]
    return "\n".join(lines) or "No evidence documented"


def _technical_findings(findings: list[Finding]) -> str:
    return "\n\n".join(
        f"{f.id} - {f.control_title}: {f.gap_description}"
        for f in findings
        if f.severity in (Severity.CRITICAL, Severity.HIGH)
    )


def build_appendices(
    catalogue: Catalogue,
    findings: list[Finding],
    assessment: AssessmentRecord,
) -> list[Appendix]:
    return [
        Appendix(
            id="app-a",
            title="Complete Control Matrix",
            type=AppendixType.CONTROL_MATRIX,
            content=_control_matrix(findings),
        ),
        Appendix(
            id="app-b",
            title="Evidence Documentation List",
            type=AppendixType.EVIDENCE_LIST,
            content=_evidence_list(assessment),
        ),
        Appendix(
            id="app-c",
            title="Technical Findings Details",
            type=AppendixType.TECHNICAL_FINDINGS,
            content=_technical_findings(findings),
        ),
        Appendix(
            id="app-d",
            title="Reference Standards",
            type=AppendixType.REFERENCE,
            content=", ".join(catalogue.standards) or REFERENCE_STANDARDS,
        ),
    ]


def report_id(now: datetime) -> str:
    return f"sar-{int(now.timestamp() * 1000)}"


def generate_report(
    catalogue: Catalogue,
    assessment: AssessmentRecord,
    assessor: AssessorInfo,
    scope_info: Optional[dict] = None,
    organization: Optional[str] = None,
    target_level: ComplianceLevel = ComplianceLevel.LEVEL_2,
    now: Optional[datetime] = None,
) -> Report:
    """Build a complete security assessment report.

    Args:
        catalogue: Framework catalogue; validated before any analysis runs.
        assessment: Answers and evidence for this assessment.
        assessor: Passed through verbatim.
        scope_info: Optional ScopeAndMethodology field overrides.
        organization: Organization name; falls back to the assessment's.
        target_level: Certification level the readiness evaluation targets.
        now: Clock used for ids, due dates and the generated date.

    Raises:
        CatalogueError: The catalogue is malformed. No partial report is built.
    """
    validate_catalogue(catalogue)
    if now is None:
        now = datetime.now()

    findings = extract_findings(catalogue, assessment, now=now)
    domains = analyze_domains(catalogue, assessment)
    executive_summary = summarize(findings, domains)
    risk_assessment = assess_risk(findings)
    recommendations = plan_recommendations(findings, domains)
    compliance_status = evaluate_readiness(findings, domains, target_level=target_level)
    next_steps = schedule_next_steps(recommendations, now=now)
    appendices = build_appendices(catalogue, findings, assessment)

    org_name = organization or assessment.organization_name or DEFAULT_ORGANIZATION

    return Report(
        id=report_id(now),
        title=f"Security Assessment Report - {org_name}",
        organization=org_name,
        assessment_date=assessment.last_modified,
        generated_date=now,
        assessor=assessor,
        executive_summary=executive_summary,
        scope_and_methodology=build_scope(catalogue, assessment, scope_info, now),
        findings=tuple(findings),
        domain_analysis=tuple(domains),
        risk_assessment=risk_assessment,
        recommendations=tuple(recommendations),
        compliance_status=compliance_status,
        next_steps=tuple(next_steps),
        appendices=tuple(appendices),
    )


def export_report_json(report: Report, output_path: Path) -> Path:
    """Write the report to a JSON file (UTF-8, no BOM)."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(report.model_dump(mode="json"), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return output_path
