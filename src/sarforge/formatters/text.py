"""Plain-text (markdown) rendering of a security assessment report."""

from __future__ import annotations

from .common import ensure_report, fmt_date, fmt_pct, group_by_severity


def render_plain_text(report: object) -> str:
    """Render a compact markdown summary of the report."""
    report = ensure_report(report)
    summary = report.executive_summary
    status = report.compliance_status

    lines: list[str] = []
    lines.append(f"# {report.title}")
    lines.append("")
    lines.append(f"**Report ID:** {report.id}")
    lines.append(f"**Organization:** {report.organization}")
    lines.append(f"**Assessor:** {report.assessor.name}")
    if report.assessor.organization:
        lines.append(f"**Assessor Organization:** {report.assessor.organization}")
    lines.append(f"**Assessment Date:** {fmt_date(report.assessment_date)}")
    lines.append(f"**Generated:** {fmt_date(report.generated_date)}")
    lines.append("")

    lines.append("## Executive Summary")
    lines.append("")
    lines.append(f"**Overall Score:** {fmt_pct(summary.overall_score)}")
    lines.append(f"**Compliance Level:** {summary.compliance_level.value}")
    lines.append(f"**Overall Risk Level:** {report.risk_assessment.overall_risk_level.value}")
    lines.append(f"**Estimated Remediation Time:** {summary.estimated_remediation_time}")
    lines.append("")
    lines.append(summary.readiness_assessment)
    lines.append("")
    lines.append("| Severity | Count |")
    lines.append("|----------|-------|")
    lines.append(f"| CRITICAL | {summary.critical_findings} |")
    lines.append(f"| HIGH     | {summary.high_findings} |")
    lines.append(f"| MEDIUM   | {summary.medium_findings} |")
    lines.append(f"| LOW      | {summary.low_findings} |")
    lines.append(f"| **Total** | **{status.gap_analysis.total_gaps}** |")
    lines.append("")

    lines.append("## Domain Analysis")
    lines.append("")
    lines.append("| Domain | Controls | Compliant | Partial | Non-Compliant | N/A | Score | Maturity |")
    lines.append("|--------|----------|-----------|---------|---------------|-----|-------|----------|")
    for d in report.domain_analysis:
        lines.append(
            f"| {d.domain} ({d.domain_code}) | {d.total_controls} | {d.compliant_controls} | "
            f"{d.partially_compliant_controls} | {d.non_compliant_controls} | "
            f"{d.not_applicable_controls} | {fmt_pct(d.overall_score)} | {d.maturity_level} |"
        )
    lines.append("")

    if report.findings:
        lines.append("## Findings")
        lines.append("")
        for severity, findings in group_by_severity(report.findings):
            lines.append(f"### {severity.value.upper()}")
            lines.append("")
            for f in findings:
                lines.append(f"- **{f.id}** {f.control_id}: {f.control_title} [{f.status.value}]")
                lines.append(f"  Due {fmt_date(f.due_date)}, effort {f.remediation_effort.value}, {f.estimated_cost}")
            lines.append("")

    if report.recommendations:
        lines.append("## Recommendations")
        lines.append("")
        for r in report.recommendations:
            lines.append(f"- **{r.id}** [{r.priority.value}] {r.title}")
        lines.append("")

    lines.append("## Certification Readiness")
    lines.append("")
    lines.append(f"**Current Readiness:** {fmt_pct(status.current_readiness)}")
    lines.append(f"**Status:** {status.certification_readiness.value}")
    lines.append(f"**Estimated Time to Readiness:** {status.estimated_time_to_readiness}")
    lines.append(f"**Required Investment:** {status.required_investment}")
    lines.append("")

    if report.next_steps:
        lines.append("## Next Steps")
        lines.append("")
        for step in report.next_steps:
            lines.append(f"- **{step.id}** ({step.phase.value}, due {fmt_date(step.due_date)}) {step.title}")
        lines.append("")

    lines.append("---")
    lines.append(f"*Generated by sarforge at {report.generated_date.strftime('%Y-%m-%d %H:%M:%S')}*")

    return "\n".join(lines)
