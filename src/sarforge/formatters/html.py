"""Self-contained HTML rendering of a security assessment report.

The document carries its own CSS and references no external resources, so it
can be saved or printed as-is. Values are formatted, never recomputed.
"""

from __future__ import annotations

from html import escape

from ..models.report import Report
from .common import ensure_report, fmt_date, fmt_pct, group_by_severity

STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; max-width: 1200px; margin: 0 auto; padding: 20px; }
    h1 { border-bottom: 3px solid #ffffff; padding-bottom: 10px; }
    h2 { color: #1e40af; margin-top: 30px; border-bottom: 2px solid #60a5fa; padding-bottom: 8px; }
    .header { background: linear-gradient(135deg, #2563eb 0%, #1e40af 100%); color: white; padding: 30px; border-radius: 8px; margin-bottom: 30px; }
    .executive-summary { background: #eff6ff; border-left: 4px solid #2563eb; padding: 20px; margin: 20px 0; }
    .finding { border: 1px solid #e5e7eb; border-radius: 6px; padding: 15px; margin: 10px 0; }
    .finding.critical { border-left: 4px solid #dc2626; }
    .finding.high { border-left: 4px solid #ea580c; }
    .finding.medium { border-left: 4px solid #f59e0b; }
    .finding.low { border-left: 4px solid #3b82f6; }
    table { width: 100%; border-collapse: collapse; margin: 20px 0; }
    th, td { padding: 12px; text-align: left; border: 1px solid #e5e7eb; }
    th { background: #2563eb; color: white; }
    .metric { display: inline-block; background: #f3f4f6; padding: 15px; border-radius: 6px; margin: 10px; min-width: 150px; }
    pre { background: #f9fafb; padding: 12px; white-space: pre-wrap; }
"""


def _e(value: object) -> str:
    return escape(str(value))


def _metric(label: str, value: object) -> str:
    return f'  <div class="metric"><strong>{_e(label)}:</strong> {_e(value)}</div>'


def _header(report: Report) -> list[str]:
    lines = ['<div class="header">']
    lines.append(f"  <h1>{_e(report.title)}</h1>")
    lines.append(f"  <p>Report ID: {_e(report.id)} | Version {_e(report.version)}</p>")
    lines.append(f"  <p>Generated: {fmt_date(report.generated_date)}</p>")
    lines.append(f"  <p>Assessment Date: {fmt_date(report.assessment_date)}</p>")
    assessor = report.assessor
    byline = assessor.name
    if assessor.organization:
        byline += f", {assessor.organization}"
    lines.append(f"  <p>Assessor: {_e(byline)}</p>")
    if assessor.credentials:
        lines.append(f"  <p>Credentials: {_e(', '.join(assessor.credentials))}</p>")
    lines.append("</div>")
    return lines


def _executive_summary(report: Report) -> list[str]:
    summary = report.executive_summary
    lines = ['<div class="executive-summary">', "  <h2>Executive Summary</h2>"]
    lines.append(_metric("Overall Score", fmt_pct(summary.overall_score)))
    lines.append(_metric("Compliance Level", summary.compliance_level.value))
    lines.append(_metric("Overall Risk", report.risk_assessment.overall_risk_level.value))
    lines.append(_metric("Critical Findings", summary.critical_findings))
    lines.append(_metric("High Findings", summary.high_findings))
    lines.append(_metric("Medium Findings", summary.medium_findings))
    lines.append(_metric("Low Findings", summary.low_findings))
    lines.append(f"  <p><strong>Readiness Assessment:</strong> {_e(summary.readiness_assessment)}</p>")
    lines.append(
        f"  <p><strong>Estimated Remediation Time:</strong> {_e(summary.estimated_remediation_time)}</p>"
    )
    for title, items in (("Key Strengths", summary.key_strengths), ("Key Weaknesses", summary.key_weaknesses)):
        if items:
            lines.append(f"  <h3>{title}</h3>")
            lines.append("  <ul>")
            lines.extend(f"    <li>{_e(item)}</li>" for item in items)
            lines.append("  </ul>")
    lines.append("</div>")
    return lines


def _findings(report: Report) -> list[str]:
    lines = ["<h2>Findings</h2>"]
    if not report.findings:
        lines.append("<p>No findings: every applicable control is fully implemented.</p>")
        return lines

    for severity, findings in group_by_severity(report.findings):
        lines.append(f"<h3>{_e(severity.value.title())}</h3>")
        for f in findings:
            lines.append(f'<div class="finding {severity.value}">')
            lines.append(f"  <h4>{_e(f.id)}: {_e(f.control_title)}</h4>")
            lines.append(
                f"  <p><strong>Control:</strong> {_e(f.control_id)} | "
                f"<strong>Domain:</strong> {_e(f.domain)} | "
                f"<strong>Status:</strong> {_e(f.status.value)}</p>"
            )
            lines.append(f"  <p><strong>Gap:</strong> {_e(f.gap_description)}</p>")
            lines.append(f"  <p><strong>Impact:</strong> {_e(f.impact_analysis)}</p>")
            lines.append(
                f"  <p><strong>Remediation Effort:</strong> {_e(f.remediation_effort.value)} | "
                f"<strong>Estimated Cost:</strong> {_e(f.estimated_cost)} | "
                f"<strong>Due:</strong> {fmt_date(f.due_date)}</p>"
            )
            if f.evidence:
                lines.append(f"  <p><strong>Evidence:</strong> {_e(', '.join(f.evidence))}</p>")
            lines.append("</div>")
    return lines


def _domain_table(report: Report) -> list[str]:
    lines = ["<h2>Domain Analysis</h2>", "<table>", "  <thead>", "    <tr>"]
    for heading in ("Domain", "Total Controls", "Compliant", "Partial", "Non-Compliant", "N/A", "Score", "Maturity"):
        lines.append(f"      <th>{heading}</th>")
    lines.extend(["    </tr>", "  </thead>", "  <tbody>"])
    for d in report.domain_analysis:
        lines.append("    <tr>")
        lines.append(f"      <td>{_e(d.domain)} ({_e(d.domain_code)})</td>")
        lines.append(f"      <td>{d.total_controls}</td>")
        lines.append(f"      <td>{d.compliant_controls}</td>")
        lines.append(f"      <td>{d.partially_compliant_controls}</td>")
        lines.append(f"      <td>{d.non_compliant_controls}</td>")
        lines.append(f"      <td>{d.not_applicable_controls}</td>")
        lines.append(f"      <td>{fmt_pct(d.overall_score)}</td>")
        lines.append(f"      <td>{d.maturity_level}</td>")
        lines.append("    </tr>")
    lines.extend(["  </tbody>", "</table>"])
    return lines


def _recommendations(report: Report, limit: int) -> list[str]:
    lines = ["<h2>Recommendations</h2>"]
    if not report.recommendations:
        lines.append("<p>No remediation recommendations.</p>")
        return lines
    for r in report.recommendations[:limit]:
        lines.append('<div class="finding">')
        lines.append(f"  <h3>{_e(r.id)}: {_e(r.title)}</h3>")
        lines.append(
            f"  <p><strong>Priority:</strong> {_e(r.priority.value)} | "
            f"<strong>Category:</strong> {_e(r.category.value)}</p>"
        )
        lines.append(f"  <p>{_e(r.description)}</p>")
        lines.append(
            f"  <p><strong>Estimated Effort:</strong> {_e(r.estimated_effort)} | "
            f"<strong>Estimated Cost:</strong> {_e(r.estimated_cost)}</p>"
        )
        if r.affected_controls:
            lines.append(f"  <p><strong>Affected Controls:</strong> {_e(', '.join(r.affected_controls))}</p>")
        lines.append(f"  <p><strong>Expected Benefit:</strong> {_e(r.expected_benefit)}</p>")
        lines.append("</div>")
    return lines


def _risk(report: Report) -> list[str]:
    risk = report.risk_assessment
    lines = ["<h2>Risk Assessment</h2>"]
    lines.append(f"<p><strong>Overall Risk Level:</strong> {_e(risk.overall_risk_level.value)}</p>")
    lines.append(f"<p>{_e(risk.mitigation_strategy)}</p>")
    lines.extend(["<table>", "  <thead>", "    <tr>"])
    for heading in ("Category", "Risk Level", "Likelihood", "Potential Impact", "Affected Controls"):
        lines.append(f"      <th>{heading}</th>")
    lines.extend(["    </tr>", "  </thead>", "  <tbody>"])
    for c in risk.risk_categories:
        lines.append("    <tr>")
        lines.append(f"      <td>{_e(c.category)}</td>")
        lines.append(f"      <td>{_e(c.risk_level.value)}</td>")
        lines.append(f"      <td>{_e(c.likelihood.value)}</td>")
        lines.append(f"      <td>{_e(c.potential_impact)}</td>")
        lines.append(f"      <td>{_e(', '.join(c.affected_controls) or 'None')}</td>")
        lines.append("    </tr>")
    lines.extend(["  </tbody>", "</table>"])
    return lines


def _compliance_status(report: Report) -> list[str]:
    status = report.compliance_status
    return [
        "<h2>Compliance Status</h2>",
        f"<p><strong>Target Level:</strong> {_e(status.target_level.value)}</p>",
        f"<p><strong>Current Readiness:</strong> {fmt_pct(status.current_readiness)}</p>",
        f"<p><strong>Certification Readiness:</strong> {_e(status.certification_readiness.value)}</p>",
        f"<p><strong>Estimated Time to Readiness:</strong> {_e(status.estimated_time_to_readiness)}</p>",
        f"<p><strong>Required Investment:</strong> {_e(status.required_investment)}</p>",
    ]


def _next_steps(report: Report) -> list[str]:
    if not report.next_steps:
        return []
    lines = ["<h2>Next Steps</h2>", "<table>", "  <thead>", "    <tr>"]
    for heading in ("ID", "Phase", "Title", "Owner", "Due"):
        lines.append(f"      <th>{heading}</th>")
    lines.extend(["    </tr>", "  </thead>", "  <tbody>"])
    for step in report.next_steps:
        lines.append(
            f"    <tr><td>{_e(step.id)}</td><td>{_e(step.phase.value)}</td>"
            f"<td>{_e(step.title)}</td><td>{_e(step.owner)}</td>"
            f"<td>{fmt_date(step.due_date)}</td></tr>"
        )
    lines.extend(["  </tbody>", "</table>"])
    return lines


def _appendices(report: Report) -> list[str]:
    lines: list[str] = []
    for appendix in report.appendices:
        lines.append(f"<h2>Appendix: {_e(appendix.title)}</h2>")
        lines.append(f"<pre>{_e(appendix.content)}</pre>")
    return lines


def render_html(report: object, max_recommendations: int = 5) -> str:
    """Render the report as a standalone HTML document.

    Raises:
        ReportRenderError: ``report`` is not a complete Report.
    """
    report = ensure_report(report)

    body: list[str] = []
    body.extend(_header(report))
    body.extend(_executive_summary(report))
    body.extend(_findings(report))
    body.extend(_domain_table(report))
    body.extend(_risk(report))
    body.extend(_recommendations(report, max_recommendations))
    body.extend(_compliance_status(report))
    body.extend(_next_steps(report))
    body.extend(_appendices(report))

    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="UTF-8">',
        f"  <title>{_e(report.title)}</title>",
        f"  <style>{STYLE}  </style>",
        "</head>",
        "<body>",
        *body,
        "</body>",
        "</html>",
        "",
    ])
