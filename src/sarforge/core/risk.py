"""Risk matrix, overall risk level and templated risk categories."""

from __future__ import annotations

from ..models.report import (
    Finding,
    Likelihood,
    RiskAssessment,
    RiskCategory,
    RiskMatrixEntry,
    Severity,
)
from .rules import RISK_AXIS, RISK_LEVEL_THRESHOLDS, bucket

ACCESS_CONTROL_CODE = "AC"

_MITIGATION_FOCUS = {
    Severity.CRITICAL: "Treat critical gaps as blocking work and assign executive ownership. ",
    Severity.HIGH: "Resolve critical and high-severity gaps before scheduling an external assessment. ",
    Severity.MEDIUM: "Close remaining high-severity gaps and harden partially implemented controls. ",
    Severity.LOW: "Maintain the current posture through periodic reassessment. ",
}


def risk_level(score: int) -> Severity:
    return bucket(score, RISK_LEVEL_THRESHOLDS, Severity.LOW)


def build_risk_entry(finding: Finding) -> RiskMatrixEntry:
    likelihood = RISK_AXIS[finding.severity]
    impact = RISK_AXIS[finding.severity]
    score = likelihood * impact
    return RiskMatrixEntry(
        control_id=finding.control_id,
        likelihood=likelihood,
        impact=impact,
        risk_score=score,
        risk_level=risk_level(score),
    )


def overall_risk_level(matrix: list[RiskMatrixEntry]) -> Severity:
    """Roll the matrix up.

    - critical: more than 5 critical entries
    - high: any critical entry, or more than 10 high entries
    - medium: any high entry
    - low: everything else
    """
    critical = sum(1 for entry in matrix if entry.risk_level is Severity.CRITICAL)
    high = sum(1 for entry in matrix if entry.risk_level is Severity.HIGH)

    if critical > 5:
        return Severity.CRITICAL
    if critical > 0 or high > 10:
        return Severity.HIGH
    if high > 0:
        return Severity.MEDIUM
    return Severity.LOW


def risk_categories(findings: list[Finding]) -> list[RiskCategory]:
    return [
        RiskCategory(
            category="Data Breach Risk",
            risk_level=Severity.HIGH,
            description="Potential unauthorized access to controlled information",
            potential_impact="Loss of contract, regulatory penalties, reputation damage",
            likelihood=Likelihood.HIGH,
            affected_controls=tuple(
                f.control_id for f in findings if f.domain_code == ACCESS_CONTROL_CODE
            ),
        ),
        RiskCategory(
            category="Compliance Risk",
            risk_level=Severity.HIGH,
            description="Failure to achieve certification",
            potential_impact="Unable to bid on or maintain contracts that require certification",
            likelihood=Likelihood.MEDIUM,
            affected_controls=tuple(f.control_id for f in findings),
        ),
    ]


def mitigation_strategy(level: Severity) -> str:
    return _MITIGATION_FOCUS[level] + (
        "Implement a phased remediation approach prioritizing critical and "
        "high-severity findings, establish continuous monitoring, and maintain "
        "comprehensive documentation throughout the implementation process."
    )


def assess_risk(findings: list[Finding]) -> RiskAssessment:
    matrix = [build_risk_entry(f) for f in findings]
    level = overall_risk_level(matrix)
    return RiskAssessment(
        overall_risk_level=level,
        risk_categories=tuple(risk_categories(findings)),
        risk_matrix=tuple(matrix),
        mitigation_strategy=mitigation_strategy(level),
    )
