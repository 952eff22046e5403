"""Executive summary: organization-wide headline numbers."""

from __future__ import annotations

from ..models.report import ComplianceLevel, DomainAnalysis, ExecutiveSummary, Finding, Severity
from .domains import mean_domain_score
from .findings import count_by_severity
from .rules import (
    COMPLIANCE_LEVEL_THRESHOLDS,
    KEY_DOMAIN_LIMIT,
    REMEDIATION_TIME_BUCKETS,
    REMEDIATION_TIME_MAX,
    REMEDIATION_WEEKS,
    STRONG_DOMAIN_SCORE,
    WEAK_DOMAIN_SCORE,
    bucket,
    ceiling_bucket,
)


def compliance_level(score: float) -> ComplianceLevel:
    return bucket(score, COMPLIANCE_LEVEL_THRESHOLDS, ComplianceLevel.NON_COMPLIANT)


def readiness_narrative(score: float, critical: int, high: int) -> str:
    if score >= 95 and critical == 0:
        return (
            "Organization demonstrates strong readiness for certification "
            "with comprehensive security controls implemented."
        )
    if score >= 80 and critical == 0:
        return (
            "Organization shows good progress toward certification. "
            "Addressing high-priority gaps will significantly improve readiness."
        )
    if score >= 70:
        return (
            "Organization has established a foundation for compliance but requires "
            "focused effort on critical and high-priority gaps."
        )
    return (
        "Organization requires significant remediation effort across multiple "
        "domains to achieve certification readiness."
    )


def estimate_remediation_time(critical: int, high: int, medium: int) -> str:
    weeks = (
        critical * REMEDIATION_WEEKS[Severity.CRITICAL]
        + high * REMEDIATION_WEEKS[Severity.HIGH]
        + medium * REMEDIATION_WEEKS[Severity.MEDIUM]
    )
    return ceiling_bucket(weeks, REMEDIATION_TIME_BUCKETS, REMEDIATION_TIME_MAX)


def summarize(findings: list[Finding], domains: list[DomainAnalysis]) -> ExecutiveSummary:
    counts = count_by_severity(findings)
    score = mean_domain_score(domains)

    strong = [d for d in domains if d.overall_score >= STRONG_DOMAIN_SCORE][:KEY_DOMAIN_LIMIT]
    weak = [d for d in domains if d.overall_score < WEAK_DOMAIN_SCORE][:KEY_DOMAIN_LIMIT]

    return ExecutiveSummary(
        overall_score=score,
        compliance_level=compliance_level(score),
        critical_findings=counts[Severity.CRITICAL],
        high_findings=counts[Severity.HIGH],
        medium_findings=counts[Severity.MEDIUM],
        low_findings=counts[Severity.LOW],
        readiness_assessment=readiness_narrative(
            score, counts[Severity.CRITICAL], counts[Severity.HIGH]
        ),
        key_strengths=tuple(
            f"Strong {d.domain} implementation with {d.overall_score:.0f}% compliance"
            for d in strong
        ),
        key_weaknesses=tuple(
            f"{d.domain} requires significant improvement ({d.overall_score:.0f}% compliant)"
            for d in weak
        ),
        estimated_remediation_time=estimate_remediation_time(
            counts[Severity.CRITICAL], counts[Severity.HIGH], counts[Severity.MEDIUM]
        ),
    )
