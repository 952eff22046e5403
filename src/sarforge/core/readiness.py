"""Certification readiness, time-to-readiness and investment estimate."""

from __future__ import annotations

from ..models.report import (
    CertificationReadiness,
    ComplianceLevel,
    ComplianceStatus,
    DomainAnalysis,
    Finding,
    GapAnalysis,
    Severity,
)
from .domains import mean_domain_score
from .findings import count_by_severity
from .rules import (
    INVESTMENT_BUCKETS,
    INVESTMENT_MAX,
    INVESTMENT_PER_GAP,
    TIME_TO_READINESS,
    ceiling_bucket,
)


def certification_readiness(score: float, critical: int, high: int) -> CertificationReadiness:
    if score >= 95 and critical == 0:
        return CertificationReadiness.READY
    if score >= 85 and critical == 0 and high <= 3:
        return CertificationReadiness.NEAR_READY
    if score >= 70:
        return CertificationReadiness.SIGNIFICANT_WORK_NEEDED
    return CertificationReadiness.NOT_READY


def estimate_time_to_readiness(score: float, critical: int) -> str:
    if score >= 95 and critical == 0:
        return TIME_TO_READINESS[CertificationReadiness.READY]
    if score >= 85 and critical == 0:
        return TIME_TO_READINESS[CertificationReadiness.NEAR_READY]
    if score >= 70:
        return TIME_TO_READINESS[CertificationReadiness.SIGNIFICANT_WORK_NEEDED]
    return TIME_TO_READINESS[CertificationReadiness.NOT_READY]


def estimate_investment(critical: int, high: int, medium: int) -> str:
    total = (
        critical * INVESTMENT_PER_GAP[Severity.CRITICAL]
        + high * INVESTMENT_PER_GAP[Severity.HIGH]
        + medium * INVESTMENT_PER_GAP[Severity.MEDIUM]
    )
    return ceiling_bucket(total, INVESTMENT_BUCKETS, INVESTMENT_MAX)


def evaluate_readiness(
    findings: list[Finding],
    domains: list[DomainAnalysis],
    target_level: ComplianceLevel = ComplianceLevel.LEVEL_2,
) -> ComplianceStatus:
    counts = count_by_severity(findings)
    score = mean_domain_score(domains)
    critical = counts[Severity.CRITICAL]
    high = counts[Severity.HIGH]
    medium = counts[Severity.MEDIUM]

    return ComplianceStatus(
        target_level=target_level,
        current_readiness=score,
        gap_analysis=GapAnalysis(
            total_gaps=len(findings),
            critical_gaps=critical,
            high_priority_gaps=high,
            medium_priority_gaps=medium,
            low_priority_gaps=counts[Severity.LOW],
        ),
        certification_readiness=certification_readiness(score, critical, high),
        estimated_time_to_readiness=estimate_time_to_readiness(score, critical),
        required_investment=estimate_investment(critical, high, medium),
    )
