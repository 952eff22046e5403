"""Remediation recommendations from critical findings and weak domains."""

from __future__ import annotations

from ..models.report import (
    DomainAnalysis,
    Effort,
    Finding,
    Recommendation,
    RecommendationCategory,
    RecommendationPriority,
    Severity,
)
from .rules import WEAK_DOMAIN_SCORE, format_id

DOMAIN_PROGRAM_EFFORT = "3-6 months"
DOMAIN_PROGRAM_COST = "$25,000 - $75,000"


def _finding_recommendation(number: int, finding: Finding) -> Recommendation:
    return Recommendation(
        id=format_id("REC", number),
        priority=RecommendationPriority.IMMEDIATE,
        category=RecommendationCategory.TECHNICAL,
        title=f"Implement {finding.control_title}",
        description=f"Address critical security gap in {finding.domain}",
        rationale=finding.gap_description,
        affected_controls=(finding.control_id,),
        estimated_effort="4-8 weeks" if finding.remediation_effort is Effort.HIGH else "2-4 weeks",
        estimated_cost=finding.estimated_cost,
        expected_benefit="Significantly reduces security risk and improves certification readiness",
    )


def _domain_recommendation(
    number: int,
    domain: DomainAnalysis,
    findings: list[Finding],
) -> Recommendation:
    affected = tuple(f.control_id for f in findings if f.domain == domain.domain)
    return Recommendation(
        id=format_id("REC", number),
        priority=RecommendationPriority.SHORT_TERM,
        category=RecommendationCategory.PROCESS,
        title=f"Comprehensive {domain.domain} Improvement Program",
        description=f"Systematic improvement of {domain.domain} controls and processes",
        rationale=(
            f"Domain currently at {domain.overall_score:.0f}% compliance, "
            "requiring structured improvement"
        ),
        affected_controls=affected,
        estimated_effort=DOMAIN_PROGRAM_EFFORT,
        estimated_cost=DOMAIN_PROGRAM_COST,
        expected_benefit=(
            f"Brings {domain.domain} to compliance and improves overall security posture"
        ),
    )


def plan_recommendations(
    findings: list[Finding],
    domains: list[DomainAnalysis],
) -> list[Recommendation]:
    """Immediate items for critical findings first, then one program per weak domain.

    Weak-domain programs list the failing controls of that domain, so every
    affected control id comes from the catalogue.
    """
    recommendations: list[Recommendation] = []

    for finding in findings:
        if finding.severity is Severity.CRITICAL:
            recommendations.append(_finding_recommendation(len(recommendations) + 1, finding))

    for domain in domains:
        if domain.overall_score < WEAK_DOMAIN_SCORE:
            recommendations.append(
                _domain_recommendation(len(recommendations) + 1, domain, findings)
            )

    return recommendations
