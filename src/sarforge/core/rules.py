"""Fixed lookup tables used by the analysis stages.

Tables are keyed by enum members so an unmapped value fails with KeyError
instead of silently producing an empty field.
"""

from __future__ import annotations

from ..models.assessment import Answer
from ..models.catalogue import Priority
from ..models.report import (
    CertificationReadiness,
    ComplianceLevel,
    ComplianceState,
    Effort,
    Phase,
    RecommendationPriority,
    Severity,
)

# (control priority, compliance state) -> finding severity
SEVERITY_RULES: dict[tuple[Priority, ComplianceState], Severity] = {
    (Priority.CRITICAL, ComplianceState.NON_COMPLIANT): Severity.CRITICAL,
    (Priority.HIGH, ComplianceState.NON_COMPLIANT): Severity.HIGH,
    (Priority.MEDIUM, ComplianceState.NON_COMPLIANT): Severity.MEDIUM,
    (Priority.LOW, ComplianceState.NON_COMPLIANT): Severity.MEDIUM,
    (Priority.CRITICAL, ComplianceState.PARTIALLY_COMPLIANT): Severity.HIGH,
    (Priority.HIGH, ComplianceState.PARTIALLY_COMPLIANT): Severity.MEDIUM,
    (Priority.MEDIUM, ComplianceState.PARTIALLY_COMPLIANT): Severity.MEDIUM,
    (Priority.LOW, ComplianceState.PARTIALLY_COMPLIANT): Severity.MEDIUM,
}

ANSWER_STATES: dict[Answer, ComplianceState] = {
    Answer.NO: ComplianceState.NON_COMPLIANT,
    Answer.PARTIAL: ComplianceState.PARTIALLY_COMPLIANT,
}

CURRENT_STATE_TEXT: dict[ComplianceState, str] = {
    ComplianceState.NON_COMPLIANT: "Control not implemented",
    ComplianceState.PARTIALLY_COMPLIANT: "Control partially implemented",
}

REMEDIATION_EFFORT: dict[Severity, Effort] = {
    Severity.CRITICAL: Effort.HIGH,
    Severity.HIGH: Effort.HIGH,
    Severity.MEDIUM: Effort.MEDIUM,
    Severity.LOW: Effort.LOW,
}

COST_RANGES: dict[Severity, str] = {
    Severity.CRITICAL: "$10,000 - $50,000",
    Severity.HIGH: "$5,000 - $25,000",
    Severity.MEDIUM: "$2,500 - $10,000",
    Severity.LOW: "$1,000 - $5,000",
}

FINDING_DUE_DAYS: dict[Severity, int] = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 60,
    Severity.MEDIUM: 90,
    Severity.LOW: 180,
}

IMPACT_TEXT: dict[Severity, str] = {
    Severity.CRITICAL: "poses significant security risk and prevents certification",
    Severity.HIGH: "increases security risk and may prevent certification",
    Severity.MEDIUM: "presents moderate security risk and should be addressed before assessment",
    Severity.LOW: "presents minimal security risk but should be remediated for full compliance",
}

# Lower bound (inclusive) -> maturity level, checked top-down.
MATURITY_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (95, 5),
    (85, 4),
    (70, 3),
    (50, 2),
)

COMPLIANCE_LEVEL_THRESHOLDS: tuple[tuple[float, ComplianceLevel], ...] = (
    (95, ComplianceLevel.LEVEL_2),
    (80, ComplianceLevel.LEVEL_1),
)

STRONG_DOMAIN_SCORE = 90
WEAK_DOMAIN_SCORE = 70
KEY_DOMAIN_LIMIT = 5

# Likelihood and impact share one map, so risk_score == axis(severity) ** 2.
RISK_AXIS: dict[Severity, int] = {
    Severity.CRITICAL: 5,
    Severity.HIGH: 4,
    Severity.MEDIUM: 3,
    Severity.LOW: 2,
}

RISK_LEVEL_THRESHOLDS: tuple[tuple[int, Severity], ...] = (
    (20, Severity.CRITICAL),
    (12, Severity.HIGH),
    (6, Severity.MEDIUM),
)

REMEDIATION_WEEKS: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 2,
    Severity.MEDIUM: 1,
}

REMEDIATION_TIME_BUCKETS: tuple[tuple[int, str], ...] = (
    (12, "3-6 months"),
    (24, "6-9 months"),
    (36, "9-12 months"),
)
REMEDIATION_TIME_MAX = "12-18 months"

INVESTMENT_PER_GAP: dict[Severity, float] = {
    Severity.CRITICAL: 30000,
    Severity.HIGH: 15000,
    Severity.MEDIUM: 7500,
}

INVESTMENT_BUCKETS: tuple[tuple[float, str], ...] = (
    (100000, "$50,000 - $100,000"),
    (250000, "$100,000 - $250,000"),
    (500000, "$250,000 - $500,000"),
)
INVESTMENT_MAX = "$500,000+"

TIME_TO_READINESS: dict[CertificationReadiness, str] = {
    CertificationReadiness.READY: "1-2 months for final preparation",
    CertificationReadiness.NEAR_READY: "3-6 months with focused remediation",
    CertificationReadiness.SIGNIFICANT_WORK_NEEDED: "6-12 months with comprehensive program",
    CertificationReadiness.NOT_READY: "12-18 months with significant investment",
}

NEXT_STEP_LIMIT = 10

PHASES: dict[RecommendationPriority, Phase] = {
    RecommendationPriority.IMMEDIATE: Phase.IMMEDIATE,
    RecommendationPriority.SHORT_TERM: Phase.PHASE_1,
    RecommendationPriority.MEDIUM_TERM: Phase.PHASE_2,
    RecommendationPriority.LONG_TERM: Phase.PHASE_3,
}

NEXT_STEP_DUE_DAYS: dict[RecommendationPriority, int] = {
    RecommendationPriority.IMMEDIATE: 30,
    RecommendationPriority.SHORT_TERM: 90,
    RecommendationPriority.MEDIUM_TERM: 180,
    RecommendationPriority.LONG_TERM: 365,
}


def bucket(value: float, thresholds, default):
    """Return the label of the first (lower_bound, label) pair that value reaches."""
    for lower_bound, label in thresholds:
        if value >= lower_bound:
            return label
    return default


def ceiling_bucket(value: float, thresholds, default):
    """Return the label of the first (upper_bound, label) pair that value fits under."""
    for upper_bound, label in thresholds:
        if value <= upper_bound:
            return label
    return default


def format_id(prefix: str, number: int) -> str:
    return f"{prefix}-{number:03d}"
