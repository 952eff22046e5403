"""Security assessment report data models.

Every derived model is frozen: a pipeline stage builds new values and never
edits the output of an earlier stage.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from .assessment import AssessorInfo


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_ORDER: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


class ComplianceState(str, Enum):
    NON_COMPLIANT = "non-compliant"
    PARTIALLY_COMPLIANT = "partially-compliant"


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ComplianceLevel(str, Enum):
    LEVEL_1 = "Level 1"
    LEVEL_2 = "Level 2"
    LEVEL_3 = "Level 3"
    NON_COMPLIANT = "Non-Compliant"


class RecommendationPriority(str, Enum):
    IMMEDIATE = "immediate"
    SHORT_TERM = "short-term"
    MEDIUM_TERM = "medium-term"
    LONG_TERM = "long-term"


class RecommendationCategory(str, Enum):
    TECHNICAL = "technical"
    POLICY = "policy"
    PROCESS = "process"
    TRAINING = "training"
    DOCUMENTATION = "documentation"


class Phase(str, Enum):
    IMMEDIATE = "immediate"
    PHASE_1 = "phase-1"
    PHASE_2 = "phase-2"
    PHASE_3 = "phase-3"


class CertificationReadiness(str, Enum):
    READY = "ready"
    NEAR_READY = "near-ready"
    SIGNIFICANT_WORK_NEEDED = "significant-work-needed"
    NOT_READY = "not-ready"


class Likelihood(str, Enum):
    VERY_HIGH = "very-high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    VERY_LOW = "very-low"


class AppendixType(str, Enum):
    EVIDENCE_LIST = "evidence-list"
    CONTROL_MATRIX = "control-matrix"
    INTERVIEW_NOTES = "interview-notes"
    TECHNICAL_FINDINGS = "technical-findings"
    REFERENCE = "reference"


class AssessmentType(str, Enum):
    SELF_ASSESSMENT = "Self-Assessment"
    GAP_ANALYSIS = "Gap Analysis"
    PRE_ASSESSMENT = "Pre-Assessment"
    C3PAO_ASSESSMENT = "C3PAO Assessment"


class Finding(BaseModel):
    """A gap record for one control that is not fully compliant."""

    model_config = ConfigDict(frozen=True)

    id: str
    control_id: str
    control_title: str
    domain: str
    domain_code: str
    severity: Severity
    status: ComplianceState
    current_state: str
    required_state: str
    gap_description: str
    impact_analysis: str
    remediation_effort: Effort
    estimated_cost: str
    priority: int
    assigned_to: str = "Compliance Team"
    due_date: datetime
    evidence: tuple[str, ...] = ()


class DomainAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain: str
    domain_code: str
    total_controls: int
    compliant_controls: int
    partially_compliant_controls: int
    non_compliant_controls: int
    not_applicable_controls: int
    overall_score: float
    maturity_level: int
    no_applicable_controls: bool = False
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


class ExecutiveSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: float
    compliance_level: ComplianceLevel
    critical_findings: int
    high_findings: int
    medium_findings: int
    low_findings: int
    readiness_assessment: str
    key_strengths: tuple[str, ...] = ()
    key_weaknesses: tuple[str, ...] = ()
    estimated_remediation_time: str


class RiskMatrixEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    control_id: str
    likelihood: int
    impact: int
    risk_score: int
    risk_level: Severity


class RiskCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    risk_level: Severity
    description: str
    potential_impact: str
    likelihood: Likelihood
    affected_controls: tuple[str, ...] = ()


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_risk_level: Severity
    risk_categories: tuple[RiskCategory, ...] = ()
    risk_matrix: tuple[RiskMatrixEntry, ...] = ()
    mitigation_strategy: str


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    priority: RecommendationPriority
    category: RecommendationCategory
    title: str
    description: str
    rationale: str
    affected_controls: tuple[str, ...] = ()
    estimated_effort: str
    estimated_cost: str
    expected_benefit: str
    dependencies: tuple[str, ...] = ()


class GapAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_gaps: int = 0
    critical_gaps: int = 0
    high_priority_gaps: int = 0
    medium_priority_gaps: int = 0
    low_priority_gaps: int = 0


class ComplianceStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_level: ComplianceLevel = ComplianceLevel.LEVEL_2
    current_readiness: float
    gap_analysis: GapAnalysis
    certification_readiness: CertificationReadiness
    estimated_time_to_readiness: str
    required_investment: str


class NextStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    phase: Phase
    title: str
    description: str
    owner: str = "To Be Assigned"
    due_date: datetime
    dependencies: tuple[str, ...] = ()
    deliverables: tuple[str, ...] = ()
    success_criteria: tuple[str, ...] = ()


class Appendix(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    type: AppendixType
    content: str


class AssessmentPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: datetime
    end_date: datetime


class ScopeAndMethodology(BaseModel):
    model_config = ConfigDict(frozen=True)

    assessment_type: AssessmentType = AssessmentType.GAP_ANALYSIS
    assessment_scope: tuple[str, ...] = ()
    methodology: str = ""
    standards: tuple[str, ...] = ()
    assessment_period: AssessmentPeriod
    systems_assessed: tuple[str, ...] = ()
    documentation_reviewed: tuple[str, ...] = ()
    interviews_conducted: tuple[str, ...] = ()


class Report(BaseModel):
    """The assembled security assessment report."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    version: str = "1.0"
    organization: str
    assessment_date: datetime
    generated_date: datetime
    assessor: AssessorInfo
    executive_summary: ExecutiveSummary
    scope_and_methodology: ScopeAndMethodology
    findings: tuple[Finding, ...] = ()
    domain_analysis: tuple[DomainAnalysis, ...] = ()
    risk_assessment: RiskAssessment
    recommendations: tuple[Recommendation, ...] = ()
    compliance_status: ComplianceStatus
    next_steps: tuple[NextStep, ...] = ()
    appendices: tuple[Appendix, ...] = ()
