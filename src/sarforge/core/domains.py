"""Per-domain compliance statistics and maturity tiers."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.assessment import Answer, AssessmentRecord
from ..models.catalogue import Catalogue, Section
from ..models.report import DomainAnalysis
from .rules import MATURITY_THRESHOLDS, bucket


@dataclass
class _DomainTally:
    controls: int = 0
    compliant: int = 0
    partial: int = 0
    non_compliant: int = 0
    not_applicable: int = 0

    @property
    def applicable(self) -> int:
        return self.controls - self.not_applicable


def _tally(section: Section, assessment: AssessmentRecord) -> _DomainTally:
    tally = _DomainTally()
    for control in section.controls():
        tally.controls += 1
        answer = assessment.answer_for(control.id)
        if answer is Answer.YES:
            tally.compliant += 1
        elif answer is Answer.PARTIAL:
            tally.partial += 1
        elif answer is Answer.NOT_APPLICABLE:
            tally.not_applicable += 1
        else:
            tally.non_compliant += 1
    return tally


def domain_score(compliant: int, partial: int, applicable: int) -> float:
    """Partial answers earn half credit; an empty denominator scores 100."""
    if applicable <= 0:
        return 100.0
    return 100.0 * (compliant + 0.5 * partial) / applicable


def maturity_level(score: float) -> int:
    return bucket(score, MATURITY_THRESHOLDS, 1)


def _strengths(tally: _DomainTally) -> list[str]:
    strengths: list[str] = []
    if tally.applicable > 0 and tally.compliant / tally.applicable * 100 >= 90:
        strengths.append("Strong overall compliance posture")
    if tally.not_applicable > 0:
        strengths.append("Appropriate control scoping and tailoring")
    if tally.compliant > tally.non_compliant * 2:
        strengths.append("Majority of controls properly implemented")
    return strengths or ["Foundation established for improvement"]


def _weaknesses(tally: _DomainTally) -> list[str]:
    weaknesses: list[str] = []
    if tally.applicable > 0 and tally.non_compliant / tally.applicable * 100 > 30:
        weaknesses.append("Significant compliance gaps requiring immediate attention")
    if tally.partial > tally.compliant:
        weaknesses.append("Many controls only partially implemented")
    if tally.non_compliant > 5:
        weaknesses.append("Multiple controls not yet implemented")
    return weaknesses or ["Minor improvements needed"]


def _recommendations(tally: _DomainTally) -> list[str]:
    recommendations: list[str] = []
    if tally.non_compliant > 0:
        recommendations.append(
            f"Prioritize implementation of {tally.non_compliant} non-compliant controls"
        )
    if tally.partial > 0:
        recommendations.append(
            f"Complete implementation of {tally.partial} partially implemented controls"
        )
    recommendations.append("Establish regular review and monitoring process")
    recommendations.append("Document all control implementations with evidence")
    return recommendations


def analyze_domains(catalogue: Catalogue, assessment: AssessmentRecord) -> list[DomainAnalysis]:
    """One DomainAnalysis per section, in catalogue order."""
    results: list[DomainAnalysis] = []
    for section in catalogue.sections:
        tally = _tally(section, assessment)
        score = domain_score(tally.compliant, tally.partial, tally.applicable)
        results.append(DomainAnalysis(
            domain=section.name,
            domain_code=section.code,
            total_controls=tally.controls,
            compliant_controls=tally.compliant,
            partially_compliant_controls=tally.partial,
            non_compliant_controls=tally.non_compliant,
            not_applicable_controls=tally.not_applicable,
            overall_score=score,
            maturity_level=maturity_level(score),
            no_applicable_controls=tally.applicable <= 0,
            strengths=tuple(_strengths(tally)),
            weaknesses=tuple(_weaknesses(tally)),
            recommendations=tuple(_recommendations(tally)),
        ))
    return results


def mean_domain_score(domains: list[DomainAnalysis]) -> float:
    """Unweighted mean: every domain counts once regardless of its size."""
    if not domains:
        return 0.0
    return sum(d.overall_score for d in domains) / len(domains)
