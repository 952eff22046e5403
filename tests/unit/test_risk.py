"""Tests for core/risk.py."""

from __future__ import annotations

import pytest

from sarforge.core.findings import extract_findings
from sarforge.core.risk import assess_risk, build_risk_entry, overall_risk_level, risk_level
from sarforge.models.assessment import AssessmentRecord
from sarforge.models.report import Likelihood, Severity


class TestRiskLevel:
    @pytest.mark.parametrize(
        ("score", "level"),
        [
            (25, Severity.CRITICAL),
            (20, Severity.CRITICAL),
            (19, Severity.HIGH),
            (16, Severity.HIGH),
            (12, Severity.HIGH),
            (11, Severity.MEDIUM),
            (9, Severity.MEDIUM),
            (6, Severity.MEDIUM),
            (5, Severity.LOW),
            (4, Severity.LOW),
        ],
    )
    def test_boundaries(self, score, level):
        assert risk_level(score) == level


class TestRiskEntry:
    def test_score_is_product_of_axes(self, mixed_catalogue, mixed_assessment, now):
        findings = extract_findings(mixed_catalogue, mixed_assessment, now=now)
        entries = {f.control_id: build_risk_entry(f) for f in findings}

        critical = entries["AC.1"]
        assert (critical.likelihood, critical.impact, critical.risk_score) == (5, 5, 25)
        assert critical.risk_level == Severity.CRITICAL

        assert entries["AC.2"].risk_score == 16
        assert entries["AC.2"].risk_level == Severity.HIGH
        assert entries["SI.1"].risk_score == 9
        assert entries["SI.1"].risk_level == Severity.MEDIUM


class TestOverallRiskLevel:
    def _matrix(self, make_catalogue, now, priorities):
        findings = extract_findings(make_catalogue({"AC": priorities}), AssessmentRecord(), now=now)
        return assess_risk(findings)

    def test_six_critical_is_critical(self, make_catalogue, now):
        assert self._matrix(make_catalogue, now, ["critical"] * 6).overall_risk_level == Severity.CRITICAL

    def test_five_critical_is_high(self, make_catalogue, now):
        assert self._matrix(make_catalogue, now, ["critical"] * 5).overall_risk_level == Severity.HIGH

    def test_eleven_high_is_high(self, make_catalogue, now):
        assert self._matrix(make_catalogue, now, ["high"] * 11).overall_risk_level == Severity.HIGH

    def test_ten_high_is_medium(self, make_catalogue, now):
        assert self._matrix(make_catalogue, now, ["high"] * 10).overall_risk_level == Severity.MEDIUM

    def test_only_medium_is_low(self, make_catalogue, now):
        assert self._matrix(make_catalogue, now, ["medium"] * 30).overall_risk_level == Severity.LOW

    def test_empty_matrix(self):
        assert overall_risk_level([]) == Severity.LOW


class TestAssessRisk:
    def test_one_entry_per_finding(self, mixed_catalogue, mixed_assessment, now):
        findings = extract_findings(mixed_catalogue, mixed_assessment, now=now)
        risk = assess_risk(findings)
        assert [e.control_id for e in risk.risk_matrix] == [f.control_id for f in findings]
        assert risk.overall_risk_level == Severity.HIGH

    def test_categories(self, mixed_catalogue, mixed_assessment, now):
        findings = extract_findings(mixed_catalogue, mixed_assessment, now=now)
        breach, compliance = assess_risk(findings).risk_categories

        assert breach.category == "Data Breach Risk"
        assert breach.likelihood == Likelihood.HIGH
        assert breach.affected_controls == ("AC.1", "AC.2", "AC.4")

        assert compliance.category == "Compliance Risk"
        assert compliance.likelihood == Likelihood.MEDIUM
        assert compliance.affected_controls == ("AC.1", "AC.2", "AC.4", "SI.1")

    def test_mitigation_strategy_mentions_phased_approach(self):
        risk = assess_risk([])
        assert risk.overall_risk_level == Severity.LOW
        assert "phased remediation approach" in risk.mitigation_strategy
        assert risk.risk_matrix == ()
