"""Tests for core/findings.py."""

from __future__ import annotations

from datetime import timedelta

import pytest

from sarforge.core.findings import count_by_severity, determine_severity, extract_findings
from sarforge.models.assessment import AssessmentRecord
from sarforge.models.catalogue import Control, Priority
from sarforge.models.report import ComplianceState, Effort, Severity


class TestDetermineSeverity:
    @pytest.mark.parametrize(
        ("priority", "status", "expected"),
        [
            (Priority.CRITICAL, ComplianceState.NON_COMPLIANT, Severity.CRITICAL),
            (Priority.HIGH, ComplianceState.NON_COMPLIANT, Severity.HIGH),
            (Priority.MEDIUM, ComplianceState.NON_COMPLIANT, Severity.MEDIUM),
            (Priority.LOW, ComplianceState.NON_COMPLIANT, Severity.MEDIUM),
            (Priority.CRITICAL, ComplianceState.PARTIALLY_COMPLIANT, Severity.HIGH),
            (Priority.HIGH, ComplianceState.PARTIALLY_COMPLIANT, Severity.MEDIUM),
            (Priority.MEDIUM, ComplianceState.PARTIALLY_COMPLIANT, Severity.MEDIUM),
            (Priority.LOW, ComplianceState.PARTIALLY_COMPLIANT, Severity.MEDIUM),
        ],
    )
    def test_rule_table(self, priority, status, expected):
        control = Control(id="X.1", title="Control", priority=priority)
        assert determine_severity(control, status) == expected


class TestExtractFindings:
    def test_unanswered_critical_control_is_critical(self, single_critical_catalogue, now):
        findings = extract_findings(single_critical_catalogue, AssessmentRecord(), now=now)
        assert len(findings) == 1
        assert findings[0].severity == Severity.CRITICAL
        assert findings[0].status == ComplianceState.NON_COMPLIANT
        assert findings[0].current_state == "Control not implemented"

    def test_partial_critical_control_is_high(self, single_critical_catalogue, now):
        assessment = AssessmentRecord(responses={"AC.1": "partial"})
        findings = extract_findings(single_critical_catalogue, assessment, now=now)
        assert findings[0].severity == Severity.HIGH
        assert findings[0].status == ComplianceState.PARTIALLY_COMPLIANT

    def test_yes_produces_no_finding(self, single_critical_catalogue, now):
        assessment = AssessmentRecord(responses={"AC.1": "yes"})
        assert extract_findings(single_critical_catalogue, assessment, now=now) == []

    def test_not_applicable_produces_no_finding(self, single_critical_catalogue, now):
        assessment = AssessmentRecord(responses={"AC.1": "not-applicable"})
        assert extract_findings(single_critical_catalogue, assessment, now=now) == []

    def test_unknown_answer_counts_as_no(self, single_critical_catalogue, now):
        assessment = AssessmentRecord(responses={"AC.1": "maybe"})
        findings = extract_findings(single_critical_catalogue, assessment, now=now)
        assert findings[0].status == ComplianceState.NON_COMPLIANT

    def test_ordered_by_severity_then_catalogue_order(self, mixed_catalogue, mixed_assessment, now):
        findings = extract_findings(mixed_catalogue, mixed_assessment, now=now)
        assert [f.control_id for f in findings] == ["AC.1", "AC.2", "AC.4", "SI.1"]
        assert [f.severity for f in findings] == [
            Severity.CRITICAL,
            Severity.HIGH,
            Severity.MEDIUM,
            Severity.MEDIUM,
        ]

    def test_ids_follow_final_order(self, mixed_catalogue, mixed_assessment, now):
        findings = extract_findings(mixed_catalogue, mixed_assessment, now=now)
        assert [f.id for f in findings] == ["F-001", "F-002", "F-003", "F-004"]

    def test_discovery_order_kept_as_priority(self, make_catalogue, now):
        catalogue = make_catalogue({"AC": ["medium", "critical"]})
        findings = extract_findings(catalogue, AssessmentRecord(), now=now)
        assert [(f.control_id, f.priority) for f in findings] == [("AC.2", 2), ("AC.1", 1)]

    def test_coverage_each_control_at_most_once(self, mixed_catalogue, mixed_assessment, now):
        findings = extract_findings(mixed_catalogue, mixed_assessment, now=now)
        ids = [f.control_id for f in findings]
        assert len(ids) == len(set(ids))
        for _, control in mixed_catalogue.walk():
            answer = mixed_assessment.answer_for(control.id).value
            expected = 0 if answer in ("yes", "not-applicable") else 1
            assert ids.count(control.id) == expected

    def test_derived_fields(self, mixed_catalogue, mixed_assessment, now):
        by_control = {f.control_id: f for f in extract_findings(mixed_catalogue, mixed_assessment, now=now)}

        critical = by_control["AC.1"]
        assert critical.remediation_effort == Effort.HIGH
        assert critical.estimated_cost == "$10,000 - $50,000"
        assert critical.due_date == now + timedelta(days=30)
        assert critical.domain == "Access Control"
        assert critical.domain_code == "AC"
        assert critical.required_state == "Implement AC control 1."

        high = by_control["AC.2"]
        assert high.remediation_effort == Effort.HIGH
        assert high.due_date == now + timedelta(days=60)

        medium = by_control["SI.1"]
        assert medium.remediation_effort == Effort.MEDIUM
        assert medium.estimated_cost == "$2,500 - $10,000"
        assert medium.due_date == now + timedelta(days=90)

    def test_evidence_copied(self, mixed_catalogue, mixed_assessment, now):
        by_control = {f.control_id: f for f in extract_findings(mixed_catalogue, mixed_assessment, now=now)}
        assert by_control["AC.2"].evidence == ("MFA rollout plan",)
        assert by_control["AC.1"].evidence == ()

    def test_gap_description_mentions_control(self, mixed_catalogue, mixed_assessment, now):
        by_control = {f.control_id: f for f in extract_findings(mixed_catalogue, mixed_assessment, now=now)}
        assert "has not implemented AC control 1" in by_control["AC.1"].gap_description
        assert "partially implemented AC control 2" in by_control["AC.2"].gap_description


class TestCountBySeverity:
    def test_counts(self, mixed_catalogue, mixed_assessment, now):
        counts = count_by_severity(extract_findings(mixed_catalogue, mixed_assessment, now=now))
        assert counts == {
            Severity.CRITICAL: 1,
            Severity.HIGH: 1,
            Severity.MEDIUM: 2,
            Severity.LOW: 0,
        }

    def test_empty(self):
        assert sum(count_by_severity([]).values()) == 0
