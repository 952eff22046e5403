"""Shared fixtures for sarforge tests."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

from sarforge.models.assessment import AssessmentRecord, AssessorInfo
from sarforge.models.catalogue import Catalogue

FIXED_NOW = datetime(2026, 3, 2, 9, 30, 0)


def build_catalogue(sections: dict[str, list[str]], names: dict[str, str] | None = None) -> Catalogue:
    """Build a catalogue from {section code: [control priority, ...]}.

    Control ids are "<code>.<n>" numbered from 1 within each section.
    """
    names = names or {}
    return Catalogue.model_validate({
        "id": "test-framework",
        "name": "Test Framework",
        "sections": [
            {
                "name": names.get(code, f"{code} Domain"),
                "code": code,
                "categories": [
                    {
                        "name": f"{code} Practices",
                        "questions": [
                            {
                                "id": f"{code}.{i}",
                                "title": f"{code} control {i}",
                                "guidance": f"Implement {code} control {i}.",
                                "priority": priority,
                            }
                            for i, priority in enumerate(priorities, start=1)
                        ],
                    }
                ],
            }
            for code, priorities in sections.items()
        ],
    })


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_catalogue() -> Callable[..., Catalogue]:
    return build_catalogue


@pytest.fixture
def assessor() -> AssessorInfo:
    return AssessorInfo(
        name="Jordan Reyes",
        organization="Northwind Assurance",
        credentials=["CCP", "CISSP"],
        contact_info="jordan@northwind.example",
    )


@pytest.fixture
def single_critical_catalogue() -> Catalogue:
    return build_catalogue({"AC": ["critical"]}, names={"AC": "Access Control"})


@pytest.fixture
def mixed_catalogue() -> Catalogue:
    """Two domains with a spread of priorities."""
    return build_catalogue(
        {
            "AC": ["critical", "critical", "high", "medium"],
            "SI": ["high", "medium", "low"],
        },
        names={"AC": "Access Control", "SI": "System and Information Integrity"},
    )


@pytest.fixture
def mixed_assessment() -> AssessmentRecord:
    return AssessmentRecord(
        organization_name="Contoso Defense",
        responses={
            "AC.1": "no",
            "AC.2": "partial",
            "AC.3": "yes",
            # AC.4 unanswered
            "SI.1": "partial",
            "SI.2": "not-applicable",
            "SI.3": "yes",
        },
        evidence={"AC.2": ["MFA rollout plan"], "SI.3": ["EDR console screenshot"]},
        created_at=datetime(2026, 2, 1, 8, 0, 0),
        last_modified=datetime(2026, 2, 20, 17, 0, 0),
    )


@pytest.fixture
def assessment_file(tmp_path: Path) -> Path:
    """An assessment JSON in the camelCase export format, against the bundled catalogue."""
    path = tmp_path / "assessment.json"
    path.write_text(
        json.dumps({
            "id": "assess-1",
            "organizationInfo": {"name": "Contoso Defense"},
            "responses": {
                "ac.l1-3.1.1": "yes",
                "ac.l1-3.1.2": "partial",
                "ia.l1-3.5.2": "no",
                "mp.l1-3.8.3": "na",
            },
            "questionEvidence": {"ac.l1-3.1.1": ["Access policy v2"]},
            "createdAt": "2026-02-01T08:00:00",
            "lastModified": "2026-02-20T17:00:00",
        }),
        encoding="utf-8",
    )
    return path
