"""Assessment record and assessor metadata models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Answer(str, Enum):
    YES = "yes"
    PARTIAL = "partial"
    NO = "no"
    NOT_APPLICABLE = "not-applicable"


_ANSWER_ALIASES = {
    "yes": Answer.YES,
    "partial": Answer.PARTIAL,
    "no": Answer.NO,
    "not-applicable": Answer.NOT_APPLICABLE,
    "not_applicable": Answer.NOT_APPLICABLE,
    "na": Answer.NOT_APPLICABLE,
    "n/a": Answer.NOT_APPLICABLE,
}


def normalize_answer(value: object) -> Answer:
    """Map a raw stored answer onto an Answer.

    Anything unrecorded or unrecognised counts as ``no``.
    """
    if isinstance(value, Answer):
        return value
    if isinstance(value, bool):
        # YAML 1.1 reads bare yes/no as booleans
        return Answer.YES if value else Answer.NO
    if isinstance(value, str):
        return _ANSWER_ALIASES.get(value.strip().lower(), Answer.NO)
    return Answer.NO


class AssessmentRecord(BaseModel):
    """Answers collected for one assessment, keyed by control id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    organization_name: str = ""
    responses: dict[str, Answer] = {}
    evidence: dict[str, list[str]] = Field(default_factory=dict, alias="questionEvidence")
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    last_modified: datetime = Field(default_factory=datetime.now, alias="lastModified")

    @field_validator("responses", mode="before")
    @classmethod
    def _normalize_responses(cls, value: object) -> dict[str, Answer]:
        if not isinstance(value, dict):
            return {}
        return {str(k): normalize_answer(v) for k, v in value.items()}

    @field_validator("evidence", mode="before")
    @classmethod
    def _normalize_evidence(cls, value: object) -> dict[str, list[str]]:
        if not isinstance(value, dict):
            return {}
        return {str(k): [str(item) for item in (v or [])] for k, v in value.items()}

    def answer_for(self, control_id: str) -> Answer:
        return self.responses.get(control_id, Answer.NO)

    def evidence_for(self, control_id: str) -> list[str]:
        return list(self.evidence.get(control_id, []))


class AssessorInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    organization: str = ""
    credentials: list[str] = []
    contact_info: str = Field(default="", alias="contactInfo")
