"""Phased next steps for the top recommendations."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..models.report import NextStep, Recommendation
from .rules import NEXT_STEP_DUE_DAYS, NEXT_STEP_LIMIT, PHASES, format_id

DELIVERABLES = (
    "Implementation documentation",
    "Configuration evidence",
    "Testing results",
    "Updated policies/procedures",
)

SUCCESS_CRITERIA = (
    "Control implemented per framework requirements",
    "Evidence documented and verified",
    "Staff trained on new procedures",
    "Control effectiveness validated",
)


def schedule_next_steps(
    recommendations: list[Recommendation],
    now: Optional[datetime] = None,
    limit: int = NEXT_STEP_LIMIT,
) -> list[NextStep]:
    if now is None:
        now = datetime.now()

    steps: list[NextStep] = []
    for index, rec in enumerate(recommendations[:limit], start=1):
        steps.append(NextStep(
            id=format_id("NS", index),
            phase=PHASES[rec.priority],
            title=rec.title,
            description=rec.description,
            due_date=now + timedelta(days=NEXT_STEP_DUE_DAYS[rec.priority]),
            dependencies=rec.dependencies,
            deliverables=DELIVERABLES,
            success_criteria=SUCCESS_CRITERIA,
        ))
    return steps
