from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from ..matching.models import DiagnosticAnswers
from ..repositories.diagnostics import DiagnosticRepository

logger = logging.getLogger(__name__)

# Placeholder fit scores until diagnostics are scored per answer set
DEFAULT_FIT_SCORES: dict[str, float] = {
    "education": 0.7,
    "medical": 0.8,
    "income": 0.6,
    "community": 0.75,
    "mobility": 0.5,
}

TRIAL_PLANS: list[dict[str, Any]] = [
    {
        "type": "A",
        "label": "One-week trial plan",
        "duration": "1 week",
        "estimate": 88000,
        "description": "Get a feel for the area in a short stay",
    },
    {
        "type": "B",
        "label": "Two-week standard plan",
        "duration": "2 weeks",
        "estimate": 210000,
        "description": "Experience the daily rhythm of local life",
    },
    {
        "type": "C",
        "label": "One-month in-depth plan",
        "duration": "1 month",
        "estimate": 320000,
        "description": "A full relocation rehearsal",
    },
]


class Scenario(BaseModel):
    type: str
    label: str
    duration: str
    estimate: int
    fit: dict[str, float]
    description: str


class DiagnosticResponse(BaseModel):
    success: bool = True
    diagnostic_id: str
    scenarios: list[Scenario]


def submit_diagnostic(
    answers: DiagnosticAnswers,
    repository: DiagnosticRepository,
) -> DiagnosticResponse:
    """Store an answer set and return the trial-stay scenarios for it.

    Failing to store the scenarios is logged and does not fail the request;
    failing to store the diagnostic itself propagates.
    """
    scores = dict(DEFAULT_FIT_SCORES)
    diagnostic_id = repository.insert(answers.model_dump(exclude_none=True), scores)

    rows = [
        {"diagnostic_id": diagnostic_id, "fit_scores": scores, **plan}
        for plan in TRIAL_PLANS
    ]
    try:
        repository.insert_scenarios(rows)
    except Exception:
        logger.warning("Failed to save scenarios for diagnostic %s", diagnostic_id, exc_info=True)

    return DiagnosticResponse(
        diagnostic_id=diagnostic_id,
        scenarios=[Scenario(fit=scores, **plan) for plan in TRIAL_PLANS],
    )
