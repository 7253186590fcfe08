"""
Property matching engine.

Responsibilities:
- Score every catalog property against a diagnostic answer set.
- Combine the five factor scores into one weighted ``ai_score``.
- Rank properties (stable on ties) and cap the list for display.
- Persist the top results per user on a best-effort basis.
"""
from __future__ import annotations

import logging
import math
import time

from ..analytics.store import record_event
from ..repositories.catalog import PropertyRepository
from ..repositories.results import MatchResultRepository
from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from .models import (
    DiagnosticAnswers,
    MatchResponse,
    MatchResultRecord,
    MatchScore,
    PropertyOut,
    ScoreBreakdown,
    ScoredProperty,
)
from .regions import RegionTable, get_region_table
from .scorers import (
    FactorScore,
    score_budget,
    score_environment,
    score_family,
    score_lifestyle,
    score_workstyle,
)

logger = logging.getLogger(__name__)

WEIGHTS: dict[str, float] = {
    "budget": 0.30,
    "lifestyle": 0.25,
    "environment": 0.20,
    "workstyle": 0.15,
    "family": 0.10,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, unlike ``round()``."""
    return int(math.floor(value + 0.5))


def aggregate(
    budget: FactorScore,
    lifestyle: FactorScore,
    environment: FactorScore,
    workstyle: FactorScore,
    family: FactorScore,
) -> MatchScore:
    total = round_half_up(
        budget.score * WEIGHTS["budget"]
        + lifestyle.score * WEIGHTS["lifestyle"]
        + environment.score * WEIGHTS["environment"]
        + workstyle.score * WEIGHTS["workstyle"]
        + family.score * WEIGHTS["family"]
    )
    reasons = [
        reason
        for factor in (budget, lifestyle, environment, workstyle, family)
        for reason in factor.reasons
        if reason
    ]
    return MatchScore(
        ai_score=total,
        match_reasons=reasons,
        score_breakdown=ScoreBreakdown(
            budget=budget.score,
            lifestyle=lifestyle.score,
            environment=environment.score,
            workstyle=workstyle.score,
            family=family.score,
        ),
    )


def score_property(
    prop: PropertyOut,
    answers: DiagnosticAnswers,
    regions: RegionTable,
) -> ScoredProperty:
    match = aggregate(
        score_budget(prop, answers.q5_budget),
        score_lifestyle(prop, answers.q4_priority, regions),
        score_environment(prop, answers.q3_household, regions),
        score_workstyle(prop, answers.q1_work_mode, regions),
        score_family(prop, answers.q3_household),
    )
    return ScoredProperty(**prop.model_dump(), **match.model_dump())


def rank(scored: list[ScoredProperty]) -> list[ScoredProperty]:
    """Order by ``ai_score`` descending; equal scores keep their input order."""
    return sorted(scored, key=lambda p: p.ai_score, reverse=True)


def score_catalog(
    properties: list[PropertyOut],
    answers: DiagnosticAnswers,
    regions: RegionTable,
) -> list[ScoredProperty]:
    return rank([score_property(p, answers, regions) for p in properties])


def _to_record(user_id: str, prop: ScoredProperty) -> MatchResultRecord:
    breakdown = prop.score_breakdown
    return MatchResultRecord(
        user_id=user_id,
        property_id=prop.id,
        total_score=prop.ai_score,
        budget_score=breakdown.budget,
        lifestyle_score=breakdown.lifestyle,
        environment_score=breakdown.environment,
        workstyle_score=breakdown.workstyle,
        family_score=breakdown.family,
        match_reasons=list(prop.match_reasons),
    )


def persist_top(
    user_id: str,
    ranked: list[ScoredProperty],
    repository: MatchResultRepository,
    limit: int,
) -> int:
    """Upsert the first *limit* results. Returns how many writes succeeded."""
    saved = 0
    for prop in ranked[:limit]:
        try:
            repository.upsert(_to_record(user_id, prop))
        except Exception:
            logger.warning(
                "Failed to save match result for user=%s property=%s",
                user_id, prop.id, exc_info=True,
            )
            continue
        saved += 1
    return saved


def run_match(
    user_id: str,
    answers: DiagnosticAnswers,
    properties: PropertyRepository,
    results: MatchResultRepository,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
    regions: RegionTable | None = None,
) -> MatchResponse:
    start_time = time.time()
    regions = regions or get_region_table(config.regions_path)

    catalog = properties.list_all()
    ranked = score_catalog(catalog, answers, regions)

    to_persist = min(config.persist_limit, len(ranked))
    saved = persist_top(user_id, ranked, results, config.persist_limit)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("match", {
        "answered": sorted(k for k, v in answers.model_dump().items() if v),
        "catalog_size": len(catalog),
        "top_property_id": ranked[0].id if ranked else None,
        "top_region": ranked[0].region if ranked else None,
        "top_score": ranked[0].ai_score if ranked else None,
        "persisted": saved,
        "persist_failures": to_persist - saved,
        "response_time_ms": elapsed_ms,
    })

    return MatchResponse(success=True, properties=ranked[: config.display_limit])
