from __future__ import annotations

import logging

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import generate_vibe_scores
from ..repositories.areas import AreaRepository, AreaVibeRepository
from .adjuster import TIME_OF_DAY, VIBE_TYPES, adjust_scores_for_time, sanitize_base_scores
from .models import AreaVibes, Location, VibeCalculateResponse

logger = logging.getLogger(__name__)

DEFAULT_TOP_VIBE = "calm_nature"


class AreaNotFoundError(LookupError):
    pass


class GenerationError(RuntimeError):
    pass


def calculate_area_vibes(
    area_id: str,
    context: str | None,
    areas: AreaRepository,
    vibes: AreaVibeRepository,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> VibeCalculateResponse:
    area = areas.get(area_id)
    if area is None:
        raise AreaNotFoundError(area_id)

    raw = generate_vibe_scores(area.model_dump(), context, VIBE_TYPES, config=config)
    base_scores = sanitize_base_scores(raw)
    if not base_scores:
        raise GenerationError(f"No usable vibe scores for area {area_id}")

    saved: dict[str, dict[str, int]] = {}
    for period in TIME_OF_DAY:
        for vibe_type, score in adjust_scores_for_time(base_scores, period).items():
            try:
                vibes.upsert(area_id, vibe_type, period, score)
            except Exception:
                logger.warning(
                    "Failed to save %s for %s in area %s", vibe_type, period, area_id,
                    exc_info=True,
                )
                continue
            saved.setdefault(period, {})[vibe_type] = score

    logger.info("Saved vibe scores for area %s (%d periods)", area_id, len(saved))
    return VibeCalculateResponse(area_id=area_id, scores=base_scores, saved_scores=saved)


def list_area_vibes(
    period: str,
    areas: AreaRepository,
    vibes: AreaVibeRepository,
) -> list[AreaVibes]:
    result: list[AreaVibes] = []
    for area in areas.list_all():
        scores = vibes.scores_for(area.id, period)
        if scores:
            top_vibe, top_score = max(scores.items(), key=lambda kv: kv[1])
        else:
            top_vibe, top_score = DEFAULT_TOP_VIBE, 0
        result.append(AreaVibes(
            area_id=area.id,
            name=area.name,
            location=Location(lat=area.lat, lng=area.lng),
            top_vibe=top_vibe,
            top_score=top_score,
            vibes_for_time=scores,
        ))
    return result
