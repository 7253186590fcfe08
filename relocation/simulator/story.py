from __future__ import annotations

import logging
from typing import Any

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import generate_life_story
from ..repositories.areas import AreaRepository, AreaVibeRepository
from ..repositories.simulations import SimulationRepository
from ..vibes.adjuster import TIME_OF_DAY
from ..vibes.service import AreaNotFoundError, GenerationError
from .models import Persona, SimulationResponse

logger = logging.getLogger(__name__)

VIBE_LABELS: dict[str, str] = {
    "onsen_relax": "Hot springs & relaxation",
    "family": "Family & child-rearing",
    "agriculture_nature": "Farmland & nature",
    "commercial": "Shopping & convenience",
    "heritage_tourism": "History & sightseeing",
    "quiet_residential": "Quiet residential",
    "youthful_vibrant": "Young & vibrant",
    "orchard": "Orchards",
    "calm_nature": "Calm & nature",
    "nightlife": "Night & lively",
}


def group_vibes_by_time(rows: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Bucket vibe rows (already sorted by score) into time-of-day lists."""
    grouped: dict[str, list[dict[str, Any]]] = {period: [] for period in TIME_OF_DAY}
    for row in rows:
        bucket = grouped.get(row["time_of_day"])
        if bucket is None:
            continue
        bucket.append({
            "type": VIBE_LABELS.get(row["vibe_type"], row["vibe_type"]),
            "score": row["score"],
        })
    return grouped


def simulate_life(
    area_id: str,
    persona: Persona,
    areas: AreaRepository,
    vibes: AreaVibeRepository,
    simulations: SimulationRepository,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> SimulationResponse:
    area = areas.get(area_id)
    if area is None:
        raise AreaNotFoundError(area_id)

    vibes_by_time = group_vibes_by_time(vibes.all_for(area_id))
    story = generate_life_story(
        area.model_dump(), vibes_by_time, persona.model_dump(), config=config,
    )
    if not story:
        raise GenerationError(f"Story generation failed for area {area_id}")

    saved_id: str | None
    try:
        saved_id = simulations.insert(area_id, persona.model_dump(), story)
    except Exception:
        logger.warning("Failed to save simulation for area %s", area_id, exc_info=True)
        saved_id = None

    return SimulationResponse(
        area_id=area_id,
        area_name=area.name,
        simulation=story,
        saved_id=saved_id,
    )
