"""
Time-of-day adjustment for neighborhood vibe scores.

Base scores come from an LLM and are not trusted: ``sanitize_base_scores``
keeps only known vibe types with finite numeric values. Values are kept
unrounded so the multipliers apply to what the model returned; rounding and
clamping to [0, 100] happen once, on the adjusted value.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

from ..matching.engine import round_half_up

VIBE_TYPES: dict[str, str] = {
    "calm_nature": "Calm & nature: greenery, quiet, walks, rivers, parks",
    "family": "Family & child-rearing: nurseries, children, safety, parks",
    "creative": "Creative: galleries, cafes, art, renovated buildings",
    "nightlife": "Night & lively: bars, music, energy, bustle",
    "heritage": "History & tradition: shrines, old houses, tradition, culture",
    "industrial": "Industrial & craft: warehouses, factories, artisans, making things",
    "seaside": "Sea & resort: ocean, breeze, light, resort feel",
    "academic": "Academic & studious: libraries, universities, quiet, learning",
    "luxury": "Refined & upscale: cafes, boutiques, sophistication, quality",
    "startup": "Startup: coworking, IT, entrepreneurship, innovation",
}

TIME_OF_DAY = ("morning", "day", "evening", "night")

# Daytime is the baseline; other periods nudge a few categories.
TIME_MULTIPLIERS: dict[str, dict[str, float]] = {
    "morning": {"calm_nature": 1.1, "family": 1.05, "nightlife": 0.3},
    "day": {},
    "evening": {"nightlife": 1.2, "family": 0.9},
    "night": {"calm_nature": 1.15, "nightlife": 1.3, "family": 0.6},
}


def clamp_score(value: float) -> int:
    return min(100, max(0, round_half_up(value)))


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def sanitize_base_scores(raw: Mapping[str, Any]) -> dict[str, float]:
    """Keep known vibe types with finite numbers, unrounded."""
    cleaned: dict[str, float] = {}
    for vibe_type, value in raw.items():
        if vibe_type not in VIBE_TYPES:
            continue
        number = _as_number(value)
        if number is None:
            continue
        cleaned[vibe_type] = number
    return cleaned


def adjust_scores_for_time(base_scores: Mapping[str, float], period: str) -> dict[str, int]:
    if period not in TIME_MULTIPLIERS:
        raise ValueError(f"Unknown time of day: {period!r}")

    adjusted: dict[str, float] = {}
    for vibe_type, value in base_scores.items():
        number = _as_number(value)
        if number is not None:
            adjusted[vibe_type] = number

    for vibe_type, factor in TIME_MULTIPLIERS[period].items():
        adjusted[vibe_type] = adjusted.get(vibe_type, 0.0) * factor

    return {k: clamp_score(v) for k, v in adjusted.items()}
