"""
Factor scorers for property matching.

Each scorer maps one property and one diagnostic answer to a score in
[0, 100] plus the reasons it contributes.  A missing (or empty) answer
always yields the neutral score with no reasons.
"""
from __future__ import annotations

from typing import NamedTuple

from .models import PropertyOut
from .regions import RegionTable

NEUTRAL_SCORE = 50

# bracket -> (min rent, max rent, reason); bounds are inclusive
BUDGET_BRACKETS: dict[str, tuple[int | None, int | None, str]] = {
    "under_150k": (None, 150_000, "Fits comfortably within your budget"),
    "150k_250k": (150_000, 250_000, "An ideal property inside your budget range"),
    "250k_350k": (250_000, 350_000, "Matches your budget"),
    "over_350k": (350_000, None, "Meets your premium requirements"),
}

PRIORITY_REASONS: dict[str, str] = {
    "nature": "Surrounded by rich natural scenery",
    "education": "Strong educational environment",
    "medical": "Good access to medical facilities",
    "community": "A warm, welcoming community",
}


class FactorScore(NamedTuple):
    score: int
    reasons: tuple[str, ...] = ()


def score_budget(prop: PropertyOut, budget: str | None) -> FactorScore:
    if not budget:
        return FactorScore(NEUTRAL_SCORE)

    bracket = BUDGET_BRACKETS.get(budget)
    if bracket is not None:
        low, high, reason = bracket
        if (low is None or prop.rent >= low) and (high is None or prop.rent <= high):
            return FactorScore(100, (reason,))

    # No partial credit for near misses in either direction
    return FactorScore(30)


def score_lifestyle(
    prop: PropertyOut, priority: str | None, regions: RegionTable,
) -> FactorScore:
    if not priority:
        return FactorScore(NEUTRAL_SCORE)

    if priority in regions.characteristics_of(prop.region):
        reason = PRIORITY_REASONS.get(priority)
        return FactorScore(90, (reason,) if reason else ())
    return FactorScore(NEUTRAL_SCORE)


def score_environment(
    prop: PropertyOut, household: str | None, regions: RegionTable,
) -> FactorScore:
    if not household:
        return FactorScore(NEUTRAL_SCORE)

    if household == "with_children" and prop.region in regions.family_friendly:
        return FactorScore(85, ("A great environment for raising children",))
    if household in ("couple", "single") and prop.region in regions.urban:
        return FactorScore(80, ("Comfortable everyday living environment",))
    return FactorScore(NEUTRAL_SCORE)


def score_workstyle(
    prop: PropertyOut, work_mode: str | None, regions: RegionTable,
) -> FactorScore:
    if not work_mode:
        return FactorScore(NEUTRAL_SCORE)

    if work_mode == "remote_majority" and prop.region in regions.remote_ideal:
        return FactorScore(90, ("A quiet setting ideal for remote work",))
    return FactorScore(70)


def score_family(prop: PropertyOut, household: str | None) -> FactorScore:
    if not household:
        return FactorScore(NEUTRAL_SCORE)

    # Rent stands in for floor area
    if household == "with_children" and prop.rent >= 250_000:
        return FactorScore(85, ("Spacious enough for a family",))
    if household == "single" and prop.rent <= 150_000:
        return FactorScore(80, ("Just the right size for living alone",))
    return FactorScore(60)
