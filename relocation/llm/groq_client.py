from __future__ import annotations

import json
import logging
import re
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL)
_BARE_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

VIBE_SYSTEM_PROMPT = (
    "You rate the atmosphere of residential neighborhoods. "
    "For each vibe type you are given, score 0-100 how strongly the area "
    "has that character:\n"
    "- 90-100: very strong\n"
    "- 70-89: strong\n"
    "- 50-69: moderate\n"
    "- 30-49: weak\n"
    "- 0-29: barely present\n\n"
    "Return ONLY valid JSON mapping each vibe type to an integer, e.g. "
    '{"calm_nature": 85, "family": 72}'
)

STORY_SYSTEM_PROMPT = (
    "You are a relocation advisor for Yamagata. Write a concrete "
    "\"day in the life\" for the given persona living in the given area. "
    "Weave in local hot springs, orchards (cherries, grapes), the Zao and "
    "Gassan mountains, local food culture, and the historic streets of "
    "Nanokamachi where it fits the area's vibes.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"timeline": [{"time": "07:00", "period": "morning", "activity": "...", '
    '"location": "...", "description": "...", "vibe": "..."}], '
    '"summary": "<2-3 sentences>", '
    '"recommended_spots": [{"name": "...", "reason": "..."}]}\n'
    "The timeline has 6-8 entries from about 07:00 to 22:00; "
    "recommend 3-5 spots."
)


def extract_json(content: str) -> dict[str, Any]:
    """Parse a JSON object from a model reply, tolerating code fences and prose."""
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        match = _FENCED_JSON.search(content) or _BARE_OBJECT.search(content)
        if not match:
            raise ValueError("No JSON object in LLM response")
        parsed = json.loads(match.group(1) if match.groups() else match.group(0))
    if not isinstance(parsed, dict):
        raise ValueError("LLM response is not a JSON object")
    return parsed


def _complete_json(
    system_prompt: str,
    user_message: str,
    config: LLMConfig,
    max_tokens: int,
    temperature: float,
) -> dict[str, Any]:
    client = Groq(api_key=config.api_key, timeout=config.timeout)
    response = client.chat.completions.create(
        model=config.model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        max_tokens=max_tokens,
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content or ""
    return extract_json(content)


def _build_vibe_message(
    area: dict[str, Any],
    context: str | None,
    vibe_types: dict[str, str],
) -> str:
    lines = ["## Area"]
    lines.append(f"- Name: {area['name']}")
    lines.append(f"- Location: lat {area['lat']}, lng {area['lng']}")
    lines.append("\n## Additional context")
    lines.append(context or "A mixed residential and commercial area in Yamagata Prefecture.")
    lines.append("\n## Vibe types")
    for key, desc in vibe_types.items():
        lines.append(f"- {key}: {desc}")
    return "\n".join(lines)


def generate_vibe_scores(
    area: dict[str, Any],
    context: str | None,
    vibe_types: dict[str, str],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, Any]:
    """
    Ask the LLM for base vibe scores of an area.

    Returns the raw parsed payload (values are not validated here).
    Returns empty dict on any failure (timeout, bad JSON, API error).
    """
    if not config.enabled or not config.api_key:
        return {}

    try:
        return _complete_json(
            VIBE_SYSTEM_PROMPT,
            _build_vibe_message(area, context, vibe_types),
            config,
            config.max_tokens,
            config.vibe_temperature,
        )
    except Exception:
        logger.warning("Groq vibe scoring failed for area %s", area.get("id"), exc_info=True)
        return {}


def _format_top(vibes: list[dict[str, Any]]) -> str:
    top = vibes[:3]
    if not top:
        return "no data"
    return ", ".join(f"{v['type']} (score {v['score']})" for v in top)


def _build_story_message(
    area: dict[str, Any],
    vibes_by_time: dict[str, list[dict[str, Any]]],
    persona: dict[str, Any],
) -> str:
    lines = ["## Area"]
    lines.append(f"- Name: {area['name']}")
    lines.append(f"- Location: lat {area['lat']}, lng {area['lng']}")
    lines.append("\n## Top vibes by time of day")
    for period in ("morning", "day", "evening", "night"):
        lines.append(f"- {period}: {_format_top(vibes_by_time.get(period, []))}")
    lines.append("\n## Persona")
    lines.append(f"- Age: {persona.get('age')}")
    lines.append(f"- Household: {persona.get('family')}")
    lines.append(f"- Work style: {persona.get('work_style')}")
    lines.append(f"- Interests: {persona.get('interests')}")
    return "\n".join(lines)


def generate_life_story(
    area: dict[str, Any],
    vibes_by_time: dict[str, list[dict[str, Any]]],
    persona: dict[str, Any],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, Any]:
    """Generate a "day in the life" story. Empty dict on failure."""
    if not config.enabled or not config.api_key:
        return {}

    try:
        return _complete_json(
            STORY_SYSTEM_PROMPT,
            _build_story_message(area, vibes_by_time, persona),
            config,
            config.story_max_tokens,
            config.story_temperature,
        )
    except Exception:
        logger.warning("Groq story generation failed for area %s", area.get("id"), exc_info=True)
        return {}
