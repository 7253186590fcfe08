from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSE_VALUES


@dataclass(frozen=True)
class LLMConfig:
    """Groq settings for the two generation tasks: vibe scoring and life stories."""

    api_key: str = ""
    model: str = "llama-3.3-70b-versatile"
    timeout: float = 20.0
    max_tokens: int = 1024
    story_max_tokens: int = 2048
    vibe_temperature: float = 0.3
    story_temperature: float = 0.7
    enabled: bool = True

    @classmethod
    def from_env(cls) -> "LLMConfig":
        return cls(
            api_key=os.getenv("GROQ_API_KEY", ""),
            model=os.getenv("GROQ_MODEL") or cls.model,
            timeout=float(os.getenv("LLM_TIMEOUT") or cls.timeout),
            enabled=_env_flag("LLM_ENABLED", True),
        )


DEFAULT_LLM_CONFIG = LLMConfig.from_env()
