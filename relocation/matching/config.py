from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class MatchingConfig:
    display_limit: int = 10
    persist_limit: int = 5
    regions_path: Path = Path(os.getenv("REGIONS_PATH", str(_DATA_DIR / "regions.json")))


DEFAULT_MATCHING_CONFIG = MatchingConfig()
