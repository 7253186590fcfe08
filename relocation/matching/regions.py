from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from .config import DEFAULT_MATCHING_CONFIG

_tables: dict[Path, "RegionTable"] = {}


@dataclass(frozen=True)
class RegionTable:
    """Region groupings consulted by the lifestyle, environment and workstyle scorers.

    ``urban`` and the ``characteristics`` map overlap without a shared
    rule; both are kept exactly as configured.
    """

    characteristics: dict[str, frozenset[str]] = field(default_factory=dict)
    family_friendly: frozenset[str] = frozenset()
    urban: frozenset[str] = frozenset()
    remote_ideal: frozenset[str] = frozenset()

    def characteristics_of(self, region: str) -> frozenset[str]:
        return self.characteristics.get(region, frozenset())

    @classmethod
    def from_dict(cls, raw: dict) -> RegionTable:
        return cls(
            characteristics={
                str(region): frozenset(values)
                for region, values in (raw.get("characteristics") or {}).items()
            },
            family_friendly=frozenset(raw.get("family_friendly") or []),
            urban=frozenset(raw.get("urban") or []),
            remote_ideal=frozenset(raw.get("remote_ideal") or []),
        )


def load_region_table(path: Path) -> RegionTable:
    with open(path, encoding="utf-8") as fh:
        return RegionTable.from_dict(json.load(fh))


def get_region_table(path: Path | None = None) -> RegionTable:
    """Return the region table for *path*, loading it on first call."""
    path = path or DEFAULT_MATCHING_CONFIG.regions_path
    if path not in _tables:
        _tables[path] = load_region_table(path)
    return _tables[path]
