from __future__ import annotations

from pathlib import Path
from typing import Protocol

import pandas as pd

from ..vibes.models import Area

_AREAS_CSV = Path(__file__).resolve().parent.parent / "data" / "areas.csv"


class AreaRepository(Protocol):
    def list_all(self) -> list[Area]: ...

    def get(self, area_id: str) -> Area | None: ...


class AreaVibeRepository(Protocol):
    def upsert(self, area_id: str, vibe_type: str, period: str, score: int) -> None: ...

    def scores_for(self, area_id: str, period: str) -> dict[str, int]: ...

    def all_for(self, area_id: str) -> list[dict]: ...


class CsvAreaRepository:
    def __init__(self, path: Path = _AREAS_CSV) -> None:
        self._path = path
        self._areas: list[Area] | None = None

    def _load(self) -> list[Area]:
        df = pd.read_csv(self._path, dtype={"id": str}).dropna(subset=["id", "lat", "lng"])
        return [
            Area(id=str(row["id"]), name=str(row["name"]), lat=float(row["lat"]), lng=float(row["lng"]))
            for _, row in df.iterrows()
        ]

    def list_all(self) -> list[Area]:
        if self._areas is None:
            self._areas = self._load()
        return list(self._areas)

    def get(self, area_id: str) -> Area | None:
        for area in self.list_all():
            if area.id == area_id:
                return area
        return None


class InMemoryAreaVibeRepository:
    """Vibe scores keyed by ``(area_id, vibe_type, period)``; writes replace."""

    def __init__(self) -> None:
        self._rows: dict[tuple[str, str, str], int] = {}

    def upsert(self, area_id: str, vibe_type: str, period: str, score: int) -> None:
        self._rows[(area_id, vibe_type, period)] = score

    def scores_for(self, area_id: str, period: str) -> dict[str, int]:
        return {
            vibe: score
            for (aid, vibe, p), score in self._rows.items()
            if aid == area_id and p == period
        }

    def all_for(self, area_id: str) -> list[dict]:
        """All rows for an area, highest score first."""
        rows = [
            {"vibe_type": vibe, "time_of_day": p, "score": score}
            for (aid, vibe, p), score in self._rows.items()
            if aid == area_id
        ]
        return sorted(rows, key=lambda r: r["score"], reverse=True)

    def clear(self) -> None:
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)


_area_repository: AreaRepository | None = None
_vibe_repository = InMemoryAreaVibeRepository()


def get_area_repository() -> AreaRepository:
    global _area_repository
    if _area_repository is None:
        _area_repository = CsvAreaRepository()
    return _area_repository


def get_area_vibe_repository() -> AreaVibeRepository:
    return _vibe_repository


def clear_area_vibes() -> None:
    _vibe_repository.clear()
