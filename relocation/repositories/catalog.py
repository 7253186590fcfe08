from __future__ import annotations

from pathlib import Path
from typing import Protocol

import pandas as pd

from ..matching.models import PropertyOut

_PROPERTIES_CSV = Path(__file__).resolve().parent.parent / "data" / "properties.csv"


class PropertyRepository(Protocol):
    def list_all(self) -> list[PropertyOut]: ...

    def get_many(self, ids: list[str]) -> list[PropertyOut]: ...


def _optional(value):
    return value if pd.notna(value) else None


def _row_to_property(row: pd.Series) -> PropertyOut:
    lat = _optional(row.get("lat"))
    lng = _optional(row.get("lng"))
    return PropertyOut(
        id=str(row["id"]),
        name=str(row["name"]),
        region=str(row["region"]),
        rent=int(row["rent"]),
        image_url=_optional(row.get("image_url")),
        description=_optional(row.get("description")),
        lat=float(lat) if lat is not None else None,
        lng=float(lng) if lng is not None else None,
    )


class CsvPropertyRepository:
    """Property catalog read from a CSV file, loaded once."""

    def __init__(self, path: Path = _PROPERTIES_CSV) -> None:
        self._path = path
        self._properties: list[PropertyOut] | None = None

    def _load(self) -> list[PropertyOut]:
        df = pd.read_csv(self._path, dtype={"id": str})
        df = df.dropna(subset=["id", "region", "rent"])
        return [_row_to_property(row) for _, row in df.iterrows()]

    def list_all(self) -> list[PropertyOut]:
        if self._properties is None:
            self._properties = self._load()
        return list(self._properties)

    def get_many(self, ids: list[str]) -> list[PropertyOut]:
        wanted = set(ids)
        return [p for p in self.list_all() if p.id in wanted]


class InMemoryPropertyRepository:
    def __init__(self, properties: list[PropertyOut] | None = None) -> None:
        self._properties = list(properties or [])

    def list_all(self) -> list[PropertyOut]:
        return list(self._properties)

    def get_many(self, ids: list[str]) -> list[PropertyOut]:
        wanted = set(ids)
        return [p for p in self._properties if p.id in wanted]


_repository: PropertyRepository | None = None


def get_property_repository() -> PropertyRepository:
    """Return the process-wide property catalog."""
    global _repository
    if _repository is None:
        _repository = CsvPropertyRepository()
    return _repository
