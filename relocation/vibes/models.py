from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

TimeOfDay = Literal["morning", "day", "evening", "night"]


class Area(BaseModel):
    id: str
    name: str
    lat: float
    lng: float


class VibeCalculateRequest(BaseModel):
    area_id: str = Field(..., min_length=1)
    context: str | None = Field(default=None, max_length=2000)


class VibeCalculateResponse(BaseModel):
    success: bool = True
    area_id: str
    scores: dict[str, float]
    saved_scores: dict[str, dict[str, int]]
    message: str = "Vibe scores calculated and saved"


class Location(BaseModel):
    lat: float
    lng: float


class AreaVibes(BaseModel):
    area_id: str
    name: str
    location: Location
    top_vibe: str
    top_score: int
    vibes_for_time: dict[str, int]
