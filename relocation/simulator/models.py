from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Persona(BaseModel):
    age: int = Field(..., ge=0, le=120)
    family: str = Field(..., min_length=1)
    work_style: str = Field(..., min_length=1)
    interests: str = ""


class SimulationRequest(BaseModel):
    area_id: str = Field(..., min_length=1)
    persona: Persona


class SimulationResponse(BaseModel):
    success: bool = True
    area_id: str
    area_name: str
    simulation: dict[str, Any]
    saved_id: str | None = None
