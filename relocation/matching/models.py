from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DiagnosticAnswers(BaseModel):
    model_config = ConfigDict(extra="ignore")

    q1_work_mode: str | None = None
    q2_income_stability: str | None = None
    q3_household: str | None = None
    q4_priority: str | None = None
    q5_budget: str | None = None
    q6_duration: str | None = None
    q7_timing: str | None = None


class PropertyOut(BaseModel):
    id: str
    name: str
    region: str
    rent: int = Field(..., ge=0, description="Monthly rent in yen")
    image_url: str | None = None
    description: str | None = None
    lat: float | None = None
    lng: float | None = None


class ScoreBreakdown(BaseModel):
    budget: int = Field(..., ge=0, le=100)
    lifestyle: int = Field(..., ge=0, le=100)
    environment: int = Field(..., ge=0, le=100)
    workstyle: int = Field(..., ge=0, le=100)
    family: int = Field(..., ge=0, le=100)


class MatchScore(BaseModel):
    ai_score: int = Field(..., ge=0, le=100)
    match_reasons: list[str] = Field(default_factory=list)
    score_breakdown: ScoreBreakdown


class ScoredProperty(PropertyOut):
    ai_score: int = Field(..., ge=0, le=100)
    match_reasons: list[str] = Field(default_factory=list)
    score_breakdown: ScoreBreakdown


class MatchResponse(BaseModel):
    success: bool = True
    properties: list[ScoredProperty]


class MatchResultRecord(BaseModel):
    user_id: str
    property_id: str
    total_score: int
    budget_score: int
    lifestyle_score: int
    environment_score: int
    workstyle_score: int
    family_score: int
    match_reasons: list[str] = Field(default_factory=list)
