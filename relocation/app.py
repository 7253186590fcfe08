from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, Field
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.config import DEFAULT_AUTH_CONFIG
from .auth.dependencies import require_admin, require_user
from .auth.policy import AdminPolicy, get_admin_policy
from .auth.users import authenticate
from .diagnostics.scenarios import DiagnosticResponse, submit_diagnostic
from .matching.engine import run_match
from .matching.models import DiagnosticAnswers, MatchResponse, MatchResultRecord, PropertyOut
from .repositories.areas import (
    AreaRepository,
    AreaVibeRepository,
    get_area_repository,
    get_area_vibe_repository,
)
from .repositories.catalog import PropertyRepository, get_property_repository
from .repositories.diagnostics import DiagnosticRepository, get_diagnostic_repository
from .repositories.results import MatchResultRepository, get_match_result_repository
from .repositories.simulations import SimulationRepository, get_simulation_repository
from .simulator.models import SimulationRequest, SimulationResponse
from .simulator.story import simulate_life
from .vibes.models import AreaVibes, TimeOfDay, VibeCalculateRequest, VibeCalculateResponse
from .vibes.service import (
    AreaNotFoundError,
    GenerationError,
    calculate_area_vibes,
    list_area_vibes,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Relocation Matching API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_AUTH_CONFIG.session_secret)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/properties", response_model=list[PropertyOut])
def list_properties(
    properties: PropertyRepository = Depends(get_property_repository),
) -> list[PropertyOut]:
    return properties.list_all()


@app.get("/properties/compare")
def compare_properties(
    ids: str = "",
    properties: PropertyRepository = Depends(get_property_repository),
) -> dict:
    wanted = [i.strip() for i in ids.split(",") if i.strip()]
    if not wanted:
        return {"properties": []}
    try:
        found = properties.get_many(wanted)
    except Exception:
        logger.exception("Property comparison lookup failed")
        raise HTTPException(status_code=500, detail="Failed to load properties")
    return {"properties": [p.model_dump() for p in found]}


@app.post("/diagnostics", response_model=DiagnosticResponse)
def diagnostics(
    body: DiagnosticAnswers,
    repository: DiagnosticRepository = Depends(get_diagnostic_repository),
) -> DiagnosticResponse:
    try:
        return submit_diagnostic(body, repository)
    except Exception:
        logger.exception("Saving diagnostic failed")
        raise HTTPException(status_code=500, detail="Failed to save diagnostic")


@app.get("/vibes/areas", response_model=list[AreaVibes])
def vibes_for_areas(
    time: TimeOfDay = Query(default="day"),
    areas: AreaRepository = Depends(get_area_repository),
    vibes: AreaVibeRepository = Depends(get_area_vibe_repository),
) -> list[AreaVibes]:
    try:
        return list_area_vibes(time, areas, vibes)
    except Exception:
        logger.exception("Fetching vibes failed")
        raise HTTPException(status_code=500, detail="Failed to fetch vibes")


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(
    body: LoginRequest,
    request: Request,
    policy: AdminPolicy = Depends(get_admin_policy),
) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    user = {**user, "is_admin": policy.is_admin(user["email"])}
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(
    user: dict = Depends(require_user),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> dict:
    return {**user, "is_admin": policy.is_admin(user.get("email"))}


# ── User endpoints ───────────────────────────────────────────────────────


@app.post("/ai-match", response_model=MatchResponse)
def ai_match(
    body: DiagnosticAnswers,
    user: dict = Depends(require_user),
    properties: PropertyRepository = Depends(get_property_repository),
    results: MatchResultRepository = Depends(get_match_result_repository),
) -> MatchResponse:
    try:
        return run_match(user["id"], body, properties, results)
    except Exception:
        logger.exception("Property matching failed for user %s", user.get("id"))
        raise HTTPException(status_code=500, detail="Matching failed")


@app.get("/ai-match/results", response_model=list[MatchResultRecord])
def ai_match_results(
    user: dict = Depends(require_user),
    results: MatchResultRepository = Depends(get_match_result_repository),
) -> list[MatchResultRecord]:
    rows = results.list_for_user(user["id"])
    return sorted(rows, key=lambda r: r.total_score, reverse=True)


@app.post("/simulator/generate", response_model=SimulationResponse)
def simulator_generate(
    body: SimulationRequest,
    user: dict = Depends(require_user),
    areas: AreaRepository = Depends(get_area_repository),
    vibes: AreaVibeRepository = Depends(get_area_vibe_repository),
    simulations: SimulationRepository = Depends(get_simulation_repository),
) -> SimulationResponse:
    try:
        return simulate_life(body.area_id, body.persona, areas, vibes, simulations)
    except AreaNotFoundError:
        raise HTTPException(status_code=404, detail="Area not found")
    except GenerationError:
        raise HTTPException(status_code=502, detail="Failed to generate simulation")


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.post("/vibes/calculate", response_model=VibeCalculateResponse)
def vibes_calculate(
    body: VibeCalculateRequest,
    user: dict = Depends(require_admin),
    areas: AreaRepository = Depends(get_area_repository),
    vibes: AreaVibeRepository = Depends(get_area_vibe_repository),
) -> VibeCalculateResponse:
    try:
        return calculate_area_vibes(body.area_id, body.context, areas, vibes)
    except AreaNotFoundError:
        raise HTTPException(status_code=404, detail="Area not found")
    except GenerationError:
        raise HTTPException(status_code=502, detail="Failed to calculate vibes")


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
