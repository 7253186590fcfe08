from __future__ import annotations

import time
import uuid
from typing import Any, Protocol


class SimulationRepository(Protocol):
    def insert(self, area_id: str, persona: dict[str, Any], story: dict[str, Any]) -> str: ...


class InMemorySimulationRepository:
    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}

    def insert(self, area_id: str, persona: dict[str, Any], story: dict[str, Any]) -> str:
        simulation_id = str(uuid.uuid4())
        self.rows[simulation_id] = {
            "id": simulation_id,
            "area_id": area_id,
            "persona": persona,
            "generated_story": story,
            "created_at": time.time(),
        }
        return simulation_id

    def clear(self) -> None:
        self.rows.clear()


_repository = InMemorySimulationRepository()


def get_simulation_repository() -> SimulationRepository:
    return _repository


def clear_simulations() -> None:
    _repository.clear()
