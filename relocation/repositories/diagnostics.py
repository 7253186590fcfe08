from __future__ import annotations

import time
import uuid
from typing import Any, Protocol


class DiagnosticRepository(Protocol):
    def insert(self, answers: dict[str, Any], scores: dict[str, float]) -> str: ...

    def insert_scenarios(self, scenarios: list[dict[str, Any]]) -> None: ...


class InMemoryDiagnosticRepository:
    def __init__(self) -> None:
        self.diagnostics: dict[str, dict[str, Any]] = {}
        self.scenarios: list[dict[str, Any]] = []

    def insert(self, answers: dict[str, Any], scores: dict[str, float]) -> str:
        diagnostic_id = str(uuid.uuid4())
        self.diagnostics[diagnostic_id] = {
            "id": diagnostic_id,
            "answers": answers,
            "scores": scores,
            "created_at": time.time(),
        }
        return diagnostic_id

    def insert_scenarios(self, scenarios: list[dict[str, Any]]) -> None:
        self.scenarios.extend(scenarios)

    def clear(self) -> None:
        self.diagnostics.clear()
        self.scenarios.clear()


_repository = InMemoryDiagnosticRepository()


def get_diagnostic_repository() -> DiagnosticRepository:
    return _repository


def clear_diagnostics() -> None:
    _repository.clear()
