from __future__ import annotations

from typing import Protocol

from ..matching.models import MatchResultRecord


class MatchResultRepository(Protocol):
    def upsert(self, record: MatchResultRecord) -> None: ...

    def list_for_user(self, user_id: str) -> list[MatchResultRecord]: ...


class InMemoryMatchResultRepository:
    """Match results keyed by ``(user_id, property_id)``; writes replace."""

    def __init__(self) -> None:
        self._rows: dict[tuple[str, str], MatchResultRecord] = {}

    def upsert(self, record: MatchResultRecord) -> None:
        self._rows[(record.user_id, record.property_id)] = record

    def list_for_user(self, user_id: str) -> list[MatchResultRecord]:
        return [r for (uid, _), r in self._rows.items() if uid == user_id]

    def clear(self) -> None:
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)


_repository = InMemoryMatchResultRepository()


def get_match_result_repository() -> MatchResultRepository:
    return _repository


def clear_match_results() -> None:
    _repository.clear()
