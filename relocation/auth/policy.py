from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_AUTH_CONFIG, AuthConfig


@dataclass(frozen=True)
class AdminPolicy:
    """Single source of truth for who may use admin operations."""

    allowed_emails: frozenset[str]

    @classmethod
    def from_config(cls, config: AuthConfig = DEFAULT_AUTH_CONFIG) -> AdminPolicy:
        return cls(frozenset(e.lower() for e in config.admin_emails))

    def is_admin(self, email: str | None) -> bool:
        return bool(email) and email.strip().lower() in self.allowed_emails


_policy = AdminPolicy.from_config()


def get_admin_policy() -> AdminPolicy:
    return _policy
