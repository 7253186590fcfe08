from __future__ import annotations

import os
from dataclasses import dataclass, field


def _split_emails(raw: str) -> tuple[str, ...]:
    return tuple(e.strip().lower() for e in raw.split(",") if e.strip())


@dataclass(frozen=True)
class AuthConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "relocation-secret-change-in-production")
    admin_emails: tuple[str, ...] = field(
        default_factory=lambda: _split_emails(os.getenv("ADMIN_EMAILS", "admin@example.com"))
    )


DEFAULT_AUTH_CONFIG = AuthConfig()
