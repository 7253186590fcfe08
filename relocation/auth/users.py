"""
Demo account store.

Accounts are keyed by normalized e-mail and hold a bcrypt hash only. The
session carries the public part of an account, never the hash.
"""
from __future__ import annotations

from typing import Any

import bcrypt

# (user id, e-mail, password) seeded on import
DEMO_ACCOUNTS: tuple[tuple[str, str, str], ...] = (
    ("u-0001", "user@example.com", "user123"),
    ("u-0002", "admin@example.com", "admin123"),
)

_accounts: dict[str, dict[str, Any]] = {}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(user_id: str, email: str, password: str) -> dict[str, Any]:
    """Add an account and return its public view. Raises ``ValueError`` on bad input."""
    key = normalize_email(email)
    if not key or not password:
        raise ValueError("email and password are required")
    if key in _accounts:
        raise ValueError(f"account already exists: {key}")
    if any(a["id"] == user_id for a in _accounts.values()):
        raise ValueError(f"user id already taken: {user_id}")

    hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
    _accounts[key] = {"id": user_id, "email": key, "password_hash": hashed}
    return _public(_accounts[key])


def remove_user(email: str) -> None:
    _accounts.pop(normalize_email(email), None)


def _public(account: dict[str, Any]) -> dict[str, Any]:
    return {"id": account["id"], "email": account["email"]}


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    account = _accounts.get(normalize_email(email))
    if account is None:
        return None
    if not bcrypt.checkpw(password.encode(), account["password_hash"].encode()):
        return None
    return _public(account)


for _user_id, _email, _password in DEMO_ACCOUNTS:
    register_user(_user_id, _email, _password)
