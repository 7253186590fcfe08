from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from .policy import AdminPolicy, get_admin_policy


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(
    user: dict = Depends(require_user),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> dict:
    """Raise 401 if not logged in, 403 if the policy does not list the user."""
    if not policy.is_admin(user.get("email")):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
