from __future__ import annotations

from fastapi import HTTPException, Request

from .config import ROLE_ADMIN, ROLE_VENDOR


def get_current_user(request: Request) -> dict | None:
    """Return the user dict from the session, or ``None``."""
    return request.session.get("user")


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_vendor(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if neither vendor nor admin."""
    user = require_user(request)
    if user.get("role") not in (ROLE_VENDOR, ROLE_ADMIN):
        raise HTTPException(status_code=403, detail="Vendor access required")
    return user


def require_admin(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not admin."""
    user = require_user(request)
    if user.get("role") != ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
