from __future__ import annotations

import logging
from typing import Any

import bcrypt

from .config import DEFAULT_AUTH_CONFIG, ROLE_ADMIN, SIGNUP_ROLES, AuthConfig

logger = logging.getLogger(__name__)

_users: dict[str, dict[str, Any]] = {}


class UsernameTaken(ValueError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} is already registered")
        self.username = username


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def seed_admin(config: AuthConfig = DEFAULT_AUTH_CONFIG) -> bool:
    """Create the admin account from configuration. No credentials, no admin."""
    if not config.admin_username or not config.admin_password:
        logger.info("ADMIN_USERNAME/ADMIN_PASSWORD not set, no admin account seeded")
        return False
    _users[config.admin_username] = {
        "password_hash": _hash_password(config.admin_password),
        "role": ROLE_ADMIN,
    }
    return True


def register(username: str, password: str, role: str) -> dict[str, Any]:
    """Create a ``user`` or ``vendor`` account. Returns ``{username, role}``."""
    if role not in SIGNUP_ROLES:
        raise ValueError(f"Cannot sign up with role {role!r}")
    if username in _users:
        raise UsernameTaken(username)
    _users[username] = {"password_hash": _hash_password(password), "role": role}
    return {"username": username, "role": role}


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {"username": username, "role": record["role"]}
    return None


def clear_users() -> None:
    _users.clear()


seed_admin()
