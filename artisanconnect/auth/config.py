from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class AuthConfig:
    admin_username: str = field(default_factory=lambda: os.getenv("ADMIN_USERNAME", ""))
    admin_password: str = field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", ""))
    session_secret: str = field(
        default_factory=lambda: os.getenv("SESSION_SECRET", "artisanconnect-secret-change-in-production")
    )


DEFAULT_AUTH_CONFIG = AuthConfig()

ROLE_USER = "user"
ROLE_VENDOR = "vendor"
ROLE_ADMIN = "admin"
SIGNUP_ROLES = (ROLE_USER, ROLE_VENDOR)
