from __future__ import annotations

import pytest

from artisanconnect.auth.config import AuthConfig
from artisanconnect.auth.users import clear_users, register, seed_admin
from artisanconnect.moderation.blacklist import clear_suggestions
from artisanconnect.store.documents import clear_store


@pytest.fixture(autouse=True, scope="session")
def _accounts():
    clear_users()
    seed_admin(AuthConfig(admin_username="admin", admin_password="admin123"))
    register("user", "user12345", "user")
    register("vendor1", "vendor12345", "vendor")
    yield
    clear_users()


@pytest.fixture(autouse=True)
def _fresh_store():
    # Every test starts from the bundled vendor seed
    clear_store()
    clear_suggestions()
    yield
