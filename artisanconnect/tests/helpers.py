from __future__ import annotations

from typing import Any

from artisanconnect.ranking.models import VendorRecord


def login_user(c):
    c.post("/auth/login", json={"username": "user", "password": "user12345"})


def login_vendor(c):
    c.post("/auth/login", json={"username": "vendor1", "password": "vendor12345"})


def login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


def make_vendor(vendor_id: str = "v", **fields: Any) -> VendorRecord:
    return VendorRecord.model_validate({"id": vendor_id, **fields})
