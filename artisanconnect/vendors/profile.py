from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from ..moderation.activities import record_activity
from ..store.config import VENDORS
from ..store.documents import get_document, set_document, transaction
from .models import VENDOR_CATEGORIES, VendorProfileForm

logger = logging.getLogger(__name__)

_REQUIRED_TEXT = {
    "business_name": "Business name is required",
    "description": "Description is required",
    "phone": "Phone number is required",
    "address": "Address is required",
}


class ProfileValidationError(ValueError):
    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Invalid vendor profile")
        self.errors = errors


class VendorOwnershipError(PermissionError):
    """The vendor document exists but belongs to a different account."""

    def __init__(self, vendor_id: str) -> None:
        super().__init__(f"Vendor listing {vendor_id!r} belongs to another account")
        self.vendor_id = vendor_id


def _check_owner(doc: dict[str, Any] | None, vendor_id: str, user: str) -> None:
    # Seeded listings carry no userId and cannot be claimed
    if doc is not None and doc.get("userId") != user:
        raise VendorOwnershipError(vendor_id)


def parse_coordinate(value: Any) -> float | None:
    """A finite float, or ``None`` for blanks and anything unparseable."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def validate_profile(form: VendorProfileForm) -> dict[str, str]:
    """Return field-name -> message for every problem, empty when valid."""
    errors: dict[str, str] = {}
    for field, message in _REQUIRED_TEXT.items():
        if not getattr(form, field).strip():
            errors[field] = message
    if not form.category:
        errors["category"] = "Category is required"
    elif form.category not in VENDOR_CATEGORIES:
        errors["category"] = f"Unknown category: {form.category}"
    return errors


def save_vendor_profile(
    vendor_id: str,
    form: VendorProfileForm,
    user: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Validate ``form`` and merge it into ``vendors/{vendor_id}``.

    Raises ``VendorOwnershipError`` when the document belongs to someone
    other than ``user``.

    Coordinates are stored only when both parse as numbers. ``updatedAt``
    is stamped on every save, which feeds the recency part of the ranking.
    """
    errors = validate_profile(form)
    if errors:
        raise ProfileValidationError(errors)

    stamp = now or datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "userId": user,
        "businessName": form.business_name.strip(),
        "category": form.category,
        "description": form.description.strip(),
        "phone": form.phone.strip(),
        "whatsapp": form.whatsapp.strip(),
        "address": form.address.strip(),
        "updatedAt": stamp.isoformat(),
    }

    lat = parse_coordinate(form.latitude)
    lng = parse_coordinate(form.longitude)
    if lat is not None and lng is not None:
        payload["latitude"] = lat
        payload["longitude"] = lng

    with transaction():
        _check_owner(get_document(VENDORS, vendor_id), vendor_id, user)
        doc = set_document(VENDORS, vendor_id, payload, merge=True)
    record_activity(
        "profile_update",
        f"{payload['businessName']} updated their profile",
        vendor_id=vendor_id,
    )
    logger.info("Saved vendor profile %s", vendor_id)
    return doc


def get_vendor_profile(vendor_id: str, user: str) -> dict[str, Any] | None:
    doc = get_document(VENDORS, vendor_id)
    _check_owner(doc, vendor_id, user)
    return doc
