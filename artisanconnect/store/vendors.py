from __future__ import annotations

from ..ranking.models import VendorRecord
from .config import VENDORS
from .documents import get_collection, get_document


def list_active_vendors() -> list[VendorRecord]:
    """All vendors that have not been blacklisted, in store order."""
    return [
        VendorRecord.model_validate(doc)
        for doc in get_collection(VENDORS)
        if doc.get("blacklisted") is not True
    ]


def get_vendor(vendor_id: str, include_blacklisted: bool = False) -> VendorRecord | None:
    doc = get_document(VENDORS, vendor_id)
    if doc is None:
        return None
    if doc.get("blacklisted") is True and not include_blacklisted:
        return None
    return VendorRecord.model_validate(doc)


class VendorNotFound(LookupError):
    """Raised when a vendor id is unknown, or blacklisted where that matters."""

    def __init__(self, vendor_id: str) -> None:
        super().__init__(f"Vendor {vendor_id!r} not found")
        self.vendor_id = vendor_id
