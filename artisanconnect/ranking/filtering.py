from __future__ import annotations

from collections.abc import Sequence

from .models import VendorRecord


def normalise_keyword(keyword: str | None) -> str:
    """Return the trimmed, lower-cased keyword, ``""`` when unset."""
    return (keyword or "").strip().lower()


def searchable_fields(vendor: VendorRecord) -> tuple[str, str, str]:
    """Lower-cased name, description and address, absent fields as ``""``."""
    return (
        (vendor.business_name or "").lower(),
        (vendor.description or "").lower(),
        (vendor.address or "").lower(),
    )


def ensure_sequence(vendors: object) -> None:
    if isinstance(vendors, (str, bytes)) or not isinstance(vendors, Sequence):
        raise TypeError(
            f"vendors must be a sequence of VendorRecord, got {type(vendors).__name__}"
        )


def filter_vendors(
    vendors: Sequence[VendorRecord],
    category: str | None = None,
    keyword: str | None = None,
) -> list[VendorRecord]:
    """Keep vendors matching the category and keyword constraints.

    An empty or missing ``category`` and a blank ``keyword`` each leave the
    list untouched. The category must match exactly; the keyword is a
    case-insensitive substring of the name, description or address.
    """
    ensure_sequence(vendors)
    result = list(vendors)

    if category:
        result = [v for v in result if v.category == category]

    term = normalise_keyword(keyword)
    if term:
        result = [
            v for v in result if any(term in field for field in searchable_fields(v))
        ]

    return result
