from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..moderation.activities import record_activity
from ..store.config import REVIEWS, VENDORS
from ..store.documents import (
    add_document,
    get_collection,
    get_document,
    set_document,
    transaction,
)
from ..store.vendors import VendorNotFound, get_vendor
from .models import ReviewRequest

_MAX_STARS = 5


def list_reviews(vendor_id: str) -> list[dict[str, Any]]:
    """Reviews for one vendor, newest first."""
    reviews = [r for r in get_collection(REVIEWS) if r.get("vendorId") == vendor_id]
    reviews.sort(key=lambda r: r.get("timestamp", ""), reverse=True)
    return reviews


def _refresh_rating(vendor_id: str) -> dict[str, Any]:
    # Stored on the 0-1 scale so a 1-star mean is never read as a perfect score
    ratings = [
        r["rating"] for r in get_collection(REVIEWS)
        if r.get("vendorId") == vendor_id and isinstance(r.get("rating"), int)
    ]
    update: dict[str, Any] = {"reviewCount": len(ratings)}
    if ratings:
        update["ratingAverage"] = round(sum(ratings) / len(ratings) / _MAX_STARS, 4)
    return set_document(VENDORS, vendor_id, update, merge=True)


def submit_review(
    vendor_id: str,
    request: ReviewRequest,
    user: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Store a review and recompute the vendor's ``ratingAverage``/``reviewCount``.

    Ratings are 1-5 stars; the stored average is their mean divided by 5.
    ``updatedAt`` is left alone.
    """
    stamp = now or datetime.now(timezone.utc)
    with transaction():
        vendor = get_vendor(vendor_id)
        if vendor is None:
            raise VendorNotFound(vendor_id)

        review_id = add_document(REVIEWS, {
            "vendorId": vendor_id,
            "userId": user,
            "rating": request.rating,
            "comment": (request.comment or "").strip(),
            "timestamp": stamp.isoformat(),
        })
        _refresh_rating(vendor_id)

    record_activity(
        "review",
        f"{user} rated {vendor.business_name or vendor_id} {request.rating}/5",
        vendor_id=vendor_id,
        rating=request.rating,
    )
    return get_document(REVIEWS, review_id)
