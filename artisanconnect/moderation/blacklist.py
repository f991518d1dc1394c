from __future__ import annotations

import logging
import threading

from ..ranking.models import VendorRecord
from ..ranking.scoring import normalised_rating
from ..store.config import VENDORS
from ..store.documents import set_document
from ..store.vendors import VendorNotFound, get_vendor, list_active_vendors
from .activities import record_activity, utc_now_iso
from .models import BlacklistSuggestion, SuggestionSource

logger = logging.getLogger(__name__)

# On the normalised 0-1 scale, i.e. 2.5 stars
LOW_RATING_THRESHOLD = 0.5
MIN_REVIEWS_FOR_FLAG = 5
ASSISTANT_REASON = "Flagged by the chat assistant for possible rating manipulation"
HEURISTIC_REASON = "Low rating with high review count"

_queued: dict[str, BlacklistSuggestion] = {}
_rejected: set[str] = set()
_lock = threading.Lock()


def _suggestion(vendor: VendorRecord, source: SuggestionSource, reason: str) -> BlacklistSuggestion:
    return BlacklistSuggestion(
        vendor_id=vendor.id,
        business_name=vendor.business_name,
        rating_average=vendor.rating_average,
        review_count=vendor.review_count,
        source=source,
        reason=reason,
        suggested_at=utc_now_iso(),
    )


def suggest_blacklist(
    vendor_ids: list[str],
    source: SuggestionSource = SuggestionSource.assistant,
    reason: str = ASSISTANT_REASON,
) -> list[str]:
    """
    Queue vendors for admin review.

    Unknown or already blacklisted ids, ids already queued and ids an admin
    has rejected are ignored. Returns the ids that were newly queued.
    """
    added: list[str] = []
    with _lock:
        for vendor_id in vendor_ids:
            if vendor_id in _queued or vendor_id in _rejected:
                continue
            vendor = get_vendor(vendor_id)
            if vendor is None:
                continue
            _queued[vendor_id] = _suggestion(vendor, source, reason)
            added.append(vendor_id)

    if added:
        record_activity(
            "blacklist_suggestion",
            f"{len(added)} vendor(s) suggested for blacklisting",
            vendor_ids=added,
            source=source.value,
        )
    return added


def heuristic_suggestions(vendors: list[VendorRecord]) -> list[BlacklistSuggestion]:
    """Vendors whose low average rests on many reviews."""
    flagged = []
    for v in vendors:
        rating = normalised_rating(v.rating_average)
        if rating and rating < LOW_RATING_THRESHOLD and v.review_count > MIN_REVIEWS_FOR_FLAG:
            flagged.append(_suggestion(v, SuggestionSource.heuristic, HEURISTIC_REASON))
    return flagged


def pending_suggestions() -> list[BlacklistSuggestion]:
    active = list_active_vendors()
    active_ids = {v.id for v in active}

    with _lock:
        queued = list(_queued.values())
        rejected = set(_rejected)

    pending = [s for s in queued if s.vendor_id in active_ids]
    queued_ids = {s.vendor_id for s in pending}
    pending.extend(
        s for s in heuristic_suggestions(active)
        if s.vendor_id not in queued_ids and s.vendor_id not in rejected
    )
    return pending


def reject_suggestion(vendor_id: str, admin: str) -> None:
    if get_vendor(vendor_id, include_blacklisted=True) is None:
        raise VendorNotFound(vendor_id)
    with _lock:
        _queued.pop(vendor_id, None)
        _rejected.add(vendor_id)
    record_activity(
        "blacklist_rejected",
        f"{admin} dismissed the blacklist suggestion for {vendor_id}",
        vendor_id=vendor_id,
        admin=admin,
    )
    logger.info("Blacklist suggestion for %s dismissed by %s", vendor_id, admin)


def blacklist_vendor(vendor_id: str, admin: str) -> dict:
    if get_vendor(vendor_id, include_blacklisted=True) is None:
        raise VendorNotFound(vendor_id)

    doc = set_document(
        VENDORS,
        vendor_id,
        {"blacklisted": True, "blacklistedAt": utc_now_iso(), "blacklistedBy": admin},
        merge=True,
    )
    with _lock:
        _queued.pop(vendor_id, None)
    record_activity(
        "blacklist",
        f"{admin} blacklisted {doc.get('businessName') or vendor_id}",
        vendor_id=vendor_id,
        admin=admin,
    )
    logger.info("Vendor %s blacklisted by %s", vendor_id, admin)
    return doc


def clear_suggestions() -> None:
    with _lock:
        _queued.clear()
        _rejected.clear()
