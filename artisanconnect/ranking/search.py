from __future__ import annotations

import time
from datetime import datetime

from ..moderation.activities import record_activity
from ..store.vendors import list_active_vendors
from .config import DEFAULT_WEIGHTS, RankingWeights
from .filtering import filter_vendors
from .models import RankedVendor, SearchRequest, SearchResponse, VendorRecord
from .scoring import normalised_rating, score_vendors


def search_vendors(
    request: SearchRequest,
    as_of: datetime | None = None,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> SearchResponse:
    start_time = time.time()

    vendors = list_active_vendors()

    # --- Hard filters ---
    candidates = filter_vendors(vendors, request.category, request.keyword)
    total_candidates = len(candidates)

    # --- Scoring ---
    scored = score_vendors(candidates, request.keyword, as_of=as_of, weights=weights)
    top = scored[: request.limit]

    results = [
        RankedVendor(vendor=vendor, score=round(score, 4)) for vendor, score in top
    ]

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_activity(
        "search",
        f"Search returned {len(results)} of {total_candidates} vendors",
        category=request.category,
        keyword=request.keyword,
        total_candidates=total_candidates,
        results_returned=len(results),
        response_time_ms=elapsed_ms,
    )

    return SearchResponse(results=results, total_candidates=total_candidates)


def top_rated_vendors(limit: int = 6) -> list[VendorRecord]:
    """Active vendors with a positive rating, best normalised rating first."""
    rated = [
        (v, normalised_rating(v.rating_average)) for v in list_active_vendors()
    ]
    rated = [(v, r) for v, r in rated if r is not None and r > 0]
    rated.sort(key=lambda pair: pair[1], reverse=True)
    return [v for v, _ in rated[:limit]]
