from __future__ import annotations

from collections import Counter
from typing import Any

from ..store.config import REVIEWS, VENDORS
from ..store.documents import get_collection
from .activities import get_activities


def compute_stats() -> dict[str, Any]:
    vendors = get_collection(VENDORS)
    total = len(vendors)
    blacklisted = sum(1 for v in vendors if v.get("blacklisted") is True)

    # Top categories among active vendors
    category_counter: Counter[str] = Counter()
    for v in vendors:
        if v.get("blacklisted") is not True:
            category_counter[v.get("category") or "Uncategorised"] += 1
    top_categories = [
        {"name": n, "count": c} for n, c in category_counter.most_common(10)
    ]

    # Search activity
    searches = get_activities("search")
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    keyword_counter: Counter[str] = Counter()
    for s in searches:
        keyword = (s.get("keyword") or "").strip().lower()
        if keyword:
            keyword_counter[keyword] += 1
    top_keywords = [{"name": n, "count": c} for n, c in keyword_counter.most_common(10)]

    return {
        "total_vendors": total,
        "active_vendors": total - blacklisted,
        "blacklisted_vendors": blacklisted,
        "total_reviews": len(get_collection(REVIEWS)),
        "top_categories": top_categories,
        "total_searches": len(searches),
        "avg_search_time_ms": avg_time,
        "top_keywords": top_keywords,
    }
