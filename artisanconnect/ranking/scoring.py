from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime, timezone

from .config import (
    ADDRESS_MATCH_WEIGHT,
    DEFAULT_RATING_SCORE,
    DEFAULT_RECENCY_SCORE,
    DEFAULT_WEIGHTS,
    DESCRIPTION_MATCH_WEIGHT,
    EMPTY_KEYWORD_SCORE,
    NAME_MATCH_WEIGHT,
    RECENCY_WINDOW,
    RankingWeights,
)
from .filtering import ensure_sequence, normalise_keyword, searchable_fields
from .models import VendorRecord


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse an ISO 8601 string into an aware datetime (UTC if naive)."""
    if not raw:
        return None
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalised_rating(rating: float | None) -> float | None:
    """
    Map a stored ``ratingAverage`` onto [0, 1], ``None`` when unusable.

    Values up to 1 are taken as already normalised and values in (1, 5]
    as a five-star average, so 1.0 and 5.0 both map to 1.0.
    """
    if rating is None or math.isnan(rating) or rating < 0 or rating > 5:
        return None
    if rating <= 1:
        return rating
    return rating / 5


def rating_score(vendor: VendorRecord) -> float:
    normalised = normalised_rating(vendor.rating_average)
    return DEFAULT_RATING_SCORE if normalised is None else normalised


def keyword_score(vendor: VendorRecord, keyword: str | None) -> float:
    term = normalise_keyword(keyword)
    if not term:
        return EMPTY_KEYWORD_SCORE

    name, description, address = searchable_fields(vendor)
    score = 0.0
    if term in name:
        score += NAME_MATCH_WEIGHT
    if term in description:
        score += DESCRIPTION_MATCH_WEIGHT
    if term in address:
        score += ADDRESS_MATCH_WEIGHT
    return min(1.0, score)


def recency_score(vendor: VendorRecord, as_of: datetime) -> float:
    """Linear decay from 1 at ``as_of`` to 0 once the profile is 180 days old."""
    updated = parse_timestamp(vendor.updated_at)
    if updated is None:
        return DEFAULT_RECENCY_SCORE

    age = as_of - updated
    if age.total_seconds() <= 0:
        return 1.0
    return max(0.0, 1.0 - age / RECENCY_WINDOW)


def ranking_score(
    vendor: VendorRecord,
    keyword: str | None,
    as_of: datetime,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> float:
    return (
        weights.rating * rating_score(vendor)
        + weights.keyword * keyword_score(vendor, keyword)
        + weights.recency * recency_score(vendor, as_of)
    )


def score_vendors(
    vendors: Sequence[VendorRecord],
    keyword: str | None = None,
    as_of: datetime | None = None,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> list[tuple[VendorRecord, float]]:
    """Pair each vendor with its score, best first. Ties keep input order."""
    ensure_sequence(vendors)
    if as_of is None:
        as_of = datetime.now(timezone.utc)
    elif as_of.tzinfo is None:
        as_of = as_of.replace(tzinfo=timezone.utc)

    scored = [(v, ranking_score(v, keyword, as_of, weights)) for v in vendors]
    # sorted() is stable, including with reverse=True
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def rank_vendors(
    vendors: Sequence[VendorRecord],
    keyword: str | None = None,
    as_of: datetime | None = None,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> list[VendorRecord]:
    """Return a copy of ``vendors`` ordered by descending ranking score."""
    return [vendor for vendor, _ in score_vendors(vendors, keyword, as_of, weights)]
