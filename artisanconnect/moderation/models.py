from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class SuggestionSource(str, Enum):
    assistant = "assistant"
    heuristic = "heuristic"


class BlacklistSuggestion(BaseModel):
    vendor_id: str
    business_name: str | None = None
    rating_average: float | None = None
    review_count: int = 0
    source: SuggestionSource
    reason: str
    suggested_at: str


class ModerationResult(BaseModel):
    vendor_id: str
    status: str
