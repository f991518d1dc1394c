from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_number(value: Any) -> float | None:
    # Booleans and numeric strings are not ratings
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class VendorRecord(BaseModel):
    """A vendor listing as stored in the ``vendors`` collection.

    Every descriptive field is optional. Values of the wrong type are
    dropped to ``None`` instead of failing validation so that a single
    malformed document never breaks a search.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    business_name: str | None = Field(default=None, alias="businessName")
    category: str | None = None
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    rating_average: float | None = Field(default=None, alias="ratingAverage")
    review_count: int = Field(default=0, alias="reviewCount")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    blacklisted: bool = False

    @field_validator(
        "business_name", "category", "description", "address", "phone", "whatsapp",
        mode="before",
    )
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, float) and math.isnan(value):
            return None
        return str(value)

    @field_validator("rating_average", "latitude", "longitude", mode="before")
    @classmethod
    def _number_or_none(cls, value: Any) -> float | None:
        return _as_number(value)

    @field_validator("review_count", mode="before")
    @classmethod
    def _count_or_zero(cls, value: Any) -> int:
        number = _as_number(value)
        if number is None or math.isnan(number) or number < 0:
            return 0
        return int(number)

    @field_validator("updated_at", mode="before")
    @classmethod
    def _timestamp_text(cls, value: Any) -> str | None:
        if isinstance(value, datetime):
            return value.isoformat()
        return value if isinstance(value, str) else None

    @field_validator("blacklisted", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return value is True


class SearchRequest(BaseModel):
    category: str | None = Field(default=None, description="Exact category label")
    keyword: str | None = Field(
        default=None,
        max_length=200,
        description="Matched against business name, description and address",
    )
    limit: int = Field(default=50, ge=1, le=100)


class RankedVendor(BaseModel):
    vendor: VendorRecord
    score: float


class SearchResponse(BaseModel):
    results: list[RankedVendor]
    total_candidates: int
