from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

VENDOR_CATEGORIES: list[str] = [
    "Fashion & tailoring",
    "Catering & events",
    "Repairs & maintenance",
    "Branding & design",
    "Photography & media",
    "Other",
]


class VendorProfileForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    business_name: str = Field(default="", alias="businessName")
    category: str = ""
    description: str = ""
    phone: str = ""
    whatsapp: str = ""
    address: str = ""
    latitude: str | float | None = None
    longitude: str | float | None = None


class ReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)


class ReviewOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    vendor_id: str = Field(alias="vendorId")
    user_id: str = Field(alias="userId")
    rating: int
    comment: str = ""
    timestamp: str


class OnboardingReply(BaseModel):
    message: str = Field(default="", max_length=1000)


class OnboardingResponse(BaseModel):
    step: str
    message: str
    input_type: str
    placeholder: str | None = None
    options: list[str] = Field(default_factory=list)
    progress: str
    error: str | None = None
    done: bool = False
    prefilled: dict | None = None
