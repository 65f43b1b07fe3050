from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class LandCreate(BaseModel):
    title: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    area_acres: float = Field(..., gt=0)
    price_per_month: float = Field(..., ge=0)
    description: Optional[str] = None
    soil_type: Optional[str] = None
    water_availability: Optional[str] = None


class Land(LandCreate):
    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    is_available: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Inquiry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    buyer_id: str
    seller_id: str
    listing_type: Literal["land", "produce"]
    listing_id: str
    message: Optional[str] = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class InquiryView(Inquiry):
    buyer_name: str
    land_title: str


class OwnerContact(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: str


class LandownerSummary(BaseModel):
    total_lands: int
    available_lands: int
    monthly_income: float
    unread_inquiries: int
