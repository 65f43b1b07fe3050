from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


def _utcnow():
    return datetime.now(timezone.utc)


class Category(str, Enum):
    VEGETABLE = "Vegetable"
    FRUIT = "Fruit"
    GRAIN = "Grain"
    OTHER = "Other"


class ListingCreate(BaseModel):
    crop_name: str = Field(..., min_length=1)
    quantity: float = Field(..., description="Quantity on offer", gt=0)
    unit: str = "kg"
    price_per_unit: float = Field(..., description="Price per unit", gt=0)
    description: Optional[str] = None
    location: Optional[str] = None


class Listing(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    seller_id: str
    crop_name: str
    quantity: float = Field(..., ge=0)
    unit: str = "kg"
    price_per_unit: float = Field(..., gt=0)
    description: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)

    @computed_field
    @property
    def is_available(self) -> bool:
        return self.quantity > 0


class OrderRequest(BaseModel):
    listing_id: str
    requested_quantity: float = Field(..., gt=0)


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    listing_id: str
    buyer_id: str
    seller_id: str
    quantity: float
    unit: str
    total_amount: float
    status: str = "pending"
    payment_status: str = "pending"
    created_at: datetime = Field(default_factory=_utcnow)
