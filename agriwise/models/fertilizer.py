from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List


class FertilizerInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    crop: str = Field(..., description="Crop the field is prepared for", min_length=1)
    current_n: float = Field(..., description="Current nitrogen level (mg/kg)", ge=0)
    current_p: float = Field(..., description="Current phosphorus level (mg/kg)", ge=0)
    current_k: float = Field(..., description="Current potassium level (mg/kg)", ge=0)

    @field_validator("crop")
    @classmethod
    def normalize_crop(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("crop must not be blank")
        return v


class FertilizerRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    fertilizer_name: str
    quantity_per_acre: int = Field(..., description="Quantity in kg per acre", ge=0)
    schedule: str
    details: List[str] = []
