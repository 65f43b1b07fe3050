from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Season(str, Enum):
    MONSOON = "monsoon"
    WINTER = "winter"
    SUMMER = "summer"


class SoilSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    nitrogen: float = Field(..., description="Nitrogen content in soil (mg/kg)", ge=0)
    phosphorus: float = Field(..., description="Phosphorus content in soil (mg/kg)", ge=0)
    potassium: float = Field(..., description="Potassium content in soil (mg/kg)", ge=0)
    ph_level: float = Field(..., description="pH level of soil", ge=0, le=14)
    season: Season = Season.MONSOON
    temperature: Optional[float] = Field(None, description="Temperature in Celsius")
    humidity: Optional[float] = Field(None, description="Humidity percentage", ge=0, le=100)
    rainfall: Optional[float] = Field(None, description="Rainfall in mm", ge=0)


class CropRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    crop: str
    confidence: int = Field(..., ge=0, le=100)
    tips: List[str] = []
