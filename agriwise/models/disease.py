from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DiseaseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    disease_name: str
    severity: Severity
    causes: str
    prevention: str
    treatment: str


class DiseaseRequest(BaseModel):
    crop_type: str = Field(..., min_length=1)


class DiseaseDetection(DiseaseRecord):
    crop_type: str
    confidence: int = Field(..., ge=0, le=100)
