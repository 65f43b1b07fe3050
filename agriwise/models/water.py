from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class IrrigationStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["critical", "warning", "excess", "optimal"]
    message: str
    moisture_level: float
    temperature: Optional[float] = None
    water_quantity: str
    next_irrigation: str
    best_time: str
