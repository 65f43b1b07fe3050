from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    FARMER = "farmer"
    LANDOWNER = "landowner"
    BUYER = "buyer"


class UserContext(BaseModel):
    """Authenticated caller, passed explicitly into every handler."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: Role
    email: Optional[str] = None


class Profile(BaseModel):
    id: str
    email: str = ""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: Role = Role.FARMER


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=32)
