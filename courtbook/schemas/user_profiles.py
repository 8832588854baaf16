# courtbook/schemas/user_profiles.py

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

Role = Literal["USER", "ADMIN"]


class UserProfileCreate(BaseModel):
    name: str = Field(min_length=1)
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class UserProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class UserProfileAdminUpdate(UserProfileUpdate):
    role: Optional[Role] = None


class UserProfileRead(BaseModel):
    id: int
    user_id: str
    name: str
    phone: Optional[str] = None
    role: Role
    created_at: Optional[str] = None

    model_config = {"from_attributes": True}


class UserProfileWithStats(UserProfileRead):
    total_reservations: int = 0
    active_reservations: int = 0
    completed_reservations: int = 0
    cancelled_reservations: int = 0
