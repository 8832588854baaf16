# courtbook/schemas/reservations.py

import re
from datetime import date
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from .courts import CourtRead

ReservationStatus = Literal["ACTIVE", "CANCELLED", "CANCELLED_ADMIN", "COMPLETED"]


class ReservationCreate(BaseModel):
    court_id: int
    date: date
    start_time: str = Field(description="Slot start in HH:MM format")
    duration: int = Field(1, description="Length in slots (hours)")

    @field_validator("start_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Validate time format."""
        match = re.match(r"^(\d{2}):(\d{2})(:\d{2})?$", v)
        if not match or int(match.group(1)) > 23 or int(match.group(2)) > 59:
            raise ValueError("Time must be in HH:MM format")
        return v[:5]


class ReservationUser(BaseModel):
    name: str
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class ReservationRead(BaseModel):
    id: int
    user_id: str
    court_id: int
    date: date
    start_time: str
    end_time: str
    status: ReservationStatus
    penalty_applied: bool
    created_at: Optional[str] = None

    model_config = {"from_attributes": True}


class MyReservationRead(ReservationRead):
    court: Optional[CourtRead] = None
    can_cancel: bool = False
    cancel_hours_left: Optional[int] = None
    cancel_minutes_left: Optional[int] = None


class AdminReservationRead(ReservationRead):
    court: Optional[CourtRead] = None
    user: Optional[ReservationUser] = None


class ReservationSummary(BaseModel):
    active: int
    today: int
    next_7_days: int
    total: int
