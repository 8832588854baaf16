# courtbook/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class SlotsDayResponse(BaseModel):
    """Slots of a court on one day."""
    court_id: int
    date: date
    is_operating_day: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    slot_step_minutes: int = Field(description="Grid step in minutes")
    duration: int = Field(description="Requested duration, in slots")

    all_slots: list[str]
    available_slots: list[str]
    selectable_slots: list[str] = Field(description="Start slots that fit the requested duration")

    model_config = {"from_attributes": True}
