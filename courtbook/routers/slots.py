# courtbook/routers/slots.py
"""
Slots API endpoints.

GET /slots/day - slots of a court on a date, filtered by ACTIVE reservations
"""

from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Courts as DBCourts
from ..schemas.slots import SlotsDayResponse
from ..services.slots import calculate_court_availability, get_booking_config


router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/day", response_model=SlotsDayResponse)
def get_slots_day(
    court_id: int,
    target_date: date = Query(..., alias="date"),
    duration: int = 1,
    db: Session = Depends(get_db),
):
    """Available and selectable slots of a court for one day."""
    config = get_booking_config()

    if duration not in config.allowed_durations:
        raise HTTPException(
            status_code=400,
            detail=f"duration must be one of {list(config.allowed_durations)}",
        )

    court = db.get(DBCourts, court_id)
    if not court or not court.active:
        raise HTTPException(status_code=404, detail="Court not found or inactive")

    result = calculate_court_availability(
        db=db,
        court_id=court_id,
        target_date=target_date,
        duration=duration,
        config=config,
    )

    return SlotsDayResponse(**result)
