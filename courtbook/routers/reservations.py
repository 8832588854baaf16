# courtbook/routers/reservations.py
# Reservations of the calling user. PATCH / DELETE are not exposed:
# reservations change only through cancel and admin actions.

from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import get_identity
from ..clock import local_now
from ..database import get_db
from ..schemas.reservations import (
    MyReservationRead,
    ReservationCreate,
    ReservationRead,
    ReservationSummary,
)
from ..services import reservations as service
from ..services.slots.policy import Identity, can_cancel, cancellation_time_left

router = APIRouter(prefix="/reservations", tags=["reservations"])


def _my_reservation(obj, now: datetime) -> MyReservationRead:
    item = MyReservationRead.model_validate(obj)
    item.can_cancel = can_cancel(obj, now)
    left = cancellation_time_left(obj, now)
    if left is not None:
        item.cancel_hours_left, item.cancel_minutes_left = left
    return item


@router.post("/", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    identity: Identity = Depends(get_identity),
    now: datetime = Depends(local_now),
    db: Session = Depends(get_db),
):
    return service.create_reservation(
        db,
        identity,
        court_id=data.court_id,
        target_date=data.date,
        start_time=data.start_time,
        duration=data.duration,
        now=now,
    )


@router.get("/mine", response_model=list[MyReservationRead])
def list_my_reservations(
    identity: Identity = Depends(get_identity),
    now: datetime = Depends(local_now),
    db: Session = Depends(get_db),
):
    return [
        _my_reservation(obj, now)
        for obj in service.list_user_reservations(db, identity.user_id)
    ]


@router.get("/mine/summary", response_model=ReservationSummary)
def my_reservation_summary(
    identity: Identity = Depends(get_identity),
    now: datetime = Depends(local_now),
    db: Session = Depends(get_db),
):
    reservations = service.list_user_reservations(db, identity.user_id)
    return service.user_reservation_summary(reservations, now.date())


@router.post("/{id}/cancel", response_model=ReservationRead)
def cancel_reservation(
    id: int,
    identity: Identity = Depends(get_identity),
    now: datetime = Depends(local_now),
    db: Session = Depends(get_db),
):
    return service.cancel_reservation(db, identity, id, now)
