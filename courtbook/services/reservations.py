"""
Reservation lifecycle against the store.

create  → policy gate, slot engine, conditional insert
cancel  → owner (penalty) or admin (no penalty)
complete → admin

Each mutation is one best-effort write: on failure the session is rolled
back and the error propagates to the caller.
"""

import logging
from datetime import date, datetime, timedelta

from sqlalchemy import Integer, Text, insert, literal, select
from sqlalchemy.orm import Session, joinedload

from ..models import Courts, Reservations
from .events import emit_reservation_event
from .slots import calculate_day_slots, can_select_slot, filter_available_slots
from .slots.availability import get_active_reservations
from .slots.config import BookingConfig, get_booking_config, minutes_to_time_str, time_str_to_minutes
from .slots.policy import (
    STATUS_ACTIVE,
    Identity,
    cancel_by_admin,
    cancel_by_user,
    complete,
    ensure_bookable,
    ensure_duration_allowed,
    slot_start,
)

logger = logging.getLogger(__name__)


class ReservationNotFoundError(LookupError):
    pass


class CourtUnavailableError(LookupError):
    pass


class SlotUnavailableError(Exception):
    """Requested slot is outside the grid or already taken."""


def create_reservation(
    db: Session,
    identity: Identity,
    court_id: int,
    target_date: date,
    start_time: str,
    duration: int,
    now: datetime,
    config: BookingConfig | None = None,
) -> Reservations:
    config = config or get_booking_config()

    # Step 1: validation before touching the store
    ensure_duration_allowed(duration, config)
    start_min = time_str_to_minutes(start_time)
    start_label = minutes_to_time_str(start_min)
    ensure_bookable(slot_start(target_date, start_label), now, config)

    # Step 2: court must exist and accept bookings
    court = db.get(Courts, court_id)
    if not court or not court.active:
        raise CourtUnavailableError("Court not found or inactive")

    # Step 3: slot engine
    all_slots = calculate_day_slots(target_date, config)
    if start_label not in all_slots:
        raise SlotUnavailableError(f"{start_label} is not a bookable slot on {target_date.isoformat()}")

    reservations = get_active_reservations(db, court_id, target_date)
    available = filter_available_slots(all_slots, reservations, config.slot_step_minutes)
    if not can_select_slot(start_label, duration, all_slots, available):
        raise SlotUnavailableError("Selected time is not available for the requested duration")

    # Step 4: conditional insert, no row when an ACTIVE reservation overlaps.
    # Atomic only where writers are serialized (SQLite).
    db_start = f"{start_label}:00"
    db_end = f"{minutes_to_time_str(start_min + duration * config.slot_step_minutes)}:00"
    date_str = target_date.isoformat()

    overlap = (
        select(Reservations.id)
        .where(
            Reservations.court_id == court_id,
            Reservations.date == date_str,
            Reservations.status == STATUS_ACTIVE,
            Reservations.start_time < db_end,
            Reservations.end_time > db_start,
        )
        .correlate(None)
        .exists()
    )
    rows = select(
        literal(identity.user_id, Text),
        literal(court_id, Integer),
        literal(date_str, Text),
        literal(db_start, Text),
        literal(db_end, Text),
        literal(STATUS_ACTIVE, Text),
        literal(0, Integer),
    ).where(~overlap)

    stmt = (
        insert(Reservations)
        .from_select(
            ["user_id", "court_id", "date", "start_time", "end_time", "status", "penalty_applied"],
            rows,
        )
        .returning(Reservations.id)
    )

    try:
        new_id = db.execute(stmt).scalar_one_or_none()
        if new_id is None:
            db.rollback()
            raise SlotUnavailableError("Selected time was just booked by someone else")
        db.commit()
    except SlotUnavailableError:
        raise
    except Exception:
        db.rollback()
        raise

    reservation = db.get(Reservations, new_id)

    logger.info(
        f"Reservation created: reservation_id={reservation.id}, user_id={identity.user_id}, "
        f"court_id={court_id}, time={date_str} {db_start}-{db_end}"
    )
    emit_reservation_event("reservation_created", reservation, identity)
    return reservation


def get_reservation(db: Session, reservation_id: int) -> Reservations:
    obj = db.get(Reservations, reservation_id)
    if not obj:
        raise ReservationNotFoundError("Reservation not found")
    return obj


def _commit(db: Session, obj) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(obj)


def cancel_reservation(
    db: Session,
    identity: Identity,
    reservation_id: int,
    now: datetime,
    config: BookingConfig | None = None,
) -> Reservations:
    """Owner cancellation (penalty applied)."""
    obj = get_reservation(db, reservation_id)
    cancel_by_user(obj, identity, now, config)
    _commit(db, obj)

    logger.info(f"Reservation {obj.id} cancelled by owner {identity.user_id} (penalty applied)")
    emit_reservation_event("reservation_cancelled", obj, identity)
    return obj


def admin_cancel_reservation(db: Session, identity: Identity, reservation_id: int) -> Reservations:
    obj = get_reservation(db, reservation_id)
    cancel_by_admin(obj, identity)
    _commit(db, obj)

    logger.info(f"Reservation {obj.id} cancelled by admin {identity.user_id}")
    emit_reservation_event("reservation_cancelled", obj, identity)
    return obj


def admin_complete_reservation(db: Session, identity: Identity, reservation_id: int) -> Reservations:
    obj = get_reservation(db, reservation_id)
    complete(obj, identity)
    _commit(db, obj)

    logger.info(f"Reservation {obj.id} marked completed by admin {identity.user_id}")
    emit_reservation_event("reservation_completed", obj, identity)
    return obj


# ── Queries ──────────────────────────────────────────────────────────────


def list_user_reservations(db: Session, user_id: str) -> list[Reservations]:
    return (
        db.query(Reservations)
        .options(joinedload(Reservations.court).joinedload(Courts.sport_type))
        .filter(Reservations.user_id == user_id)
        .order_by(Reservations.date.desc(), Reservations.start_time.desc())
        .all()
    )


def user_reservation_summary(reservations: list, today: date) -> dict:
    """Dashboard counters over one user's reservations."""
    today_str = today.isoformat()
    # upcoming only
    active = [r for r in reservations if r.status == STATUS_ACTIVE and r.date >= today_str]
    week_end = (today + timedelta(days=7)).isoformat()

    return {
        "active": len(active),
        "today": sum(1 for r in active if r.date == today_str),
        "next_7_days": sum(1 for r in active if today_str <= r.date <= week_end),
        "total": len(reservations),
    }
