# courtbook/services/slots/availability.py
"""
Court availability for a day.

Takes into account:
- Operating window of the weekday (base slots)
- ACTIVE reservations of the court on that date
- Requested duration (consecutive free slots)
"""

import logging
from datetime import date
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from .calculator import calculate_day_slots
from .config import BookingConfig, get_booking_config, time_str_to_minutes
from .operating_hours import get_operating_hours
from .policy import STATUS_ACTIVE

logger = logging.getLogger(__name__)


def filter_available_slots(
    slots: Sequence[str],
    reservations: Iterable,
    step_minutes: int = 60,
) -> list[str]:
    """
    Drop every slot overlapped by a reservation.

    A slot [t, t + step) is occupied when it intersects the
    reservation's [start_time, end_time). Reservations that fall
    outside the slot sequence mark nothing; malformed ones are skipped.
    """
    occupied: set[int] = set()
    slot_minutes = [time_str_to_minutes(s) for s in slots]

    for reservation in reservations:
        try:
            start_min = time_str_to_minutes(reservation.start_time)
            end_min = time_str_to_minutes(reservation.end_time)
        except (ValueError, AttributeError, TypeError):
            logger.debug(f"Skipping reservation with unparseable times: {reservation!r}")
            continue

        for index, t in enumerate(slot_minutes):
            if t < end_min and t + step_minutes > start_min:
                occupied.add(index)

    return [slot for index, slot in enumerate(slots) if index not in occupied]


def can_select_slot(
    slot: str,
    duration: int,
    all_slots: Sequence[str],
    available_slots: Iterable[str],
) -> bool:
    """
    True when slot and the next (duration - 1) slots of the day are free.

    Fails at the tail of the day when not enough slots remain.
    """
    if duration < 1:
        return False

    try:
        slot_index = all_slots.index(slot)
    except ValueError:
        return False

    available = set(available_slots)
    for i in range(duration):
        next_index = slot_index + i
        if next_index >= len(all_slots):
            return False
        if all_slots[next_index] not in available:
            return False
    return True


def selectable_slots(
    duration: int,
    all_slots: Sequence[str],
    available_slots: Sequence[str],
) -> list[str]:
    """Start slots that can host a reservation of `duration` slots."""
    available = set(available_slots)
    return [
        slot for slot in available_slots
        if can_select_slot(slot, duration, all_slots, available)
    ]


def calculate_court_availability(
    db: Session,
    court_id: int,
    target_date: date,
    duration: int = 1,
    config: BookingConfig | None = None,
) -> dict:
    """
    Calculate slots of a court on a date.

    Returns:
        Dict for SlotsDayResponse.
    """
    config = config or get_booking_config()

    window = get_operating_hours(target_date, config)
    all_slots = calculate_day_slots(target_date, config)

    reservations = get_active_reservations(db, court_id, target_date)
    available = filter_available_slots(all_slots, reservations, config.slot_step_minutes)

    return {
        "court_id": court_id,
        "date": target_date,
        "is_operating_day": window is not None,
        "open_time": window.start if window else None,
        "close_time": window.end if window else None,
        "slot_step_minutes": config.slot_step_minutes,
        "duration": duration,
        "all_slots": all_slots,
        "available_slots": available,
        "selectable_slots": selectable_slots(duration, all_slots, available),
    }


# ── Database helpers ─────────────────────────────────────────────────────


def get_active_reservations(db: Session, court_id: int, target_date: date) -> list:
    """ACTIVE reservations of a court on a date (start/end pairs)."""
    from ...models import Reservations

    return (
        db.query(Reservations)
        .filter(
            Reservations.court_id == court_id,
            Reservations.date == target_date.isoformat(),
            Reservations.status == STATUS_ACTIVE,
        )
        .order_by(Reservations.start_time)
        .all()
    )
