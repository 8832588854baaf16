# courtbook/services/slots/calculator.py
"""
Slot generation for one operating window.

Produces ordered "HH:MM" slot starts covering [start, end).
Nothing is cached; slots are rebuilt on every request.
"""

from datetime import date

from .operating_hours import get_operating_hours
from .config import BookingConfig, get_booking_config, minutes_to_time_str, time_str_to_minutes


def generate_time_slots(start_time: str, end_time: str, step_minutes: int = 60) -> list[str]:
    """
    Generate slot starts from start_time up to (not including) end_time.

    >>> generate_time_slots("09:00", "12:00")
    ['09:00', '10:00', '11:00']
    """
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")

    start_min = time_str_to_minutes(start_time)
    end_min = time_str_to_minutes(end_time)

    slots: list[str] = []
    t = start_min
    while t < end_min:
        slots.append(minutes_to_time_str(t))
        t += step_minutes
    return slots


def calculate_day_slots(target_date: date, config: BookingConfig | None = None) -> list[str]:
    """All slot starts of target_date's operating window. Empty on a closed day."""
    config = config or get_booking_config()
    window = get_operating_hours(target_date, config)
    if window is None:
        return []
    return generate_time_slots(window.start, window.end, config.slot_step_minutes)
