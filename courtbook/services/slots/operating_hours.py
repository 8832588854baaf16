# courtbook/services/slots/operating_hours.py
"""
Operating calendar: which hours a weekday is open.

The weekday table in BookingConfig always carries all seven days.
A day mapped to None is closed; the default table has none.
"""

from datetime import date

from .config import WEEKDAYS, BookingConfig, OperatingWindow, get_booking_config


def get_operating_hours(
    target_date: date,
    config: BookingConfig | None = None,
) -> OperatingWindow | None:
    """Open/close window for target_date, or None on a closed day."""
    config = config or get_booking_config()
    return config.operating_hours[WEEKDAYS[target_date.weekday()]]


def is_operating_day(target_date: date, config: BookingConfig | None = None) -> bool:
    return get_operating_hours(target_date, config) is not None
