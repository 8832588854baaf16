# courtbook/services/slots/__init__.py
"""
Slot availability and booking window engine.

Operating hours → slot grid → occupancy filter → duration fit,
plus the lead-time / cancellation policy.
"""

from .config import BookingConfig, OperatingWindow, get_booking_config
from .operating_hours import get_operating_hours, is_operating_day
from .calculator import calculate_day_slots, generate_time_slots
from .availability import (
    calculate_court_availability,
    can_select_slot,
    filter_available_slots,
    selectable_slots,
)

__all__ = [
    "BookingConfig",
    "OperatingWindow",
    "get_booking_config",
    "get_operating_hours",
    "is_operating_day",
    "generate_time_slots",
    "calculate_day_slots",
    "filter_available_slots",
    "can_select_slot",
    "selectable_slots",
    "calculate_court_availability",
]
