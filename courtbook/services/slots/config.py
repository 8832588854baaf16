# courtbook/services/slots/config.py
"""
Booking configuration for slots calculation.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional


WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


class OperatingWindow(NamedTuple):
    """Open/close clock times ("HH:MM") of one day."""
    start: str
    end: str


DEFAULT_OPERATING_HOURS: Mapping[str, Optional[OperatingWindow]] = MappingProxyType({
    "mon": OperatingWindow("07:00", "21:00"),
    "tue": OperatingWindow("07:00", "21:00"),
    "wed": OperatingWindow("07:00", "21:00"),
    "thu": OperatingWindow("07:00", "21:00"),
    "fri": OperatingWindow("07:00", "21:00"),
    "sat": OperatingWindow("09:00", "14:00"),
    "sun": OperatingWindow("09:00", "12:00"),
})


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for booking/slots system.

    Attributes:
        slot_step_minutes: Slot granularity in minutes (30/60)
        min_advance_hours: Minimum hours between now and a new reservation start
        min_cancel_hours: Minimum hours before start for self-cancellation
        allowed_durations: Reservation lengths, in slots
        operating_hours: weekday -> OperatingWindow; None marks a closed day
    """
    slot_step_minutes: int = 60
    min_advance_hours: int = 24
    min_cancel_hours: int = 2
    allowed_durations: tuple[int, ...] = (1, 2)
    operating_hours: Mapping[str, Optional[OperatingWindow]] = field(
        default_factory=lambda: DEFAULT_OPERATING_HOURS
    )

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes not in (30, 60):
            raise ValueError(f"slot_step_minutes must be 30 or 60, got {self.slot_step_minutes}")
        missing = [day for day in WEEKDAYS if day not in self.operating_hours]
        if missing:
            raise ValueError(f"operating_hours is missing weekdays: {', '.join(missing)}")
        if not self.allowed_durations or min(self.allowed_durations) < 1:
            raise ValueError("allowed_durations must be positive slot counts")

    @property
    def max_duration(self) -> int:
        return max(self.allowed_durations)


@lru_cache
def get_booking_config() -> BookingConfig:
    """
    Get booking configuration (singleton).
    """
    return BookingConfig()


def time_str_to_minutes(time_str: str) -> int:
    """"HH:MM" or "HH:MM:SS" -> minutes since midnight."""
    parts = time_str.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time: {time_str!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 24 and 0 <= minute < 60):
        raise ValueError(f"Invalid time: {time_str!r}")
    return hour * 60 + minute


def minutes_to_time_str(minutes: int) -> str:
    """Minutes since midnight -> "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
