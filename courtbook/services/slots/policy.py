# courtbook/services/slots/policy.py
"""
Booking window and reservation lifecycle rules.

Lifecycle:
  ACTIVE → CANCELLED        (owner, penalty applied, ≥ min_cancel_hours ahead)
  ACTIVE → CANCELLED_ADMIN  (admin, no penalty, any time)
  ACTIVE → COMPLETED        (admin)

Every other status is terminal.
The caller's identity is always passed in explicitly.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .config import BookingConfig, get_booking_config


STATUS_ACTIVE = "ACTIVE"
STATUS_CANCELLED = "CANCELLED"
STATUS_CANCELLED_ADMIN = "CANCELLED_ADMIN"
STATUS_COMPLETED = "COMPLETED"

RESERVATION_STATUSES = (
    STATUS_ACTIVE,
    STATUS_CANCELLED,
    STATUS_CANCELLED_ADMIN,
    STATUS_COMPLETED,
)
TERMINAL_STATUSES = frozenset(RESERVATION_STATUSES) - {STATUS_ACTIVE}

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"
ROLES = (ROLE_USER, ROLE_ADMIN)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller."""
    user_id: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class BookingPolicyError(ValueError):
    """A booking rule rejected the operation."""


class LeadTimeError(BookingPolicyError):
    pass


class InvalidTransitionError(BookingPolicyError):
    pass


class PermissionDeniedError(BookingPolicyError):
    pass


# ── Time helpers ─────────────────────────────────────────────────────────


def slot_start(target_date: date, time_str: str) -> datetime:
    """Combine a date and "HH:MM[:SS]" into a naive local datetime."""
    parts = time_str.split(":")
    return datetime.combine(target_date, datetime.min.time()).replace(
        hour=int(parts[0]), minute=int(parts[1])
    )


def reservation_start(reservation) -> datetime:
    reservation_date = reservation.date
    if isinstance(reservation_date, str):
        reservation_date = date.fromisoformat(reservation_date)
    return slot_start(reservation_date, reservation.start_time)


# ── Create ───────────────────────────────────────────────────────────────


def ensure_bookable(
    start: datetime,
    now: datetime,
    config: BookingConfig | None = None,
) -> None:
    """Reject a reservation starting less than min_advance_hours from now."""
    config = config or get_booking_config()
    if start - now < timedelta(hours=config.min_advance_hours):
        raise LeadTimeError(
            f"Reservations must be made at least {config.min_advance_hours} hours in advance"
        )


def ensure_duration_allowed(duration: int, config: BookingConfig | None = None) -> None:
    config = config or get_booking_config()
    if duration not in config.allowed_durations:
        allowed = ", ".join(str(d) for d in config.allowed_durations)
        raise BookingPolicyError(f"Duration must be one of: {allowed}")


# ── Cancel / complete ────────────────────────────────────────────────────


def can_cancel(reservation, now: datetime, config: BookingConfig | None = None) -> bool:
    """Owner may cancel an ACTIVE reservation until min_cancel_hours before start."""
    config = config or get_booking_config()
    if reservation.status != STATUS_ACTIVE:
        return False
    return reservation_start(reservation) - now >= timedelta(hours=config.min_cancel_hours)


def cancellation_time_left(
    reservation,
    now: datetime,
    config: BookingConfig | None = None,
) -> tuple[int, int] | None:
    """
    (hours, minutes) left to self-cancel, or None once the window closed.
    """
    config = config or get_booking_config()
    if not can_cancel(reservation, now, config):
        return None
    seconds = int((reservation_start(reservation) - now).total_seconds())
    hours, rest = divmod(seconds, 3600)
    return hours, rest // 60


def _ensure_active(reservation) -> None:
    if reservation.status in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            f"Reservation is already {reservation.status}"
        )
    if reservation.status != STATUS_ACTIVE:
        raise InvalidTransitionError(f"Unknown reservation status: {reservation.status}")


def _ensure_admin(identity: Identity) -> None:
    if not identity.is_admin:
        raise PermissionDeniedError("Administrator role required")


def cancel_by_user(
    reservation,
    identity: Identity,
    now: datetime,
    config: BookingConfig | None = None,
):
    """Self-cancellation: ACTIVE → CANCELLED with penalty."""
    config = config or get_booking_config()
    if reservation.user_id != identity.user_id:
        raise PermissionDeniedError("Only the owner can cancel this reservation")
    _ensure_active(reservation)
    if not can_cancel(reservation, now, config):
        raise LeadTimeError(
            f"Reservations can only be cancelled at least {config.min_cancel_hours} hours in advance"
        )

    reservation.status = STATUS_CANCELLED
    reservation.penalty_applied = 1
    return reservation


def cancel_by_admin(reservation, identity: Identity):
    """Administrative cancellation: ACTIVE → CANCELLED_ADMIN, no penalty."""
    _ensure_admin(identity)
    _ensure_active(reservation)

    reservation.status = STATUS_CANCELLED_ADMIN
    reservation.penalty_applied = 0
    return reservation


def complete(reservation, identity: Identity):
    """ACTIVE → COMPLETED (admin only)."""
    _ensure_admin(identity)
    _ensure_active(reservation)

    reservation.status = STATUS_COMPLETED
    return reservation
