"""
Admin dashboard queries: counters, revenue, filtered listings.
"""

from datetime import date
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from ..models import Courts, Reservations, SportTypes, UserProfiles
from .slots.config import time_str_to_minutes
from .slots.policy import (
    STATUS_ACTIVE,
    STATUS_CANCELLED,
    STATUS_CANCELLED_ADMIN,
    STATUS_COMPLETED,
)

RECENT_LIMIT = 10


def reservation_hours(reservation) -> float:
    return (time_str_to_minutes(reservation.end_time) - time_str_to_minutes(reservation.start_time)) / 60


def calculate_stats(db: Session, today: date) -> dict:
    total_reservations = db.query(func.count(Reservations.id)).scalar()
    active_reservations = (
        db.query(func.count(Reservations.id))
        .filter(Reservations.status == STATUS_ACTIVE)
        .scalar()
    )
    total_courts = (
        db.query(func.count(Courts.id))
        .filter(Courts.active == 1)
        .scalar()
    )
    total_users = db.query(func.count(UserProfiles.id)).scalar()
    today_reservations = (
        db.query(func.count(Reservations.id))
        .filter(
            Reservations.date == today.isoformat(),
            Reservations.status == STATUS_ACTIVE,
        )
        .scalar()
    )

    # Revenue = completed reservations × court hourly price × hours played
    completed = (
        db.query(Reservations)
        .options(joinedload(Reservations.court))
        .filter(Reservations.status == STATUS_COMPLETED)
        .all()
    )
    revenue = sum(
        (r.court.price_per_hour if r.court else 0) * reservation_hours(r)
        for r in completed
    )

    return {
        "total_reservations": total_reservations or 0,
        "active_reservations": active_reservations or 0,
        "total_courts": total_courts or 0,
        "total_users": total_users or 0,
        "today_reservations": today_reservations or 0,
        "revenue": round(revenue, 2),
    }


def list_reservations(
    db: Session,
    status: Optional[str] = None,
    sport_type: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    search: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Reservations]:
    """All reservations, newest first, narrowed by the admin filters."""
    query = (
        db.query(Reservations)
        .join(Reservations.court)
        .join(Courts.sport_type)
        .outerjoin(UserProfiles, UserProfiles.user_id == Reservations.user_id)
        .options(
            joinedload(Reservations.court).joinedload(Courts.sport_type),
            joinedload(Reservations.user),
        )
    )

    if status:
        query = query.filter(Reservations.status == status)
    if sport_type:
        query = query.filter(SportTypes.name == sport_type)
    if date_from:
        query = query.filter(Reservations.date >= date_from.isoformat())
    if date_to:
        query = query.filter(Reservations.date <= date_to.isoformat())
    if search:
        term = f"%{search.lower()}%"
        query = query.filter(
            or_(
                func.lower(UserProfiles.name).like(term),
                func.lower(Courts.name).like(term),
                func.lower(SportTypes.name).like(term),
            )
        )

    query = query.order_by(Reservations.created_at.desc(), Reservations.id.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def list_users_with_stats(
    db: Session,
    search: Optional[str] = None,
    role: Optional[str] = None,
) -> list[dict]:
    query = db.query(UserProfiles)
    if search:
        term = f"%{search.lower()}%"
        query = query.filter(
            or_(
                func.lower(UserProfiles.name).like(term),
                func.lower(UserProfiles.phone).like(term),
            )
        )
    if role:
        query = query.filter(UserProfiles.role == role)

    profiles = query.order_by(UserProfiles.created_at.desc(), UserProfiles.id.desc()).all()

    # One grouped query for every profile's counters
    counts: dict[str, dict[str, int]] = {}
    rows = (
        db.query(Reservations.user_id, Reservations.status, func.count(Reservations.id))
        .group_by(Reservations.user_id, Reservations.status)
        .all()
    )
    for user_id, status, count in rows:
        counts.setdefault(user_id, {})[status] = count

    result = []
    for profile in profiles:
        by_status = counts.get(profile.user_id, {})
        result.append({
            "id": profile.id,
            "user_id": profile.user_id,
            "name": profile.name,
            "phone": profile.phone,
            "role": profile.role,
            "created_at": profile.created_at,
            "total_reservations": sum(by_status.values()),
            "active_reservations": by_status.get(STATUS_ACTIVE, 0),
            "completed_reservations": by_status.get(STATUS_COMPLETED, 0),
            "cancelled_reservations": (
                by_status.get(STATUS_CANCELLED, 0) + by_status.get(STATUS_CANCELLED_ADMIN, 0)
            ),
        })
    return result


def recent_users(db: Session) -> list[UserProfiles]:
    return (
        db.query(UserProfiles)
        .order_by(UserProfiles.created_at.desc(), UserProfiles.id.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
