# courtbook/routers/admin.py
"""
Administration endpoints. Every route requires the ADMIN role.

Reservations: listing with filters, cancel (no penalty), complete.
Courts: create / update / toggle active / delete.
Users: listing with reservation counters, edit, role toggle, delete.
"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from ..auth import require_admin
from ..clock import local_now
from ..database import get_db
from ..models import (
    Courts as DBCourts,
    Reservations as DBReservations,
    SportTypes as DBSportTypes,
    UserProfiles as DBUserProfiles,
)
from ..schemas.admin import AdminStats
from ..schemas.courts import CourtCreate, CourtRead, CourtUpdate
from ..schemas.reservations import AdminReservationRead, ReservationRead, ReservationStatus
from ..schemas.user_profiles import (
    Role,
    UserProfileAdminUpdate,
    UserProfileRead,
    UserProfileWithStats,
)
from ..services import admin_stats
from ..services import reservations as reservation_service
from ..services.slots.policy import ROLE_ADMIN, ROLE_USER, Identity

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


# ──────────────────────────────────────────────────────────────────────────────
# Dashboard
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/stats", response_model=AdminStats)
def get_stats(
    now: datetime = Depends(local_now),
    db: Session = Depends(get_db),
):
    return admin_stats.calculate_stats(db, now.date())


# ──────────────────────────────────────────────────────────────────────────────
# Reservations
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/reservations", response_model=list[AdminReservationRead])
def list_reservations(
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    sport_type: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    q: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return admin_stats.list_reservations(
        db,
        status=status_filter,
        sport_type=sport_type,
        date_from=date_from,
        date_to=date_to,
        search=q,
    )


@router.get("/reservations/recent", response_model=list[AdminReservationRead])
def recent_reservations(db: Session = Depends(get_db)):
    return admin_stats.list_reservations(db, limit=admin_stats.RECENT_LIMIT)


@router.post("/reservations/{id}/cancel", response_model=ReservationRead)
def cancel_reservation(
    id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return reservation_service.admin_cancel_reservation(db, identity, id)


@router.post("/reservations/{id}/complete", response_model=ReservationRead)
def complete_reservation(
    id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return reservation_service.admin_complete_reservation(db, identity, id)


# ──────────────────────────────────────────────────────────────────────────────
# Courts
# ──────────────────────────────────────────────────────────────────────────────

def _get_court(db: Session, id: int) -> DBCourts:
    obj = db.get(DBCourts, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


def _ensure_sport_type(db: Session, sport_type_id: int) -> None:
    if not db.get(DBSportTypes, sport_type_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Sport type not found",
        )


@router.get("/courts", response_model=list[CourtRead])
def list_all_courts(db: Session = Depends(get_db)):
    return (
        db.query(DBCourts)
        .options(joinedload(DBCourts.sport_type))
        .order_by(DBCourts.sport_type_id, DBCourts.name)
        .all()
    )


@router.post("/courts", response_model=CourtRead, status_code=status.HTTP_201_CREATED)
def create_court(
    data: CourtCreate,
    db: Session = Depends(get_db),
):
    _ensure_sport_type(db, data.sport_type_id)

    obj = DBCourts(**data.model_dump(), active=1)
    db.add(obj)
    db.commit()
    db.refresh(obj)

    logger.info(f"Court created: court_id={obj.id}, name={obj.name}")
    return obj


@router.patch("/courts/{id}", response_model=CourtRead)
def update_court(
    id: int,
    data: CourtUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_court(db, id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("sport_type_id") is not None:
        _ensure_sport_type(db, changes["sport_type_id"])

    for field, value in changes.items():
        if value is None and field != "image_url":
            continue
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.post("/courts/{id}/toggle", response_model=CourtRead)
def toggle_court(id: int, db: Session = Depends(get_db)):
    obj = _get_court(db, id)
    obj.active = 0 if obj.active else 1
    db.commit()
    db.refresh(obj)

    logger.info(f"Court {obj.id} {'activated' if obj.active else 'deactivated'}")
    return obj


@router.delete("/courts/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_court(id: int, db: Session = Depends(get_db)):
    obj = _get_court(db, id)

    has_history = (
        db.query(DBReservations.id)
        .filter(DBReservations.court_id == id)
        .first()
    )
    if has_history:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Court has reservations; deactivate it instead",
        )

    db.delete(obj)
    db.commit()


# ──────────────────────────────────────────────────────────────────────────────
# Users
# ──────────────────────────────────────────────────────────────────────────────

def _get_profile(db: Session, id: int) -> DBUserProfiles:
    obj = db.get(DBUserProfiles, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.get("/users", response_model=list[UserProfileWithStats])
def list_users(
    q: Optional[str] = None,
    role: Optional[Role] = None,
    db: Session = Depends(get_db),
):
    return admin_stats.list_users_with_stats(db, search=q, role=role)


@router.get("/users/recent", response_model=list[UserProfileRead])
def recent_users(db: Session = Depends(get_db)):
    return admin_stats.recent_users(db)


@router.patch("/users/{id}", response_model=UserProfileRead)
def update_user(
    id: int,
    data: UserProfileAdminUpdate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    obj = _get_profile(db, id)
    changes = data.model_dump(exclude_unset=True)

    if "role" in changes and obj.user_id == identity.user_id and changes["role"] != obj.role:
        raise HTTPException(status_code=400, detail="You cannot change your own role")

    for field, value in changes.items():
        if value is None and field != "phone":
            continue
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.post("/users/{id}/toggle_role", response_model=UserProfileRead)
def toggle_user_role(
    id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    obj = _get_profile(db, id)
    if obj.user_id == identity.user_id:
        raise HTTPException(status_code=400, detail="You cannot change your own role")

    obj.role = ROLE_USER if obj.role == ROLE_ADMIN else ROLE_ADMIN
    db.commit()
    db.refresh(obj)

    logger.info(f"User profile {obj.id} role set to {obj.role} by {identity.user_id}")
    return obj


@router.delete("/users/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    obj = _get_profile(db, id)
    if obj.user_id == identity.user_id:
        raise HTTPException(status_code=400, detail="You cannot delete yourself")

    db.delete(obj)
    db.commit()
