# courtbook/routers/courts.py
# Booking-side view: only active courts are listed

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from ..database import get_db
from ..models import Courts as DBCourts
from ..schemas.courts import CourtRead, SportCourtsGroup

router = APIRouter(prefix="/courts", tags=["courts"])


def _active_courts(db: Session) -> list[DBCourts]:
    return (
        db.query(DBCourts)
        .options(joinedload(DBCourts.sport_type))
        .filter(DBCourts.active == 1)
        .order_by(DBCourts.sport_type_id, DBCourts.name)
        .all()
    )


@router.get("/", response_model=list[CourtRead])
def list_courts(db: Session = Depends(get_db)):
    return _active_courts(db)


@router.get("/by_sport", response_model=list[SportCourtsGroup])
def list_courts_by_sport(db: Session = Depends(get_db)):
    groups: dict[int, dict] = {}
    for court in _active_courts(db):
        group = groups.setdefault(
            court.sport_type_id,
            {"sport_type": court.sport_type, "courts": []},
        )
        group["courts"].append(court)
    return list(groups.values())


@router.get("/{id}", response_model=CourtRead)
def get_court(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBCourts, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj
