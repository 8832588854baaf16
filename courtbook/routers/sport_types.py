# courtbook/routers/sport_types.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..models import SportTypes as DBSportTypes
from ..schemas.sport_types import (
    SportTypeCreate,
    SportTypeRead,
)

router = APIRouter(prefix="/sport_types", tags=["sport_types"])


@router.get("/", response_model=list[SportTypeRead])
def list_sport_types(db: Session = Depends(get_db)):
    return db.query(DBSportTypes).order_by(DBSportTypes.name).all()


@router.post(
    "/",
    response_model=SportTypeRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_sport_type(
    data: SportTypeCreate,
    db: Session = Depends(get_db),
):
    obj = DBSportTypes(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj
