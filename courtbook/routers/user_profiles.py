# courtbook/routers/user_profiles.py
# Own profile only; role is never self-assigned

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..auth import get_identity
from ..database import get_db
from ..models import UserProfiles as DBUserProfiles
from ..schemas.user_profiles import (
    UserProfileCreate,
    UserProfileRead,
    UserProfileUpdate,
)
from ..services.slots.policy import ROLE_USER, Identity

router = APIRouter(prefix="/user_profiles", tags=["user_profiles"])


def _own_profile(db: Session, identity: Identity) -> DBUserProfiles | None:
    return (
        db.query(DBUserProfiles)
        .filter(DBUserProfiles.user_id == identity.user_id)
        .first()
    )


@router.post("/", response_model=UserProfileRead, status_code=status.HTTP_201_CREATED)
def create_profile(
    data: UserProfileCreate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    if _own_profile(db, identity):
        raise HTTPException(status_code=409, detail="Profile already exists")

    obj = DBUserProfiles(
        user_id=identity.user_id,
        name=data.name,
        phone=data.phone,
        role=ROLE_USER,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.get("/me", response_model=UserProfileRead)
def get_my_profile(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    obj = _own_profile(db, identity)
    if not obj:
        raise HTTPException(status_code=404, detail="Profile not found")
    return obj


@router.patch("/me", response_model=UserProfileRead)
def update_my_profile(
    data: UserProfileUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    obj = _own_profile(db, identity)
    if not obj:
        raise HTTPException(status_code=404, detail="Profile not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj
