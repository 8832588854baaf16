"""
Caller identity for routers.

The auth middleware stores the forwarded user id on request.state;
the role is read from the caller's user profile.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from .database import get_db
from .models import UserProfiles
from .services.slots.policy import ROLE_USER, Identity


def get_identity(request: Request, db: Session = Depends(get_db)) -> Identity:
    raw = getattr(request.state, "identity", None)
    if not raw or not raw.get("user_id"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    user_id = raw["user_id"]
    profile = (
        db.query(UserProfiles)
        .filter(UserProfiles.user_id == user_id)
        .first()
    )
    role = profile.role if profile else ROLE_USER
    return Identity(user_id=user_id, role=role)


def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required",
        )
    return identity
