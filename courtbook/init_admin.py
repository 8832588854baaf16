"""
Bootstrap: create tables, seed sport types and promote the first admin.

Usage:
    ADMIN_USER_ID=<auth user id> ADMIN_NAME="Admin" python -m courtbook.init_admin
"""

import logging
import os

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from .database import SessionLocal, init_db
from .models import SportTypes, UserProfiles
from .services.slots.policy import ROLE_ADMIN

logger = logging.getLogger(__name__)


DEFAULT_SPORT_TYPES = (
    {"name": "Tenis", "description": "Canchas de tenis", "max_people": 4},
    {"name": "Pádel", "description": "Canchas de pádel", "max_people": 4},
    {"name": "Fútbol", "description": "Canchas de fútbol 5", "max_people": 10},
)


# ======================================================
# SEED
# ======================================================

def seed_sport_types(db: Session) -> int:
    """Insert missing default sport types. Returns number created."""
    existing = {name for (name,) in db.query(SportTypes.name).all()}
    created = 0

    for item in DEFAULT_SPORT_TYPES:
        if item["name"] in existing:
            continue
        db.add(SportTypes(**item))
        created += 1

    db.commit()
    return created


def ensure_admin(db: Session, user_id: str, name: str, phone: str | None = None) -> UserProfiles:
    """Create the profile as ADMIN, or promote an existing one."""
    profile = (
        db.query(UserProfiles)
        .filter(UserProfiles.user_id == user_id)
        .first()
    )

    if profile:
        if profile.role != ROLE_ADMIN:
            profile.role = ROLE_ADMIN
            logger.info(f"Promoted user_id={user_id} to ADMIN")
    else:
        profile = UserProfiles(user_id=user_id, name=name, phone=phone, role=ROLE_ADMIN)
        db.add(profile)
        logger.info(f"Created ADMIN profile for user_id={user_id}")

    db.commit()
    db.refresh(profile)
    return profile


# ======================================================
# MAIN
# ======================================================

def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    admin_user_id = os.getenv("ADMIN_USER_ID")
    if not admin_user_id:
        raise RuntimeError("ADMIN_USER_ID is not set")

    admin_name = os.getenv("ADMIN_NAME", "Administrator")

    init_db()

    db = SessionLocal()
    try:
        created = seed_sport_types(db)
        logger.info(f"Sport types seeded: {created} new")
        profile = ensure_admin(db, admin_user_id, admin_name, os.getenv("ADMIN_PHONE"))
        logger.info(f"Admin ready: profile_id={profile.id}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
