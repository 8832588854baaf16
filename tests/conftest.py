import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

from datetime import datetime

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from courtbook.clock import local_now
from courtbook.database import create_db_engine, get_db
from courtbook.main import app
from courtbook.models import Base, Courts, Reservations, SportTypes, UserProfiles
from courtbook.services import events

# Monday, 10:00 facility time
NOW = datetime(2026, 10, 19, 10, 0)

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
ADMIN_ID = "admin-1"


def headers(user_id: str) -> dict:
    return {"X-User-Id": user_id}


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_redis(monkeypatch):
    redis = fakeredis.FakeRedis(decode_responses=True)
    monkeypatch.setattr(events, "redis_client", redis)
    return redis


@pytest.fixture
def client(session_factory, fake_redis):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[local_now] = lambda: NOW
    yield TestClient(app)
    app.dependency_overrides.clear()


# ── Data helpers ─────────────────────────────────────────────────────────


@pytest.fixture
def sport_type(db):
    obj = SportTypes(name="Tenis", description="Canchas de tenis", max_people=4)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def court(db, sport_type):
    obj = Courts(
        name="Cancha 1",
        sport_type_id=sport_type.id,
        price_per_hour=20.0,
        max_people=4,
        active=1,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def profiles(db):
    rows = [
        UserProfiles(user_id=USER_ID, name="Ana", phone="111", role="USER"),
        UserProfiles(user_id=OTHER_USER_ID, name="Bruno", role="USER"),
        UserProfiles(user_id=ADMIN_ID, name="Carla", role="ADMIN"),
    ]
    db.add_all(rows)
    db.commit()
    return {p.user_id: p for p in rows}


@pytest.fixture
def make_reservation(db):
    def _make(court_id, date, start_time, end_time, user_id=USER_ID, status="ACTIVE"):
        obj = Reservations(
            user_id=user_id,
            court_id=court_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            status=status,
            penalty_applied=0,
        )
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    return _make
