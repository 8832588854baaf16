import pytest

from courtbook import init_admin
from courtbook.models import SportTypes, UserProfiles


def test_seed_sport_types_is_idempotent(db):
    assert init_admin.seed_sport_types(db) == 3
    assert init_admin.seed_sport_types(db) == 0
    assert db.query(SportTypes).count() == 3


def test_seed_keeps_existing_sport_types(db, sport_type):
    assert init_admin.seed_sport_types(db) == 2


def test_ensure_admin_creates_profile(db):
    profile = init_admin.ensure_admin(db, "boss", "Boss", "123")

    assert profile.role == "ADMIN"
    assert profile.phone == "123"


def test_ensure_admin_promotes_existing_user(db, profiles):
    profile = init_admin.ensure_admin(db, "user-1", "Ignored")

    assert profile.role == "ADMIN"
    assert profile.name == "Ana"
    assert db.query(UserProfiles).filter(UserProfiles.user_id == "user-1").count() == 1


def test_main_requires_admin_user_id(monkeypatch):
    monkeypatch.setattr(init_admin, "load_dotenv", lambda: None)
    monkeypatch.delenv("ADMIN_USER_ID", raising=False)

    with pytest.raises(RuntimeError, match="ADMIN_USER_ID"):
        init_admin.main()


def test_main_bootstraps_store(monkeypatch, engine, session_factory):
    monkeypatch.setattr(init_admin, "load_dotenv", lambda: None)
    monkeypatch.setattr(init_admin, "init_db", lambda: None)
    monkeypatch.setattr(init_admin, "SessionLocal", session_factory)
    monkeypatch.setenv("ADMIN_USER_ID", "boss")
    monkeypatch.setenv("ADMIN_NAME", "Boss")

    init_admin.main()

    db = session_factory()
    try:
        assert db.query(SportTypes).count() == 3
        assert db.query(UserProfiles).filter(UserProfiles.user_id == "boss").one().role == "ADMIN"
    finally:
        db.close()
