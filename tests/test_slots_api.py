import pytest

from courtbook.models import Courts, SportTypes

from .conftest import ADMIN_ID, OTHER_USER_ID, USER_ID, headers


def test_day_slots_for_weekday(client, court):
    response = client.get("/slots/day", params={"court_id": court.id, "date": "2026-10-21"})

    assert response.status_code == 200
    body = response.json()
    assert body["is_operating_day"] is True
    assert body["open_time"] == "07:00"
    assert body["close_time"] == "21:00"
    assert body["slot_step_minutes"] == 60
    assert len(body["all_slots"]) == 14
    assert body["available_slots"] == body["all_slots"]
    assert body["selectable_slots"] == body["all_slots"]


def test_day_slots_with_reservations(client, court, make_reservation):
    make_reservation(court.id, "2026-10-24", "10:00:00", "12:00:00", user_id=OTHER_USER_ID)
    make_reservation(court.id, "2026-10-24", "13:00:00", "14:00:00", status="CANCELLED")

    response = client.get(
        "/slots/day",
        params={"court_id": court.id, "date": "2026-10-24", "duration": 2},
    )

    body = response.json()
    assert body["all_slots"] == ["09:00", "10:00", "11:00", "12:00", "13:00"]
    assert body["available_slots"] == ["09:00", "12:00", "13:00"]
    assert body["selectable_slots"] == ["12:00"]
    assert body["duration"] == 2


def test_reservation_on_another_court_does_not_block(client, court, db, make_reservation):
    other = Courts(name="Cancha 2", sport_type_id=court.sport_type_id, price_per_hour=15.0, max_people=4)
    db.add(other)
    db.commit()
    make_reservation(other.id, "2026-10-25", "09:00:00", "12:00:00")

    body = client.get("/slots/day", params={"court_id": court.id, "date": "2026-10-25"}).json()
    assert body["available_slots"] == ["09:00", "10:00", "11:00"]


@pytest.mark.parametrize("duration", [0, 3])
def test_invalid_duration(client, court, duration):
    response = client.get(
        "/slots/day",
        params={"court_id": court.id, "date": "2026-10-21", "duration": duration},
    )
    assert response.status_code == 400


def test_inactive_court_has_no_slots(client, court, db):
    court.active = 0
    db.commit()

    response = client.get("/slots/day", params={"court_id": court.id, "date": "2026-10-21"})
    assert response.status_code == 404


def test_date_is_required(client, court):
    assert client.get("/slots/day", params={"court_id": court.id}).status_code == 422


# ── Courts catalog ───────────────────────────────────────────────────────


def test_courts_listing_hides_inactive(client, court, db):
    db.add(Courts(name="Vieja", sport_type_id=court.sport_type_id, price_per_hour=10.0, max_people=2, active=0))
    db.commit()

    names = [c["name"] for c in client.get("/courts/").json()]
    assert names == ["Cancha 1"]


def test_courts_grouped_by_sport(client, court, db):
    padel = SportTypes(name="Pádel", max_people=4)
    db.add(padel)
    db.commit()
    db.add(Courts(name="Pádel 1", sport_type_id=padel.id, price_per_hour=25.0, max_people=4))
    db.commit()

    groups = client.get("/courts/by_sport").json()
    assert [(g["sport_type"]["name"], [c["name"] for c in g["courts"]]) for g in groups] == [
        ("Tenis", ["Cancha 1"]),
        ("Pádel", ["Pádel 1"]),
    ]


def test_get_court(client, court):
    response = client.get(f"/courts/{court.id}")
    assert response.status_code == 200
    assert response.json()["active"] is True
    assert client.get("/courts/999").status_code == 404


def test_sport_types(client, sport_type, profiles):
    assert [s["name"] for s in client.get("/sport_types/").json()] == ["Tenis"]

    payload = {"name": "Fútbol", "max_people": 10}
    assert client.post("/sport_types/", json=payload, headers=headers(USER_ID)).status_code == 403
    assert client.post("/sport_types/", json=payload, headers=headers(ADMIN_ID)).status_code == 201
