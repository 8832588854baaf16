import json
import logging
from types import SimpleNamespace

import redis

from courtbook.services import events
from courtbook.services.slots.policy import Identity


class BrokenRedis:
    def rpush(self, *args):
        raise redis.ConnectionError("connection refused")


def test_emit_event_pushes_json(fake_redis):
    events.emit_event("ping", {"value": 1})

    event = json.loads(fake_redis.lpop(events.EVENTS_QUEUE))
    assert event["type"] == "ping"
    assert event["value"] == 1
    assert isinstance(event["ts"], int)


def test_reservation_event_payload(fake_redis):
    reservation = SimpleNamespace(
        id=7, court_id=3, date="2026-10-21", start_time="10:00:00", status="ACTIVE"
    )

    events.emit_reservation_event("reservation_created", reservation, Identity("user-1"))

    event = json.loads(fake_redis.lpop(events.EVENTS_QUEUE))
    assert event["reservation_id"] == 7
    assert event["court_id"] == 3
    assert event["date"] == "2026-10-21"
    assert event["start_time"] == "10:00:00"
    assert event["initiated_by"] == {"user_id": "user-1", "role": "USER"}


def test_emit_failure_is_logged_not_raised(monkeypatch, caplog):
    monkeypatch.setattr(events, "redis_client", BrokenRedis())

    with caplog.at_level(logging.ERROR, logger=events.logger.name):
        events.emit_event("ping", {})

    assert "Failed to emit event ping" in caplog.text
