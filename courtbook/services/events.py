"""
courtbook/services/events.py

Event emitter: pushes reservation lifecycle events to a Redis list
for notification consumers.
"""

import json
import time
import logging

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

EVENTS_QUEUE = "events:p2p"


def emit_event(event_type: str, payload: dict) -> None:
    """
    Emit an event (instant delivery).

    Pushed to Redis list `events:p2p`. Failures are logged, never raised.
    """
    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis_client.rpush(EVENTS_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {EVENTS_QUEUE}")
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")


def emit_reservation_event(event_type: str, reservation, actor) -> None:
    emit_event(event_type, {
        "reservation_id": reservation.id,
        "court_id": reservation.court_id,
        "date": reservation.date,
        "start_time": reservation.start_time,
        "status": reservation.status,
        "initiated_by": {
            "user_id": actor.user_id,
            "role": actor.role,
        },
    })
