from datetime import datetime

import pytz

from .config import settings


def local_now() -> datetime:
    """Naive wall-clock time at the facility."""
    return datetime.now(pytz.timezone(settings.timezone)).replace(tzinfo=None)
