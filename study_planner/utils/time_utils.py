# study_planner/utils/time_utils.py
from datetime import datetime

import pytz


def to_utc(value: datetime) -> datetime:
    """
    Normalises a datetime to naive UTC for storage.
    Naive values are taken to already be UTC.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)


def parse_timestamp(raw: str) -> datetime:
    """
    Parses an ISO-8601 timestamp ("2024-06-01", "2024-06-01T00:00:00Z",
    "2024-06-01T05:30:00+05:30", "...T00:00:00.000Z").
    Raises ValueError on anything else.
    """
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))


def format_timestamp(value: datetime):
    if value is None:
        return None
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(pytz.utc).isoformat().replace("+00:00", "Z")
