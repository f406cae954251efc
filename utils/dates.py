from datetime import date, datetime, timezone


def to_day(value):
    """Reduce a date, datetime or ISO string to a UTC calendar day.

    Aware datetimes are converted to UTC before the time of day is dropped;
    naive ones are taken to be UTC already.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValueError("empty date")
        if len(raw) == 10:
            return date.fromisoformat(raw)
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return to_day(datetime.fromisoformat(raw))
    raise ValueError(f"unsupported date value: {value!r}")


def utcnow():
    # Naive UTC, the way DateTime columns store it
    return datetime.now(timezone.utc).replace(tzinfo=None)
