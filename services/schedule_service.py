from datetime import timedelta

from services.exceptions import InvalidRangeError, InvalidWeekdayError, ValidationError
from utils.dates import to_day

# Monday == 0, matching date.weekday()
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_WEEKDAY_LOOKUP = {}
for _index, _name in enumerate(WEEKDAYS):
    _WEEKDAY_LOOKUP[_name.lower()] = _index
    _WEEKDAY_LOOKUP[_name[:3].lower()] = _index


def normalize_weekday(day_of_week):
    """Return the canonical weekday name, e.g. "mon" -> "Monday"."""
    return WEEKDAYS[weekday_index(day_of_week)]


def weekday_index(day_of_week):
    key = str(day_of_week or "").strip().lower()
    if key not in _WEEKDAY_LOOKUP:
        raise InvalidWeekdayError(f"Unrecognised day of week: {day_of_week!r}")
    return _WEEKDAY_LOOKUP[key]


def parse_day(value, field="date"):
    try:
        return to_day(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r}")


def generate_dates(start_date, end_date, day_of_week):
    """Every calendar day in [start_date, end_date] that falls on day_of_week.

    Dates are compared as UTC calendar days. An empty list is a valid result
    when the range is shorter than a week and misses the weekday.
    """
    target = weekday_index(day_of_week)
    start = parse_day(start_date, "start_date")
    end = parse_day(end_date, "end_date")

    if start > end:
        raise InvalidRangeError(
            f"start_date {start.isoformat()} is after end_date {end.isoformat()}"
        )

    # Jump straight to the first matching day, then step a week at a time
    current = start + timedelta(days=(target - start.weekday()) % 7)
    dates = []
    while current <= end:
        dates.append(current)
        current += timedelta(days=7)
    return dates