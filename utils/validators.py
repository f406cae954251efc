from services.exceptions import ValidationError


def required(value, field):
    value = str(value).strip() if value is not None else ""
    if not value:
        raise ValidationError(f"{field} is required")
    return value


def parse_semester(value):
    try:
        semester = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid semester: {value!r}")
    if not 1 <= semester <= 8:
        raise ValidationError(f"Invalid semester: {value!r}")
    return semester


def parse_id(value, field):
    """Accept an int or a digit-only string; anything else is rejected, never truncated."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError(f"Invalid {field}: {value!r}")
