"""Weekly lab rubric: Pr, PE, P, R, C and their total T.

Only the rubric is stored. Older clients send and expect a single ``marks``
value; that maps onto ``T`` in both directions.
"""
from services.exceptions import ValidationError

COMPONENT_LIMITS = {
    "Pr": 5,   # preparation
    "PE": 5,   # program execution
    "P": 10,   # viva / questions
    "R": 5,    # record
    "C": 5,    # regularity
}
TOTAL_LIMIT = 30
COMPONENTS = tuple(COMPONENT_LIMITS)
FIELDS = COMPONENTS + ("T",)

# Rubric key -> WeekEntry column
COLUMNS = {"Pr": "pr", "PE": "pe", "P": "p", "R": "r", "C": "c", "T": "total"}


def _number(value, field, limit):
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if number != number or not 0 <= number <= limit:
        raise ValidationError(f"{field} must be between 0 and {limit}")
    return number


def _supplied(value):
    return value is not None and not (isinstance(value, str) and not value.strip())


def legacy_to_rubric(marks):
    return {"T": marks}


def parse_mark_fields(payload):
    """Validate the mark fields of one submission row.

    Returns only the fields that were supplied. A legacy ``marks`` value is
    read as an explicit total; an explicit ``T`` beats it.
    """
    payload = dict(payload or {})
    if _supplied(payload.get("marks")) and not _supplied(payload.get("T")):
        payload.update(legacy_to_rubric(payload["marks"]))

    fields = {}
    for key, limit in COMPONENT_LIMITS.items():
        if _supplied(payload.get(key)):
            fields[key] = _number(payload[key], key, limit)
    if _supplied(payload.get("T")):
        fields["T"] = _number(payload["T"], "T", TOTAL_LIMIT)

    if not fields:
        raise ValidationError("No marks supplied")
    return fields


def compute_total(components, explicit_total=None):
    """T is the sum of the components present, unless given explicitly."""
    if explicit_total is not None:
        return explicit_total
    present = [components.get(key) for key in COMPONENTS]
    if all(value is None for value in present):
        return None
    return sum(value or 0 for value in present)


def display_number(value):
    if value is None:
        return None
    if float(value).is_integer():
        return int(value)
    return round(float(value), 2)


def rubric_view(fields):
    """Rubric fields plus the ``marks`` alias older readers expect."""
    view = {key: display_number(fields.get(key)) for key in FIELDS}
    marks = display_number(fields.get("marks"))
    if view["T"] is None:
        view["T"] = marks
    view["marks"] = marks if marks is not None else view["T"]
    return view
