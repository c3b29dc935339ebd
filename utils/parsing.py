from datetime import date, time

from services.errors import ValidationError


def parse_date(value, field="date"):
    # Expect ISO format like "2026-01-20"
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}. Use YYYY-MM-DD")


def parse_time(value, field):
    # Expect "HH:MM" or "HH:MM:SS", local wall-clock time
    if value is None or value == "":
        return None
    try:
        parsed = time.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}. Use HH:MM")
    # naive and offset-aware times cannot be compared
    if parsed.tzinfo is not None:
        raise ValidationError(f"Invalid {field}. Use HH:MM without a UTC offset")
    return parsed


def parse_int(value, field):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")
