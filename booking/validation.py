"""Slot validation shared by the booking client and the backend.

A slot is a (date, time) pair. It is bookable when the date falls Monday to
Friday and the time is on the hour between 08:00 and 20:00 inclusive.

The client and the backend apply the same rules but report them with their
own messages, so each side has its own validate function.
"""
import re
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from booking import config

TIME_PATTERN = re.compile(r"^([0-1]?\d|2[0-3]):([0-5]\d)$")

# Client-side messages
MSG_REQUIRED = "Completa los campos requeridos"
MSG_PAST = "No puedes agendar en el pasado"
MSG_WEEKDAY = "Solo se pueden agendar días de lunes a viernes"
MSG_SLOT = "Horas válidas: 08:00 - 20:00 en pasos de 1 hora (ej: 09:00)"

# Backend messages
API_MSG_REQUIRED = "Faltan campos requeridos"
API_MSG_DATE_FORMAT = "Formato de fecha inválido"
API_MSG_WEEKDAY = "Solo se permiten reservas de lunes a viernes"
API_MSG_TIME_FORMAT = "Formato de hora inválido"
API_MSG_MINUTE = "Las reservas deben empezar en punto (minutos = 00)"
API_MSG_HOUR = "Las reservas solo pueden ser entre 08:00 y 20:00"
API_MSG_PAST = MSG_PAST


class SlotValidationError(ValueError):
    """Raised when booking data breaks a slot rule.

    The message is meant to be shown to the user as is.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def parse_date(date_str: Any) -> Optional[date]:
    """Parse a YYYY-MM-DD string, returning None when it is not one."""
    if not isinstance(date_str, str):
        return None
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_time(time_str: Any) -> Optional[Tuple[int, int]]:
    """Parse an HH:MM string into (hour, minute), or None."""
    if not isinstance(time_str, str):
        return None
    match = TIME_PATTERN.match(time_str)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def is_weekday(date_str: Any) -> bool:
    parsed = parse_date(date_str)
    if parsed is None:
        return False
    return parsed.weekday() in config.OPERATING_HOURS["weekdays"]


def is_business_hour(hour: int) -> bool:
    return config.OPERATING_HOURS["first_hour"] <= hour <= config.OPERATING_HOURS["last_hour"]


def is_valid_slot(time_str: Any) -> bool:
    """Check that a time is on the hour and within business hours."""
    parsed = parse_time(time_str)
    if parsed is None:
        return False
    hour, minute = parsed
    return minute == 0 and is_business_hour(hour)


def slot_datetime(date_str: Any, time_str: Any) -> Optional[datetime]:
    """Combine date and time into a datetime, or None if either is malformed."""
    parsed_date = parse_date(date_str)
    parsed_time = parse_time(time_str)
    if parsed_date is None or parsed_time is None:
        return None
    hour, minute = parsed_time
    return datetime(parsed_date.year, parsed_date.month, parsed_date.day, hour, minute)


def is_in_past(date_str: Any, time_str: Any, now: Optional[datetime] = None) -> bool:
    start = slot_datetime(date_str, time_str)
    if start is None:
        return False
    return start < (now or datetime.now())


def validate_booking(data: Mapping[str, Any], now: Optional[datetime] = None) -> None:
    """
    Validate form data the way the booking client does.

    Args:
        data: Form fields (name, email, date, time, ...)
        now: Reference time for the past check (defaults to now)

    Raises:
        SlotValidationError: With the first rule that fails
    """
    if not all(data.get(field) for field in ("name", "email", "date", "time")):
        raise SlotValidationError(MSG_REQUIRED)
    if is_in_past(data["date"], data["time"], now):
        raise SlotValidationError(MSG_PAST)
    if not is_weekday(data["date"]):
        raise SlotValidationError(MSG_WEEKDAY)
    if not is_valid_slot(data["time"]):
        raise SlotValidationError(MSG_SLOT)


def validate_backend_booking(data: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Validate a create request body the way the backend does.

    Args:
        data: Decoded JSON body
        now: Reference time for the past check (defaults to now)

    Returns:
        The body, once every rule passed

    Raises:
        SlotValidationError: With the first rule that fails
    """
    required = ("name", "email", "date", "time", "service")
    if not isinstance(data, dict) or not all(
        isinstance(data.get(field), str) and data[field] for field in required
    ):
        raise SlotValidationError(API_MSG_REQUIRED)

    if parse_date(data["date"]) is None:
        raise SlotValidationError(API_MSG_DATE_FORMAT)
    if not is_weekday(data["date"]):
        raise SlotValidationError(API_MSG_WEEKDAY)

    parsed_time = parse_time(data["time"])
    if parsed_time is None:
        raise SlotValidationError(API_MSG_TIME_FORMAT)
    hour, minute = parsed_time
    if minute != 0:
        raise SlotValidationError(API_MSG_MINUTE)
    if not is_business_hour(hour):
        raise SlotValidationError(API_MSG_HOUR)

    if is_in_past(data["date"], data["time"], now):
        raise SlotValidationError(API_MSG_PAST)

    return data
