"""Shared date parsing and formatting utilities."""

import re
from datetime import date, datetime, timezone
from typing import Optional

MONTHS_ES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

# Matches es-ES short weekday names, Monday first
WEEKDAYS_SHORT_ES = ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_datetime(value) -> Optional[datetime]:
    """Coerce a stored timestamp into an aware UTC datetime.

    Accepts datetime/date objects, ISO-8601 strings, epoch seconds or
    milliseconds, and document-store timestamps ({"seconds": ...} or the
    admin export form {"_seconds": ...}). Naive values are taken as UTC.
    Returns None for anything unparseable.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            return None
        try:
            return datetime.fromtimestamp(float(seconds), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            return None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # Values this large are milliseconds
        seconds = value / 1000 if abs(value) > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    elif isinstance(value, str):
        dt = parse_iso(value)
        if dt is None:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso(text: str) -> Optional[datetime]:
    """Parse ISO-8601 text, including a trailing 'Z' and millisecond fractions."""
    text = text.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    formats = [
        "%Y-%m-%d",
        "%Y-%m-%dT%H:%M",
        "%Y-%m-%d %H:%M",
        "%d/%m/%Y",
    ]
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def normalize_offset(offset: Optional[str]) -> Optional[str]:
    """Turn '-03', '-0300' or '-03:00' into '-03:00'."""
    if not offset:
        return None
    offset = offset.strip()
    match = re.fullmatch(r"([+-])(\d{1,2}):?(\d{2})?", offset)
    if not match:
        return None
    sign, hours, minutes = match.groups()
    return f"{sign}{int(hours):02d}:{minutes or '00'}"


def format_with_offset(
    date_text: Optional[str],
    time_text: Optional[str] = None,
    offset: Optional[str] = None,
) -> Optional[str]:
    """Combine a stored date, an optional HH:MM time and a UTC offset.

    The date and time are wall-clock values at the given offset, so
    ("2025-03-15", "20:00", "-03:00") gives "2025-03-15T20:00:00-03:00".
    Without an offset the result is a local ISO timestamp with no zone.
    """
    if not date_text:
        return date_text

    parsed = parse_iso(str(date_text))
    if parsed is None:
        return date_text

    hour, minute = parsed.hour, parsed.minute
    if time_text:
        match = re.match(r"^\s*(\d{1,2}):(\d{2})", time_text)
        if match:
            hour, minute = int(match.group(1)), int(match.group(2))

    local = datetime(parsed.year, parsed.month, parsed.day, hour, minute)
    stamp = local.strftime("%Y-%m-%dT%H:%M:%S")
    normalized = normalize_offset(offset)
    return stamp + normalized if normalized else stamp


def format_day_month_es(d: date) -> str:
    """'15 de marzo', as es-CL renders day + long month."""
    return f"{d.day} de {MONTHS_ES[d.month - 1]}"


def short_weekday_es(d: date) -> str:
    return WEEKDAYS_SHORT_ES[d.weekday()]
