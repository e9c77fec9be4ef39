"""LOG value grammar and date validation."""

import re
from datetime import date

from supercommit.errors import CalendarError, FormatError

_DECIMAL_HOURS = re.compile(r"^([0-9]+(?:\.[0-9]+)?)h$", re.IGNORECASE)
_HOURS_MINUTES = re.compile(r"^([0-9]+):([0-9]{1,2})$")
_MINUTES = re.compile(r"^([0-9]+)m$", re.IGNORECASE)
_ISO_DATE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

_CALENDAR_MSG = "LOG date must be a valid calendar date (yyyy-mm-dd)."


def parse_duration(text: str) -> float:
    """Convert ``2h``, ``1.5h``, ``1:30`` or ``90m`` to fractional hours.

    Forms are tried in that order and the first match wins. The result is
    always strictly positive.
    """
    if m := _DECIMAL_HOURS.match(text):
        hours = float(m.group(1))
    elif m := _HOURS_MINUTES.match(text):
        minutes = int(m.group(2))
        if minutes >= 60:
            raise FormatError("LOG minutes must be < 60 for h:mm.")
        hours = int(m.group(1)) + minutes / 60
    elif m := _MINUTES.match(text):
        hours = int(m.group(1)) / 60
    else:
        raise FormatError("LOG must be 2h@YYYY-MM-DD, 1.5h, 1:30, or 90m.")

    if not hours > 0:
        raise FormatError("LOG hours must be a positive number.")
    return hours


def validate_date(text: str) -> str:
    """Check text is yyyy-mm-dd and a real day; return it unchanged.

    Pattern failures are FormatError, impossible days (2025-02-30) are CalendarError.
    Years below 100 are CalendarError too.
    """
    m = _ISO_DATE.fullmatch(text)
    if not m:
        raise FormatError("date must be yyyy-mm-dd.")
    year, month, day = (int(g) for g in m.groups())
    try:
        date(year, month, day)
    except ValueError:
        raise CalendarError(_CALENDAR_MSG) from None
    if year < 100:
        raise CalendarError(_CALENDAR_MSG)
    return text


def split_log_value(raw: str) -> tuple[str, str | None]:
    """Split ``2h@2025-10-06`` into ("2h", "2025-10-06").

    The time part is left untouched, the date part is trimmed. A bare ``@``
    yields no date.
    """
    time_part, sep, date_part = raw.partition("@")
    if not sep:
        return raw, None
    return time_part, date_part.strip() or None


def parse_log(raw: str, fallback_date: str | None = None) -> tuple[float, str | None]:
    """Parse a LOG value into (hours, date).

    The inline ``@date`` wins over fallback_date (the standalone DATE token).
    Both go through validate_date.
    """
    time_part, inline_date = split_log_value(raw)
    hours = parse_duration(time_part)
    chosen = inline_date or fallback_date
    return hours, validate_date(chosen) if chosen else None
