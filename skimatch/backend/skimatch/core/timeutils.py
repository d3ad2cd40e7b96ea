"""Wall-clock time and calendar helpers.

Times travel through the system as zero-padded ``HH:MM`` strings and dates as
:class:`datetime.date`, so both compare correctly as strings (``YYYY-MM-DD``)
and as values. No timezone is ever attached.
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import NamedTuple

from .constants import (
    TIME_OPTIONS_END_HOUR,
    TIME_OPTIONS_START_HOUR,
    TIME_OPTIONS_STEP_MINUTES,
)
from .errors import ValidationError

_TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")
_DISPLAY_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2}) *([AaPp][Mm])$")
_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class TimeOfDay(NamedTuple):
    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def parse_time(value: str) -> TimeOfDay:
    if not isinstance(value, str):
        raise ValidationError(f"Invalid time: {value!r}")
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValidationError(f"Invalid time: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValidationError(f"Invalid time: {value!r}")
    return TimeOfDay(hour, minute)


def normalize_time(value: str) -> str:
    """Return ``value`` as a zero-padded ``HH:MM`` string."""
    return str(parse_time(value))


def to_minutes(value: str | TimeOfDay) -> int:
    time = value if isinstance(value, TimeOfDay) else parse_time(value)
    return time.hour * 60 + time.minute


def intervals_overlap(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    # Half-open: touching at a boundary is not an overlap.
    return to_minutes(a_start) < to_minutes(b_end) and to_minutes(b_start) < to_minutes(a_end)


def format_display(value: str | TimeOfDay) -> str:
    time = value if isinstance(value, TimeOfDay) else parse_time(value)
    suffix = "PM" if time.hour >= 12 else "AM"
    display_hour = time.hour % 12 or 12
    return f"{display_hour}:{time.minute:02d} {suffix}"


def to_24_hour(value: str) -> str:
    """Convert a ``h:mm AM/PM`` picker value into ``HH:MM``."""
    match = _DISPLAY_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValidationError(f"Invalid 12-hour time: {value!r}")
    hour, minute, modifier = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if not 1 <= hour <= 12 or minute > 59:
        raise ValidationError(f"Invalid 12-hour time: {value!r}")
    if hour == 12:
        hour = 0
    if modifier == "PM":
        hour += 12
    return f"{hour:02d}:{minute:02d}"


def time_options(
    start_hour: int = TIME_OPTIONS_START_HOUR,
    end_hour: int = TIME_OPTIONS_END_HOUR,
    step_minutes: int = TIME_OPTIONS_STEP_MINUTES,
) -> list[str]:
    """12-hour labels offered by the start/end time pickers."""
    if step_minutes <= 0 or 60 % step_minutes:
        raise ValidationError("step_minutes must divide an hour")
    options = []
    for hour in range(start_hour, end_hour + 1):
        for minute in range(0, 60, step_minutes):
            options.append(format_display(TimeOfDay(hour, minute)))
    return options


def js_weekday(day: date) -> int:
    """Weekday with Sunday as 0, matching ``day_of_week`` on rules."""
    return (day.weekday() + 1) % 7


def parse_date(value: str | date) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise ValidationError(f"Invalid date: {value!r}")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def format_date_display(day: date) -> str:
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def format_short_date(day: date) -> str:
    return f"{day:%a}, {day:%b} {day.day}"
