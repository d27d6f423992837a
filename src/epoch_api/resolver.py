"""
Timestamp resolution: turn an arbitrary input string into a ResolvedTime.

Numbers below SECONDS_CUTOFF (2100-01-01T00:00:00Z in epoch seconds) are read
as seconds, anything at or above it as milliseconds. Everything else goes
through the date-string parsers. Inputs that carry no UTC offset are taken
as UTC.

Instants are plain epoch milliseconds and may span +/-8.64e15 ms (about
+/-275,000 years), so calendar fields are computed with integer day
arithmetic rather than `datetime`, whose range stops at years 1-9999.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from email.utils import parsedate_to_datetime
from itertools import product
from typing import List, Optional, Tuple

from .clock import Clock
from .errors import ParseError
from .models import CalendarFields, ResolvedTime

SECONDS_CUTOFF = 4_102_444_800

MAX_INSTANT_MS = 8_640_000_000_000_000
MIN_INSTANT_MS = -MAX_INSTANT_MS

_DAY_MS = 86_400_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# The ISO form to_resolved_time produces, including the six-digit signed years used
# outside 0000-9999
_ISO_UTC_RE = re.compile(
    r"([+-]\d{6}|\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?Z",
    re.ASCII,
)
_FRACTION_RE = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)", re.ASCII)

_DATE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%Y/%m/%d",
    "%m/%d/%Y",
)
_TIME_FORMATS = ("", " %H:%M:%S", " %H:%M")
_TEXT_FORMATS = tuple(d + t for d, t in product(_DATE_FORMATS, _TIME_FORMATS))

_WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# (upper bound exclusive, unit size, unit name); month and year are fixed 30/365 days
_RELATIVE_UNITS: List[Tuple[Optional[int], int, str]] = [
    (60_000, 1_000, "second"),
    (3_600_000, 60_000, "minute"),
    (86_400_000, 3_600_000, "hour"),
    (2_592_000_000, 86_400_000, "day"),
    (31_536_000_000, 2_592_000_000, "month"),
    (None, 31_536_000_000, "year"),
]


def _in_range(ms: int) -> bool:
    return MIN_INSTANT_MS <= ms <= MAX_INSTANT_MS


def days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a proleptic Gregorian date (year 0 exists)."""
    if month <= 2:
        year -= 1
    era = year // 400
    yoe = year - era * 400
    doy = (153 * ((month + 9) % 12) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil: (year, month, day)."""
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def _days_in_month(year: int, month: int) -> int:
    if month == 2:
        leap = year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
        return 29 if leap else 28
    return 30 if month in (4, 6, 9, 11) else 31


def _parse_number(text: str) -> Optional[int]:
    """
    Epoch millis for a numeric input, None if the text is not a number.

    Raises OverflowError when the number is outside the instant range or
    beyond what decimal arithmetic can represent.
    """
    if not _NUMBER_RE.fullmatch(text):
        return None
    try:
        value = Decimal(text)
        # Bounds are checked before scaling so huge exponents cannot overflow
        if value < SECONDS_CUTOFF:
            if value < MIN_INSTANT_MS // 1000:
                raise OverflowError(text)
            return int(value * 1000)
        if value > MAX_INSTANT_MS:
            raise OverflowError(text)
        return int(value)
    except InvalidOperation as exc:
        raise OverflowError(text) from exc


def _parse_iso_utc(text: str) -> Optional[int]:
    match = _ISO_UTC_RE.fullmatch(text)
    if match is None:
        return None
    year_text, *parts, fraction = match.groups()
    if year_text == "-000000":
        return None
    year = int(year_text)
    month, day, hour, minute, second = (int(p) for p in parts)
    if not (1 <= month <= 12 and 1 <= day <= _days_in_month(year, month)):
        return None
    if hour > 23 or minute > 59 or second > 59:
        return None
    millis = int((fraction or "0")[:3].ljust(3, "0"))
    return (
        days_from_civil(year, month, day) * _DAY_MS
        + ((hour * 60 + minute) * 60 + second) * 1000
        + millis
    )


def _parse_iso(text: str) -> Optional[datetime]:
    candidate = text
    if candidate[-1:] in ("Z", "z"):
        candidate = candidate[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3- or 6-digit fractions
    candidate = _FRACTION_RE.sub(
        lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", candidate, count=1
    )
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def _parse_rfc2822(text: str) -> Optional[datetime]:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def _parse_text(text: str) -> Optional[datetime]:
    # Collapse runs of whitespace so "March  7,  2024" still matches
    normalized = " ".join(text.split())
    for fmt in _TEXT_FORMATS:
        try:
            return datetime.strptime(normalized, fmt)
        except ValueError:
            continue
    return None


def _parse_date_string(text: str) -> Optional[int]:
    ms = _parse_iso_utc(text)
    if ms is not None:
        return ms
    for parser in (_parse_iso, _parse_rfc2822, _parse_text):
        dt = parser(text)
        if dt is None:
            continue
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        delta = dt - _EPOCH
        return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000
    return None


# PUBLIC_INTERFACE
def parse_instant(text: str) -> int:
    """
    Parse `text` into epoch milliseconds.

    Rules, first match wins:
    1. A plain ASCII number (optionally signed, decimal, exponent allowed):
       seconds if below SECONDS_CUTOFF, else milliseconds. Fractional ms are
       truncated.
    2. ISO-8601 (including signed six-digit years), then RFC-2822/RFC-1123,
       then a table of common textual formats.

    Raises:
        ParseError: nothing matched, or the instant falls outside
            MIN_INSTANT_MS..MAX_INSTANT_MS.
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError(text)

    try:
        ms = _parse_number(stripped)
    except OverflowError as exc:
        raise ParseError(text) from exc
    if ms is None:
        ms = _parse_date_string(stripped)
    if ms is None or not _in_range(ms):
        raise ParseError(text)
    return ms


# PUBLIC_INTERFACE
def describe_relative(instant_ms: int, now_ms: int) -> str:
    """Render the offset between `instant_ms` and `now_ms`, e.g. '2 hours from now'."""
    diff = now_ms - instant_ms
    future = diff < 0
    magnitude = abs(diff)
    size, unit = next(
        (size, unit) for bound, size, unit in _RELATIVE_UNITS if bound is None or magnitude < bound
    )
    count = magnitude // size
    suffix = "" if count == 1 else "s"
    direction = "from now" if future else "ago"
    return f"{count} {unit}{suffix} {direction}"


def _iso_year(year: int) -> str:
    if 0 <= year <= 9999:
        return f"{year:04d}"
    return f"{'-' if year < 0 else '+'}{abs(year):06d}"


def _utc_year(year: int) -> str:
    return f"{'-' if year < 0 else ''}{abs(year):04d}"


# PUBLIC_INTERFACE
def to_resolved_time(instant_ms: int, now_ms: int) -> ResolvedTime:
    """Build every representation of `instant_ms`, relative to `now_ms`."""
    days, day_ms = divmod(instant_ms, _DAY_MS)
    year, month, day = civil_from_days(days)
    hour, rest = divmod(day_ms, 3_600_000)
    minute, rest = divmod(rest, 60_000)
    second, millis = divmod(rest, 1000)
    clock_text = f"{hour:02d}:{minute:02d}:{second:02d}"
    # 1970-01-01 was a Thursday
    weekday = _WEEKDAYS[(days + 4) % 7]
    return ResolvedTime(
        epoch_seconds=instant_ms // 1000,
        epoch_millis=instant_ms,
        iso_string=f"{_iso_year(year)}-{month:02d}-{day:02d}T{clock_text}.{millis:03d}Z",
        utc_string=f"{weekday}, {day:02d} {_MONTHS[month - 1]} {_utc_year(year)} {clock_text} GMT",
        relative_description=describe_relative(instant_ms, now_ms),
        calendar_fields=CalendarFields(
            year=year,
            month=month,
            day=day,
            hour=hour,
            minute=minute,
            second=second,
        ),
    )


# PUBLIC_INTERFACE
def resolve(text: Optional[str], clock: Clock) -> ResolvedTime:
    """
    Resolve `text` (None meaning "now") against the given clock.

    The clock is read exactly once so the instant and the relative
    description agree on what "now" is.
    """
    now_ms = clock.now_ms()
    instant_ms = now_ms if text is None else parse_instant(text)
    return to_resolved_time(instant_ms, now_ms)
