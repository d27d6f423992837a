from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CalendarFields:
    """UTC calendar breakdown of an instant (month is 1-12)."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class ResolvedTime:
    """
    One instant rendered several ways. Built fresh for every request.

    Fields:
    - epoch_seconds: whole seconds since the Unix epoch (floor of epoch_millis / 1000)
    - epoch_millis: milliseconds since the Unix epoch
    - iso_string: ISO-8601 in UTC with millisecond precision, e.g. '1970-01-01T00:00:00.000Z'
    - utc_string: RFC-1123 form, e.g. 'Thu, 01 Jan 1970 00:00:00 GMT'
    - relative_description: offset from "now" at evaluation time, e.g. '3 minutes ago'
    - calendar_fields: UTC year/month/day/hour/minute/second

    Every field except relative_description is a pure function of epoch_millis.
    """

    epoch_seconds: int
    epoch_millis: int
    iso_string: str
    utc_string: str
    relative_description: str
    calendar_fields: CalendarFields
