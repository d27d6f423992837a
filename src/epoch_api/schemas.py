from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .models import ResolvedTime


class DateFieldsOut(BaseModel):
    """
    UTC calendar breakdown of the resolved instant.
    """

    year: int = Field(..., description="Calendar year")
    month: int = Field(..., ge=1, le=12, description="Month of year, 1-12")
    day: int = Field(..., ge=1, le=31, description="Day of month, 1-31")
    hour: int = Field(..., ge=0, le=23, description="Hour, 0-23")
    minute: int = Field(..., ge=0, le=59, description="Minute, 0-59")
    second: int = Field(..., ge=0, le=59, description="Second, 0-59")


# PUBLIC_INTERFACE
class ResolvedTimeOut(BaseModel):
    """
    Schema returned by the API for a resolved instant.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "unix": 0,
                "unixMs": 0,
                "iso": "1970-01-01T00:00:00.000Z",
                "utc": "Thu, 01 Jan 1970 00:00:00 GMT",
                "relative": "56 years ago",
                "date": {"year": 1970, "month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0},
            }
        },
    )

    unix: int = Field(..., description="Seconds since the Unix epoch")
    unix_ms: int = Field(..., alias="unixMs", description="Milliseconds since the Unix epoch")
    iso: str = Field(..., description="ISO-8601 UTC string with millisecond precision")
    utc: str = Field(..., description="RFC-1123 UTC string")
    relative: str = Field(..., description="Offset from now, e.g. '3 minutes ago'")
    date: DateFieldsOut = Field(..., description="UTC calendar fields")

    @classmethod
    def from_resolved(cls, resolved: ResolvedTime) -> "ResolvedTimeOut":
        fields = resolved.calendar_fields
        return cls(
            unix=resolved.epoch_seconds,
            unix_ms=resolved.epoch_millis,
            iso=resolved.iso_string,
            utc=resolved.utc_string,
            relative=resolved.relative_description,
            date=DateFieldsOut(
                year=fields.year,
                month=fields.month,
                day=fields.day,
                hour=fields.hour,
                minute=fields.minute,
                second=fields.second,
            ),
        )


class ErrorOut(BaseModel):
    """
    Body of every 400 response.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"error": "Could not parse: not-a-date"}})

    error: str = Field(..., description="Human-readable error message")
