from __future__ import annotations

from typing import Optional


class ParseError(ValueError):
    """Raised when an input string matches none of the timestamp/date forms."""

    def __init__(self, input: str) -> None:
        super().__init__(f"Could not parse: {input}")
        self.input = input


# PUBLIC_INTERFACE
class ApiError(Exception):
    """
    Base class for errors surfaced to API clients as `{"error": message}`.

    All of them are client errors; malformed input is never a server fault.
    """

    status_code: int = 400
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingQuery(ApiError):
    message = "Missing ?q= parameter"


class UnparseableInput(ApiError):
    message = "Could not parse input"

    @classmethod
    def from_parse_error(cls, exc: ParseError) -> "UnparseableInput":
        return cls(str(exc))
