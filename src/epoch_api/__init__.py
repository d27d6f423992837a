"""
Epoch API package.

Converts between human-readable dates and Unix epoch timestamps. The HTTP
app lives in `epoch_api.main`; the resolver can be used on its own.
"""

from .errors import ParseError
from .models import CalendarFields, ResolvedTime
from .resolver import resolve

__all__ = ["CalendarFields", "ParseError", "ResolvedTime", "resolve"]
