from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..clock import Clock, get_clock
from ..errors import MissingQuery, ParseError, UnparseableInput
from ..resolver import resolve
from ..schemas import ErrorOut, ResolvedTimeOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["epoch"],
)

_error_responses = {400: {"model": ErrorOut, "description": "Input could not be resolved"}}


# PUBLIC_INTERFACE
@router.get(
    "/now",
    response_model=ResolvedTimeOut,
    summary="Current Time",
    description="Resolve the current instant.",
)
def get_now(clock: Clock = Depends(get_clock)) -> ResolvedTimeOut:
    """
    Return the current instant in every representation.
    """
    return ResolvedTimeOut.from_resolved(resolve(None, clock))


# PUBLIC_INTERFACE
@router.get(
    "/parse",
    response_model=ResolvedTimeOut,
    summary="Parse Timestamp",
    description=(
        "Resolve a Unix timestamp (seconds or milliseconds) or a date string.\n\n"
        "Numbers below 4102444800 (2100-01-01 in epoch seconds) are read as seconds, "
        "larger numbers as milliseconds. Anything else is parsed as a date string."
    ),
    responses=_error_responses,
)
def parse_query(
    q: Optional[str] = Query(None, description="Timestamp or date string to resolve"),
    clock: Clock = Depends(get_clock),
) -> ResolvedTimeOut:
    """
    Resolve the `q` query parameter.
    """
    if not q:
        raise MissingQuery()
    try:
        resolved = resolve(q, clock)
    except ParseError as exc:
        logger.debug("Unparseable query input %r", q)
        raise UnparseableInput.from_parse_error(exc) from exc
    return ResolvedTimeOut.from_resolved(resolved)


# PUBLIC_INTERFACE
@router.get(
    "/{input}",
    response_model=ResolvedTimeOut,
    summary="Parse Timestamp (shorthand)",
    description="Shorthand for /api/parse?q=<input>.",
    responses=_error_responses,
)
def parse_path(input: str, clock: Clock = Depends(get_clock)) -> ResolvedTimeOut:
    """
    Resolve the path segment after /api/.
    """
    try:
        resolved = resolve(input, clock)
    except ParseError as exc:
        logger.debug("Unparseable path input %r", input)
        raise UnparseableInput() from exc
    return ResolvedTimeOut.from_resolved(resolved)
