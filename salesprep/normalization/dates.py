"""Date normalization by structural pattern.

Four shapes are recognized: ``MM/DD/YYYY``, ``DD-MM-YYYY``, ``YYYY/MM/DD``
and ``YYYY-MM-DD``. No locale information is used.

Slash dates with two leading digits are inherently ambiguous (``03/04/2024``
is 4 March in the US and 3 April elsewhere). :func:`resolve_slash_date` is the
single place that decides: a first group above 12 can only be a day, so the
value is read as ``DD/MM/YYYY``; otherwise the US reading ``MM/DD/YYYY`` wins.
This is a best-effort heuristic, not a correctness guarantee, and
:func:`is_ambiguous_slash_date` flags every input where both readings are
valid and different.
"""

import re
from datetime import date
from typing import NamedTuple

from salesprep.exceptions import DateFormatError
from salesprep.models.enums import DateShape

_SLASH_DAY_MONTH_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_DASH_DAY_MONTH_RE = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")
_ISO_SLASH_RE = re.compile(r"^(\d{4})/(\d{2})/(\d{2})$")
_ISO_DASH_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class DateResult(NamedTuple):
    value: date
    shape: DateShape
    was_ambiguous: bool


def classify_date(raw: str | None) -> DateShape:
    """Return the structural shape of a raw date string."""
    if raw is None:
        return DateShape.OTHER
    text = raw.strip()
    match = _SLASH_DAY_MONTH_RE.match(text)
    if match:
        return resolve_slash_date(int(match.group(1)), int(match.group(2)))[0]
    if _DASH_DAY_MONTH_RE.match(text):
        return DateShape.DAY_FIRST_DASH
    if _ISO_SLASH_RE.match(text):
        return DateShape.ISO_SLASH
    if _ISO_DASH_RE.match(text):
        return DateShape.ISO_DASH
    return DateShape.OTHER


def resolve_slash_date(first: int, second: int) -> tuple[DateShape, int, int]:
    """Decide month and day for a ``NN/NN/YYYY`` date.

    Returns (shape, month, day). A first group above 12 means day-first,
    anything else defaults to the US month-first convention.
    """
    if first > 12:
        return DateShape.DAY_FIRST_SLASH, second, first
    return DateShape.US_SLASH, first, second


def is_ambiguous_slash_date(raw: str | None) -> bool:
    """True when a slash date reads as two different valid calendar dates."""
    if raw is None:
        return False
    match = _SLASH_DAY_MONTH_RE.match(raw.strip())
    if not match:
        return False
    first, second = int(match.group(1)), int(match.group(2))
    return first != second and 1 <= first <= 12 and 1 <= second <= 12


def normalize_date(raw: str | None) -> DateResult:
    """Parse a raw date string into a calendar date.

    Raises:
        DateFormatError: for strings matching none of the four shapes or
            naming an impossible calendar date.
    """
    if raw is None or not raw.strip():
        raise DateFormatError(raw, "date is missing")
    text = raw.strip()

    if match := _SLASH_DAY_MONTH_RE.match(text):
        shape, month, day = resolve_slash_date(int(match.group(1)), int(match.group(2)))
        year = int(match.group(3))
    elif match := _DASH_DAY_MONTH_RE.match(text):
        shape = DateShape.DAY_FIRST_DASH
        day, month, year = int(match.group(1)), int(match.group(2)), int(match.group(3))
    elif match := _ISO_SLASH_RE.match(text):
        shape = DateShape.ISO_SLASH
        year, month, day = int(match.group(1)), int(match.group(2)), int(match.group(3))
    elif match := _ISO_DASH_RE.match(text):
        shape = DateShape.ISO_DASH
        year, month, day = int(match.group(1)), int(match.group(2)), int(match.group(3))
    else:
        raise DateFormatError(raw, "matches none of MM/DD/YYYY, DD-MM-YYYY, YYYY/MM/DD, YYYY-MM-DD")

    try:
        value = date(year, month, day)
    except ValueError as exc:
        raise DateFormatError(raw, str(exc)) from exc
    return DateResult(value, shape, is_ambiguous_slash_date(text))
