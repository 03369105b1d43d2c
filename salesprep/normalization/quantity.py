"""Quantity clamping.

Out-of-range quantities are reset to 1 in both directions. Values above the
ceiling are not capped at the ceiling: an order for 99999 units is treated as
a data entry error, the same as an order for -5.
"""

import re
from typing import NamedTuple

from salesprep.exceptions import QuantityParseError

_INTEGER_RE = re.compile(r"^[+-]?\d+$")

MIN_QUANTITY = 1
DEFAULT_QUANTITY_CEILING = 100


class QuantityResult(NamedTuple):
    value: int
    was_adjusted: bool


def reset_out_of_range_quantity(value: int, ceiling: int = DEFAULT_QUANTITY_CEILING) -> QuantityResult:
    """Reset values <= 0 or > ceiling to 1; pass everything else through."""
    if value <= 0 or value > ceiling:
        return QuantityResult(MIN_QUANTITY, True)
    return QuantityResult(value, False)


def clamp_quantity(raw: str | None, ceiling: int = DEFAULT_QUANTITY_CEILING) -> QuantityResult:
    """Normalize a raw quantity string.

    Raises:
        QuantityParseError: when the value is present but not an integer.
    """
    if raw is None or not raw.strip():
        return QuantityResult(MIN_QUANTITY, True)
    text = raw.strip()
    if not _INTEGER_RE.match(text):
        raise QuantityParseError(raw, "not an integer")
    return reset_out_of_range_quantity(int(text), ceiling)
