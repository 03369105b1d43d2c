"""Amount normalization: symbol/separator cleanup, currency detection, USD conversion."""

import logging
import re
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import NamedTuple

from salesprep.exceptions import AmountParseError

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"
CENTS = Decimal("0.01")

SYMBOL_CURRENCIES: dict[str, str] = {
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
}

_SYMBOLS_RE = re.compile(r"[$€£¥]")
_PARENTHESIZED_RE = re.compile(r"^\((.*)\)$")
# 1234,56 -> 1234.56
_DECIMAL_COMMA_RE = re.compile(r"^-?\d+,\d{1,2}$")
# 1.234,56 -> 1234.56
_GROUPED_DECIMAL_COMMA_RE = re.compile(r"^-?\d{1,3}(\.\d{3})+,\d{1,2}$")


class AmountResult(NamedTuple):
    amount_usd: Decimal
    currency_detected: str
    was_converted: bool


def detect_currency(raw_amount: str | None, currency: str | None) -> str:
    """Resolve the currency of an amount.

    Priority: a leading currency symbol, then a non-empty currency field
    (upper-cased), then USD.
    """
    if raw_amount:
        head = raw_amount.strip().lstrip("(-+").lstrip()
        if head and head[0] in SYMBOL_CURRENCIES:
            return SYMBOL_CURRENCIES[head[0]]
    if currency is not None:
        code = currency.strip().upper()
        if code and code != "NULL":
            return code
    return DEFAULT_CURRENCY


def clean_amount_text(raw: str) -> str:
    """Strip symbols and separators so the text is a plain decimal literal."""
    text = _SYMBOLS_RE.sub("", raw).strip()

    match = _PARENTHESIZED_RE.match(text)
    if match:
        text = "-" + match.group(1).strip()

    if _GROUPED_DECIMAL_COMMA_RE.match(text):
        text = text.replace(".", "").replace(",", ".")
    elif _DECIMAL_COMMA_RE.match(text):
        text = text.replace(",", ".")
    else:
        text = text.replace(",", "")
    return text.strip()


def parse_amount(raw: str | None) -> Decimal:
    """Parse a raw amount string into a Decimal with two fraction digits."""
    if raw is None:
        raise AmountParseError(raw, "amount is missing")
    cleaned = clean_amount_text(raw)
    if not cleaned:
        raise AmountParseError(raw, "amount is empty")
    try:
        value = Decimal(cleaned)
        if not value.is_finite():
            raise AmountParseError(raw, "amount is not a finite number")
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise AmountParseError(raw, f"{cleaned!r} is not a valid decimal") from exc


def convert_to_usd(value: Decimal, currency: str, rates: Mapping[str, Decimal]) -> tuple[Decimal, bool]:
    """Convert ``value`` to USD with a fixed rate table.

    Unknown currency codes pass through unconverted.
    """
    rate = rates.get(currency)
    if rate is None:
        logger.debug("No exchange rate for %s; amount left unconverted", currency)
        return value, False
    converted = (value * rate).quantize(CENTS, rounding=ROUND_HALF_UP)
    return converted, rate != 1


def normalize_amount(
    raw_amount: str | None,
    currency: str | None,
    rates: Mapping[str, Decimal],
) -> AmountResult:
    """Normalize a raw amount into (amount_usd, currency_detected).

    Raises:
        AmountParseError: if the cleaned string is not a valid decimal.
    """
    code = detect_currency(raw_amount, currency)
    value = parse_amount(raw_amount)
    amount_usd, converted = convert_to_usd(value, code, rates)
    return AmountResult(amount_usd, code, converted)
