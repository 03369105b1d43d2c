"""Exploratory profiling of a raw batch, run before any cleaning.

Surfaces the issues the normalizers exist to fix: duplicate submissions,
missing values, mixed date and amount formats, country spelling variants.
"""

import re
from collections import Counter
from collections.abc import Sequence

from salesprep.models.enums import AmountFormat
from salesprep.models.records import RawRecord
from salesprep.models.reports import DuplicateVariation, RawProfile
from salesprep.normalization.dates import classify_date

_CLEAN_NUMERIC_RE = re.compile(r"^[0-9.]+$")
_NEGATIVE_INT_RE = re.compile(r"^-\d+$")
_INT_RE = re.compile(r"^[+-]?\d+$")

_SYMBOL_FORMATS = {
    "$": AmountFormat.USD_SYMBOL,
    "€": AmountFormat.EUR_SYMBOL,
    "£": AmountFormat.GBP_SYMBOL,
    "¥": AmountFormat.JPY_SYMBOL,
}


def classify_amount(raw: str | None) -> AmountFormat:
    """Bucket a raw amount string by its most visible formatting trait."""
    if raw is None:
        return AmountFormat.OTHER
    text = raw.strip()
    if text[:1] in _SYMBOL_FORMATS:
        return _SYMBOL_FORMATS[text[:1]]
    if "," in text:
        return AmountFormat.CONTAINS_COMMA
    if text.startswith("("):
        return AmountFormat.PARENTHESES
    if _CLEAN_NUMERIC_RE.match(text):
        return AmountFormat.CLEAN_NUMERIC
    return AmountFormat.OTHER


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class RawProfiler:
    """Computes a RawProfile for a batch of raw records."""

    def profile(self, raw_records: Sequence[RawRecord]) -> RawProfile:
        total = len(raw_records)
        unique = len({r.transaction_id for r in raw_records})

        quantities = [(r.quantity or "").strip() for r in raw_records]
        date_formats = Counter(classify_date(r.order_date).value for r in raw_records)
        amount_formats = Counter(classify_amount(r.amount).value for r in raw_records)
        currencies = Counter(
            "(none)" if _blank(r.currency) else r.currency.strip() for r in raw_records
        )

        return RawProfile(
            total_records=total,
            unique_transactions=unique,
            duplicate_records=total - unique,
            missing_emails=sum(
                1 for r in raw_records
                if _blank(r.customer_email) or r.customer_email.strip() == "NULL"
            ),
            missing_currency=sum(1 for r in raw_records if _blank(r.currency)),
            missing_category=sum(1 for r in raw_records if _blank(r.category)),
            negative_quantities=sum(1 for q in quantities if _NEGATIVE_INT_RE.match(q)),
            zero_quantities=sum(1 for q in quantities if q == "0"),
            non_numeric_quantities=sum(1 for q in quantities if q and not _INT_RE.match(q)),
            date_formats=dict(date_formats.most_common()),
            amount_formats=dict(amount_formats.most_common()),
            currencies=dict(currencies.most_common()),
            country_variations=self._country_variations(raw_records),
            duplicate_groups=self._duplicate_groups(raw_records),
        )

    @staticmethod
    def _country_variations(raw_records: Sequence[RawRecord]) -> dict[str, list[str]]:
        spellings: dict[str, set[str]] = {}
        for record in raw_records:
            if _blank(record.ship_country):
                continue
            spellings.setdefault(record.ship_country.strip().upper(), set()).add(record.ship_country)
        return {
            key: sorted(values)
            for key, values in sorted(spellings.items())
            if len(values) > 1
        }

    @staticmethod
    def _duplicate_groups(raw_records: Sequence[RawRecord]) -> list[DuplicateVariation]:
        groups: dict[str, list[RawRecord]] = {}
        for record in raw_records:
            groups.setdefault(record.transaction_id, []).append(record)

        variations = [
            DuplicateVariation(
                transaction_id=transaction_id,
                duplicate_count=len(members),
                email_variations=sorted({m.customer_email for m in members if m.customer_email}),
                amount_variations=sorted({m.amount for m in members if m.amount}),
                date_variations=sorted({m.order_date for m in members if m.order_date}),
            )
            for transaction_id, members in groups.items()
            if len(members) > 1
        ]
        variations.sort(key=lambda v: (-v.duplicate_count, v.transaction_id))
        return variations

