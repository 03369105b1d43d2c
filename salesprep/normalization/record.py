"""Record normalization: apply every field normalizer to one raw record."""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from salesprep.config import EngineConfig
from salesprep.exceptions import FieldParseError
from salesprep.models.records import NormalizedRecord, RawRecord
from salesprep.normalization.amount import detect_currency, normalize_amount
from salesprep.normalization.category import normalize_category
from salesprep.normalization.country import normalize_country
from salesprep.normalization.dates import normalize_date
from salesprep.normalization.email import repair_email
from salesprep.normalization.quantity import clamp_quantity

logger = logging.getLogger(__name__)


class RecordNormalizer:
    """Turns RawRecords into NormalizedRecord candidates.

    A record is never discarded here. When a field fails to parse, its typed
    value is left as None and the raw text is kept in ``unparsed``.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()

    def normalize_all(self, raw_records: Sequence[RawRecord]) -> list[NormalizedRecord]:
        """Normalize a batch, numbering records from 1 in input order."""
        return [self.normalize(raw, row) for row, raw in enumerate(raw_records, start=1)]

    def normalize(self, raw: RawRecord, source_row: int) -> NormalizedRecord:
        unparsed: dict[str, str | None] = {}

        amount_usd: Decimal | None = None
        converted = False
        try:
            amount = normalize_amount(raw.amount, raw.currency, self.config.exchange_rates)
            amount_usd, currency = amount.amount_usd, amount.currency_detected
            converted = amount.was_converted
        except FieldParseError as exc:
            self._mark_unparsed(unparsed, exc, raw, source_row)
            currency = detect_currency(raw.amount, raw.currency)

        order_date: date | None = None
        ambiguous = False
        try:
            parsed_date = normalize_date(raw.order_date)
            order_date, ambiguous = parsed_date.value, parsed_date.was_ambiguous
        except FieldParseError as exc:
            self._mark_unparsed(unparsed, exc, raw, source_row)

        quantity: int | None = None
        quantity_adjusted = False
        try:
            parsed_quantity = clamp_quantity(raw.quantity, self.config.quantity_ceiling)
            quantity, quantity_adjusted = parsed_quantity.value, parsed_quantity.was_adjusted
        except FieldParseError as exc:
            self._mark_unparsed(unparsed, exc, raw, source_row)

        email = repair_email(raw.customer_email, raw.customer_id)

        return NormalizedRecord(
            source_row=source_row,
            transaction_id=raw.transaction_id,
            customer_id=raw.customer_id,
            customer_email=email.email,
            product_sku=raw.product_sku,
            quantity=quantity,
            amount_usd=amount_usd,
            currency_detected=currency,
            order_date=order_date,
            ship_country=normalize_country(raw.ship_country, self.config.country_synonyms),
            payment_method=raw.payment_method,
            category=normalize_category(raw.category, self.config.category_aliases),
            email_was_inferred=email.was_inferred,
            email_was_repaired=email.was_repaired,
            amount_was_converted=converted,
            quantity_was_adjusted=quantity_adjusted,
            date_was_ambiguous=ambiguous,
            unparsed=unparsed,
        )

    @staticmethod
    def _mark_unparsed(
        unparsed: dict[str, str | None],
        exc: FieldParseError,
        raw: RawRecord,
        source_row: int,
    ) -> None:
        logger.warning(
            "Row %d (%s): %s; field kept as unparsed", source_row, raw.transaction_id, exc
        )
        unparsed[exc.field] = exc.raw
