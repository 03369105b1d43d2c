"""Before/after data quality metrics for a cleaning run."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from salesprep.models.records import CanonicalDataset, RawRecord
from salesprep.models.reports import QualityMetric

_PCT = Decimal("0.01")


def _pct(numerator: int | Decimal, denominator: int | Decimal) -> Decimal | None:
    if not denominator:
        return None
    return (Decimal(numerator) / Decimal(denominator) * 100).quantize(_PCT, rounding=ROUND_HALF_UP)


def _missing(value: str | None) -> bool:
    return value is None or value.strip() in ("", "NULL")


def build_quality_metrics(
    raw_records: Sequence[RawRecord], dataset: CanonicalDataset
) -> list[QualityMetric]:
    """Compare the raw batch with the cleaned dataset, metric by metric."""
    raw_count = len(raw_records)
    raw_unique = len({r.transaction_id for r in raw_records})
    raw_missing_emails = sum(1 for r in raw_records if _missing(r.customer_email))
    raw_missing_currency = sum(1 for r in raw_records if _missing(r.currency))

    cleaned_count = len(dataset.records)
    cleaned_unique = len(set(dataset.transaction_ids))
    inferred_emails = sum(1 for r in dataset.records if r.email_was_inferred)

    before_complete = _pct(raw_count - raw_missing_emails - raw_missing_currency, raw_count)
    after_complete = _pct(cleaned_count, cleaned_count)

    return [
        QualityMetric(
            metric="Records Processed",
            before_cleaning=Decimal(raw_count),
            after_cleaning=Decimal(cleaned_count),
            difference=Decimal(raw_count - cleaned_count),
            change_pct=_pct(raw_count - cleaned_count, raw_count),
        ),
        QualityMetric(
            metric="Unique Transactions",
            before_cleaning=Decimal(raw_unique),
            after_cleaning=Decimal(cleaned_unique),
            difference=Decimal(raw_unique - cleaned_unique),
            change_pct=Decimal("0"),
        ),
        QualityMetric(
            metric="Missing Emails",
            before_cleaning=Decimal(raw_missing_emails),
            after_cleaning=Decimal(inferred_emails),
            difference=Decimal(raw_missing_emails - inferred_emails),
            change_pct=_pct(raw_missing_emails - inferred_emails, raw_missing_emails),
        ),
        QualityMetric(
            metric="Data Completeness %",
            before_cleaning=before_complete or Decimal("0.00"),
            after_cleaning=after_complete or Decimal("0.00"),
            difference=(after_complete or Decimal("0.00")) - (before_complete or Decimal("0.00")),
            change_pct=Decimal("0"),
        ),
    ]
