"""The cleaning pipeline entry point.

raw records -> RecordNormalizer -> Reconciler -> Validator -> canonical output.

Normalization is per-record and order independent; reconciliation needs every
candidate of a transaction before it can pick a survivor; validation needs the
whole canonical dataset. The stages therefore run strictly one after another.
"""

import logging
from collections.abc import Sequence

from salesprep.config import EngineConfig
from salesprep.engines.reconciliation import Reconciler
from salesprep.engines.validator import Validator
from salesprep.exceptions import ConfigError
from salesprep.models.records import AuditTrail, CanonicalDataset, RawRecord
from salesprep.models.reports import CleaningSummary, ValidationReport
from salesprep.normalization.record import RecordNormalizer

logger = logging.getLogger(__name__)


def _require_tables(config: EngineConfig) -> None:
    if not config.exchange_rates:
        raise ConfigError("exchange_rates", "exchange rate table is empty")
    if not config.country_synonyms:
        raise ConfigError("country_synonyms", "country synonym table is empty")


def normalize_and_reconcile(
    raw_records: Sequence[RawRecord],
    config: EngineConfig | None = None,
) -> tuple[CanonicalDataset, ValidationReport, AuditTrail]:
    """Clean a batch of raw records.

    Returns:
        (canonical dataset, validation report, audit trail of removed duplicates).

    Raises:
        ConfigError: if a required lookup table is missing; raised before
            any record is processed.
    """
    config = config or EngineConfig()
    _require_tables(config)

    candidates = RecordNormalizer(config).normalize_all(raw_records)
    logger.info("Normalized %d raw records", len(candidates))

    dataset, audit = Reconciler().reconcile(candidates)
    report = Validator(config).validate(dataset)
    logger.info(
        "Validation: %d/%d hard checks passed", report.passed_count, len(report.hard_checks)
    )
    return dataset, report, audit


def summarize(
    raw_records: Sequence[RawRecord],
    dataset: CanonicalDataset,
    audit: AuditTrail,
) -> CleaningSummary:
    """Headline counts for a finished cleaning run."""
    unparsed: dict[str, int] = {}
    for record in dataset.records:
        for field in record.unparsed:
            unparsed[field] = unparsed.get(field, 0) + 1

    return CleaningSummary(
        raw_count=len(raw_records),
        cleaned_count=len(dataset.records),
        duplicates_removed=len(audit.entries),
        emails_inferred=sum(1 for r in dataset.records if r.email_was_inferred),
        emails_repaired=sum(
            1 for r in dataset.records if r.email_was_repaired and not r.email_was_inferred
        ),
        amounts_converted=sum(1 for r in dataset.records if r.amount_was_converted),
        quantities_adjusted=sum(1 for r in dataset.records if r.quantity_was_adjusted),
        ambiguous_dates=sum(1 for r in dataset.records if r.date_was_ambiguous),
        records_with_unparsed_fields=sum(1 for r in dataset.records if not r.is_fully_parsed),
        unparsed_fields=dict(sorted(unparsed.items())),
    )
