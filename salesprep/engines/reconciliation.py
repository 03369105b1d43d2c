"""Reconciliation engine: collapse duplicate submissions of one transaction.

Records are partitioned by ``transaction_id``. Within a partition the
candidates are sorted by

1. email completeness rank (a well-formed email beats an inferred or
   repaired one),
2. order date, earliest first, missing dates last,
3. source row, so ties resolve to the first submission,

and the first candidate survives. Every other candidate is marked as a
duplicate and recorded in the audit trail against its survivor.
"""

import logging
from collections.abc import Sequence
from datetime import date

from salesprep.models.enums import RecordStatus
from salesprep.models.records import (
    AuditTrail,
    CanonicalDataset,
    DuplicateEntry,
    NormalizedRecord,
)

logger = logging.getLogger(__name__)


def survivor_sort_key(record: NormalizedRecord) -> tuple[int, bool, date, int]:
    """Ordering key for candidates within one transaction_id partition."""
    return (
        record.email_completeness_rank,
        record.order_date is None,
        record.order_date or date.min,
        record.source_row,
    )


def _supersede_reason(survivor: NormalizedRecord, duplicate: NormalizedRecord) -> str:
    if survivor.email_completeness_rank < duplicate.email_completeness_rank:
        return "survivor has a complete email"
    if survivor.order_date != duplicate.order_date:
        if duplicate.order_date is None:
            return "duplicate has no parseable order date"
        return "survivor has an earlier order date"
    return "survivor was submitted first"


class Reconciler:
    """Selects exactly one survivor per transaction_id."""

    def group(self, records: Sequence[NormalizedRecord]) -> dict[str, list[NormalizedRecord]]:
        """Partition records by transaction_id, in first-seen order."""
        groups: dict[str, list[NormalizedRecord]] = {}
        for record in records:
            groups.setdefault(record.transaction_id, []).append(record)
        return groups

    def select_survivor(
        self, candidates: Sequence[NormalizedRecord]
    ) -> tuple[NormalizedRecord, list[NormalizedRecord]]:
        """Return (survivor, duplicates) for one partition, both re-marked."""
        ranked = sorted(candidates, key=survivor_sort_key)
        survivor = ranked[0].model_copy(update={"status": RecordStatus.KEPT})
        duplicates = [
            r.model_copy(update={"status": RecordStatus.DUPLICATE}) for r in ranked[1:]
        ]
        return survivor, duplicates

    def reconcile(
        self, records: Sequence[NormalizedRecord]
    ) -> tuple[CanonicalDataset, AuditTrail]:
        """Reduce candidates to one record per transaction_id.

        Returns:
            The canonical dataset (survivors in first-seen transaction order)
            and the audit trail of discarded duplicates.
        """
        kept: list[NormalizedRecord] = []
        entries: list[DuplicateEntry] = []

        for transaction_id, candidates in self.group(records).items():
            survivor, duplicates = self.select_survivor(candidates)
            kept.append(survivor)
            for duplicate in duplicates:
                entries.append(DuplicateEntry(
                    transaction_id=transaction_id,
                    duplicate_row=duplicate.source_row,
                    survivor_row=survivor.source_row,
                    reason=_supersede_reason(survivor, duplicate),
                ))

        if entries:
            logger.info(
                "Reconciled %d candidates into %d records (%d duplicates removed)",
                len(records), len(kept), len(entries),
            )
        return CanonicalDataset(records=kept), AuditTrail(entries=entries)
