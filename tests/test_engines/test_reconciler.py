"""Tests for duplicate reconciliation."""

from datetime import date

import pytest

from salesprep.engines.reconciliation import Reconciler, survivor_sort_key
from salesprep.models.enums import RecordStatus
from salesprep.normalization.record import RecordNormalizer


@pytest.fixture
def normalize(config):
    normalizer = RecordNormalizer(config)

    def _normalize(raws):
        return normalizer.normalize_all(raws)

    return _normalize


class TestSurvivorSelection:
    def test_complete_email_beats_earlier_date(self, normalize, raw_factory):
        records = normalize([
            raw_factory(customer_email="john@gmail", order_date="2024-03-15"),
            raw_factory(customer_email="john@gmail.com", order_date="2024-03-16"),
        ])
        dataset, audit = Reconciler().reconcile(records)

        assert len(dataset) == 1
        survivor = dataset.get("TRX_001")
        assert survivor.source_row == 2
        assert survivor.customer_email == "john@gmail.com"
        assert survivor.order_date == date(2024, 3, 16)
        assert survivor.status == RecordStatus.KEPT

        assert len(audit) == 1
        entry = audit.entries[0]
        assert entry.duplicate_row == 1
        assert entry.survivor_row == 2
        assert entry.reason == "survivor has a complete email"

    def test_earlier_date_wins_on_equal_email(self, normalize, raw_factory):
        records = normalize([
            raw_factory(order_date="2024-06-02"),
            raw_factory(order_date="2024-06-01"),
        ])
        dataset, audit = Reconciler().reconcile(records)
        assert dataset.get("TRX_001").source_row == 2
        assert audit.entries[0].reason == "survivor has an earlier order date"

    def test_missing_date_sorts_last(self, normalize, raw_factory):
        records = normalize([
            raw_factory(order_date="not a date"),
            raw_factory(order_date="2024-12-31"),
        ])
        dataset, audit = Reconciler().reconcile(records)
        assert dataset.get("TRX_001").source_row == 2
        assert audit.entries[0].reason == "duplicate has no parseable order date"

    def test_full_tie_keeps_first_submission(self, normalize, raw_factory):
        records = normalize([raw_factory(), raw_factory(), raw_factory()])
        dataset, audit = Reconciler().reconcile(records)
        assert dataset.get("TRX_001").source_row == 1
        assert [e.duplicate_row for e in audit] == [2, 3]
        assert all(e.reason == "survivor was submitted first" for e in audit)

    def test_inferred_email_ranks_below_original(self, normalize, raw_factory):
        records = normalize([
            raw_factory(customer_email=None, order_date="2024-01-01"),
            raw_factory(customer_email="jo@example.com", order_date="2024-02-01"),
        ])
        dataset, _ = Reconciler().reconcile(records)
        assert dataset.get("TRX_001").customer_email == "jo@example.com"

    def test_sort_key_orders_by_rank_date_row(self, normalize, raw_factory):
        a, b = normalize([
            raw_factory(customer_email="x@gmail"),
            raw_factory(customer_email="x@example.com", order_date="2024-12-01"),
        ])
        assert survivor_sort_key(b) < survivor_sort_key(a)


class TestReconcile:
    def test_singletons_kept(self, normalize, raw_factory):
        records = normalize([raw_factory(transaction_id=f"TRX_{i}") for i in range(5)])
        dataset, audit = Reconciler().reconcile(records)
        assert dataset.transaction_ids == [f"TRX_{i}" for i in range(5)]
        assert all(r.status == RecordStatus.KEPT for r in dataset)
        assert len(audit) == 0

    def test_transaction_ids_unique(self, normalize, raw_batch):
        dataset, audit = Reconciler().reconcile(normalize(raw_batch))
        assert len(set(dataset.transaction_ids)) == len(dataset)
        assert len(dataset) + len(audit) == len(raw_batch)

    def test_survivors_independent_of_input_order(self, normalize, raw_factory):
        records = normalize([
            raw_factory(transaction_id="A", order_date="2024-02-01"),
            raw_factory(transaction_id="B", customer_email="b@gmail"),
            raw_factory(transaction_id="A", order_date="2024-01-15"),
            raw_factory(transaction_id="B", customer_email="b@example.com"),
            raw_factory(transaction_id="C"),
        ])
        forward, _ = Reconciler().reconcile(records)
        backward, _ = Reconciler().reconcile(list(reversed(records)))

        def survivors(dataset):
            return {r.transaction_id: r.source_row for r in dataset}

        assert survivors(forward) == survivors(backward) == {"A": 3, "B": 4, "C": 5}

    def test_input_records_not_mutated(self, normalize, raw_factory):
        records = normalize([raw_factory(), raw_factory()])
        Reconciler().reconcile(records)
        assert all(r.status == RecordStatus.PENDING for r in records)

    def test_audit_lists_only_discarded_duplicates(self, normalize, raw_batch):
        _, audit = Reconciler().reconcile(normalize(raw_batch))
        assert [e.transaction_id for e in audit] == ["TRX_001"]

    def test_group_preserves_first_seen_order(self, normalize, raw_factory):
        records = normalize([
            raw_factory(transaction_id="Z"),
            raw_factory(transaction_id="A"),
            raw_factory(transaction_id="Z"),
        ])
        groups = Reconciler().group(records)
        assert list(groups) == ["Z", "A"]
        assert [r.source_row for r in groups["Z"]] == [1, 3]
