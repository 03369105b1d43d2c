"""End-to-end tests for normalize_and_reconcile."""

from decimal import Decimal

import pytest

from salesprep import normalize_and_reconcile
from salesprep.config import EngineConfig
from salesprep.engines.pipeline import summarize
from salesprep.engines.validator import (
    CHECK_AMOUNT,
    CHECK_COMPLETENESS,
    CHECK_COUNTRY,
    CHECK_EMAIL,
)
from salesprep.exceptions import ConfigError
from salesprep.normalization.dates import normalize_date
from salesprep.normalization.email import is_valid_email


class TestScenarios:
    def test_dollar_amount_without_currency(self, raw_factory):
        dataset, _, _ = normalize_and_reconcile([raw_factory(amount="$1,234.56", currency=None)])
        record = dataset.records[0]
        assert record.amount_usd == Decimal("1234.56")
        assert record.currency_detected == "USD"

    def test_euro_amount_converted(self, raw_factory):
        dataset, _, _ = normalize_and_reconcile([raw_factory(amount="€890.00", currency="EUR")])
        assert dataset.records[0].amount_usd == Decimal("961.20")

    def test_complete_email_survives(self, raw_batch):
        dataset, _, audit = normalize_and_reconcile(raw_batch)
        survivor = dataset.get("TRX_001")
        assert survivor.source_row == 2
        assert survivor.customer_email == "john@gmail.com"
        assert [(e.duplicate_row, e.survivor_row) for e in audit] == [(1, 2)]

    def test_country_spellings_collapse(self, raw_factory):
        raws = [
            raw_factory(transaction_id="T1", ship_country="USA"),
            raw_factory(transaction_id="T2", ship_country="US"),
            raw_factory(transaction_id="T3", ship_country="United States"),
        ]
        dataset, report, _ = normalize_and_reconcile(raws)
        assert {r.ship_country for r in dataset} == {"United States"}
        assert report.get(CHECK_COUNTRY).issue_count == 1

    def test_huge_quantity_reset(self, raw_factory):
        dataset, _, _ = normalize_and_reconcile([raw_factory(quantity="99999")])
        record = dataset.records[0]
        assert record.quantity == 1
        assert record.quantity_was_adjusted is True


class TestBatchReport:
    def test_mixed_batch(self, raw_batch):
        dataset, report, audit = normalize_and_reconcile(raw_batch)
        assert dataset.transaction_ids == ["TRX_001", "TRX_002", "TRX_003", "TRX_004"]
        assert len(audit) == 1
        assert not report.all_passed
        assert report.get(CHECK_AMOUNT).issue_count == 1
        assert report.passed_count == 5
        assert report.get(CHECK_COMPLETENESS).value == Decimal("91.67")

    def test_summary(self, raw_batch):
        dataset, _, audit = normalize_and_reconcile(raw_batch)
        summary = summarize(raw_batch, dataset, audit)
        assert summary.raw_count == 5
        assert summary.cleaned_count == 4
        assert summary.duplicates_removed == 1
        assert summary.emails_inferred == 1
        assert summary.emails_repaired == 1
        assert summary.amounts_converted == 2
        assert summary.quantities_adjusted == 3
        assert summary.ambiguous_dates == 0
        assert summary.records_with_unparsed_fields == 0
        assert summary.unparsed_fields == {}

    def test_summary_counts_unparsed_fields(self, raw_factory):
        raws = [
            raw_factory(transaction_id="T1", amount="n/a"),
            raw_factory(transaction_id="T2", amount="n/a", order_date="yesterday"),
        ]
        dataset, _, audit = normalize_and_reconcile(raws)
        summary = summarize(raws, dataset, audit)
        assert summary.cleaned_count == 2
        assert summary.records_with_unparsed_fields == 2
        assert summary.unparsed_fields == {"amount": 2, "order_date": 1}


class TestProperties:
    def test_idempotent(self, raw_batch):
        first = normalize_and_reconcile(raw_batch)
        second = normalize_and_reconcile(raw_batch)
        assert first[0].model_dump() == second[0].model_dump()
        assert first[1].model_dump() == second[1].model_dump()
        assert first[2].model_dump() == second[2].model_dump()

    def test_unique_transaction_ids(self, raw_factory):
        raws = [raw_factory(transaction_id=f"TRX_{i % 4}") for i in range(12)]
        dataset, report, audit = normalize_and_reconcile(raws)
        assert len(set(dataset.transaction_ids)) == len(dataset) == 4
        assert len(audit) == 8
        assert report.all_passed

    def test_kept_record_laws(self, raw_factory):
        quantities = ["-5", "0", "1", "50", "100", "101", "99999", ""]
        emails = [None, "NULL", "a@gmail", "b@", "c@corp", "d@example.com", "e", "F@Example.ORG"]
        raws = [
            raw_factory(transaction_id=f"T{i}", quantity=q, customer_email=e, amount="¥1,500")
            for i, (q, e) in enumerate(zip(quantities, emails))
        ]
        dataset, _, _ = normalize_and_reconcile(raws)
        for record in dataset:
            assert 1 <= record.quantity <= 100
            assert is_valid_email(record.customer_email)
            assert record.amount_usd > 0
            assert record.currency_detected == "JPY"
        assert [r.quantity for r in dataset] == [1, 1, 1, 50, 100, 1, 1, 1]

    def test_email_shape_holds_for_unsafe_customer_ids(self, raw_factory):
        raws = [
            raw_factory(transaction_id="T1", customer_id="jane@corp", customer_email=None),
            raw_factory(transaction_id="T2", customer_id="a@b.com", customer_email="broken"),
        ]
        dataset, report, _ = normalize_and_reconcile(raws)
        assert all(is_valid_email(r.customer_email) for r in dataset)
        assert report.get(CHECK_EMAIL).passed

    def test_canonical_date_round_trip(self, raw_batch):
        dataset, _, _ = normalize_and_reconcile(raw_batch)
        for record in dataset:
            assert normalize_date(record.order_date.isoformat()).value == record.order_date

    def test_no_record_dropped_by_parse_failure(self, raw_factory):
        raws = [raw_factory(transaction_id=f"T{i}", amount="???", order_date="??", quantity="x") for i in range(3)]
        dataset, report, _ = normalize_and_reconcile(raws)
        assert len(dataset) == 3
        assert not report.all_passed


class TestConfig:
    def test_empty_rate_table_is_fatal(self, raw_batch):
        config = EngineConfig.model_construct(exchange_rates={})
        with pytest.raises(ConfigError, match="exchange rate table is empty"):
            normalize_and_reconcile(raw_batch, config)

    def test_empty_synonym_table_is_fatal(self, raw_batch):
        config = EngineConfig.model_construct(country_synonyms={})
        with pytest.raises(ConfigError):
            normalize_and_reconcile(raw_batch, config)

    def test_injected_rates(self, raw_factory):
        config = EngineConfig(exchange_rates={"USD": "1", "EUR": "2"})
        dataset, _, _ = normalize_and_reconcile([raw_factory(amount="10", currency="eur")], config)
        assert dataset.records[0].amount_usd == Decimal("20.00")

    def test_unknown_currency_passes_through(self, raw_factory):
        dataset, _, _ = normalize_and_reconcile([raw_factory(amount="10.50", currency="CHF")])
        record = dataset.records[0]
        assert record.amount_usd == Decimal("10.50")
        assert record.currency_detected == "CHF"
