"""Tests for text reports and CSV export."""

import csv
from datetime import date
from decimal import Decimal

from salesprep import normalize_and_reconcile
from salesprep.engines import Aggregator, RawProfiler, build_quality_metrics, summarize
from salesprep.models.aggregates import DailySalesSummary
from salesprep.reports import (
    CleaningSummaryGenerator,
    ExecutiveSummaryGenerator,
    ProfileReportGenerator,
    QualityReportGenerator,
    ValidationReportGenerator,
    write_cleaned_records,
    write_csv,
)
from salesprep.reports.tables import CLEANED_COLUMNS


class TestTextReports:
    def test_cleaning_summary(self, raw_batch):
        dataset, _, audit = normalize_and_reconcile(raw_batch)
        text = CleaningSummaryGenerator().render(summarize(raw_batch, dataset, audit), audit)
        assert "CLEANING SUMMARY" in text
        assert "Raw Records           5" in text
        assert "Duplicates Removed    1" in text
        assert "Amounts Converted     2" in text
        assert "TRX_001: row 1 superseded by row 2 (survivor has a complete email)" in text

    def test_cleaning_summary_counts_unparsed_records(self, raw_factory):
        raws = [raw_factory(transaction_id="T1", amount="n/a"), raw_factory(transaction_id="T2")]
        dataset, _, audit = normalize_and_reconcile(raws)
        text = CleaningSummaryGenerator().render(summarize(raws, dataset, audit))
        assert "Unparsed fields in 1 records" in text
        assert "  - amount: 1" in text

    def test_cleaning_summary_without_audit(self, raw_batch):
        dataset, _, audit = normalize_and_reconcile(raw_batch)
        text = CleaningSummaryGenerator().render(summarize(raw_batch, dataset, audit))
        assert "superseded" not in text

    def test_validation_report(self, raw_batch):
        _, report, _ = normalize_and_reconcile(raw_batch)
        text = ValidationReportGenerator().render(report)
        assert "Amount Range Validation" in text
        assert "FAILED" in text
        assert "Overall Validation Score: 83.3% (5/6 tests passed)" in text

    def test_quality_report(self, raw_batch):
        dataset, _, _ = normalize_and_reconcile(raw_batch)
        text = QualityReportGenerator().render(build_quality_metrics(raw_batch, dataset))
        assert "Records Processed" in text
        assert "Change: 20.00%" in text

    def test_executive_summary(self, raw_factory):
        raws = [
            raw_factory(transaction_id="T1", customer_id="CUST_A", amount="1234.50",
                        ship_country="UK"),
            raw_factory(transaction_id="T2", customer_id="CUST_B", amount="100", product_sku="SKU-9"),
        ]
        dataset, _, _ = normalize_and_reconcile(raws)
        aggregator = Aggregator(as_of=date(2024, 4, 1))
        summary = aggregator.executive_summary(aggregator.sales_fact(dataset))
        text = ExecutiveSummaryGenerator().render(summary)
        assert "Total Transactions Processed: 2" in text
        assert "Date Range: 2024-03-15 to 2024-03-15" in text
        assert "Total Revenue (USD): $1,334.50" in text
        assert "Countries Served: 2" in text
        assert "Top Customer: CUST_A ($1,234.50)" in text
        assert "Top Market: United Kingdom ($1,234.50)" in text

    def test_executive_summary_without_sales(self):
        text = ExecutiveSummaryGenerator().render(Aggregator.executive_summary([]))
        assert "Date Range: n/a" in text
        assert "Top Product: n/a" in text

    def test_profile_report(self, raw_batch):
        text = ProfileReportGenerator().render(RawProfiler().profile(raw_batch))
        assert "RAW DATA PROFILE" in text
        assert "YYYY-MM-DD" in text
        assert "TRX_001 x2" in text


class TestCsvExport:
    def test_cleaned_records(self, raw_batch, tmp_path):
        dataset, _, _ = normalize_and_reconcile(raw_batch)
        path = tmp_path / "out" / "cleaned.csv"
        assert write_cleaned_records(dataset.records, path) == 4

        with path.open(newline="", encoding="utf-8") as handle:
            rows = list(csv.DictReader(handle))
        assert tuple(rows[0]) == CLEANED_COLUMNS
        assert rows[0]["amount_usd"] == "1234.56"
        assert rows[1]["email_was_inferred"] == "Y"
        assert rows[0]["email_was_inferred"] == "N"
        assert rows[0]["unparsed_fields"] == ""

    def test_unparsed_raw_values_exported(self, raw_factory, tmp_path):
        dataset, _, _ = normalize_and_reconcile([raw_factory(amount="12 EUR", quantity="two")])
        path = tmp_path / "cleaned.csv"
        write_cleaned_records(dataset.records, path)

        with path.open(newline="", encoding="utf-8") as handle:
            row = next(csv.DictReader(handle))
        assert row["amount_usd"] == ""
        assert row["quantity"] == ""
        assert row["unparsed_fields"] == "amount=12 EUR; quantity=two"

    def test_none_written_as_empty(self, tmp_path):
        row = DailySalesSummary(
            order_date="2024-03-15", day_name="Friday", num_transactions=1, unique_customers=1,
            items_sold=1, daily_revenue_usd=Decimal("10.00"), avg_transaction_value=Decimal("10.00"),
            cumulative_revenue=Decimal("10.00"), moving_avg_7day_revenue=Decimal("10.00"),
            previous_day_revenue=None, day_over_day_growth_pct=None,
        )
        path = tmp_path / "daily.csv"
        write_csv([row], path)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("order_date,day_name")
        assert lines[1].endswith("10.00,,")

    def test_empty_rows_with_columns(self, tmp_path):
        path = tmp_path / "audit.csv"
        assert write_csv([], path, ["transaction_id", "reason"]) == 0
        assert path.read_text(encoding="utf-8").splitlines() == ["transaction_id,reason"]
