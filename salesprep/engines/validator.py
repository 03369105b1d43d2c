"""Post-cleaning validation checks.

The validator is diagnostic only: it never mutates records and never raises.
Each check reports whether it passed and how many records (or values)
offended. ERROR checks decide ``ValidationReport.all_passed``; WARNING and
INFO checks are advisory.
"""

import statistics
from decimal import ROUND_HALF_UP, Decimal

from salesprep.config import EngineConfig
from salesprep.models.enums import CheckSeverity
from salesprep.models.records import CanonicalDataset, NormalizedRecord
from salesprep.models.reports import CheckResult, ValidationReport
from salesprep.normalization.email import is_valid_email

CRITICAL_FIELDS = ("transaction_id", "customer_id", "customer_email", "order_date", "amount_usd")

CHECK_NULLS = "Critical Fields NULL Check"
CHECK_DUPLICATES = "Duplicate Transaction IDs"
CHECK_EMAIL = "Email Format Validation"
CHECK_DATE_RANGE = "Date Range Check"
CHECK_AMOUNT = "Amount Range Validation"
CHECK_QUANTITY = "Quantity Validation"
CHECK_COUNTRY = "Country Standardization"
CHECK_CURRENCY = "Currency Tracking"
CHECK_COMPLETENESS = "Data Completeness Score"
CHECK_OUTLIERS = "Statistical Outliers"


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class Validator:
    """Runs the fixed, ordered battery of checks over a canonical dataset."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()

    def validate(self, dataset: CanonicalDataset) -> ValidationReport:
        records = dataset.records
        checks = [
            self._check_nulls(records),
            self._check_duplicates(records),
            self._check_email(records),
            self._check_date_range(records),
            self._check_amount(records),
            self._check_quantity(records),
            self._check_country(records),
            self._check_currency(records),
            self._check_completeness(records),
            self._check_outliers(records),
        ]
        return ValidationReport(checks=checks)

    # --- Hard checks ---

    def _check_nulls(self, records: list[NormalizedRecord]) -> CheckResult:
        offending = sum(
            1 for r in records if any(_is_blank(getattr(r, f)) for f in CRITICAL_FIELDS)
        )
        return CheckResult(
            order=1, name=CHECK_NULLS, severity=CheckSeverity.ERROR,
            passed=offending == 0, issue_count=offending,
            detail=f"{offending} records with NULL values" if offending else "",
        )

    def _check_duplicates(self, records: list[NormalizedRecord]) -> CheckResult:
        counts: dict[str, int] = {}
        for r in records:
            counts[r.transaction_id] = counts.get(r.transaction_id, 0) + 1
        repeated = sum(1 for c in counts.values() if c > 1)
        return CheckResult(
            order=2, name=CHECK_DUPLICATES, severity=CheckSeverity.ERROR,
            passed=repeated == 0, issue_count=repeated,
            detail=f"{repeated} duplicate transaction IDs" if repeated else "",
        )

    def _check_email(self, records: list[NormalizedRecord]) -> CheckResult:
        invalid = sum(1 for r in records if not is_valid_email(r.customer_email))
        return CheckResult(
            order=3, name=CHECK_EMAIL, severity=CheckSeverity.ERROR,
            passed=invalid == 0, issue_count=invalid,
            detail=f"{invalid} invalid email formats" if invalid else "",
        )

    def _check_date_range(self, records: list[NormalizedRecord]) -> CheckResult:
        start, end = self.config.date_window_start, self.config.date_window_end
        outside = sum(
            1 for r in records
            if r.order_date is not None and not (start <= r.order_date <= end)
        )
        return CheckResult(
            order=4, name=CHECK_DATE_RANGE, severity=CheckSeverity.ERROR,
            passed=outside == 0, issue_count=outside,
            detail=f"{outside} dates outside {start} .. {end}" if outside else "",
        )

    def _check_amount(self, records: list[NormalizedRecord]) -> CheckResult:
        ceiling = self.config.amount_ceiling
        invalid = sum(
            1 for r in records
            if r.amount_usd is not None and not (0 < r.amount_usd <= ceiling)
        )
        return CheckResult(
            order=5, name=CHECK_AMOUNT, severity=CheckSeverity.ERROR,
            passed=invalid == 0, issue_count=invalid,
            detail=f"{invalid} records with invalid amounts" if invalid else "",
        )

    def _check_quantity(self, records: list[NormalizedRecord]) -> CheckResult:
        ceiling = self.config.quantity_ceiling
        invalid = sum(
            1 for r in records if r.quantity is None or not (0 < r.quantity <= ceiling)
        )
        return CheckResult(
            order=6, name=CHECK_QUANTITY, severity=CheckSeverity.ERROR,
            passed=invalid == 0, issue_count=invalid,
            detail=f"{invalid} records with invalid quantities" if invalid else "",
        )

    # --- Advisory checks ---

    def _check_country(self, records: list[NormalizedRecord]) -> CheckResult:
        distinct = len({r.ship_country for r in records if r.ship_country is not None})
        passed = distinct <= self.config.country_ceiling
        return CheckResult(
            order=7, name=CHECK_COUNTRY, severity=CheckSeverity.WARNING,
            passed=passed, issue_count=distinct,
            detail="" if passed else (
                f"{distinct} unique country values (expected at most {self.config.country_ceiling})"
            ),
        )

    def _check_currency(self, records: list[NormalizedRecord]) -> CheckResult:
        missing = sum(1 for r in records if _is_blank(r.currency_detected))
        return CheckResult(
            order=8, name=CHECK_CURRENCY, severity=CheckSeverity.WARNING,
            passed=missing == 0, issue_count=missing,
            detail=f"{missing} records missing original currency" if missing else "",
        )

    def _check_completeness(self, records: list[NormalizedRecord]) -> CheckResult:
        """Share of populated transaction IDs, emails and original (non-inferred) emails."""
        total = len(records)
        if total == 0:
            pct = Decimal("100.00")
        else:
            complete_ids = sum(1 for r in records if not _is_blank(r.transaction_id))
            complete_emails = sum(1 for r in records if not _is_blank(r.customer_email))
            original_emails = sum(1 for r in records if not r.email_was_inferred)
            ratio = Decimal(complete_ids + complete_emails + original_emails) / Decimal(total * 3)
            pct = (ratio * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        inferred = sum(1 for r in records if r.email_was_inferred)
        return CheckResult(
            order=9, name=CHECK_COMPLETENESS, severity=CheckSeverity.INFO,
            passed=True, issue_count=inferred, value=pct, detail=f"{pct}%",
        )

    def _check_outliers(self, records: list[NormalizedRecord]) -> CheckResult:
        amounts = [r.amount_usd for r in records if r.amount_usd is not None]
        outliers = 0
        if len(amounts) >= 2:
            mean = statistics.mean(amounts)
            spread = self.config.outlier_stddevs * statistics.stdev(amounts)
            outliers = sum(1 for a in amounts if a > mean + spread or a < mean - spread)
        return CheckResult(
            order=10, name=CHECK_OUTLIERS, severity=CheckSeverity.INFO,
            passed=outliers == 0, issue_count=outliers,
            detail=(
                f"{outliers} statistical outliers (>{self.config.outlier_stddevs} std dev)"
                if outliers else ""
            ),
        )
