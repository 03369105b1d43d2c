"""Report output models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from salesprep.models.enums import CheckSeverity


class CheckResult(BaseModel):
    order: int
    name: str
    severity: CheckSeverity
    passed: bool
    issue_count: int = 0
    value: Decimal | None = None
    detail: str = ""

    @property
    def symbol(self) -> str:
        return "✓" if self.passed else "✗"

    @property
    def status(self) -> str:
        if self.passed:
            return "PASSED"
        if self.severity == CheckSeverity.ERROR:
            return "FAILED"
        return self.severity.value


class ValidationReport(BaseModel):
    checks: list[CheckResult] = Field(default_factory=list)

    @property
    def hard_checks(self) -> list[CheckResult]:
        return [c for c in self.checks if c.severity == CheckSeverity.ERROR]

    @property
    def all_passed(self) -> bool:
        """True when every ERROR-severity check passed; advisories are ignored."""
        return all(c.passed for c in self.hard_checks)

    @property
    def passed_count(self) -> int:
        return sum(1 for c in self.hard_checks if c.passed)

    @property
    def score(self) -> Decimal:
        """Percentage of ERROR-severity checks that passed, to one decimal."""
        hard = self.hard_checks
        if not hard:
            return Decimal("100.0")
        pct = Decimal(self.passed_count) / Decimal(len(hard)) * 100
        return pct.quantize(Decimal("0.1"))

    def get(self, name: str) -> CheckResult | None:
        for check in self.checks:
            if check.name == name:
                return check
        return None


class CleaningSummary(BaseModel):
    raw_count: int
    cleaned_count: int
    duplicates_removed: int
    emails_inferred: int
    emails_repaired: int
    amounts_converted: int
    quantities_adjusted: int
    ambiguous_dates: int
    records_with_unparsed_fields: int
    unparsed_fields: dict[str, int] = Field(default_factory=dict)


class QualityMetric(BaseModel):
    """A before/after data quality comparison row."""

    metric: str
    before_cleaning: Decimal
    after_cleaning: Decimal
    difference: Decimal
    change_pct: Decimal | None = None


class DuplicateVariation(BaseModel):
    transaction_id: str
    duplicate_count: int
    email_variations: list[str] = Field(default_factory=list)
    amount_variations: list[str] = Field(default_factory=list)
    date_variations: list[str] = Field(default_factory=list)


class RawProfile(BaseModel):
    """Exploratory profile of a raw batch, computed before any cleaning."""

    total_records: int
    unique_transactions: int
    duplicate_records: int
    missing_emails: int
    missing_currency: int
    missing_category: int
    negative_quantities: int
    zero_quantities: int
    non_numeric_quantities: int
    date_formats: dict[str, int] = Field(default_factory=dict)
    amount_formats: dict[str, int] = Field(default_factory=dict)
    currencies: dict[str, int] = Field(default_factory=dict)
    country_variations: dict[str, list[str]] = Field(default_factory=dict)
    duplicate_groups: list[DuplicateVariation] = Field(default_factory=list)
