"""Data models for salesprep."""

from salesprep.models.aggregates import (
    CustomerSummary,
    DailySalesSummary,
    ExecutiveSummary,
    ProductPerformance,
    SalesFact,
    TopPerformer,
)
from salesprep.models.enums import (
    AmountFormat,
    CheckSeverity,
    CustomerSegment,
    DateShape,
    DayType,
    PerformanceCategory,
    RecordStatus,
    Region,
    TransactionSize,
)
from salesprep.models.records import (
    RAW_COLUMNS,
    AuditTrail,
    CanonicalDataset,
    DuplicateEntry,
    NormalizedRecord,
    RawRecord,
)
from salesprep.models.reports import (
    CheckResult,
    CleaningSummary,
    DuplicateVariation,
    QualityMetric,
    RawProfile,
    ValidationReport,
)

__all__ = [
    "AmountFormat",
    "AuditTrail",
    "CanonicalDataset",
    "CheckResult",
    "CheckSeverity",
    "CleaningSummary",
    "CustomerSegment",
    "CustomerSummary",
    "DailySalesSummary",
    "DateShape",
    "DayType",
    "DuplicateEntry",
    "DuplicateVariation",
    "ExecutiveSummary",
    "NormalizedRecord",
    "PerformanceCategory",
    "ProductPerformance",
    "QualityMetric",
    "RAW_COLUMNS",
    "RawProfile",
    "RawRecord",
    "RecordStatus",
    "Region",
    "SalesFact",
    "TopPerformer",
    "TransactionSize",
    "ValidationReport",
]
