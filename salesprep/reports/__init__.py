"""Report generation and table export for salesprep."""

from salesprep.reports.executive import ExecutiveSummaryGenerator
from salesprep.reports.profile import ProfileReportGenerator
from salesprep.reports.quality import QualityReportGenerator
from salesprep.reports.summary import CleaningSummaryGenerator
from salesprep.reports.tables import write_cleaned_records, write_csv
from salesprep.reports.validation import ValidationReportGenerator

__all__ = [
    "CleaningSummaryGenerator",
    "ExecutiveSummaryGenerator",
    "ProfileReportGenerator",
    "QualityReportGenerator",
    "ValidationReportGenerator",
    "write_cleaned_records",
    "write_csv",
]
