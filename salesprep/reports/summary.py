"""Cleaning summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from salesprep.models.records import AuditTrail
from salesprep.models.reports import CleaningSummary

TEMPLATE_DIR = Path(__file__).parent / "templates"


class CleaningSummaryGenerator:
    """Renders headline cleaning counts and the duplicate audit trail."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))

    def render(self, summary: CleaningSummary, audit: AuditTrail | None = None) -> str:
        template = self.env.get_template("cleaning_summary.txt")
        duplicates = audit.entries if audit is not None else []
        return template.render(summary=summary, duplicates=duplicates)
