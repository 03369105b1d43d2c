"""Validation report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from salesprep.models.reports import ValidationReport

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ValidationReportGenerator:
    """Renders the per-check results and the overall validation score."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))

    def render(self, report: ValidationReport) -> str:
        template = self.env.get_template("validation.txt")
        return template.render(report=report)
