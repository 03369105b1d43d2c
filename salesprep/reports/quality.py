"""Before/after data quality report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from salesprep.models.reports import QualityMetric

TEMPLATE_DIR = Path(__file__).parent / "templates"


class QualityReportGenerator:
    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))

    def render(self, metrics: list[QualityMetric]) -> str:
        template = self.env.get_template("quality.txt")
        return template.render(metrics=metrics)
