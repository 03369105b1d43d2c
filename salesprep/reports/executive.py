"""Executive summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from salesprep.models.aggregates import ExecutiveSummary

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ExecutiveSummaryGenerator:
    """Renders headline totals and the top customer, product and market."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))

    def render(self, summary: ExecutiveSummary) -> str:
        template = self.env.get_template("executive_summary.txt")
        top_rows = [
            ("Top Customer", summary.top_customer),
            ("Top Product", summary.top_product),
            ("Top Market", summary.top_market),
        ]
        return template.render(summary=summary, top_rows=top_rows)
