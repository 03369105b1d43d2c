"""Raw data profile report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from salesprep.models.reports import RawProfile

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ProfileReportGenerator:
    """Renders the exploratory profile of a raw batch."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))

    def render(self, profile: RawProfile) -> str:
        template = self.env.get_template("profile.txt")
        return template.render(profile=profile)
