"""HTML rendering of a run summary."""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from qa_harness.analysis import QualityGateResult
from qa_harness.models.result import TestSummary, format_percentage

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "report.html.j2"


def template_environment(template_dir: Path = TEMPLATE_DIR) -> Environment:
    env = Environment(loader=FileSystemLoader(str(template_dir)), autoescape=True)
    env.filters["percentage"] = format_percentage
    return env


def render_html_report(
    summary: TestSummary,
    *,
    title: str,
    environment: str,
    gate: QualityGateResult | None = None,
) -> str:
    """Render the summary, each suite's checks and optionally the gate outcome."""
    template = template_environment().get_template(REPORT_TEMPLATE)
    return template.render(
        summary=summary, title=title, environment=environment, gate=gate
    )


def write_html_report(
    summary: TestSummary,
    *,
    title: str,
    environment: str,
    path: Path,
    gate: QualityGateResult | None = None,
) -> Path:
    html = render_html_report(
        summary, title=title, environment=environment, gate=gate
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    log.info("HTML report written: %s", path)
    return path
