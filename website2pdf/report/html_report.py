"""website2pdf.report.html_report: HTML summary rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from website2pdf.results import ConversionReport

BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "report.html.j2"


def render_html(
    report: ConversionReport,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Render the summary from ``report.html.j2`` and save it.

    Args:
        report: summary returned by the conversion run.
        template_dir: directory holding ``report.html.j2``; ``None`` uses the
            template shipped with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir else BUNDLED_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(REPORT_TEMPLATE)

    context: dict[str, Any] = {
        "total": report.total,
        "printed": report.printed,
        "errored": report.errored,
        "outcomes": report.outcomes,
        "errored_outcomes": report.errored_outcomes,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
