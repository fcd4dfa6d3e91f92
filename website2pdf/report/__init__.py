"""website2pdf.report: JSON and HTML exports of the conversion summary."""

from website2pdf.report.html_report import render_html
from website2pdf.report.json_report import render_json

__all__ = ["render_json", "render_html"]
