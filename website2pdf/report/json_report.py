# website2pdf/report/json_report.py

"""
JSON export of the website2pdf conversion summary.
"""
from pathlib import Path

from website2pdf.results import ConversionReport


def render_json(report: ConversionReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: summary returned by the conversion run
    :param output_path: path of the JSON file
    :param pretty: indent the output
    :return: Path of the saved file

    Example:
    ```python
    from website2pdf.report.json_report import render_json
    report_path = render_json(report, 'reports/run.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
