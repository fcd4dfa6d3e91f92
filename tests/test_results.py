# File: tests/test_results.py
import asyncio
import json
import logging
import threading

import pytest

from website2pdf.report import render_html, render_json
from website2pdf.results import ConversionReport, ConversionStatus, ResultTracker


def filled_tracker() -> ResultTracker:
    tracker = ResultTracker()
    tracker.store_result("http://e.test/a", "/out/e.test/a/A.pdf", ConversionStatus.PRINTED)
    tracker.store_result("http://e.test/b", "/out/e.test/b", ConversionStatus.ERRORED)
    tracker.store_result("http://e.test/c", "/out/e.test/c/C.pdf", ConversionStatus.PRINTED)
    return tracker


def test_report_counts():
    report = filled_tracker().report()
    assert (report.total, report.printed, report.errored) == (3, 2, 1)
    assert [o.url for o in report.errored_outcomes] == ["http://e.test/b"]


def test_outcomes_keep_append_order():
    assert [o.url for o in filled_tracker().outcomes] == [
        "http://e.test/a",
        "http://e.test/b",
        "http://e.test/c",
    ]


def test_empty_report():
    report = ResultTracker().print_results()
    assert isinstance(report, ConversionReport)
    assert (report.total, report.printed, report.errored) == (0, 0, 0)


def test_print_results_lists_errored(caplog):
    logger = logging.getLogger("Website2Pdf")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="Website2Pdf"):
            filled_tracker().print_results()
    finally:
        logger.removeHandler(caplog.handler)
    assert "3 attempted, 2 printed, 1 errored" in caplog.text
    assert "http://e.test/b" in caplog.text
    assert "http://e.test/a" not in caplog.text


def test_concurrent_threads_lose_nothing():
    tracker = ResultTracker()

    def worker(n: int) -> None:
        for i in range(200):
            tracker.store_result(f"http://e.test/{n}/{i}", "x", ConversionStatus.PRINTED)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert tracker.report().total == 1600


@pytest.mark.asyncio()
async def test_concurrent_tasks_lose_nothing():
    tracker = ResultTracker()

    async def worker(n: int) -> None:
        await asyncio.sleep(0)
        tracker.store_result(f"http://e.test/{n}", "x", ConversionStatus.ERRORED)

    await asyncio.gather(*(worker(n) for n in range(100)))
    assert tracker.report().errored == 100


def test_report_json():
    data = json.loads(filled_tracker().report().json(pretty=True))
    assert data["total"] == 3
    assert data["errored"] == 1
    assert data["outcomes"][1] == {
        "url": "http://e.test/b",
        "file_path": "/out/e.test/b",
        "status": "errored",
    }


def test_render_json(tmp_path):
    path = render_json(filled_tracker().report(), tmp_path / "reports" / "run.json")
    assert json.loads(path.read_text(encoding="utf-8"))["printed"] == 2


def test_render_html_bundled_template(tmp_path):
    path = render_html(filled_tracker().report(), None, tmp_path / "run.html")
    html = path.read_text(encoding="utf-8")
    assert "3 attempted, 2 printed, 1 errored" in html
    assert '<li class="errored">http://e.test/b</li>' in html


def test_render_html_custom_template(tmp_path):
    (tmp_path / "report.html.j2").write_text("{{ printed }}/{{ total }}", encoding="utf-8")
    path = render_html(filled_tracker().report(), tmp_path, tmp_path / "out.html")
    assert path.read_text(encoding="utf-8") == "2/3"
