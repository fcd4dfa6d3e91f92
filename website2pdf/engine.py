# File: website2pdf/engine.py
"""website2pdf.engine: the sitemap → browser → PDF conversion pipeline.

Sitemaps are processed one at a time inside a single browser context; the
URLs of a sitemap are printed by a pool of ``process_pool`` concurrent pages.
A failing URL is recorded as ERRORED and never stops its siblings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

from playwright.async_api import BrowserContext, Error as PlaywrightError

from website2pdf.browser import extract_metadata, launch_browser
from website2pdf.config import ConverterConfig
from website2pdf.errors import NavigationError, RenderError
from website2pdf.fetcher import SitemapFetcher
from website2pdf.logger import logger
from website2pdf.models import PdfTemplate, Sitemap, Website
from website2pdf.pool import PoolResult, TaskPool
from website2pdf.results import ConversionReport, ConversionStatus, ResultTracker
from website2pdf.template import interpolate
from website2pdf.utils import ensure_directory, to_file_path, to_filename

__all__ = [
    "SITEMAP_CONCURRENCY",
    "convert_website",
    "page_to_pdf",
    "process_sitemap",
    "start_conversion",
]

# one sitemap at a time: they all share the same browser context
SITEMAP_CONCURRENCY = 1

LauncherT = Callable[..., Any]


async def page_to_pdf(
    context: BrowserContext,
    config: ConverterConfig,
    output_dir: Path,
    url: str,
    pdf_template: PdfTemplate,
    tracker: ResultTracker,
) -> str:
    """Print one URL to PDF and record the outcome; returns the PDF path."""
    file_path = url
    page = None
    try:
        page = await context.new_page()
        page.set_default_navigation_timeout(0)
        page.set_default_timeout(0)

        file_dir = output_dir / to_file_path(url)
        file_path = str(file_dir)
        await ensure_directory(file_dir)

        try:
            await page.goto(url, wait_until="networkidle", timeout=0)
        except PlaywrightError as exc:
            raise NavigationError(url, str(exc)) from exc

        metadata = await extract_metadata(page)
        target = file_dir / f"{to_filename(metadata.get('title'), config.safe_title)}.pdf"
        file_path = str(target)
        logger.debug("Printing page %s from url %s", file_path, url)

        try:
            await page.pdf(
                path=file_path,
                format="A4",
                display_header_footer=config.display_header_footer,
                header_template=interpolate(pdf_template.header, metadata),
                footer_template=interpolate(pdf_template.footer, metadata),
                margin=config.margins,
                print_background=True,
            )
        except PlaywrightError as exc:
            raise RenderError(url, str(exc)) from exc
    except Exception:
        tracker.store_result(url, file_path, ConversionStatus.ERRORED)
        raise
    else:
        tracker.store_result(url, file_path, ConversionStatus.PRINTED)
        return file_path
    finally:
        if page is not None:
            await page.close()


async def process_sitemap(
    context: BrowserContext,
    config: ConverterConfig,
    website: Website,
    sitemap: Sitemap,
    tracker: ResultTracker,
) -> Optional[PoolResult]:
    """Print every URL of *sitemap*; ``None`` when it lists no URL."""
    if not sitemap.urls:
        logger.warning(
            "No URLs found for sitemap %s. Please check %s",
            sitemap.root_url,
            ", ".join(website.sitemap_urls),
        )
        return None

    output_dir = Path(config.output_dir)
    if await ensure_directory(output_dir):
        logger.debug("Directory %s created", output_dir)
    else:
        logger.debug("Directory %s already exists", output_dir)

    logger.info("Printing %d PDF(s) to %s", len(sitemap.urls), output_dir)
    total = len(sitemap.urls)

    async def _print(url: str, index: int) -> str:
        logger.debug("Processing pool for url %s (%d/%d)", url, index + 1, total)
        return await page_to_pdf(context, config, output_dir, url, website.pdf_template, tracker)

    result = await TaskPool(config.process_pool).process(sitemap.urls, _print)
    for err in result.errors:
        logger.warning("Failed to print %s: %s", err.item, err.error)
    return result


async def convert_website(
    config: ConverterConfig,
    website: Website,
    tracker: ResultTracker,
    launcher: LauncherT = launch_browser,
) -> ConversionReport:
    """
    Print all sitemaps of *website* and return the run summary.

    The summary is logged once, after the browser has been closed, even when
    the run fails halfway.
    """
    if not website.sitemaps:
        logger.warning("No sitemap found. Please check %s", ", ".join(website.sitemap_urls))
        return tracker.report()

    total = len(website.sitemaps)
    try:
        async with launcher(config.chromium_flags) as browser:
            logger.debug("Starting browser instance: %s", browser.version)
            context = await browser.new_context()
            logger.debug("Created isolated browser context")

            async def _sitemap(sitemap: Sitemap, index: int) -> Optional[PoolResult]:
                logger.debug(
                    "Processing pool for sitemap %s (%d/%d)", sitemap.root_url, index + 1, total
                )
                return await process_sitemap(context, config, website, sitemap, tracker)

            try:
                result = await TaskPool(SITEMAP_CONCURRENCY).process(website.sitemaps, _sitemap)
            finally:
                await context.close()
            for err in result.errors:
                logger.error("Sitemap %s aborted: %s", err.item.root_url, err.error)
    finally:
        report = tracker.print_results()
    return report


async def start_conversion(
    cfg: ConverterConfig,
    tracker: Optional[ResultTracker] = None,
    launcher: LauncherT = launch_browser,
) -> ConversionReport:
    """
    Build the website from its sitemaps and print it.

    Raises ConfigurationError when the website is unreachable and
    BrowserLaunchError when Chromium cannot start.
    """
    tracker = tracker or ResultTracker()
    async with SitemapFetcher(cfg) as fetcher:
        website = await Website.build(cfg, fetcher)
    return await convert_website(cfg, website, tracker, launcher)
