"""
Rendering backend: a headless Chromium driven through Playwright.

Only the small surface the pipeline needs lives here: launching the browser
and reading page metadata. Pages and contexts are used straight from the
Playwright async API so a test double only has to mimic those few calls.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Sequence, Tuple

from playwright.async_api import Browser, Error as PlaywrightError, Page, async_playwright

from website2pdf.errors import BrowserLaunchError
from website2pdf.logger import logger

__all__ = ["launch_browser", "browser_launch_args", "extract_metadata", "META_TAGS_SCRIPT"]

META_TAGS_SCRIPT = """
metas => metas
    .map(meta => [meta.getAttribute('name'), meta.getAttribute('content')])
    .filter(pair => pair[0])
"""


def browser_launch_args(chromium_flags: Sequence[str]) -> Dict[str, object]:
    """Keyword arguments for ``chromium.launch``."""
    return {"headless": True, "args": list(chromium_flags)}


@asynccontextmanager
async def launch_browser(chromium_flags: Sequence[str] = ()) -> AsyncIterator[Browser]:
    """Start Playwright and Chromium; both are shut down on exit."""
    try:
        playwright = await async_playwright().start()
    except PlaywrightError as exc:
        raise BrowserLaunchError(f"Unable to start Playwright: {exc}") from exc

    try:
        browser = await playwright.chromium.launch(**browser_launch_args(chromium_flags))
    except PlaywrightError as exc:
        await playwright.stop()
        raise BrowserLaunchError(
            f"Unable to launch Chromium: {exc}. "
            "Install it with: playwright install chromium --with-deps"
        ) from exc

    try:
        yield browser
    finally:
        await browser.close()
        await playwright.stop()


async def extract_metadata(page: Page) -> Dict[str, str]:
    """Title plus every named ``<meta>`` tag of the loaded page."""
    metadata: Dict[str, str] = {"title": await page.title()}
    pairs: List[Tuple[str, Optional[str]]] = await page.eval_on_selector_all(
        "meta", META_TAGS_SCRIPT
    )
    for name, content in pairs:
        if name:
            metadata[name] = content or ""
    logger.debug("Metadata for %s: %s", page.url, sorted(metadata))
    return metadata
