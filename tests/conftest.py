# File: tests/conftest.py
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional, Sequence, Set, Tuple

import pytest
from aiohttp import web
from playwright.async_api import Error as PlaywrightError

from website2pdf.config import ConverterConfig


# --------------------------------------------------------------------------- #
#                        Fake Playwright rendering backend                     #
# --------------------------------------------------------------------------- #


class FakeBackend:
    """
    Shared state of the fake browser: what was opened, printed and failed.

    ``events`` holds ``(kind, url)`` tuples in the order they happened, which
    lets tests check how pages of different sitemaps interleave.
    """

    def __init__(
        self,
        titles: Optional[Dict[str, str]] = None,
        metas: Optional[Dict[str, List[Tuple[str, Optional[str]]]]] = None,
        fail_navigation: Sequence[str] = (),
        fail_render: Sequence[str] = (),
        delay: float = 0.01,
    ) -> None:
        self.titles = titles or {}
        self.metas = metas or {}
        self.fail_navigation: Set[str] = set(fail_navigation)
        self.fail_render: Set[str] = set(fail_render)
        self.delay = delay
        self.open_pages = 0
        self.max_open_pages = 0
        self.pages_created = 0
        self.pages_closed = 0
        self.events: List[Tuple[str, str]] = []
        self.printed: List[Tuple[str, str, dict]] = []
        self.launched_flags: Optional[List[str]] = None
        self.contexts_created = 0
        self.browser_closed = False
        self.pages: List["FakePage"] = []

    @asynccontextmanager
    async def launcher(self, flags: Sequence[str] = ()) -> AsyncIterator["FakeBrowser"]:
        self.launched_flags = list(flags)
        try:
            yield FakeBrowser(self)
        finally:
            self.browser_closed = True


class FakeBrowser:
    version = "HeadlessChrome/120.0"

    def __init__(self, backend: FakeBackend) -> None:
        self.backend = backend

    async def new_context(self) -> "FakeContext":
        self.backend.contexts_created += 1
        return FakeContext(self.backend)


class FakeContext:
    def __init__(self, backend: FakeBackend) -> None:
        self.backend = backend
        self.closed = False

    async def new_page(self) -> "FakePage":
        backend = self.backend
        backend.pages_created += 1
        backend.open_pages += 1
        backend.max_open_pages = max(backend.max_open_pages, backend.open_pages)
        page = FakePage(backend)
        backend.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True


class FakePage:
    def __init__(self, backend: FakeBackend) -> None:
        self.backend = backend
        self.url = "about:blank"
        self.requested = "about:blank"
        self.navigation_timeout: Optional[float] = None
        self.default_timeout: Optional[float] = None

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.navigation_timeout = timeout

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    async def goto(self, url: str, wait_until: Optional[str] = None, timeout: Optional[float] = None):
        self.requested = url
        self.backend.events.append(("start", url))
        await asyncio.sleep(self.backend.delay)
        assert wait_until == "networkidle"
        assert timeout == 0
        if url in self.backend.fail_navigation:
            raise PlaywrightError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        self.url = url

    async def title(self) -> str:
        return self.backend.titles.get(self.url, "Page")

    async def eval_on_selector_all(self, selector: str, script: str):
        assert selector == "meta"
        return [m for m in self.backend.metas.get(self.url, []) if m[0]]

    async def pdf(self, path: str, **options) -> bytes:
        await asyncio.sleep(self.backend.delay)
        if self.url in self.backend.fail_render:
            raise PlaywrightError("Printing failed")
        Path(path).write_bytes(b"%PDF-1.4\n%fake\n")
        self.backend.printed.append((self.url, path, options))
        return b""

    async def close(self) -> None:
        self.backend.open_pages -= 1
        self.backend.pages_closed += 1
        self.backend.events.append(("close", self.requested))


@pytest.fixture()
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def make_config(tmp_path):
    """
    Factory for ConverterConfig instances writing into *tmp_path*.
    """

    def _make(**kwargs) -> ConverterConfig:
        kwargs.setdefault("output_dir", tmp_path / "out")
        kwargs.setdefault("template_dir", tmp_path / "template")
        return ConverterConfig(**kwargs)

    return _make


# --------------------------------------------------------------------------- #
#                              Sitemap test server                             #
# --------------------------------------------------------------------------- #


def urlset(*urls: str) -> str:
    entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'
    )


def sitemapindex(*urls: str) -> str:
    entries = "".join(f"<sitemap><loc>{u}</loc></sitemap>" for u in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'
    )


@asynccontextmanager
async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free local port, yield its base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    port = runner.addresses[0][1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


def xml_response(body: str) -> web.Response:
    return web.Response(text=body, content_type="application/xml")
