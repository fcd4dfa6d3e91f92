# website2pdf/fetcher.py
"""
Fetcher module: downloads sitemap documents over HTTP.

No retries: a sitemap that cannot be fetched is reported once and skipped
(the run aborts only when no configured root can be fetched).
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from website2pdf.config import ConverterConfig
from website2pdf.errors import SitemapFetchError
from website2pdf.logger import logger


class SitemapFetcher:
    """Downloads sitemap documents with a shared aiohttp session.

    Use as an async context manager to let the fetcher own its session, or
    pass an existing *session* (tests do this).
    """

    def __init__(self, config: ConverterConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> SitemapFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.request_timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> bytes:
        """
        Return the raw body of *url*.

        Raises SitemapFetchError on any network failure, timeout or non-200 status.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        logger.debug("Fetching sitemap %s", url)
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    raise SitemapFetchError(url, f"HTTP {resp.status}")
                return await resp.read()
        except asyncio.TimeoutError as exc:
            raise SitemapFetchError(url, "timed out") from exc
        except ClientError as exc:
            raise SitemapFetchError(url, str(exc) or type(exc).__name__) from exc
