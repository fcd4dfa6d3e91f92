"""
Data models for website2pdf: sitemaps, the website they belong to and the
header/footer template pair.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Pattern, Sequence, Tuple

from website2pdf.config import ConverterConfig
from website2pdf.errors import ConfigurationError, SitemapFetchError
from website2pdf.fetcher import SitemapFetcher
from website2pdf.logger import logger
from website2pdf.parser.sitemap_parser import is_sitemap_index, parse_sitemap


def compile_patterns(patterns: Iterable[str]) -> Tuple[Pattern[str], ...]:
    """Compile exclude expressions; a bad expression is a configuration error."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise ConfigurationError(f"Invalid exclude pattern {pattern!r}: {exc}") from exc
    return tuple(compiled)


def _parse_document(url: str, content: bytes) -> List[str]:
    try:
        return parse_sitemap(content)
    except ValueError as exc:
        raise SitemapFetchError(url, str(exc)) from exc


@dataclass(frozen=True, slots=True)
class Sitemap:
    """One sitemap document and the page URLs it lists."""

    root_url: str
    urls: Tuple[str, ...] = ()

    @classmethod
    def from_document(
        cls,
        root_url: str,
        content: bytes,
        exclude: Sequence[Pattern[str]] = (),
    ) -> Sitemap:
        urls = _parse_document(root_url, content)
        kept = tuple(u for u in urls if not any(p.search(u) for p in exclude))
        if len(kept) != len(urls):
            logger.debug("Excluded %d URL(s) from %s", len(urls) - len(kept), root_url)
        return cls(root_url=root_url, urls=kept)

    @classmethod
    async def build(
        cls,
        root_url: str,
        fetcher: SitemapFetcher,
        exclude: Sequence[Pattern[str]] = (),
    ) -> Sitemap:
        """Fetch and parse *root_url*; raises SitemapFetchError on failure."""
        content = await fetcher.fetch(root_url)
        sitemap = cls.from_document(root_url, content, exclude)
        logger.debug("Sitemap %s lists %d URL(s)", root_url, len(sitemap.urls))
        return sitemap


@dataclass(frozen=True, slots=True)
class PdfTemplate:
    """Raw header and footer HTML, before metadata interpolation."""

    header: str = ""
    footer: str = ""

    @staticmethod
    def _read(path: Path) -> str:
        if not path.is_file():
            logger.debug("Template %s not found, using an empty one", path)
            return ""
        return path.read_text(encoding="utf-8")

    @classmethod
    def load(cls, config: ConverterConfig) -> PdfTemplate:
        return cls(header=cls._read(config.header_file), footer=cls._read(config.footer_file))


@dataclass(frozen=True, slots=True)
class Website:
    """Everything a conversion run needs, built once at startup."""

    config: ConverterConfig
    pdf_template: PdfTemplate = field(default_factory=PdfTemplate)
    sitemaps: Tuple[Sitemap, ...] = ()

    @property
    def sitemap_urls(self) -> List[str]:
        return [str(u) for u in self.config.sitemap_urls]

    @classmethod
    async def build(cls, config: ConverterConfig, fetcher: SitemapFetcher) -> Website:
        """
        Resolve templates and sitemaps.

        A configured sitemap URL or sitemap index child that fails is logged
        and skipped. Only when no configured sitemap URL can be fetched at all
        is the website unreachable: ConfigurationError.
        """
        exclude = compile_patterns(config.exclude_urls)
        template = PdfTemplate.load(config)
        sitemaps: List[Sitemap] = []
        root_urls = [str(u) for u in config.sitemap_urls]
        failures: List[str] = []

        for root_url in root_urls:
            try:
                content = await fetcher.fetch(root_url)
                index = is_sitemap_index(content)
                if not index:
                    sitemaps.append(Sitemap.from_document(root_url, content, exclude))
                    continue
            except SitemapFetchError as exc:
                logger.warning("%s", exc)
                failures.append(str(exc))
                continue
            except ValueError as exc:
                logger.warning("Invalid sitemap %s: %s", root_url, exc)
                failures.append(f"Invalid sitemap {root_url}: {exc}")
                continue

            children = _parse_document(root_url, content)
            logger.info("Sitemap index %s references %d sitemap(s)", root_url, len(children))
            for child in children:
                try:
                    sitemaps.append(await Sitemap.build(child, fetcher, exclude))
                except SitemapFetchError as exc:
                    logger.warning("%s", exc)

        if len(failures) == len(root_urls):
            raise ConfigurationError(f"Website unreachable: {'; '.join(failures)}")
        return cls(config=config, pdf_template=template, sitemaps=tuple(sitemaps))
