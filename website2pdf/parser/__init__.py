"""website2pdf.parser: document parsers."""

from website2pdf.parser.sitemap_parser import is_sitemap_index, parse_sitemap

__all__ = ["is_sitemap_index", "parse_sitemap"]
