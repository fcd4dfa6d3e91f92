# File: website2pdf/parser/sitemap_parser.py
"""website2pdf.parser.sitemap_parser: parsing sitemap.xml / sitemap index documents."""

from __future__ import annotations

from typing import List, Union

from lxml import etree

_XmlT = Union[str, bytes]


def _parse_root(xml_content: _XmlT) -> etree._Element:
    data = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ValueError(f"invalid XML: {exc}") from exc
    if root is None:
        raise ValueError("document is not XML")
    return root


def parse_sitemap(xml_content: _XmlT) -> List[str]:
    """Parse a sitemap and return the URLs of its ``<loc>`` tags, in document order.

    Args:
        xml_content: sitemap.xml content, text or raw bytes.

    Returns:
        The list of URLs; empty when the document has no ``<loc>`` entry.

    Raises:
        ValueError: when the content is not XML at all.

    Example:
    ```python
    from website2pdf.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        urls = parse_sitemap(f.read())
    ```
    """
    root = _parse_root(xml_content)
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text and loc.text.strip()]


def is_sitemap_index(xml_content: _XmlT) -> bool:
    """True when the document is a ``<sitemapindex>`` pointing to other sitemaps."""
    root = _parse_root(xml_content)
    return etree.QName(root).localname == "sitemapindex"
