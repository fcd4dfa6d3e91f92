"""website2pdf.template: page metadata substitution in header/footer templates.

Placeholders look like ``{{ key }}`` where *key* is a metadata name such as
``title``, ``description`` or ``og:title``. Unknown keys render as an empty
string. ``{{pageNumber}}`` and ``{{totalPages}}`` are left alone for the
browser, as is Chromium's own ``<span class="pageNumber"></span>`` markup.
"""

from __future__ import annotations

import re
from typing import Mapping

__all__ = ["PLACEHOLDER_RE", "PASSTHROUGH_TOKENS", "interpolate"]

PLACEHOLDER_RE = re.compile(r"\{\{\s*([\w.:-]+)\s*\}\}")
PASSTHROUGH_TOKENS = frozenset({"pageNumber", "totalPages"})


def interpolate(template: str, metadata: Mapping[str, str]) -> str:
    """Return *template* with every placeholder replaced from *metadata*."""
    if not template:
        return ""

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in PASSTHROUGH_TOKENS:
            return match.group(0)
        value = metadata.get(key)
        return "" if value is None else str(value)

    return PLACEHOLDER_RE.sub(_substitute, template)
