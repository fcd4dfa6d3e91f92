"""website2pdf.utils: mapping page URLs and titles to filesystem-safe paths, directory creation."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence, Union
from urllib.parse import unquote, urlparse

from website2pdf.logger import logger

__all__: Sequence[str] = (
    "DEFAULT_FILENAME",
    "to_file_path",
    "to_filename",
    "sanitize_segment",
    "ensure_directory",
)

DEFAULT_FILENAME = "untitled"
MAX_FILENAME_LENGTH = 200

# characters rejected by at least one common filesystem, plus control chars
_UNSAFE_RE = re.compile(r'[/\\:*?"<>|\x00-\x1f\x7f]')
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_segment(segment: str) -> str:
    """Replace unsafe characters in one path component with ``_``."""
    cleaned = _UNSAFE_RE.sub("_", segment).strip()
    if cleaned in ("", ".", ".."):
        return "_"
    return cleaned


def to_file_path(url: str) -> str:
    """Relative directory for *url*: host first, then one level per path segment.

    ``https://example.com:8443/blog/post-1/`` → ``example.com_8443/blog/post-1``.
    The result never contains ``..`` and never starts with ``/``.
    """
    parsed = urlparse(url)
    host = parsed.hostname or "unknown-host"
    if parsed.port:
        host = f"{host}_{parsed.port}"
    segments = [sanitize_segment(host)]
    segments.extend(
        sanitize_segment(unquote(seg)) for seg in parsed.path.split("/") if seg
    )
    path = str(PurePosixPath(*segments))
    logger.debug("File path for %s: %s", url, path)
    return path


def to_filename(title: Optional[str], safe_mode: bool) -> str:
    """Filename (without extension) for a page title.

    Raw mode returns the title as is; safe mode strips unsafe characters,
    collapses whitespace and trims leading/trailing dots and spaces. An empty
    result falls back to :data:`DEFAULT_FILENAME`.

    Raw mode is not path-safe: a title such as ``../x`` or one containing
    ``/`` ends up outside its page directory, or even outside ``output_dir``.
    Use safe mode for sites whose titles are not trusted.
    """
    if not title:
        return DEFAULT_FILENAME
    if not safe_mode:
        return title

    name = _WHITESPACE_RE.sub(" ", title)
    name = _UNSAFE_RE.sub("_", name).strip(" .")
    name = name[:MAX_FILENAME_LENGTH].rstrip(" .")
    return name or DEFAULT_FILENAME


async def ensure_directory(path: Union[str, Path]) -> bool:
    """Create *path* (and parents) if needed; True when it was created."""
    p = Path(path)
    if p.is_dir():
        return False
    await asyncio.to_thread(p.mkdir, parents=True, exist_ok=True)
    logger.debug("Directory %s created", p)
    return True
