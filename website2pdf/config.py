"""
Loading and validation of the website2pdf configuration.

The schema is a Pydantic model; values come from an optional YAML/JSON file
and are then overridden by whatever the CLI received explicitly.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

from website2pdf import __version__

DEFAULT_TEMPLATE_DIR = Path("./w2pdf_template")
DEFAULT_OUTPUT_DIR = Path("./w2pdf_output")
DEFAULT_MARGIN_MAX = "50px"
DEFAULT_MARGIN_MIN = "0px"
DEFAULT_HEADER_FILE = "header.html"
DEFAULT_FOOTER_FILE = "footer.html"
DEFAULT_SITEMAP_URL = "http://localhost:1313/sitemap.xml"
DEFAULT_PROCESS_POOL = 10

_MARGIN_FIELDS = ("margin_top", "margin_bottom", "margin_left", "margin_right")


def default_margins(display_header_footer: bool) -> Dict[str, str]:
    """Margins used when none were given explicitly.

    Header and footer are drawn inside the top/bottom margins, so they need
    room when displayed.
    """
    vertical = DEFAULT_MARGIN_MAX if display_header_footer else DEFAULT_MARGIN_MIN
    return {
        "margin_top": vertical,
        "margin_bottom": vertical,
        "margin_left": DEFAULT_MARGIN_MIN,
        "margin_right": DEFAULT_MARGIN_MIN,
    }


class ConverterConfig(BaseModel):
    """Configuration for one conversion run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    sitemap_urls: List[HttpUrl] = Field(
        default_factory=lambda: [DEFAULT_SITEMAP_URL],
        min_length=1,
        validate_default=True,
        description="Sitemap (or sitemap index) URLs to convert.",
    )
    output_dir: Path = Field(DEFAULT_OUTPUT_DIR, description="Root directory for printed PDFs.")
    template_dir: Path = Field(
        DEFAULT_TEMPLATE_DIR, description="Directory holding header.html / footer.html."
    )
    process_pool: int = Field(
        DEFAULT_PROCESS_POOL, ge=1, description="Pages printed concurrently per sitemap."
    )
    display_header_footer: bool = Field(False, description="Print header and footer templates.")
    margin_top: Optional[str] = Field(None, description="Top margin; CSS length.")
    margin_bottom: Optional[str] = Field(None, description="Bottom margin; CSS length.")
    margin_left: Optional[str] = Field(None, description="Left margin; CSS length.")
    margin_right: Optional[str] = Field(None, description="Right margin; CSS length.")
    safe_title: bool = Field(False, description="Strip filesystem-unsafe characters from titles.")
    chromium_flags: List[str] = Field(default_factory=list, description="Extra browser flags.")
    exclude_urls: List[str] = Field(
        default_factory=list, description="Regular expressions of page URLs to skip."
    )
    request_timeout: float = Field(30.0, gt=0, description="Sitemap download timeout (seconds).")
    user_agent: str = Field(f"Website2Pdf/{__version__}", min_length=1)

    @model_validator(mode="after")
    def _fill_default_margins(self) -> ConverterConfig:
        defaults = default_margins(self.display_header_footer)
        for name in _MARGIN_FIELDS:
            value = getattr(self, name)
            if value is None or not value.strip():
                # frozen model: bypass the assignment guard while validating
                object.__setattr__(self, name, defaults[name])
        return self

    @field_validator("chromium_flags", mode="before")
    @classmethod
    def _split_flags(cls, v: Any) -> Any:
        # "--a --b" from the command line or a YAML scalar
        if isinstance(v, str):
            return v.split()
        return v

    @property
    def margins(self) -> Dict[str, str]:
        """Margins in the shape the PDF printer expects."""
        return {
            "top": self.margin_top,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
            "right": self.margin_right,
        }

    @property
    def header_file(self) -> Path:
        return self.template_dir / DEFAULT_HEADER_FILE

    @property
    def footer_file(self) -> Path:
        return self.template_dir / DEFAULT_FOOTER_FILE


_DEFAULT_CFG = Path("website2pdf.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top-level YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top-level JSON must be a mapping, got {type(data).__name__}")
    return data


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ConverterConfig:
    """
    Read YAML or JSON and return a validated ConverterConfig.

    Without *path*, ``./website2pdf.yaml`` is used when present; otherwise the
    built-in defaults apply. Keyword overrides set to ``None`` (or an empty
    sequence) are ignored, so CLI options that were not given never hide a
    value from the file.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    for key, value in overrides.items():
        if value is None or (isinstance(value, (list, tuple)) and not value):
            continue
        data[key] = list(value) if isinstance(value, tuple) else value

    return ConverterConfig(**data)


def dump_config(cfg: ConverterConfig, *, indent: Optional[int] = 2) -> str:
    """JSON representation used by ``website2pdf config``."""
    return cfg.model_dump_json(indent=indent)
