"""Project configuration loaded from pyproject.toml."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel


class WikidocConfig(BaseModel):
    """Configuration for the wikidoc parser.

    The table thresholds were tuned against the Wikipedia corpus; they are
    kept as settings rather than re-derived.
    """

    # Template nesting passes (top level counts as 1)
    max_template_depth: int = 3

    # Table heuristics
    table_header_min_rows: int = 3
    colspan_drop_threshold: int = 3

    # Span caps for regex-based extractors
    max_ref_length: int = 1800
    max_ref_attr_length: int = 200
    max_comment_length: int = 3000
    max_tag_body_length: int = 1800
    max_link_length: int = 160
    max_format_span: int = 2500
    redirect_scan_limit: int = 2000

    # Images
    image_base_url: str = "https://upload.wikimedia.org/wikipedia/commons"
    thumbnail_width: int = 300


@lru_cache(maxsize=1)
def load_config() -> WikidocConfig:
    """Load configuration from pyproject.toml.

    Returns:
        WikidocConfig with settings from [tool.wikidoc] section,
        falling back to defaults if not found.
    """
    pyproject_path = _find_pyproject()
    if pyproject_path is None:
        return WikidocConfig()

    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    tool_config: dict[str, Any] = data.get("tool", {}).get("wikidoc", {})
    return WikidocConfig(**tool_config)


def _find_pyproject() -> Path | None:
    """Find pyproject.toml by walking up from current file."""
    current = Path(__file__).resolve().parent
    for _ in range(10):  # Max 10 levels up
        candidate = current / "pyproject.toml"
        if candidate.exists():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


# Convenience accessor
config = load_config()
