"""Shared pytest fixtures for wikidoc tests."""

from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest

from wikidoc.parsers.registry import TemplateRegistry, default_registry

FIXTURES_DIR = Path(__file__).parent / "fixtures"
WIKITEXT_DIR = FIXTURES_DIR / "wikitext"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def wikitext_dir() -> Path:
    """Return path to wikitext page fixtures."""
    return WIKITEXT_DIR


@pytest.fixture
def load_fixture() -> Callable[[str], str]:
    """Factory fixture to load wikitext fixture files.

    Usage:
        def test_something(load_fixture):
            markup = load_fixture("toronto.txt")
    """

    def _load(name: str) -> str:
        path = WIKITEXT_DIR / name
        return path.read_text(encoding="utf-8")

    return _load


@pytest.fixture
def toronto_markup(load_fixture: Callable[[str], str]) -> str:
    """Sample article with an infobox, sections, a table, lists and refs."""
    return load_fixture("toronto.txt")


@pytest.fixture
def redirect_markup(load_fixture: Callable[[str], str]) -> str:
    """Sample redirect page."""
    return load_fixture("redirect.txt")


@pytest.fixture
def disambiguation_markup(load_fixture: Callable[[str], str]) -> str:
    """Sample disambiguation page."""
    return load_fixture("disambiguation.txt")


@pytest.fixture
def table_spans_markup(load_fixture: Callable[[str], str]) -> str:
    """Sample table with rowspan and colspan cells."""
    return load_fixture("table_spans.txt")


@pytest.fixture
def today() -> date:
    """Fixed clock for date-relative templates."""
    return date(2024, 1, 1)


@pytest.fixture
def registry() -> TemplateRegistry:
    """Fresh copy of the built-in template handlers."""
    return default_registry()
