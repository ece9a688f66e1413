"""Unit tests for section heading detection."""

import pytest

from wikidoc.parsers.heading import is_heading, is_reference_title, parse_heading, split_sections


class TestParseHeading:
    """Tests for heading lines."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("== History ==", ("History", 0)),
            ("==History==", ("History", 0)),
            ("=== Early years ===", ("Early years", 1)),
            ("==== Deep ====", ("Deep", 2)),
            ("= Top =", ("Top", 0)),
        ],
    )
    def test_title_and_depth(self, line: str, expected: tuple[str, int]) -> None:
        """Should map == to depth 0 and each extra = to one level deeper."""
        assert parse_heading(line) == expected

    @pytest.mark.unit
    def test_markup_is_removed_from_title(self) -> None:
        """Should drop templates, refs and tags, and render links."""
        assert parse_heading("=== Early years{{efn|x}} ===") == ("Early years", 1)
        assert parse_heading("== Notes<ref>Smith</ref> ==") == ("Notes", 0)
        assert parse_heading("== [[Toronto]] <small>today</small> ==") == ("Toronto today", 0)

    @pytest.mark.unit
    def test_nested_template_is_removed_from_title(self) -> None:
        """Should drop a template that holds another template."""
        assert parse_heading("== Foo{{a|{{b}}}} ==") == ("Foo", 0)

    @pytest.mark.unit
    def test_equals_sign_in_title(self) -> None:
        """Should keep an equals sign inside the title."""
        assert parse_heading("== a=b ==") == ("a=b", 0)
        assert is_heading("== a=b ==")
        assert not is_heading("=====")

    @pytest.mark.unit
    def test_is_heading(self) -> None:
        """Should accept heading lines only."""
        assert is_heading("== History ==")
        assert is_heading("== History ==  ")
        assert not is_heading("a == b")
        assert not is_heading("History")


class TestSplitSections:
    """Tests for splitting a page at its headings."""

    @pytest.mark.unit
    def test_lead_and_sections(self) -> None:
        """Should give the lead an empty heading."""
        assert split_sections("Intro.\n== History ==\nFounded.") == [
            ("", "Intro.\n"),
            ("== History ==", "\nFounded."),
        ]

    @pytest.mark.unit
    def test_no_lead(self) -> None:
        """Should skip a blank lead."""
        chunks = split_sections("\n== A ==\nText")
        assert [heading for heading, _ in chunks] == ["== A =="]

    @pytest.mark.unit
    def test_empty_untitled_heading_is_skipped(self) -> None:
        """Should skip a heading with no title and no body."""
        assert split_sections("== ==\n\n== History ==\nX") == [("== History ==", "\nX")]

    @pytest.mark.unit
    def test_heading_inside_prose_is_not_split(self) -> None:
        """Should only split at whole heading lines."""
        chunks = split_sections("a == b == c\nmore")
        assert len(chunks) == 1

    @pytest.mark.unit
    def test_heading_with_equals_sign_splits(self) -> None:
        """Should split at a heading whose title holds an equals sign."""
        assert split_sections("== a=b ==\nText here.") == [("== a=b ==", "\nText here.")]


class TestReferenceTitle:
    """Tests for reference section titles."""

    @pytest.mark.unit
    @pytest.mark.parametrize("title", ["References", "references:", "Références", "Einzelnachweise"])
    def test_reference_titles(self, title: str) -> None:
        """Should recognize reference list titles in several languages."""
        assert is_reference_title(title)

    @pytest.mark.unit
    @pytest.mark.parametrize("title", ["History", "Further references", ""])
    def test_other_titles(self, title: str) -> None:
        """Should reject other titles."""
        assert not is_reference_title(title)
