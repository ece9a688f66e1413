"""Unit tests for page-level detection and cleanup."""

import pytest

from wikidoc.parsers.page import (
    extract_categories,
    is_disambiguation,
    is_redirect,
    kill_xml,
    parse_redirect,
    preprocess,
)
from wikidoc.parsers.types import RedirectTarget


class TestRedirect:
    """Tests for redirect detection."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "markup",
        ["#REDIRECT [[Toronto]]", "  #redirect:[[Toronto]]", "#WEITERLEITUNG [[Berlin]]", "#REDIRECTION [[Paris]]"],
    )
    def test_redirects(self, markup: str) -> None:
        """Should detect redirect magic words in several languages."""
        assert is_redirect(markup)

    @pytest.mark.unit
    def test_redirect_must_lead_the_page(self) -> None:
        """Should ignore a redirect line that is not at the start."""
        assert not is_redirect("Some prose.\n#REDIRECT [[Toronto]]")

    @pytest.mark.unit
    def test_target_with_anchor_and_text(self, redirect_markup: str) -> None:
        """Should read the page, anchor and display text."""
        assert parse_redirect(redirect_markup) == RedirectTarget(
            page="Toronto", anchor="History", text="Old Toronto"
        )

    @pytest.mark.unit
    def test_target_underscores(self) -> None:
        """Should normalize underscores in the target."""
        target = parse_redirect("#REDIRECT [[New_York]]")
        assert target is not None
        assert target.page == "New York"
        assert target.to_dict() == {"page": "New York"}

    @pytest.mark.unit
    def test_one_letter_target(self) -> None:
        """Should accept a single-character target."""
        assert is_redirect("#REDIRECT [[A]]")
        target = parse_redirect("#REDIRECT [[A]]")
        assert target is not None
        assert target.page == "A"

    @pytest.mark.unit
    def test_not_a_redirect(self) -> None:
        """Should return None for a normal page."""
        assert parse_redirect("Toronto is a city.") is None


class TestDisambiguation:
    """Tests for disambiguation detection."""

    @pytest.mark.unit
    def test_template(self, disambiguation_markup: str) -> None:
        """Should detect a disambiguation template with arguments."""
        assert is_disambiguation(disambiguation_markup)

    @pytest.mark.unit
    @pytest.mark.parametrize("markup", ["{{dab}}", "{{ Disambig }}", "x __DISAMBIG__", "{{Begriffsklärung}}"])
    def test_markers(self, markup: str) -> None:
        """Should detect templates and the magic word."""
        assert is_disambiguation(markup)

    @pytest.mark.unit
    @pytest.mark.parametrize("markup", ["{{Dabble}}", "{{disambiguation needed}}", "Paris is a city."])
    def test_non_markers(self, markup: str) -> None:
        """Should not match longer names or plain text."""
        assert not is_disambiguation(markup)

    @pytest.mark.unit
    def test_title(self) -> None:
        """Should detect a (disambiguation) title."""
        assert is_disambiguation("Text.", title="Mercury (disambiguation)")
        assert not is_disambiguation("Text.", title="Mercury")


class TestCategories:
    """Tests for category extraction."""

    @pytest.mark.unit
    def test_sort_key_is_dropped(self) -> None:
        """Should keep the name and drop the sort key."""
        assert extract_categories("Text.\n[[Category:Cities in Ontario|Toronto]]") == (
            ["Cities in Ontario"],
            "Text.\n",
        )

    @pytest.mark.unit
    def test_duplicates_and_localized_namespaces(self) -> None:
        """Should de-duplicate names and accept localized namespaces."""
        categories, text = extract_categories("[[Category:A]][[category:A]][[Kategorie:B]]")
        assert categories == ["A", "B"]
        assert text == ""


class TestPreprocess:
    """Tests for page cleanup."""

    @pytest.mark.unit
    def test_comments_and_magic_words(self) -> None:
        """Should remove comments and behavior switches."""
        assert preprocess("A<!-- hidden -->B __NOTOC__") == "AB "

    @pytest.mark.unit
    def test_entities(self) -> None:
        """Should map common entities to characters."""
        assert preprocess("a &amp; b&nbsp;c") == "a & b c"

    @pytest.mark.unit
    def test_signatures_and_rules(self) -> None:
        """Should remove signatures and horizontal rules."""
        assert preprocess("Signed ~~~~") == "Signed "
        assert preprocess("Line\n----\nNext") == "Line\n\nNext"

    @pytest.mark.unit
    def test_interlanguage_lines(self) -> None:
        """Should drop known interlanguage lines and keep others."""
        assert preprocess("Text\n[[fr:Toronto]]\n[[Foo:Bar]]") == "Text\n\n[[Foo:Bar]]"

    @pytest.mark.unit
    def test_kill_xml(self) -> None:
        """Should drop ignored tags with their content but keep ref and gallery."""
        assert kill_xml("a<math>x^2</math>b") == "a b"
        assert kill_xml("a<b>bold</b>c") == "a bold c"
        assert kill_xml("x<br/>y") == "x y"
        assert kill_xml("p<ref>r</ref>") == "p<ref>r</ref>"
        assert kill_xml("<gallery>\nA.jpg\n</gallery>") == "<gallery>\nA.jpg\n</gallery>"
