"""Unit tests for the link resolver."""

import pytest

from wikidoc.parsers.link import parse_interwiki, parse_links, titlecase


class TestInternalLinks:
    """Tests for [[...]] links."""

    @pytest.mark.unit
    def test_simple_link(self) -> None:
        """Should render the target and record a link without display text."""
        links, text = parse_links("Visit [[Toronto]] today.")
        assert text == "Visit Toronto today."
        assert links[0].page == "Toronto"
        assert links[0].text is None
        assert links[0].type == "internal"

    @pytest.mark.unit
    def test_piped_link(self) -> None:
        """Should render the label and keep the target as the page."""
        links, text = parse_links("He visited [[Paris|the city]] in 1990.")
        assert text == "He visited the city in 1990."
        assert links[0].page == "Paris"
        assert links[0].text == "the city"

    @pytest.mark.unit
    def test_first_letter_is_capitalized(self) -> None:
        """Should capitalize the page but render the text as written."""
        links, text = parse_links("a [[toronto]] b")
        assert text == "a toronto b"
        assert links[0].page == "Toronto"
        assert links[0].text == "toronto"

    @pytest.mark.unit
    def test_underscores_become_spaces(self) -> None:
        """Should map underscores in the target to spaces."""
        links, text = parse_links("[[New_York]]")
        assert text == "New York"
        assert links[0].page == "New York"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("markup", "rendered"),
        [("[[dog]]s bark", "dogs bark"), ("[[Toronto]]'s mayor", "Toronto's mayor")],
    )
    def test_suffix_joins_the_display_text(self, markup: str, rendered: str) -> None:
        """Should fold a trailing suffix into the link text."""
        links, text = parse_links(markup)
        assert text == rendered
        assert links[0].text == rendered.split(" ")[0]

    @pytest.mark.unit
    def test_anchor(self) -> None:
        """Should split a section anchor off the page."""
        links, text = parse_links("[[Toronto#History|history of Toronto]]")
        assert text == "history of Toronto"
        assert links[0].page == "Toronto"
        assert links[0].anchor == "History"

    @pytest.mark.unit
    def test_pipe_trick(self) -> None:
        """Should drop a trailing parenthetical for an empty label."""
        links, text = parse_links("[[Paris (band)|]]")
        assert text == "Paris"
        assert links[0].page == "Paris (band)"

    @pytest.mark.unit
    def test_same_page_anchor_has_no_link(self) -> None:
        """Should render [[#Section|label]] as its label only."""
        links, text = parse_links("see [[#History|the history]]")
        assert text == "see the history"
        assert links == []

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("markup", "rendered"),
        [
            ("[[Category:Cities]]", "Category:Cities"),
            ("[[File:Tower.jpg]]", "File:Tower.jpg"),
            ("[[:Category:Cities|cities]]", "cities"),
        ],
    )
    def test_ignored_namespaces_render_as_text(self, markup: str, rendered: str) -> None:
        """Should render category and file links as text without a link."""
        links, text = parse_links(markup)
        assert links == []
        assert text == rendered


class TestInterwikiLinks:
    """Tests for allow-listed interwiki prefixes."""

    @pytest.mark.unit
    def test_language_prefix(self) -> None:
        """Should record the lowercase prefix and the remaining page."""
        links, _ = parse_links("[[fr:Paris|Paris en français]]")
        assert links[0].type == "interwiki"
        assert links[0].wiki == "fr"
        assert links[0].page == "Paris"
        assert links[0].text == "Paris en français"

    @pytest.mark.unit
    def test_unlabelled_interwiki_displays_page(self) -> None:
        """Should render an unlabelled interwiki link without its prefix."""
        links, text = parse_links("[[fr:Paris]]")
        assert text == "Paris"
        assert links[0].wiki == "fr"
        assert links[0].page == "Paris"
        assert links[0].text is None

    @pytest.mark.unit
    def test_unknown_prefix_is_part_of_title(self) -> None:
        """Should treat a colon after an unknown prefix as part of the title."""
        links, _ = parse_links("[[Star Trek: Voyager]]")
        assert links[0].type == "internal"
        assert links[0].page == "Star Trek: Voyager"

    @pytest.mark.unit
    def test_parse_interwiki(self) -> None:
        """Should split only allow-listed prefixes."""
        assert parse_interwiki("wikivoyage:Toronto") == ("wikivoyage", "Toronto")
        assert parse_interwiki("Star Trek: Voyager") == (None, "Star Trek: Voyager")


class TestExternalLinks:
    """Tests for [url text] links."""

    @pytest.mark.unit
    def test_external_link_with_label(self) -> None:
        """Should render the label and record the URL."""
        links, text = parse_links("See [https://www.toronto.ca Official website].")
        assert text == "See Official website."
        assert links[0].type == "external"
        assert links[0].site == "https://www.toronto.ca"
        assert links[0].text == "Official website"
        assert links[0].page is None

    @pytest.mark.unit
    def test_bare_external_link(self) -> None:
        """Should render nothing for an unlabeled external link."""
        links, text = parse_links("Home: [https://example.org]")
        assert text == "Home: "
        assert links[0].text is None

    @pytest.mark.unit
    def test_external_link_first(self) -> None:
        """Should list external links before internal ones."""
        links, _ = parse_links("[[Toronto]] and [https://example.org site]")
        assert [link.type for link in links] == ["external", "internal"]


class TestHelpers:
    """Tests for small link helpers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(("title", "expected"), [("paris", "Paris"), ("iPhone", "IPhone"), ("", "")])
    def test_titlecase(self, title: str, expected: str) -> None:
        """Should upper-case the first character only."""
        assert titlecase(title) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "markup",
        [
            "He visited [[Paris|the city]] in 1990.",
            "[[dog]]s and [[fr:Chien|chiens]] and [https://example.org a site]",
            "[[Category:Cities]] [[Toronto#History]]",
        ],
    )
    def test_rendered_text_has_no_links(self, markup: str) -> None:
        """Re-parsing rendered text should find nothing and change nothing."""
        _, text = parse_links(markup)
        links, again = parse_links(text)
        assert links == []
        assert again == text

    @pytest.mark.unit
    def test_to_dict_omits_empty_fields(self) -> None:
        """Should serialize only the fields that are set."""
        links, _ = parse_links("[[Toronto#History|old town]]")
        assert links[0].to_dict() == {
            "type": "internal",
            "page": "Toronto",
            "text": "old town",
            "anchor": "History",
        }
