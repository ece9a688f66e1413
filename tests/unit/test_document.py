"""Unit tests for the Document, Section and Paragraph model."""

import pytest

from wikidoc.document import Document, JsonOptions, Paragraph, Section
from wikidoc.parsers.sentence import from_text
from wikidoc.parsers.types import Image, Infobox, RedirectTarget, Table, Template, WikiList


def _section(title: str, depth: int, *sentences: str) -> Section:
    paragraph = Paragraph(sentences=[from_text(s) for s in sentences])
    return Section(title=title, depth=depth, paragraphs=[paragraph] if sentences else [])


@pytest.fixture
def outline() -> Document:
    """Sections at depths 0, 0, 1, 2, 1, 0."""
    return Document(
        title="Outline",
        sections=[
            _section("", 0, "Lead text."),
            _section("History", 0, "Old."),
            _section("Early", 1, "Older."),
            _section("Earliest", 2, "Oldest."),
            _section("Late", 1, "Newer."),
            _section("Geography", 0, "Land."),
        ],
    )


class TestNavigation:
    """Tests for section navigation by index and depth."""

    @pytest.mark.unit
    def test_indexes_follow_order(self, outline: Document) -> None:
        """Should number sections by position."""
        assert [section.index for section in outline.sections] == [0, 1, 2, 3, 4, 5]

    @pytest.mark.unit
    def test_lookup(self, outline: Document) -> None:
        """Should find sections by index or case-insensitive title."""
        assert outline.section(2).title == "Early"
        assert outline.section("history").index == 1
        assert outline.section(99) is None
        assert outline.section("Missing") is None

    @pytest.mark.unit
    def test_children_are_all_descendants(self, outline: Document) -> None:
        """Should return every deeper section until the depth returns."""
        history = outline.section("History")
        assert [s.title for s in outline.children(history)] == ["Early", "Earliest", "Late"]
        assert outline.children(outline.section("Geography")) == []

    @pytest.mark.unit
    def test_parent(self, outline: Document) -> None:
        """Should return the nearest shallower section."""
        assert outline.parent(outline.section("Earliest")).title == "Early"
        assert outline.parent(outline.section("Late")).title == "History"
        assert outline.parent(outline.section("History")) is None

    @pytest.mark.unit
    def test_next_sibling(self, outline: Document) -> None:
        """Should skip deeper sections and stop at a shallower one."""
        assert outline.next_sibling(outline.section("History")).title == "Geography"
        assert outline.next_sibling(outline.section("Early")).title == "Late"
        assert outline.next_sibling(outline.section("Late")) is None
        assert outline.next_sibling(outline.section("Earliest")) is None

    @pytest.mark.unit
    def test_previous_sibling(self, outline: Document) -> None:
        """Should look back at the same depth and stop at a shallower one."""
        assert outline.previous_sibling(outline.section("Late")).title == "Early"
        assert outline.previous_sibling(outline.section("Geography")).title == "History"
        assert outline.previous_sibling(outline.section("Early")) is None
        assert outline.previous_sibling(outline.section(0)) is None

    @pytest.mark.unit
    def test_last_sibling(self, outline: Document) -> None:
        """Should follow next siblings to the end, or return the section itself."""
        assert outline.last_sibling(outline.section("Early")).title == "Late"
        assert outline.last_sibling(outline.section("History")).title == "Geography"
        assert outline.last_sibling(outline.section("Earliest")).title == "Earliest"

    @pytest.mark.unit
    def test_previous_section(self, outline: Document) -> None:
        """Should return the section just before, whatever its depth."""
        assert outline.previous_section(outline.section("Late")).title == "Earliest"
        assert outline.previous_section(outline.section(0)) is None

    @pytest.mark.unit
    def test_remove_section_takes_children(self, outline: Document) -> None:
        """Should remove the section and its children, then renumber."""
        outline.remove_section(outline.section("History"))
        assert [s.title for s in outline.sections] == ["", "Geography"]
        assert [s.index for s in outline.sections] == [0, 1]


class TestAggregates:
    """Tests for document-wide collections."""

    @pytest.mark.unit
    def test_sentences_and_text(self, outline: Document) -> None:
        """Should collect sentences in order and join section text."""
        assert [s.text for s in outline.sentences()][:2] == ["Lead text.", "Old."]
        assert outline.text().startswith("Lead text.\n\nOld.")

    @pytest.mark.unit
    def test_title_falls_back_to_first_bold(self) -> None:
        """Should use the first bold run of the lead when no title is given."""
        doc = Document(sections=[_section("", 0, "'''Paris''' is a city.")])
        assert doc.title == "Paris"
        doc.title = "Paris, France"
        assert doc.title == "Paris, France"
        assert Document().title is None

    @pytest.mark.unit
    def test_templates_by_name_and_coordinates(self) -> None:
        """Should filter templates by name and collect coordinate records."""
        section = Section(
            templates=[
                Template(name="coord", data={"lat": 1.0, "lon": 2.0}),
                Template(name="navbox", data={"title": "x"}),
            ]
        )
        doc = Document(sections=[section])
        assert [t.name for t in doc.templates("Coord")] == ["coord"]
        assert len(doc.templates()) == 2
        assert doc.coordinates() == [{"lat": 1.0, "lon": 2.0}]

    @pytest.mark.unit
    def test_images_include_infobox_image(self) -> None:
        """Should list paragraph images then infobox lead images."""
        paragraph = Paragraph(images=[Image(file="File:A.jpg")])
        infobox = Infobox(type="city", data={"image": from_text("B.jpg")})
        doc = Document(sections=[Section(paragraphs=[paragraph], infoboxes=[infobox])])
        assert [image.file for image in doc.images()] == ["File:A.jpg", "File:B.jpg"]
        assert doc.infobox() is infobox

    @pytest.mark.unit
    def test_link_order(self) -> None:
        """Should list infobox links, then sentences, tables and lists."""
        section = Section(
            infoboxes=[Infobox(type="x", data={"a": from_text("[[Infobox link]]")})],
            paragraphs=[
                Paragraph(
                    sentences=[from_text("[[Sentence link]].")],
                    lists=[WikiList(items=(from_text("[[List link]]"),))],
                )
            ],
            tables=[Table(rows=({"col1": from_text("[[Table link]]")},))],
        )
        pages = [link.page for link in Document(sections=[section]).links()]
        assert pages == ["Infobox link", "Sentence link", "Table link", "List link"]

    @pytest.mark.unit
    def test_interwiki(self) -> None:
        """Should collect interwiki links only."""
        doc = Document(sections=[_section("", 0, "See [[wikivoyage:Toronto|guide]] and [[Toronto]].")])
        assert [link.wiki for link in doc.interwiki()] == ["wikivoyage"]


class TestPageKinds:
    """Tests for redirect and disambiguation documents."""

    @pytest.mark.unit
    def test_redirect_has_no_sections(self) -> None:
        """Should drop sections on a redirect."""
        doc = Document(type="redirect", sections=[_section("", 0, "x.")], redirect_to=RedirectTarget(page="A"))
        assert doc.is_redirect()
        assert doc.sections == []
        data = doc.to_dict()
        assert data["is_redirect"] is True
        assert data["redirect_to"] == {"page": "A"}
        assert data["sections"] == []

    @pytest.mark.unit
    def test_disambiguation_flag(self) -> None:
        """Should mark disambiguation pages in the output."""
        doc = Document(type="disambiguation")
        assert doc.is_disambiguation()
        assert doc.to_dict()["is_disambiguation"] is True


class TestToDict:
    """Tests for JSON output options."""

    @pytest.mark.unit
    def test_default_keys(self, outline: Document) -> None:
        """Should include title, page id, categories and sections by default."""
        data = outline.to_dict()
        assert set(data) == {"title", "page_id", "categories", "sections"}
        assert data["sections"][1] == {
            "title": "History",
            "depth": 0,
            "paragraphs": [{"sentences": [{"text": "Old."}]}],
        }

    @pytest.mark.unit
    def test_optional_keys(self, outline: Document) -> None:
        """Should add the optional top-level collections on request."""
        data = outline.to_dict(JsonOptions(sections=False, plaintext=True, images=True, references=True))
        assert "sections" not in data
        assert data["plaintext"] == outline.text()
        assert data["images"] == []
        assert data["references"] == []

    @pytest.mark.unit
    def test_encode_keys(self) -> None:
        """Should escape dotted keys on request."""
        section = Section(templates=[Template(name="x", data={"a.b": "1"})])
        data = Document(sections=[section]).to_dict(JsonOptions(encode_keys=True))
        assert data["sections"][0]["templates"] == [{"template": "x", "a\\u002eb": "1"}]

    @pytest.mark.unit
    def test_section_tables_are_rows(self) -> None:
        """Should serialize each table as its list of rows."""
        section = Section(tables=[Table(rows=({"A": from_text("1")},))])
        assert section.to_dict()["tables"] == [[{"A": {"text": "1"}}]]


class TestParagraph:
    """Tests for paragraph helpers."""

    @pytest.mark.unit
    def test_text_and_empty(self) -> None:
        """Should join sentences and list text, and report emptiness."""
        paragraph = Paragraph(
            sentences=[from_text("One."), from_text("Two.")],
            lists=[WikiList(items=(from_text("a"), from_text("b")))],
        )
        assert paragraph.text() == "One. Two.\n * a\n * b"
        assert not paragraph.is_empty()
        assert Paragraph().is_empty()
