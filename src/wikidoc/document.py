"""Document model: Document, Section and Paragraph.

A Document owns its sections as a flat list. Sections know their position
(``index``) and ``depth`` but hold no reference back to the Document, so
sibling, parent and child navigation lives on the Document and is computed
from those two numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from wikidoc.encoding import encode_keys
from wikidoc.parsers.types import (
    DocumentType,
    Image,
    Infobox,
    Link,
    RedirectTarget,
    Reference,
    Sentence,
    Table,
    Template,
    WikiList,
)

# Template names that carry a coordinate record
COORDINATE_TEMPLATES: frozenset[str] = frozenset(["coord", "coor"])


@dataclass(frozen=True)
class JsonOptions:
    """What :meth:`Document.to_dict` includes.

    Attributes:
        title: Include the page title.
        page_id: Include the page id.
        categories: Include category names.
        sections: Include every section.
        coordinates: Include coordinate records.
        infoboxes: Include infoboxes at the top level.
        images: Include images at the top level.
        plaintext: Include the document's plain text.
        references: Include references at the top level.
        encode_keys: Escape keys for stores that reject "." and "$".
    """

    title: bool = True
    page_id: bool = True
    categories: bool = True
    sections: bool = True
    coordinates: bool = False
    infoboxes: bool = False
    images: bool = False
    plaintext: bool = False
    references: bool = False
    encode_keys: bool = False


@dataclass
class Paragraph:
    """A blank-line-delimited block of a section."""

    sentences: list[Sentence] = field(default_factory=list)
    lists: list[WikiList] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    wiki: str = ""

    def links(self) -> list[Link]:
        links = [link for sentence in self.sentences for link in sentence.links]
        links.extend(link for wiki_list in self.lists for link in wiki_list.links())
        return links

    def interwiki(self) -> list[Link]:
        return [link for link in self.links() if link.type == "interwiki"]

    def text(self) -> str:
        parts = [" ".join(sentence.text for sentence in self.sentences)]
        parts.extend(wiki_list.text() for wiki_list in self.lists)
        return "\n".join(part for part in parts if part)

    def is_empty(self) -> bool:
        return not (self.sentences or self.lists or self.images)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"sentences": [sentence.to_dict() for sentence in self.sentences]}
        if self.lists:
            data["lists"] = [wiki_list.to_dict() for wiki_list in self.lists]
        if self.images:
            data["images"] = [image.to_dict() for image in self.images]
        return data


@dataclass
class Section:
    """A heading-delimited region of a page.

    Attributes:
        title: Rendered heading text; empty for the lead section.
        depth: 0 for ``==`` headings, one more per extra ``=``.
        index: Position in the owning Document's section list.
        paragraphs: Paragraphs in order.
        tables: Tables in order.
        templates: Generic template records.
        infoboxes: Infoboxes found in the section.
        references: Citations found in the section.
        wiki: The section's source markup.
    """

    title: str = ""
    depth: int = 0
    index: int = 0
    paragraphs: list[Paragraph] = field(default_factory=list)
    tables: list[Table] = field(default_factory=list)
    templates: list[Template] = field(default_factory=list)
    infoboxes: list[Infobox] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    wiki: str = ""

    def sentences(self) -> list[Sentence]:
        return [sentence for paragraph in self.paragraphs for sentence in paragraph.sentences]

    def lists(self) -> list[WikiList]:
        return [wiki_list for paragraph in self.paragraphs for wiki_list in paragraph.lists]

    def images(self) -> list[Image]:
        return [image for paragraph in self.paragraphs for image in paragraph.images]

    def links(self) -> list[Link]:
        """Links from infoboxes, sentences, tables and lists, in that order."""
        links = [link for infobox in self.infoboxes for link in infobox.links()]
        links.extend(link for sentence in self.sentences() for link in sentence.links)
        links.extend(link for table in self.tables for link in table.links())
        links.extend(link for wiki_list in self.lists() for link in wiki_list.links())
        return links

    def interwiki(self) -> list[Link]:
        return [link for paragraph in self.paragraphs for link in paragraph.interwiki()]

    def coordinates(self) -> list[dict[str, Any]]:
        return [template.data for template in self.templates if template.name in COORDINATE_TEMPLATES]

    def text(self) -> str:
        return "\n\n".join(paragraph.text() for paragraph in self.paragraphs if paragraph.text())

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title, "depth": self.depth}
        data["paragraphs"] = [paragraph.to_dict() for paragraph in self.paragraphs]
        if self.tables:
            data["tables"] = [table.to_dict()["rows"] for table in self.tables]
        if self.templates:
            data["templates"] = [template.to_dict() for template in self.templates]
        if self.infoboxes:
            data["infoboxes"] = [infobox.to_dict() for infobox in self.infoboxes]
        if self.references:
            data["references"] = [reference.to_dict() for reference in self.references]
        return data


class Document:
    """The parsed page: sections plus page-level metadata.

    Attributes:
        page_id: Identifier supplied by the caller, if any.
        type: "article", "redirect" or "disambiguation".
        sections: Sections in page order. Always empty for redirects.
        categories: Category names, in order of first appearance.
        redirect_to: Target of a redirect page.
    """

    def __init__(
        self,
        title: str | None = None,
        page_id: int | None = None,
        type: DocumentType = "article",
        sections: list[Section] | None = None,
        categories: list[str] | None = None,
        redirect_to: RedirectTarget | None = None,
        wiki: str = "",
    ) -> None:
        self._title = title
        self.page_id = page_id
        self.type: DocumentType = type
        self.sections: list[Section] = [] if type == "redirect" else list(sections or [])
        self.categories: list[str] = list(categories or [])
        self.redirect_to = redirect_to
        self.wiki = wiki
        self._reindex()

    def __repr__(self) -> str:
        return f"Document(title={self.title!r}, type={self.type!r}, sections={len(self.sections)})"

    @property
    def title(self) -> str | None:
        """Page title: the caller-supplied one, else the first bold run of the lead."""
        if self._title:
            return self._title
        for sentence in self.sentences()[:4]:
            if sentence.formatting and sentence.formatting.bold:
                return sentence.formatting.bold[0]
        return None

    @title.setter
    def title(self, value: str | None) -> None:
        self._title = value

    def _reindex(self) -> None:
        for i, section in enumerate(self.sections):
            section.index = i

    # Page kind

    def is_redirect(self) -> bool:
        return self.type == "redirect"

    def is_disambiguation(self) -> bool:
        return self.type == "disambiguation"

    # Section arena navigation

    def section(self, key: str | int) -> Section | None:
        """Look up a section by position or by case-insensitive title."""
        if isinstance(key, int):
            return self.sections[key] if 0 <= key < len(self.sections) else None
        wanted = key.strip().lower()
        for section in self.sections:
            if section.title.lower() == wanted:
                return section
        return None

    def next_sibling(self, section: Section) -> Section | None:
        """Next section at the same depth, before the parent ends."""
        for candidate in self.sections[section.index + 1 :]:
            if candidate.depth < section.depth:
                return None
            if candidate.depth == section.depth:
                return candidate
        return None

    def previous_sibling(self, section: Section) -> Section | None:
        """Previous section at the same depth, within the same parent."""
        for candidate in reversed(self.sections[: section.index]):
            if candidate.depth < section.depth:
                return None
            if candidate.depth == section.depth:
                return candidate
        return None

    def last_sibling(self, section: Section) -> Section:
        """Last section at the same depth within the same parent, or itself."""
        last = section
        following = self.next_sibling(section)
        while following is not None:
            last = following
            following = self.next_sibling(following)
        return last

    def previous_section(self, section: Section) -> Section | None:
        """The section immediately before, whatever its depth."""
        if section.index <= 0:
            return None
        return self.sections[section.index - 1]

    def children(self, section: Section) -> list[Section]:
        """Every following section nested deeper than this one."""
        children: list[Section] = []
        for candidate in self.sections[section.index + 1 :]:
            if candidate.depth <= section.depth:
                break
            children.append(candidate)
        return children

    def parent(self, section: Section) -> Section | None:
        """Nearest earlier section that is shallower than this one."""
        for candidate in reversed(self.sections[: section.index]):
            if candidate.depth < section.depth:
                return candidate
        return None

    def remove_section(self, section: Section) -> None:
        """Remove a section together with its children."""
        doomed = {id(section)} | {id(child) for child in self.children(section)}
        self.sections = [s for s in self.sections if id(s) not in doomed]
        self._reindex()

    # Aggregates

    def paragraphs(self) -> list[Paragraph]:
        return [paragraph for section in self.sections for paragraph in section.paragraphs]

    def sentences(self) -> list[Sentence]:
        return [sentence for section in self.sections for sentence in section.sentences()]

    def links(self) -> list[Link]:
        return [link for section in self.sections for link in section.links()]

    def interwiki(self) -> list[Link]:
        return [link for section in self.sections for link in section.interwiki()]

    def tables(self) -> list[Table]:
        return [table for section in self.sections for table in section.tables]

    def lists(self) -> list[WikiList]:
        return [wiki_list for section in self.sections for wiki_list in section.lists()]

    def images(self) -> list[Image]:
        """Images from paragraphs, then infobox lead images."""
        images = [image for section in self.sections for image in section.images()]
        for infobox in self.infoboxes():
            image = infobox.image()
            if image is not None:
                images.append(image)
        return images

    def infoboxes(self) -> list[Infobox]:
        return [infobox for section in self.sections for infobox in section.infoboxes]

    def templates(self, name: str | None = None) -> list[Template]:
        templates = [template for section in self.sections for template in section.templates]
        if name is None:
            return templates
        wanted = name.strip().lower()
        return [template for template in templates if template.name == wanted]

    def references(self) -> list[Reference]:
        return [reference for section in self.sections for reference in section.references]

    def coordinates(self) -> list[dict[str, Any]]:
        return [coordinate for section in self.sections for coordinate in section.coordinates()]

    # Aliases

    def citations(self) -> list[Reference]:
        return self.references()

    def infobox(self) -> Infobox | None:
        infoboxes = self.infoboxes()
        return infoboxes[0] if infoboxes else None

    # Output

    def text(self) -> str:
        return "\n\n".join(section.text() for section in self.sections if section.text())

    def to_dict(self, options: JsonOptions | None = None) -> dict[str, Any]:
        """Serialize to plain nested dicts and lists, ready for JSON.

        Examples:
            >>> doc.to_dict(JsonOptions(sections=False, plaintext=True))
            {'title': 'Toronto', 'page_id': None, 'categories': [], 'plaintext': '...'}
        """
        options = options or JsonOptions()
        data: dict[str, Any] = {}
        if options.title:
            data["title"] = self.title
        if options.page_id:
            data["page_id"] = self.page_id
        if options.categories:
            data["categories"] = list(self.categories)
        if options.sections:
            data["sections"] = [section.to_dict() for section in self.sections]
        if self.is_redirect():
            data["is_redirect"] = True
            data["redirect_to"] = self.redirect_to.to_dict() if self.redirect_to else None
            data["sections"] = []
        if self.is_disambiguation():
            data["is_disambiguation"] = True
        if options.coordinates:
            data["coordinates"] = self.coordinates()
        if options.infoboxes:
            data["infoboxes"] = [infobox.to_dict() for infobox in self.infoboxes()]
        if options.images:
            data["images"] = [image.to_dict() for image in self.images()]
        if options.plaintext:
            data["plaintext"] = self.text()
        if options.references:
            data["references"] = [reference.to_dict() for reference in self.references()]
        if options.encode_keys:
            return encode_keys(data)
        return data
