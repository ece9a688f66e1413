"""Shared type definitions for parser modules.

This module contains the value objects produced by the link, sentence,
table, list, image, template and citation parsers. They are created once
while parsing their owning text span and never mutated afterwards.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field, replace
from typing import Any, Literal
from urllib.parse import quote

from wikidoc import i18n
from wikidoc.config import config

# Type aliases for literal string types
LinkType = Literal["internal", "interwiki", "external"]
"""Kind of link: [[internal]], [[fr:interwiki]] or [https://external]."""

DocumentType = Literal["article", "redirect", "disambiguation"]
"""Kind of page detected by the page assembler."""

# Infobox keys that usually name the lead image
IMAGE_KEYS: tuple[str, ...] = (
    "image",
    "image_map",
    "map_image",
    "image map",
    "logo",
    "img",
    "photo",
    "image_file",
    "imagen",
    "bild",
)


@dataclass(frozen=True)
class Link:
    """Represents a resolved wiki link.

    Attributes:
        page: Target article title, first letter capitalized. None for
            external links.
        text: Display text when it differs from the page.
        anchor: Section anchor (from [[Article#Section]]).
        wiki: Interwiki prefix (from [[fr:Paris]]), lowercase.
        site: External URL (from [https://url text]).
        raw: The markup this link was parsed from.
    """

    page: str | None = None
    text: str | None = None
    anchor: str | None = None
    wiki: str | None = None
    site: str | None = None
    raw: str = ""

    @property
    def type(self) -> LinkType:
        """Kind of link, derived from which target field is set."""
        if self.site is not None:
            return "external"
        if self.wiki is not None:
            return "interwiki"
        return "internal"

    def display(self) -> str:
        """Text shown to the reader in place of the markup."""
        if self.text is not None:
            return self.text
        return self.page or ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        for key in ("page", "text", "anchor", "wiki", "site"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data


@dataclass(frozen=True)
class Formatting:
    """Bold and italic runs stripped out of a sentence."""

    bold: tuple[str, ...] = ()
    italic: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {"bold": list(self.bold), "italic": list(self.italic)}


@dataclass(frozen=True)
class ParsedDate:
    """A calendar date found in sentence text.

    Month and day are None when the text only gave a coarser date.
    """

    year: int
    month: int | None = None
    day: int | None = None

    def iso(self) -> str:
        """Format as YYYY, YYYY-MM or YYYY-MM-DD."""
        parts = [f"{self.year:04d}"]
        if self.month is not None:
            parts.append(f"{self.month:02d}")
            if self.day is not None:
                parts.append(f"{self.day:02d}")
        return "-".join(parts)


@dataclass(frozen=True)
class Sentence:
    """A single sentence of plain text plus what was parsed out of it.

    Attributes:
        text: Plain text with link and formatting markup removed.
        links: Links found in the sentence, external links first.
        formatting: Bold/italic runs, None when the sentence had none.
        date: First date mentioned in the sentence, if any.
        wiki: The markup this sentence was parsed from.
    """

    text: str
    links: tuple[Link, ...] = ()
    formatting: Formatting | None = None
    date: ParsedDate | None = None
    wiki: str = ""

    def with_text(self, text: str) -> Sentence:
        """Return a copy with the text replaced wholesale."""
        return replace(self, text=text)

    def bold(self) -> list[str]:
        return list(self.formatting.bold) if self.formatting else []

    def italic(self) -> list[str]:
        return list(self.formatting.italic) if self.formatting else []

    def interwiki(self) -> list[Link]:
        return [link for link in self.links if link.type == "interwiki"]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"text": self.text}
        if self.links:
            data["links"] = [link.to_dict() for link in self.links]
        if self.formatting is not None:
            data["formatting"] = self.formatting.to_dict()
        if self.date is not None:
            data["date"] = self.date.iso()
        return data


@dataclass(frozen=True)
class WikiList:
    """A contiguous block of list lines, one sentence per line."""

    items: tuple[Sentence, ...]
    wiki: str = ""

    def links(self) -> list[Link]:
        return [link for item in self.items for link in item.links]

    def text(self) -> str:
        return "\n".join(f" * {item.text}" for item in self.items)

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class Image:
    """An image from [[File:...]] syntax or a <gallery> block.

    Attributes:
        file: File name including its namespace (e.g. "File:Toronto.jpg").
        alt: Alternative text from an alt= option.
        caption: Parsed caption, the last unrecognized option.
        wiki: The markup this image was parsed from.
    """

    file: str
    alt: str | None = None
    caption: Sentence | None = None
    wiki: str = ""

    def filename(self) -> str:
        """File name without namespace, first letter upper, underscores for spaces.

        Examples:
            >>> Image(file="File:the tower.jpg").filename()
            'The_tower.jpg'
        """
        name = self.file
        prefix, sep, rest = name.partition(":")
        if sep and prefix.strip().lower() in i18n.FILES:
            name = rest
        name = name.strip()
        if name:
            name = name[0].upper() + name[1:]
        return name.replace(" ", "_")

    def _hash_path(self) -> tuple[str, str]:
        filename = self.filename()
        digest = hashlib.md5(filename.encode("utf-8")).hexdigest()
        return f"{digest[0]}/{digest[:2]}", quote(filename)

    def url(self) -> str:
        """Direct URL of the original file on the media server."""
        path, encoded = self._hash_path()
        return f"{config.image_base_url}/{path}/{encoded}"

    def thumbnail(self, width: int | None = None) -> str:
        """URL of a scaled-down rendering of the file."""
        width = width or config.thumbnail_width
        path, encoded = self._hash_path()
        return f"{config.image_base_url}/thumb/{path}/{encoded}/{width}px-{encoded}"

    def links(self) -> list[Link]:
        return list(self.caption.links) if self.caption else []

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"file": self.file, "url": self.url(), "thumb": self.thumbnail()}
        if self.alt:
            data["alt"] = self.alt
        if self.caption is not None:
            data["caption"] = self.caption.to_dict()
        return data


@dataclass(frozen=True)
class Table:
    """A wiki table, one mapping per row from column key to cell sentence.

    Every row carries the same key set: header names where the table has
    them, otherwise col1, col2, ...
    """

    rows: tuple[dict[str, Sentence], ...]
    wiki: str = ""

    def keys(self) -> list[str]:
        return list(self.rows[0]) if self.rows else []

    def key_value(self) -> list[dict[str, str]]:
        return [{key: cell.text for key, cell in row.items()} for row in self.rows]

    def get(self, column: str) -> list[str]:
        """Cell texts of one column, matched case-insensitively."""
        wanted = column.strip().lower()
        for key in self.keys():
            if key.lower() == wanted:
                return [row[key].text for row in self.rows]
        return []

    def links(self) -> list[Link]:
        return [link for row in self.rows for cell in row.values() for link in cell.links]

    def text(self) -> str:
        return "\n".join(" | ".join(cell.text for cell in row.values()) for row in self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {"rows": [{key: cell.to_dict() for key, cell in row.items()} for row in self.rows]}


@dataclass
class Template:
    """A template kept as an opaque structured record.

    Attributes:
        name: Normalized template name.
        data: Everything the handler or tokenizer recorded for it.
        wiki: The markup this template was parsed from.
    """

    name: str
    data: dict[str, Any] = field(default_factory=dict)
    wiki: str = ""

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def to_dict(self) -> dict[str, Any]:
        return {"template": self.name, **self.data}


@dataclass
class Infobox:
    """A key-value summary template such as {{Infobox settlement}}.

    Attributes:
        type: Infobox kind, the template name without the infobox keyword.
        data: Field values parsed as sentences, keyed by lowercase field name.
        wiki: The markup this infobox was parsed from.
    """

    type: str
    data: dict[str, Sentence] = field(default_factory=dict)
    wiki: str = ""

    def get(self, key: str) -> Sentence | None:
        """Look up a field, tolerating case and space/underscore differences.

        Examples:
            >>> box.get("Population_total") is box.get("population total")
            True
        """
        wanted = key.strip().lower()
        for candidate in (wanted, wanted.replace("_", " "), wanted.replace(" ", "_")):
            if candidate in self.data:
                return self.data[candidate]
        return None

    def keys(self) -> list[str]:
        return list(self.data)

    def key_value(self) -> dict[str, str]:
        return {key: value.text for key, value in self.data.items()}

    def links(self) -> list[Link]:
        return [link for value in self.data.values() for link in value.links]

    def image(self) -> Image | None:
        """The lead image named by one of the usual image fields."""
        for key in IMAGE_KEYS:
            value = self.data.get(key)
            if value is None or not value.text:
                continue
            name = value.text.strip()
            prefix, sep, _ = name.partition(":")
            if not sep or prefix.lower() not in i18n.FILES:
                name = f"File:{name}"
            caption = self.get("caption") or self.get("image_caption")
            return Image(file=name, caption=caption, wiki=value.wiki)
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "data": {key: value.to_dict() for key, value in self.data.items()}}


@dataclass
class Reference:
    """A citation from a <ref> tag or a {{cite ...}} template.

    Attributes:
        type: Cite sub-kind ("web", "book", ...) or "inline" for free text.
        data: Structured citation fields parsed as sentences.
        inline: Free-text citation body, for inline references.
        name: The <ref name="..."> identifier, if given.
        wiki: The markup this reference was parsed from.
    """

    type: str
    data: dict[str, Sentence] = field(default_factory=dict)
    inline: Sentence | None = None
    name: str | None = None
    wiki: str = ""

    def title(self) -> str:
        title = self.data.get("title")
        if title is not None:
            return title.text
        if self.inline is not None:
            return self.inline.text
        return ""

    def text(self) -> str:
        if self.inline is not None:
            return self.inline.text
        return self.title()

    def links(self) -> list[Link]:
        links = [link for value in self.data.values() for link in value.links]
        if self.inline is not None:
            links.extend(self.inline.links)
        return links

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"template": "citation", "type": self.type}
        if self.name:
            data["name"] = self.name
        if self.inline is not None:
            data["inline"] = self.inline.to_dict()
        data["data"] = {key: value.to_dict() for key, value in self.data.items()}
        return data


@dataclass(frozen=True)
class RedirectTarget:
    """Where a redirect page points."""

    page: str
    anchor: str | None = None
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"page": self.page}
        if self.anchor:
            data["anchor"] = self.anchor
        if self.text:
            data["text"] = self.text
        return data
