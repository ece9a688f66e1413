"""Parsing pipeline for MediaWiki pages.

This module provides the main entry point for turning one page of MediaWiki
markup into a Document. It orchestrates the individual parsers in a fixed
order, because each stage works on text already cleansed of the structures
the earlier stages own.

The page pipeline:
1. Detects redirects (short-circuit, no sections) and disambiguation pages
2. Strips comments, magic words and other cosmetic noise
3. Extracts category declarations
4. Splits the page into heading-delimited sections

The section pipeline:
1. References (<ref> tags)
2. Templates (handlers, infoboxes, citations, generic records)
3. Tables
4. Paragraphs (lists, images, sentences)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Final

from pydantic import BaseModel, ConfigDict, ValidationError

from wikidoc.document import Document, Paragraph, Section
from wikidoc.errors import InvalidMarkupError, InvalidOptionsError
from wikidoc.parsers.citation import parse_references
from wikidoc.parsers.dispatch import expand_templates
from wikidoc.parsers.heading import is_reference_title, parse_heading, split_sections
from wikidoc.parsers.image import parse_images
from wikidoc.parsers.lists import parse_lists
from wikidoc.parsers.page import (
    extract_categories,
    is_disambiguation,
    is_redirect,
    parse_redirect,
    preprocess,
)
from wikidoc.parsers.registry import TemplateRegistry, default_registry
from wikidoc.parsers.sentence import parse_sentences
from wikidoc.parsers.table import parse_tables
from wikidoc.parsers.types import Sentence

logger = logging.getLogger(__name__)

# Blank line between paragraphs
PARAGRAPH_SPLIT_PATTERN: Final[re.Pattern[str]] = re.compile(r"\r?\n[ \t]*\r?\n")


class ParseOptions(BaseModel):
    """Per-call options accepted by :func:`parse`."""

    model_config = ConfigDict(strict=True, frozen=True)

    title: str | None = None
    page_id: int | None = None
    today: date | None = None


@dataclass(frozen=True)
class ParseContext:
    """State shared by every section of one parse call."""

    today: date
    registry: TemplateRegistry = field(default_factory=default_registry)


def build_paragraphs(wiki: str) -> list[Paragraph]:
    """Split section text into paragraphs.

    Each blank-line-delimited block goes through lists, then images, then
    sentences. Blocks left with nothing in them are discarded.

    Examples:
        >>> [p.text() for p in build_paragraphs("One. Two.\\n\\nThree.")]
        ['One. Two.', 'Three.']
    """
    paragraphs: list[Paragraph] = []
    for block in PARAGRAPH_SPLIT_PATTERN.split(wiki):
        if not block.strip():
            continue
        lists, text = parse_lists(block)
        images, text = parse_images(text)
        paragraph = Paragraph(
            sentences=parse_sentences(text),
            lists=lists,
            images=images,
            wiki=block,
        )
        if not paragraph.is_empty():
            paragraphs.append(paragraph)
    return paragraphs


def build_section(title: str, depth: int, wiki: str, context: ParseContext) -> Section:
    """Run one section's markup through references, templates, tables and paragraphs.

    Args:
        title: Rendered heading text.
        depth: Heading depth.
        wiki: Section body markup.
        context: Per-parse state (clock and template registry).

    Returns:
        The populated Section. Its index is assigned by the Document.
    """
    section = Section(title=title, depth=depth, wiki=wiki)

    references, text = parse_references(wiki)
    section.references.extend(references)

    expanded = expand_templates(text, context.registry, context.today)
    section.templates.extend(expanded.templates)
    section.infoboxes.extend(expanded.infoboxes)
    section.references.extend(expanded.references)

    tables, text = parse_tables(expanded.text)
    section.tables.extend(tables)

    section.paragraphs.extend(build_paragraphs(text))
    return section


def _has_content(section: Section) -> bool:
    return bool(section.paragraphs or section.tables or section.templates or section.infoboxes)


def prune_reference_sections(sections: list[Section]) -> list[Section]:
    """Drop empty "References"-style sections.

    A pruned section's next section moves up one level when it was nested
    beneath it, so the outline stays consistent.

    Returns:
        The kept sections, re-indexed in order.
    """
    kept: list[Section] = []
    for i, section in enumerate(sections):
        if is_reference_title(section.title) and not _has_content(section):
            following = sections[i + 1] if i + 1 < len(sections) else None
            if following is not None and following.depth > section.depth:
                following.depth -= 1
            logger.debug("Pruned empty reference section %r", section.title)
            continue
        kept.append(section)
    for i, section in enumerate(kept):
        section.index = i
    return kept


def _fallback(markup: str, options: ParseOptions) -> Document:
    paragraph = Paragraph(sentences=[Sentence(text=markup.strip(), wiki=markup)], wiki=markup)
    section = Section(paragraphs=[paragraph], wiki=markup)
    return Document(title=options.title, page_id=options.page_id, sections=[section], wiki=markup)


def _parse(markup: str, options: ParseOptions, context: ParseContext) -> Document:
    if is_redirect(markup):
        categories, _ = extract_categories(markup)
        logger.debug("Redirect page %r", options.title)
        return Document(
            title=options.title,
            page_id=options.page_id,
            type="redirect",
            categories=categories,
            redirect_to=parse_redirect(markup),
            wiki=markup,
        )

    kind = "disambiguation" if is_disambiguation(markup, options.title) else "article"
    wiki = preprocess(markup)
    categories, wiki = extract_categories(wiki)

    sections: list[Section] = []
    for heading, body in split_sections(wiki):
        title, depth = parse_heading(heading) if heading else ("", 0)
        sections.append(build_section(title, depth, body, context))
    sections = prune_reference_sections(sections)

    logger.debug("Parsed %d sections, %d categories", len(sections), len(categories))
    return Document(
        title=options.title,
        page_id=options.page_id,
        type=kind,
        sections=sections,
        categories=categories,
        wiki=markup,
    )


def parse(
    markup: str,
    *,
    title: str | None = None,
    page_id: int | None = None,
    today: date | None = None,
    registry: TemplateRegistry | None = None,
) -> Document:
    """Parse one page of MediaWiki markup into a Document.

    Malformed markup is never an error: each parser repairs or truncates
    locally, and an unexpected failure anywhere in the pipeline yields a
    fallback Document holding the raw text as a single sentence.

    Args:
        markup: Page source.
        title: Page title, if known.
        page_id: Page identifier, if known.
        today: Date used by date-relative templates; defaults to today.
        registry: Template handlers; defaults to a copy of the built-in set.

    Returns:
        The parsed Document.

    Raises:
        InvalidMarkupError: If markup is not a string.
        InvalidOptionsError: If an option has the wrong type.

    Examples:
        >>> doc = parse("#REDIRECT [[Toronto]]")
        >>> doc.is_redirect(), doc.redirect_to.page, doc.sections
        (True, 'Toronto', [])
        >>> doc = parse("Paris is the capital.\\n== History ==\\nIt was founded.")
        >>> [s.title for s in doc.sections]
        ['', 'History']
    """
    if not isinstance(markup, str):
        raise InvalidMarkupError(f"markup must be a str, not {type(markup).__name__}")
    try:
        options = ParseOptions(title=title, page_id=page_id, today=today)
    except ValidationError as e:
        raise InvalidOptionsError(str(e)) from e

    context = ParseContext(
        today=options.today or date.today(),
        registry=registry if registry is not None else default_registry(),
    )
    try:
        return _parse(markup, options, context)
    except Exception:
        logger.warning("Parse of %r failed, returning raw text document", options.title, exc_info=True)
        return _fallback(markup, options)
