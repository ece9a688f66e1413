"""Reference/citation parser for MediaWiki markup.

This module extracts <ref> tags from section text:
- <ref>...</ref> - Plain reference
- <ref name="x" /> - Reuse of a named reference (dropped, no content)
- <ref name="x">...</ref> - Named reference

A reference whose whole body is a {{cite ...}} or {{citation}} template
becomes a structured citation; any other body becomes an inline free-text
reference. Every extractor caps the span it will match.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from wikidoc.config import config
from wikidoc.parsers.brackets import find_brackets
from wikidoc.parsers.sentence import from_text
from wikidoc.parsers.template import parse_template
from wikidoc.parsers.types import Reference, Sentence

logger = logging.getLogger(__name__)

_BODY = config.max_ref_length
_ATTRS = config.max_ref_attr_length

# <ref>body</ref>
PLAIN_REF_PATTERN: re.Pattern[str] = re.compile(rf" ?<ref>([\s\S]{{0,{_BODY}}}?)</ref> ?", re.IGNORECASE)

# <ref name="x" />
SELF_CLOSING_REF_PATTERN: re.Pattern[str] = re.compile(rf" ?<ref [^>]{{0,{_ATTRS}}}?/> ?", re.IGNORECASE)

# <ref name="x">body</ref>
NAMED_REF_PATTERN: re.Pattern[str] = re.compile(
    rf" ?<ref ([^>]{{0,{_ATTRS}}})>([\s\S]{{0,{_BODY}}}?)</ref> ?", re.IGNORECASE
)

# name= attribute of a ref tag, quoted or bare
NAME_ATTR_PATTERN: re.Pattern[str] = re.compile(r"""name\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s/>]+))""", re.IGNORECASE)

# Body that is one citation template
CITATION_START_PATTERN: re.Pattern[str] = re.compile(r"^ *\{\{ *(cite|citation)", re.IGNORECASE)
CITATION_END_PATTERN: re.Pattern[str] = re.compile(r"\}\} *$")
CITATION_NEEDED_PATTERN: re.Pattern[str] = re.compile(r"\{\{ *citation needed", re.IGNORECASE)

# Leftover inline tags; <gallery> is kept for the image parser
ORPHAN_TAG_PATTERN: re.Pattern[str] = re.compile(
    r" ?<(?![ /]?gallery)[ /]?[a-z0-9]{1,8}[a-z0-9=\" ]{2,20}[ /]?> ?", re.IGNORECASE
)

# Record keys that are not citation fields
META_KEYS: frozenset[str] = frozenset(["template", "type", "list", "name"])


def has_citation(body: str) -> bool:
    """Check whether a ref body is a single citation template.

    Examples:
        >>> has_citation("{{cite web|title=Toronto|url=https://toronto.ca}}")
        True
        >>> has_citation("{{citation needed}}")
        False
        >>> has_citation("Smith, p. 4")
        False
    """
    return (
        CITATION_START_PATTERN.search(body) is not None
        and CITATION_END_PATTERN.search(body) is not None
        and CITATION_NEEDED_PATTERN.search(body) is None
    )


def to_reference(record: dict[str, Any], wiki: str = "", name: str | None = None) -> Reference:
    """Build a Reference from a citation-shaped template record.

    ``refn`` footnotes become inline references; everything else keeps its
    fields as sentences, with ``type`` the cite sub-kind ("web", "book").
    """
    template = str(record.get("template", ""))
    name = name or (record.get("name") if isinstance(record.get("name"), str) else None)

    if template == "refn":
        text = record.get("text", "")
        inline = text if isinstance(text, Sentence) else from_text(_strip_templates(str(text)))
        return Reference(type="inline", inline=inline, name=name, wiki=wiki)

    kind = record.get("type")
    if not kind:
        kind = template[len("cite ") :].strip() if template.startswith("cite ") else template

    data: dict[str, Sentence] = {}
    for key, value in record.items():
        if key in META_KEYS:
            continue
        if isinstance(value, Sentence):
            data[key] = value
        elif isinstance(value, str):
            data[key] = from_text(value)
    return Reference(type=str(kind), data=data, name=name, wiki=wiki)


def _strip_templates(text: str) -> str:
    for match in reversed(find_brackets(text)):
        text = text[: match.start] + text[match.end :]
    return text


def _ref_name(attrs: str) -> str | None:
    match = NAME_ATTR_PATTERN.search(attrs)
    if match is None:
        return None
    name = next(group for group in match.groups() if group is not None)
    return name.strip() or None


def _parse_body(body: str, name: str | None) -> Reference | None:
    if has_citation(body):
        raw = parse_template(body.strip(), fmt="raw")
        template = str(raw.get("template", ""))
        kind = template[len("cite ") :].strip() if template.startswith("cite ") else template
        raw["type"] = kind
        raw["template"] = "citation"
        return to_reference(raw, wiki=body, name=name)

    text = _strip_templates(body).strip()
    if not text:
        return None
    return Reference(type="inline", inline=from_text(text), name=name, wiki=body)


def parse_references(wiki: str) -> tuple[list[Reference], str]:
    """Extract references and remove their tags from the text.

    Args:
        wiki: Section markup.

    Returns:
        Tuple of (references, remaining_text). References are listed plain
        ones first, then named ones.

    Examples:
        >>> refs, text = parse_references("Paris.<ref>Smith, p. 4</ref> Next.")
        >>> refs[0].text(), text
        ('Smith, p. 4', 'Paris. Next.')
    """
    references: list[Reference] = []

    def _plain(match: re.Match[str]) -> str:
        reference = _parse_body(match.group(1), None)
        if reference is not None:
            references.append(reference)
        return " "

    def _named(match: re.Match[str]) -> str:
        reference = _parse_body(match.group(2), _ref_name(match.group(1)))
        if reference is not None:
            references.append(reference)
        return " "

    wiki = PLAIN_REF_PATTERN.sub(_plain, wiki)
    wiki = SELF_CLOSING_REF_PATTERN.sub(" ", wiki)
    wiki = NAMED_REF_PATTERN.sub(_named, wiki)
    wiki = ORPHAN_TAG_PATTERN.sub(" ", wiki)

    if references:
        logger.debug("Extracted %d references", len(references))
    return references, wiki
