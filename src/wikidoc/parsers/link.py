"""Link resolver for MediaWiki markup.

This module extracts links from a span of text and replaces each with
the text a reader would see:
- [https://url text] - External link, rendered as its text
- [[Target]] - Internal link
- [[Target|Display]] - Piped link (display text differs from target)
- [[Target#Section]] - Link with a section anchor
- [[fr:Paris]] - Interwiki link (allow-listed prefixes only)
- [[Category:Name]], [[File:x.jpg]] - left as plain text, no link
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from wikidoc import i18n
from wikidoc.config import config
from wikidoc.parsers.types import Link

if TYPE_CHECKING:
    from re import Match

# External link: [scheme://url optional text]
EXTERNAL_LINK_PATTERN: re.Pattern[str] = re.compile(
    r"\[(https?|news|ftp|mailto|gopher|irc)(://[^\]| ]{4,1500})([| ].*?)?\]"
)

# Internal link with an optional lowercase or possessive suffix: [[Target]]s
INTERNAL_LINK_PATTERN: re.Pattern[str] = re.compile(
    rf"\[\[(.{{0,{config.max_link_length}}}?)\]\]('s|[a-z]+)?"
)

# Namespaces whose links render as text rather than a link
IGNORED_NAMESPACES: frozenset[str] = frozenset(i18n.CATEGORIES + i18n.FILES)

# Trailing disambiguator removed by the pipe trick: [[Paris (band)|]]
PIPE_TRICK_PATTERN: re.Pattern[str] = re.compile(r"\s*\([^)]*\)\s*$")


def titlecase(title: str) -> str:
    """Upper-case the first character of a title.

    Examples:
        >>> titlecase("paris")
        'Paris'
        >>> titlecase("iPhone")
        'IPhone'
    """
    if not title:
        return title
    return title[0].upper() + title[1:]


def parse_interwiki(target: str) -> tuple[str | None, str]:
    """Split an interwiki prefix off a link target.

    Only allow-listed prefixes count; any other colon is part of the title.

    Returns:
        Tuple of (wiki_prefix_or_none, remaining_target).

    Examples:
        >>> parse_interwiki("fr:Paris")
        ('fr', 'Paris')
        >>> parse_interwiki("Star Trek: Voyager")
        (None, 'Star Trek: Voyager')
    """
    prefix, sep, rest = target.partition(":")
    if sep and prefix.strip().lower() in i18n.INTERWIKIS:
        return prefix.strip().lower(), rest.strip()
    return None, target


def _split_anchor(target: str) -> tuple[str, str | None]:
    page, sep, anchor = target.partition("#")
    return page.strip(), anchor.strip() if sep and anchor.strip() else None


def _namespace(target: str) -> str | None:
    prefix, sep, _ = target.partition(":")
    if sep:
        return prefix.strip().lower()
    return None


def _render_external(match: Match[str], links: list[Link]) -> str:
    site = match.group(1) + match.group(2)
    label = (match.group(3) or "").strip().lstrip("|").strip()
    links.append(Link(site=site, text=label or None, raw=match.group(0)))
    return label


def _render_internal(match: Match[str], links: list[Link]) -> str:
    raw = match.group(0)
    inner = match.group(1)
    suffix = match.group(2) or ""
    target, pipe, label = inner.partition("|")
    target = target.strip().replace("_", " ")
    label = label.strip()

    # [[:Category:X]] links to the category page itself
    bare = target.lstrip(":").strip()
    if not bare:
        return label + suffix

    if _namespace(bare) in IGNORED_NAMESPACES:
        return (label or bare) + suffix

    if bare.startswith("#"):
        return (label or bare[1:]) + suffix

    if pipe and not label:
        # Pipe trick: [[Paris (band)|]] displays "Paris"
        label = PIPE_TRICK_PATTERN.sub("", bare.split(":", 1)[-1]).strip()

    # [[fr:Paris]] displays "Paris"
    wiki, target = parse_interwiki(bare)
    page, anchor = _split_anchor(target)
    display = (label or target) + suffix

    page = titlecase(page)
    text = display if display != page else None
    links.append(Link(page=page, text=text, anchor=anchor, wiki=wiki, raw=raw))
    return display


def parse_links(text: str) -> tuple[list[Link], str]:
    """Extract links from a span and render it as plain text.

    External links are resolved first, then internal links, so a URL inside
    a piped label never produces a nested internal link.

    Args:
        text: MediaWiki markup text to parse.

    Returns:
        Tuple of (links, rendered_text).

    Examples:
        >>> links, text = parse_links("[[Paris|the city]] is nice.")
        >>> text
        'the city is nice.'
        >>> links[0].page, links[0].text
        ('Paris', 'the city')
    """
    links: list[Link] = []
    text = EXTERNAL_LINK_PATTERN.sub(lambda m: _render_external(m, links), text)
    text = INTERNAL_LINK_PATTERN.sub(lambda m: _render_internal(m, links), text)
    return links, text
