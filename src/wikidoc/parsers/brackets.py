"""Depth-tracked matcher for paired wiki delimiters.

Finds the top-level ``{{...}}`` templates or ``[[...]]`` links in a span of
markup without a real tokenizer:

- every opener is paired with its closer in one stack pass up front
- a run must start with a doubled opener, so a lone ``{`` or ``[`` never
  starts a match
- a run that closes is kept only if it holds a doubled closer
- a run whose opener is never closed is repaired rather than dropped, cut
  at the first blank line after it

Nesting below the top level is reached through :func:`find_inner`, and
:func:`find_templates` builds the bounded tree used by template dispatch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from wikidoc.config import config
from wikidoc.parsers.template import template_name

logger = logging.getLogger(__name__)

# Where a repaired run is cut before synthetic closers are appended
BLANK_LINE: str = "\n\n"


@dataclass(frozen=True)
class BracketMatch:
    """One balanced top-level run of brackets.

    Attributes:
        text: The matched markup, including its delimiters. For a repaired
            match this ends with the synthetic closers.
        start: Offset of the first opener in the scanned text.
        end: Offset just past the consumed source span.
        repaired: True when closers were synthesized.
    """

    text: str
    start: int
    end: int
    repaired: bool = False


@dataclass
class TemplateNode:
    """A template found by :func:`find_templates` with its nested templates.

    Child offsets are relative to the parent's ``body``.
    """

    body: str
    name: str | None
    start: int
    end: int
    children: list[TemplateNode] = field(default_factory=list)
    repaired: bool = False


def _repair(text: str, start: int, open_char: str, close_char: str) -> BracketMatch:
    """Close an unterminated run that starts at ``start``."""
    cut = text.find(BLANK_LINE, start)
    segment = text[start:cut] if cut > start else text[start:]
    missing = max(segment.count(open_char) - segment.count(close_char), 2)
    logger.warning(
        "Unterminated %s%s at offset %d, closing with %d synthetic %r",
        open_char,
        open_char,
        start,
        missing,
        close_char,
    )
    return BracketMatch(
        text=segment + close_char * missing,
        start=start,
        end=start + len(segment),
        repaired=True,
    )


def _pair_openers(text: str, open_char: str, close_char: str) -> dict[int, int]:
    """Map the offset of every closed opener to the offset of its closer."""
    partners: dict[int, int] = {}
    stack: list[int] = []
    for i, char in enumerate(text):
        if char == open_char:
            stack.append(i)
        elif char == close_char and stack:
            partners[stack.pop()] = i
    return partners


def find_brackets(text: str, open_char: str = "{", close_char: str = "}") -> list[BracketMatch]:
    """Find the maximal balanced top-level runs of a delimiter pair.

    Runs in time linear in the length of ``text``, repairs included.

    Args:
        text: Markup to scan.
        open_char: Opening delimiter character.
        close_char: Closing delimiter character.

    Returns:
        Non-overlapping matches in order of appearance.

    Examples:
        >>> [m.text for m in find_brackets("a {{b|{{c}}}} d {{e}}")]
        ['{{b|{{c}}}}', '{{e}}']
        >>> find_brackets("{{unclosed|x")[0].text
        '{{unclosed|x}}'
    """
    opener = open_char * 2
    closer = close_char * 2
    partners = _pair_openers(text, open_char, close_char)
    matches: list[BracketMatch] = []
    i = text.find(opener)
    while i != -1:
        end = partners.get(i)
        if end is None:
            match = _repair(text, i, open_char, close_char)
            matches.append(match)
            i = text.find(opener, match.end)
            continue
        body = text[i : end + 1]
        if closer in body:
            matches.append(BracketMatch(text=body, start=i, end=end + 1))
        i = text.find(opener, end + 1)
    return matches


def find_inner(match: BracketMatch, open_char: str = "{", close_char: str = "}") -> list[BracketMatch]:
    """Find the runs nested one level inside a match.

    Offsets of the returned matches are relative to ``match.text``.
    """
    inner = match.text[2:-2]
    return [
        BracketMatch(text=m.text, start=m.start + 2, end=m.end + 2, repaired=m.repaired)
        for m in find_brackets(inner, open_char, close_char)
    ]


def _build_nodes(matches: list[BracketMatch], level: int, limit: int) -> list[TemplateNode]:
    nodes: list[TemplateNode] = []
    for match in matches:
        children = _build_nodes(find_inner(match), level + 1, limit) if level < limit else []
        nodes.append(
            TemplateNode(
                body=match.text,
                name=template_name(match.text),
                start=match.start,
                end=match.end,
                children=children,
                repaired=match.repaired,
            )
        )
    return nodes


def find_templates(text: str, max_depth: int | None = None) -> list[TemplateNode]:
    """Build the template tree of a span, at most ``max_depth`` levels deep.

    Templates nested deeper than the limit stay inside their parent's body
    as literal markup.

    Args:
        text: Markup to scan.
        max_depth: Number of levels to descend, counting the top level as 1.
            Defaults to ``config.max_template_depth``.

    Returns:
        Top-level template nodes in order of appearance.
    """
    limit = config.max_template_depth if max_depth is None else max_depth
    if limit < 1:
        return []
    return _build_nodes(find_brackets(text), 1, limit)
