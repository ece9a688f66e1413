"""MediaWiki section heading detection.

This module splits a page into heading-delimited chunks and parses the
heading lines (== Title ==, === Subsection ===, etc.) into a plain title
and a depth.
"""

from __future__ import annotations

import re
from typing import Final

from wikidoc import i18n
from wikidoc.parsers.brackets import find_brackets
from wikidoc.parsers.sentence import from_text

# Heading line, captured whole so re.split keeps it: == Title ==
# The title may hold "=" anywhere but at its start
HEADING_SPLIT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(={1,5}[^=\n][^\n]{0,199}?={1,5})[ \t]*$",
    re.MULTILINE,
)

# Opening markers, title text and closing markers of one heading line
HEADING_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(={1,5})(.*?)(={1,5})\s*$")

# Refs and tags have no place in a rendered heading
HEADING_REF_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"<ref[^>]*/>|<ref[^>]*>[\s\S]*?</ref>",
    re.IGNORECASE,
)
HEADING_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"</?[a-z][^>]{0,200}>", re.IGNORECASE)

_REFERENCE_TITLES = "|".join(re.escape(title) for title in i18n.REFERENCE_SECTIONS)

# Titles of sections that only render the reference list
REFERENCE_TITLE_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^({_REFERENCE_TITLES}):?\s*$",
    re.IGNORECASE,
)


def is_heading(line: str) -> bool:
    """Check if a line is a MediaWiki section heading.

    Examples:
        >>> is_heading("== History ==")
        True
        >>> is_heading("a == b")
        False
    """
    return HEADING_SPLIT_PATTERN.fullmatch(line.rstrip(" \t")) is not None


def parse_heading(line: str) -> tuple[str, int]:
    """Parse a heading line into its rendered title and depth.

    Depth is the number of opening ``=`` markers minus two, so ``==`` is a
    top-level section (0) and a lone ``=`` is clamped to 0 as well.

    Args:
        line: A heading line.

    Returns:
        Tuple of (title, depth).

    Examples:
        >>> parse_heading("== History ==")
        ('History', 0)
        >>> parse_heading("=== Early years{{efn|x}} ===")
        ('Early years', 1)
    """
    match = HEADING_PATTERN.match(line.strip())
    if match is None:
        return "", 0
    depth = max(0, len(match.group(1)) - 2)
    title = match.group(2)
    for template in reversed(find_brackets(title)):
        title = title[: template.start] + title[template.end :]
    title = HEADING_REF_PATTERN.sub("", title)
    title = HEADING_TAG_PATTERN.sub("", title)
    return from_text(title).text, depth


def split_sections(wiki: str) -> list[tuple[str, str]]:
    """Split page text into (heading_line, body) chunks.

    The lead section has an empty heading line. Chunks with an empty
    heading and blank body are skipped.

    Examples:
        >>> split_sections("Intro.\\n== History ==\\nFounded.")
        [('', 'Intro.\\n'), ('== History ==', '\\nFounded.')]
    """
    pieces = HEADING_SPLIT_PATTERN.split(wiki)
    chunks: list[tuple[str, str]] = []
    if pieces[0].strip():
        chunks.append(("", pieces[0]))
    for i in range(1, len(pieces), 2):
        heading = pieces[i]
        body = pieces[i + 1] if i + 1 < len(pieces) else ""
        if not parse_heading(heading)[0] and not body.strip():
            continue
        chunks.append((heading, body))
    return chunks


def is_reference_title(title: str) -> bool:
    """Check whether a section title names the reference list.

    Examples:
        >>> is_reference_title("References")
        True
        >>> is_reference_title("History")
        False
    """
    return REFERENCE_TITLE_PATTERN.match(title.strip()) is not None
