"""List parser for MediaWiki markup.

Bulleted (``*``), numbered (``#``), indented (``:``) and definition (``;``)
lines are grouped into lists. A single marked line is left in the paragraph
text, since one stray marker is more often noise than a list.
"""

from __future__ import annotations

import re

from wikidoc.parsers.sentence import from_text
from wikidoc.parsers.types import WikiList

# Any list marker run at the start of a line
LIST_MARKER_PATTERN: re.Pattern[str] = re.compile(r"^[#*:;|]+")

# Bulleted item with some content
BULLET_PATTERN: re.Pattern[str] = re.compile(r"^\*+[^:,|]{4}")

# Numbered item with some content
NUMBER_PATTERN: re.Pattern[str] = re.compile(r"^ ?#[^:,|]{4}")
NUMBER_MARKER_PATTERN: re.Pattern[str] = re.compile(r"^ ?#*")

# Something worth keeping as an item
HAS_WORD_PATTERN: re.Pattern[str] = re.compile(r"[a-z_0-9\]\}]", re.IGNORECASE)

# Fewest consecutive lines that make a list
MIN_LIST_LINES: int = 2


def is_list_line(line: str) -> bool:
    """Check whether a line carries a list marker.

    Examples:
        >>> is_list_line("* Toronto")
        True
        >>> is_list_line("Toronto")
        False
    """
    return bool(
        LIST_MARKER_PATTERN.match(line) or BULLET_PATTERN.match(line) or NUMBER_PATTERN.match(line)
    )


def _clean_run(lines: list[str]) -> list[str]:
    """Strip markers, renumbering ``#`` items as "1) ", "2) ", ..."""
    items: list[str] = []
    number = 1
    for line in lines:
        if not HAS_WORD_PATTERN.search(line):
            continue
        if NUMBER_PATTERN.match(line):
            line = f"{number}) {NUMBER_MARKER_PATTERN.sub('', line, count=1).strip()}"
            number += 1
        else:
            number = 1
            line = LIST_MARKER_PATTERN.sub("", line, count=1).strip()
        items.append(line)
    return items


def parse_lists(wiki: str) -> tuple[list[WikiList], str]:
    """Extract list blocks from paragraph text.

    Args:
        wiki: Paragraph markup.

    Returns:
        Tuple of (lists, remaining_text).

    Examples:
        >>> lists, rest = parse_lists("Intro\\n# one item\\n# two item")
        >>> lists[0].text(), rest
        (' * 1) one item\\n * 2) two item', 'Intro')
    """
    lists: list[WikiList] = []
    rest: list[str] = []
    run: list[str] = []

    def _flush() -> None:
        if len(run) >= MIN_LIST_LINES:
            items = [from_text(item) for item in _clean_run(run)]
            if items:
                lists.append(WikiList(items=tuple(items), wiki="\n".join(run)))
        else:
            rest.extend(run)
        run.clear()

    for line in wiki.split("\n"):
        if is_list_line(line):
            run.append(line)
            continue
        _flush()
        rest.append(line)
    _flush()
    return lists, "\n".join(rest)
