"""Table parser for MediaWiki markup.

Tables are found with a line-oriented stack scanner so nested tables come
out as separate blocks. Each block is split into rows and cells, row and
column spans are expanded into plain cells, and the header row is detected
either from explicit ``!`` markers or from a content heuristic. Rows come
out as mappings from header (or ``col{N}``) to the cell's Sentence.
"""

from __future__ import annotations

import logging
import re

from wikidoc.config import config
from wikidoc.parsers.sentence import from_text
from wikidoc.parsers.types import Sentence, Table

logger = logging.getLogger(__name__)

# {| opens a table, |} closes one
TABLE_OPEN_PATTERN: re.Pattern[str] = re.compile(r"^\s*\{\|")
TABLE_CLOSE_PATTERN: re.Pattern[str] = re.compile(r"^\s*\|\}")

# A line that does not start a cell continues the previous one
CONTINUATION_PATTERN: re.Pattern[str] = re.compile(r"\n(\s*[^|!{\s])")

# Header cells on one line: ! A !! B
HEADER_SPLIT_PATTERN: re.Pattern[str] = re.compile(r"!!")

# rowspan="2" | and colspan=3 | prefixes, with the attribute run before them
ROWSPAN_PATTERN: re.Pattern[str] = re.compile(r".*rowspan *= *[\"']?([0-9]+)[\"']?[ |]*")
COLSPAN_PATTERN: re.Pattern[str] = re.compile(r".*colspan *= *[\"']?([0-9]+)[\"']?[ |]*")

# Inline style attribute left in a cell
STYLE_ATTR_PATTERN: re.Pattern[str] = re.compile(r"style=['\"].*?['\"]")

# Words that mark a first row as a header when it has no ! markers
HEADER_WORDS: frozenset[str] = frozenset(
    ["name", "age", "born", "date", "year", "city", "country", "population", "count", "number"]
)


def find_tables(wiki: str) -> tuple[list[str], str]:
    """Pull table blocks out of section text.

    A nested table's lines belong to the inner block only. A table still
    open at the end of the text is closed there.

    Args:
        wiki: Section markup.

    Returns:
        Tuple of (table_blocks, remaining_text), blocks in order of their
        opening line.
    """
    lines = wiki.split("\n")
    blocks: list[list[int]] = []
    stack: list[list[int]] = []
    for i, line in enumerate(lines):
        if TABLE_OPEN_PATTERN.match(line):
            stack.append([i])
        elif TABLE_CLOSE_PATTERN.match(line) and stack:
            block = stack.pop()
            block.append(i)
            blocks.append(block)
        elif stack:
            stack[-1].append(i)
    if stack:
        logger.debug("Closing %d unterminated tables at end of section", len(stack))
        blocks.extend(stack)

    blocks.sort(key=lambda block: block[0])
    consumed = {i for block in blocks for i in block}
    tables = ["\n".join(lines[i] for i in block) for block in blocks]
    remaining = "\n".join(line for i, line in enumerate(lines) if i not in consumed)
    return tables, remaining


def _split_header_line(line: str) -> list[str]:
    """Cells of a ``!`` line: ``!!`` cells are headers, ``||`` cells are data."""
    first, *rest = line[1:].split("||")
    cells = [f"!{cell}" for cell in HEADER_SPLIT_PATTERN.split(first)]
    return cells + rest


def find_rows(lines: list[str]) -> list[list[str]]:
    """Group table lines into rows of raw cell strings.

    Header cells keep a leading ``!`` so header detection can see them.
    """
    rows: list[list[str]] = []
    row: list[str] = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith(("{|", "|}", "|+")):
            continue
        if line.startswith("|-"):
            if row:
                rows.append(row)
            row = []
            continue
        if line.startswith("!"):
            row.extend(_split_header_line(line))
        elif line.startswith("|"):
            row.extend(line[1:].split("||"))
    if row:
        rows.append(row)
    return rows


def _strip_span(cell: str, pattern: re.Pattern[str]) -> tuple[str, int | None]:
    match = pattern.match(cell)
    if match is None:
        return cell, None
    prefix = "!" if cell.startswith("!") else ""
    return prefix + cell[match.end() :], int(match.group(1))


def handle_spans(rows: list[list[str]]) -> list[list[str]]:
    """Expand rowspan and colspan cells into plain cells.

    A ``rowspan=n`` cell is copied into the same column of the next n-1
    rows. A ``colspan=n`` cell is followed by n-1 empty cells, unless n is
    above the configured threshold, in which case the row is a visual
    separator and is dropped. Rows are then padded to a common width.

    Examples:
        >>> handle_spans([["rowspan=2 | a", "b"], ["c"]])
        [['a', 'b'], ['a', 'c']]
    """
    rows = [list(row) for row in rows]

    for r, row in enumerate(rows):
        for c in range(len(row)):
            cell, span = _strip_span(row[c], ROWSPAN_PATTERN)
            if span is None:
                continue
            row[c] = cell
            for below in rows[r + 1 : r + span]:
                below.insert(c, cell)

    kept: list[list[str]] = []
    for row in rows:
        expanded: list[str] = []
        dropped = False
        for cell in row:
            cell, span = _strip_span(cell, COLSPAN_PATTERN)
            if span is not None and span > config.colspan_drop_threshold:
                dropped = True
                break
            expanded.append(cell)
            if span is not None:
                expanded.extend([""] * (span - 1))
        if not dropped and expanded:
            kept.append(expanded)

    width = max((len(row) for row in kept), default=0)
    return [row + [""] * (width - len(row)) for row in kept]


def _strip_attributes(cell: str) -> str:
    """Drop a ``attr=... |`` prefix, ignoring pipes inside links/templates."""
    depth = 0
    i = 0
    while i < len(cell):
        pair = cell[i : i + 2]
        if pair in ("[[", "{{"):
            depth += 1
            i += 2
            continue
        if pair in ("]]", "}}"):
            depth = max(0, depth - 1)
            i += 2
            continue
        if cell[i] == "|" and depth == 0:
            return cell[i + 1 :]
        i += 1
    return cell


def clean_text(cell: str) -> Sentence:
    """Render one raw cell as a Sentence."""
    raw = cell.strip()
    if raw.startswith("!"):
        raw = raw[1:]
    raw = _strip_attributes(raw)
    sentence = from_text(raw)
    text = STYLE_ATTR_PATTERN.sub("", sentence.text).strip()
    if text.startswith("!"):
        text = text[1:].strip()
    return sentence.with_text(text)


def _is_header_cell(cell: str) -> bool:
    return cell.strip().startswith("!")


def find_headers(rows: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """Read explicit ``!`` header rows off the top of the table.

    Up to two header rows are read; non-empty cells of the second overwrite
    the first.

    Returns:
        Tuple of (headers, remaining_rows).
    """
    headers: list[str] = []
    if rows and rows[0] and (
        _is_header_cell(rows[0][0]) or (len(rows[0]) > 1 and _is_header_cell(rows[0][1]))
    ):
        headers = [clean_text(cell).text for cell in rows[0]]
        rows = rows[1:]

    if rows and rows[0] and all(_is_header_cell(cell) for cell in rows[0][:2]):
        for i, cell in enumerate(rows[0]):
            text = clean_text(cell).text
            if not text:
                continue
            if i < len(headers):
                headers[i] = text
            else:
                headers.append(text)
        rows = rows[1:]
    return headers, rows


def _header_words(row: list[str]) -> list[str]:
    headers = [clean_text(cell).text.lower() for cell in row]
    if headers and all(header in HEADER_WORDS for header in headers):
        return headers
    return []


def first_row_header(rows: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """Guess a header row from its words when the table has no ``!`` cells.

    Only tables with more than ``table_header_min_rows`` rows are checked.
    If the first row fails and the table has a wide tail, the second row is
    tried instead, dropping both rows when it matches.

    Returns:
        Tuple of (headers, remaining_rows); headers are empty when no row
        looked like one.
    """
    if len(rows) <= config.table_header_min_rows:
        return [], rows
    headers = _header_words(rows[0])
    if headers:
        return headers, rows[1:]
    if len(rows[-1]) > 2:
        headers = _header_words(rows[1])
        if headers:
            return headers, rows[2:]
    return [], rows


def _keys(headers: list[str], width: int) -> list[str]:
    keys: list[str] = []
    for i in range(width):
        key = headers[i] if i < len(headers) and headers[i] else f"col{i + 1}"
        if key in keys:
            key = f"col{i + 1}"
        keys.append(key)
    return keys


def parse_table(wiki: str) -> list[dict[str, Sentence]]:
    """Parse one table block into keyed rows.

    Examples:
        >>> rows = parse_table("{|\\n! A !! B\\n|-\\n| 1 || 2\\n|}")
        >>> [{key: cell.text for key, cell in row.items()} for row in rows]
        [{'A': '1', 'B': '2'}]
    """
    wiki = CONTINUATION_PATTERN.sub(r" \1", wiki)
    rows = handle_spans(find_rows(wiki.split("\n")))

    headers, rows = find_headers(rows)
    if len(headers) <= 1:
        guessed, rest = first_row_header(rows)
        if guessed:
            headers, rows = guessed, rest

    if not rows:
        return []
    keys = _keys(headers, max(len(row) for row in rows))
    return [{key: clean_text(cell) for key, cell in zip(keys, row)} for row in rows]


def parse_tables(wiki: str) -> tuple[list[Table], str]:
    """Extract every table in a section.

    Returns:
        Tuple of (tables, remaining_text). Tables with no data rows are
        dropped.
    """
    blocks, remaining = find_tables(wiki)
    tables: list[Table] = []
    for block in blocks:
        rows = parse_table(block)
        if rows:
            tables.append(Table(rows=tuple(rows), wiki=block))
    return tables, remaining
