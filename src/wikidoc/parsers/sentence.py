"""Sentence segmentation and inline formatting.

Splits a paragraph of wiki text into sentences without a tokenizer: a naive
split on terminal punctuation, then a merge pass that glues a chunk onto the
next one whenever the break looks false (abbreviations, initials, ellipses,
chunks with no real word, or unbalanced links and quotes).
"""

from __future__ import annotations

import re

from wikidoc import i18n
from wikidoc.config import config
from wikidoc.parsers.dates import find_date
from wikidoc.parsers.link import parse_links
from wikidoc.parsers.types import Formatting, Sentence

# Newline runs, kept as separators
LINE_SPLIT_PATTERN: re.Pattern[str] = re.compile(r"(\n+)")

# A sentence candidate: from a non-space up to terminal punctuation
SENTENCE_SPLIT_PATTERN: re.Pattern[str] = re.compile(r"(\S.+?[.!?]\"?)(?=\s|$)")

# Chunk ending in a known abbreviation: "Dr. "
ABBREVIATION_PATTERN: re.Pattern[str] = re.compile(
    r"(^| |')(" + "|".join(re.escape(a) for a in i18n.ABBREVIATIONS) + r")[.!?] ?$",
    re.IGNORECASE,
)

# Chunk ending in an initial: "John F. "
ACRONYM_PATTERN: re.Pattern[str] = re.compile(r"[ .'][A-Z].? *$", re.IGNORECASE)

# Chunk ending in an ellipsis
ELLIPSIS_PATTERN: re.Pattern[str] = re.compile(r"\.\.\.* +$")

# Chunk ending in "c." (circa)
CIRCA_PATTERN: re.Pattern[str] = re.compile(r" c\.\s$")

# Two letters in a row, the minimum for a real word
WORD_PATTERN: re.Pattern[str] = re.compile(r"[a-z][a-z]", re.IGNORECASE)

_SPAN = config.max_format_span

# '''''bold and italic'''''
BOLD_ITALIC_PATTERN: re.Pattern[str] = re.compile(rf"'''''(.{{0,{_SPAN}}}?)'''''")

# ''''bold with its quote marks''''
BOLD_QUOTED_PATTERN: re.Pattern[str] = re.compile(rf"''''(.{{0,{_SPAN}}}?)''''")

# '''bold'''
BOLD_PATTERN: re.Pattern[str] = re.compile(rf"'''(.{{0,{_SPAN}}}?)'''")

# ''italic''
ITALIC_PATTERN: re.Pattern[str] = re.compile(rf"''(.{{0,{_SPAN}}}?)''")

# Parentheses left empty once templates and refs are gone: "( ; )"
EMPTY_PARENS_PATTERN: re.Pattern[str] = re.compile(r"\([,;: ]*\)")
LEADING_SEMICOLONS_PATTERN: re.Pattern[str] = re.compile(r"\( *(; ?)+")
SPACE_RUN_PATTERN: re.Pattern[str] = re.compile(r" {2,}")
SPACE_BEFORE_PERIOD_PATTERN: re.Pattern[str] = re.compile(r" +\.$")


def _naive_split(text: str) -> list[str]:
    pieces: list[str] = []
    for line in LINE_SPLIT_PATTERN.split(text):
        pieces.extend(SENTENCE_SPLIT_PATTERN.split(line))
    return pieces


def _is_balanced(chunk: str) -> bool:
    if chunk.count("[[") != chunk.count("]]"):
        return False
    return chunk.count('"') % 2 == 0


def _ends_sentence(chunk: str) -> bool:
    """Check whether a chunk can stand as a sentence on its own."""
    if (
        ABBREVIATION_PATTERN.search(chunk)
        or ACRONYM_PATTERN.search(chunk)
        or ELLIPSIS_PATTERN.search(chunk)
        or CIRCA_PATTERN.search(chunk)
    ):
        return False
    if not WORD_PATTERN.search(chunk):
        return False
    return _is_balanced(chunk)


def split_sentences(text: str) -> list[str]:
    """Split wiki text into sentence strings.

    Whitespace between sentences stays attached to the preceding one, so
    joining the result gives back the input.

    Args:
        text: Paragraph text, possibly with links and formatting.

    Returns:
        Sentence strings. Empty for blank input; never empty otherwise.

    Examples:
        >>> split_sentences("Dr. Smith went home. He was tired.")
        ['Dr. Smith went home. ', 'He was tired.']
    """
    if not text or not text.strip():
        return []
    text = text.replace("\xa0", " ")

    splits = _naive_split(text)
    chunks: list[str] = []
    pending = ""
    for piece in splits:
        if not piece:
            continue
        if not piece.strip():
            if chunks:
                chunks[-1] += piece
            else:
                pending += piece
            continue
        chunks.append(pending + piece)
        pending = ""
    if pending and chunks:
        chunks[-1] += pending

    sentences: list[str] = []
    carry = ""
    for i, chunk in enumerate(chunks):
        chunk = carry + chunk
        carry = ""
        if i + 1 < len(chunks) and not _ends_sentence(chunk):
            carry = chunk
            continue
        sentences.append(chunk)

    if not sentences:
        return [text]
    return sentences


def parse_formatting(text: str) -> tuple[str, Formatting | None]:
    """Strip bold and italic quote markup, recording the runs.

    Returns:
        Tuple of (plain_text, formatting_or_none).

    Examples:
        >>> parse_formatting("'''Toronto''' is in ''Canada''")
        ('Toronto is in Canada', Formatting(bold=('Toronto',), italic=('Canada',)))
    """
    bold: list[str] = []
    italic: list[str] = []

    def _both(match: re.Match[str]) -> str:
        bold.append(match.group(1))
        italic.append(match.group(1))
        return match.group(1)

    def _quoted(match: re.Match[str]) -> str:
        quoted = f"'{match.group(1)}'"
        bold.append(quoted)
        return quoted

    def _bold(match: re.Match[str]) -> str:
        bold.append(match.group(1))
        return match.group(1)

    def _italic(match: re.Match[str]) -> str:
        italic.append(match.group(1))
        return match.group(1)

    text = BOLD_ITALIC_PATTERN.sub(_both, text)
    text = BOLD_QUOTED_PATTERN.sub(_quoted, text)
    text = BOLD_PATTERN.sub(_bold, text)
    text = ITALIC_PATTERN.sub(_italic, text)

    if not bold and not italic:
        return text, None
    return text, Formatting(bold=tuple(bold), italic=tuple(italic))


def _cleanup(text: str) -> str:
    text = EMPTY_PARENS_PATTERN.sub("", text)
    text = LEADING_SEMICOLONS_PATTERN.sub("(", text)
    text = SPACE_RUN_PATTERN.sub(" ", text).strip()
    return SPACE_BEFORE_PERIOD_PATTERN.sub(".", text)


def from_text(wiki: str) -> Sentence:
    """Build a Sentence from a span of wiki text.

    Links are resolved first, then leftover empty parentheses and spacing
    are cleaned, then bold/italic runs are stripped into the formatting
    record, and finally the first date in the text is recorded.

    Examples:
        >>> s = from_text("'''[[Toronto]]''' was founded in 1834.")
        >>> s.text, s.links[0].page, s.bold()
        ('Toronto was founded in 1834.', 'Toronto', ['Toronto'])
    """
    links, text = parse_links(wiki)
    text = _cleanup(text)
    text, formatting = parse_formatting(text)
    return Sentence(
        text=text,
        links=tuple(links),
        formatting=formatting,
        date=find_date(text),
        wiki=wiki,
    )


def parse_sentences(text: str) -> list[Sentence]:
    """Split a paragraph into Sentence objects.

    A first sentence that is ":"-indented (a hatnote such as
    ":For other uses, see ...") is dropped.
    """
    sentences = [from_text(chunk) for chunk in split_sentences(text)]
    sentences = [s for s in sentences if s.text]
    if sentences and sentences[0].text.startswith(":"):
        sentences = sentences[1:]
    return sentences
