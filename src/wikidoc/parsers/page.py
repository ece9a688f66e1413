"""Page-level detection and cleanup.

Runs once per document before sections are split: redirect and
disambiguation detection, category extraction, and removal of markup that
carries no content (comments, magic words, signatures, ignored XML tags).
"""

from __future__ import annotations

import re
from typing import Final

from wikidoc import i18n
from wikidoc.config import config
from wikidoc.parsers.link import titlecase
from wikidoc.parsers.types import RedirectTarget

_REDIRECTS = "|".join(re.escape(word) for word in i18n.REDIRECTS)
_DISAMBIGUATIONS = "|".join(re.escape(word) for word in i18n.DISAMBIGUATIONS)
_CATEGORIES = "|".join(re.escape(word) for word in i18n.CATEGORIES)

# #REDIRECT [[Target]]
REDIRECT_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^\s*#({_REDIRECTS})\s*:?\s*\[\[([^\]]{{1,180}}?)\]\]",
    re.IGNORECASE,
)

# {{disambiguation}}, {{dab|...}} and localized variants
DISAMBIGUATION_TEMPLATE_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"\{{\{{\s*({_DISAMBIGUATIONS})\s*(\||\}}\}})",
    re.IGNORECASE,
)
DISAMBIGUATION_MAGIC_WORD: Final[str] = "__DISAMBIG__"
DISAMBIGUATION_TITLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\(disambiguation\)", re.IGNORECASE)

# [[Category:Name]] or [[Category:Name|sort key]]
CATEGORY_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"\[\[\s*({_CATEGORIES})\s*:([^\]|]+)(\|[^\]]*)?\]\]",
    re.IGNORECASE,
)

# <!-- comment -->
COMMENT_PATTERN: Final[re.Pattern[str]] = re.compile(rf"<!--[\s\S]{{0,{config.max_comment_length}}}?-->")

# __NOTOC__ and the other behavior switches
MAGIC_WORD_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"__(NOTOC|NOEDITSECTION|FORCETOC|TOC|NOINDEX|INDEX|NOGALLERY|NEWSECTIONLINK|"
    r"NONEWSECTIONLINK|HIDDENCAT|DISAMBIG|STATICREDIRECT|NOTITLECONVERT|NOTC|"
    r"NOCONTENTCONVERT|NOCC|EXPECTUNUSEDCATEGORY|NOGLOBAL)__",
    re.IGNORECASE,
)

# ~~~~ signatures
SIGNATURE_PATTERN: Final[re.Pattern[str]] = re.compile(r"~{3,5}")

# ---- horizontal rules
HORIZONTAL_RULE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^-{4,}\s*$", re.MULTILINE)

# {{}} left behind by editors
EMPTY_TEMPLATE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{\s*\}\}")

# A line holding nothing but an interlanguage link: [[fr:Toronto]]
INTERLANGUAGE_LINE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*\[\[([a-z][a-z-]{1,11}):[^\]\n]+\]\]\s*$",
    re.MULTILINE,
)

# HTML entities mapped to their characters
ENTITIES: Final[dict[str, str]] = {
    "&nbsp;": " ",
    "&ndash;": "–",
    "&mdash;": "—",
    "&minus;": "−",
    "&times;": "×",
    "&hellip;": "…",
    "&amp;": "&",
    "&quot;": '"',
    "&apos;": "'",
}

# Tags removed together with their content
IGNORED_TAGS: Final[tuple[str, ...]] = (
    "table",
    "code",
    "score",
    "data",
    "categorytree",
    "charinsert",
    "hiero",
    "imagemap",
    "inputbox",
    "references",
    "source",
    "syntaxhighlight",
    "timeline",
    "maplink",
    "mapframe",
    "math",
    "graph",
    "templatestyles",
)
_IGNORED = "|".join(IGNORED_TAGS)

IGNORED_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"<({_IGNORED})\b[^>]{{0,200}}>[\s\S]{{0,{config.max_tag_body_length}}}?</\1\s*>",
    re.IGNORECASE,
)
IGNORED_SELF_CLOSING_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"<({_IGNORED})\b[^>]{{0,200}}/\s*>",
    re.IGNORECASE,
)

# Formatting tags whose content is kept
FORMATTING_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"</?(p|sub|sup|span|div|br|b|i|u|s|small|big|center|font|abbr|blockquote|poem|nowiki|"
    r"noinclude|includeonly|onlyinclude|tt|em|strong|cite|del|ins|strike|var|dl|dd|dt|ol|ul|li|"
    r"section|mark|kbd|samp|q|bdi|wbr|hr)\b[^>]{0,200}?/?>",
    re.IGNORECASE,
)


def is_redirect(markup: str) -> bool:
    """Check whether a page is a redirect.

    Examples:
        >>> is_redirect("#REDIRECT [[Toronto]]")
        True
        >>> is_redirect("Toronto is a city.")
        False
    """
    return REDIRECT_PATTERN.search(markup[: config.redirect_scan_limit]) is not None


def parse_redirect(markup: str) -> RedirectTarget | None:
    """Read the target of a redirect page.

    Examples:
        >>> parse_redirect("#REDIRECT [[toronto#History|Old Toronto]]")
        RedirectTarget(page='Toronto', anchor='History', text='Old Toronto')
    """
    match = REDIRECT_PATTERN.search(markup[: config.redirect_scan_limit])
    if match is None:
        return None
    target, _, text = match.group(2).partition("|")
    page, _, anchor = target.partition("#")
    return RedirectTarget(
        page=titlecase(page.strip().replace("_", " ")),
        anchor=anchor.strip() or None,
        text=text.strip() or None,
    )


def is_disambiguation(markup: str, title: str | None = None) -> bool:
    """Check whether a page is a disambiguation page.

    Examples:
        >>> is_disambiguation("'''Paris''' may refer to:\\n{{disambiguation}}")
        True
        >>> is_disambiguation("Paris is a city.", title="Paris (disambiguation)")
        True
    """
    if DISAMBIGUATION_TEMPLATE_PATTERN.search(markup):
        return True
    if DISAMBIGUATION_MAGIC_WORD in markup:
        return True
    return bool(title and DISAMBIGUATION_TITLE_PATTERN.search(title))


def extract_categories(wiki: str) -> tuple[list[str], str]:
    """Pull category declarations out of page text.

    Returns:
        Tuple of (category_names, text_without_categories). Names are
        de-duplicated in order of first appearance.

    Examples:
        >>> extract_categories("Text.\\n[[Category:Cities in Ontario|Toronto]]")
        (['Cities in Ontario'], 'Text.\\n')
    """
    categories: list[str] = []

    def _category(match: re.Match[str]) -> str:
        name = match.group(2).strip()
        if name and name not in categories:
            categories.append(name)
        return ""

    return categories, CATEGORY_PATTERN.sub(_category, wiki)


def _interlanguage_line(match: re.Match[str]) -> str:
    if match.group(1).lower() in i18n.INTERWIKIS:
        return ""
    return match.group(0)


def kill_xml(wiki: str) -> str:
    """Remove tags that carry no article prose.

    ``<ref>`` and ``<gallery>`` are left for their own parsers.
    """
    wiki = IGNORED_TAG_PATTERN.sub(" ", wiki)
    wiki = IGNORED_SELF_CLOSING_PATTERN.sub(" ", wiki)
    return FORMATTING_TAG_PATTERN.sub(" ", wiki)


def preprocess(wiki: str) -> str:
    """Strip cosmetic noise from page text before sections are split.

    Examples:
        >>> preprocess("A<!-- hidden -->B __NOTOC__")
        'AB '
    """
    wiki = COMMENT_PATTERN.sub("", wiki)
    wiki = MAGIC_WORD_PATTERN.sub("", wiki)
    wiki = SIGNATURE_PATTERN.sub("", wiki)
    wiki = wiki.replace("\r", "")
    wiki = HORIZONTAL_RULE_PATTERN.sub("", wiki)
    wiki = EMPTY_TEMPLATE_PATTERN.sub("", wiki)
    for entity, char in ENTITIES.items():
        wiki = wiki.replace(entity, char)
    wiki = INTERLANGUAGE_LINE_PATTERN.sub(_interlanguage_line, wiki)
    return kill_xml(wiki)
