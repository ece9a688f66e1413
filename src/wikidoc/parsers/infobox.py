"""Infobox detection for template records.

Infoboxes are key-value summary templates shown at the top of articles.
Most are named "Infobox <type>" (or a localized equivalent), but a handful
of long-lived template families predate that convention and are matched by
an allow-list.
"""

from __future__ import annotations

import re
from typing import Any

from wikidoc import i18n
from wikidoc.parsers.sentence import from_text
from wikidoc.parsers.types import Infobox, Sentence

# Infobox templates that do not follow the "Infobox X" naming
KNOWN_INFOBOXES: frozenset[str] = frozenset(
    [
        "taxobox",
        "automatic taxobox",
        "speciesbox",
        "subspeciesbox",
        "infraspeciesbox",
        "chembox",
        "drugbox",
        "geobox",
        "gnf protein box",
        "protein",
        "ssd",
        "hockeyteamseason",
        "military unit",
        "planetbox begin",
        "mlbbioret",
        "editnotice",
        "football club infobox",
        "nfl player",
        "cbb team season",
    ]
)

_PREFIXES = "|".join(re.escape(word) for word in sorted(i18n.INFOBOXES, key=len, reverse=True))

# Localized infobox keyword at the start of the name: "infobox city", "ficha de país"
INFOBOX_NAME_PATTERN: re.Pattern[str] = re.compile(
    rf"^(subst.)?({_PREFIXES})(?=:| |\n|$)", re.IGNORECASE
)

# English infobox keyword at either end: "settlement infobox"
ENGLISH_INFOBOX_PATTERN: re.Pattern[str] = re.compile(r"^infobox |\sinfobox$", re.IGNORECASE)

# "Year in Japan"-style navigation boxes
YEAR_IN_PATTERN: re.Pattern[str] = re.compile(r"^year in [a-z]", re.IGNORECASE)

# Keys from the tokenizer that are not infobox fields
DROPPED_KEYS: frozenset[str] = frozenset(["template", "list"])


def is_infobox(name: str) -> bool:
    """Check whether a normalized template name is an infobox.

    Args:
        name: Normalized template name.

    Returns:
        True for infobox templates.

    Examples:
        >>> is_infobox("infobox settlement")
        True
        >>> is_infobox("taxobox")
        True
        >>> is_infobox("cite web")
        False
    """
    name = name.strip().lower()
    if not name:
        return False
    if name in KNOWN_INFOBOXES:
        return True
    if INFOBOX_NAME_PATTERN.search(name):
        return True
    if ENGLISH_INFOBOX_PATTERN.search(name):
        return True
    return bool(YEAR_IN_PATTERN.search(name))


def infobox_type(name: str) -> str:
    """Strip the infobox keyword from a template name.

    Examples:
        >>> infobox_type("infobox city")
        'city'
        >>> infobox_type("taxobox")
        'taxobox'
    """
    name = name.strip().lower()
    stripped = INFOBOX_NAME_PATTERN.sub("", name).strip()
    stripped = re.sub(r"\s+infobox$", "", stripped).strip()
    stripped = stripped.lstrip(":").strip()
    return stripped or name


def to_infobox_record(raw: dict[str, Any]) -> dict[str, Any]:
    """Turn a tokenized template record into an infobox record.

    Examples:
        >>> to_infobox_record({"template": "infobox city", "name": "Springfield"})
        {'template': 'infobox', 'type': 'city', 'data': {'name': 'Springfield'}}
    """
    data = {key: value for key, value in raw.items() if key not in DROPPED_KEYS}
    return {
        "template": "infobox",
        "type": infobox_type(str(raw.get("template", ""))),
        "data": data,
    }


def build_infobox(record: dict[str, Any], wiki: str = "") -> Infobox:
    """Build the Infobox model object from an infobox record."""
    data: dict[str, Sentence] = {}
    for key, value in record.get("data", {}).items():
        if isinstance(value, Sentence):
            data[key] = value
        elif isinstance(value, str):
            data[key] = from_text(value)
    return Infobox(type=str(record.get("type", "")), data=data, wiki=wiki)
