"""Image and gallery parser for MediaWiki markup.

Handles ``[[File:Name.jpg|thumb|alt=...|Caption]]`` links (any localized
file namespace) and ``<gallery>`` blocks with one ``File|Caption`` per
line. Display options such as sizes and alignment are discarded; the last
remaining field is the caption.
"""

from __future__ import annotations

import re

from wikidoc import i18n
from wikidoc.parsers.brackets import find_brackets
from wikidoc.parsers.sentence import from_text
from wikidoc.parsers.template import split_args
from wikidoc.parsers.types import Image

_FILES = "|".join(re.escape(name) for name in i18n.FILES)

# [[File:... at the start of a bracket match
FILE_LINK_PATTERN: re.Pattern[str] = re.compile(rf"^\[\[\s*({_FILES})\s*:", re.IGNORECASE)

# File namespace at the start of a gallery line
FILE_PREFIX_PATTERN: re.Pattern[str] = re.compile(rf"^\s*({_FILES})\s*:", re.IGNORECASE)

# <gallery ...>...</gallery>
GALLERY_PATTERN: re.Pattern[str] = re.compile(r"<gallery[^>]*>([\s\S]*?)</gallery>", re.IGNORECASE)

# Display options that are not captions
IMAGE_OPTIONS: frozenset[str] = frozenset(
    [
        "thumb",
        "thumbnail",
        "frame",
        "framed",
        "frameless",
        "border",
        "left",
        "right",
        "center",
        "centre",
        "none",
        "upright",
        "baseline",
        "middle",
        "sub",
        "super",
        "text-top",
        "top",
        "text-bottom",
        "bottom",
    ]
)

# Sized and keyed display options: 220px, x200px, upright=1.2, link=, class=
IMAGE_OPTION_PATTERN: re.Pattern[str] = re.compile(
    r"^(\d*x?\d+ ?px|(upright|link|class|lang|page|thumbtime|start|end|loop|muted|border)\s*=.*)$",
    re.IGNORECASE,
)

# alt= option
ALT_PATTERN: re.Pattern[str] = re.compile(r"^alt\s*=\s*(.*)$", re.IGNORECASE | re.DOTALL)


def is_file_link(text: str) -> bool:
    """Check whether a [[...]] match links to a file.

    Examples:
        >>> is_file_link("[[File:Toronto.jpg|thumb]]")
        True
        >>> is_file_link("[[Toronto]]")
        False
    """
    return FILE_LINK_PATTERN.match(text) is not None


def _is_option(field: str) -> bool:
    field = field.strip()
    return field.lower() in IMAGE_OPTIONS or IMAGE_OPTION_PATTERN.match(field) is not None


def parse_image(match_text: str) -> Image | None:
    """Parse one ``[[File:...]]`` link.

    Args:
        match_text: The full bracketed link.

    Returns:
        Image, or None if the link is not a file link.

    Examples:
        >>> img = parse_image("[[File:Toronto.jpg|thumb|220px|alt=Skyline|The [[CN Tower]] at night]]")
        >>> img.file, img.alt, img.caption.text
        ('File:Toronto.jpg', 'Skyline', 'The CN Tower at night')
    """
    if not is_file_link(match_text):
        return None
    inner = match_text.strip()[2:-2]
    fields = split_args("{{" + inner + "}}")
    if not fields or not fields[0]:
        return None

    file = fields[0].strip()
    alt: str | None = None
    remaining: list[str] = []
    for field in fields[1:]:
        alt_match = ALT_PATTERN.match(field)
        if alt_match is not None:
            alt = alt_match.group(1).strip() or None
        elif not _is_option(field):
            remaining.append(field)

    caption = from_text(remaining[-1]) if remaining and remaining[-1].strip() else None
    return Image(file=file, alt=alt, caption=caption, wiki=match_text)


def parse_gallery(wiki: str) -> tuple[list[Image], str]:
    """Extract images from ``<gallery>`` blocks.

    Returns:
        Tuple of (images, text_without_galleries).

    Examples:
        >>> images, rest = parse_gallery("<gallery>\\nToronto.jpg|The city\\n</gallery>")
        >>> images[0].file, images[0].caption.text
        ('File:Toronto.jpg', 'The city')
    """
    images: list[Image] = []

    def _gallery(match: re.Match[str]) -> str:
        for line in match.group(1).split("\n"):
            line = line.strip()
            if not line:
                continue
            file, _, caption = line.partition("|")
            file = file.strip()
            if not file:
                continue
            if not FILE_PREFIX_PATTERN.match(file):
                file = f"File:{file}"
            images.append(
                Image(
                    file=file,
                    caption=from_text(caption) if caption.strip() else None,
                    wiki=line,
                )
            )
        return ""

    wiki = GALLERY_PATTERN.sub(_gallery, wiki)
    return images, wiki


def parse_images(wiki: str) -> tuple[list[Image], str]:
    """Extract file links and galleries from paragraph text.

    Returns:
        Tuple of (images, remaining_text).
    """
    images: list[Image] = []
    parts: list[str] = []
    cursor = 0
    for match in find_brackets(wiki, "[", "]"):
        image = parse_image(match.text)
        if image is None:
            continue
        images.append(image)
        parts.append(wiki[cursor : match.start])
        cursor = match.end
    parts.append(wiki[cursor:])
    wiki = "".join(parts)

    gallery_images, wiki = parse_gallery(wiki)
    images.extend(gallery_images)
    return images, wiki
