"""Date detection and formatting helpers.

Used for the date side record of a sentence and by the date family of
template handlers.
"""

from __future__ import annotations

import re
from datetime import date

from wikidoc.parsers.types import ParsedDate

MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Month name or three-letter abbreviation to month number
MONTH_NUMBERS: dict[str, int] = {
    **{name.lower(): i for i, name in enumerate(MONTHS, start=1)},
    **{name[:3].lower(): i for i, name in enumerate(MONTHS, start=1)},
    "sept": 9,
}

_MONTH_ALT = "|".join(sorted(MONTH_NUMBERS, key=len, reverse=True))

# Plausible four-digit year
YEAR_PATTERN: re.Pattern[str] = re.compile(r"\b(1[0-9]{3}|20[0-9]{2})\b")

# 1999-03-12
ISO_DATE_PATTERN: re.Pattern[str] = re.compile(r"\b(1[0-9]{3}|20[0-9]{2})-([01]?[0-9])-([0-3]?[0-9])\b")

# 12 March 1999
DAY_MONTH_YEAR_PATTERN: re.Pattern[str] = re.compile(
    rf"\b([0-3]?[0-9]) ({_MONTH_ALT})\.?,? (1[0-9]{{3}}|20[0-9]{{2}})\b", re.IGNORECASE
)

# March 12, 1999
MONTH_DAY_YEAR_PATTERN: re.Pattern[str] = re.compile(
    rf"\b({_MONTH_ALT})\.? ([0-3]?[0-9]),? (1[0-9]{{3}}|20[0-9]{{2}})\b", re.IGNORECASE
)

# March 1999
MONTH_YEAR_PATTERN: re.Pattern[str] = re.compile(
    rf"\b({_MONTH_ALT})\.?,? (1[0-9]{{3}}|20[0-9]{{2}})\b", re.IGNORECASE
)


def _valid(year: int, month: int | None, day: int | None) -> bool:
    if month is None:
        return True
    if not 1 <= month <= 12:
        return False
    if day is None:
        return True
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def find_date(text: str) -> ParsedDate | None:
    """Find the most specific date mentioned in a sentence.

    Full dates win over month-year, which wins over a bare year.

    Args:
        text: Plain sentence text.

    Returns:
        ParsedDate, or None when no date-like text was found.

    Examples:
        >>> find_date("It was founded on 6 March 1834.").iso()
        '1834-03-06'
        >>> find_date("It was founded in 1834.").iso()
        '1834'
        >>> find_date("No dates here.") is None
        True
    """
    match = ISO_DATE_PATTERN.search(text)
    if match:
        year, month, day = (int(g) for g in match.groups())
        if _valid(year, month, day):
            return ParsedDate(year, month, day)

    match = DAY_MONTH_YEAR_PATTERN.search(text)
    if match:
        day, month, year = int(match.group(1)), MONTH_NUMBERS[match.group(2).lower()], int(match.group(3))
        if _valid(year, month, day):
            return ParsedDate(year, month, day)

    match = MONTH_DAY_YEAR_PATTERN.search(text)
    if match:
        month, day, year = MONTH_NUMBERS[match.group(1).lower()], int(match.group(2)), int(match.group(3))
        if _valid(year, month, day):
            return ParsedDate(year, month, day)

    match = MONTH_YEAR_PATTERN.search(text)
    if match:
        return ParsedDate(int(match.group(2)), MONTH_NUMBERS[match.group(1).lower()])

    match = YEAR_PATTERN.search(text)
    if match:
        return ParsedDate(int(match.group(1)))
    return None


def to_int(value: object) -> int | None:
    """Parse a template argument as an integer, None if it is not one."""
    if value is None:
        return None
    text = str(value).strip()
    if not re.fullmatch(r"-?[0-9]+", text):
        return None
    return int(text)


def format_date(year: int | None, month: int | None = None, day: int | None = None, day_first: bool = False) -> str:
    """Render date parts the way English Wikipedia prints them.

    Examples:
        >>> format_date(1993, 2, 24)
        'February 24, 1993'
        >>> format_date(1993, 2, 24, day_first=True)
        '24 February 1993'
        >>> format_date(1993, 2)
        'February 1993'
    """
    if year is None:
        return ""
    if month is None or not 1 <= month <= 12:
        return str(year)
    month_name = MONTHS[month - 1]
    if day is None:
        return f"{month_name} {year}"
    if day_first:
        return f"{day} {month_name} {year}"
    return f"{month_name} {day}, {year}"


def years_between(start: date, end: date) -> int:
    """Whole years elapsed from ``start`` to ``end``.

    Examples:
        >>> years_between(date(1990, 6, 15), date(2020, 6, 14))
        29
    """
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
