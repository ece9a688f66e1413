"""Built-in template handlers.

A representative set of handlers for templates that are common enough in
article prose that dropping them would garble sentences. Each handler is a
pure function of the tokenized arguments and the injected current date.
Anything not covered here falls through to the infobox, citation and
fallback paths in :mod:`wikidoc.parsers.dispatch`.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any

from wikidoc.parsers.dates import MONTHS, format_date, to_int, years_between
from wikidoc.parsers.registry import HandlerFn, TemplateRegistry

# Templates removed with no text and no record
IGNORED_TEMPLATES: tuple[str, ...] = (
    "anchor",
    "toc",
    "tocleft",
    "tocright",
    "toc limit",
    "compact toc",
    "reflist",
    "refbegin",
    "refend",
    "notelist",
    "short description",
    "use dmy dates",
    "use mdy dates",
    "use british english",
    "use american english",
    "use canadian english",
    "use australian english",
    "use indian english",
    "engvarb",
    "authority control",
    "defaultsort",
    "displaytitle",
    "italic title",
    "lowercase title",
    "citation needed",
    "cn",
    "fact",
    "dead link",
    "clarify",
    "when",
    "who",
    "which",
    "by whom",
    "according to whom",
    "vague",
    "page needed",
    "better source needed",
    "pp",
    "pp-semi-protected",
    "pp-move-indef",
    "pp-protected",
    "good article",
    "featured article",
    "clear",
    "-",
    "main",
    "see also",
    "further",
    "about",
    "for",
    "redirect",
    "other uses",
    "distinguish",
    "portal",
    "commons category",
    "wikiquote",
    "sister project links",
    "stub",
    "coord missing",
    "multiple issues",
    "unreferenced",
    "more citations needed",
    "refimprove",
    "update",
    "edit section",
)

# Templates that stand for a fixed piece of text
FIXED_TEXT: dict[str, str] = {
    "nbsp": " ",
    "sp": " ",
    "ndash": "–",
    "en dash": "–",
    "mdash": "—",
    "em dash": "—",
    "snd": " – ",
    "spaced ndash": " – ",
    "spnd": " – ",
    "!": "|",
    "=": "=",
    "'": "'",
    "colon": ":",
    "dot": " · ",
    "middot": "·",
    "·": " · ",
    "bull": " • ",
    "shy": "",
    "zwsp": "",
    "break": " ",
    "br": " ",
}

# Text-only wrappers whose first argument is the text
PASSTHROUGH: tuple[str, ...] = (
    "nowrap",
    "nobr",
    "small",
    "smaller",
    "big",
    "larger",
    "nobold",
    "noitalic",
    "em",
    "strong",
    "var",
    "sic",
    "vanchor",
    "visible anchor",
    "linktext",
    "keypress",
    "mono",
    "code",
    "tooltip",
)

# Second argument of {{convert}} that makes it a range
RANGE_WORDS: frozenset[str] = frozenset(["-", "–", "to", "and", "by", "or", "x", "×", "to(-)"])

# Leading scheme and www. shown without by {{URL}}
URL_SCHEME_PATTERN: re.Pattern[str] = re.compile(r"^(https?://)?(www\.)?", re.IGNORECASE)

# Bullet at the start of a line inside a list-wrapping template
BULLET_PATTERN: re.Pattern[str] = re.compile(r"^\s*[*#]+\s*")

# Hemisphere letter following a run of coordinate numbers
HEMISPHERES: frozenset[str] = frozenset(["N", "S", "E", "W"])

registry = TemplateRegistry(ignored=IGNORED_TEMPLATES)


def _text(args: dict[str, Any], key: str) -> str:
    value = args.get(key)
    return value.strip() if isinstance(value, str) else ""


def _yes(args: dict[str, Any], key: str) -> bool:
    return _text(args, key).lower() in ("y", "yes", "true", "1")


def _list(args: dict[str, Any]) -> list[str]:
    return [item for item in args.get("list", []) if isinstance(item, str)]


def _fixed(text: str) -> HandlerFn:
    def handler(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
        return text, None

    return handler


for _name, _value in FIXED_TEXT.items():
    registry.add(_name, _fixed(_value))


@registry.register(*PASSTHROUGH, order=("text",))
def passthrough(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return _text(args, "text"), None


@registry.register("lang", "transl", "transliteration", order=("code", "text"))
def lang(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return _text(args, "text"), None


@registry.register("abbr", "abbrlink", order=("abbr", "meaning"))
def abbr(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return _text(args, "abbr"), None


@registry.register("ill", "interlanguage link", order=("page", "lang", "foreign"))
def interlanguage_link(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    page = _text(args, "page")
    return (f"[[{page}]]" if page else ""), None


@registry.register("convert", "cvt", order=("num", "two", "three", "four"))
def convert(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    """Render a quantity in its input unit.

    Examples:
        >>> convert({"num": "5", "two": "km", "three": "mi"}, date.today())
        ('5 km', None)
        >>> convert({"num": "5", "two": "-", "three": "10", "four": "km"}, date.today())
        ('5–10 km', None)
    """
    num = _text(args, "num")
    two = _text(args, "two")
    if two in RANGE_WORDS:
        sep = "–" if two in ("-", "–") else f" {two.removesuffix('(-)')} "
        return f"{num}{sep}{_text(args, 'three')} {_text(args, 'four')}".strip(), None
    return f"{num} {two}".strip(), None


@registry.register("currentyear", "current year")
def current_year(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return str(today.year), None


@registry.register("currentmonth", "currentmonthname", "current month")
def current_month(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return MONTHS[today.month - 1], None


@registry.register("currentday", "current day")
def current_day(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return str(today.day), None


def _date_parts(args: dict[str, Any], prefix: str = "") -> tuple[int | None, int | None, int | None]:
    return (
        to_int(args.get(f"{prefix}year")),
        to_int(args.get(f"{prefix}month")),
        to_int(args.get(f"{prefix}day")),
    )


def _as_date(year: int, month: int | None, day: int | None) -> date | None:
    try:
        return date(year, month or 1, day or 1)
    except ValueError:
        return None


def _age(start: tuple[int | None, int | None, int | None], end: date) -> int | None:
    year, month, day = start
    if year is None:
        return None
    born = _as_date(year, month, day)
    if born is None or month is None or day is None:
        return end.year - year
    return years_between(born, end)


@registry.register(
    "birth date",
    "start date",
    "death date",
    "end date",
    "film date",
    "release date",
    order=("year", "month", "day"),
)
def date_template(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    """Render a date; unparseable input is returned as written."""
    year, month, day = _date_parts(args)
    if year is None:
        return _text(args, "year"), None
    return format_date(year, month, day, day_first=_yes(args, "df")), None


@registry.register("birth date and age", "bda", order=("year", "month", "day"))
def birth_date_and_age(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    """Render a birth date followed by the age on ``today``.

    Examples:
        >>> birth_date_and_age({"year": "1993", "month": "2", "day": "24"}, date(2024, 1, 1))
        ('February 24, 1993 (age 30)', None)
    """
    parts = _date_parts(args)
    if parts[0] is None:
        return _text(args, "year"), None
    text = format_date(*parts, day_first=_yes(args, "df"))
    return f"{text} (age {_age(parts, today)})", None


@registry.register("birth year and age", order=("year", "month"))
def birth_year_and_age(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    year = to_int(args.get("year"))
    if year is None:
        return _text(args, "year"), None
    return f"{year} (age {today.year - year})", None


@registry.register(
    "death date and age",
    "dda",
    order=("year", "month", "day", "birth_year", "birth_month", "birth_day"),
)
def death_date_and_age(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    death = _date_parts(args)
    if death[0] is None:
        return _text(args, "year"), None
    text = format_date(*death, day_first=_yes(args, "df"))
    died = _as_date(death[0], death[1], death[2])
    age = _age(_date_parts(args, "birth_"), died) if died else None
    if age is None:
        return text, None
    return f"{text} (aged {age})", None


@registry.register("age", order=("year", "month", "day", "end_year", "end_month", "end_day"))
def age(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    """Whole years from a date to another date, or to ``today``."""
    end_year, end_month, end_day = _date_parts(args, "end_")
    end = _as_date(end_year, end_month, end_day) if end_year is not None else today
    value = _age(_date_parts(args), end or today)
    if value is None:
        return _text(args, "year"), None
    return str(value), None


def _to_decimal(parts: list[float], hemisphere: str) -> float:
    degrees, minutes, seconds = (parts + [0.0, 0.0, 0.0])[:3]
    value = degrees + minutes / 60 + seconds / 3600
    if hemisphere in ("S", "W"):
        value = -value
    return round(value, 5)


def _parse_coordinates(items: list[str]) -> tuple[float | None, float | None]:
    """Read lat/lon from {{coord}} positional arguments.

    Accepts decimal pairs (``43.65|-79.38``) and degree/minute/second runs
    closed by a hemisphere letter (``43|39|N|79|23|W``).
    """
    numbers: list[float] = []
    found: list[float] = []
    for item in items:
        item = item.strip()
        if not item or ":" in item:
            continue
        if item.upper() in HEMISPHERES:
            found.append(_to_decimal(numbers, item.upper()))
            numbers = []
            continue
        try:
            numbers.append(float(item))
        except ValueError:
            continue
    if len(found) >= 2:
        return found[0], found[1]
    if not found and len(numbers) >= 2:
        return round(numbers[0], 5), round(numbers[1], 5)
    return None, None


@registry.register("coord", "coor", "coor d", "coor dm", "coor dms")
def coord(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    """Record a coordinate pair; nothing is left inline.

    Examples:
        >>> coord({"template": "coord", "list": ["43", "39", "N", "79", "23", "W"]}, date.today())
        ('', {'template': 'coord', 'lat': 43.65, 'lon': -79.38333})
    """
    lat, lon = _parse_coordinates(_list(args))
    record: dict[str, Any] = {"template": "coord", "lat": lat, "lon": lon}
    for key in ("display", "name", "format"):
        if _text(args, key):
            record[key] = _text(args, key)
    return "", record


@registry.register("url", order=("url", "name"))
def url(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    name = _text(args, "name")
    if name:
        return name, None
    return URL_SCHEME_PATTERN.sub("", _text(args, "url")).rstrip("/"), None


@registry.register("sortname", order=("first", "last", "target", "sort"))
def sortname(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    name = f"{_text(args, 'first')} {_text(args, 'last')}".strip()
    if args.get("nolink"):
        return name, None
    target = _text(args, "target")
    if target:
        return f"[[{target}|{name}]]", None
    return f"[[{name}]]", None


@registry.register("marriage", "married", order=("spouse", "from", "to", "end"))
def marriage(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    text = f"{_text(args, 'spouse')} (m. {_text(args, 'from')}"
    if _text(args, "to"):
        text += f"–{_text(args, 'to')}"
    return f"{text})", None


@registry.register("circa", "c.", order=("year", "year2"))
def circa(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    text = f"c. {_text(args, 'year')}"
    if _text(args, "year2"):
        text += f"–{_text(args, 'year2')}"
    return text, None


@registry.register("as of", order=("year", "month", "day"))
def as_of(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    year, month, day = _date_parts(args)
    when = format_date(year, month, day, day_first=_yes(args, "df")) if year else _text(args, "year")
    prefix = "as of" if _yes(args, "lc") else "As of"
    return f"{prefix} {when}".strip(), None


@registry.register("frac", "fraction", order=("a", "b", "c"))
def frac(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    a, b, c = _text(args, "a"), _text(args, "b"), _text(args, "c")
    if c:
        return f"{a} {b}/{c}", None
    if b:
        return f"{a}/{b}", None
    return f"1/{a}", None


@registry.register("val", order=("number", "uncertainty"))
def val(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    text = _text(args, "number")
    if _text(args, "uncertainty"):
        text += f"±{_text(args, 'uncertainty')}"
    unit = _text(args, "u") or _text(args, "ul")
    return f"{text} {unit}".strip(), None


@registry.register(
    "hlist",
    "flatlist",
    "plainlist",
    "plain list",
    "ubl",
    "ubil",
    "unbulleted list",
    "bulleted list",
    "cslist",
)
def inline_list(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    """Join list items with commas.

    Examples:
        >>> inline_list({"list": ["a", "b"]}, date.today())
        ('a, b', None)
        >>> inline_list({"list": ["\\n* a\\n* b"]}, date.today())
        ('a, b', None)
    """
    items: list[str] = []
    for item in _list(args):
        for line in item.split("\n"):
            line = BULLET_PATTERN.sub("", line).strip()
            if line:
                items.append(line)
    return ", ".join(items), None


@registry.register("quote", "blockquote", "cquote", "quotation", order=("text", "author", "source"))
def quote(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    text = f'"{_text(args, "text")}"'
    author = _text(args, "author")
    if author:
        text += f" - {author}"
    return text, None


@registry.register("refn", order=("text",))
def refn(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    record: dict[str, Any] = {"template": "refn", "text": _text(args, "text")}
    if _text(args, "name"):
        record["name"] = _text(args, "name")
    return "", record


@registry.register("efn", "efn-ua", "efn-lr", "notetag", order=("text",))
def efn(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return "", {"template": "efn", "text": _text(args, "text")}


@registry.register("harvnb", "harv", "harvtxt", order=("author", "year"))
def harvnb(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    record: dict[str, Any] = {"template": "harvnb"}
    for key in ("author", "year", "p", "pp", "loc"):
        if _text(args, key):
            record[key] = _text(args, key)
    return "", record


@registry.register("flag", "flagcountry", "flagu", "flag country", order=("country",))
def flag(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return _text(args, "country"), None


@registry.register("flagicon", "flag icon", "flagdeco", order=("country",))
def flagicon(args: dict[str, Any], today: date) -> tuple[str, dict[str, Any] | None]:
    return "", None
