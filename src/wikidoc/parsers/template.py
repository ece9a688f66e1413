"""Generic template tokenizer.

Turns ``{{name|a|b|key=value}}`` into a name plus an ordered/keyed argument
record without knowing what the template means. Handlers and the infobox,
citation and fallback paths all build on the record produced here.

Splitting is delegated to mwparserfromhell, so pipes inside nested links,
templates and tags never split a field. The keying rules on top of its
parameters (reserved and style keys, ``order`` slots, the ``1=`` retarget)
are applied here.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Literal

import mwparserfromhell
from mwparserfromhell.parser import ParserError

from wikidoc.parsers.sentence import from_text

if TYPE_CHECKING:
    from mwparserfromhell.nodes import Template

logger = logging.getLogger(__name__)

TemplateFormat = Literal["sentence", "raw", "json"]
"""How argument values are returned: Sentence objects, strings, or dicts."""

# Namespace prefixes that are not part of the template's name
NAME_PREFIX_PATTERN: re.Pattern[str] = re.compile(r"^\s*(template|subst|safesubst|msgnw)\s*:", re.IGNORECASE)

# Keys that would collide with engine-internal record keys
RESERVED_KEYS: frozenset[str] = frozenset(["template", "list", "prototype"])

# Presentation-only arguments with no semantic value
STYLE_KEYS: frozenset[str] = frozenset(
    [
        "classname",
        "style",
        "align",
        "margin",
        "left",
        "break",
        "boxsize",
        "framestyle",
        "item_style",
        "collapsible",
        "list_style_type",
        "list_style",
        "list_class",
        "class",
        "bodyclass",
        "bodystyle",
        "groupstyle",
        "abovestyle",
        "belowstyle",
        "titlestyle",
        "headerstyle",
        "labelstyle",
        "datastyle",
        "font-size",
        "background",
    ]
)


def _outer_template(body: str) -> Template | None:
    """Return the outermost template of ``body``, or None if it is not one.

    Markup without its outer braces is wrapped first.
    """
    markup = body.strip()
    if not markup.startswith("{{"):
        markup = "{{" + markup + "}}"
    try:
        templates = mwparserfromhell.parse(markup).filter_templates(recursive=False)
    except ParserError as e:
        logger.warning("Could not tokenize template %.60r: %s", markup, e)
        return None
    return templates[0] if templates else None


def split_args(body: str) -> list[str]:
    """Split a template into its name and argument fields.

    Pipes inside a nested ``[[link|text]]`` or ``{{template|arg}}`` do not
    split. Keyed fields keep their ``key=`` prefix.

    Args:
        body: Template markup, with or without its outer braces.

    Returns:
        Trimmed fields, the template name first. Trailing empty fields are
        dropped. Empty when the markup is not a template.

    Examples:
        >>> split_args("{{cite web|title=[[A|B]]|url=x}}")
        ['cite web', 'title=[[A|B]]', 'url=x']
    """
    template = _outer_template(body)
    if template is None:
        return []
    fields = [str(template.name).strip()]
    fields.extend(str(param).strip() for param in template.params)
    while len(fields) > 1 and not fields[-1]:
        fields.pop()
    return fields


def normalize_name(name: str) -> str:
    """Normalize a template name for lookups.

    Examples:
        >>> normalize_name(" Birth_date and age ")
        'birth date and age'
        >>> normalize_name("Template:Cite web")
        'cite web'
    """
    name = NAME_PREFIX_PATTERN.sub("", name)
    name = name.split(":", 1)[0]
    name = name.replace("_", " ")
    return " ".join(name.split()).lower()


def template_name(body: str) -> str | None:
    """Return the normalized name of a template, or None if it has none."""
    template = _outer_template(body)
    if template is None:
        return None
    return normalize_name(str(template.name)) or None


def _convert(value: str, fmt: TemplateFormat) -> Any:
    if fmt == "raw":
        return value
    sentence = from_text(value)
    if fmt == "json":
        return sentence.to_dict()
    return sentence


def parse_template(
    body: str,
    order: tuple[str, ...] | list[str] = (),
    fmt: TemplateFormat = "sentence",
) -> dict[str, Any]:
    """Tokenize a template into a keyed record.

    Args:
        body: Template markup, usually ``{{...}}``.
        order: Names for positional arguments, in order. Positional
            arguments beyond these go to the ``list`` entry.
        fmt: How values are returned (see :data:`TemplateFormat`).

    Returns:
        Record with ``template`` (the normalized name) first, then named
        arguments, then ``list`` when there were unnamed leftovers.

    Examples:
        >>> parse_template("{{lang|fr|bonjour}}", order=("code", "text"), fmt="raw")
        {'template': 'lang', 'code': 'fr', 'text': 'bonjour'}
    """
    template = _outer_template(body)
    if template is None:
        return {"template": ""}

    params = list(template.params)
    while params and not params[-1].showkey and not str(params[-1].value).strip():
        params.pop()

    named: dict[str, str] = {}
    positional: list[str] = []
    slot = 0
    for param in params:
        key = str(param.name).strip().lower()
        if param.showkey and key:
            value = str(param.value).strip()
            if key in RESERVED_KEYS:
                key = f"_{key}"
            if key in STYLE_KEYS:
                continue
            if not value and key in named:
                continue
            named[key] = value
            continue

        arg = str(param).strip()
        if slot < len(order):
            key = order[slot]
            if arg or key not in named:
                named[key] = arg
        else:
            positional.append(arg)
        slot += 1

    if "1" in named:
        if order and not named.get(order[0]):
            named[order[0]] = named.pop("1")
        elif not order and not positional:
            positional.append(named.pop("1"))

    record: dict[str, Any] = {"template": normalize_name(str(template.name))}
    for key, value in named.items():
        record[key] = _convert(value, fmt)
    if positional:
        record["list"] = [_convert(value, fmt) for value in positional]
    return record
