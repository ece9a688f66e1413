"""Template expansion for one section of markup.

Every {{...}} template found by the bracket scanner is resolved deepest
first, so an outer template is tokenized only after its inner templates
have been replaced by their text. Each template goes through, in order:

1. the registry's ignore set (removed silently)
2. a registered handler (inline text, optional record)
3. the infobox name heuristic (record, no text)
4. the ``cite *`` prefix rule (citation record, no text)
5. the fallback (generic record, no text)

After the pass, records are sorted into references, infoboxes and generic
templates by their name alone.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from wikidoc.parsers.brackets import TemplateNode, find_templates
from wikidoc.parsers.citation import to_reference
from wikidoc.parsers.infobox import build_infobox, is_infobox, to_infobox_record
from wikidoc.parsers.registry import TemplateRegistry
from wikidoc.parsers.template import parse_template, template_name
from wikidoc.parsers.types import Infobox, Reference, Template

logger = logging.getLogger(__name__)

# Generic citation templates: {{cite web}}, {{cite book}}, ...
CITE_PATTERN: re.Pattern[str] = re.compile(r"^cite [a-z]")

# Record names that belong in the reference list
CITATION_NAMES: frozenset[str] = frozenset(["citation", "refn", "harvnb", "source"])
CITATION_NAME_PATTERN: re.Pattern[str] = re.compile(r"^(cite |citation)")

Record = tuple[dict[str, Any], str]
"""A structured template record and the markup it came from."""


@dataclass
class TemplateOutput:
    """Result of expanding the templates of one section.

    Attributes:
        text: Section text with every template replaced by its inline text.
        templates: Generic template records.
        infoboxes: Infobox records.
        references: Citation records.
    """

    text: str
    templates: list[Template] = field(default_factory=list)
    infoboxes: list[Infobox] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)


def dispatch_template(
    body: str,
    registry: TemplateRegistry,
    today: date,
    records: list[Record],
) -> str:
    """Resolve a single template whose inner templates are already expanded.

    Args:
        body: Template markup including its braces.
        registry: Handlers and ignore set.
        today: Injected current date, passed to handlers.
        records: Receives at most one structured record.

    Returns:
        The inline text that replaces the template.
    """
    name = template_name(body)
    if name is None or registry.ignores(name):
        return ""

    handler = registry.get(name)
    if handler is not None:
        args = parse_template(body, order=handler.order, fmt="raw")
        try:
            text, record = handler.fn(args, today)
        except (ValueError, TypeError, KeyError, IndexError) as e:
            logger.warning("Handler for {{%s}} failed, keeping raw record: %s", name, e)
            records.append((parse_template(body, fmt="raw"), body))
            return ""
        if record is not None:
            records.append((record, body))
        return text

    if is_infobox(name):
        records.append((to_infobox_record(parse_template(body, fmt="raw")), body))
        return ""

    if CITE_PATTERN.match(name):
        record = parse_template(body, fmt="raw")
        record["type"] = name[len("cite ") :].strip()
        record["template"] = "citation"
        records.append((record, body))
        return ""

    records.append((parse_template(body, fmt="raw"), body))
    return ""


def _substitute(
    text: str,
    nodes: list[TemplateNode],
    registry: TemplateRegistry,
    today: date,
    records: list[Record],
) -> str:
    parts: list[str] = []
    cursor = 0
    for node in nodes:
        parts.append(text[cursor : node.start])
        body = _substitute(node.body, node.children, registry, today, records)
        parts.append(dispatch_template(body, registry, today, records))
        cursor = node.end
    parts.append(text[cursor:])
    return "".join(parts)


def is_citation_record(name: str) -> bool:
    return name in CITATION_NAMES or CITATION_NAME_PATTERN.match(name) is not None


def sort_records(records: list[Record]) -> tuple[list[Template], list[Infobox], list[Reference]]:
    """Move citation and infobox records out of the generic template list.

    Returns:
        Tuple of (templates, infoboxes, references), each in record order.
    """
    templates: list[Template] = []
    infoboxes: list[Infobox] = []
    references: list[Reference] = []
    for record, wiki in records:
        name = str(record.get("template", ""))
        if is_citation_record(name):
            references.append(to_reference(record, wiki=wiki))
            continue
        if name == "infobox":
            subbox = str(record.get("data", {}).get("subbox", "")).strip().lower()
            if subbox != "yes":
                infoboxes.append(build_infobox(record, wiki=wiki))
                continue
        data = {key: value for key, value in record.items() if key != "template"}
        templates.append(Template(name=name, data=data, wiki=wiki))
    return templates, infoboxes, references


def expand_templates(
    wiki: str,
    registry: TemplateRegistry,
    today: date,
    max_depth: int | None = None,
) -> TemplateOutput:
    """Expand every template in a section's markup.

    Args:
        wiki: Section markup.
        registry: Handlers and ignore set.
        today: Injected current date.
        max_depth: Nesting levels to resolve; deeper templates stay as
            markup inside their parent. Defaults to the configured limit.

    Returns:
        TemplateOutput with the rendered text and the sorted records.

    Examples:
        >>> out = expand_templates("{{Infobox city|population=1000}}", default_registry(), date.today())
        >>> out.infoboxes[0].type, out.infoboxes[0].get("population").text
        ('city', '1000')
    """
    records: list[Record] = []
    nodes = find_templates(wiki, max_depth)
    text = _substitute(wiki, nodes, registry, today, records)
    templates, infoboxes, references = sort_records(records)
    if nodes:
        logger.debug(
            "Expanded %d templates: %d generic, %d infoboxes, %d references",
            len(nodes),
            len(templates),
            len(infoboxes),
            len(references),
        )
    return TemplateOutput(text=text, templates=templates, infoboxes=infoboxes, references=references)
