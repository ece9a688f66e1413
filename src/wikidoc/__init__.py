"""Parse MediaWiki markup into a navigable document model.

Example usage::

    import wikidoc

    doc = wikidoc.parse(markup, title="Toronto")
    doc.infobox().get("population").text
    doc.section("History").text()
    doc.to_dict()
"""

from wikidoc.document import Document, JsonOptions, Paragraph, Section
from wikidoc.encoding import decode_keys, encode_keys
from wikidoc.errors import InvalidMarkupError, InvalidOptionsError, WikidocError
from wikidoc.parsers.registry import TemplateRegistry, default_registry
from wikidoc.parsers.types import (
    Image,
    Infobox,
    Link,
    RedirectTarget,
    Reference,
    Sentence,
    Table,
    Template,
    WikiList,
)
from wikidoc.pipeline import ParseOptions, parse

__all__ = [
    "Document",
    "Image",
    "Infobox",
    "InvalidMarkupError",
    "InvalidOptionsError",
    "JsonOptions",
    "Link",
    "Paragraph",
    "ParseOptions",
    "RedirectTarget",
    "Reference",
    "Section",
    "Sentence",
    "Table",
    "Template",
    "TemplateRegistry",
    "WikiList",
    "WikidocError",
    "decode_keys",
    "default_registry",
    "encode_keys",
    "parse",
]
