"""Parser modules for MediaWiki markup.

Each module owns one markup concern and works on plain strings, returning
value objects from :mod:`wikidoc.parsers.types` plus the text left over once
its markup is removed:

- **Brackets**: balanced {{...}} / [[...]] discovery with repair
- **Templates**: tokenizing, handler dispatch, infobox detection
- **References**: <ref> tags and {{cite ...}} citations
- **Tables**: {| ... |} blocks with row/column span resolution
- **Lists, images, sentences, links**: paragraph-level content
- **Headings and pages**: section splitting, redirects, categories

Example usage::

    from wikidoc.parsers import parse_links

    links, text = parse_links("See [[Paris|the city]].")
    # links[0].page == "Paris", text == "See the city."
"""

from wikidoc.parsers.brackets import (
    BracketMatch,
    TemplateNode,
    find_brackets,
    find_inner,
    find_templates,
)
from wikidoc.parsers.citation import has_citation, parse_references
from wikidoc.parsers.dispatch import TemplateOutput, expand_templates
from wikidoc.parsers.heading import parse_heading, split_sections
from wikidoc.parsers.image import is_file_link, parse_gallery, parse_image, parse_images
from wikidoc.parsers.infobox import is_infobox, to_infobox_record
from wikidoc.parsers.link import parse_interwiki, parse_links, titlecase
from wikidoc.parsers.lists import is_list_line, parse_lists
from wikidoc.parsers.page import (
    extract_categories,
    is_disambiguation,
    is_redirect,
    parse_redirect,
    preprocess,
)
from wikidoc.parsers.registry import Handler, TemplateRegistry, default_registry
from wikidoc.parsers.sentence import from_text, parse_formatting, parse_sentences, split_sentences
from wikidoc.parsers.table import (
    find_headers,
    find_rows,
    find_tables,
    first_row_header,
    handle_spans,
    parse_table,
    parse_tables,
)
from wikidoc.parsers.template import normalize_name, parse_template, split_args, template_name
from wikidoc.parsers.types import (
    Formatting,
    Image,
    Infobox,
    Link,
    LinkType,
    ParsedDate,
    RedirectTarget,
    Reference,
    Sentence,
    Table,
    Template,
    WikiList,
)

__all__ = [
    "BracketMatch",
    "Formatting",
    "Handler",
    "Image",
    "Infobox",
    "Link",
    "LinkType",
    "ParsedDate",
    "RedirectTarget",
    "Reference",
    "Sentence",
    "Table",
    "Template",
    "TemplateNode",
    "TemplateOutput",
    "TemplateRegistry",
    "WikiList",
    "default_registry",
    "expand_templates",
    "extract_categories",
    "find_brackets",
    "find_headers",
    "find_inner",
    "find_rows",
    "find_tables",
    "find_templates",
    "first_row_header",
    "from_text",
    "handle_spans",
    "has_citation",
    "is_disambiguation",
    "is_file_link",
    "is_infobox",
    "is_list_line",
    "is_redirect",
    "normalize_name",
    "parse_formatting",
    "parse_gallery",
    "parse_heading",
    "parse_image",
    "parse_images",
    "parse_interwiki",
    "parse_links",
    "parse_lists",
    "parse_redirect",
    "parse_references",
    "parse_sentences",
    "parse_table",
    "parse_tables",
    "parse_template",
    "preprocess",
    "split_args",
    "split_sentences",
    "split_sections",
    "template_name",
    "titlecase",
    "to_infobox_record",
]
