"""CLI for the wikitext parser.

Commands:
    wikidoc parse   Parse one page of MediaWiki markup

Examples:
    # Parse a page and print the document as JSON
    wikidoc parse Toronto.wiki --title Toronto

    # Read markup from stdin and print the plain text
    cat Toronto.wiki | wikidoc parse - --format text

    # Print the section outline, logging everything to ./logs/
    wikidoc -v --log-dir logs parse Toronto.wiki --format outline
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from wikidoc.document import Document, JsonOptions
from wikidoc.pipeline import parse

# =============================================================================
# LOGGING SETUP
# =============================================================================

# Package logger; the library modules log beneath it
logger = logging.getLogger("wikidoc")


def _setup_logging(log_dir: Path | None = None, verbose: bool = False) -> Path | None:
    """Configure logging with console and optional file handlers.

    Args:
        log_dir: Directory for a timestamped log file (default: no file)
        verbose: If True, set console to DEBUG level

    Returns:
        Path to the log file, or None when logging to the console only
    """
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Console handler - warnings only unless --verbose flag
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"wikidoc_{timestamp}.log"

    # File handler - captures everything with full detail
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    logger.info("Logging initialized - log file: %s", log_file)
    return log_file


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="wikidoc",
        description="Parse MediaWiki markup into a structured document",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for a timestamped log file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================================================
    # PARSE SUBCOMMAND
    # =========================================================================
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse one page of MediaWiki markup",
        description="Parse a file of MediaWiki markup (or - for stdin) and print the result.",
    )
    parse_parser.add_argument(
        "path",
        type=str,
        help="Markup file, or - to read stdin",
    )
    parse_parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Page title (default: the file name without extension)",
    )
    parse_parser.add_argument(
        "--page-id",
        type=int,
        default=None,
        help="Page identifier to record in the output",
    )
    parse_parser.add_argument(
        "--format",
        choices=["json", "text", "outline"],
        default="json",
        help="Output format (default: json)",
    )
    parse_parser.add_argument(
        "--plaintext",
        action="store_true",
        help="Add the whole page as plain text to the JSON output",
    )
    parse_parser.add_argument(
        "--encode-keys",
        action="store_true",
        help="Escape '.' and leading '$' in JSON keys",
    )

    return parser


def _read_markup(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _format_outline(doc: Document) -> str:
    lines: list[str] = []
    for section in doc.sections:
        title = section.title or "(lead)"
        lines.append(f"{'  ' * section.depth}{title}")
    return "\n".join(lines)


def _format_document(doc: Document, args: argparse.Namespace) -> str:
    if args.format == "text":
        return doc.text()
    if args.format == "outline":
        return _format_outline(doc)
    options = JsonOptions(
        coordinates=True,
        infoboxes=True,
        images=True,
        references=True,
        plaintext=args.plaintext,
        encode_keys=args.encode_keys,
    )
    return json.dumps(doc.to_dict(options), ensure_ascii=False, indent=2)


def _run_parse(args: argparse.Namespace) -> int:
    """Parse one markup file and print it.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 when the input cannot be read)
    """
    try:
        markup = _read_markup(args.path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read %s: %s", args.path, e)
        return 1

    title = args.title
    if title is None and args.path != "-":
        title = Path(args.path).stem.replace("_", " ")

    doc = parse(markup, title=title, page_id=args.page_id)
    logger.debug("Parsed %s: %d sections, type %s", args.path, len(doc.sections), doc.type)
    print(_format_document(doc, args))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the wikidoc command line."""
    parser = _create_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log_dir, args.verbose)

    if args.command == "parse":
        return _run_parse(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
