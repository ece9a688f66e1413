"""Key escaping for document stores that restrict key characters.

Some stores reject keys containing ``.`` or starting with ``$``. These
helpers rewrite such keys in a nested record so it can be stored, and undo
the rewrite when it is read back.
"""

from __future__ import annotations

import re
from typing import Any

# Escaped forms, as literal backslash sequences
DOLLAR_ESCAPE = "\\u0024"
DOT_ESCAPE = "\\u002e"

# One escape sequence in an encoded key
_ESCAPE_PATTERN: re.Pattern[str] = re.compile(r"\\(\\|u0024|u002e)")


def encode_key(key: str) -> str:
    r"""Escape one key.

    Examples:
        >>> encode_key("$ref.name")
        '\\u0024ref\\u002ename'
        >>> encode_key("a\\b")
        'a\\\\b'
    """
    key = key.replace("\\", "\\\\")
    if key.startswith("$"):
        key = DOLLAR_ESCAPE + key[1:]
    return key.replace(".", DOT_ESCAPE)


def decode_key(key: str) -> str:
    """Undo :func:`encode_key`."""

    def _unescape(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "\\":
            return "\\"
        return "$" if token == "u0024" else "."

    return _ESCAPE_PATTERN.sub(_unescape, key)


def _walk(value: Any, transform: Any) -> Any:
    if isinstance(value, dict):
        return {transform(str(key)): _walk(item, transform) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_walk(item, transform) for item in value]
    return value


def encode_keys(record: Any) -> Any:
    """Recursively escape every key of a nested record.

    Lists are walked too; values are left untouched.

    Examples:
        >>> encode_keys({"data": {"u.s.": 1, "$x": [{"a.b": 2}]}})
        {'data': {'u\\\\u002es\\\\u002e': 1, '\\\\u0024x': [{'a\\\\u002eb': 2}]}}
    """
    return _walk(record, encode_key)


def decode_keys(record: Any) -> Any:
    """Recursively reverse :func:`encode_keys`."""
    return _walk(record, decode_key)
