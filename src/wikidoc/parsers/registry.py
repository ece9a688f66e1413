"""Template dispatch registry.

Maps a normalized template name to a pure handler function. A handler gets
the template's tokenized arguments and the injected current date, and
returns the inline text to substitute plus an optional structured record.
Handlers never see the section they are dispatched from.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from wikidoc.parsers.template import normalize_name

HandlerFn = Callable[[dict[str, Any], date], tuple[str, dict[str, Any] | None]]
"""fn(args, today) -> (inline_text, record_or_none)."""


@dataclass(frozen=True)
class Handler:
    """A registered template handler.

    Attributes:
        fn: The handler function.
        order: Names for the template's positional arguments, passed to the
            tokenizer before the handler runs.
    """

    fn: HandlerFn
    order: tuple[str, ...] = ()


class TemplateRegistry:
    """Named template handlers plus a set of templates to drop silently.

    Examples:
        >>> registry = TemplateRegistry()
        >>> @registry.register("shout", order=("text",))
        ... def shout(args, today):
        ...     return args.get("text", "").upper(), None
        >>> "Shout" in registry
        True
    """

    def __init__(
        self,
        handlers: dict[str, Handler] | None = None,
        ignored: Iterable[str] = (),
    ) -> None:
        self._handlers: dict[str, Handler] = dict(handlers or {})
        self._ignored: set[str] = {normalize_name(name) for name in ignored}

    def register(self, *names: str, order: tuple[str, ...] = ()) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator registering a function under one or more template names."""

        def decorator(fn: HandlerFn) -> HandlerFn:
            for name in names:
                self._handlers[normalize_name(name)] = Handler(fn=fn, order=order)
            return fn

        return decorator

    def add(self, name: str, fn: HandlerFn, order: tuple[str, ...] = ()) -> None:
        """Register a handler without the decorator syntax."""
        self._handlers[normalize_name(name)] = Handler(fn=fn, order=order)

    def ignore(self, *names: str) -> None:
        """Mark templates that are removed without a trace."""
        self._ignored.update(normalize_name(name) for name in names)

    def ignores(self, name: str) -> bool:
        return normalize_name(name) in self._ignored

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(normalize_name(name))

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def copy(self) -> TemplateRegistry:
        """Return an independent registry with the same entries."""
        clone = TemplateRegistry(self._handlers)
        clone._ignored = set(self._ignored)
        return clone

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


def default_registry() -> TemplateRegistry:
    """Return a fresh copy of the built-in handler set."""
    from wikidoc.parsers.handlers import registry

    return registry.copy()
