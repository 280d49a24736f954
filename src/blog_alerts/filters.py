"""Post-render filters for the site generator.

The generator hands every rendered document to the filters registered
for ``after_post_render``; each filter may rewrite the document's
``content`` before the page is written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, TypeVar

from blog_alerts.transformer import AlertTransformer

logger = logging.getLogger(__name__)

T = TypeVar("T")

AFTER_POST_RENDER = "after_post_render"
DEFAULT_PRIORITY = 10

Filter = Callable[[Any], Any]


@lru_cache(maxsize=1)
def _default_transformer() -> AlertTransformer:
    return AlertTransformer()


def after_post_render(document: T, transformer: AlertTransformer | None = None) -> T:
    """Render alert blocks in a document's content.

    The document is either an object with a ``content`` attribute (such
    as Post) or a mutable mapping with a ``"content"`` key. Only the
    content is replaced; every other field is left as it was.

    Args:
        document: Rendered document from the generator.
        transformer: Transformer to use (default styles if omitted).

    Returns:
        The same document object.

    Raises:
        TypeError: If the document carries no textual content.
    """
    transformer = transformer or _default_transformer()

    if isinstance(document, MutableMapping):
        content = document.get("content")
        if not isinstance(content, str):
            raise TypeError("Document mapping must have a string 'content' entry")
        document["content"] = transformer.transform(content)
        return document

    content = getattr(document, "content", None)
    if not isinstance(content, str):
        raise TypeError(f"{type(document).__name__} has no string 'content' attribute")
    document.content = transformer.transform(content)  # type: ignore[attr-defined]
    return document


@dataclass(frozen=True)
class RegisteredFilter:
    """A filter bound to an event.

    Attributes:
        fn: Callable receiving the document.
        priority: Lower values run first.
        order: Registration sequence, used to break priority ties.
    """

    fn: Filter
    priority: int
    order: int


class FilterRegistry:
    """Event-keyed filter chain.

    Filters for an event run in ascending priority. A filter returning
    None keeps the current data; any other return value replaces it.
    """

    def __init__(self) -> None:
        self._filters: dict[str, list[RegisteredFilter]] = {}
        self._counter = 0

    def register(self, event: str, fn: Filter, priority: int = DEFAULT_PRIORITY) -> None:
        """Register a filter for an event.

        Args:
            event: Event name, e.g. ``after_post_render``.
            fn: Filter callable.
            priority: Lower values run first.
        """
        entries = self._filters.setdefault(event, [])
        entries.append(RegisteredFilter(fn=fn, priority=priority, order=self._counter))
        entries.sort(key=lambda entry: (entry.priority, entry.order))
        self._counter += 1
        logger.debug(
            "Registered filter %s for %s (priority %d)",
            getattr(fn, "__name__", repr(fn)),
            event,
            priority,
        )

    def unregister(self, event: str, fn: Filter) -> bool:
        """Remove a filter from an event.

        Returns:
            True if the filter was registered.
        """
        entries = self._filters.get(event, [])
        remaining = [entry for entry in entries if entry.fn is not fn]
        if len(remaining) == len(entries):
            return False
        self._filters[event] = remaining
        return True

    def filters(self, event: str) -> list[Filter]:
        """Return the filters of an event in execution order."""
        return [entry.fn for entry in self._filters.get(event, [])]

    def execute(self, event: str, data: T) -> T:
        """Run every filter of an event over the data."""
        for fn in self.filters(event):
            result = fn(data)
            if result is not None:
                data = result
        return data


def default_registry(transformer: AlertTransformer | None = None) -> FilterRegistry:
    """Create a registry with the alert filter bound to after_post_render."""
    registry = FilterRegistry()
    if transformer is None:
        registry.register(AFTER_POST_RENDER, after_post_render)
    else:
        registry.register(
            AFTER_POST_RENDER,
            lambda document: after_post_render(document, transformer),
        )
    return registry
