"""Text filters applied to rendered parts, snippets and author bios.

A filter id such as ``"Markdown"`` is stored alongside content; after the tags
in the content have been expanded, the matching filter converts the result to
HTML. Content without a filter id passes through unchanged.

Example
-------
>>> from page_tags.filters import apply_filter
>>> apply_filter("Markdown", "This is *all* about me.")
'<p>This is <em>all</em> about me.</p>'
>>> apply_filter(None, "plain")
'plain'
"""

from __future__ import annotations

import typing as typ

from .markdown_renderer import HtmlContentRenderer


class UnknownFilterError(KeyError):
    """Raised when content names a text filter that is not registered."""


class TextFilter(typ.Protocol):
    """Callable converting expanded content into its final form."""

    def filter(self, text: str) -> str: ...


class PlainFilter:
    """Return text unchanged."""

    def filter(self, text: str) -> str:
        return text


class MarkdownFilter:
    """Convert Markdown to HTML."""

    def __init__(self, renderer: HtmlContentRenderer | None = None) -> None:
        self.renderer = renderer or HtmlContentRenderer()

    def filter(self, text: str) -> str:
        return self.renderer.markdown(text)


_REGISTRY: dict[str, typ.Callable[[], TextFilter]] = {
    "Markdown": MarkdownFilter,
}


def register_filter(filter_id: str, factory: typ.Callable[[], TextFilter]) -> None:
    """Make ``factory`` available under ``filter_id``."""
    _REGISTRY[filter_id] = factory


def is_known_filter(filter_id: str | None) -> bool:
    """Return ``True`` for blank ids and registered filters."""
    return not filter_id or filter_id in _REGISTRY


def get_filter(filter_id: str | None) -> TextFilter:
    """Return a filter instance for ``filter_id``.

    Raises
    ------
    UnknownFilterError
        If ``filter_id`` is set but not registered.
    """
    if not filter_id:
        return PlainFilter()
    try:
        factory = _REGISTRY[filter_id]
    except KeyError as exc:
        raise UnknownFilterError(filter_id) from exc
    return factory()


def apply_filter(filter_id: str | None, text: str) -> str:
    """Run ``text`` through the filter called ``filter_id``."""
    return get_filter(filter_id).filter(text)


__all__ = [
    "MarkdownFilter",
    "PlainFilter",
    "TextFilter",
    "UnknownFilterError",
    "apply_filter",
    "get_filter",
    "is_known_filter",
    "register_filter",
]
