"""Registry of named tag handlers.

Handlers are plain functions taking a :class:`~page_tags.engine.TagBinding`.
They are registered under their fully qualified name with
:meth:`TagLibrary.tag`, and their docstring doubles as the description shown
in the tag reference.

Example
-------
>>> from page_tags.tags.library import TagLibrary
>>> library = TagLibrary()
>>> @library.tag("hello")
... def hello(tag):
...     '''Render a greeting.'''
...     return "hello"
>>> library["hello"].description
'Render a greeting.'
"""

from __future__ import annotations

import dataclasses as dc
import inspect
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from page_tags.engine import TagHandler


@dc.dataclass(slots=True, frozen=True)
class TagDefinition:
    """A tag name bound to its handler."""

    name: str
    handler: TagHandler

    @property
    def description(self) -> str:
        """Return the handler's dedented docstring."""
        return inspect.getdoc(self.handler) or ""


class TagLibrary:
    """Ordered collection of tag definitions."""

    def __init__(self) -> None:
        self._definitions: dict[str, TagDefinition] = {}

    def tag(self, name: str) -> cabc.Callable[[TagHandler], TagHandler]:
        """Return a decorator registering the wrapped handler as ``name``."""

        def _register(handler: TagHandler) -> TagHandler:
            self.define(name, handler)
            return handler

        return _register

    def define(self, name: str, handler: TagHandler) -> None:
        """Register ``handler`` as ``name``, replacing any earlier definition."""
        self._definitions[name] = TagDefinition(name=name, handler=handler)

    def update(self, other: TagLibrary) -> None:
        """Copy every definition from ``other`` into this library."""
        self._definitions.update(other._definitions)

    def handlers(self) -> dict[str, TagHandler]:
        """Return a ``name -> handler`` mapping suitable for a Context."""
        return {name: definition.handler for name, definition in self._definitions.items()}

    def __getitem__(self, name: str) -> TagDefinition:
        return self._definitions[name]

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> cabc.Iterator[TagDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


__all__ = ["TagDefinition", "TagLibrary"]
