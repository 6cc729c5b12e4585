"""Attribute bags that delegate reads to an enclosing scope.

Every tag invocation receives a :class:`Scope` whose parent is the scope of the
enclosing tag (or the render-wide globals). Assignments land on the innermost
scope only, so leaving a tag restores whatever the outer tags had set.

Example
-------
>>> from page_tags.engine.scope import Scope
>>> outer = Scope()
>>> outer.page = "home"
>>> inner = Scope(outer)
>>> inner.page
'home'
>>> inner.page = "child"
>>> (outer.page, inner.page)
('home', 'child')
>>> inner.missing is None
True
"""

from __future__ import annotations

import typing as typ


class Scope:
    """Open attribute bag with read-through to a parent scope."""

    __slots__ = ("_parent", "_values")

    def __init__(self, parent: Scope | None = None) -> None:
        object.__setattr__(self, "_parent", parent)
        object.__setattr__(self, "_values", {})

    def __getattr__(self, name: str) -> typ.Any:
        if name.startswith("__"):
            raise AttributeError(name)
        values: dict[str, typ.Any] = object.__getattribute__(self, "_values")
        if name in values:
            return values[name]
        parent = object.__getattribute__(self, "_parent")
        if parent is None:
            return None
        return getattr(parent, name)

    def __setattr__(self, name: str, value: typ.Any) -> None:
        self._values[name] = value

    def __contains__(self, name: str) -> bool:
        if name in self._values:
            return True
        return self._parent is not None and name in self._parent

    def __repr__(self) -> str:
        return f"Scope({self._values!r})"


__all__ = ["Scope"]
