"""Tag definitions, name resolution, and scoped bindings.

A :class:`Context` owns the registered tag handlers and the stack of tags that
are currently being expanded. Rendering a tag pushes a :class:`TagBinding`
whose ``locals`` read through to the enclosing binding, calls the handler, and
pops the binding again, so state assigned by a handler is visible to the tags
nested in its body and nowhere else.

Tag names are resolved against the nesting: inside ``<r:children:each>`` a
bare ``<r:child>`` resolves to the ``children:each:child`` definition, while a
``<r:title>`` falls back to the global ``title`` definition.

Example
-------
>>> from page_tags.engine import Context
>>> context = Context()
>>> context.define_tag("outer", lambda tag: tag.expand())
>>> context.define_tag("outer:inner", lambda tag: "nested")
>>> context.render_tag("outer", {}, lambda: context.render_tag("inner"))
'nested'
"""

from __future__ import annotations

import collections.abc as cabc

from .errors import UndefinedTagError
from .scope import Scope

Block = cabc.Callable[[], str]
TagHandler = cabc.Callable[["TagBinding"], object]


class TagBinding:
    """The object handed to a tag handler for one invocation."""

    __slots__ = ("attr", "block", "context", "locals", "name")

    def __init__(
        self,
        context: Context,
        locals_: Scope,
        name: str,
        attributes: dict[str, str],
        block: Block | None,
    ) -> None:
        self.context = context
        self.locals = locals_
        self.name = name
        self.attr = attributes
        self.block = block

    @property
    def globals(self) -> Scope:
        """Return the render-wide scope shared by every binding."""
        return self.context.globals

    @property
    def single(self) -> bool:
        """Return ``True`` when the tag was used without a body."""
        return self.block is None

    @property
    def double(self) -> bool:
        """Return ``True`` when the tag was used with a body."""
        return self.block is not None

    def expand(self) -> str:
        """Render the tag body in the current state, or ``""`` for single tags."""
        if self.block is None:
            return ""
        return self.block()

    def render(
        self,
        name: str,
        attributes: cabc.Mapping[str, str] | None = None,
        block: Block | None = None,
    ) -> str:
        """Render another tag from inside this one."""
        return self.context.render_tag(name, dict(attributes or {}), block)

    def __repr__(self) -> str:
        return f"TagBinding(name={self.name!r}, attr={self.attr!r})"


def _specificity(tag_name: str, nesting: list[str]) -> float:
    """Score how closely ``tag_name`` matches the current nesting path.

    Each segment of ``tag_name`` is matched from the innermost nesting level
    outwards; closer matches weigh more. Any unmatched segment disqualifies
    the candidate.
    """
    remaining = list(nesting)
    parts = tag_name.split(":")
    if remaining[-1] != parts[-1]:
        return 0.0
    score = 0.0
    weight = 1.0
    while remaining:
        if parts and remaining[-1] == parts[-1]:
            score += weight
            parts.pop()
        remaining.pop()
        weight *= 0.1
    return 0.0 if parts else score


def _coerce(result: object) -> str:
    """Convert a handler's return value into output text."""
    if result is None:
        return ""
    if isinstance(result, (list, tuple)):
        return "".join(_coerce(item) for item in result)
    return str(result)


class Context:
    """Registry of tag handlers plus the expansion stack for one render."""

    def __init__(
        self, definitions: cabc.Mapping[str, TagHandler] | None = None
    ) -> None:
        self.definitions: dict[str, TagHandler] = dict(definitions or {})
        self.globals = Scope()
        self._stack: list[TagBinding] = []

    def define_tag(self, name: str, handler: TagHandler) -> None:
        """Register ``handler`` under the fully qualified ``name``."""
        self.definitions[name] = handler

    def render_tag(
        self,
        name: str,
        attributes: dict[str, str] | None = None,
        block: Block | None = None,
    ) -> str:
        """Expand ``name`` with ``attributes`` and an optional body ``block``.

        Colon-qualified names are expanded as nested tags; the attributes and
        block belong to the innermost segment.

        Raises
        ------
        UndefinedTagError
            If no definition matches ``name`` (via :meth:`tag_missing`).
        """
        attributes = attributes if attributes is not None else {}
        head, separator, rest = name.partition(":")
        if separator and head and rest:
            return self.render_tag(
                head, {}, lambda: self.render_tag(rest, attributes, block)
            )

        handler = self.definitions.get(self.qualified_tag_name(name))
        if handler is None:
            return self.tag_missing(name, attributes, block)

        parent = self._stack[-1].locals if self._stack else self.globals
        binding = TagBinding(self, Scope(parent), name, attributes, block)
        self._stack.append(binding)
        try:
            return _coerce(handler(binding))
        finally:
            self._stack.pop()

    def qualified_tag_name(self, name: str) -> str:
        """Resolve ``name`` to the most specific definition for the nesting."""
        nesting = [part for binding in self._stack for part in binding.name.split(":")]
        if not nesting or nesting[-1] != name:
            nesting.append(name)
        specific_name = ":".join(nesting)
        if specific_name in self.definitions:
            return specific_name

        best_name = name
        best_score = 0.0
        suffix = f":{name}"
        for candidate in self.definitions:
            if candidate != name and not candidate.endswith(suffix):
                continue
            score = _specificity(candidate, nesting)
            if score > 0 and score >= best_score:
                best_name = candidate
                best_score = score
        return best_name

    def tag_missing(
        self, name: str, attributes: dict[str, str], block: Block | None
    ) -> str:
        """Handle a reference to an undefined tag.

        Raises
        ------
        UndefinedTagError
            Always; subclasses may translate it.
        """
        raise UndefinedTagError(name)


__all__ = ["Block", "Context", "TagBinding", "TagHandler"]
