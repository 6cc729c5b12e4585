r"""Compile tag markup into node trees and render them through a context.

The parser recognises prefixed tags (``<r:title />``, ``<r:children:each>``)
anywhere in the input, including inside the attribute values of ordinary HTML
markup, and leaves every other character untouched. Double tags keep their
body as a list of nodes which is only rendered when the tag handler asks for
it, so a body may be rendered zero, one, or many times.

Example
-------
>>> from page_tags.engine import Context, Parser
>>> context = Context()
>>> context.define_tag("shout", lambda tag: tag.expand().upper())
>>> Parser(context).parse("say <r:shout>hi</r:shout>!")
'say HI!'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from page_tags._constants import DEFAULT_TAG_PREFIX

from .errors import MissingEndTagError, WrongEndTagError

if typ.TYPE_CHECKING:
    from .context import Context


ATTRIBUTE_PATTERN = re.compile(
    r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.DOTALL
)


@dc.dataclass(slots=True)
class TagNode:
    """A parsed tag occurrence.

    Attributes
    ----------
    name : str
        Tag name without the prefix; may contain colons for nested tags.
    attributes : dict[str, str]
        Attribute values in source order.
    children : list[Node] or None
        Body nodes for double tags, ``None`` for self-closing tags.
    """

    name: str
    attributes: dict[str, str]
    children: list[Node] | None = None


Node = str | TagNode


def _tag_pattern(prefix: str) -> re.Pattern[str]:
    """Build the start/end tag pattern for ``prefix``."""
    escaped = re.escape(prefix)
    attr = r"""\s+[\w:-]+\s*=\s*(?:"[^"]*"|'[^']*')"""
    return re.compile(
        rf"<{escaped}:(?P<name>[\w:-]+)(?P<attrs>(?:{attr})*)\s*(?P<close>/)?>"
        rf"|</{escaped}:(?P<end>[\w:-]+)\s*>",
        re.DOTALL,
    )


def parse_attributes(text: str) -> dict[str, str]:
    """Return the ``key="value"`` pairs found in ``text``.

    >>> parse_attributes(''' by="title" order='desc' ''')
    {'by': 'title', 'order': 'desc'}
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(text):
        key, double_quoted, single_quoted = match.groups()
        attributes[key] = double_quoted if double_quoted is not None else single_quoted
    return attributes


class Parser:
    """Turn template text into rendered output using a tag context."""

    def __init__(self, context: Context, *, tag_prefix: str = DEFAULT_TAG_PREFIX) -> None:
        self.context = context
        self.tag_prefix = tag_prefix
        self._pattern = _tag_pattern(tag_prefix)
        self._compiled: dict[str, list[Node]] = {}

    def parse(self, text: str) -> str:
        """Render ``text``, expanding every prefixed tag it contains."""
        return self.render_nodes(self.compile(text))

    def compile(self, text: str) -> list[Node]:
        """Return the node tree for ``text``, caching it per parser.

        Raises
        ------
        WrongEndTagError
            If an end tag does not close the innermost open tag.
        MissingEndTagError
            If a double tag is still open at the end of the input.
        """
        cached = self._compiled.get(text)
        if cached is not None:
            return cached

        root: list[Node] = []
        open_tags: list[TagNode] = []
        current = root
        position = 0
        for match in self._pattern.finditer(text):
            if match.start() > position:
                current.append(text[position : match.start()])
            position = match.end()
            end_name = match.group("end")
            if end_name is not None:
                if not open_tags:
                    raise WrongEndTagError(end_name, None)
                if open_tags[-1].name != end_name:
                    raise WrongEndTagError(end_name, open_tags[-1].name)
                open_tags.pop()
                current = open_tags[-1].children if open_tags else root
                continue
            node = TagNode(
                name=match.group("name"),
                attributes=parse_attributes(match.group("attrs") or ""),
            )
            current.append(node)
            if match.group("close") is None:
                node.children = []
                open_tags.append(node)
                current = node.children
        if position < len(text):
            current.append(text[position:])
        if open_tags:
            raise MissingEndTagError(open_tags[-1].name)

        self._compiled[text] = root
        return root

    def render_nodes(self, nodes: list[Node]) -> str:
        """Render a list of nodes in order and join the output."""
        return "".join(self._render_node(node) for node in nodes)

    def _render_node(self, node: Node) -> str:
        if isinstance(node, str):
            return node
        children = node.children
        block = None if children is None else (lambda: self.render_nodes(children))
        return self.context.render_tag(node.name, dict(node.attributes), block)


__all__ = ["DEFAULT_TAG_PREFIX", "Node", "Parser", "TagNode", "parse_attributes"]
