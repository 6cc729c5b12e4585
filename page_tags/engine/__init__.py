"""Tag parsing and dispatch.

:class:`Parser` compiles prefixed markup into node trees, :class:`Context`
resolves tag names against the current nesting and calls the registered
handlers, and :class:`Scope` carries per-tag state that nested tags inherit.
"""

from .context import Block, Context, TagBinding, TagHandler
from .errors import (
    MissingEndTagError,
    TagError,
    TemplateError,
    UndefinedTagError,
    WrongEndTagError,
)
from .parser import DEFAULT_TAG_PREFIX, Parser, TagNode, parse_attributes
from .scope import Scope

__all__ = [
    "DEFAULT_TAG_PREFIX",
    "Block",
    "Context",
    "MissingEndTagError",
    "Parser",
    "Scope",
    "TagBinding",
    "TagError",
    "TagHandler",
    "TagNode",
    "TemplateError",
    "UndefinedTagError",
    "WrongEndTagError",
    "parse_attributes",
]
