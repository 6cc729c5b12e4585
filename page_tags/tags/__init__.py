"""The standard tag library.

Each module registers its handlers on a module-level :class:`TagLibrary`;
:func:`standard_tags` merges them into one library for a rendering context.

Example
-------
>>> from page_tags.tags import standard_tags
>>> "children:each" in standard_tags()
True
"""

from __future__ import annotations

from . import authors, children, conditions, content, navigation, page, siblings, utility
from .library import TagDefinition, TagLibrary

_MODULES = (page, children, conditions, content, authors, siblings, navigation, utility)


def standard_tags() -> TagLibrary:
    """Return a fresh library holding every standard tag."""
    library = TagLibrary()
    for module in _MODULES:
        library.update(module.library)
    return library


__all__ = ["TagDefinition", "TagLibrary", "standard_tags"]
