"""Render pages, export sites and document the tag library.

Exports
-------
- ``PageContext``: tag context bound to a page, site and request.
- ``PageRenderer``: renders a page through its (inherited) layout.
- ``SiteBuilder``: writes every servable page and a manifest to disk.
- ``TagReferenceBuilder``: renders the HTML tag reference.
"""

from __future__ import annotations

from .context import PageContext, error_markup
from .reference import TagReferenceBuilder
from .renderer import PageRenderer
from .site_builder import SiteBuilder

__all__ = [
    "PageContext",
    "PageRenderer",
    "SiteBuilder",
    "TagReferenceBuilder",
    "error_markup",
]
