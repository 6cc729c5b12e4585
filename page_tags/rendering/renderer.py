"""Render whole pages through their layouts."""

from __future__ import annotations

import typing as typ

from page_tags._constants import DEFAULT_PART_NAME
from page_tags.tags import standard_tags

from .context import PageContext

if typ.TYPE_CHECKING:
    from page_tags.models import Layout, Page, Request, Site
    from page_tags.tags import TagLibrary


class PageRenderer:
    """Render pages of one site with a shared tag library."""

    def __init__(self, site: Site, *, library: TagLibrary | None = None) -> None:
        self.site = site
        self.library = library or standard_tags()

    def layout_for(self, page: Page) -> Layout | None:
        """Return the layout of ``page`` or of its nearest ancestor that has one."""
        for candidate in (page, *page.ancestors):
            if candidate.layout:
                return self.site.layout(candidate.layout)
        return None

    def render(self, page: Page, request: Request | None = None) -> str:
        """Return the complete output for ``page``.

        The page's layout is rendered when one applies; otherwise the
        ``body`` part is rendered on its own.

        Raises
        ------
        TemplateError
            When a tag fails and the site is configured to raise errors, or
            the markup itself is malformed.
        """
        context = PageContext(page, self.site, request, library=self.library)
        layout = self.layout_for(page)
        if layout is not None:
            return context.render_snippet(layout)
        body = page.part(DEFAULT_PART_NAME)
        if body is None:
            return ""
        return context.render_snippet(body)


__all__ = ["PageRenderer"]
