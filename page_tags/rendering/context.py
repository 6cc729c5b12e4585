"""The tag context used to render one page for one request.

:class:`PageContext` wires the standard tag library to a page, the site it
belongs to and the request being served. Tags read those through
``tag.globals`` and render nested content (page parts, snippets, layouts)
through :meth:`PageContext.render_snippet`, which parses in the same context so
state set by an enclosing tag stays visible.
"""

from __future__ import annotations

import typing as typ

from page_tags.engine import Context, Parser, TagError, TemplateError
from page_tags.filters import apply_filter
from page_tags.models import Request
from page_tags.tags import standard_tags
from page_tags.tags.options import html_escape

if typ.TYPE_CHECKING:
    from page_tags.engine import Block
    from page_tags.models import Layout, Page, PagePart, Site, Snippet
    from page_tags.tags import TagLibrary


def error_markup(error: Exception) -> str:
    """Return the inline HTML used for a tag error when errors are not raised.

    >>> error_markup(ValueError("<b> broke"))
    '<div><strong>&lt;b&gt; broke</strong></div>'
    """
    return f"<div><strong>{html_escape(str(error))}</strong></div>"


class PageContext(Context):
    """Tag context bound to a page, its site and the current request."""

    def __init__(
        self,
        page: Page,
        site: Site,
        request: Request | None = None,
        *,
        library: TagLibrary | None = None,
    ) -> None:
        """Initialize the context and its globals.

        Parameters
        ----------
        page : Page
            The page being rendered; available as ``tag.globals.page``.
        site : Site
            Content store used for snippet, page and user lookups.
        request : Request, optional
            Request the page is rendered for. Defaults to ``localhost``
            mounted at the site's configured relative URL root.
        library : TagLibrary, optional
            Tags available to templates; defaults to :func:`standard_tags`.
        """
        super().__init__((library or standard_tags()).handlers())
        self.page = page
        self.site = site
        self.settings = site.settings
        self.request = request or Request(relative_url_root=site.settings.relative_url_root)
        self.parser = Parser(self, tag_prefix=self.settings.tag_prefix)

        self.globals.page = page
        self.globals.site = site
        self.globals.request = self.request
        self.globals.settings = self.settings

    def render_tag(
        self,
        name: str,
        attributes: dict[str, str] | None = None,
        block: Block | None = None,
    ) -> str:
        """Render a tag, reporting template errors inline unless configured to raise.

        Raises
        ------
        TemplateError
            When ``settings.raise_errors`` is true and the tag fails.
        """
        try:
            return super().render_tag(name, attributes, block)
        except TemplateError as exc:
            if self.settings.raise_errors:
                raise
            return error_markup(exc)

    def tag_missing(
        self, name: str, attributes: dict[str, str], block: Block | None
    ) -> str:
        """Report an undefined tag as a :class:`TagError`.

        Raises
        ------
        TagError
            Always.
        """
        msg = f"undefined tag `{name}'"
        raise TagError(msg)

    def render(self, text: str) -> str:
        """Expand every tag in ``text``."""
        return self.parser.parse(text)

    def render_snippet(self, obj: PagePart | Snippet | Layout) -> str:
        """Render ``obj``'s content in this context and apply its text filter."""
        expanded = self.render(obj.content)
        return apply_filter(getattr(obj, "filter_id", None), expanded)


__all__ = ["PageContext", "error_markup"]
