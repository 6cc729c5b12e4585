"""Tags exposing the contextual page and moving between pages.

Most tags read ``tag.locals.page``, the page a template fragment is currently
"about". The tags in this module print its attributes or rebind it for their
body: to the page being rendered (``page``), to the parent (``parent``), or to
a page looked up by URL (``find``).
"""

from __future__ import annotations

import typing as typ

from page_tags._constants import DEFAULT_BREADCRUMB_SEPARATOR
from page_tags.engine import TagError

from .library import TagLibrary
from .options import absolute_path_for, html_escape, page_found

if typ.TYPE_CHECKING:
    from page_tags.engine import TagBinding

library = TagLibrary()


@library.tag("page")
def page(tag: TagBinding) -> str:
    """Causes the tags referring to a page's attributes to refer to the current page.

    *Usage:*

    ```html
    <r:page>...</r:page>
    ```
    """
    tag.locals.page = tag.globals.page
    return tag.expand()


@library.tag("breadcrumb")
def breadcrumb(tag: TagBinding) -> str:
    """Renders the `breadcrumb` attribute of the current page."""
    return tag.locals.page.breadcrumb


@library.tag("slug")
def slug(tag: TagBinding) -> str:
    """Renders the `slug` attribute of the current page."""
    return tag.locals.page.slug


@library.tag("title")
def title(tag: TagBinding) -> str:
    """Renders the `title` attribute of the current page."""
    return tag.locals.page.title


@library.tag("url")
def url(tag: TagBinding) -> str:
    """Renders the `url` attribute of the current page.

    The URL is prefixed with the request's relative URL root when the site is
    mounted below `/`.
    """
    return tag.globals.request.url_for(tag.locals.page.url)


@library.tag("parent")
def parent(tag: TagBinding) -> str | None:
    """Page attribute tags inside this tag refer to the parent of the current page.

    *Usage:*

    ```html
    <r:parent>...</r:parent>
    ```
    """
    parent_page = tag.locals.page.parent
    tag.locals.page = parent_page
    return tag.expand() if parent_page is not None else None


@library.tag("if_parent")
def if_parent(tag: TagBinding) -> str | None:
    """Renders the contained elements only if the current contextual page has a parent.

    In other words, only when it is not the root page.

    *Usage:*

    ```html
    <r:if_parent>...</r:if_parent>
    ```
    """
    return tag.expand() if tag.locals.page.parent is not None else None


@library.tag("unless_parent")
def unless_parent(tag: TagBinding) -> str | None:
    """Renders the contained elements only if the current contextual page is the root.

    *Usage:*

    ```html
    <r:unless_parent>...</r:unless_parent>
    ```
    """
    return tag.expand() if tag.locals.page.parent is None else None


@library.tag("find")
def find(tag: TagBinding) -> str | None:
    """Inside this tag all page related tags refer to the page found at the `url` attribute.

    `url`s may be relative or absolute paths. Nothing is rendered when no
    page lives at that address.

    *Usage:*

    ```html
    <r:find url="value_to_find">...</r:find>
    ```
    """
    target = tag.attr.get("url")
    if target is None:
        msg = "`find' tag must contain `url' attribute"
        raise TagError(msg)
    found = tag.globals.site.find_by_url(absolute_path_for(tag.locals.page.url, target))
    if not page_found(found):
        return None
    tag.locals.page = found
    return tag.expand()


@library.tag("link")
def link(tag: TagBinding) -> str:
    """Renders a link to the page.

    When used as a single tag it uses the page's title for the link name.
    When used as a double tag the part in between both tags is used as the
    link text. All other attributes are passed through to the HTML `a` tag,
    which is handy for `class` or `id`. An `anchor` attribute appends
    `#anchor` to the `href`.

    *Usage:*

    ```html
    <r:link [anchor="name"] [other attributes...] />
    <r:link [anchor="name"] [other attributes...]>link text here</r:link>
    ```
    """
    options = dict(tag.attr)
    anchor = options.pop("anchor", None)
    fragment = f"#{anchor}" if anchor is not None else ""
    attributes = " ".join(f'{key.lower()}="{value}"' for key, value in options.items())
    if attributes:
        attributes = f" {attributes}"
    text = tag.expand() if tag.double else tag.render("title")
    return f'<a href="{tag.render("url")}{fragment}"{attributes}>{text}</a>'


@library.tag("breadcrumbs")
def breadcrumbs(tag: TagBinding) -> str:
    """Renders a trail of breadcrumbs to the current page.

    The `separator` attribute specifies the HTML fragment inserted between
    each of the breadcrumbs; it defaults to ` &gt; `. Set `nolinks="true"` to
    render plain text, which is useful inside a `title` element.

    *Usage:*

    ```html
    <r:breadcrumbs [separator="separator_string"] [nolinks="true"] />
    ```
    """
    current = tag.locals.page
    nolinks = tag.attr.get("nolinks") == "true"
    trail = [current.breadcrumb]
    for ancestor in current.ancestors:
        tag.locals.page = ancestor
        crumb = tag.render("breadcrumb")
        trail.insert(0, crumb if nolinks else f'<a href="{tag.render("url")}">{crumb}</a>')
    separator = tag.attr.get("separator", DEFAULT_BREADCRUMB_SEPARATOR)
    return separator.join(trail)


@library.tag("status")
def status(tag: TagBinding) -> str:
    """Prints the status of the page being rendered as a string.

    Inside `<r:find>` or `<r:children:each>` it still reports the page being
    rendered, not the page in scope.

    The optional `downcase` attribute lower-cases the result.

    *Usage:*

    ```html
    <r:status [downcase="true"] />
    ```
    """
    name = tag.globals.page.status.display_name
    return name.lower() if tag.attr.get("downcase") else name


@library.tag("meta")
def meta(tag: TagBinding) -> str:
    """The namespace for page metadata.

    Used as a single tag, both the description and keywords are emitted as
    `<meta />` elements unless `tag="false"` is given.

    *Usage:*

    ```html
    <r:meta [tag="false"] />
    <r:meta>
      <r:description [tag="false"] />
      <r:keywords [tag="false"] />
    </r:meta>
    ```
    """
    if tag.double:
        return tag.expand()
    return tag.render("description", tag.attr) + tag.render("keywords", tag.attr)


def _meta_field(tag: TagBinding, field: str) -> str:
    value = html_escape(getattr(tag.locals.page, field) or "")
    if tag.attr.get("tag") == "false":
        return value
    return f'<meta name="{field}" content="{value}" />'


@library.tag("meta:description")
def meta_description(tag: TagBinding) -> str:
    """Emits the page description in a meta tag, unless `tag="false"`.

    *Usage:*

    ```html
    <r:meta:description [tag="false"] />
    ```
    """
    return _meta_field(tag, "description")


@library.tag("meta:keywords")
def meta_keywords(tag: TagBinding) -> str:
    """Emits the page keywords in a meta tag, unless `tag="false"`.

    *Usage:*

    ```html
    <r:meta:keywords [tag="false"] />
    ```
    """
    return _meta_field(tag, "keywords")


__all__ = ["library"]
