"""Tags rendering page parts and snippets."""

from __future__ import annotations

import typing as typ

from page_tags.engine import TagError

from .library import TagLibrary
from .options import attr_or_error, boolean_attr, boolean_attr_or_error, tag_part_name

if typ.TYPE_CHECKING:
    from page_tags.engine import TagBinding
    from page_tags.models import Page

library = TagLibrary()


def _page_with_part(page: Page, part_name: str, *, inherit: bool) -> Page:
    """Return ``page`` or, when inheriting, the nearest ancestor owning the part."""
    owner = page
    if inherit:
        while owner.part(part_name) is None and owner.parent is not None:
            owner = owner.parent
    return owner


def _part_names(tag: TagBinding) -> list[str]:
    return [name.strip() for name in tag_part_name(tag).split(",")]


@library.tag("content")
def content(tag: TagBinding) -> str | None:
    """Renders the main content of a page.

    Use the `part` attribute to select a specific page part; it defaults to
    `body`. With `inherit="true"` a page lacking the part renders the nearest
    ancestor's part instead. Inherited parts are evaluated in the context of
    the child page unless `contextual="false"` is given.

    *Usage:*

    ```html
    <r:content [part="part_name"] [inherit="true|false"] [contextual="true|false"] />
    ```
    """
    part_name = tag_part_name(tag)
    inherit = boolean_attr(tag, "inherit", default=False)
    owner = _page_with_part(tag.locals.page, part_name, inherit=inherit)
    contextual = boolean_attr(tag, "contextual", default=True)
    part = owner.part(part_name)
    if not contextual:
        tag.locals.page = owner
    if part is None:
        return None
    return tag.context.render_snippet(part)


def _found_parts(tag: TagBinding) -> list[bool]:
    inherit = boolean_attr_or_error(tag, "inherit", default=False)
    page = tag.locals.page
    return [
        _page_with_part(page, name, inherit=inherit).part(name) is not None
        for name in _part_names(tag)
    ]


@library.tag("if_content")
def if_content(tag: TagBinding) -> str | None:
    """Renders the containing elements if all of the listed parts exist on a page.

    The `part` attribute defaults to `body` and may list several parts
    separated by commas. `inherit="true"` searches the ancestors
    independently for each part. Set `find="any"` to render when at least
    one of the listed parts is found.

    *Usage:*

    ```html
    <r:if_content [part="part_name, other_part"] [inherit="true"] [find="any"]>...</r:if_content>
    ```
    """
    found = _found_parts(tag)
    find = attr_or_error(tag, "find", default="all", values=("any", "all"))
    matched = any(found) if find == "any" else all(found)
    return tag.expand() if matched else None


@library.tag("unless_content")
def unless_content(tag: TagBinding) -> str | None:
    """The opposite of the `if_content` tag.

    Renders the contained elements unless all of the listed parts exist. With
    `find="any"` it renders only when none of them exist.

    *Usage:*

    ```html
    <r:unless_content [part="part_name, other_part"] [inherit="false"] [find="any"]>...</r:unless_content>
    ```
    """
    found = _found_parts(tag)
    find = attr_or_error(tag, "find", default="all", values=("any", "all"))
    matched = any(found) if find == "any" else all(found)
    return None if matched else tag.expand()


@library.tag("snippet")
def snippet(tag: TagBinding) -> str:
    """Renders the snippet specified in the `name` attribute within the context of a page.

    When used as a double tag, the part in between both tags is available to
    the snippet through `<r:yield />`.

    *Usage:*

    ```html
    <r:snippet name="snippet_name" />
    <r:snippet name="snippet_name">Lorem ipsum dolor...</r:snippet>
    ```
    """
    name = tag.attr.get("name")
    if not name:
        msg = "`snippet' tag must contain `name' attribute"
        raise TagError(msg)
    found = tag.globals.site.snippet(name.strip())
    if found is None:
        msg = "snippet not found"
        raise TagError(msg)
    if tag.double:
        tag.locals.yielded = tag.expand()
    return tag.context.render_snippet(found)


@library.tag("yield")
def yield_(tag: TagBinding) -> str | None:
    """Used within a snippet as a placeholder for the body of a double `snippet` tag.

    A snippet named "yielding" containing

    ```html
    <div id="outer">
      <p>before</p>
      <r:yield/>
      <p>after</p>
    </div>
    ```

    called as `<r:snippet name="yielding">Content within</r:snippet>` renders
    "Content within" between the two paragraphs. In the context of a page or
    layout, `<r:yield />` outputs nothing.
    """
    return tag.locals.yielded


__all__ = ["library"]
