"""Tags listing the children of the contextual page."""

from __future__ import annotations

import typing as typ

from page_tags.models import count, find_all

from .library import TagLibrary
from .options import children_find_options

if typ.TYPE_CHECKING:
    from page_tags.engine import TagBinding

library = TagLibrary()

UNNAMED_HEADER = "unnamed"


@library.tag("children")
def children(tag: TagBinding) -> str:
    """Gives access to a page's children.

    *Usage:*

    ```html
    <r:children>...</r:children>
    ```
    """
    tag.locals.children = tag.locals.page.children
    return tag.expand()


@library.tag("children:count")
def children_count(tag: TagBinding) -> int:
    """Renders the total number of children."""
    return len(tag.locals.children)


@library.tag("children:first")
def children_first(tag: TagBinding) -> str | None:
    """Returns the first child.

    Inside this tag all page attribute tags are mapped to the first child.
    Takes the same ordering options as `<r:children:each>`.

    *Usage:*

    ```html
    <r:children:first>...</r:children:first>
    ```
    """
    found = find_all(tag.locals.children, children_find_options(tag))
    if not found:
        return None
    tag.locals.page = found[0]
    return tag.expand()


@library.tag("children:last")
def children_last(tag: TagBinding) -> str | None:
    """Returns the last child.

    Inside this tag all page attribute tags are mapped to the last child.
    Takes the same ordering options as `<r:children:each>`.

    *Usage:*

    ```html
    <r:children:last>...</r:children:last>
    ```
    """
    found = find_all(tag.locals.children, children_find_options(tag))
    if not found:
        return None
    tag.locals.page = found[-1]
    return tag.expand()


@library.tag("children:each")
def children_each(tag: TagBinding) -> list[str]:
    """Cycles through each of the children.

    Inside this tag all page attribute tags are mapped to the current child
    page. `by` accepts any page field, `status` accepts a status name or
    `all`; it defaults to `published`, or to `all` on the development host.

    *Usage:*

    ```html
    <r:children:each [offset="number"] [limit="number"] [by="attribute"]
     [order="asc|desc"] [status="draft|reviewed|published|hidden|all"]>
     ...
    </r:children:each>
    ```
    """
    options = children_find_options(tag)
    tag.locals.previous_headers = {}
    result = []
    for item in find_all(tag.locals.children, options):
        tag.locals.child = item
        tag.locals.page = item
        result.append(tag.expand())
    return result


@library.tag("children:each:child")
def children_each_child(tag: TagBinding) -> str:
    """Page attribute tags inside of this tag refer to the current child.

    This is occasionally useful inside another tag (like `<r:find>`) that
    needs to refer back to the current child.

    *Usage:*

    ```html
    <r:children:each>
      <r:child>...</r:child>
    </r:children:each>
    ```
    """
    tag.locals.page = tag.locals.child
    return tag.expand()


@library.tag("children:each:header")
def children_each_header(tag: TagBinding) -> str | None:
    """Renders the tag contents only if the contents do not match the previous header.

    This is extremely useful for rendering date headers for a list of child
    pages. Use the `name` attribute to keep several independent headers; a
    named header only renders again once its own text changes. The `restart`
    attribute takes a semicolon separated list of other header names that are
    reset whenever this header changes.

    *Usage:*

    ```html
    <r:children:each>
      <r:header [name="header_name"] [restart="name1[;name2;...]"]>
        ...
      </r:header>
    </r:children:each>
    ```
    """
    previous_headers: dict[str, str | None] = tag.locals.previous_headers
    name = tag.attr.get("name") or UNNAMED_HEADER
    restart = [item for item in (tag.attr.get("restart") or "").split(";") if item]
    header = tag.expand()
    if header == previous_headers.get(name):
        return None
    previous_headers[name] = header
    for other in restart:
        previous_headers[other] = None
    return header


@library.tag("if_children")
def if_children(tag: TagBinding) -> str | None:
    """Renders the contained elements only if the current contextual page has children.

    The `status` attribute limits which children count; it defaults to
    `published`. `status="all"` includes every non-virtual child.

    *Usage:*

    ```html
    <r:if_children [status="published"]>...</r:if_children>
    ```
    """
    found = count(tag.locals.page.children, children_find_options(tag))
    return tag.expand() if found > 0 else None


@library.tag("unless_children")
def unless_children(tag: TagBinding) -> str | None:
    """Renders the contained elements only if the current contextual page has no children.

    Takes the same `status` attribute as `<r:if_children>`.

    *Usage:*

    ```html
    <r:unless_children [status="published"]>...</r:unless_children>
    ```
    """
    found = count(tag.locals.page.children, children_find_options(tag))
    return tag.expand() if found == 0 else None


__all__ = ["library"]
