"""Tags navigating between pages that share a parent.

``siblings`` records its attributes so the nested ``siblings:*`` tags sort and
filter the same way without repeating them. "Next" and "previous" follow the
displayed order: with ``order="desc"`` the next sibling is the one with the
smaller sort value.
"""

from __future__ import annotations

import typing as typ

from page_tags.models import find_all

from .library import TagLibrary
from .options import (
    adjacent_siblings_find_options,
    inherit_filter_attributes,
    siblings_find_options,
)

if typ.TYPE_CHECKING:
    from page_tags.engine import TagBinding
    from page_tags.models import Page

library = TagLibrary()


def _adjacent_siblings(tag: TagBinding, adjacent: str) -> list[Page]:
    parent = tag.locals.page.parent
    if parent is None:
        return []
    return find_all(parent.children, adjacent_siblings_find_options(tag, adjacent))


def find_next_sibling(tag: TagBinding) -> Page | None:
    """Return the nearest sibling after the contextual page, if any."""
    following = _adjacent_siblings(tag, "next")
    return following[0] if following else None


def find_previous_sibling(tag: TagBinding) -> Page | None:
    """Return the nearest sibling before the contextual page, if any."""
    preceding = _adjacent_siblings(tag, "previous")
    return preceding[-1] if preceding else None


def find_siblings_before(tag: TagBinding) -> list[Page]:
    """Return the siblings before the contextual page, nearest first."""
    return list(reversed(_adjacent_siblings(tag, "previous")))


def find_siblings_after(tag: TagBinding) -> list[Page]:
    """Return the siblings after the contextual page in display order."""
    return _adjacent_siblings(tag, "next")


def _each_page(tag: TagBinding, found: list[Page]) -> list[str]:
    tag.locals.siblings = found
    result = []
    for sibling in found:
        tag.locals.page = sibling
        result.append(tag.expand())
    return result


@library.tag("siblings")
def siblings(tag: TagBinding) -> str:
    """Sets the scope for a page's siblings.

    Siblings are sorted with the same attributes as `<r:children:each />`;
    without attributes they are ordered by `published_at` ascending. Values
    given here are inherited by the nested tags, which may override them.

    *Usage:*

    ```html
    <r:siblings [by="published_at|title"] [order="asc|desc"] [status="published|all"]>
      <r:next><r:link/></r:next>
      <r:previous><r:link/></r:previous>
    </r:siblings>
    ```
    """
    tag.locals.filter_attributes = dict(tag.attr)
    return tag.expand()


@library.tag("siblings:each")
def siblings_each(tag: TagBinding) -> list[str]:
    """Loops through each sibling and outputs the contents."""
    inherit_filter_attributes(tag)
    parent = tag.locals.page.parent
    if parent is None:
        return []
    return _each_page(tag, find_all(parent.children, siblings_find_options(tag)))


def _sibling_count(tag: TagBinding) -> int:
    parent = tag.locals.page.parent
    if parent is None:
        return 0
    return len(find_all(parent.children, siblings_find_options(tag)))


@library.tag("if_siblings")
def if_siblings(tag: TagBinding) -> str | None:
    """Only renders the contents of this tag if the current page has any published siblings.

    *Usage:*

    ```html
    <r:if_siblings [status="published|all"]>...</r:if_siblings>
    ```
    """
    return tag.expand() if _sibling_count(tag) > 0 else None


@library.tag("unless_siblings")
def unless_siblings(tag: TagBinding) -> str | None:
    """Only renders the contents of this tag if the current page has no published siblings."""
    return tag.expand() if _sibling_count(tag) == 0 else None


@library.tag("siblings:if_next")
def siblings_if_next(tag: TagBinding) -> str | None:
    """Only renders the contents if the current page has a sibling *after* it.

    See `<r:siblings>` for the sorting options.
    """
    inherit_filter_attributes(tag)
    return tag.expand() if find_next_sibling(tag) is not None else None


@library.tag("siblings:if_previous")
def siblings_if_previous(tag: TagBinding) -> str | None:
    """Only renders the contents if the current page has a sibling *before* it.

    See `<r:siblings>` for the sorting options.
    """
    inherit_filter_attributes(tag)
    return tag.expand() if find_previous_sibling(tag) is not None else None


@library.tag("siblings:unless_next")
def siblings_unless_next(tag: TagBinding) -> str | None:
    """Only renders the contents if the current page is the last of its siblings."""
    inherit_filter_attributes(tag)
    return tag.expand() if find_next_sibling(tag) is None else None


@library.tag("siblings:unless_previous")
def siblings_unless_previous(tag: TagBinding) -> str | None:
    """Only renders the contents if the current page is the first of its siblings."""
    inherit_filter_attributes(tag)
    return tag.expand() if find_previous_sibling(tag) is None else None


@library.tag("siblings:next")
def siblings_next(tag: TagBinding) -> str | None:
    """All tags within this block are interpreted in the context of the next sibling page.

    *Usage:*

    ```html
    <r:siblings:next [by="published_at|title"] [order="asc|desc"] [status="published|all"]>...</r:siblings:next>
    ```
    """
    inherit_filter_attributes(tag)
    found = find_next_sibling(tag)
    if found is None:
        return None
    tag.locals.page = found
    return tag.expand()


@library.tag("siblings:previous")
def siblings_previous(tag: TagBinding) -> str | None:
    """All tags within this block are interpreted in the context of the previous sibling page.

    *Usage:*

    ```html
    <r:siblings:previous [by="published_at|title"] [order="asc|desc"] [status="published|all"]>...</r:siblings:previous>
    ```
    """
    inherit_filter_attributes(tag)
    found = find_previous_sibling(tag)
    if found is None:
        return None
    tag.locals.page = found
    return tag.expand()


@library.tag("siblings:each_before")
def siblings_each_before(tag: TagBinding) -> list[str]:
    """Displays its contents for each of the preceding siblings, nearest first."""
    inherit_filter_attributes(tag)
    return _each_page(tag, find_siblings_before(tag))


@library.tag("siblings:each_after")
def siblings_each_after(tag: TagBinding) -> list[str]:
    """Displays its contents for each of the following siblings."""
    inherit_filter_attributes(tag)
    return _each_page(tag, find_siblings_after(tag))


__all__ = [
    "find_next_sibling",
    "find_previous_sibling",
    "find_siblings_after",
    "find_siblings_before",
    "library",
]
