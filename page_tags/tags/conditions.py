"""Conditional tags that test the contextual page or the request."""

from __future__ import annotations

import typing as typ

from page_tags.engine import TagError

from .library import TagLibrary
from .options import build_regexp_for, is_dev

if typ.TYPE_CHECKING:
    from page_tags.engine import TagBinding
    from page_tags.models import Page

library = TagLibrary()


def _url_matches(tag: TagBinding) -> bool:
    if "matches" not in tag.attr:
        msg = f"`{tag.name}' tag must contain a `matches' attribute."
        raise TagError(msg)
    pattern = build_regexp_for(tag, "matches")
    return pattern.search(tag.locals.page.url) is not None


@library.tag("if_url")
def if_url(tag: TagBinding) -> str | None:
    """Renders the containing elements only if the page's url matches `matches`.

    `matches` is a regular expression. Matching ignores case unless
    `ignore_case="false"`.

    *Usage:*

    ```html
    <r:if_url matches="regexp" [ignore_case="true|false"]>...</r:if_url>
    ```
    """
    return tag.expand() if _url_matches(tag) else None


@library.tag("unless_url")
def unless_url(tag: TagBinding) -> str | None:
    """The opposite of the `if_url` tag.

    *Usage:*

    ```html
    <r:unless_url matches="regexp" [ignore_case="true|false"]>...</r:unless_url>
    ```
    """
    return None if _url_matches(tag) else tag.expand()


def _is_ancestor_or_self(tag: TagBinding) -> bool:
    actual: Page = tag.globals.page
    contextual: Page = tag.locals.page
    return any(page is contextual for page in (*actual.ancestors, actual))


@library.tag("if_ancestor_or_self")
def if_ancestor_or_self(tag: TagBinding) -> str | None:
    """Renders the contained elements if the contextual page is the actual page or one of its parents.

    This is typically used inside another tag (like `<r:children:each>`) to
    mark up the child that is, or contains, the page being rendered.

    *Usage:*

    ```html
    <r:if_ancestor_or_self>...</r:if_ancestor_or_self>
    ```
    """
    return tag.expand() if _is_ancestor_or_self(tag) else None


@library.tag("unless_ancestor_or_self")
def unless_ancestor_or_self(tag: TagBinding) -> str | None:
    """Renders the contained elements unless the contextual page is the actual page or one of its parents.

    *Usage:*

    ```html
    <r:unless_ancestor_or_self>...</r:unless_ancestor_or_self>
    ```
    """
    return None if _is_ancestor_or_self(tag) else tag.expand()


@library.tag("if_self")
def if_self(tag: TagBinding) -> str | None:
    """Renders the contained elements if the current contextual page is also the actual page.

    *Usage:*

    ```html
    <r:if_self>...</r:if_self>
    ```
    """
    return tag.expand() if tag.locals.page is tag.globals.page else None


@library.tag("unless_self")
def unless_self(tag: TagBinding) -> str | None:
    """Renders the contained elements unless the current contextual page is also the actual page.

    *Usage:*

    ```html
    <r:unless_self>...</r:unless_self>
    ```
    """
    return None if tag.locals.page is tag.globals.page else tag.expand()


@library.tag("if_dev")
def if_dev(tag: TagBinding) -> str | None:
    """Renders the containing elements only when the page is requested on the development host.

    The development host is the configured `dev_host` or any host starting
    with `dev.`.

    *Usage:*

    ```html
    <r:if_dev>...</r:if_dev>
    ```
    """
    return tag.expand() if is_dev(tag) else None


@library.tag("unless_dev")
def unless_dev(tag: TagBinding) -> str | None:
    """The opposite of the `if_dev` tag.

    *Usage:*

    ```html
    <r:unless_dev>...</r:unless_dev>
    ```
    """
    return None if is_dev(tag) else tag.expand()


__all__ = ["library"]
