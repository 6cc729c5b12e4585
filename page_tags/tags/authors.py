"""Tags about page authors and the pages they wrote.

``author`` and ``authors:each`` bind ``tag.locals.author``; the field tags
(``name``, ``email``, ``bio``, ``gravatar_url``) are registered under both so
they read the same way in either position.
"""

from __future__ import annotations

import hashlib
import typing as typ

from page_tags._constants import GRAVATAR_URL
from page_tags.filters import apply_filter
from page_tags.models import find_all

from .library import TagLibrary
from .options import absolute_path_for, children_find_options, page_found, standard_options

if typ.TYPE_CHECKING:
    from page_tags.engine import TagBinding
    from page_tags.models import User

library = TagLibrary()

AUTHOR_SCOPES = ("author", "authors:each")


@library.tag("author")
def author(tag: TagBinding) -> str | None:
    """Renders the name of the author of the current page.

    Used as a double tag it sets the scope to the author instead. The author
    is, in order of preference, the user named by `login`, the author already
    in scope, or the user who created the contextual page.

    *Usage:*

    ```html
    <r:author [login="login"] />
    <r:author>text</r:author>
    ```
    """
    login = tag.attr.get("login")
    if login:
        tag.locals.author = tag.globals.site.user_by_login(login.strip())
    elif tag.locals.author is None:
        tag.locals.author = tag.locals.page.created_by
    current: User | None = tag.locals.author
    if current is None:
        return None
    return tag.expand() if tag.double else current.name


def _author_name(tag: TagBinding) -> str:
    """Renders the name of the current author."""
    return tag.locals.author.name


def _author_email(tag: TagBinding) -> str | None:
    """Renders the email of the current author."""
    return tag.locals.author.email


def _author_bio(tag: TagBinding) -> str:
    """Renders the bio of the current author, run through the author's bio filter."""
    current: User = tag.locals.author
    return apply_filter(current.bio_filter_id, current.bio or "")


def gravatar_url(user: User, attributes: typ.Mapping[str, str]) -> str:
    """Return the Gravatar image URL for ``user``.

    >>> from page_tags.models import User
    >>> user = User(id=1, login="a", name="A", email="a@b.c")
    >>> gravatar_url(user, {"size": "32", "rating": "PG"}).endswith("?s=32&r=pg")
    True
    """
    digest = hashlib.md5((user.email or "").encode("utf-8")).hexdigest()  # noqa: S324
    url = f"{GRAVATAR_URL}{digest}"
    image_format = attributes.get("format")
    if image_format:
        url = f"{url}.{image_format.lower()}"
    query = []
    if size := attributes.get("size"):
        query.append(f"s={size}")
    if default := attributes.get("default"):
        query.append(f"d={default}")
    if rating := attributes.get("rating"):
        query.append(f"r={rating.lower()}")
    if query:
        url = f"{url}?{'&'.join(query)}"
    return url


def _author_gravatar_url(tag: TagBinding) -> str:
    """Renders the Gravatar URL for the current author.

    *Usage:*

    ```html
    <r:author:gravatar_url [size="80"] [format="jpg"] [rating="pg"] [default="identicon"] />
    ```
    """
    return gravatar_url(tag.locals.author, tag.attr)


for _scope in AUTHOR_SCOPES:
    library.define(f"{_scope}:name", _author_name)
    library.define(f"{_scope}:email", _author_email)
    library.define(f"{_scope}:bio", _author_bio)
    library.define(f"{_scope}:gravatar_url", _author_gravatar_url)


@library.tag("authors")
def authors(tag: TagBinding) -> str:
    """Sets the scope for all authors.

    *Usage:*

    ```html
    <r:authors>...</r:authors>
    ```
    """
    return tag.expand()


@library.tag("authors:each")
def authors_each(tag: TagBinding) -> list[str]:
    """Renders its contents for each user.

    `limit` and `offset` page through the users. `login` selects users by a
    comma separated list of logins.

    *Usage:*

    ```html
    <r:authors:each [limit="10" offset="20" login="sean, john"]>...</r:authors:each>
    ```
    """
    window = standard_options(tag.attr)
    logins = None
    if login := tag.attr.get("login"):
        logins = [item for item in login.replace(" ", "").split(",") if item]
    users = tag.globals.site.find_users(
        limit=window.get("limit"), offset=window.get("offset"), logins=logins
    )
    tag.locals.authors = users
    result = []
    for user in users:
        tag.locals.author = user
        result.append(tag.expand())
    return result


@library.tag("pages")
def pages(tag: TagBinding) -> str | None:
    """Sets the scope for the current author's pages.

    Without an author in scope, the creator of the contextual page is used.
    """
    if tag.locals.author is None:
        tag.locals.author = tag.locals.page.created_by
    current: User | None = tag.locals.author
    if current is None:
        return None
    tag.locals.pages = current.pages
    return tag.expand()


@library.tag("pages:count")
def pages_count(tag: TagBinding) -> int:
    """Renders the total number of pages by the current author."""
    return len(find_all(tag.locals.pages, children_find_options(tag)))


@library.tag("pages:each")
def pages_each(tag: TagBinding) -> list[str]:
    """Renders the contents for each page of the current author.

    Takes the same ordering options as `<r:children:each>`. With a `url`
    attribute it iterates the children of the page found there instead.

    *Usage:*

    ```html
    <r:pages:each [url="/articles/"] [by="title"] [order="asc|desc"]>...</r:pages:each>
    ```
    """
    options = children_find_options(tag)
    if target := tag.attr.get("url"):
        found = tag.globals.site.find_by_url(absolute_path_for(tag.locals.page.url, target))
        if not page_found(found):
            return []
        candidates = found.children
    else:
        candidates = tag.locals.pages
    result = []
    for item in find_all(candidates, options):
        tag.locals.page = item
        result.append(tag.expand())
    return result


__all__ = ["gravatar_url", "library"]
