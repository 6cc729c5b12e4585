"""The content store a render pass reads from.

:class:`Site` bundles the page tree with the users, snippets and layouts that
tags look up by name, and resolves request paths to pages the way the host
CMS does: by walking published pages slug by slug and falling back to a
custom "not found" page when one is configured along the path.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .query import find_users
from .records import Layout, Page, Snippet, User, clean_url

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from page_tags.config.models import SiteSettings


@dc.dataclass(slots=True)
class Site:
    """Page tree plus the named resources available to templates."""

    root: Page
    settings: SiteSettings
    users: list[User] = dc.field(default_factory=list)
    snippets: dict[str, Snippet] = dc.field(default_factory=dict)
    layouts: dict[str, Layout] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        self.reindex_authors()

    def reindex_authors(self) -> None:
        """Rebuild every user's ``pages`` list from the tree."""
        for user in self.users:
            user.pages = []
        for page in self.all_pages():
            if page.created_by is not None:
                page.created_by.pages.append(page)

    def all_pages(self) -> list[Page]:
        """Return the root followed by every descendant in document order."""
        return [self.root, *self.root.descendants()]

    def find_by_url(self, url: str) -> Page | None:
        """Resolve ``url`` to a published page or a custom not-found page.

        Returns
        -------
        Page or None
            The published page at ``url``; otherwise the published not-found
            child of the deepest published page on the path; otherwise ``None``.
        """
        target = clean_url(url)
        return self._find_below(self.root, target)

    def _find_below(self, page: Page, target: str) -> Page | None:
        if not page.published:
            return None
        page_url = page.url
        if page_url == target:
            return page
        if not target.startswith(page_url):
            return None
        for child in page.children:
            found = self._find_below(child, target)
            if found is not None:
                return found
        return next(
            (child for child in page.children if child.is_missing_page and child.published),
            None,
        )

    def snippet(self, name: str) -> Snippet | None:
        """Return the snippet called ``name`` or ``None``."""
        return self.snippets.get(name)

    def layout(self, name: str) -> Layout | None:
        """Return the layout called ``name`` or ``None``."""
        return self.layouts.get(name)

    def user_by_login(self, login: str) -> User | None:
        """Return the user with ``login`` or ``None``."""
        return next((user for user in self.users if user.login == login), None)

    def pages_by(self, user: User) -> list[Page]:
        """Return the pages created by ``user`` in document order."""
        return [page for page in self.all_pages() if page.created_by is user]

    def find_users(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        logins: cabc.Collection[str] | None = None,
    ) -> list[User]:
        """Return users ordered by id within the requested window."""
        return find_users(self.users, limit=limit, offset=offset, logins=logins)


__all__ = ["Site"]
