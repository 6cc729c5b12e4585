"""Shared fixtures: a small site with a family tree of pages and a few authors.

The tree mirrors the situations the tags care about: nested pages several
levels deep, siblings with distinct publication dates (the dwarves), pages in
draft, virtual and "file not found" pages that listings must skip, and parts
that child pages inherit from the homepage.

Page ids follow document order::

    1  Home                      /
    2    Parent                  /parent/
    3      Child                 /parent/child/
    4        Grandchild          /parent/child/grandchild/
    5          Great Grandchild  /parent/child/grandchild/great-grandchild/
    6      Child 2               /parent/child-2/
    7      Child 3               /parent/child-3/
    8    Mother of dwarves       /mother-of-dwarves/
    9-15   Bashful ... Sneezy    (Sleepy is a draft)
    16   Draft                   /draft/
    17   Virtual                 /virtual/
    18   File not found          /missing/
"""

from __future__ import annotations

import copy
import typing as typ

import pytest

from page_tags.config import build_site
from page_tags.models import Request
from page_tags.rendering import PageContext

if typ.TYPE_CHECKING:
    from page_tags.models import Page, Site


def _dwarf(title: str, published_at: str | None, **extra: typ.Any) -> dict[str, typ.Any]:
    page: dict[str, typ.Any] = {"title": title, "created_by": "pages_tester"}
    if published_at is not None:
        page["published_at"] = published_at
    page.update(extra)
    return page


SITE_DATA: dict[str, typ.Any] = {
    "settings": {"dev_host": "preview.example.com", "timezone": "UTC"},
    "users": {
        "admin": {
            "name": "Admin",
            "email": "admin@example.com",
            "bio": "This is *all* about me.",
            "bio_filter": "Markdown",
        },
        "pages_tester": {"name": "Pages Tester", "email": "pages_tester@example.com"},
        "existing": {"name": "Existing", "email": "existing@example.com"},
    },
    "layouts": {
        "main": (
            "<html><head><title><r:title /></title></head>"
            "<body><r:content /></body></html>"
        ),
    },
    "snippets": {
        "first": "test",
        "yielding": "Before...<r:yield/>...and after",
        "div_wrap": "<div><r:yield/></div>",
        "markdown": {"content": "**bold**", "filter": "Markdown"},
        "recursive": (
            '<r:children:each>[<r:title /><r:snippet name="recursive" />]'
            "</r:children:each>"
        ),
    },
    "pages": {
        "title": "Home",
        "published_at": "2006-01-11T00:00:00Z",
        "created_at": "2005-12-31T10:00:00Z",
        "updated_at": "2006-01-15T08:30:00Z",
        "created_by": "admin",
        "updated_by": "admin",
        "description": "The homepage",
        "keywords": "Home, Page",
        "parts": {
            "body": "Hello world!",
            "sidebar": "<r:title /> sidebar",
            "extended": "Just a test.",
            "titles": "<r:title /> <r:page:title />",
        },
        "children": [
            {
                "title": "Parent",
                "published_at": "2004-01-01T00:00:00Z",
                "created_by": "admin",
                "parts": {"body": "Parent body"},
                "children": [
                    {
                        "title": "Child",
                        "published_at": "2005-01-01T00:00:00Z",
                        "parts": {"body": "Child body"},
                        "children": [
                            {
                                "title": "Grandchild",
                                "published_at": "2005-01-01T00:00:00Z",
                                "children": [
                                    {
                                        "title": "Great Grandchild",
                                        "published_at": "2005-01-01T00:00:00Z",
                                    }
                                ],
                            }
                        ],
                    },
                    {"title": "Child 2", "published_at": "2005-01-02T00:00:00Z"},
                    {"title": "Child 3", "published_at": "2005-01-03T00:00:00Z"},
                ],
            },
            {
                "title": "Mother of dwarves",
                "published_at": "2004-02-01T00:00:00Z",
                "created_by": "admin",
                "children": [
                    _dwarf("Bashful", "2005-10-07T12:12:12"),
                    _dwarf("Doc", "2004-09-08T12:12:12"),
                    _dwarf("Dopey", "2003-08-09T12:12:12"),
                    _dwarf("Grumpy", "2002-07-10T12:12:12"),
                    _dwarf("Happy", "2001-06-11T12:12:12"),
                    _dwarf("Sleepy", None, status="draft"),
                    _dwarf("Sneezy", "2000-05-12T12:12:12"),
                ],
            },
            {
                "title": "Draft",
                "status": "draft",
                "created_at": "2005-06-01T00:00:00Z",
            },
            {
                "title": "Virtual",
                "published_at": "2004-03-01T00:00:00Z",
                "virtual": True,
            },
            {
                "title": "File not found",
                "slug": "missing",
                "type": "not_found",
                "published_at": "2004-04-01T00:00:00Z",
                "parts": {"body": "Nothing here."},
            },
        ],
    },
}


def make_site(**settings: typ.Any) -> Site:
    """Build the fixture site, overriding any of its settings."""
    data = copy.deepcopy(SITE_DATA)
    data["settings"].update(settings)
    return build_site(data)


def page_titled(site: Site, title: str) -> Page:
    """Return the fixture page called ``title``."""
    for page in site.all_pages():
        if page.title == title:
            return page
    msg = f"No fixture page titled {title!r}"
    raise LookupError(msg)


class Renderer(typ.Protocol):
    def __call__(
        self,
        text: str,
        *,
        url: str | None = None,
        title: str | None = None,
        host: str = "localhost",
        relative_url_root: str = "",
    ) -> str: ...


@pytest.fixture
def site() -> Site:
    """Return a freshly built fixture site."""
    return make_site()


@pytest.fixture
def render(site: Site) -> Renderer:
    """Return a helper expanding template text against a fixture page.

    The page is chosen by ``url`` (through the site's URL lookup) or by
    ``title``; it defaults to the homepage.
    """

    def _render(
        text: str,
        *,
        url: str | None = None,
        title: str | None = None,
        host: str = "localhost",
        relative_url_root: str = "",
    ) -> str:
        if title is not None:
            page = page_titled(site, title)
        else:
            found = site.find_by_url(url or "/")
            assert found is not None, f"expected a page at {url!r}"
            page = found
        request = Request(host=host, relative_url_root=relative_url_root)
        return PageContext(page, site, request).render(text)

    return _render


@pytest.fixture
def site_factory() -> typ.Callable[..., Site]:
    """Return :func:`make_site` for tests that need non-default settings."""
    return make_site


@pytest.fixture
def find_page(site: Site) -> typ.Callable[[str], Page]:
    """Return a lookup of fixture pages by title, including unpublished ones."""
    return lambda title: page_titled(site, title)
