"""In-memory content records consumed by the tag library.

These dataclasses stand in for the host CMS's persisted entities: a tree of
:class:`Page` nodes with named :class:`PagePart` bodies, the :class:`User`
accounts that author them, and the reusable :class:`Snippet` and
:class:`Layout` fragments. Records compare by identity, mirroring how the
templates ask "is the contextual page the requested page?".

Example
-------
>>> from page_tags.models import Page
>>> home = Page(id=1, title="Home", slug="/", breadcrumb="Home")
>>> about = home.add_child(Page(id=2, title="About", slug="about", breadcrumb="About"))
>>> about.url
'/about/'
>>> [page.title for page in about.ancestors]
['Home']
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import re
import typing as typ

from .status import Status

NOT_FOUND_PAGE_TYPE = "not_found"
SORTABLE_FIELDS = frozenset(
    {
        "id",
        "title",
        "slug",
        "breadcrumb",
        "status_id",
        "parent_id",
        "published_at",
        "created_at",
        "updated_at",
        "created_by_id",
        "updated_by_id",
        "description",
        "keywords",
        "virtual",
        "page_type",
    }
)
_SLASHES = re.compile(r"/{2,}")


def clean_url(url: str) -> str:
    """Return ``url`` with single leading and trailing slashes.

    >>> clean_url("parent//child")
    '/parent/child/'
    >>> clean_url("/")
    '/'
    """
    return _SLASHES.sub("/", f"/{url.strip()}/")


@dc.dataclass(slots=True)
class PagePart:
    """A named, optionally filtered body of page content."""

    name: str
    content: str = ""
    filter_id: str | None = None


@dc.dataclass(slots=True)
class Snippet:
    """A named template fragment that pages, layouts and snippets can include."""

    name: str
    content: str = ""
    filter_id: str | None = None


@dc.dataclass(slots=True)
class Layout:
    """Template wrapped around a page when it is rendered as a whole."""

    name: str
    content: str = ""
    content_type: str = "text/html"


@dc.dataclass(slots=True, eq=False)
class User:
    """An author account; ``pages`` lists the pages the user created."""

    id: int
    login: str
    name: str
    email: str | None = None
    bio: str | None = None
    bio_filter_id: str | None = None
    pages: list[Page] = dc.field(default_factory=list, repr=False)


@dc.dataclass(slots=True, eq=False)
class Page:
    """A node in the content tree.

    Attributes
    ----------
    id : int
        Unique identifier, also used to break ordering ties.
    title, slug, breadcrumb : str
        Display and addressing attributes; ``slug`` is ``"/"`` for the root.
    status : Status
        Workflow state; only published pages are served.
    parent : Page or None
        Enclosing page, ``None`` for the root.
    children : list[Page]
        Child pages in document order.
    parts : dict[str, PagePart]
        Content parts keyed by name.
    published_at, created_at, updated_at : datetime or None
        Timezone-aware timestamps.
    created_by, updated_by : User or None
        Authoring accounts.
    description, keywords : str
        Metadata rendered by the ``meta`` tags.
    layout : str or None
        Name of the layout used when rendering the page; inherited when unset.
    virtual : bool
        Virtual pages never appear in listings.
    page_type : str
        ``"page"`` or ``"not_found"`` for custom 404 pages.
    """

    id: int
    title: str
    slug: str
    breadcrumb: str
    status: Status = Status.PUBLISHED
    parent: Page | None = dc.field(default=None, repr=False)
    children: list[Page] = dc.field(default_factory=list, repr=False)
    parts: dict[str, PagePart] = dc.field(default_factory=dict, repr=False)
    published_at: dt.datetime | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    created_by: User | None = dc.field(default=None, repr=False)
    updated_by: User | None = dc.field(default=None, repr=False)
    description: str = ""
    keywords: str = ""
    layout: str | None = None
    virtual: bool = False
    page_type: str = "page"

    def __post_init__(self) -> None:
        if self.page_type == NOT_FOUND_PAGE_TYPE:
            self.virtual = True

    def add_child(self, child: Page) -> Page:
        """Attach ``child`` as the last child of this page and return it."""
        child.parent = self
        self.children.append(child)
        return child

    def add_part(self, name: str, content: str = "", filter_id: str | None = None) -> PagePart:
        """Create or replace the part called ``name``."""
        part = PagePart(name=name, content=content, filter_id=filter_id)
        self.parts[name] = part
        return part

    def part(self, name: str) -> PagePart | None:
        """Return the part called ``name`` or ``None``."""
        return self.parts.get(name)

    @property
    def url(self) -> str:
        """Return the absolute path of the page, ending in a slash."""
        if self.parent is None:
            return clean_url(self.slug)
        return clean_url(f"{self.parent.url}/{self.slug}")

    @property
    def ancestors(self) -> list[Page]:
        """Return the chain of parents, nearest first."""
        chain: list[Page] = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain

    @property
    def published(self) -> bool:
        """Return ``True`` when the page is published."""
        return self.status is Status.PUBLISHED

    @property
    def is_missing_page(self) -> bool:
        """Return ``True`` for custom "file not found" pages."""
        return self.page_type == NOT_FOUND_PAGE_TYPE

    @property
    def status_id(self) -> int:
        return int(self.status)

    @property
    def parent_id(self) -> int | None:
        return self.parent.id if self.parent else None

    @property
    def created_by_id(self) -> int | None:
        return self.created_by.id if self.created_by else None

    @property
    def updated_by_id(self) -> int | None:
        return self.updated_by.id if self.updated_by else None

    def get_field(self, name: str) -> typ.Any:
        """Return the value of the sortable column ``name``.

        Raises
        ------
        KeyError
            If ``name`` is not a sortable page field.
        """
        if name not in SORTABLE_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def descendants(self) -> typ.Iterator[Page]:
        """Yield every page below this one, depth first in document order."""
        for child in self.children:
            yield child
            yield from child.descendants()


__all__ = [
    "NOT_FOUND_PAGE_TYPE",
    "SORTABLE_FIELDS",
    "Layout",
    "Page",
    "PagePart",
    "Snippet",
    "User",
    "clean_url",
]
