"""Content records, query options and the site store used by the tags."""

from .query import Adjacency, FindOptions, count, find_all, find_users
from .records import (
    NOT_FOUND_PAGE_TYPE,
    SORTABLE_FIELDS,
    Layout,
    Page,
    PagePart,
    Snippet,
    User,
    clean_url,
)
from .request import Request
from .site import Site
from .status import Status

__all__ = [
    "NOT_FOUND_PAGE_TYPE",
    "SORTABLE_FIELDS",
    "Adjacency",
    "FindOptions",
    "Layout",
    "Page",
    "PagePart",
    "Request",
    "Site",
    "Snippet",
    "Status",
    "User",
    "clean_url",
    "count",
    "find_all",
    "find_users",
]
