"""Filtering, ordering and slicing of page collections.

:class:`FindOptions` captures what the listing tags ask of the content store:
which statuses qualify, how to order, which window to return, and optionally
an adjacency condition ("pages whose ``published_at`` is later than this
one's"). :func:`find_all` evaluates the options against any iterable of pages
with SQL-like semantics: ``None`` sorts first in ascending order and never
satisfies a comparison.
"""

from __future__ import annotations

import dataclasses as dc
import operator
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .records import Page, User
    from .status import Status

_COMPARATORS: dict[str, cabc.Callable[[typ.Any, typ.Any], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
}


@dc.dataclass(slots=True)
class Adjacency:
    """Restrict results to pages whose ``field`` compares to ``value``."""

    field: str
    operator: str
    value: typ.Any

    def __post_init__(self) -> None:
        if self.operator not in _COMPARATORS:
            msg = f"Unsupported adjacency operator '{self.operator}'."
            raise ValueError(msg)

    def matches(self, page: Page) -> bool:
        """Return ``True`` when ``page`` satisfies the comparison."""
        candidate = page.get_field(self.field)
        if candidate is None or self.value is None:
            return False
        return _COMPARATORS[self.operator](candidate, self.value)


@dc.dataclass(slots=True)
class FindOptions:
    """Query options for page listings.

    Attributes
    ----------
    order_by : str
        Sortable page field used for ordering.
    descending : bool
        Reverse the ordering.
    limit, offset : int or None
        Result window applied after ordering.
    status : Status or None
        Only pages with this status; ``None`` accepts any status.
    include_virtual : bool
        Whether virtual pages qualify.
    exclude_id : int or None
        Page id left out of the results (the page whose siblings are listed).
    adjacency : Adjacency or None
        Additional comparison against a reference value.
    """

    order_by: str = "published_at"
    descending: bool = False
    limit: int | None = None
    offset: int | None = None
    status: Status | None = None
    include_virtual: bool = False
    exclude_id: int | None = None
    adjacency: Adjacency | None = None

    def matches(self, page: Page) -> bool:
        """Return ``True`` when ``page`` passes every condition."""
        if not self.include_virtual and page.virtual:
            return False
        if self.status is not None and page.status is not self.status:
            return False
        if self.exclude_id is not None and page.id == self.exclude_id:
            return False
        return self.adjacency is None or self.adjacency.matches(page)


def _sort_key(field: str) -> cabc.Callable[[Page], tuple[bool, typ.Any]]:
    def _key(page: Page) -> tuple[bool, typ.Any]:
        value = page.get_field(field)
        return (value is not None, value)

    return _key


def _window(items: list[typ.Any], limit: int | None, offset: int | None) -> list[typ.Any]:
    start = offset or 0
    if limit is None:
        return items[start:]
    return items[start : start + limit]


def find_all(pages: cabc.Iterable[Page], options: FindOptions) -> list[Page]:
    """Return the pages matching ``options`` in the requested order and window.

    Raises
    ------
    KeyError
        If ``options.order_by`` is not a sortable page field.
    """
    candidates = sorted((page for page in pages if options.matches(page)), key=lambda p: p.id)
    candidates.sort(key=_sort_key(options.order_by), reverse=options.descending)
    return _window(candidates, options.limit, options.offset)


def count(pages: cabc.Iterable[Page], options: FindOptions) -> int:
    """Return how many pages match the conditions, ignoring the window."""
    return sum(1 for page in pages if options.matches(page))


def find_users(
    users: cabc.Iterable[User],
    *,
    limit: int | None = None,
    offset: int | None = None,
    logins: cabc.Collection[str] | None = None,
) -> list[User]:
    """Return users ordered by id, optionally restricted to ``logins``."""
    selected = [
        user for user in users if logins is None or user.login in logins
    ]
    selected.sort(key=lambda user: user.id)
    return _window(selected, limit, offset)


__all__ = ["Adjacency", "FindOptions", "count", "find_all", "find_users"]
