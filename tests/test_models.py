"""Unit tests for page records, listing queries and URL resolution."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from page_tags.models import (
    Adjacency,
    FindOptions,
    Page,
    Request,
    Status,
    User,
    clean_url,
    count,
    find_all,
    find_users,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from page_tags.models import Site


def _pages() -> list[Page]:
    stamp = dt.datetime(2020, 1, 1, tzinfo=dt.UTC)
    return [
        Page(id=1, title="Charlie", slug="c", breadcrumb="c", published_at=stamp),
        Page(id=2, title="Alpha", slug="a", breadcrumb="a", published_at=None),
        Page(id=3, title="Bravo", slug="b", breadcrumb="b", published_at=stamp + dt.timedelta(days=1)),
        Page(id=4, title="Delta", slug="d", breadcrumb="d", status=Status.DRAFT, published_at=stamp),
        Page(id=5, title="Echo", slug="e", breadcrumb="e", virtual=True, published_at=stamp),
    ]


def _titles(pages: cabc.Iterable[Page]) -> list[str]:
    return [page.title for page in pages]


def test_find_all_sorts_missing_values_first() -> None:
    """Ascending order puts ``None`` first and breaks ties by id."""
    actual = _titles(find_all(_pages(), FindOptions()))
    assert actual == ["Alpha", "Charlie", "Delta", "Bravo"], f"unexpected order {actual!r}"


def test_find_all_descending_puts_missing_values_last() -> None:
    """Descending order reverses the ascending order."""
    actual = _titles(find_all(_pages(), FindOptions(descending=True)))
    assert actual[-1] == "Alpha", f"expected Alpha last, got {actual!r}"
    assert actual[0] == "Bravo", f"expected Bravo first, got {actual!r}"


def test_find_all_filters_status_and_virtual() -> None:
    """A status restricts results and virtual pages never qualify."""
    options = FindOptions(order_by="title", status=Status.PUBLISHED)
    actual = _titles(find_all(_pages(), options))
    assert actual == ["Alpha", "Bravo", "Charlie"], f"unexpected pages {actual!r}"


def test_find_all_applies_window_after_sorting() -> None:
    """``offset`` and ``limit`` slice the sorted results."""
    options = FindOptions(order_by="title", limit=2, offset=1)
    actual = _titles(find_all(_pages(), options))
    assert actual == ["Bravo", "Charlie"], f"unexpected window {actual!r}"


def test_count_ignores_window() -> None:
    """Counting considers every matching page."""
    assert count(_pages(), FindOptions(limit=1)) == 4, "count should ignore the limit"


def test_adjacency_excludes_missing_values() -> None:
    """Comparisons with ``None`` on either side never match."""
    pages = _pages()
    after = Adjacency(field="published_at", operator=">", value=pages[0].published_at)
    actual = _titles(find_all(pages, FindOptions(adjacency=after)))
    assert actual == ["Bravo"], f"unexpected adjacent pages {actual!r}"
    nothing = Adjacency(field="published_at", operator="<", value=None)
    assert find_all(pages, FindOptions(adjacency=nothing)) == [], "None never compares"


def test_adjacency_rejects_unknown_operator() -> None:
    """Only ``<`` and ``>`` are supported."""
    with pytest.raises(ValueError, match="Unsupported adjacency operator"):
        Adjacency(field="id", operator="=", value=1)


def test_exclude_id_leaves_out_one_page() -> None:
    """The excluded id is filtered out."""
    actual = _titles(find_all(_pages(), FindOptions(order_by="id", exclude_id=1)))
    assert actual == ["Alpha", "Bravo", "Delta"], f"unexpected pages {actual!r}"


def test_get_field_rejects_non_sortable_names() -> None:
    """Only scalar columns can be used for ordering."""
    with pytest.raises(KeyError):
        _pages()[0].get_field("children")


def test_find_users_orders_by_id_and_filters_logins() -> None:
    """Users come back in id order, optionally restricted to logins."""
    users = [
        User(id=3, login="c", name="C"),
        User(id=1, login="a", name="A"),
        User(id=2, login="b", name="B"),
    ]
    everyone = [user.login for user in find_users(users)]
    assert everyone == ["a", "b", "c"], f"unexpected order {everyone!r}"
    selected = [user.login for user in find_users(users, logins=["c", "a"], limit=1)]
    assert selected == ["a"], f"unexpected selection {selected!r}"


def test_page_urls_and_ancestors(site: Site) -> None:
    """URLs follow the slugs; ancestors are listed nearest first."""
    page = site.find_by_url("/parent/child/grandchild/great-grandchild")
    assert page is not None, "expected to find the great grandchild"
    assert page.url == "/parent/child/grandchild/great-grandchild/", page.url
    actual = _titles(page.ancestors)
    assert actual == ["Grandchild", "Child", "Parent", "Home"], f"unexpected ancestors {actual!r}"


def test_not_found_pages_are_virtual(site: Site) -> None:
    """Custom not-found pages never show up in listings."""
    page = site.find_by_url("/missing/")
    assert page is not None, "expected the not-found page"
    assert page.is_missing_page, "expected a not-found page"
    assert page.virtual, "not-found pages must be virtual"


def test_find_by_url_skips_unpublished_pages(site: Site) -> None:
    """Unpublished pages resolve to the not-found page instead."""
    page = site.find_by_url("/draft/")
    assert page is not None, "expected the not-found page to answer"
    assert page.title == "File not found", f"unexpected page {page.title!r}"


def test_find_by_url_without_fallback_returns_none(site_factory: typ.Callable[..., Site]) -> None:
    """Without a not-found page an unknown URL resolves to nothing."""
    site = site_factory()
    site.root.children = [child for child in site.root.children if not child.is_missing_page]
    assert site.find_by_url("/nowhere/") is None, "expected no page"


def test_authors_know_their_pages(site: Site) -> None:
    """Each user lists the pages they created in document order."""
    tester = site.user_by_login("pages_tester")
    assert tester is not None, "expected the pages_tester user"
    actual = _titles(tester.pages)
    assert actual[:2] == ["Bashful", "Doc"], f"unexpected pages {actual!r}"
    assert len(actual) == 7, f"expected seven dwarves, got {len(actual)}"
    assert site.pages_by(tester) == tester.pages, "pages_by should agree with user.pages"


def test_clean_url_and_request_prefix() -> None:
    """Duplicate slashes collapse and the relative root prefixes paths."""
    assert clean_url("//a//b") == "/a/b/", clean_url("//a//b")
    assert Request(relative_url_root="/foo").url_for("/") == "/foo/"
    assert Request(relative_url_root="/foo/").url_for("/bar/") == "/foo/bar/"


def test_status_lookup_is_case_insensitive() -> None:
    """Status names resolve regardless of case and ``all`` is not a status."""
    assert Status.lookup("PUBLISHED") is Status.PUBLISHED, "expected PUBLISHED"
    assert Status.lookup("all") is None, "'all' is a pseudo value"
    assert Status.REVIEWED.display_name == "Reviewed", Status.REVIEWED.display_name


def test_page_ids_follow_document_order(site: Site) -> None:
    """Ids are assigned in document order."""
    pages = site.all_pages()
    assert [page.id for page in pages] == list(range(1, 19)), "ids should be sequential"
    assert pages[8].title == "Bashful", f"unexpected page {pages[8].title!r}"
