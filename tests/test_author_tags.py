"""Tests for the author tags and the per-author page listings."""

from __future__ import annotations

import hashlib
import typing as typ

import pytest

from page_tags._constants import GRAVATAR_URL
from page_tags.engine import TagError

Render = typ.Callable[..., str]

ADMIN_HASH = hashlib.md5(b"admin@example.com").hexdigest()  # noqa: S324


def test_author_renders_the_creator(render: Render) -> None:
    """The single tag prints the creator's name, or nothing without one."""
    assert render("<r:author />") == "Admin"
    assert render("<r:author />", url="/parent/child/") == ""


def test_author_login_takes_precedence(render: Render) -> None:
    """``login`` selects another user regardless of the page."""
    assert render('<r:author login="existing" />') == "Existing"
    assert render('<r:author login="nobody" />') == ""


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("<r:author><r:name /></r:author>", "Admin"),
        ("<r:author><r:email /></r:author>", "admin@example.com"),
        ("<r:author:email />", "admin@example.com"),
        ("<r:author:bio />", "<p>This is <em>all</em> about me.</p>"),
        ('<r:author login="pages_tester"><r:bio /></r:author>', ""),
    ],
)
def test_author_fields(render: Render, template: str, expected: str) -> None:
    """Field tags read the author in scope."""
    actual = render(template)
    assert actual == expected, f"{template} rendered {actual!r}"


def test_gravatar_url_options(render: Render) -> None:
    """Gravatar URLs hash the email and carry size, default and rating."""
    plain = render("<r:author:gravatar_url />")
    assert plain == f"{GRAVATAR_URL}{ADMIN_HASH}", f"unexpected url {plain!r}"
    detailed = render(
        '<r:author:gravatar_url size="80" format="JPG" rating="PG" default="identicon" />'
    )
    expected = f"{GRAVATAR_URL}{ADMIN_HASH}.jpg?s=80&d=identicon&r=pg"
    assert detailed == expected, f"unexpected url {detailed!r}"


def test_authors_each_lists_users_in_order(render: Render) -> None:
    """Every user is listed once, ordered by id."""
    actual = render("<r:authors:each><r:name />,</r:authors:each>")
    assert actual == "Admin,Pages Tester,Existing,", f"unexpected authors {actual!r}"


@pytest.mark.parametrize(
    ("attributes", "expected"),
    [
        ('login="existing, admin"', "Admin,Existing,"),
        ('limit="1" offset="1"', "Pages Tester,"),
        ('login="ghost"', ""),
    ],
)
def test_authors_each_filters(render: Render, attributes: str, expected: str) -> None:
    """``login`` narrows the users and ``limit``/``offset`` page through them."""
    actual = render(f"<r:authors><r:each {attributes}><r:name />,</r:each></r:authors>")
    assert actual == expected, f"{attributes!r} rendered {actual!r}"


def test_authors_each_validates_window(render: Render) -> None:
    """Paging attributes use the listing validation."""
    with pytest.raises(TagError, match="`limit' attribute of `each' tag"):
        render('<r:authors:each limit="lots">x</r:authors:each>')


def test_pages_count_and_each(render: Render) -> None:
    """Page listings default to the contextual page's author and published pages."""
    assert render("<r:pages:count />", url="/mother-of-dwarves/bashful/") == "6"
    assert render('<r:pages:count status="all" />', url="/mother-of-dwarves/bashful/") == "7"
    actual = render(
        '<r:pages:each by="title"><r:title />,</r:pages:each>',
        url="/mother-of-dwarves/bashful/",
    )
    assert actual == "Bashful,Doc,Dopey,Grumpy,Happy,Sneezy,", f"unexpected pages {actual!r}"


def test_pages_each_for_each_author(render: Render) -> None:
    """Inside ``authors:each`` the listing follows the author in scope."""
    template = (
        '<r:authors:each login="admin, existing"><r:name />=<r:pages:count />;</r:authors:each>'
    )
    actual = render(template)
    assert actual == "Admin=3;Existing=0;", f"unexpected counts {actual!r}"


def test_pages_each_with_url_lists_children(render: Render) -> None:
    """``url`` switches the listing to the children of another page."""
    actual = render('<r:pages:each url="/parent/"><r:title />,</r:pages:each>')
    assert actual == "Child,Child 2,Child 3,", f"unexpected pages {actual!r}"
    missing = render('<r:pages:each url="/nowhere/"><r:title /></r:pages:each>')
    assert missing == "", f"expected nothing for a missing page, got {missing!r}"


def test_pages_without_author_renders_nothing(render: Render) -> None:
    """Pages with no creator have no author listing."""
    assert render("<r:pages>x</r:pages>", url="/parent/child/") == ""
