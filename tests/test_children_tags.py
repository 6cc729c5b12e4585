"""Tests for the children listing tags and their shared attribute validation."""

from __future__ import annotations

import typing as typ

import pytest

from page_tags.engine import TagError

Render = typ.Callable[..., str]


def test_children_count_includes_every_child(render: Render) -> None:
    """``children:count`` counts drafts and virtual pages too."""
    assert render("<r:children:count />") == "5"


@pytest.mark.parametrize(
    ("attributes", "expected"),
    [
        ("", "Child,Child 2,Child 3,"),
        ('order="desc"', "Child 3,Child 2,Child,"),
        ('order="DESC"', "Child 3,Child 2,Child,"),
        ('by="title" order="desc"', "Child 3,Child 2,Child,"),
        ('limit="2" offset="1"', "Child 2,Child 3,"),
    ],
)
def test_children_each_ordering(render: Render, attributes: str, expected: str) -> None:
    """Ordering and windowing attributes shape the listing."""
    actual = render(f"<r:children:each {attributes}><r:title />,</r:children:each>", url="/parent/")
    assert actual == expected, f"{attributes!r} rendered {actual!r}"


def test_children_each_skips_drafts_and_virtual_pages(render: Render) -> None:
    """Only published, non-virtual children are listed by default."""
    actual = render("<r:children:each><r:title />,</r:children:each>")
    assert actual == "Parent,Mother of dwarves,", f"unexpected children {actual!r}"


def test_children_each_status_attribute(render: Render) -> None:
    """``status`` selects other statuses; ``all`` still skips virtual pages."""
    drafts = render('<r:children:each status="draft"><r:title />,</r:children:each>')
    assert drafts == "Draft,", f"unexpected drafts {drafts!r}"
    everything = render('<r:children:each status="all"><r:title />,</r:children:each>')
    assert everything == "Draft,Parent,Mother of dwarves,", f"unexpected listing {everything!r}"


def test_children_each_lists_drafts_on_dev_host(render: Render) -> None:
    """The development host sees every status by default."""
    actual = render("<r:children:each><r:title />,</r:children:each>", host="dev.example.com")
    assert actual == "Draft,Parent,Mother of dwarves,", f"unexpected listing {actual!r}"


def test_children_first_and_last(render: Render) -> None:
    """``first`` and ``last`` pick the ends of the ordered listing."""
    assert render("<r:children:first><r:title /></r:children:first>", url="/parent/") == "Child"
    assert render("<r:children:last><r:title /></r:children:last>", url="/parent/") == "Child 3"
    assert render("<r:children:first>x</r:children:first>", url="/parent/child-2/") == ""


DWARVES = "/mother-of-dwarves/"


@pytest.mark.parametrize(
    ("attributes", "first", "last"),
    [
        ("", "Sneezy", "Bashful"),
        ('order="desc"', "Bashful", "Sneezy"),
        ('by="breadcrumb"', "Bashful", "Sneezy"),
        ('by="title" order="desc" offset="2"', "Grumpy", "Bashful"),
        ('offset="1" limit="3"', "Happy", "Dopey"),
        ('status="all"', "Sleepy", "Bashful"),
    ],
)
def test_children_first_and_last_options(
    render: Render, attributes: str, first: str, last: str
) -> None:
    """``first`` and ``last`` take the same options as ``each``."""
    actual_first = render(f"<r:children:first {attributes}><r:title /></r:children:first>", url=DWARVES)
    assert actual_first == first, f"first with {attributes!r} rendered {actual_first!r}"
    actual_last = render(f"<r:children:last {attributes}><r:title /></r:children:last>", url=DWARVES)
    assert actual_last == last, f"last with {attributes!r} rendered {actual_last!r}"


def test_child_refers_back_to_the_current_child(render: Render) -> None:
    """``child`` restores the iterated page inside nested lookups."""
    template = (
        '<r:children:each limit="1"><r:find url="/"><r:title />/<r:child><r:title /></r:child>'
        "</r:find></r:children:each>"
    )
    actual = render(template, url="/parent/")
    assert actual == "Home/Child", f"unexpected output {actual!r}"


def test_header_renders_on_change(render: Render) -> None:
    """Headers repeat only when their text changes."""
    template = (
        "<r:children:each><r:header>[<r:date format='%Y' />] </r:header>"
        "<r:slug /> </r:children:each>"
    )
    actual = render(template, url="/parent/")
    assert actual == "[2005] child child-2 child-3 ", f"unexpected headers {actual!r}"


def test_named_headers_restart(render: Render) -> None:
    """A changing header restarts the headers it names."""
    independent = (
        "<r:children:each><r:header name='a'><r:date format='%d' /></r:header>-"
        "<r:header name='b'>B</r:header>,</r:children:each>"
    )
    assert render(independent, url="/parent/") == "01-B,02-,03-,"
    restarting = independent.replace("name='a'", "name='a' restart='b'")
    assert render(restarting, url="/parent/") == "01-B,02-B,03-B,"


def test_if_children_and_unless_children(render: Render) -> None:
    """Child conditions respect the status filter."""
    assert render("<r:if_children>yes</r:if_children>", url="/parent/") == "yes"
    assert render("<r:if_children>yes</r:if_children>", url="/parent/child-2/") == ""
    assert render("<r:unless_children>leaf</r:unless_children>", url="/parent/child-2/") == "leaf"
    drafts_only = render('<r:if_children status="hidden">yes</r:if_children>')
    assert drafts_only == "", f"no hidden children expected, got {drafts_only!r}"


@pytest.mark.parametrize(
    ("attributes", "message"),
    [
        ('limit="a"', "`limit' attribute of `each' tag must be a positive number between 1 and 4 digits"),
        ('offset="12345"', "`offset' attribute of `each' tag must be a positive number between 1 and 4 digits"),
        ('by="gobble"', "`by' attribute of `each' tag must be set to a valid field name"),
        ('order="sideways"', "`order' attribute of `each' tag must be set to either \"asc\" or \"desc\""),
        ('status="bogus"', "`status' attribute of `each' tag must be set to a valid status"),
    ],
)
def test_children_each_rejects_bad_attributes(render: Render, attributes: str, message: str) -> None:
    """Malformed listing attributes raise with a user-facing message."""
    with pytest.raises(TagError) as excinfo:
        render(f"<r:children:each {attributes}>x</r:children:each>")
    assert str(excinfo.value) == message, f"unexpected message {excinfo.value}"
