"""Tests for the sibling navigation tags.

The dwarves under ``/mother-of-dwarves/`` are published on distinct dates, so
by publication date their order is Sneezy, Happy, Grumpy, Dopey, Doc, Bashful
(Sleepy is a draft without a date).
"""

from __future__ import annotations

import typing as typ

import pytest

Render = typ.Callable[..., str]

DOC = "/mother-of-dwarves/doc/"


def test_siblings_each_skips_the_page_itself(render: Render) -> None:
    """The contextual page is not one of its own siblings."""
    actual = render("<r:siblings:each><r:title />,</r:siblings:each>", url=DOC)
    assert actual == "Sneezy,Happy,Grumpy,Dopey,Bashful,", f"unexpected siblings {actual!r}"


def test_siblings_status_all_includes_drafts(render: Render) -> None:
    """Undated drafts sort first when every status is listed."""
    template = '<r:siblings status="all"><r:each><r:title />,</r:each></r:siblings>'
    actual = render(template, url=DOC)
    assert actual == "Sleepy,Sneezy,Happy,Grumpy,Dopey,Bashful,", f"unexpected siblings {actual!r}"


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("<r:siblings:next><r:title /></r:siblings:next>", "Bashful"),
        ("<r:siblings:previous><r:title /></r:siblings:previous>", "Dopey"),
        ('<r:siblings order="desc"><r:next><r:title /></r:next></r:siblings>', "Dopey"),
        ('<r:siblings order="desc"><r:previous><r:title /></r:previous></r:siblings>', "Bashful"),
        ('<r:siblings:next by="title"><r:title /></r:siblings:next>', "Dopey"),
        ('<r:siblings:previous by="title"><r:title /></r:siblings:previous>', "Bashful"),
        (
            '<r:siblings order="desc"><r:next order="asc"><r:title /></r:next></r:siblings>',
            "Bashful",
        ),
    ],
)
def test_next_and_previous(render: Render, template: str, expected: str) -> None:
    """Adjacent siblings follow the displayed order, overridable per tag."""
    actual = render(template, url=DOC)
    assert actual == expected, f"{template} rendered {actual!r}"


def test_each_before_and_after(render: Render) -> None:
    """Preceding siblings are listed nearest first."""
    before = render("<r:siblings:each_before><r:title />,</r:siblings:each_before>", url=DOC)
    assert before == "Dopey,Grumpy,Happy,Sneezy,", f"unexpected preceding {before!r}"
    after = render("<r:siblings:each_after><r:title />,</r:siblings:each_after>", url=DOC)
    assert after == "Bashful,", f"unexpected following {after!r}"


@pytest.mark.parametrize(
    ("tag", "url", "expected"),
    [
        ("if_next", "/mother-of-dwarves/bashful/", ""),
        ("if_next", DOC, "yes"),
        ("unless_next", "/mother-of-dwarves/bashful/", "yes"),
        ("if_previous", "/mother-of-dwarves/sneezy/", ""),
        ("unless_previous", "/mother-of-dwarves/sneezy/", "yes"),
        ("unless_previous", DOC, ""),
    ],
)
def test_adjacency_conditions(render: Render, tag: str, url: str, expected: str) -> None:
    """Conditions report whether a sibling exists on either side."""
    actual = render(f"<r:siblings><r:{tag}>yes</r:{tag}></r:siblings>", url=url)
    assert actual == expected, f"{tag} at {url} rendered {actual!r}"


def test_if_and_unless_siblings(render: Render) -> None:
    """Sibling conditions count published siblings only."""
    assert render("<r:if_siblings>yes</r:if_siblings>", url="/parent/child-2/") == "yes"
    great = "/parent/child/grandchild/great-grandchild/"
    assert render("<r:if_siblings>yes</r:if_siblings>", url=great) == ""
    assert render("<r:unless_siblings>alone</r:unless_siblings>", url=great) == "alone"


def test_root_has_no_siblings(render: Render) -> None:
    """Every sibling tag renders nothing for the homepage."""
    template = (
        "<r:siblings:each>each</r:siblings:each>"
        "<r:siblings:next>next</r:siblings:next>"
        "<r:siblings:each_before>before</r:siblings:each_before>"
        "<r:if_siblings>some</r:if_siblings>"
    )
    assert render(template) == ""
    assert render("<r:unless_siblings>alone</r:unless_siblings>") == "alone"


@pytest.mark.parametrize(
    ("template", "url", "expected"),
    [
        (
            "<r:siblings><r:next><r:next><r:title /></r:next></r:next></r:siblings>",
            "/mother-of-dwarves/dopey/",
            "Bashful",
        ),
        (
            "<r:siblings:previous><r:previous><r:title /></r:previous></r:siblings:previous>",
            DOC,
            "Grumpy",
        ),
        (
            '<r:siblings order="desc" by="title"><r:next>'
            "<r:each_before><r:title />,</r:each_before></r:next></r:siblings>",
            DOC,
            "Doc,Dopey,Grumpy,Happy,Sneezy,",
        ),
        (
            '<r:siblings order="desc" by="title"><r:previous>'
            "<r:each_after><r:title />,</r:each_after></r:previous></r:siblings>",
            DOC,
            "Doc,Bashful,",
        ),
    ],
)
def test_sibling_tags_nest(render: Render, template: str, url: str, expected: str) -> None:
    """Nested sibling tags start from the page chosen by the enclosing tag."""
    actual = render(template, url=url)
    assert actual == expected, f"{template} at {url} rendered {actual!r}"
