"""Attribute parsing and validation shared by the standard tags.

The listing tags (``children:each``, ``pages:each``, ``siblings:*`` ...) accept
the same ``limit``/``offset``/``by``/``order``/``status`` attributes. The
helpers here turn those strings into :class:`~page_tags.models.FindOptions`
and raise :class:`~page_tags.engine.TagError` with the messages template
authors see when an attribute is malformed.
"""

from __future__ import annotations

import html
import posixpath
import re
import typing as typ

from page_tags._constants import DEFAULT_PART_NAME
from page_tags.engine import TagError
from page_tags.models import SORTABLE_FIELDS, Adjacency, FindOptions, Status

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from page_tags.engine import TagBinding
    from page_tags.models import Page

NUMBER_PATTERN = re.compile(r"\d{1,4}")
ORDER_PATTERN = re.compile(r"(asc|desc)", re.IGNORECASE)
TRAILING_SLASH_PATTERN = re.compile(r"^(.*?)/$")


def standard_options(attr: cabc.Mapping[str, str]) -> dict[str, int]:
    """Parse the ``limit`` and ``offset`` attributes.

    Raises
    ------
    TagError
        If either value is not a 1-4 digit number.
    """
    options: dict[str, int] = {}
    for key in ("limit", "offset"):
        number = attr.get(key)
        if number is None:
            continue
        if not NUMBER_PATTERN.fullmatch(number):
            msg = f"`{key}' attribute of `each' tag must be a positive number between 1 and 4 digits"
            raise TagError(msg)
        options[key] = int(number)
    return options


def is_dev(tag: TagBinding) -> bool:
    """Return ``True`` when the current request targets the development host."""
    request = tag.globals.request
    settings = tag.globals.settings
    if request is None or settings is None:
        return False
    return settings.is_dev_host(request.host)


def children_find_options(tag: TagBinding) -> FindOptions:
    """Build listing options from the tag's ordering and status attributes.

    Raises
    ------
    TagError
        If ``limit``/``offset`` are not 1-4 digit numbers, ``by`` is not a
        page field, ``order`` is neither asc nor desc, or ``status`` is not a
        known status.
    """
    attr = tag.attr
    window = standard_options(attr)

    by = (attr.get("by") or "published_at").strip()
    if by not in SORTABLE_FIELDS:
        msg = "`by' attribute of `each' tag must be set to a valid field name"
        raise TagError(msg)

    order = (attr.get("order") or "asc").strip()
    order_match = ORDER_PATTERN.fullmatch(order)
    if order_match is None:
        msg = "`order' attribute of `each' tag must be set to either \"asc\" or \"desc\""
        raise TagError(msg)

    default_status = "all" if is_dev(tag) else "published"
    status_name = (attr.get("status") or default_status).lower()
    status: Status | None = None
    if status_name != "all":
        status = Status.lookup(status_name)
        if status is None:
            msg = "`status' attribute of `each' tag must be set to a valid status"
            raise TagError(msg)

    return FindOptions(
        order_by=by,
        descending=order_match.group(1).lower() == "desc",
        limit=window.get("limit"),
        offset=window.get("offset"),
        status=status,
    )


def siblings_find_options(tag: TagBinding) -> FindOptions:
    """Return children options that leave out the contextual page."""
    options = children_find_options(tag)
    options.exclude_id = tag.locals.page.id
    return options


def adjacent_siblings_find_options(tag: TagBinding, adjacent: str) -> FindOptions:
    """Return sibling options restricted to one side of the contextual page.

    ``adjacent`` is ``"next"`` or ``"previous"``; with ``order="desc"`` the
    comparison flips so "next" keeps following the displayed order.
    """
    if adjacent not in {"next", "previous"}:
        msg = f"Unsupported adjacency '{adjacent}'."
        raise ValueError(msg)
    options = siblings_find_options(tag)
    order = attr_or_error(tag, "order", default="asc", values=("desc", "asc"))
    by = (tag.attr.get("by") or "published_at").strip()
    wants_smaller = (adjacent == "previous") == (order == "asc")
    options.adjacency = Adjacency(
        field=by,
        operator="<" if wants_smaller else ">",
        value=tag.locals.page.get_field(by),
    )
    return options


def attr_or_error(
    tag: TagBinding,
    attribute_name: str,
    *,
    default: str,
    values: cabc.Sequence[str],
) -> str:
    """Return the attribute (or default) after checking it is one of ``values``.

    Raises
    ------
    TagError
        If the value is not in ``values``.
    """
    attribute = str(tag.attr.get(attribute_name) or default)
    if attribute not in values:
        msg = (
            f"'{attribute_name}' attribute of `{tag.name}' tag must be one of: "
            f"{','.join(values)}"
        )
        raise TagError(msg)
    return attribute


def boolean_attr_or_error(tag: TagBinding, attribute_name: str, default: bool) -> bool:
    """Return a ``"true"``/``"false"`` attribute as a bool."""
    value = attr_or_error(
        tag,
        attribute_name,
        default=str(default).lower(),
        values=("true", "false"),
    )
    return value == "true"


def boolean_attr(tag: TagBinding, attribute_name: str, default: bool) -> bool:
    """Case-insensitive boolean attribute with the ``content`` tag's message.

    Raises
    ------
    TagError
        If the attribute is neither true nor false.
    """
    value = str(tag.attr.get(attribute_name) or str(default)).strip().lower()
    if value not in {"true", "false"}:
        msg = (
            f"`{attribute_name}' attribute of `{tag.name}' tag must be set to "
            'either "true" or "false"'
        )
        raise TagError(msg)
    return value == "true"


def build_regexp_for(tag: TagBinding, attribute_name: str) -> re.Pattern[str]:
    """Compile the regular expression held in ``attribute_name``.

    Matching ignores case unless ``ignore_case="false"``.

    Raises
    ------
    TagError
        If the expression does not compile.
    """
    flags = 0 if tag.attr.get("ignore_case") == "false" else re.IGNORECASE
    try:
        return re.compile(tag.attr[attribute_name], flags)
    except re.error as exc:
        msg = (
            f"Malformed regular expression in `{attribute_name}' argument of "
            f"`{tag.name}' tag: {exc}"
        )
        raise TagError(msg) from exc


def html_escape(text: str) -> str:
    """Escape markup characters, using ``&#39;`` for apostrophes.

    >>> html_escape("it's <b> & co")
    'it&#39;s &lt;b&gt; &amp; co'
    """
    return html.escape(text, quote=False).replace('"', "&quot;").replace("'", "&#39;")


def tag_part_name(tag: TagBinding) -> str:
    """Return the ``part`` attribute, defaulting to ``body``."""
    return tag.attr.get("part") or DEFAULT_PART_NAME


def absolute_path_for(base_path: str, new_path: str) -> str:
    """Resolve ``new_path`` against ``base_path`` unless it is already absolute.

    >>> absolute_path_for("/parent/child/grandchild/", "../../child-2")
    '/parent/child-2'
    """
    if new_path.startswith("/"):
        return new_path
    return posixpath.normpath(posixpath.join(base_path, new_path))


def remove_trailing_slash(value: str) -> str:
    """Drop a single trailing slash."""
    match = TRAILING_SLASH_PATTERN.match(value)
    return match.group(1) if match else value


def page_found(page: Page | None) -> bool:
    """Return ``True`` for real pages, ``False`` for ``None`` or not-found pages."""
    return page is not None and not page.is_missing_page


def inherit_filter_attributes(tag: TagBinding) -> None:
    """Fill attributes the tag did not set from the enclosing ``siblings`` tag."""
    inherited = tag.locals.filter_attributes or {}
    for key, value in inherited.items():
        tag.attr.setdefault(key, value)


__all__ = [
    "absolute_path_for",
    "adjacent_siblings_find_options",
    "attr_or_error",
    "boolean_attr",
    "boolean_attr_or_error",
    "build_regexp_for",
    "children_find_options",
    "html_escape",
    "inherit_filter_attributes",
    "is_dev",
    "page_found",
    "remove_trailing_slash",
    "siblings_find_options",
    "standard_options",
    "tag_part_name",
]
