"""General purpose tags: dates, cycling values, random picks and escaping."""

from __future__ import annotations

import datetime as dt
import random as random_module
import typing as typ
from email.utils import format_datetime

from page_tags._constants import DEFAULT_DATE_FORMAT
from page_tags.engine import TagError

from .library import TagLibrary
from .options import html_escape

if typ.TYPE_CHECKING:
    from page_tags.engine import TagBinding
    from page_tags.models import Page

library = TagLibrary()

DATE_FIELDS = ("published_at", "created_at", "updated_at")


def _local_time(tag: TagBinding, value: dt.datetime) -> dt.datetime:
    settings = tag.globals.settings
    zone = settings.tzinfo if settings is not None else dt.UTC
    return value.astimezone(zone)


def _default_date(page: Page) -> dt.datetime | None:
    return page.published_at or page.created_at


@library.tag("date")
def date(tag: TagBinding) -> str | None:
    """Renders the date based on the current page.

    By default this is when the page was published, or created if it was
    never published. `format` takes `strftime` codes and defaults to
    `%A, %B %d, %Y`. `for` selects which date to render: `published_at`,
    `created_at`, `updated_at` or `now`, the current time regardless of the
    page. Dates are shown in the site's configured time zone.

    *Usage:*

    ```html
    <r:date [format="%A, %B %d, %Y"] [for="published_at"] />
    ```
    """
    page = tag.locals.page
    date_format = tag.attr.get("format") or DEFAULT_DATE_FORMAT
    match tag.attr.get("for"):
        case None:
            value = _default_date(page)
        case "now":
            value = dt.datetime.now(dt.UTC)
        case field if field in DATE_FIELDS:
            value = getattr(page, field)
        case _:
            msg = "Invalid value for 'for' attribute."
            raise TagError(msg)
    if value is None:
        return None
    return _local_time(tag, value).strftime(date_format)


@library.tag("rfc1123_date")
def rfc1123_date(tag: TagBinding) -> str | None:
    """Outputs the published date using the format mandated by RFC 1123.

    Ideal for RSS feeds.

    *Usage:*

    ```html
    <r:rfc1123_date />
    ```
    """
    value = _default_date(tag.locals.page)
    if value is None:
        return None
    return format_datetime(value.astimezone(dt.UTC), usegmt=True)


@library.tag("cycle")
def cycle(tag: TagBinding) -> str:
    """Renders one of the passed values based on a global cycle counter.

    Use the `reset` attribute to restart the cycle from the beginning and
    the `name` attribute to track several cycles; the default name is
    `cycle`.

    *Usage:*

    ```html
    <r:cycle values="first, second, third" [reset="true|false"] [name="cycle"] />
    ```
    """
    raw_values = tag.attr.get("values")
    if not raw_values:
        msg = "`cycle' tag must contain a `values' attribute."
        raise TagError(msg)
    if tag.globals.cycle is None:
        tag.globals.cycle = {}
    counters: dict[str, int] = tag.globals.cycle
    values = [value.strip() for value in raw_values.split(",")]
    name = tag.attr.get("name") or "cycle"
    current = counters.setdefault(name, 0)
    if tag.attr.get("reset") == "true":
        current = 0
    counters[name] = (current + 1) % len(values)
    return values[current]


@library.tag("random")
def random(tag: TagBinding) -> str | None:
    """Randomly renders one of the options specified by the `option` tags.

    *Usage:*

    ```html
    <r:random>
      <r:option>...</r:option>
      <r:option>...</r:option>
    </r:random>
    ```
    """
    tag.locals.random = []
    tag.expand()
    options: list[str] = tag.locals.random
    return random_module.choice(options) if options else None


@library.tag("random:option")
def random_option(tag: TagBinding) -> None:
    """Adds its contents to the options of the enclosing `random` tag."""
    tag.locals.random.append(tag.expand())


@library.tag("comment")
def comment(tag: TagBinding) -> None:
    """Nothing inside a set of comment tags is rendered.

    *Usage:*

    ```html
    <r:comment>...</r:comment>
    ```
    """


@library.tag("escape_html")
def escape_html(tag: TagBinding) -> str:
    """Escapes angle brackets, etc. for rendering in an HTML document.

    *Usage:*

    ```html
    <r:escape_html>...</r:escape_html>
    ```
    """
    return html_escape(tag.expand())


__all__ = ["library"]
