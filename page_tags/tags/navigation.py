"""The ``navigation`` tag and the state tags nested inside it."""

from __future__ import annotations

import typing as typ

from page_tags.engine import TagError

from .library import TagLibrary
from .options import remove_trailing_slash

if typ.TYPE_CHECKING:
    from page_tags.engine import Block, TagBinding

library = TagLibrary()

STATE_NAMES = ("normal", "here", "selected", "between")


def parse_urls(urls: str) -> list[tuple[str, str]]:
    """Split ``Title: url | Title: url`` into ``(title, url)`` pairs.

    Titles may contain colons; the text after the last colon is the URL.

    >>> parse_urls("Home: / | Q: A: /qa/")
    [('Home', '/'), ('Q: A', '/qa/')]
    >>> parse_urls("")
    []
    """
    if not urls:
        return []
    pairs = []
    for pair in urls.split("|"):
        title, _, url = pair.rpartition(":")
        pairs.append((title.strip(), url.strip()))
    return pairs


def _call(block: Block | None) -> str:
    return block() if block is not None else ""


@library.tag("navigation")
def navigation(tag: TagBinding) -> str:
    """Renders a list of links specified in the `urls` attribute.

    Each link is rendered in one of three states:

    * `normal` is the normal state for the link
    * `here` is used when the url matches the current page's URL
    * `selected` is used when the current page is below the url

    `here` and `selected` fall back to `normal` when omitted. The `between`
    tag specifies what is inserted between each of the links; it defaults
    to a single space.

    *Usage:*

    ```html
    <r:navigation urls="[Title: url | Title: url | ...]">
      <r:normal><a href="<r:url />"><r:title /></a></r:normal>
      <r:here><strong><r:title /></strong></r:here>
      <r:selected><strong><a href="<r:url />"><r:title /></a></strong></r:selected>
      <r:between> | </r:between>
    </r:navigation>
    ```
    """
    states: dict[str, typ.Any] = {}
    tag.locals.navigation = states
    tag.expand()
    if "normal" not in states:
        msg = "`navigation' tag must include a `normal' tag"
        raise TagError(msg)

    page_url = remove_trailing_slash(tag.globals.page.url)
    result = []
    for title, url in parse_urls(tag.attr.get("urls", "")):
        states["title"] = title
        states["url"] = url
        if page_url == remove_trailing_slash(url):
            block = states.get("here") or states.get("selected") or states["normal"]
        elif page_url.startswith(url):
            block = states.get("selected") or states["normal"]
        else:
            block = states["normal"]
        result.append(_call(block))

    between = _call(states["between"]) if "between" in states else " "
    return between.join(item for item in result if item.strip())


def _store_block(state: str) -> typ.Callable[[TagBinding], None]:
    def _handler(tag: TagBinding) -> None:
        tag.locals.navigation[state] = tag.block

    _handler.__doc__ = f"Defines how a link in the `{state}` state is rendered."
    return _handler


def _read_value(key: str) -> typ.Callable[[TagBinding], str]:
    def _handler(tag: TagBinding) -> str:
        return tag.locals.navigation[key]

    _handler.__doc__ = f"Renders the {key} of the link being rendered."
    return _handler


for _state in STATE_NAMES:
    library.define(f"navigation:{_state}", _store_block(_state))
for _key in ("title", "url"):
    library.define(f"navigation:{_key}", _read_value(_key))


__all__ = ["library", "parse_urls"]
