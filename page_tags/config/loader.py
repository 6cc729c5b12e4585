"""Load a YAML site description into a :class:`~page_tags.models.Site`."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from page_tags.filters import is_known_filter
from page_tags.models import Layout, Page, Site, Snippet, User

from .helpers import (
    _build_settings,
    _coerce_bool,
    _optional_str,
    _parse_status,
    _parse_timestamp,
    _slugify,
)
from .models import SiteConfigError


def load_site(path: Path) -> Site:
    """Load the YAML file describing a site's pages, authors and fragments.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site description (for example,
        ``site.yaml``).

    Returns
    -------
    Site
        The page tree with its users, snippets, layouts and settings.

    Raises
    ------
    FileNotFoundError
        If the file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the ``pages`` section is missing, or a page references an unknown
        author, layout, status or text filter.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from page_tags.config import load_site
    >>> site = load_site(Path("site.yaml"))  # doctest: +SKIP
    >>> site.root.url  # doctest: +SKIP
    '/'
    """
    if not path.exists():
        msg = f"Site file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_site(loaded)


def build_site(raw: typ.Mapping[str, typ.Any]) -> Site:
    """Build a Site from an already-parsed mapping.

    Raises
    ------
    SiteConfigError
        On any of the validation failures described in :func:`load_site`.
    """
    settings = _build_settings(raw.get("settings") or {})
    users = _build_users(raw.get("users") or {})
    layouts = _build_layouts(raw.get("layouts") or {})
    snippets = _build_snippets(raw.get("snippets") or {})

    pages_raw = raw.get("pages")
    if not isinstance(pages_raw, dict) or not pages_raw:
        msg = "No pages defined in site description."
        raise SiteConfigError(msg)

    builder = _PageBuilder(users={user.login: user for user in users}, layouts=layouts)
    root = builder.build(pages_raw, parent=None)
    return Site(
        root=root,
        settings=settings,
        users=users,
        snippets=snippets,
        layouts=layouts,
    )


def _check_filter(filter_id: str | None, *, owner: str) -> str | None:
    """Return ``filter_id`` after ensuring a text filter exists for it."""
    if filter_id and not is_known_filter(filter_id):
        msg = f"{owner} uses unknown text filter '{filter_id}'."
        raise SiteConfigError(msg)
    return filter_id


def _build_users(payload: typ.Mapping[str, typ.Any]) -> list[User]:
    """Build users from a ``login -> attributes`` mapping, ids in file order."""
    users: list[User] = []
    for index, (login, attributes) in enumerate(payload.items(), start=1):
        attrs = attributes if isinstance(attributes, dict) else {}
        users.append(
            User(
                id=int(attrs.get("id", index)),
                login=str(login),
                name=str(attrs.get("name") or login),
                email=_optional_str(attrs.get("email")),
                bio=attrs.get("bio"),
                bio_filter_id=_check_filter(
                    _optional_str(attrs.get("bio_filter")), owner=f"User '{login}'"
                ),
            )
        )
    return users


def _split_content(value: object, *, owner: str) -> tuple[str, str | None]:
    """Return ``(content, filter_id)`` from a string or ``{content, filter}``."""
    match value:
        case dict():
            content = str(value.get("content") or "")
            filter_id = _optional_str(value.get("filter"))
        case None:
            content, filter_id = "", None
        case _:
            content, filter_id = str(value), None
    return content, _check_filter(filter_id, owner=owner)


def _build_snippets(payload: typ.Mapping[str, typ.Any]) -> dict[str, Snippet]:
    snippets: dict[str, Snippet] = {}
    for name, value in payload.items():
        content, filter_id = _split_content(value, owner=f"Snippet '{name}'")
        snippets[str(name)] = Snippet(name=str(name), content=content, filter_id=filter_id)
    return snippets


def _build_layouts(payload: typ.Mapping[str, typ.Any]) -> dict[str, Layout]:
    layouts: dict[str, Layout] = {}
    for name, value in payload.items():
        match value:
            case dict():
                layout = Layout(
                    name=str(name),
                    content=str(value.get("content") or ""),
                    content_type=str(value.get("content_type") or "text/html"),
                )
            case _:
                layout = Layout(name=str(name), content=str(value or ""))
        layouts[layout.name] = layout
    return layouts


@dc.dataclass(slots=True)
class _PageBuilder:
    """Internal helper assigning ids and resolving references while walking pages."""

    users: dict[str, User]
    layouts: dict[str, Layout]
    next_id: int = 1

    def build(self, payload: typ.Mapping[str, typ.Any], *, parent: Page | None) -> Page:
        """Build the page described by ``payload`` and, recursively, its children."""
        title = str(payload.get("title") or "").strip()
        if not title:
            msg = "Every page needs a 'title'."
            raise SiteConfigError(msg)
        default_slug = "/" if parent is None else _slugify(title)
        slug = str(payload.get("slug") or default_slug)
        layout = _optional_str(payload.get("layout"))
        if layout and layout not in self.layouts:
            msg = f"Page '{title}' uses unknown layout '{layout}'."
            raise SiteConfigError(msg)

        page = Page(
            id=self._take_id(payload),
            title=title,
            slug=slug,
            breadcrumb=str(payload.get("breadcrumb") or title),
            status=_parse_status(payload.get("status"), page=title),
            published_at=_parse_timestamp(payload.get("published_at")),
            created_at=_parse_timestamp(payload.get("created_at")),
            updated_at=_parse_timestamp(payload.get("updated_at")),
            created_by=self._user(payload.get("created_by"), page=title),
            updated_by=self._user(payload.get("updated_by"), page=title),
            description=str(payload.get("description") or ""),
            keywords=str(payload.get("keywords") or ""),
            layout=layout,
            virtual=_coerce_bool(payload.get("virtual", False), field="virtual"),
            page_type=str(payload.get("type") or "page"),
        )
        for name, value in (payload.get("parts") or {}).items():
            content, filter_id = _split_content(value, owner=f"Part '{name}' of '{title}'")
            page.add_part(str(name), content, filter_id)
        if parent is not None:
            parent.add_child(page)
        for child in payload.get("children") or []:
            match child:
                case dict():
                    self.build(child, parent=page)
                case _:
                    continue
        return page

    def _take_id(self, payload: typ.Mapping[str, typ.Any]) -> int:
        page_id = int(payload.get("id", self.next_id))
        self.next_id = max(self.next_id, page_id) + 1
        return page_id

    def _user(self, login: object | None, *, page: str) -> User | None:
        key = _optional_str(login)
        if key is None:
            return None
        try:
            return self.users[key]
        except KeyError as exc:
            msg = f"Page '{page}' references unknown user '{key}'."
            raise SiteConfigError(msg) from exc


__all__ = ["build_site", "load_site"]
