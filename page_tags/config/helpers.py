"""Utility helpers shared by the site loader."""

from __future__ import annotations

import datetime as dt
import re
import typing as typ
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from page_tags._constants import DEFAULT_OUTPUT_DIR, DEFAULT_TAG_PREFIX
from page_tags.models import Status

from .models import SiteConfigError, SiteSettings

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _slugify(title: str) -> str:
    """Return a URL-safe slug derived from ``title``."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "page"


def _coerce_bool(value: object, *, field: str) -> bool:
    """Interpret YAML booleans and their common string spellings."""
    match value:
        case bool():
            return value
        case str() as text if text.strip().lower() in _TRUE_VALUES:
            return True
        case str() as text if text.strip().lower() in _FALSE_VALUES:
            return False
        case _:
            msg = f"Setting '{field}' must be a boolean, got {value!r}."
            raise SiteConfigError(msg)


def _parse_status(value: object | None, *, page: str) -> Status:
    """Return the Status named by ``value``, defaulting to published."""
    if value is None:
        return Status.PUBLISHED
    status = Status.lookup(str(value))
    if status is None:
        msg = f"Page '{page}' has unknown status {value!r}."
        raise SiteConfigError(msg)
    return status


def _parse_timestamp(value: dt.datetime | dt.date | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime.combine(value, dt.time())
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def _build_settings(payload: typ.Mapping[str, typ.Any]) -> SiteSettings:
    """Build SiteSettings from the ``settings`` mapping, validating values."""
    base = SiteSettings()
    timezone = str(payload.get("timezone", base.timezone))
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        msg = f"Unknown timezone '{timezone}'."
        raise SiteConfigError(msg) from exc
    raise_errors = payload.get("raise_errors", base.raise_errors)
    return SiteSettings(
        dev_host=_optional_str(payload.get("dev_host")),
        timezone=timezone,
        relative_url_root=str(payload.get("relative_url_root") or "").rstrip("/"),
        raise_errors=_coerce_bool(raise_errors, field="raise_errors"),
        tag_prefix=_optional_str(payload.get("tag_prefix")) or DEFAULT_TAG_PREFIX,
        output_dir=Path(payload.get("output_dir") or DEFAULT_OUTPUT_DIR),
    )


__all__ = [
    "_build_settings",
    "_coerce_bool",
    "_optional_str",
    "_parse_status",
    "_parse_timestamp",
    "_slugify",
]
