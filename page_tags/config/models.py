"""Typed dataclasses describing site-wide rendering settings."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path
from zoneinfo import ZoneInfo

from page_tags._constants import DEFAULT_OUTPUT_DIR, DEFAULT_TAG_PREFIX


class SiteConfigError(ValueError):
    """Raised when the site description is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteSettings:
    """Settings shared by every page rendered for a site.

    Attributes
    ----------
    dev_host : str or None
        Host name that enables development-only output in addition to any
        ``dev.``-prefixed host.
    timezone : str
        IANA zone name dates are rendered in.
    relative_url_root : str
        Default path prefix applied to generated URLs.
    raise_errors : bool
        Propagate tag errors instead of rendering them inline.
    tag_prefix : str
        Namespace prefix recognised by the parser (``r`` for ``<r:title />``).
    output_dir : Path
        Directory the site builder writes rendered pages into.
    """

    dev_host: str | None = None
    timezone: str = "UTC"
    relative_url_root: str = ""
    raise_errors: bool = True
    tag_prefix: str = DEFAULT_TAG_PREFIX
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)

    @property
    def tzinfo(self) -> ZoneInfo:
        """Return the configured time zone."""
        return ZoneInfo(self.timezone)

    def is_dev_host(self, host: str | None) -> bool:
        """Return ``True`` when ``host`` should see development-only output."""
        if not host:
            return False
        if self.dev_host and host == self.dev_host:
            return True
        return host.startswith("dev.")


__all__ = ["SiteConfigError", "SiteSettings"]
