"""The request a page is being rendered for."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True, frozen=True)
class Request:
    """Host and mount point of the incoming request.

    Attributes
    ----------
    host : str
        Host name the page was requested on; selects dev-only output.
    relative_url_root : str
        Path prefix the site is mounted under (``""`` when served at ``/``).
    """

    host: str = "localhost"
    relative_url_root: str = ""

    def url_for(self, path: str) -> str:
        """Return ``path`` prefixed with the relative URL root.

        >>> Request(relative_url_root="/foo").url_for("/")
        '/foo/'
        >>> Request().url_for("/about/")
        '/about/'
        """
        root = self.relative_url_root.rstrip("/")
        if not root:
            return path
        return f"{root}/{path.lstrip('/')}"


__all__ = ["Request"]
