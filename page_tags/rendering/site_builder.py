"""Static export of every servable page of a site.

:class:`SiteBuilder` renders each page that a request could reach (published,
non-virtual, and with a published chain of ancestors) to
``<output_dir>/<url>/index.html`` and records the mapping from URL to file in a
JSON manifest next to the output.

>>> from pathlib import Path
>>> from page_tags.config import load_site
>>> from page_tags.rendering import SiteBuilder
>>> written = SiteBuilder(load_site(Path("site.yaml"))).run()  # doctest: +SKIP
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

from page_tags._constants import MANIFEST_FILENAME

from .renderer import PageRenderer

if typ.TYPE_CHECKING:
    from page_tags.models import Page, Request, Site
    from page_tags.tags import TagLibrary


class SiteBuilder:
    """Write the rendered pages of a site to disk."""

    def __init__(
        self,
        site: Site,
        *,
        output_dir: Path | None = None,
        request: Request | None = None,
        library: TagLibrary | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        site : Site
            Site whose pages are exported.
        output_dir : Path, optional
            Destination directory. Defaults to ``site.settings.output_dir``.
        request : Request, optional
            Request every page is rendered for; controls the relative URL
            root and development-only output.
        library : TagLibrary, optional
            Tags available to templates.
        """
        self.site = site
        self.output_dir = output_dir or site.settings.output_dir
        self.request = request
        self.renderer = PageRenderer(site, library=library)

    def servable_pages(self) -> list[Page]:
        """Return the pages that resolve to themselves by URL."""
        return [
            page
            for page in self.site.all_pages()
            if not page.virtual and self.site.find_by_url(page.url) is page
        ]

    def output_path(self, page: Page) -> Path:
        """Return the file ``page`` is written to."""
        relative = page.url.strip("/")
        directory = self.output_dir / relative if relative else self.output_dir
        return directory / "index.html"

    def run(self) -> list[Path]:
        """Render every servable page and the manifest, returning the written paths.

        Raises
        ------
        TemplateError
            If a page fails to render while the site raises errors.
        OSError
            If the output cannot be written.
        """
        written: list[Path] = []
        entries: dict[str, str] = {}
        for page in self.servable_pages():
            path = self.output_path(page)
            path.parent.mkdir(parents=True, exist_ok=True)
            html = self.renderer.render(page, self.request)
            if not html.endswith("\n"):
                html += "\n"
            path.write_text(html, encoding="utf-8")
            entries[page.url] = path.relative_to(self.output_dir).as_posix()
            written.append(path)
        written.append(self._write_manifest(entries))
        return written

    def _write_manifest(self, entries: dict[str, str]) -> Path:
        """Persist the ``url -> file`` mapping for the exported pages."""
        path = self.output_dir / MANIFEST_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"pages": entries}, indent=2), encoding="utf-8")
        return path


__all__ = ["SiteBuilder"]
