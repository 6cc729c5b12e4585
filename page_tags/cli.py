"""Cyclopts CLI entrypoint for rendering page-tag sites.

The ``pages`` console script renders a single page of a YAML site description
to stdout, exports the whole site as static HTML, or writes the HTML reference
for the standard tag library. Every option can also be supplied through an
``INPUT_``-prefixed environment variable, which keeps CI usage terse.

Examples
--------
Export the site described by ``site.yaml`` into ``public/``:

>>> from page_tags.cli import main
>>> main()  # doctest: +SKIP

Render one page as seen from the development host:

>>> from page_tags.cli import app
>>> app(
...     ["render", "--site", "site.yaml", "--url", "/about/", "--host", "dev.example.com"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site
from .models import Request
from .rendering import PageRenderer, SiteBuilder, TagReferenceBuilder
from .rendering.reference import DEFAULT_REFERENCE_OUTPUT

DEFAULT_SITE = Path("site.yaml")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render one page to stdout or export every page to disk.")
def render(
    *,
    site: typ.Annotated[
        Path, Parameter(help="Path to the site description", env_var="INPUT_SITE")
    ] = DEFAULT_SITE,
    url: typ.Annotated[
        str | None,
        Parameter(help="Render only the page at this URL", env_var="INPUT_URL"),
    ] = None,
    host: typ.Annotated[
        str,
        Parameter(help="Host name the pages are requested on", env_var="INPUT_HOST"),
    ] = "localhost",
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Render pages of the site described by ``site``.

    Parameters
    ----------
    site : Path, optional
        YAML site description (overridable via ``INPUT_SITE``).
    url : str or None, optional
        When given, only the page at this URL is rendered and printed.
    host : str, optional
        Request host; the configured development host enables dev-only output.
    output_dir : Path or None, optional
        Directory for the exported site; defaults to the site's ``output_dir``
        setting. Ignored when ``url`` is given.

    Raises
    ------
    ValueError
        If ``url`` does not resolve to a page, or ``output_dir`` is combined
        with ``url``.
    """
    loaded = load_site(site)
    request = Request(host=host, relative_url_root=loaded.settings.relative_url_root)

    if url is not None:
        if output_dir is not None:
            msg = "Cannot combine --url with --output-dir; single pages print to stdout."
            raise ValueError(msg)
        page = loaded.find_by_url(url)
        if page is None:
            msg = f"No page found at '{url}'."
            raise ValueError(msg)
        print(PageRenderer(loaded).render(page, request), end="")
        return

    for path in SiteBuilder(loaded, output_dir=output_dir, request=request).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Write the HTML reference for the standard tags.")
def tags(
    *,
    output: typ.Annotated[
        Path,
        Parameter(help="Destination HTML file", env_var="INPUT_OUTPUT"),
    ] = DEFAULT_REFERENCE_OUTPUT,
) -> None:
    """Render the tag reference to ``output`` and report the written path."""
    path = TagReferenceBuilder(output=output).run()
    print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
