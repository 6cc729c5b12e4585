"""HTML reference for the tags available to template authors.

Each tag's handler docstring is Markdown; :class:`TagReferenceBuilder` renders
it with :class:`~page_tags.markdown_renderer.HtmlContentRenderer` so usage
samples are highlighted with Pygments, then lays the entries out with the
``tag_reference.jinja`` template.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from page_tags._constants import DEFAULT_OUTPUT_DIR, DEFAULT_TAG_PREFIX
from page_tags.markdown_renderer import HtmlContentRenderer
from page_tags.tags import standard_tags

if typ.TYPE_CHECKING:
    from page_tags.tags import TagLibrary

DEFAULT_REFERENCE_OUTPUT = Path(DEFAULT_OUTPUT_DIR) / "tags.html"


class TagReferenceBuilder:
    """Render the tag reference page for a tag library."""

    def __init__(
        self,
        library: TagLibrary | None = None,
        *,
        output: Path = DEFAULT_REFERENCE_OUTPUT,
        tag_prefix: str = DEFAULT_TAG_PREFIX,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        library : TagLibrary, optional
            Tags to document; defaults to :func:`standard_tags`.
        output : Path, optional
            File the reference is written to.
        tag_prefix : str, optional
            Prefix shown in front of each tag name.
        templates_dir : Path, optional
            Directory containing ``tag_reference.jinja``. Defaults to the
            templates shipped with the package.
        """
        self.library = library or standard_tags()
        self.output = output
        self.tag_prefix = tag_prefix
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("tag_reference.jinja")
        self.renderer = HtmlContentRenderer()

    def entries(self) -> list[dict[str, typ.Any]]:
        """Return one entry per tag, sorted by name."""
        return [
            {
                "name": definition.name,
                "anchor": definition.name.replace(":", "-"),
                "description": Markup(self.renderer.markdown(definition.description)),
            }
            for definition in sorted(self.library, key=lambda item: item.name)
        ]

    def render(self) -> str:
        """Return the reference HTML."""
        html = self.template.render(
            tags=self.entries(),
            tag_prefix=self.tag_prefix,
            stylesheet=Markup(self.renderer.stylesheet),
            generated_at=dt.datetime.now(dt.UTC),
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self) -> Path:
        """Render and write the reference, returning the output path."""
        self.output.parent.mkdir(parents=True, exist_ok=True)
        self.output.write_text(self.render(), encoding="utf-8")
        return self.output


__all__ = ["TagReferenceBuilder"]
