"""Markdown rendering with syntax-highlighted code samples.

:class:`HtmlContentRenderer` backs both the ``Markdown`` text filter applied to
page parts, snippets and author bios, and the tag reference, where each tag's
usage example is highlighted with Pygments through the ``codehilite``
extension.

Example
-------
>>> from page_tags.markdown_renderer import HtmlContentRenderer
>>> HtmlContentRenderer().markdown("**bold** move")
'<p><strong>bold</strong> move</p>'
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
DEFAULT_EXTENSIONS: tuple[str, ...] = ("fenced_code", "codehilite", "tables", "sane_lists")


def fenced_languages(source: str) -> list[str]:
    """Return the language label of each fenced block in ``source``.

    Unlabelled fences count as ``text``.

    >>> fenced_languages("```html\\n<p/>\\n```\\n\\n```\\nplain\\n```")
    ['html', 'text']
    """
    return [match.group(1) or "text" for match in CODE_BLOCK_PATTERN.finditer(source)]


class HtmlContentRenderer:
    """Convert Markdown to HTML with highlighted, language-tagged code blocks."""

    def __init__(
        self,
        pygments_style: str = "default",
        extensions: typ.Sequence[Extension | str] = DEFAULT_EXTENSIONS,
    ) -> None:
        """Initialize a renderer with a Pygments style and Markdown extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"default"``.
        extensions : sequence of Extension or str, optional
            Markdown extensions enabled for every conversion.
        """
        self.pygments_style = pygments_style
        self._extensions = list(extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted code blocks."""
        formatter = HtmlFormatter(style=self.pygments_style, cssclass="codehilite")
        return formatter.get_style_defs(".codehilite")

    def _converter(self) -> Markdown:
        return Markdown(
            extensions=self._extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )

    def markdown(self, text: str) -> str:
        """Render ``text`` to HTML; blank input renders as an empty string."""
        if not text.strip():
            return ""
        html = self._converter().convert(text)
        return label_code_blocks(html, fenced_languages(text))


def label_code_blocks(html: str, languages: typ.Sequence[str]) -> str:
    """Add ``data-language`` to the highlighted blocks of ``html``, in order.

    >>> label_code_blocks('<div class="codehilite"><pre>x</pre></div>', ["html"])
    '<div class="codehilite" data-language="html"><pre>x</pre></div>'
    """
    if not languages:
        return html
    remaining = iter(languages)

    def _repl(match: re.Match[str]) -> str:
        language = escape(next(remaining, "text"), quote=True)
        return f'<div class="codehilite" data-language="{language}">'

    return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer", "fenced_languages", "label_code_blocks"]
