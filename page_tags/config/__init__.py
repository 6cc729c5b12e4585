"""Load and validate YAML site descriptions.

This subpackage parses a ``site.yaml`` file describing settings, authors,
layouts, snippets and the page tree, validates cross references, and produces
a :class:`~page_tags.models.Site` ready for rendering. The primary entry point
is :func:`load_site`.

Examples
--------
>>> from pathlib import Path
>>> from page_tags.config import load_site
>>> site = load_site(Path("site.yaml"))  # doctest: +SKIP
>>> site.find_by_url("/about/").title  # doctest: +SKIP
'About'
"""

from .loader import build_site, load_site
from .models import SiteConfigError, SiteSettings

__all__ = ["SiteConfigError", "SiteSettings", "build_site", "load_site"]
