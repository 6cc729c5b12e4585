"""Radiant-style page tags for rendering content trees.

Templates embed prefixed tags such as ``<r:title />`` or
``<r:children:each>...</r:children:each>`` which are expanded against a tree of
pages loaded from a YAML site description.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from page_tags import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
