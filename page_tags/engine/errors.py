"""Exceptions raised while parsing and expanding page tags."""

from __future__ import annotations


class TemplateError(ValueError):
    """Base class for every error raised by the tag engine."""


class TagError(TemplateError):
    """Raised when a tag is used with missing or malformed attributes.

    The message is shown to template authors, so it names the tag and the
    offending attribute rather than internal details.
    """


class UndefinedTagError(TemplateError):
    """Raised when a template references a tag that has no definition."""

    def __init__(self, tag_name: str) -> None:
        self.tag_name = tag_name
        super().__init__(f"undefined tag `{tag_name}'")


class MissingEndTagError(TemplateError):
    """Raised when a double tag is opened but never closed."""

    def __init__(self, tag_name: str) -> None:
        self.tag_name = tag_name
        super().__init__(f"end tag not found for start tag `{tag_name}'")


class WrongEndTagError(TemplateError):
    """Raised when an end tag does not close the innermost open tag."""

    def __init__(self, found: str, expected: str | None) -> None:
        self.found = found
        self.expected = expected
        if expected is None:
            msg = f"end tag `{found}' found without a start tag"
        else:
            msg = f"wrong end tag `{found}' found for start tag `{expected}'"
        super().__init__(msg)


__all__ = [
    "MissingEndTagError",
    "TagError",
    "TemplateError",
    "UndefinedTagError",
    "WrongEndTagError",
]
