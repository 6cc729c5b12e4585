"""Publication workflow states for pages."""

from __future__ import annotations

import enum


class Status(enum.IntEnum):
    """Workflow state of a page; the value is the persisted status id."""

    DRAFT = 1
    REVIEWED = 50
    PUBLISHED = 100
    HIDDEN = 101

    @property
    def display_name(self) -> str:
        """Return the capitalised name shown to template authors."""
        return self.name.capitalize()

    @classmethod
    def lookup(cls, name: str | None) -> Status | None:
        """Return the status called ``name`` (case-insensitive) or ``None``.

        >>> Status.lookup("Published")
        <Status.PUBLISHED: 100>
        >>> Status.lookup("all") is None
        True
        """
        if not name:
            return None
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return None


__all__ = ["Status"]
