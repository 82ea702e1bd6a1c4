"""Dataclasses describing registered documentation pages."""

from __future__ import annotations

import dataclasses as dc
import re

_SEGMENT = r"[A-Za-z0-9_][A-Za-z0-9_.-]*"
IDENTIFIER_PATTERN = re.compile(rf"^{_SEGMENT}(?:/{_SEGMENT})*\Z")


def is_valid_identifier(value: object) -> bool:
    """Return True when ``value`` is a non-empty, path-like page identifier.

    Segments are separated by ``/`` and may not start with a dot, so relative
    segments, empty segments and leading or trailing slashes are rejected.
    """
    return isinstance(value, str) and IDENTIFIER_PATTERN.match(value) is not None


@dc.dataclass(frozen=True, slots=True)
class ContentPage:
    """A documentation page known to the registry.

    Attributes
    ----------
    identifier : str
        Stable slug, unique within ``locale``.
    locale : str
        Locale partition the page belongs to.
    title : str
        Human-readable page title.
    parent_path : tuple[str, ...]
        Category identifiers from the root down to the page's parent; empty for
        top-level pages.
    sidebar_label : str or None
        Shorter label used in navigation, when the title is too long.
    sidebar_position : int or None
        Explicit ordering hint from front matter.
    description : str or None
        Summary used for metadata.
    source : str or None
        POSIX path of the Markdown source relative to the locale's docs root.
    links : tuple[str, ...]
        In-body link targets in document order.
    """

    identifier: str
    locale: str
    title: str
    parent_path: tuple[str, ...] = ()
    sidebar_label: str | None = None
    sidebar_position: int | None = None
    description: str | None = None
    source: str | None = None
    links: tuple[str, ...] = ()

    @property
    def nav_label(self) -> str:
        """Return the label navigation should display for this page."""
        return self.sidebar_label or self.title


__all__ = ["IDENTIFIER_PATTERN", "ContentPage", "is_valid_identifier"]
