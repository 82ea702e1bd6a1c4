"""In-memory registry of documentation pages, partitioned by locale."""

from __future__ import annotations

import typing as typ

from jobel_pages.config.models import SiteConfigError

if typ.TYPE_CHECKING:
    from .models import ContentPage


class DuplicateIdentifierError(SiteConfigError):
    """Raised when two pages claim the same identifier within one locale."""

    def __init__(self, identifier: str, locale: str) -> None:
        self.identifier = identifier
        self.locale = locale
        super().__init__(
            f"Duplicate page identifier '{identifier}' in locale '{locale}'."
        )


class ContentRegistry:
    """Append-only collection of :class:`ContentPage` objects.

    Pages are keyed by ``(identifier, locale)``. Enumeration preserves
    registration order so callers can fall back to source order when no
    explicit ordering is configured.
    """

    def __init__(self, pages: typ.Iterable[ContentPage] = ()) -> None:
        self._by_locale: dict[str, dict[str, ContentPage]] = {}
        self._sources: dict[tuple[str, str], ContentPage] = {}
        for page in pages:
            self.register(page)

    def register(self, page: ContentPage) -> None:
        """Add ``page``; raise DuplicateIdentifierError on an identifier clash."""
        pages = self._by_locale.setdefault(page.locale, {})
        if page.identifier in pages:
            raise DuplicateIdentifierError(page.identifier, page.locale)
        pages[page.identifier] = page
        if page.source is not None:
            self._sources.setdefault((page.locale, page.source), page)

    def lookup(self, identifier: str, locale: str) -> ContentPage | None:
        """Return the page registered under ``identifier`` in ``locale``."""
        return self._by_locale.get(locale, {}).get(identifier)

    def find_by_source(self, source: str, locale: str) -> ContentPage | None:
        """Return the page built from the Markdown file ``source`` in ``locale``."""
        return self._sources.get((locale, source))

    def all(self, locale: str) -> tuple[ContentPage, ...]:
        """Return every page in ``locale`` in registration order."""
        return tuple(self._by_locale.get(locale, {}).values())

    def locales(self) -> tuple[str, ...]:
        """Return the locales that have at least one page."""
        return tuple(self._by_locale)

    def __len__(self) -> int:
        return sum(len(pages) for pages in self._by_locale.values())

    def __contains__(self, key: object) -> bool:
        match key:
            case (str() as identifier, str() as locale):
                return self.lookup(identifier, locale) is not None
            case _:
                return False


__all__ = ["ContentRegistry", "DuplicateIdentifierError"]
