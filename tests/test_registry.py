"""Unit tests for the locale-partitioned content registry.

These tests cover identifier uniqueness per locale, the non-error behaviour of
lookups that miss, and the insertion-ordered enumeration that sidebar
composition falls back on.

Usage
-----
Run ``pytest tests/test_registry.py -v``. No fixtures beyond pytest's
built-ins are required.
"""

from __future__ import annotations

import pytest

from jobel_pages.config import SiteConfigError
from jobel_pages.content import ContentPage, ContentRegistry, DuplicateIdentifierError


def test_duplicate_identifier_in_same_locale_is_rejected() -> None:
    """Registering the same identifier twice in one locale must fail."""
    registry = ContentRegistry()
    registry.register(ContentPage("intro", "en", "Intro"))
    with pytest.raises(DuplicateIdentifierError) as excinfo:
        registry.register(ContentPage("intro", "en", "Another intro"))
    assert excinfo.value.identifier == "intro"
    assert excinfo.value.locale == "en"
    assert isinstance(excinfo.value, SiteConfigError), (
        "duplicate identifiers should be a construction-time config error"
    )


def test_same_identifier_in_different_locales_is_allowed() -> None:
    """Identifiers are scoped per locale."""
    registry = ContentRegistry(
        [ContentPage("intro", "en", "Intro"), ContentPage("intro", "fr", "Intro FR")]
    )
    assert registry.lookup("intro", "en").title == "Intro"
    assert registry.lookup("intro", "fr").title == "Intro FR"
    assert len(registry) == 2
    assert registry.locales() == ("en", "fr")


def test_lookup_miss_returns_none() -> None:
    """Absence is a normal empty result, not a fault."""
    registry = ContentRegistry([ContentPage("intro", "en", "Intro")])
    assert registry.lookup("missing", "en") is None
    assert registry.lookup("intro", "de") is None
    assert ("intro", "en") in registry
    assert ("intro", "de") not in registry


def test_all_preserves_registration_order() -> None:
    """Enumeration follows insertion order rather than identifier order."""
    registry = ContentRegistry()
    for identifier in ("zebra", "alpha", "guides/middle"):
        registry.register(ContentPage(identifier, "en", identifier.title()))
    assert [page.identifier for page in registry.all("en")] == [
        "zebra",
        "alpha",
        "guides/middle",
    ]
    assert registry.all("fr") == ()


def test_find_by_source_is_scoped_to_locale() -> None:
    """Markdown source lookups never cross locales."""
    page = ContentPage(
        "guides/quickstart", "en", "Quickstart", source="guides/quickstart.md"
    )
    registry = ContentRegistry([page])
    assert registry.find_by_source("guides/quickstart.md", "en") is page
    assert registry.find_by_source("guides/quickstart.md", "fr") is None


def test_nav_label_prefers_sidebar_label() -> None:
    """Navigation uses the short sidebar label when one is set."""
    page = ContentPage("intro", "en", "Introduction", sidebar_label="Start")
    assert page.nav_label == "Start"
    assert ContentPage("intro", "en", "Introduction").nav_label == "Introduction"
