"""Tests for composing page models and writing site artifacts.

Usage
-----
Run ``pytest tests/test_composer.py -v``. The composer tests build a small site
in memory; ``test_repository_site_builds`` runs the full pipeline over the
repository's own ``config/site.yaml`` and ``docs/`` tree.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from jobel_pages.composer import BuildAbortedError, PageComposer
from jobel_pages.config import build_site_config
from jobel_pages.content import ContentPage, ContentRegistry
from jobel_pages.gate import Abort, Proceed
from jobel_pages.navigation import build_navigation
from jobel_pages.pipeline import validate_loaded, validate_site

if typ.TYPE_CHECKING:
    from jobel_pages.config import SiteConfig

REPO_ROOT = Path(__file__).resolve().parents[1]


def _site_config(**overrides: typ.Any) -> SiteConfig:
    payload: dict[str, typ.Any] = {
        "site": {
            "title": "Jobel",
            "tagline": "Docs",
            "url": "https://jobel.dev",
            "edit_url": "https://github.com/jobel-ai/site/edit/main/",
        },
        "announcement": {"id": "launch", "content": "<b>Launched</b>"},
        "i18n": {"default_locale": "en", "locales": ["en", "fr"]},
        "navigation": {
            "navbar": {
                "title": "Jobel",
                "items": [{"to": "/docs/intro", "label": "Docs"}],
            },
            "sidebars": {
                "docs": [
                    "intro",
                    {
                        "category": "Guides",
                        "items": ["guides/quickstart", "guides/docker-setup"],
                    },
                ]
            },
            "footer": {
                "copyright": "Copyright © {year} Jobel",
                "links": [
                    {"title": "Learn", "items": [{"label": "Start", "to": "/docs/"}]},
                    {
                        "title": "More",
                        "items": [{"label": "GitHub", "href": "https://github.com"}],
                    },
                ],
            },
        },
        "homepage": {
            "variants": {
                "home": {
                    "title": "Home",
                    "description": "Welcome to Jobel",
                    "blocks": [
                        {
                            "kind": "hero",
                            "title": "Meet Jobel",
                            "subtitle": "Agents that read the docs",
                            "buttons": [{"label": "Start", "to": "/docs/intro"}],
                        },
                        {
                            "kind": "cta",
                            "heading": "Ship it",
                            "text": "Go",
                            "buttons": [
                                {"label": "Star", "href": "https://github.com/jobel"}
                            ],
                        },
                    ],
                }
            }
        },
    }
    payload.update(overrides)
    return build_site_config(payload)


def _registry(*, include_docker: bool = True) -> ContentRegistry:
    pages = [
        ContentPage("intro", "en", "Introduction", source="intro.md"),
        ContentPage(
            "guides/quickstart",
            "en",
            "Quickstart",
            parent_path=("guides",),
            sidebar_label="Start here",
            source="guides/quickstart.md",
        ),
        ContentPage("community/roadmap", "en", "Roadmap"),
        ContentPage("intro", "fr", "Introduction FR", source="intro.md"),
        ContentPage("guides/quickstart", "fr", "Démarrage"),
        ContentPage("guides/docker-setup", "fr", "Docker FR"),
    ]
    if include_docker:
        pages.append(ContentPage("guides/docker-setup", "en", "Docker setup"))
    return ContentRegistry(pages)


def _composer(config: SiteConfig, registry: ContentRegistry) -> PageComposer:
    nav = build_navigation(config)
    site = validate_loaded(config, nav, registry)
    return PageComposer(config, nav, registry, site.decision)


def test_abort_decision_refuses_to_compose() -> None:
    """Nothing downstream runs on a site with broken navigation."""
    config = _site_config()
    nav = build_navigation(config)
    registry = _registry(include_docker=False)
    site = validate_loaded(config, nav, registry)

    assert isinstance(site.decision, Abort)
    with pytest.raises(BuildAbortedError, match="1 violations"):
        PageComposer(config, nav, registry, site.decision)


def test_unselected_homepage_variant_buttons_are_checked() -> None:
    """A broken button in a variant not picked for this build still aborts."""
    launch = {
        "title": "Launch",
        "description": "Launch page",
        "blocks": [
            {
                "kind": "cta",
                "heading": "Read on",
                "text": "Go",
                "buttons": [{"label": "Gone", "to": "/docs/guides/gone"}],
            }
        ],
    }
    homepage = {
        "variant": "home",
        "variants": {
            "home": {
                "title": "Home",
                "description": "Welcome to Jobel",
                "blocks": [{"kind": "cta", "heading": "Go", "text": "Go"}],
            },
            "launch": launch,
        },
    }
    config = _site_config(homepage=homepage)
    nav = build_navigation(config)

    site = validate_loaded(config, nav, _registry())

    assert isinstance(site.decision, Abort)
    assert [(v.locale, v.outcome.path) for v in site.decision.violations] == [
        ("en", ("homepage", "launch", "cta")),
        ("fr", ("homepage", "launch", "cta")),
    ]
    assert nav.page_links["home"] == ()


def test_docs_follow_sidebar_order() -> None:
    """Sidebar pages get breadcrumbs and neighbours; the rest are appended."""
    composer = _composer(_site_config(), _registry())

    docs = composer.compose_docs("en")

    assert [doc.page.identifier for doc in docs] == [
        "intro",
        "guides/quickstart",
        "guides/docker-setup",
        "community/roadmap",
    ]
    intro, quickstart, docker, roadmap = docs
    assert intro.previous is None
    assert intro.next is quickstart.page
    assert intro.breadcrumbs == ()
    assert quickstart.breadcrumbs == ("Guides",)
    assert quickstart.previous is intro.page
    assert quickstart.next is docker.page
    assert docker.next is None
    assert quickstart.route == "/docs/guides/quickstart"
    assert quickstart.edit_url == (
        "https://github.com/jobel-ai/site/edit/main/docs/guides/quickstart.md"
    )
    assert roadmap.sidebar_id is None
    assert roadmap.previous is None
    assert roadmap.edit_url is None


def test_routes_carry_locale_prefix_and_trailing_slash() -> None:
    config = _site_config()
    config.site.trailing_slash = True
    composer = _composer(config, _registry())
    assert composer.route_for("intro", "en") == "/docs/intro/"
    assert composer.route_for("intro", "fr") == "/fr/docs/intro/"


def test_downgraded_policy_skips_missing_pages() -> None:
    """With navigation failures downgraded, missing pages are left out."""
    config = _site_config(build={"policy": {"on_broken_links": "warn"}})
    composer = _composer(config, _registry(include_docker=False))

    docs = composer.compose_docs("en")

    assert [doc.page.identifier for doc in docs] == [
        "intro",
        "guides/quickstart",
        "community/roadmap",
    ]
    assert docs[1].next is None


def test_write_emits_manifests_and_homepage(tmp_path: Path) -> None:
    """Each locale gets a manifest; the homepage renders the selected variant."""
    composer = _composer(_site_config(), _registry())

    written = composer.write(tmp_path)

    assert written == [
        tmp_path / "site-manifest.json",
        tmp_path / "fr" / "site-manifest.json",
        tmp_path / "index.html",
    ]
    manifest = json.loads((tmp_path / "site-manifest.json").read_text("utf-8"))
    assert manifest["locale"] == "en"
    assert manifest["navbar"]["items"][0]["href"] == "/docs/intro"
    guides = manifest["sidebars"]["docs"][1]
    assert guides["type"] == "category"
    assert [item["label"] for item in guides["items"]] == [
        "Start here",
        "Docker setup",
    ]
    assert manifest["pages"][1]["breadcrumbs"] == ["Guides"]

    french = json.loads((tmp_path / "fr" / "site-manifest.json").read_text("utf-8"))
    assert french["pages"][0]["route"] == "/fr/docs/intro"
    assert french["pages"][0]["title"] == "Introduction FR"

    soup = BeautifulSoup((tmp_path / "index.html").read_text("utf-8"), "html.parser")
    assert soup.body is not None
    assert soup.body["data-variant"] == "home"
    assert [section["data-block"] for section in soup.select("[data-block]")] == [
        "hero",
        "cta",
    ]
    hrefs = [link["href"] for link in soup.select('[data-test="cta"]')]
    assert hrefs == ["/docs/intro", "https://github.com/jobel"]
    announcement = soup.select_one('[data-test="announcement"]')
    assert announcement is not None
    assert announcement.find("b") is not None, "announcement HTML is trusted markup"
    footer = soup.select_one('[data-test="footer"]')
    assert footer is not None
    footer_text = footer.get_text(" ", strip=True)
    assert "Copyright ©" in footer_text
    assert "{year}" not in footer_text


def test_repository_site_builds(tmp_path: Path) -> None:
    """The sample site validates cleanly and renders the enterprise homepage."""
    site = validate_site(REPO_ROOT / "config" / "site.yaml", root=REPO_ROOT)

    assert isinstance(site.decision, Proceed)
    assert site.decision.warnings == ()
    (report,) = site.reports
    assert report.unresolved_count() == 0
    assert report.resolved_count() > 0

    composer = PageComposer(site.config, site.nav, site.registry, site.decision)
    composer.write(tmp_path)
    soup = BeautifulSoup((tmp_path / "index.html").read_text("utf-8"), "html.parser")
    assert soup.body is not None
    assert soup.body["data-variant"] == "enterprise"
    assert len(soup.select("[data-block]")) == 6
