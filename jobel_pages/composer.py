"""Assemble renderable page models from a validated site.

The composer is the downstream consumer of the build gate. Given a ``Proceed``
decision it trusts that every internal navigation reference resolves, works
out breadcrumbs and previous/next links from sidebar order, and writes:

* ``site-manifest.json`` per locale (the default locale at the output root,
  other locales under ``<locale>/``), describing navigation and doc pages for
  the theme layer;
* the homepage HTML rendered from the selected variant's content blocks.

Typical usage mirrors the ``pages build`` command:

>>> composer = PageComposer(config, nav, registry, decision)  # doctest: +SKIP
>>> composer.write()  # doctest: +SKIP
[PosixPath('public/site-manifest.json'), PosixPath('public/index.html')]
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import json
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import MANIFEST_FILENAME
from .gate import Abort
from .navigation.models import ExternalRef, InternalRef, NavCategory

if typ.TYPE_CHECKING:
    from .config import HomepageVariant, SiteConfig
    from .content.models import ContentPage
    from .content.registry import ContentRegistry
    from .gate import Decision
    from .navigation.models import LinkGroup, NavigationModel, NavLeaf, NavNode


class BuildAbortedError(RuntimeError):
    """Raised when the composer is handed an ``Abort`` decision."""


@dc.dataclass(frozen=True, slots=True)
class ComposedDocPage:
    """A documentation page with its navigation context resolved."""

    page: ContentPage
    route: str
    sidebar_id: str | None = None
    breadcrumbs: tuple[str, ...] = ()
    previous: ContentPage | None = None
    next: ContentPage | None = None
    edit_url: str | None = None


class PageComposer:
    """Build page models and artifacts from a validated navigation model."""

    def __init__(
        self,
        config: SiteConfig,
        nav: NavigationModel,
        registry: ContentRegistry,
        decision: Decision,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the composer and its Jinja environment.

        Raises
        ------
        BuildAbortedError
            If ``decision`` is an ``Abort``; nothing downstream may run on an
            inconsistent site.
        """
        if isinstance(decision, Abort):
            count = len(decision.violations)
            msg = f"Cannot compose pages: the build was aborted ({count} violations)."
            raise BuildAbortedError(msg)
        self.config = config
        self.nav = nav
        self.registry = registry
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def route_for(self, identifier: str, locale: str) -> str:
        """Return the site-absolute route of a doc page."""
        prefix = self.config.site.base_url.rstrip("/")
        if locale != self.config.i18n.default_locale:
            prefix = f"{prefix}/{locale}"
        base = self.config.content.route_base.strip("/")
        route = f"{prefix}/{base}/{identifier}" if base else f"{prefix}/{identifier}"
        if self.config.site.trailing_slash:
            route = f"{route}/"
        return route

    def compose_docs(self, locale: str) -> list[ComposedDocPage]:
        """Compose every page of ``locale``, sidebar pages first in sidebar order."""
        composed: dict[str, ComposedDocPage] = {}
        for sidebar_id in self.nav.sidebars:
            ordered = self._sidebar_pages(sidebar_id, locale)
            for index, (page, breadcrumbs) in enumerate(ordered):
                if page.identifier in composed:
                    continue
                composed[page.identifier] = ComposedDocPage(
                    page=page,
                    route=self.route_for(page.identifier, locale),
                    sidebar_id=sidebar_id,
                    breadcrumbs=breadcrumbs,
                    previous=ordered[index - 1][0] if index > 0 else None,
                    next=ordered[index + 1][0] if index + 1 < len(ordered) else None,
                    edit_url=self._edit_url(page),
                )
        for page in self.registry.all(locale):
            if page.identifier not in composed:
                composed[page.identifier] = ComposedDocPage(
                    page=page,
                    route=self.route_for(page.identifier, locale),
                    edit_url=self._edit_url(page),
                )
        return list(composed.values())

    def compose_homepage(self) -> HomepageVariant | None:
        """Return the homepage variant selected for this build, if any."""
        if self.config.homepage is None:
            return None
        return self.config.homepage.selected

    def manifest(self, locale: str) -> dict[str, typ.Any]:
        """Return the JSON-ready site description for ``locale``."""
        site = self.config.site
        announcement = self.config.announcement
        return {
            "locale": locale,
            "site": {
                "title": site.title,
                "tagline": site.tagline,
                "url": site.url,
                "base_url": site.base_url,
                "favicon": site.favicon,
                "social_card": site.social_card,
                "theme": dc.asdict(self.config.theme),
                "announcement": dc.asdict(announcement) if announcement else None,
            },
            "sidebars": {
                sidebar_id: [self._node_dict(node, locale) for node in nodes]
                for sidebar_id, nodes in self.nav.sidebars.items()
            },
            "navbar": self._group_dict(self.nav.navbar, locale),
            "footer": [self._group_dict(group, locale) for group in self.nav.footer],
            "pages": [self._page_dict(doc) for doc in self.compose_docs(locale)],
        }

    def write(self, output_dir: Path | None = None) -> list[Path]:
        """Write manifests for every locale and the homepage; return the paths."""
        out_dir = output_dir or self.config.build.output_dir
        written: list[Path] = []
        for locale in self.config.i18n.locales:
            locale_dir = out_dir
            if locale != self.config.i18n.default_locale:
                locale_dir = out_dir / locale
            locale_dir.mkdir(parents=True, exist_ok=True)
            path = locale_dir / MANIFEST_FILENAME
            payload = json.dumps(self.manifest(locale), indent=2, ensure_ascii=False)
            path.write_text(f"{payload}\n", encoding="utf-8")
            written.append(path)
        homepage_path = self.render_homepage(out_dir)
        if homepage_path is not None:
            written.append(homepage_path)
        return written

    def render_homepage(self, output_dir: Path) -> Path | None:
        """Render the selected homepage variant; return None without a homepage."""
        variant = self.compose_homepage()
        if variant is None or self.config.homepage is None:
            return None
        locale = self.config.i18n.default_locale
        generated_at = dt.datetime.now(dt.UTC)
        footer = self.config.navigation.footer
        context = {
            "site": self.config.site,
            "theme": self.config.theme,
            "announcement": self.config.announcement,
            "navbar_title": self.config.navigation.navbar.title,
            "navbar": self._group_dict(self.nav.navbar, locale),
            "footer_groups": [
                self._group_dict(group, locale) for group in self.nav.footer
            ],
            "footer_style": footer.style,
            "copyright": footer.copyright.replace("{year}", str(generated_at.year)),
            "variant": variant,
            "base_url": self.config.site.base_url.rstrip("/"),
            "generated_at": generated_at,
        }
        html = self.env.get_template("home_page.jinja").render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path = output_dir / self.config.homepage.output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def _sidebar_pages(
        self, sidebar_id: str, locale: str
    ) -> list[tuple[ContentPage, tuple[str, ...]]]:
        ordered: list[tuple[ContentPage, tuple[str, ...]]] = []
        seen: set[str] = set()
        for path, leaf in self.nav.sidebar_leaves(sidebar_id):
            if not isinstance(leaf, InternalRef) or leaf.target in seen:
                continue
            page = self.registry.lookup(leaf.target, locale)
            if page is None:
                # Only reachable when the policy downgrades navigation failures.
                continue
            seen.add(leaf.target)
            ordered.append((page, path[2:]))
        return ordered

    def _edit_url(self, page: ContentPage) -> str | None:
        base = self.config.site.edit_url
        if not base or page.source is None:
            return None
        content = self.config.content
        if page.locale == self.config.i18n.default_locale:
            docs_path = content.docs_dir.as_posix()
        else:
            docs_path = (content.i18n_dir / page.locale / "docs").as_posix()
        return f"{base.rstrip('/')}/{docs_path}/{page.source}"

    def _leaf_dict(self, leaf: NavLeaf, locale: str) -> dict[str, typ.Any]:
        match leaf:
            case ExternalRef(url=url, label=label, position=position):
                return {
                    "type": "link",
                    "label": label or url,
                    "href": url,
                    "external": True,
                    "position": position,
                }
            case InternalRef(target=target, label=label, position=position):
                page = self.registry.lookup(target, locale)
                return {
                    "type": "doc",
                    "id": target,
                    "label": label or (page.nav_label if page else target),
                    "href": self.route_for(target, locale),
                    "external": False,
                    "position": position,
                }

    def _node_dict(self, node: NavNode, locale: str) -> dict[str, typ.Any]:
        if isinstance(node, NavCategory):
            return {
                "type": "category",
                "label": node.display_label,
                "collapsed": node.collapsed,
                "items": [self._node_dict(child, locale) for child in node.children],
            }
        return self._leaf_dict(node, locale)

    def _group_dict(self, group: LinkGroup, locale: str) -> dict[str, typ.Any]:
        return {
            "title": group.label,
            "items": [self._leaf_dict(item, locale) for item in group.items],
        }

    def _page_dict(self, doc: ComposedDocPage) -> dict[str, typ.Any]:
        return {
            "id": doc.page.identifier,
            "title": doc.page.title,
            "description": doc.page.description,
            "route": doc.route,
            "sidebar": doc.sidebar_id,
            "breadcrumbs": list(doc.breadcrumbs),
            "previous": doc.previous.identifier if doc.previous else None,
            "next": doc.next.identifier if doc.next else None,
            "edit_url": doc.edit_url,
        }


__all__ = ["BuildAbortedError", "ComposedDocPage", "PageComposer"]
