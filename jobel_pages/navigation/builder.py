"""Build the navigation model from its declarative description.

Sidebar entries follow the Docusaurus ``sidebars.js`` shapes::

    - intro                                  # doc shorthand
    - {type: doc, id: why-jobel, label: Why}
    - category: Guides                       # or label: Guides
      collapsed: false
      items: [guides/quickstart, guides/docker-setup]
    - {type: link, href: https://example.com, label: Elsewhere}

Navbar and footer entries are flat: ``{label, to}`` for a docs route,
``{label, href}`` for an external URL, ``{label, doc}`` for an identifier and
``{type: docSidebar, sidebarId}`` for the first page of a sidebar.
"""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

from jobel_pages.config.helpers import _is_absolute_url, _optional_str
from jobel_pages.content.link_collector import CONTACT_PREFIXES
from jobel_pages.content.models import is_valid_identifier

from .models import (
    UNLABELED,
    ExternalRef,
    InternalRef,
    LinkGroup,
    MalformedTreeError,
    NavCategory,
    NavigationModel,
    NavLeaf,
    NavNode,
    NavPath,
)

if typ.TYPE_CHECKING:
    from jobel_pages.config import ButtonConfig, ContentSettings, SiteConfig

KIND_ALIASES: dict[str, str] = {
    "doc": "doc",
    "internal": "doc",
    "category": "category",
    "external": "external",
    "link": "external",
    "docsidebar": "sidebar",
    "sidebar": "sidebar",
}
LINK_KEYS = ("url", "href", "to", "id", "doc", "sidebarId")


def route_to_identifier(route: str, *, route_base: str, home_page: str) -> str | None:
    """Map a docs route such as ``/docs/guides/quickstart`` to an identifier.

    The bare route base maps to ``home_page``. Routes outside the base return
    ``None``.
    """
    path = urlsplit(route).path
    base = route_base.rstrip("/")
    if path.rstrip("/") == base:
        return home_page
    prefix = f"{base}/"
    if not path.startswith(prefix):
        return None
    return path[len(prefix) :].strip("/") or home_page


def _is_external_href(url: str) -> bool:
    """Return True for absolute web URLs and mailto:/tel: links."""
    return _is_absolute_url(url) or url.strip().lower().startswith(CONTACT_PREFIXES)


class NavigationBuilder:
    """Validate declarative navigation entries and build immutable nodes.

    Parameters
    ----------
    max_depth : int
        Deepest category nesting accepted; a top-level category sits at depth
        one.
    route_base : str
        Route prefix under which doc pages are served, e.g. ``/docs``.
    home_page : str
        Identifier the bare ``route_base`` points at.
    """

    def __init__(
        self, *, max_depth: int, route_base: str = "/docs", home_page: str = "intro"
    ) -> None:
        self.max_depth = max_depth
        self.route_base = route_base
        self.home_page = home_page

    @classmethod
    def from_settings(cls, content: ContentSettings, *, max_depth: int) -> typ.Self:
        """Create a builder using the routing values of ``content``."""
        return cls(
            max_depth=max_depth,
            route_base=content.route_base,
            home_page=content.home_page,
        )

    def build_sidebar(
        self, sidebar_id: str, entries: typ.Sequence[object]
    ) -> tuple[NavNode, ...]:
        """Build the top-level nodes of one sidebar."""
        path: NavPath = ("sidebar", sidebar_id)
        return self._build_nodes(entries, path=path, depth=0, open_ids=set())

    def build_link_group(
        self,
        entries: typ.Sequence[object],
        *,
        path: NavPath,
        label: str | None = None,
        sidebars: typ.Mapping[str, tuple[NavNode, ...]] | None = None,
    ) -> LinkGroup:
        """Build a flat link group; nested entries are rejected."""
        items = tuple(
            self._build_link(entry, path=path, sidebars=sidebars or {})
            for entry in entries
        )
        return LinkGroup(items=items, label=label)

    def build_button_group(
        self, buttons: typ.Sequence[ButtonConfig], *, path: NavPath, label: str
    ) -> LinkGroup:
        """Build a link group from homepage CTA buttons."""
        entries = [
            {"label": button.label, "to": button.to}
            if button.to
            else {"label": button.label, "href": button.href}
            for button in buttons
        ]
        return self.build_link_group(entries, path=path, label=label)

    def _build_nodes(
        self,
        entries: typ.Sequence[object],
        *,
        path: NavPath,
        depth: int,
        open_ids: set[int],
    ) -> tuple[NavNode, ...]:
        if id(entries) in open_ids:
            msg = "category contains itself"
            raise MalformedTreeError(msg, path)
        open_ids.add(id(entries))
        try:
            return tuple(
                self._build_node(entry, path=path, depth=depth, open_ids=open_ids)
                for entry in entries
            )
        finally:
            open_ids.discard(id(entries))

    def _build_node(
        self, entry: object, *, path: NavPath, depth: int, open_ids: set[int]
    ) -> NavNode:
        match entry:
            case str():
                return self._internal(entry, path=path)
            case dict():
                pass
            case _:
                msg = f"unsupported navigation entry {entry!r}"
                raise MalformedTreeError(msg, path)

        kind = self._entry_kind(entry, path=path)
        label = _optional_str(entry.get("label"))
        if kind != "category" and "items" in entry:
            msg = f"{kind} entry '{label or UNLABELED}' cannot carry nested items"
            raise MalformedTreeError(msg, path)
        match kind:
            case "doc":
                target = entry.get("id", entry.get("doc"))
                return self._internal(target, path=path, label=label)
            case "external":
                url = entry.get("href", entry.get("url"))
                return self._external(url, path=path, label=label)
            case "category":
                return self._category(entry, path=path, depth=depth, open_ids=open_ids)
            case _:
                msg = f"'{kind}' entries are only allowed in the navbar"
                raise MalformedTreeError(msg, path)

    def _category(
        self,
        entry: dict[str, typ.Any],
        *,
        path: NavPath,
        depth: int,
        open_ids: set[int],
    ) -> NavCategory:
        label = _optional_str(entry.get("label", entry.get("category")))
        present = [key for key in LINK_KEYS if key in entry]
        if present:
            msg = (
                f"category '{label or UNLABELED}' cannot carry a link target "
                f"({', '.join(present)})"
            )
            raise MalformedTreeError(msg, path)
        items = entry.get("items")
        if items is None:
            items = []
        if not isinstance(items, list):
            msg = f"category '{label or UNLABELED}' items must be a list"
            raise MalformedTreeError(msg, path)
        if not items and label is None:
            msg = "category has neither a label nor any items"
            raise MalformedTreeError(msg, path)
        if depth + 1 > self.max_depth:
            msg = (
                f"category '{label or UNLABELED}' is nested deeper than the "
                f"maximum depth of {self.max_depth}"
            )
            raise MalformedTreeError(msg, path)
        collapsed = entry.get("collapsed", True)
        if not isinstance(collapsed, bool):
            msg = f"category '{label or UNLABELED}' 'collapsed' must be a boolean"
            raise MalformedTreeError(msg, path)
        children = self._build_nodes(
            items,
            path=(*path, label or UNLABELED),
            depth=depth + 1,
            open_ids=open_ids,
        )
        return NavCategory(label=label, children=children, collapsed=collapsed)

    def _build_link(
        self,
        entry: object,
        *,
        path: NavPath,
        sidebars: typ.Mapping[str, tuple[NavNode, ...]],
    ) -> NavLeaf:
        if not isinstance(entry, dict):
            msg = f"link entries must be mappings, got {entry!r}"
            raise MalformedTreeError(msg, path)
        label = _optional_str(entry.get("label"))
        position = _optional_str(entry.get("position"))
        if "items" in entry:
            msg = f"link '{label or UNLABELED}' cannot carry nested items"
            raise MalformedTreeError(msg, path)
        kind = self._entry_kind(entry, path=path)
        targets = [key for key in ("to", "href", "url", "doc", "id") if key in entry]
        if kind != "sidebar" and len(targets) != 1:
            msg = f"link '{label or UNLABELED}' needs exactly one of to, href or doc"
            raise MalformedTreeError(msg, path)
        match kind:
            case "sidebar":
                target = self._first_sidebar_doc(entry, path=path, sidebars=sidebars)
                return InternalRef(target=target, label=label, position=position)
            case "external":
                url = entry.get("href", entry.get("url"))
                return self._external(url, path=path, label=label, position=position)
            case "doc" if "to" in entry:
                target = route_to_identifier(
                    str(entry["to"]),
                    route_base=self.route_base,
                    home_page=self.home_page,
                )
                if target is None:
                    msg = (
                        f"route {entry['to']!r} is outside the docs route "
                        f"'{self.route_base}'"
                    )
                    raise MalformedTreeError(msg, path)
                return self._internal(
                    target, path=path, label=label, position=position
                )
            case "doc":
                target = entry.get("doc", entry.get("id"))
                return self._internal(
                    target, path=path, label=label, position=position
                )
            case _:
                msg = f"'{kind}' entries are not allowed in link groups"
                raise MalformedTreeError(msg, path)

    def _first_sidebar_doc(
        self,
        entry: dict[str, typ.Any],
        *,
        path: NavPath,
        sidebars: typ.Mapping[str, tuple[NavNode, ...]],
    ) -> str:
        sidebar_id = _optional_str(entry.get("sidebarId", entry.get("sidebar")))
        if sidebar_id is None or sidebar_id not in sidebars:
            msg = f"unknown sidebar {sidebar_id!r}"
            raise MalformedTreeError(msg, path)
        model = NavigationModel(sidebars=sidebars)
        for _, leaf in model.sidebar_leaves(sidebar_id):
            if isinstance(leaf, InternalRef):
                return leaf.target
        msg = f"sidebar '{sidebar_id}' has no internal pages to link to"
        raise MalformedTreeError(msg, path)

    def _entry_kind(self, entry: dict[str, typ.Any], *, path: NavPath) -> str:
        declared = entry.get("kind", entry.get("type"))
        if declared is not None:
            kind = KIND_ALIASES.get(str(declared).lower())
            if kind is None:
                msg = f"unknown entry kind {declared!r}"
                raise MalformedTreeError(msg, path)
            return kind
        if "items" in entry or "category" in entry:
            return "category"
        if "href" in entry or "url" in entry:
            return "external"
        if "to" in entry or "id" in entry or "doc" in entry:
            return "doc"
        if "sidebarId" in entry:
            return "sidebar"
        msg = f"cannot tell what kind of entry {dict(entry)!r} is"
        raise MalformedTreeError(msg, path)

    def _internal(
        self,
        target: object,
        *,
        path: NavPath,
        label: str | None = None,
        position: str | None = None,
    ) -> InternalRef:
        if not is_valid_identifier(target):
            msg = f"invalid page identifier {target!r}"
            raise MalformedTreeError(msg, path)
        return InternalRef(
            target=typ.cast("str", target), label=label, position=position
        )

    def _external(
        self,
        url: object,
        *,
        path: NavPath,
        label: str | None = None,
        position: str | None = None,
    ) -> ExternalRef:
        if not isinstance(url, str) or not _is_external_href(url):
            msg = f"external link {url!r} must be an absolute URL or mailto:/tel:"
            raise MalformedTreeError(msg, path)
        return ExternalRef(url=url, label=label, position=position)


def build_navigation(config: SiteConfig) -> NavigationModel:
    """Build every navigation surface described by ``config``.

    Buttons of every homepage variant become ``page_links``, so a variant that
    is not selected for this build is still checked.

    Raises
    ------
    MalformedTreeError
        If any sidebar, navbar, footer or homepage link entry is structurally
        invalid.
    """
    nav_config = config.navigation
    builder = NavigationBuilder.from_settings(
        config.content, max_depth=nav_config.max_depth
    )
    sidebars = {
        sidebar_id: builder.build_sidebar(sidebar_id, entries)
        for sidebar_id, entries in nav_config.sidebars.items()
    }
    navbar = builder.build_link_group(
        nav_config.navbar.items,
        path=("navbar",),
        label=nav_config.navbar.title,
        sidebars=sidebars,
    )
    footer = tuple(
        _build_footer_group(builder, group, sidebars)
        for group in nav_config.footer.groups
    )
    page_links: dict[str, tuple[LinkGroup, ...]] = {}
    if config.homepage is not None:
        for name, variant in config.homepage.variants.items():
            page_links[name] = tuple(
                builder.build_button_group(
                    block.buttons, path=("homepage", name, block.kind), label=block.kind
                )
                for block in variant.blocks
                if getattr(block, "buttons", None)
            )
    return NavigationModel(
        sidebars=sidebars, navbar=navbar, footer=footer, page_links=page_links
    )


def _build_footer_group(
    builder: NavigationBuilder,
    group: object,
    sidebars: typ.Mapping[str, tuple[NavNode, ...]],
) -> LinkGroup:
    if not isinstance(group, dict):
        msg = f"footer groups must be mappings, got {group!r}"
        raise MalformedTreeError(msg, ("footer",))
    title = _optional_str(group.get("title"))
    items = group.get("items") or []
    path: NavPath = ("footer", title or UNLABELED)
    if not isinstance(items, list):
        msg = "footer group items must be a list"
        raise MalformedTreeError(msg, path)
    return builder.build_link_group(items, path=path, label=title, sidebars=sidebars)


__all__ = [
    "KIND_ALIASES",
    "NavigationBuilder",
    "build_navigation",
    "route_to_identifier",
]
