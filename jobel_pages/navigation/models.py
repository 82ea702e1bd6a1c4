"""Immutable navigation tree: sidebars, navbar, footer and page link groups."""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ

from jobel_pages.config.models import SiteConfigError

UNLABELED = "(unlabeled)"

NavPath = tuple[str, ...]


class MalformedTreeError(SiteConfigError):
    """Raised when a declared navigation tree contradicts itself structurally."""

    def __init__(self, message: str, path: NavPath = ()) -> None:
        self.path = path
        location = " > ".join(path)
        super().__init__(f"{location}: {message}" if location else message)


@dc.dataclass(frozen=True, slots=True)
class InternalRef:
    """Leaf pointing at a page identifier inside this site's registry."""

    target: str
    label: str | None = None
    position: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ExternalRef:
    """Leaf pointing at an absolute URL outside the site; never validated."""

    url: str
    label: str | None = None
    position: str | None = None


NavLeaf = InternalRef | ExternalRef


@dc.dataclass(frozen=True, slots=True)
class NavCategory:
    """Labelled, orderable group of child nodes.

    ``collapsed`` mirrors the Docusaurus default: categories start collapsed
    unless the config says otherwise.
    """

    label: str | None
    children: tuple[NavNode, ...] = ()
    collapsed: bool = True

    @property
    def display_label(self) -> str:
        return self.label or UNLABELED


NavNode = NavCategory | InternalRef | ExternalRef


@dc.dataclass(frozen=True, slots=True)
class LinkGroup:
    """Flat, optionally labelled list of leaves used by the navbar and footer."""

    items: tuple[NavLeaf, ...]
    label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class NavigationModel:
    """Every navigation surface of the site, fixed at build time.

    ``page_links`` maps each homepage variant name to its button groups.
    Both mappings are copied into read-only views on construction.
    """

    sidebars: typ.Mapping[str, tuple[NavNode, ...]]
    navbar: LinkGroup = LinkGroup(())
    footer: tuple[LinkGroup, ...] = ()
    page_links: typ.Mapping[str, tuple[LinkGroup, ...]] = dc.field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "sidebars", types.MappingProxyType(dict(self.sidebars))
        )
        object.__setattr__(
            self, "page_links", types.MappingProxyType(dict(self.page_links))
        )

    def walk(self) -> typ.Iterator[tuple[NavPath, NavNode]]:
        """Yield ``(path, node)`` pairs depth-first in pre-order.

        ``path`` names the containers of ``node``, not the node itself. Each
        call returns a fresh generator, so walking twice yields the same
        sequence.
        """
        for sidebar_id, nodes in self.sidebars.items():
            yield from _walk_nodes(("sidebar", sidebar_id), nodes)
        yield from _walk_group(("navbar",), self.navbar)
        for group in self.footer:
            yield from _walk_group(("footer", group.label or UNLABELED), group)
        for variant, groups in self.page_links.items():
            for group in groups:
                label = group.label or UNLABELED
                yield from _walk_group(("homepage", variant, label), group)

    def leaves(self) -> typ.Iterator[tuple[NavPath, NavLeaf]]:
        """Yield only the leaves of :meth:`walk`, in the same order."""
        for path, node in self.walk():
            if not isinstance(node, NavCategory):
                yield path, node

    def sidebar_leaves(
        self, sidebar_id: str
    ) -> typ.Iterator[tuple[NavPath, NavLeaf]]:
        """Yield the leaves of one sidebar in reading order."""
        nodes = self.sidebars[sidebar_id]
        for path, node in _walk_nodes(("sidebar", sidebar_id), nodes):
            if not isinstance(node, NavCategory):
                yield path, node


def _walk_nodes(
    path: NavPath, nodes: typ.Iterable[NavNode]
) -> typ.Iterator[tuple[NavPath, NavNode]]:
    for node in nodes:
        yield path, node
        if isinstance(node, NavCategory):
            yield from _walk_nodes((*path, node.display_label), node.children)


def _walk_group(
    path: NavPath, group: LinkGroup
) -> typ.Iterator[tuple[NavPath, NavNode]]:
    for item in group.items:
        yield path, item


__all__ = [
    "UNLABELED",
    "ExternalRef",
    "InternalRef",
    "LinkGroup",
    "MalformedTreeError",
    "NavCategory",
    "NavLeaf",
    "NavNode",
    "NavPath",
    "NavigationModel",
]
