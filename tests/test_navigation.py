"""Unit tests for the navigation builders and tree walk.

The builders turn Docusaurus-style declarative entries into immutable nodes and
reject structurally contradictory trees with ``MalformedTreeError`` before any
resolution runs. These tests pin the depth boundary, each malformed shape, and
the pre-order, restartable ``walk``.

Usage
-----
Run ``pytest tests/test_navigation.py -v``.
"""

from __future__ import annotations

import typing as typ

import pytest

from jobel_pages.navigation import (
    ExternalRef,
    InternalRef,
    LinkGroup,
    MalformedTreeError,
    NavCategory,
    NavigationBuilder,
    NavigationModel,
    route_to_identifier,
)


def _builder(max_depth: int = 5) -> NavigationBuilder:
    return NavigationBuilder(max_depth=max_depth, route_base="/docs", home_page="intro")


def _nested(depth: int) -> list[typ.Any]:
    """Return a sidebar with ``depth`` levels of categories around one doc."""
    entry: typ.Any = "intro"
    for level in range(depth, 0, -1):
        entry = {"category": f"Level {level}", "items": [entry]}
    return [entry]


def test_category_at_maximum_depth_is_accepted() -> None:
    """Nesting exactly ``max_depth`` categories deep is allowed."""
    nodes = _builder(max_depth=2).build_sidebar("docs", _nested(2))
    outer = nodes[0]
    assert isinstance(outer, NavCategory)
    inner = outer.children[0]
    assert isinstance(inner, NavCategory)
    assert inner.children == (InternalRef("intro"),)


def test_category_beyond_maximum_depth_is_rejected() -> None:
    """One level past ``max_depth`` fails construction."""
    with pytest.raises(MalformedTreeError, match="maximum depth of 2") as excinfo:
        _builder(max_depth=2).build_sidebar("docs", _nested(3))
    assert excinfo.value.path == ("sidebar", "docs", "Level 1", "Level 2")


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ({"type": "category", "items": []}, "neither a label nor any items"),
        ({"type": "doc", "id": "intro", "items": ["a"]}, "cannot carry nested items"),
        (
            {"type": "link", "href": "https://example.com", "items": []},
            "cannot carry nested items",
        ),
        (
            {"label": "Guides", "href": "https://example.com", "items": ["a"]},
            "cannot carry a link target",
        ),
        ({"type": "widget", "id": "intro"}, "unknown entry kind"),
        ({"type": "doc", "id": "../escape"}, "invalid page identifier"),
        ("", "invalid page identifier"),
        ({"type": "link", "href": "/relative"}, "must be an absolute URL"),
        (42, "unsupported navigation entry"),
        ({"label": "Mystery"}, "cannot tell what kind"),
    ],
)
def test_malformed_sidebar_entries(entry: object, message: str) -> None:
    """Each structural contradiction is reported as MalformedTreeError."""
    with pytest.raises(MalformedTreeError, match=message):
        _builder().build_sidebar("docs", [entry])


def test_labelled_empty_category_is_accepted() -> None:
    """A category with a label but no items is a placeholder, not an error."""
    nodes = _builder().build_sidebar("docs", [{"category": "Soon", "items": []}])
    assert nodes == (NavCategory(label="Soon", children=()),)


def test_category_that_contains_itself_is_rejected() -> None:
    """Recursive structures (e.g. YAML aliases) never build a graph."""
    items: list[typ.Any] = ["intro"]
    items.append({"category": "Loop", "items": items})
    with pytest.raises(MalformedTreeError, match="contains itself"):
        _builder(max_depth=10).build_sidebar("docs", items)


def test_collapsed_flag_defaults_to_true() -> None:
    """Categories start collapsed unless configured otherwise."""
    nodes = _builder().build_sidebar(
        "docs",
        [
            {"category": "A", "items": ["a"]},
            {"category": "B", "collapsed": False, "items": ["b"]},
        ],
    )
    assert [node.collapsed for node in nodes] == [True, False]


def test_link_group_entries() -> None:
    """Navbar entries map routes, URLs, docs and sidebars onto leaves."""
    builder = _builder()
    sidebar = builder.build_sidebar("docs", [{"category": "G", "items": ["guides/a"]}])
    sidebars = {"docs": sidebar}
    group = builder.build_link_group(
        [
            {"type": "docSidebar", "sidebarId": "docs", "label": "Docs"},
            {"to": "/docs/api/overview", "label": "API", "position": "left"},
            {"to": "/docs/", "label": "Start"},
            {"href": "https://github.com/jobel-ai", "label": "GitHub"},
            {"doc": "community/roadmap", "label": "Roadmap"},
        ],
        path=("navbar",),
        sidebars=sidebars,
    )
    assert group.items == (
        InternalRef("guides/a", "Docs"),
        InternalRef("api/overview", "API", "left"),
        InternalRef("intro", "Start"),
        ExternalRef("https://github.com/jobel-ai", "GitHub"),
        InternalRef("community/roadmap", "Roadmap"),
    )


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ({"label": "Nested", "items": [{"to": "/docs/a"}]}, "nested items"),
        ({"label": "Blog", "to": "/blog"}, "outside the docs route"),
        ({"type": "docSidebar", "sidebarId": "nope"}, "unknown sidebar"),
        ({"label": "Both", "to": "/docs/a", "href": "https://x.dev"}, "exactly one"),
        ("intro", "must be mappings"),
    ],
)
def test_malformed_link_group_entries(entry: object, message: str) -> None:
    """Link groups are flat and every entry names exactly one target."""
    with pytest.raises(MalformedTreeError, match=message):
        _builder().build_link_group([entry], path=("navbar",), sidebars={})


@pytest.mark.parametrize(
    "href",
    [
        "mailto:hello@jobel.dev",
        "MAILTO:hello@jobel.dev?subject=Docs",
        "tel:+15550100",
        "https://github.com/jobel-ai",
    ],
)
def test_contact_links_are_external(href: str) -> None:
    """Footer-style contact links are accepted like any absolute URL."""
    group = _builder().build_link_group(
        [{"href": href, "label": "Contact"}], path=("footer", "Community")
    )
    assert group.items == (ExternalRef(href, "Contact"),)


@pytest.mark.parametrize("href", ["/relative", "example.com/a", "mailto", "https://"])
def test_non_absolute_hrefs_are_rejected(href: str) -> None:
    with pytest.raises(MalformedTreeError, match="must be an absolute URL"):
        _builder().build_link_group([{"href": href}], path=("footer", "Community"))


def test_navigation_model_mappings_are_read_only() -> None:
    """Sidebars and page links cannot be changed after construction."""
    sidebars = {"docs": (InternalRef("intro"),)}
    nav = NavigationModel(
        sidebars=sidebars,
        page_links={"home": (LinkGroup((InternalRef("intro"),), "cta"),)},
    )
    sidebars["injected"] = (InternalRef("other"),)

    assert list(nav.sidebars) == ["docs"]
    with pytest.raises(TypeError):
        nav.sidebars["injected"] = ()  # type: ignore[index]
    with pytest.raises(TypeError):
        nav.page_links["launch"] = ()  # type: ignore[index]
    assert [path for path, _ in nav.leaves()] == [
        ("sidebar", "docs"),
        ("homepage", "home", "cta"),
    ]


def test_walk_is_preorder_and_restartable() -> None:
    """Walking yields containers before children, identically every time."""
    builder = _builder()
    nav = NavigationModel(
        sidebars={
            "docs": builder.build_sidebar(
                "docs",
                [
                    "intro",
                    {
                        "category": "Guides",
                        "items": [
                            "guides/quickstart",
                            {"category": "Deep", "items": ["guides/deep"]},
                        ],
                    },
                ],
            )
        },
        navbar=builder.build_link_group(
            [{"href": "https://example.com", "label": "Ext"}], path=("navbar",)
        ),
        footer=(
            builder.build_link_group(
                [{"to": "/docs/intro", "label": "Intro"}],
                path=("footer", "Learn"),
                label="Learn",
            ),
        ),
    )

    def _describe(node: object) -> str:
        match node:
            case NavCategory(label=label):
                return f"category:{label}"
            case InternalRef(target=target):
                return f"doc:{target}"
            case ExternalRef(url=url):
                return f"link:{url}"
        return "?"

    first = [(path, _describe(node)) for path, node in nav.walk()]
    assert first == [
        (("sidebar", "docs"), "doc:intro"),
        (("sidebar", "docs"), "category:Guides"),
        (("sidebar", "docs", "Guides"), "doc:guides/quickstart"),
        (("sidebar", "docs", "Guides"), "category:Deep"),
        (("sidebar", "docs", "Guides", "Deep"), "doc:guides/deep"),
        (("navbar",), "link:https://example.com"),
        (("footer", "Learn"), "doc:intro"),
    ]
    second = [(path, _describe(node)) for path, node in nav.walk()]
    assert second == first, "re-walking an immutable tree must yield the same sequence"


@pytest.mark.parametrize(
    ("route", "expected"),
    [
        ("/docs", "intro"),
        ("/docs/", "intro"),
        ("/docs/guides/quickstart", "guides/quickstart"),
        ("/docs/guides/quickstart/#install", "guides/quickstart"),
        ("/blog", None),
        ("/documentation/x", None),
    ],
)
def test_route_to_identifier(route: str, expected: str | None) -> None:
    """Docs routes map onto identifiers; other routes map to None."""
    assert route_to_identifier(route, route_base="/docs", home_page="intro") == expected
