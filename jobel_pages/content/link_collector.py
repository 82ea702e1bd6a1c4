"""Collect and classify the links written inside Markdown page bodies."""

from __future__ import annotations

import enum
import posixpath
import typing as typ
from urllib.parse import unquote, urlsplit

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

MARKDOWN_SUFFIXES = (".md", ".mdx")
CONTACT_PREFIXES = ("mailto:", "tel:")
EXTERNAL_PREFIXES = (*CONTACT_PREFIXES, "data:", "javascript:")


class LinkKind(enum.Enum):
    """How an in-body link target should be checked."""

    EXTERNAL = "external"
    FRAGMENT = "fragment"
    SOURCE = "source"
    ROUTE = "route"


def collect_links(markdown_text: str) -> tuple[str, ...]:
    """Return every ``<a href>`` target in ``markdown_text``, in document order.

    Links inside code spans and fenced blocks are not links and are skipped,
    because the text goes through the real Markdown parser.
    """
    sink: list[str] = []
    md = Markdown(
        extensions=[
            "fenced_code",
            "tables",
            "sane_lists",
            LinkCollectorExtension(sink),
        ]
    )
    md.convert(markdown_text)
    return tuple(sink)


def classify_link(target: str) -> tuple[LinkKind, str]:
    """Classify a link target and return the path component worth checking.

    Returns
    -------
    tuple[LinkKind, str]
        ``EXTERNAL`` for anything with a scheme or host (the target is returned
        unchanged), ``FRAGMENT`` for same-page anchors, ``SOURCE`` for paths to
        Markdown files and ``ROUTE`` for everything else. For the last two the
        decoded path without query or fragment is returned.
    """
    stripped = target.strip()
    if stripped.startswith("//") or stripped.lower().startswith(EXTERNAL_PREFIXES):
        return LinkKind.EXTERNAL, stripped
    parsed = urlsplit(stripped)
    if parsed.scheme or parsed.netloc:
        return LinkKind.EXTERNAL, stripped
    path = unquote(parsed.path)
    if not path:
        return LinkKind.FRAGMENT, stripped
    if path.lower().endswith(MARKDOWN_SUFFIXES):
        return LinkKind.SOURCE, path
    return LinkKind.ROUTE, path


def resolve_source_path(base_source: str | None, path: str) -> str | None:
    """Resolve a Markdown file link relative to the linking page's source.

    Returns ``None`` when the link climbs above the docs root.
    """
    if path.startswith("/"):
        joined = posixpath.normpath(path.lstrip("/"))
    else:
        base_dir = posixpath.dirname(base_source or "")
        joined = posixpath.normpath(posixpath.join(base_dir, path))
    if joined.startswith("../") or joined in {"..", ".", ""}:
        return None
    return joined


class LinkCollectorExtension(Extension):
    """Record anchor targets into a caller-provided list during conversion."""

    def __init__(self, sink: list[str]) -> None:
        super().__init__()
        self.sink = sink

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link-collecting treeprocessor on the Markdown instance."""
        processor = LinkCollectorTreeprocessor(md, self.sink)
        md.treeprocessors.register(processor, "jobel_link_collector", 15)


class LinkCollectorTreeprocessor(Treeprocessor):
    """Walk the parsed tree and append each anchor's ``href``."""

    def __init__(self, md: Markdown, sink: list[str]) -> None:
        super().__init__(md)
        self.sink = sink

    def run(self, root: Element) -> None:
        """Collect hrefs without modifying the tree."""
        for element in root.iter("a"):
            href = element.get("href")
            if href:
                self.sink.append(href)


__all__ = [
    "LinkCollectorExtension",
    "LinkCollectorTreeprocessor",
    "LinkKind",
    "classify_link",
    "collect_links",
    "resolve_source_path",
]
