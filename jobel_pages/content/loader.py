"""Populate a :class:`ContentRegistry` from Markdown sources on disk.

The default locale's pages live under ``content.docs_dir``; every other locale
reads ``<i18n_dir>/<locale>/docs``. Each Markdown file may open with a fenced
YAML front-matter block::

    ---
    id: quickstart
    title: Quickstart
    sidebar_label: Start here
    sidebar_position: 1
    ---

Files and directories whose name starts with ``_`` are partials and are not
registered.
"""

from __future__ import annotations

import logging
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from jobel_pages.config.helpers import _optional_str
from jobel_pages.config.models import SiteConfigError

from .link_collector import MARKDOWN_SUFFIXES, collect_links
from .models import ContentPage, is_valid_identifier
from .registry import ContentRegistry

if typ.TYPE_CHECKING:
    from jobel_pages.config import SiteConfig

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL
)
TITLE_PATTERN = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)


def load_content_registry(config: SiteConfig, root: Path) -> ContentRegistry:
    """Register every page source for every configured locale.

    Parameters
    ----------
    config : SiteConfig
        Site configuration providing the locale list and content directories.
    root : Path
        Directory that ``content.docs_dir`` and ``content.i18n_dir`` are
        relative to.

    Returns
    -------
    ContentRegistry
        Registry holding every page, registered in sorted path order per
        locale.

    Raises
    ------
    FileNotFoundError
        If the default locale's docs directory does not exist.
    SiteConfigError
        If a page has malformed front matter or an invalid identifier.
    DuplicateIdentifierError
        If two sources resolve to the same identifier within one locale.
    """
    registry = ContentRegistry()
    for locale in config.i18n.locales:
        docs_root = locale_docs_root(config, root, locale)
        if not docs_root.is_dir():
            if locale == config.i18n.default_locale:
                msg = f"Docs directory '{docs_root}' not found."
                raise FileNotFoundError(msg)
            logger.info("No docs for locale %s under %s", locale, docs_root)
            continue
        count = 0
        for path in _iter_sources(docs_root):
            registry.register(load_page(path, docs_root=docs_root, locale=locale))
            count += 1
        logger.debug("Registered %d pages for locale %s", count, locale)
    return registry


def locale_docs_root(config: SiteConfig, root: Path, locale: str) -> Path:
    """Return the directory holding ``locale``'s Markdown sources."""
    if locale == config.i18n.default_locale:
        return root / config.content.docs_dir
    return root / config.content.i18n_dir / locale / "docs"


def _iter_sources(docs_root: Path) -> typ.Iterator[Path]:
    """Yield Markdown files below ``docs_root`` in sorted order, skipping partials."""
    for path in sorted(docs_root.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in MARKDOWN_SUFFIXES:
            continue
        relative = path.relative_to(docs_root)
        if any(part.startswith("_") for part in relative.parts):
            continue
        yield path


def load_page(path: Path, *, docs_root: Path, locale: str) -> ContentPage:
    """Build a ContentPage from a single Markdown source file."""
    relative = path.relative_to(docs_root)
    text = path.read_text(encoding="utf-8")
    front_matter, body = split_front_matter(text, source=relative.as_posix())

    local_id = front_matter.get("id", path.stem)
    if not isinstance(local_id, str) or "/" in local_id:
        msg = f"'{relative.as_posix()}': front matter 'id' must not contain '/'."
        raise SiteConfigError(msg)
    parent_path = tuple(relative.parent.parts)
    identifier = "/".join((*parent_path, local_id))
    if not is_valid_identifier(identifier):
        msg = f"'{relative.as_posix()}' yields invalid identifier {identifier!r}."
        raise SiteConfigError(msg)

    return ContentPage(
        identifier=identifier,
        locale=locale,
        title=_resolve_title(front_matter, body, identifier),
        parent_path=parent_path,
        sidebar_label=_optional_str(front_matter.get("sidebar_label")),
        sidebar_position=_optional_position(
            front_matter.get("sidebar_position"), relative.as_posix()
        ),
        description=_optional_str(front_matter.get("description")),
        source=relative.as_posix(),
        links=collect_links(body),
    )


def split_front_matter(text: str, *, source: str) -> tuple[dict[str, typ.Any], str]:
    """Split ``text`` into its front-matter mapping and Markdown body."""
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return {}, text
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        data = loader.load(match.group(1)) or {}
    except YAMLError as exc:
        msg = f"'{source}': front matter is not valid YAML."
        raise SiteConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"'{source}': front matter must be a mapping."
        raise SiteConfigError(msg)
    return dict(data), text[match.end() :]


def _resolve_title(
    front_matter: typ.Mapping[str, typ.Any], body: str, identifier: str
) -> str:
    """Prefer front-matter title, then the first H1, then the identifier."""
    title = _optional_str(front_matter.get("title"))
    if title:
        return title
    heading = TITLE_PATTERN.search(body)
    if heading:
        return heading.group(1)
    return identifier


def _optional_position(value: object | None, source: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"'{source}': 'sidebar_position' must be a number."
        raise SiteConfigError(msg)
    return int(value)


__all__ = [
    "load_content_registry",
    "load_page",
    "locale_docs_root",
    "split_front_matter",
]
