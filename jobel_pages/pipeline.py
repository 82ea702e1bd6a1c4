"""Run the load → resolve → gate stages for a site configuration."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from .config import load_site_config
from .content import load_content_registry
from .gate import evaluate_all
from .navigation import build_navigation
from .resolver import resolve_locales

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import ContentRegistry
    from .gate import Decision
    from .navigation import NavigationModel
    from .resolver import BuildReport

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class ValidatedSite:
    """Inputs and results of one validation run."""

    config: SiteConfig
    nav: NavigationModel
    registry: ContentRegistry
    reports: tuple[BuildReport, ...]
    decision: Decision


def validate_site(config_path: Path, *, root: Path | None = None) -> ValidatedSite:
    """Load the site, resolve every locale and apply the build policy.

    Parameters
    ----------
    config_path : Path
        Path to ``site.yaml``.
    root : Path, optional
        Directory the content paths in the config are relative to; defaults
        to the current working directory.

    Raises
    ------
    SiteConfigError
        Including ``DuplicateIdentifierError`` and ``MalformedTreeError``,
        raised at load time before any resolution runs.
    """
    config = load_site_config(config_path)
    registry = load_content_registry(config, root or Path.cwd())
    nav = build_navigation(config)
    return validate_loaded(config, nav, registry)


def validate_loaded(
    config: SiteConfig, nav: NavigationModel, registry: ContentRegistry
) -> ValidatedSite:
    """Resolve and gate an already-constructed site."""
    locales = config.i18n.locales
    logger.debug("Resolving %d locale(s): %s", len(locales), ", ".join(locales))
    reports = tuple(
        resolve_locales(nav, registry, locales, routes=config.content)
    )
    decision = evaluate_all(reports, config.build.policy)
    return ValidatedSite(
        config=config,
        nav=nav,
        registry=registry,
        reports=reports,
        decision=decision,
    )


__all__ = ["ValidatedSite", "validate_loaded", "validate_site"]
