"""Resolve navigation and in-content references against the content registry.

Resolution is a pure function of ``(navigation, registry, locale)``: it reads
both inputs, never mutates them, and returns a :class:`BuildReport`. Links
written inside page bodies are resolved by a separate pass,
:func:`resolve_content`, so a navigation report depends only on the leaves of
the navigation tree. Whether an unresolved reference breaks the build is
decided separately by :mod:`jobel_pages.gate`.

Example
-------
>>> from jobel_pages.content import ContentPage, ContentRegistry
>>> from jobel_pages.navigation import InternalRef, NavigationModel
>>> registry = ContentRegistry([ContentPage("intro", "en", "Intro")])
>>> nav = NavigationModel(sidebars={"docs": (InternalRef("intro"),)})
>>> resolve(nav, registry, "en").unresolved_count()
0
"""

from __future__ import annotations

import dataclasses as dc
import enum
import functools
import posixpath
import typing as typ
from concurrent.futures import ThreadPoolExecutor

from .config.models import ContentSettings
from .content.link_collector import LinkKind, classify_link, resolve_source_path
from .navigation.builder import route_to_identifier
from .navigation.models import ExternalRef, InternalRef, NavCategory

if typ.TYPE_CHECKING:
    from .content.models import ContentPage
    from .content.registry import ContentRegistry
    from .navigation.models import NavigationModel, NavPath


class Tier(enum.Enum):
    """Reference class a policy severity is attached to."""

    NAVIGATION = "navigation"
    CONTENT = "content"
    EXTERNAL = "external"


class UnresolvedReason(enum.Enum):
    """Why a reference did not resolve."""

    TARGET_NOT_FOUND = "TargetNotFound"


@dc.dataclass(frozen=True, slots=True)
class Resolved:
    """Reference that resolved; ``page`` is None for external links."""

    page: ContentPage | None = None


@dc.dataclass(frozen=True, slots=True)
class Unresolved:
    """Reference whose target does not exist in the locale's registry."""

    reason: UnresolvedReason = UnresolvedReason.TARGET_NOT_FOUND


ResolutionResult = Resolved | Unresolved


@dc.dataclass(frozen=True, slots=True)
class ReferenceOutcome:
    """Resolution result for one reference plus where it was declared."""

    path: NavPath
    target: str
    tier: Tier
    result: ResolutionResult
    label: str | None = None

    @property
    def resolved(self) -> bool:
        return isinstance(self.result, Resolved)

    def describe(self) -> str:
        """Return a one-line ``path: target (reason)`` description."""
        location = " > ".join(self.path)
        match self.result:
            case Unresolved(reason=reason):
                return f"{location}: {self.target} ({reason.value})"
            case _:
                return f"{location}: {self.target}"


@dc.dataclass(frozen=True, slots=True)
class BuildReport:
    """Every reference outcome for one locale, in walk order."""

    locale: str
    outcomes: tuple[ReferenceOutcome, ...]

    def resolved_count(self, tier: Tier | None = None) -> int:
        return sum(
            1
            for outcome in self.outcomes
            if outcome.resolved and (tier is None or outcome.tier is tier)
        )

    def unresolved_count(self, tier: Tier | None = None) -> int:
        return len(self.unresolved(tier))

    def unresolved(self, tier: Tier | None = None) -> tuple[ReferenceOutcome, ...]:
        """Return unresolved outcomes, optionally restricted to ``tier``."""
        return tuple(
            outcome
            for outcome in self.outcomes
            if not outcome.resolved and (tier is None or outcome.tier is tier)
        )

    def counts(self) -> dict[str, dict[str, int]]:
        """Return resolved/unresolved counts keyed by tier name."""
        return {
            tier.value: {
                "resolved": self.resolved_count(tier),
                "unresolved": self.unresolved_count(tier),
            }
            for tier in Tier
        }

    def render(self) -> str:
        """Return a stable, human-readable summary of the report."""
        lines = [
            f"locale {self.locale}: {self.resolved_count()} resolved, "
            f"{self.unresolved_count()} unresolved"
        ]
        for tier_name, counts in self.counts().items():
            lines.append(
                f"  {tier_name}: {counts['resolved']} resolved, "
                f"{counts['unresolved']} unresolved"
            )
        lines.extend(f"  - {outcome.describe()}" for outcome in self.unresolved())
        return "\n".join(lines)


def resolve(
    nav: NavigationModel, registry: ContentRegistry, locale: str
) -> BuildReport:
    """Resolve every reference reachable from ``nav`` in ``locale``.

    Parameters
    ----------
    nav : NavigationModel
        Navigation surfaces to walk.
    registry : ContentRegistry
        Registry queried by ``(identifier, locale)``; never mutated.
    locale : str
        Locale to resolve in. A reference never resolves against another
        locale's pages.

    Returns
    -------
    BuildReport
        Navigation outcomes in walk order. Links written inside page bodies
        are not part of this report; see :func:`resolve_content`.
    """
    outcomes: list[ReferenceOutcome] = []
    for path, node in nav.walk():
        match node:
            case NavCategory():
                continue
            case ExternalRef(url=url, label=label):
                outcomes.append(
                    ReferenceOutcome(path, url, Tier.EXTERNAL, Resolved(), label)
                )
            case InternalRef(target=target, label=label):
                page = registry.lookup(target, locale)
                result: ResolutionResult = (
                    Resolved(page) if page is not None else Unresolved()
                )
                outcomes.append(
                    ReferenceOutcome(path, target, Tier.NAVIGATION, result, label)
                )
    return BuildReport(locale=locale, outcomes=tuple(outcomes))


def resolve_content(
    registry: ContentRegistry,
    locale: str,
    *,
    routes: ContentSettings | None = None,
) -> BuildReport:
    """Resolve the in-body links of every page registered in ``locale``.

    ``routes`` supplies the docs route base and home page used to map
    absolute route links; the defaults apply when omitted. Outcomes follow
    page registration order.
    """
    settings = routes or ContentSettings()
    outcomes: list[ReferenceOutcome] = []
    for page in registry.all(locale):
        outcomes.extend(_resolve_content_links(page, registry, settings))
    return BuildReport(locale=locale, outcomes=tuple(outcomes))


def resolve_site(
    nav: NavigationModel,
    registry: ContentRegistry,
    locale: str,
    *,
    routes: ContentSettings | None = None,
) -> BuildReport:
    """Combine :func:`resolve` and :func:`resolve_content` into one report."""
    navigation = resolve(nav, registry, locale)
    content = resolve_content(registry, locale, routes=routes)
    return BuildReport(locale=locale, outcomes=navigation.outcomes + content.outcomes)


def resolve_locales(
    nav: NavigationModel,
    registry: ContentRegistry,
    locales: typ.Sequence[str],
    *,
    routes: ContentSettings | None = None,
    max_workers: int | None = None,
) -> list[BuildReport]:
    """Resolve several locales concurrently, returning reports in input order.

    Each report holds the navigation outcomes followed by the in-body link
    outcomes of that locale. Locales share only the read-only registry and
    navigation model, so no coordination is needed between workers.
    """
    worker = functools.partial(resolve_site, nav, registry, routes=routes)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(worker, locales))


def _resolve_content_links(
    page: ContentPage, registry: ContentRegistry, settings: ContentSettings
) -> typ.Iterator[ReferenceOutcome]:
    path: NavPath = ("page", page.identifier)
    for link in page.links:
        kind, link_path = classify_link(link)
        match kind:
            case LinkKind.FRAGMENT:
                continue
            case LinkKind.EXTERNAL:
                yield ReferenceOutcome(path, link, Tier.EXTERNAL, Resolved())
                continue
            case LinkKind.SOURCE:
                source = resolve_source_path(page.source, link_path)
                target = (
                    registry.find_by_source(source, page.locale) if source else None
                )
            case _ if link_path.startswith("/"):
                identifier = route_to_identifier(
                    link_path,
                    route_base=settings.route_base,
                    home_page=settings.home_page,
                )
                if identifier is None:
                    # Site routes outside the docs tree are not ours to check.
                    yield ReferenceOutcome(path, link, Tier.EXTERNAL, Resolved())
                    continue
                target = registry.lookup(identifier, page.locale)
            case _:
                identifier = _relative_identifier(page.identifier, link_path)
                target = (
                    registry.lookup(identifier, page.locale) if identifier else None
                )
        result: ResolutionResult = (
            Resolved(target) if target is not None else Unresolved()
        )
        yield ReferenceOutcome(path, link, Tier.CONTENT, result)


def _relative_identifier(base_identifier: str, link_path: str) -> str | None:
    """Join a relative route onto the linking page's identifier directory."""
    joined = posixpath.normpath(
        posixpath.join(posixpath.dirname(base_identifier), link_path)
    ).strip("/")
    if joined.startswith("..") or joined in {".", ""}:
        return None
    return joined


__all__ = [
    "BuildReport",
    "ReferenceOutcome",
    "Resolved",
    "ResolutionResult",
    "Tier",
    "Unresolved",
    "UnresolvedReason",
    "resolve",
    "resolve_content",
    "resolve_locales",
    "resolve_site",
]
