"""Turn resolution reports into a proceed/abort build decision.

Structural navigation (sidebars, navbar, footer, homepage buttons) is cheap to
check exhaustively, so by default an unresolved internal reference aborts the
build. Links written inside page bodies are harder to enumerate reliably and
default to a warning. ``Abort`` always carries every violation found, never
just the first.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .config.models import BuildPolicy, Severity
from .resolver import Tier

if typ.TYPE_CHECKING:
    from .resolver import BuildReport, ReferenceOutcome

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class Violation:
    """An unresolved reference that a policy turned into a warning or failure."""

    locale: str
    outcome: ReferenceOutcome
    severity: Severity

    def describe(self) -> str:
        return f"[{self.locale}] {self.outcome.describe()}"


@dc.dataclass(frozen=True, slots=True)
class Proceed:
    """The build may continue; ``warnings`` were logged."""

    warnings: tuple[Violation, ...] = ()

    @property
    def proceed(self) -> bool:
        return True


@dc.dataclass(frozen=True, slots=True)
class Abort:
    """The build must stop; ``violations`` lists every failing reference."""

    violations: tuple[Violation, ...]
    warnings: tuple[Violation, ...] = ()

    @property
    def proceed(self) -> bool:
        return False


Decision = Proceed | Abort


def severity_for(tier: Tier, policy: BuildPolicy) -> Severity:
    """Return the severity ``policy`` assigns to unresolved references in ``tier``."""
    match tier:
        case Tier.NAVIGATION:
            return policy.on_internal_unresolved
        case Tier.CONTENT:
            return policy.on_content_unresolved
        case _:
            return policy.on_external_unchecked


def evaluate(report: BuildReport, policy: BuildPolicy | None = None) -> Decision:
    """Apply ``policy`` to ``report`` and decide whether the build proceeds.

    Parameters
    ----------
    report : BuildReport
        Resolution report for a single locale.
    policy : BuildPolicy, optional
        Severities per reference tier; the default fails on unresolved
        navigation references and warns on unresolved in-content links.

    Returns
    -------
    Proceed or Abort
        ``Abort`` when at least one unresolved reference falls in a ``fail``
        tier. Warnings are logged at WARNING level either way.
    """
    active = policy or BuildPolicy()
    failures: list[Violation] = []
    warnings: list[Violation] = []
    for outcome in report.unresolved():
        severity = severity_for(outcome.tier, active)
        match severity:
            case Severity.FAIL:
                failures.append(Violation(report.locale, outcome, severity))
            case Severity.WARN:
                warnings.append(Violation(report.locale, outcome, severity))
            case Severity.IGNORE:
                continue
    for warning in warnings:
        logger.warning("Unresolved reference %s", warning.describe())
    if failures:
        return Abort(violations=tuple(failures), warnings=tuple(warnings))
    return Proceed(warnings=tuple(warnings))


def evaluate_all(
    reports: typ.Iterable[BuildReport], policy: BuildPolicy | None = None
) -> Decision:
    """Evaluate several locale reports and merge them into one decision."""
    failures: list[Violation] = []
    warnings: list[Violation] = []
    for report in reports:
        decision = evaluate(report, policy)
        warnings.extend(decision.warnings)
        if isinstance(decision, Abort):
            failures.extend(decision.violations)
    if failures:
        return Abort(violations=tuple(failures), warnings=tuple(warnings))
    return Proceed(warnings=tuple(warnings))


__all__ = [
    "Abort",
    "Decision",
    "Proceed",
    "Violation",
    "evaluate",
    "evaluate_all",
    "severity_for",
]
