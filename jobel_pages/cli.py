"""Cyclopts CLI entrypoint for validating and building the Jobel docs site.

The ``pages`` console script defined here checks that every sidebar, navbar,
footer and homepage reference points at a real documentation page, and writes
the composed site manifests and homepage once the check passes. An aborted
check prints every violation and exits with status 1; warnings are logged and
the command still succeeds.

Examples
--------
Validate the default configuration:

>>> from jobel_pages.cli import app
>>> app(["check"])  # doctest: +SKIP

Build into a custom directory:

>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG
from .composer import PageComposer
from .gate import Abort
from .pipeline import ValidatedSite, validate_site

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
RootOption = typ.Annotated[
    Path | None,
    Parameter(help="Directory content paths are relative to", env_var="INPUT_ROOT"),
]
LogLevelOption = typ.Annotated[
    str, Parameter(help="Logging level", env_var="INPUT_LOG_LEVEL")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(), format="%(levelname)s %(name)s: %(message)s"
    )


def _report(site: ValidatedSite) -> None:
    """Print per-locale summaries; exit 1 listing every violation on Abort."""
    for report in site.reports:
        print(report.render())
    decision = site.decision
    if isinstance(decision, Abort):
        print(
            f"build aborted: {len(decision.violations)} unresolved reference(s)",
            file=sys.stderr,
        )
        for violation in decision.violations:
            print(f"  {violation.describe()}", file=sys.stderr)
        raise SystemExit(1)
    if decision.warnings:
        print(f"build passed with {len(decision.warnings)} warning(s)")


@app.command(help="Check that every navigation reference resolves.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    root: RootOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Validate the site and report unresolved references.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    root : Path or None, optional
        Directory the content paths are relative to; defaults to the cwd.
    log_level : str, optional
        Logging level name used for warnings and progress messages.

    Raises
    ------
    SystemExit
        With status 1 when the build gate aborts.
    """
    _configure_logging(log_level)
    site = validate_site(config, root=root)
    _report(site)


@app.command(help="Validate the site, then write manifests and the homepage.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    root: RootOption = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Validate the site and write composed artifacts.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file.
    root : Path or None, optional
        Directory the content paths are relative to; defaults to the cwd.
    output_dir : Path or None, optional
        Override the configured ``build.output_dir``.
    log_level : str, optional
        Logging level name.

    Raises
    ------
    SystemExit
        With status 1 when the build gate aborts; nothing is written.
    """
    _configure_logging(log_level)
    site = validate_site(config, root=root)
    _report(site)
    composer = PageComposer(site.config, site.nav, site.registry, site.decision)
    for path in composer.write(output_dir):
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
