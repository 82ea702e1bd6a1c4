"""Validate and compose the Jobel marketing and documentation site.

This package exposes the CLI entry points used by ``uv run pages`` to check
navigation references against the documentation pages and to write the
composed site manifests and homepage.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from jobel_pages import main
>>> main()  # doctest: +SKIP
>>> from jobel_pages import app
>>> app.name
('pages',)
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
