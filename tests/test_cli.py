"""Tests for the ``pages`` command line.

The commands are called as plain functions, the way Cyclopts dispatches them.
``check`` exits with status 1 and lists every violation when the gate aborts,
and ``build`` writes nothing in that case.

Usage
-----
Run ``pytest tests/test_cli.py -v``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from jobel_pages import cli
from jobel_pages.config import SiteConfigError

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_site(tmp_path: Path, *, sidebar: str) -> Path:
    docs = tmp_path / "docs"
    (docs / "guides").mkdir(parents=True)
    (docs / "intro.md").write_text("# Intro\n", encoding="utf-8")
    (docs / "guides" / "quickstart.md").write_text("# Quickstart\n", encoding="utf-8")
    config_path = tmp_path / "site.yaml"
    config_path.write_text(
        f"""
site:
  title: Jobel
  tagline: Docs
  url: https://jobel.dev
build:
  output_dir: {tmp_path / "public"}
navigation:
  navbar:
    title: Jobel
  sidebars:
    docs: {sidebar}
""".strip()
        + "\n",
        encoding="utf-8",
    )
    return config_path


def test_check_passes_on_repository_site(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(REPO_ROOT)
    cli.check(config=Path("config/site.yaml"))
    out = capsys.readouterr().out
    assert out.startswith("locale en: ")
    assert "0 unresolved" in out


def test_check_exits_with_every_violation(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = _write_site(
        tmp_path,
        sidebar='[intro, {category: Guides, items: ["guides/quickstart", '
        '"guides/missing", "guides/gone"]}]',
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=config_path, root=tmp_path)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "build aborted: 2 unresolved reference(s)" in err
    assert "[en] sidebar > docs > Guides: guides/missing (TargetNotFound)" in err
    assert "guides/gone" in err


def test_build_writes_nothing_when_aborted(tmp_path: Path) -> None:
    config_path = _write_site(tmp_path, sidebar="[intro, guides/missing]")
    with pytest.raises(SystemExit):
        cli.build(config=config_path, root=tmp_path)
    assert not (tmp_path / "public").exists()


def test_build_writes_manifest(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = _write_site(tmp_path, sidebar="[intro, guides/quickstart]")
    output_dir = tmp_path / "dist"
    cli.build(config=config_path, root=tmp_path, output_dir=output_dir)
    assert (output_dir / "site-manifest.json").exists()
    assert not (output_dir / "index.html").exists(), "no homepage is configured"
    assert "wrote " in capsys.readouterr().out


def test_malformed_tree_surfaces_as_config_error(tmp_path: Path) -> None:
    config_path = _write_site(tmp_path, sidebar="[{type: doc, id: intro, items: []}]")
    with pytest.raises(SiteConfigError, match="cannot carry nested items"):
        cli.check(config=config_path, root=tmp_path)


def test_format_path_prefers_relative(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert cli._format_path(tmp_path / "public" / "index.html") == (
        "public/index.html"
    )
    assert cli._format_path(Path("relative.txt")) == "relative.txt"
