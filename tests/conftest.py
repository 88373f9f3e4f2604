"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from redirstage.config import Config, DocsConfig, RedirectsConfig, WatchConfig


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create an empty documentation source directory."""
    source_dir = tmp_path / "docs"
    source_dir.mkdir(exist_ok=True)
    return source_dir


@pytest.fixture
def write_doc(docs_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper writing a source file relative to docs_dir."""

    def _write(relative: str, content: str) -> Path:
        path = docs_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_config(tmp_path: Path, docs_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Meta-refresh pages are enabled and the rules file is disabled, matching
    the defaults.
    """
    return Config(
        docs=DocsConfig(source_dir=docs_dir, output_dir=tmp_path / "site"),
        redirects=RedirectsConfig(),
        watch=WatchConfig(),
    )
