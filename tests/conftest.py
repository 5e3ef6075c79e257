"""Shared test fixtures for treeprune."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from treeprune.config.models import TreepruneConfig


def _make_tree(root: Path, layout: dict) -> Path:
    """Materialize a nested dict as files and directories under *root*.

    str/bytes values become files, dict values become directories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        path = root / name
        if isinstance(value, dict):
            _make_tree(path, value)
        elif isinstance(value, bytes):
            path.write_bytes(value)
        else:
            path.write_text(value)
    return root


def _snapshot(root: Path) -> dict[str, bytes | None]:
    """Relative path -> file bytes (None for directories) for everything under *root*."""
    out: dict[str, bytes | None] = {}
    for p in sorted(root.rglob("*")):
        rel = p.relative_to(root).as_posix()
        out[rel] = None if p.is_dir() else p.read_bytes()
    return out


@pytest.fixture
def source(tmp_path: Path) -> Path:
    src = tmp_path / "source"
    src.mkdir()
    return src


@pytest.fixture
def reference(tmp_path: Path) -> Path:
    ref = tmp_path / "reference"
    ref.mkdir()
    return ref


@pytest.fixture
def sample_config() -> TreepruneConfig:
    return TreepruneConfig()


@pytest.fixture
def treeprune_logs(caplog):
    """caplog capturing INFO and above from the treeprune loggers."""
    caplog.set_level(logging.INFO, logger="treeprune")
    return caplog


@pytest.fixture
def make_tree():
    return _make_tree


@pytest.fixture
def snapshot():
    return _snapshot
