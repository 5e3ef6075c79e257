"""Tests for the reference tree indexer."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from treeprune.errors import IndexBuildError
from treeprune.junk import JunkClassifier
from treeprune.reconcile.index import build_index


# ── Mapping contents ─────────────────────────────────────────────────


def test_maps_filenames_to_absolute_paths(reference: Path, make_tree):
    make_tree(reference, {"a": {"x.txt": "hello"}, "top.md": "# top"})

    index = build_index(reference)

    root = reference.resolve()
    assert set(index) == {"x.txt", "top.md"}
    assert index["x.txt"] == frozenset({root / "a" / "x.txt"})
    assert index["top.md"] == frozenset({root / "top.md"})
    assert all(p.is_absolute() for paths in index.values() for p in paths)
    assert index.root == root


def test_collisions_collect_every_path(reference: Path, make_tree):
    make_tree(reference, {"one": {"x.txt": "1"}, "two": {"deep": {"x.txt": "2"}}, "x.txt": "0"})

    index = build_index(reference)

    assert len(index["x.txt"]) == 3
    assert index.path_count == 3


def test_directories_are_never_values(reference: Path, make_tree):
    make_tree(reference, {"shared": {"file.txt": "f"}, "other": {"shared": {}}})

    index = build_index(reference)

    assert "shared" not in index
    assert "other" not in index
    assert all(p.is_file() for paths in index.values() for p in paths)


def test_lookup_is_case_sensitive(reference: Path, make_tree):
    make_tree(reference, {"x.txt": "hello"})

    index = build_index(reference)

    assert index.candidates("x.txt")
    assert index.candidates("X.TXT") == frozenset()


def test_empty_reference_tree(reference: Path):
    index = build_index(reference)
    assert len(index) == 0
    assert index.path_count == 0


def test_index_is_read_only(reference: Path, make_tree):
    make_tree(reference, {"x.txt": "hello"})
    index = build_index(reference)

    with pytest.raises(TypeError):
        index["y.txt"] = frozenset()  # type: ignore[index]
    assert isinstance(index["x.txt"], frozenset)


# ── Junk handling ────────────────────────────────────────────────────


def test_junk_files_are_excluded(reference: Path, make_tree):
    make_tree(reference, {".DS_Store": "", "Thumbs.db": "", "keep.txt": "k"})

    index = build_index(reference)

    assert set(index) == {"keep.txt"}


def test_junk_directories_are_pruned(reference: Path, make_tree):
    make_tree(
        reference,
        {
            "__MACOSX": {"photo.jpg": "resource fork"},
            "@eaDir": {"thumb.jpg": "t"},
            "photos": {"photo.jpg": "real"},
        },
    )

    index = build_index(reference)

    assert index["photo.jpg"] == frozenset({reference.resolve() / "photos" / "photo.jpg"})
    assert "thumb.jpg" not in index


def test_junk_root_yields_empty_index(tmp_path: Path, make_tree):
    root = make_tree(tmp_path / "__MACOSX", {"x.txt": "hello"})

    index = build_index(root)

    assert len(index) == 0


def test_injected_classifier_is_used(reference: Path, make_tree):
    make_tree(reference, {"notes.bak": "old", ".DS_Store": "", "notes.txt": "new"})

    classifier = JunkClassifier(patterns=(), extra_patterns=[r"\.bak$"])
    index = build_index(reference, classifier)

    assert set(index) == {"notes.txt", ".DS_Store"}


# ── Failures abort indexing ──────────────────────────────────────────


def test_missing_root_raises(tmp_path: Path):
    missing = tmp_path / "nope"

    with pytest.raises(IndexBuildError) as exc_info:
        build_index(missing)

    assert exc_info.value.root == missing.resolve()
    assert isinstance(exc_info.value.__cause__, OSError)


def test_file_root_raises(tmp_path: Path):
    f = tmp_path / "file.txt"
    f.write_text("not a dir")

    with pytest.raises(IndexBuildError, match="failed to index"):
        build_index(f)


def test_error_mid_walk_aborts(reference: Path, monkeypatch):
    """A single unreadable directory fails the whole build."""

    def fake_walk(top, onerror=None, **kwargs):
        yield str(top), [], ["a.txt"]
        onerror(PermissionError(13, "Permission denied", str(Path(top) / "locked")))
        yield str(Path(top) / "after"), [], ["b.txt"]

    monkeypatch.setattr("treeprune.reconcile.index.os.walk", fake_walk)

    with pytest.raises(IndexBuildError) as exc_info:
        build_index(reference)

    assert isinstance(exc_info.value.__cause__, PermissionError)


# ── Only regular files are indexed ───────────────────────────────────


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires os.mkfifo")
def test_fifo_is_not_indexed(reference: Path, make_tree):
    make_tree(reference, {"x.txt": "hello"})
    os.mkfifo(reference / "pipe.txt")

    index = build_index(reference)

    assert "pipe.txt" not in index
    assert all(p.is_file() for paths in index.values() for p in paths)


def test_symlink_to_file_is_indexed(reference: Path, tmp_path: Path, make_tree):
    target = make_tree(tmp_path / "outside", {"real.txt": "r"}) / "real.txt"
    (reference / "link.txt").symlink_to(target)

    index = build_index(reference)

    assert index["link.txt"] == frozenset({reference.resolve() / "link.txt"})


def test_unreadable_entry_metadata_aborts(reference: Path, make_tree, monkeypatch):
    make_tree(reference, {"x.txt": "hello"})

    real_stat = os.stat

    def failing_stat(path, *args, **kwargs):
        if Path(path).name == "x.txt":
            raise PermissionError(13, "Permission denied", str(path))
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr("treeprune.reconcile.index.os.stat", failing_stat)

    with pytest.raises(IndexBuildError) as exc_info:
        build_index(reference)

    assert isinstance(exc_info.value.__cause__, PermissionError)
