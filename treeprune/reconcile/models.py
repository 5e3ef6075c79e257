"""Data models for reference indexing and source-tree reconciliation."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType

_EMPTY: frozenset[Path] = frozenset()


class FilenamePathIndex(Mapping[str, frozenset[Path]]):
    """Base filename -> every reference path carrying that name.

    Keys are compared exactly (case-sensitive, no normalization). Values are
    regular files as seen while indexing, never directories.
    """

    def __init__(self, root: Path, entries: Mapping[str, set[Path]]) -> None:
        self.root = root
        self._entries = MappingProxyType(
            {name: frozenset(paths) for name, paths in entries.items()}
        )

    def __getitem__(self, name: str) -> frozenset[Path]:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def candidates(self, name: str) -> frozenset[Path]:
        return self._entries.get(name, _EMPTY)

    @property
    def path_count(self) -> int:
        return sum(len(paths) for paths in self._entries.values())

    def __repr__(self) -> str:
        return f"FilenamePathIndex(root={str(self.root)!r}, names={len(self)}, paths={self.path_count})"


class ActionKind(str, Enum):
    DELETE_JUNK = "delete_junk"
    DELETE_DUPLICATE = "delete_duplicate"
    DELETE_EMPTY_DIR = "delete_empty_dir"
    KEEP_ORIGINAL = "keep_original"
    KEEP_DIFFERENT = "keep_different"
    ERROR = "error"


_DELETE_LABELS = {
    ActionKind.DELETE_JUNK: "Delete Junk File",
    ActionKind.DELETE_DUPLICATE: "Delete Duplicated File",
    ActionKind.DELETE_EMPTY_DIR: "Delete Empty Dir",
}

_KEEP_LABELS = {
    ActionKind.KEEP_ORIGINAL: "Original filename",
    ActionKind.KEEP_DIFFERENT: "Different content",
}


@dataclass(frozen=True)
class Action:
    """A single decision taken (or, in a dry run, announced) by the walker."""

    kind: ActionKind
    path: Path
    dry_run: bool
    operation: str | None = None
    error: str | None = None

    @property
    def is_delete(self) -> bool:
        return self.kind in _DELETE_LABELS

    def describe(self) -> str:
        if self.kind in _DELETE_LABELS:
            return f"{_DELETE_LABELS[self.kind]} {self.path} (dry_run={self.dry_run})"
        if self.kind in _KEEP_LABELS:
            return f"{_KEEP_LABELS[self.kind]} {self.path}"
        return f"{self.operation or 'Unknown'} Error: {self.path}: {self.error}"


@dataclass
class ReconcileReport:
    """Everything a reconciliation run decided, in the order it was decided."""

    root: Path
    dry_run: bool
    actions: list[Action] = field(default_factory=list)
    fully_reconciled: bool = False

    @property
    def deleted(self) -> list[Action]:
        return [a for a in self.actions if a.is_delete]

    @property
    def kept(self) -> list[Action]:
        return [
            a for a in self.actions
            if a.kind in (ActionKind.KEEP_ORIGINAL, ActionKind.KEEP_DIFFERENT)
        ]

    @property
    def errors(self) -> list[Action]:
        return [a for a in self.actions if a.kind is ActionKind.ERROR]

    def counts(self) -> dict[ActionKind, int]:
        counter = Counter(a.kind for a in self.actions)
        return {kind: counter.get(kind, 0) for kind in ActionKind}
