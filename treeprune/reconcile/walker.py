"""Post-order walk over the source tree that deletes redundant entries."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from treeprune.junk import is_junk as default_is_junk
from treeprune.reconcile.equality import DEFAULT_CHUNK_SIZE, files_equal
from treeprune.reconcile.models import (
    Action,
    ActionKind,
    FilenamePathIndex,
    ReconcileReport,
)

logger = logging.getLogger(__name__)


class ReconciliationWalker:
    """Deletes source files that already exist, byte for byte, in the reference tree.

    A directory is removed once every entry inside it was removed (or, in a
    dry run, would be). Errors on a single entry are logged and only stop
    that entry and its ancestors from being removed; the walk continues.
    """

    def __init__(
        self,
        index: FilenamePathIndex,
        *,
        is_junk: Callable[[str], bool] = default_is_junk,
        dry_run: bool = True,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        on_action: Callable[[Action], None] | None = None,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.index = index
        self.is_junk = is_junk
        self.dry_run = dry_run
        self.chunk_size = chunk_size
        self.on_action = on_action
        self._actions: list[Action] = []

    def run(self, root: Path | str) -> ReconcileReport:
        """Reconcile everything below *root*. The root itself is kept."""
        root = Path(root)
        self._actions = []
        fully = self.reconcile(root)
        return ReconcileReport(
            root=root,
            dry_run=self.dry_run,
            actions=list(self._actions),
            fully_reconciled=fully,
        )

    def reconcile(self, directory: Path) -> bool:
        """Process every child of *directory*; True if all of them were removed."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._error("Read Dir", Path(directory), e)
            return False

        all_removed = True
        for entry in entries:
            if not self._reconcile_entry(entry):
                all_removed = False
        return all_removed

    # ------------------------------------------------------------------
    # Per-entry decisions
    # ------------------------------------------------------------------

    def _reconcile_entry(self, entry: os.DirEntry) -> bool:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            self._error("Read Dir Entry", path, e)
            return False

        if is_dir:
            if not self.reconcile(path):
                return False
            return self._delete(ActionKind.DELETE_EMPTY_DIR, path, path.rmdir)

        if self.is_junk(entry.name):
            return self._delete(ActionKind.DELETE_JUNK, path, path.unlink)

        candidates = self.index.candidates(entry.name)
        if not candidates:
            self._record(Action(ActionKind.KEEP_ORIGINAL, path, self.dry_run))
            return False

        if any(files_equal(c, path, self.chunk_size) for c in candidates):
            return self._delete(ActionKind.DELETE_DUPLICATE, path, path.unlink)

        self._record(Action(ActionKind.KEEP_DIFFERENT, path, self.dry_run))
        return False

    def _delete(self, kind: ActionKind, path: Path, remove: Callable[[], None]) -> bool:
        action = Action(kind, path, self.dry_run)
        self._record(action)
        if self.dry_run:
            return True
        try:
            remove()
        except OSError as e:
            operation = "Delete Empty Dir" if kind is ActionKind.DELETE_EMPTY_DIR else "Delete File"
            self._error(operation, path, e)
            return False
        return True

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _error(self, operation: str, path: Path, exc: OSError) -> None:
        self._record(
            Action(ActionKind.ERROR, path, self.dry_run, operation=operation, error=str(exc))
        )

    def _record(self, action: Action) -> None:
        self._actions.append(action)
        if action.kind is ActionKind.ERROR:
            logger.warning("%s", action.describe())
        else:
            logger.info("%s", action.describe())
        if self.on_action is not None:
            self.on_action(action)


def reconcile(
    directory: Path | str,
    index: FilenamePathIndex,
    dry_run: bool,
    *,
    is_junk: Callable[[str], bool] = default_is_junk,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bool:
    """Reconcile *directory* against *index*; True if it ended up fully emptied."""
    walker = ReconciliationWalker(
        index, is_junk=is_junk, dry_run=dry_run, chunk_size=chunk_size
    )
    return walker.reconcile(Path(directory))
