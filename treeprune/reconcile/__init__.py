"""Reference indexing, byte comparison and source-tree reconciliation."""

from treeprune.reconcile.equality import DEFAULT_CHUNK_SIZE, files_equal
from treeprune.reconcile.index import build_index
from treeprune.reconcile.models import (
    Action,
    ActionKind,
    FilenamePathIndex,
    ReconcileReport,
)
from treeprune.reconcile.walker import ReconciliationWalker, reconcile

__all__ = [
    "Action",
    "ActionKind",
    "DEFAULT_CHUNK_SIZE",
    "FilenamePathIndex",
    "ReconcileReport",
    "ReconciliationWalker",
    "build_index",
    "files_equal",
    "reconcile",
]
