"""treeprune - delete source files already present, byte for byte, in a reference tree."""

from treeprune.config import TreepruneConfig, load_config
from treeprune.errors import ConfigError, IndexBuildError, TreepruneError
from treeprune.junk import JunkClassifier, is_junk
from treeprune.reconcile import (
    FilenamePathIndex,
    ReconcileReport,
    ReconciliationWalker,
    build_index,
    files_equal,
    reconcile,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "FilenamePathIndex",
    "IndexBuildError",
    "JunkClassifier",
    "ReconcileReport",
    "ReconciliationWalker",
    "TreepruneConfig",
    "TreepruneError",
    "build_index",
    "files_equal",
    "is_junk",
    "load_config",
    "reconcile",
]
