"""Reference tree indexing: base filename -> paths."""

from __future__ import annotations

import logging
import os
import stat
from collections import defaultdict
from collections.abc import Callable
from pathlib import Path

from treeprune.errors import IndexBuildError
from treeprune.junk import is_junk as default_is_junk
from treeprune.reconcile.models import FilenamePathIndex

logger = logging.getLogger(__name__)


def _raise(err: OSError) -> None:
    raise err


def build_index(
    reference_root: Path | str,
    is_junk: Callable[[str], bool] = default_is_junk,
) -> FilenamePathIndex:
    """Walk *reference_root* once and map every non-junk filename to its paths.

    Junk directories are pruned with everything below them. Unlike the
    walker, any traversal error aborts indexing: acting on a partial index
    could misreport a duplicate as an original.

    Raises IndexBuildError when the tree cannot be read completely.
    """
    root = Path(reference_root).resolve()
    entries: dict[str, set[Path]] = defaultdict(set)

    if is_junk(root.name):
        logger.info("reference root %s is junk, nothing to index", root)
        return FilenamePathIndex(root, entries)

    try:
        if not root.is_dir():
            raise NotADirectoryError(f"not a directory: {root}")
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames[:] = [d for d in dirnames if not is_junk(d)]
            for name in filenames:
                if is_junk(name):
                    continue
                path = Path(dirpath) / name
                # only regular files; os.stat errors abort like walk errors
                if not stat.S_ISREG(os.stat(path).st_mode):
                    logger.debug("skipping non-regular file %s", path)
                    continue
                entries[name].add(path)
    except OSError as e:
        raise IndexBuildError(root, e) from e

    index = FilenamePathIndex(root, entries)
    logger.debug("indexed %d paths under %d names in %s", index.path_count, len(index), root)
    return index
