"""Exceptions that cross from the reconciliation core into the CLI."""

from __future__ import annotations

from pathlib import Path


class TreepruneError(Exception):
    """Base class for treeprune failures."""


class IndexBuildError(TreepruneError):
    """The reference tree could not be fully indexed."""

    def __init__(self, root: Path, cause: OSError) -> None:
        self.root = root
        super().__init__(f"failed to index {root}: {cause}")
        self.__cause__ = cause


class ConfigError(TreepruneError, ValueError):
    """A config file is not valid YAML or does not match the schema."""
