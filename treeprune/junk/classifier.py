"""Junk filename predicate handed to the indexer and the walker."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from treeprune.config.models import JunkConfig
from treeprune.junk.patterns import DEFAULT_JUNK_PATTERNS

logger = logging.getLogger(__name__)


class JunkClassifier:
    """Matches a base filename against a set of nuisance-file regexes.

    The classifier never raises: a failure while matching is logged and
    the name is treated as not junk, so it is only ever kept.
    """

    def __init__(
        self,
        patterns: Iterable[str] = DEFAULT_JUNK_PATTERNS,
        extra_patterns: Iterable[str] = (),
    ) -> None:
        self.patterns = tuple(patterns) + tuple(extra_patterns)
        self._compiled = [re.compile(p) for p in self.patterns]

    @classmethod
    def from_config(cls, config: JunkConfig) -> JunkClassifier:
        base = DEFAULT_JUNK_PATTERNS if config.use_defaults else ()
        return cls(base, config.extra_patterns)

    def __call__(self, name: str) -> bool:
        try:
            return any(rx.search(name) for rx in self._compiled)
        except Exception as e:  # noqa: BLE001
            logger.debug("junk check failed for %r: %s", name, e)
            return False

    def __repr__(self) -> str:
        return f"JunkClassifier({len(self.patterns)} patterns)"


_default = JunkClassifier()


def is_junk(name: str) -> bool:
    """Return True if *name* is a known junk filename."""
    return _default(name)
