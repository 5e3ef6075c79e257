"""Junk filename classification."""

from treeprune.junk.classifier import JunkClassifier, is_junk
from treeprune.junk.patterns import DEFAULT_JUNK_PATTERNS

__all__ = ["DEFAULT_JUNK_PATTERNS", "JunkClassifier", "is_junk"]
