from __future__ import annotations

"""
Entry Filtering Engine.

Composes the built-in default exclusions, the user name/extension filters and
the gitignore matcher into a single per-entry predicate. Every check must pass
for an entry to be kept; the order below only short-circuits the cheap checks
before the pattern match.
"""

import logging
import os
from typing import Iterable, Optional

from reposnap.core.pipeline.components.ignore_rules import IgnoreMatcher
from reposnap.domain.constants import (
    DEFAULT_BINARY_EXTENSIONS,
    DEFAULT_IGNORED_NAMES,
    HIDDEN_PREFIX,
)
from reposnap.domain.snapshot_models import FilterConfig
from reposnap.domain.tree_models import DirectoryEntry

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# NORMALIZATION HELPERS
# -----------------------------------------------------------------------------

def normalize_extension(ext: str) -> str:
    """Lowercase an extension and guarantee a single leading dot ('' stays '')."""
    e = ext.strip().lower().lstrip(".")
    return f".{e}" if e else ""


def file_extension(name: str) -> str:
    """
    Extract the lowercase, dot-prefixed extension of a filename.

    Dotfiles such as '.gitignore' have no extension.
    """
    _, ext = os.path.splitext(name)
    return ext.lower()


def build_filter_config(
        exclude: Optional[Iterable[str]] = None,
        extensions: Optional[Iterable[str]] = None,
        include_hidden: bool = False,
) -> FilterConfig:
    """
    Create an immutable FilterConfig from raw user lists.

    Args:
        exclude: Literal names to exclude.
        extensions: Allowed file extensions, with or without the dot.
        include_hidden: Keep dot-prefixed names.

    Returns:
        FilterConfig: Normalized filter configuration.
    """
    names = frozenset(n.strip() for n in (exclude or []) if n and n.strip())
    exts = frozenset(
        e for e in (normalize_extension(x) for x in (extensions or []) if x) if e
    )
    return FilterConfig(exclude_names=names, extensions=exts, include_hidden=include_hidden)

# -----------------------------------------------------------------------------
# DEFAULT EXCLUSIONS
# -----------------------------------------------------------------------------

def is_default_excluded(name: str, include_hidden: bool = False) -> bool:
    """
    Check a name against the built-in exclusion tables.

    Args:
        name: Entry basename.
        include_hidden: When False, any dot-prefixed name is excluded.

    Returns:
        bool: True if the name is excluded by default.
    """
    if name in DEFAULT_IGNORED_NAMES:
        return True
    if not include_hidden and name.startswith(HIDDEN_PREFIX):
        return True
    return file_extension(name) in DEFAULT_BINARY_EXTENSIONS

# -----------------------------------------------------------------------------
# COMPOSED PREDICATE
# -----------------------------------------------------------------------------

class EntryFilter:
    """
    Single boolean predicate applied to every listed directory entry.

    Built once per traversal and shared read-only by every recursive call.
    """

    def __init__(self, config: FilterConfig, matcher: Optional[IgnoreMatcher] = None) -> None:
        self.config = config
        self.matcher = matcher or IgnoreMatcher()

    @classmethod
    def from_root(
            cls,
            root: str,
            config: FilterConfig,
            ignore_files: Iterable[str],
    ) -> "EntryFilter":
        """Load the ignore files under ``root`` and build the filter."""
        matcher = IgnoreMatcher.load(root, ignore_files)
        if matcher.sources:
            names = ", ".join(s.name for s in matcher.sources)
            logger.debug(f"Ignore sources applied: {names}")
        return cls(config, matcher)

    def should_include(self, entry: DirectoryEntry, relative_path: str) -> bool:
        """
        Decide whether an entry survives every exclusion layer.

        Args:
            entry: The listed entry.
            relative_path: Its path relative to the traversal root.

        Returns:
            bool: True if the entry must be kept.
        """
        name = entry.name

        if is_default_excluded(name, self.config.include_hidden):
            return False

        if name in self.config.exclude_names:
            return False

        if self.config.extensions and not entry.is_dir:
            if file_extension(name) not in self.config.extensions:
                return False

        return not self.matcher.matches(relative_path, is_dir=entry.is_dir)

