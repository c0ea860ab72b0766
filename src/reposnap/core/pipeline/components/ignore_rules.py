from __future__ import annotations

"""
Gitignore Rule Matching.

Loads one or more gitignore-syntax pattern files and compiles them into a
single matcher. Rules from every source are evaluated together in load order,
so later rules (including '!' negations) override earlier ones exactly as git
does.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import pathspec

from reposnap.infra.fs import to_posix

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# RULE SOURCES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class IgnoreSource:
    """
    One loaded pattern file.

    Attributes:
        name: Name or path the file was requested as.
        path: Absolute path it was read from.
        lines: Raw lines, comments and blanks included.
    """
    name: str
    path: str
    lines: Tuple[str, ...] = field(default_factory=tuple)


def read_ignore_source(root: str, filename: str) -> Optional[IgnoreSource]:
    """
    Read a single pattern file relative to ``root``.

    Absolute filenames are used as given. A missing or unreadable file is
    not an error: it simply contributes no rules.

    Args:
        root: Traversal root directory.
        filename: Ignore file name or path.

    Returns:
        Optional[IgnoreSource]: The loaded source, or None when unavailable.
    """
    if not filename:
        return None

    file_path = filename if os.path.isabs(filename) else os.path.join(root, filename)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            lines = tuple(f.read().splitlines())
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Ignore source '{filename}' not applied: {e}")
        return None

    logger.debug(f"Loaded {len(lines)} lines from ignore source {file_path}")
    return IgnoreSource(name=filename, path=file_path, lines=lines)


def _is_directory_rule(line: str) -> bool:
    """True for negations and patterns restricted to directories (trailing '/')."""
    s = line.strip()
    if not s or s.startswith("#"):
        return False
    return s.startswith("!") or s.endswith("/")

# -----------------------------------------------------------------------------
# MATCHER
# -----------------------------------------------------------------------------

class IgnoreMatcher:
    """
    Immutable gitignore matcher over an ordered set of rule sources.

    Paths are matched relative to the traversal root. Directory-only
    patterns (``build/``) only apply when ``is_dir`` is set.
    """

    def __init__(self, sources: Iterable[IgnoreSource] = ()) -> None:
        self._sources: Tuple[IgnoreSource, ...] = tuple(sources)
        lines: List[str] = []
        for source in self._sources:
            lines.extend(source.lines)
        self._spec: Optional[pathspec.GitIgnoreSpec] = (
            pathspec.GitIgnoreSpec.from_lines(lines) if lines else None
        )
        # Rules ending in "/" plus every negation, checked against "dir/"
        dir_lines = [line for line in lines if _is_directory_rule(line)]
        self._dir_spec: Optional[pathspec.GitIgnoreSpec] = (
            pathspec.GitIgnoreSpec.from_lines(dir_lines) if dir_lines else None
        )

    @classmethod
    def load(cls, root: str, filenames: Iterable[str]) -> "IgnoreMatcher":
        """
        Build a matcher from the named files, skipping missing ones.

        Args:
            root: Traversal root the files are resolved against.
            filenames: Ordered ignore file names.

        Returns:
            IgnoreMatcher: Matcher over every source that could be read.
        """
        sources = []
        for name in filenames:
            source = read_ignore_source(root, name)
            if source is not None:
                sources.append(source)
        return cls(sources)

    @property
    def sources(self) -> Tuple[IgnoreSource, ...]:
        return self._sources

    @property
    def is_empty(self) -> bool:
        return self._spec is None

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """
        Decide whether a root-relative path is excluded.

        Args:
            relative_path: Path relative to the root, any separator style.
            is_dir: Whether the path denotes a directory.

        Returns:
            bool: True if the path is ignored.
        """
        if self._spec is None:
            return False

        rel = to_posix(relative_path).strip("/")
        if not rel or rel == ".":
            return False
        if rel.startswith("./"):
            rel = rel[2:]
        if self._spec.match_file(rel):
            return True
        # "docs/**" never hides "docs" itself; only "docs/" style rules do
        if is_dir and self._dir_spec is not None:
            return self._dir_spec.match_file(rel + "/")
        return False
