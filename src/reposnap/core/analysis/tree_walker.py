from __future__ import annotations

"""
Directory Tree Walker.

Shared traversal driver under every output format. Performs one depth-first
scan from the root, orders each directory level deterministically (directories
first, then case-sensitive name order), filters entries through the
EntryFilter and probes surviving files. File probes of one directory may run
on a bounded thread pool; results are always reassembled in sorted order.
"""

import logging
import os
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import List, Optional

from reposnap.core.analysis.file_probe import probe_file
from reposnap.core.pipeline.components.filters import EntryFilter
from reposnap.domain.errors import RootAccessError
from reposnap.domain.snapshot_models import ProbeOptions
from reposnap.domain.tree_models import DirectoryEntry, DirectoryNode, FileNode, FileStats
from reposnap.infra.fs import display_name, relative_posix_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DIRECTORY LISTING
# -----------------------------------------------------------------------------

def _entry_is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _entry_is_symlink(entry: os.DirEntry) -> bool:
    try:
        return entry.is_symlink()
    except OSError:
        return False


def sort_entries(entries: List[DirectoryEntry]) -> List[DirectoryEntry]:
    """Order entries: directories first, then by native string order of the name."""
    return sorted(entries, key=lambda e: (not e.is_dir, e.name))


def list_directory(path: str) -> List[DirectoryEntry]:
    """
    List one directory level in deterministic order.

    Args:
        path: Directory to list.

    Returns:
        List[DirectoryEntry]: Sorted entries.

    Raises:
        OSError: If the directory cannot be listed.
    """
    with os.scandir(path) as it:
        entries = [
            DirectoryEntry(
                name=e.name,
                path=e.path,
                is_dir=_entry_is_dir(e),
                is_symlink=_entry_is_symlink(e),
            )
            for e in it
        ]
    return sort_entries(entries)

# -----------------------------------------------------------------------------
# WALKER
# -----------------------------------------------------------------------------

class TreeWalker:
    """
    Builds the snapshot tree for one root.

    Symbolic links to directories are listed as opaque directory nodes and
    never expanded, so link cycles cannot be followed.
    """

    def __init__(
            self,
            root: str,
            entry_filter: EntryFilter,
            probe_options: Optional[ProbeOptions] = None,
            include_files: bool = True,
            max_workers: int = 1,
    ) -> None:
        self.root = os.path.abspath(root)
        self.entry_filter = entry_filter
        self.probe_options = probe_options or ProbeOptions()
        self.include_files = include_files
        self.max_workers = max_workers
        self._executor: Optional[Executor] = None

    def run(self, depth: Optional[int] = None) -> Optional[DirectoryNode]:
        """
        Traverse from the root.

        Args:
            depth: Levels below the root to expand. None is unlimited; 0
                lists the root's children without expanding subdirectories.

        Returns:
            Optional[DirectoryNode]: The root node, or None for a negative depth.

        Raises:
            RootAccessError: If the root is missing, not a directory or
                cannot be listed.
        """
        if not os.path.exists(self.root):
            raise RootAccessError(self.root, "path does not exist")
        if not os.path.isdir(self.root):
            raise RootAccessError(self.root, "not a directory")

        if self.max_workers > 1 and self.include_files:
            with ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix="ProbeWorker",
            ) as executor:
                self._executor = executor
                try:
                    return self.walk(self.root, depth)
                finally:
                    self._executor = None
        return self.walk(self.root, depth)

    def walk(self, directory: str, depth_remaining: Optional[int]) -> Optional[DirectoryNode]:
        """
        Build the node for ``directory`` and, depth permitting, its subtree.

        Args:
            directory: Absolute directory path inside the root.
            depth_remaining: Expansion budget for this level (None: unlimited).

        Returns:
            Optional[DirectoryNode]: The populated node, or None when the
            budget is negative.
        """
        if depth_remaining is not None and depth_remaining < 0:
            return None

        is_root = os.path.abspath(directory) == self.root
        rel_dir = "." if is_root else relative_posix_path(directory, self.root)
        node = DirectoryNode(name=display_name(directory), path=rel_dir)

        try:
            entries = list_directory(directory)
        except OSError as e:
            if is_root:
                raise RootAccessError(self.root, str(e)) from e
            logger.debug(f"Skipping unlistable directory {directory}: {e}")
            return node

        visible = []
        for entry in entries:
            rel = relative_posix_path(entry.path, self.root)
            if self.entry_filter.should_include(entry, rel):
                visible.append((entry, rel))

        file_paths = [e.path for e, _ in visible if not e.is_dir] if self.include_files else []
        stats = iter(self._probe_all(file_paths))

        child_depth = None if depth_remaining is None else depth_remaining - 1
        for entry, rel in visible:
            if entry.is_dir:
                node.attach(self._directory_child(entry, rel, child_depth))
            elif self.include_files:
                node.attach(FileNode.from_stats(entry.name, rel, next(stats)))

        return node

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _directory_child(
            self,
            entry: DirectoryEntry,
            rel: str,
            child_depth: Optional[int],
    ) -> DirectoryNode:
        if entry.is_symlink:
            return DirectoryNode(name=entry.name, path=rel, symlink=True)

        child = self.walk(entry.path, child_depth)
        if child is None:
            # Depth exhausted: listed but not expanded
            return DirectoryNode(name=entry.name, path=rel)
        return child

    def _probe_all(self, paths: List[str]) -> List[FileStats]:
        if not paths:
            return []
        if self._executor is None:
            return [probe_file(p, self.probe_options) for p in paths]
        return list(self._executor.map(lambda p: probe_file(p, self.probe_options), paths))

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def walk_tree(
        root: str,
        entry_filter: EntryFilter,
        depth: Optional[int] = None,
        probe_options: Optional[ProbeOptions] = None,
        include_files: bool = True,
        max_workers: int = 1,
) -> DirectoryNode:
    """
    Convenience wrapper returning the root node of a full traversal.

    A negative depth yields an empty root node instead of None.
    """
    walker = TreeWalker(
        root,
        entry_filter,
        probe_options=probe_options,
        include_files=include_files,
        max_workers=max_workers,
    )
    tree = walker.run(depth)
    if tree is None:
        return DirectoryNode(name=display_name(walker.root), path=".")
    return tree
