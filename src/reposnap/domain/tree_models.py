from __future__ import annotations

"""
Directory Tree Structure Data Models.

Defines the transient listing entries, the per-file metadata record and the
recursive node types that make up a snapshot. Directory nodes own their
children exclusively and keep aggregate counters in sync as children are
attached, so the tree is always consistent bottom-up.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

# -----------------------------------------------------------------------------
# LISTING AND PROBE RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryEntry:
    """
    One raw entry produced by listing a single directory level.

    Attributes:
        name: Entry basename.
        path: Absolute filesystem path.
        is_dir: True when the entry resolves to a directory.
        is_symlink: True when the entry itself is a symbolic link.
    """
    name: str
    path: str
    is_dir: bool
    is_symlink: bool = False


@dataclass(frozen=True)
class FileStats:
    """
    Metadata collected for a single file under bounded I/O.

    Attributes:
        size: Size in bytes (0 when the file could not be stat'd).
        loc: Line count, absent when not requested or not computable.
        sample: First N lines joined by '\\n', absent when not requested
            or not computable.
        skipped: True when the file exceeded the size ceiling.
    """
    size: int = 0
    loc: Optional[int] = None
    sample: Optional[str] = None
    skipped: bool = False

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class FileNode:
    """Leaf entry of the snapshot tree."""
    name: str
    path: str
    size: int = 0
    loc: Optional[int] = None
    sample: Optional[str] = None
    skipped: bool = False

    @classmethod
    def from_stats(cls, name: str, path: str, stats: FileStats) -> "FileNode":
        return cls(
            name=name,
            path=path,
            size=stats.size,
            loc=stats.loc,
            sample=stats.sample,
            skipped=stats.skipped,
        )


@dataclass
class DirectoryNode:
    """
    Inner entry of the snapshot tree.

    Attributes:
        name: Directory basename ('.' for an unnamed root).
        path: Root-relative posix path ('.' for the root itself).
        children: Child nodes in traversal order.
        files_count: Number of file nodes in the whole subtree.
        size: Sum of the sizes of every file node in the subtree.
        symlink: True for a symbolic link listed without expansion.
    """
    name: str
    path: str
    children: List["TreeNode"] = field(default_factory=list)
    files_count: int = 0
    size: int = 0
    symlink: bool = False

    def attach(self, child: "TreeNode") -> None:
        """Append a child and fold its totals into this node's aggregates."""
        self.children.append(child)
        if isinstance(child, DirectoryNode):
            self.files_count += child.files_count
            self.size += child.size
        else:
            self.files_count += 1
            self.size += child.size


TreeNode = Union[DirectoryNode, FileNode]
