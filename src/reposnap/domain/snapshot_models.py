from __future__ import annotations

"""
Snapshot Domain Data Models.

Defines the closed set of output formats, the immutable option records
derived from the validated configuration and the result object handed back
to interface layers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from reposnap.domain.tree_models import DirectoryNode

# -----------------------------------------------------------------------------
# OUTPUT SELECTION
# -----------------------------------------------------------------------------

class OutputFormat(str, Enum):
    """Renderer selector, dispatched exactly once per invocation."""
    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"
    SUMMARY = "summary"

# -----------------------------------------------------------------------------
# OPTION RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FilterConfig:
    """
    User-level exclusion criteria, immutable for the whole traversal.

    Attributes:
        exclude_names: Literal entry names to drop at any depth.
        extensions: Lowercase, dot-prefixed allow-list for files. Empty
            means no extension filtering.
        include_hidden: Keep dot-prefixed entries that are not otherwise
            excluded by name.
    """
    exclude_names: FrozenSet[str] = frozenset()
    extensions: FrozenSet[str] = frozenset()
    include_hidden: bool = False


@dataclass(frozen=True)
class ProbeOptions:
    """
    Per-file metadata request.

    Attributes:
        max_file_size_bytes: Ceiling above which loc/sample are withheld.
            None disables the ceiling.
        count_loc: Compute line counts.
        sample_lines: Number of leading lines to capture (0 disables).
    """
    max_file_size_bytes: Optional[int] = None
    count_loc: bool = False
    sample_lines: int = 0

    @property
    def needs_content(self) -> bool:
        return self.count_loc or self.sample_lines > 0


@dataclass(frozen=True)
class RenderOptions:
    """Decorations applied by the text renderer."""
    show_size: bool = False
    show_loc: bool = False
    show_counts: bool = False
    show_sample: bool = False

# -----------------------------------------------------------------------------
# RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SnapshotResult:
    """
    Outcome of one snapshot run.

    Attributes:
        output_format: Renderer that produced ``output``.
        output: Final rendered text.
        root_path: Absolute traversal root.
        tree: The in-memory tree the output was rendered from.
        ignore_sources: Ignore files that were actually loaded.
    """
    output_format: OutputFormat
    output: str
    root_path: str
    tree: DirectoryNode
    ignore_sources: Tuple[str, ...] = field(default_factory=tuple)
