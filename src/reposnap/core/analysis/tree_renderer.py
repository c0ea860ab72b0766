from __future__ import annotations

"""
Tree Renderer.

Converts the snapshot tree into a visual text representation using standard
branch connectors (├──, └──). Handles indentation by ancestor 'last sibling'
state, optional size/LOC/count suffixes and indented content-sample blocks.
"""

from typing import List, Optional

from reposnap.domain.constants import DIRECTORY_GLYPH
from reposnap.domain.snapshot_models import RenderOptions
from reposnap.domain.tree_models import DirectoryNode, FileNode
from reposnap.infra.fs import format_bytes

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
BLANK_INDENT = "    "

SAMPLE_START = "--- sample ---"
SAMPLE_END = "--- end sample ---"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_lines(
        tree: DirectoryNode,
        options: Optional[RenderOptions] = None,
) -> List[str]:
    """
    Render the children of ``tree`` as indented lines.

    The root itself is not printed; its children start at column zero.

    Args:
        tree: Root directory node.
        options: Decorations to apply.

    Returns:
        List[str]: One line per visible entry plus any sample blocks.
    """
    lines: List[str] = []
    _render_children(tree, lines, "", options or RenderOptions())
    return lines


def wrap_markdown(lines: List[str], language: str = "text") -> List[str]:
    """Fence rendered lines so Markdown viewers keep the alignment."""
    return [f"```{language}"] + list(lines) + ["```"]

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _render_children(
        node: DirectoryNode,
        lines: List[str],
        prefix: str,
        options: RenderOptions,
) -> None:
    total = len(node.children)
    for i, child in enumerate(node.children):
        is_last = (i == total - 1)
        connector = LAST_BRANCH if is_last else BRANCH
        child_prefix = prefix + (BLANK_INDENT if is_last else PIPE_INDENT)

        # Scenario A: Directory
        if isinstance(child, DirectoryNode):
            lines.append(f"{prefix}{connector}{DIRECTORY_GLYPH}{child.name}{_directory_suffix(child, options)}")
            _render_children(child, lines, child_prefix, options)
            continue

        # Scenario B: File
        lines.append(f"{prefix}{connector}{child.name}{_file_suffix(child, options)}")
        if options.show_sample and child.sample is not None:
            _render_sample(child.sample, lines, child_prefix)


def _directory_suffix(node: DirectoryNode, options: RenderOptions) -> str:
    parts: List[str] = []
    if node.symlink:
        parts.append("symlink")
    if options.show_counts:
        noun = "file" if node.files_count == 1 else "files"
        parts.append(f"{node.files_count} {noun}")
        if options.show_size:
            parts.append(format_bytes(node.size))
    return f" ({', '.join(parts)})" if parts else ""


def _file_suffix(node: FileNode, options: RenderOptions) -> str:
    parts: List[str] = []
    if options.show_size:
        parts.append(format_bytes(node.size))
    if options.show_loc and node.loc is not None:
        parts.append(f"{node.loc} loc")
    if node.skipped and (options.show_loc or options.show_sample):
        parts.append("skipped")
    return f" ({', '.join(parts)})" if parts else ""


def _render_sample(sample: str, lines: List[str], prefix: str) -> None:
    block_prefix = prefix + BLANK_INDENT
    lines.append(f"{block_prefix}{SAMPLE_START}")
    for sample_line in sample.split("\n"):
        lines.append(f"{block_prefix}{sample_line}")
    lines.append(f"{block_prefix}{SAMPLE_END}")
