from __future__ import annotations

"""
Repository Summary Generator.

Derives a compact digest from a built snapshot tree: top-level folders,
conventional entry files, the dominant file type, the largest files and a
best-effort guess of the project's package-management convention. Detection
is heuristic; anything unrecognized is reported as 'unknown'.
"""

import json
import logging
import os
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from reposnap.core.pipeline.components.filters import file_extension
from reposnap.domain.constants import (
    IMPORTANT_FILES,
    NODE_LOCKFILES,
    PROJECT_MARKERS,
    TOP_FILES_LIMIT,
    UNKNOWN_PROJECT_TYPE,
)
from reposnap.domain.tree_models import DirectoryNode, FileNode, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectInfo:
    """Detected package-management convention and declared commands."""
    project_type: str = UNKNOWN_PROJECT_TYPE
    build_command: Optional[str] = None
    test_command: Optional[str] = None


@dataclass(frozen=True)
class RepoSummary:
    """
    Digest of a snapshot.

    Attributes:
        root_name: Basename of the traversal root.
        top_folders: Names of the root's immediate subdirectories.
        important_files: Conventional entry files present at the root.
        extension_counts: (extension, count) pairs, most frequent first.
        dominant_extension: Most frequent extension, 'unknown' when no files.
        largest_files: (path, size) pairs, largest first.
        project: Detected project convention.
        files_count: Total file count of the snapshot.
    """
    root_name: str
    top_folders: List[str] = field(default_factory=list)
    important_files: List[str] = field(default_factory=list)
    extension_counts: List[Tuple[str, int]] = field(default_factory=list)
    dominant_extension: str = UNKNOWN_PROJECT_TYPE
    largest_files: List[Tuple[str, int]] = field(default_factory=list)
    project: ProjectInfo = field(default_factory=ProjectInfo)
    files_count: int = 0

# -----------------------------------------------------------------------------
# PROJECT DETECTION
# -----------------------------------------------------------------------------

def _read_package_scripts(package_json: str) -> Dict[str, Any]:
    try:
        with open(package_json, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Could not parse {package_json}: {e}")
        return {}
    scripts = data.get("scripts") if isinstance(data, dict) else None
    return scripts if isinstance(scripts, dict) else {}


def detect_project_type(root_dir: str) -> ProjectInfo:
    """
    Infer the package-management convention from root-level marker files.

    Args:
        root_dir: Traversal root on disk.

    Returns:
        ProjectInfo: Detected convention, 'unknown' when nothing matches.
    """
    package_json = os.path.join(root_dir, "package.json")
    if os.path.isfile(package_json):
        scripts = _read_package_scripts(package_json)
        manager = "npm (unknown lockfile)"
        for lockfile, name in NODE_LOCKFILES:
            if os.path.isfile(os.path.join(root_dir, lockfile)):
                manager = name
                break
        build = scripts.get("build")
        test = scripts.get("test")
        return ProjectInfo(
            project_type=manager,
            build_command=build if isinstance(build, str) else None,
            test_command=test if isinstance(test, str) else None,
        )

    for marker, project_type in PROJECT_MARKERS:
        if os.path.isfile(os.path.join(root_dir, marker)):
            return ProjectInfo(project_type=project_type)

    return ProjectInfo()

# -----------------------------------------------------------------------------
# COLLECTION
# -----------------------------------------------------------------------------

def _iter_files(node: TreeNode):
    if isinstance(node, FileNode):
        yield node
        return
    for child in node.children:
        yield from _iter_files(child)


def collect_summary(
        tree: DirectoryNode,
        root_dir: str,
        top_n: int = TOP_FILES_LIMIT,
) -> RepoSummary:
    """
    Gather summary statistics from a snapshot tree.

    Args:
        tree: Root node of the snapshot.
        root_dir: Traversal root on disk, used for project detection.
        top_n: Number of largest files to keep.

    Returns:
        RepoSummary: The collected digest.
    """
    top_folders = [c.name for c in tree.children if isinstance(c, DirectoryNode)]
    present = {c.name for c in tree.children if isinstance(c, FileNode)}
    important = [name for name in IMPORTANT_FILES if name in present]

    ext_counter: Counter = Counter()
    sizes: List[Tuple[str, int]] = []
    for f in _iter_files(tree):
        ext = file_extension(f.name).lstrip(".") or "none"
        ext_counter[ext] += 1
        sizes.append((f.path, f.size))

    sizes.sort(key=lambda item: (-item[1], item[0]))
    extension_counts = ext_counter.most_common()
    dominant = extension_counts[0][0] if extension_counts else UNKNOWN_PROJECT_TYPE

    return RepoSummary(
        root_name=os.path.basename(os.path.normpath(root_dir)) or ".",
        top_folders=top_folders,
        important_files=important,
        extension_counts=extension_counts,
        dominant_extension=dominant,
        largest_files=sizes[:top_n],
        project=detect_project_type(root_dir),
        files_count=tree.files_count,
    )

# -----------------------------------------------------------------------------
# RENDERING
# -----------------------------------------------------------------------------

def render_summary(summary: RepoSummary) -> str:
    """
    Format a RepoSummary as a fixed-section plain-text digest.

    Args:
        summary: Collected digest.

    Returns:
        str: Multi-line summary text.
    """
    folders = ", ".join(summary.top_folders) or "none detected"
    important = ", ".join(summary.important_files) or "none detected"

    lines: List[str] = [
        "# Repo Summary",
        f"Root: {summary.root_name}",
        "",
        f"**Top-level folders:** {folders}",
        f"**Important files present:** {important}",
        f"**Likely package manager / project type:** {summary.project.project_type}",
    ]
    if summary.project.build_command:
        lines.append(f"**build**: `{summary.project.build_command}`")
    if summary.project.test_command:
        lines.append(f"**test**: `{summary.project.test_command}`")

    lines += ["", f"**Dominant file type:** {summary.dominant_extension}", ""]

    if summary.largest_files:
        lines.append("**Top files by size:**")
        for path, size in summary.largest_files:
            lines.append(f"- {path} ({size} bytes)")
        lines.append("")

    key_files = ", ".join(summary.important_files) or "none"
    lines.append("**Suggested AI prompt starter:**")
    lines.append(
        f"`Repo contains {summary.files_count} files across {len(summary.top_folders)} "
        f"top folders. Key entry files: {key_files}. Use this summary to ask specific tasks.`"
    )
    return "\n".join(lines)
