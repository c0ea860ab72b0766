from __future__ import annotations

"""
Snapshot Engine Orchestrator.

Runs one snapshot end to end: builds the EntryFilter from the validated
configuration and the root's ignore files, performs a single traversal and
hands the resulting tree to exactly one renderer.
"""

import logging
import os
from typing import Any, Dict, Optional

from reposnap.core.analysis.manifest import render_manifest_json
from reposnap.core.analysis.summary import collect_summary, render_summary
from reposnap.core.analysis.tree_renderer import render_tree_lines, wrap_markdown
from reposnap.core.analysis.tree_walker import walk_tree
from reposnap.core.pipeline.components.filters import EntryFilter, build_filter_config
from reposnap.core.pipeline.stages.validator import (
    build_probe_options,
    build_render_options,
    parse_output_format,
    validate_config,
)
from reposnap.domain.snapshot_models import OutputFormat, SnapshotResult
from reposnap.domain.tree_models import DirectoryNode
from reposnap.infra.fs import normalize_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_snapshot(config: Dict[str, Any], *, validated: bool = False) -> SnapshotResult:
    """
    Produce a snapshot of ``config['input_path']`` in the configured format.

    Args:
        config: Runtime configuration (see ``get_default_config``).
        validated: Skip validation when the caller already ran it.

    Returns:
        SnapshotResult: Rendered output plus the tree it came from.

    Raises:
        RootAccessError: If the root cannot be traversed.
    """
    if not validated:
        config, warnings = validate_config(config)
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

    root = normalize_path(config.get("input_path"), os.getcwd())
    output_format = parse_output_format(config["output_format"])
    logger.info(f"Snapshotting {root} as {output_format.value}")

    entry_filter = EntryFilter.from_root(
        root,
        build_filter_config(
            exclude=config.get("exclude"),
            extensions=config.get("extensions"),
            include_hidden=bool(config.get("include_hidden")),
        ),
        config.get("ignore_files") or [],
    )

    probe_options = build_probe_options(config)

    tree = walk_tree(
        root,
        entry_filter,
        depth=config.get("depth"),
        probe_options=probe_options,
        include_files=bool(config.get("include_files", True)),
        max_workers=int(config.get("max_workers") or 1),
    )
    logger.debug(f"Traversal complete: {tree.files_count} files, {tree.size} bytes")

    output = render_output(tree, output_format, config, root)
    return SnapshotResult(
        output_format=output_format,
        output=output,
        root_path=root,
        tree=tree,
        ignore_sources=tuple(s.path for s in entry_filter.matcher.sources),
    )


def render_output(
        tree: DirectoryNode,
        output_format: OutputFormat,
        config: Optional[Dict[str, Any]] = None,
        root: str = "",
) -> str:
    """
    Dispatch the tree to the renderer selected by ``output_format``.

    Args:
        tree: Traversal result.
        output_format: Closed renderer selector.
        config: Validated configuration, used for text decorations.
        root: Traversal root on disk, used by the summary detector.

    Returns:
        str: Rendered output.
    """
    cfg = config or {}
    if output_format is OutputFormat.JSON:
        return render_manifest_json(tree)
    if output_format is OutputFormat.SUMMARY:
        return render_summary(collect_summary(tree, root or os.getcwd()))

    lines = render_tree_lines(tree, build_render_options(cfg))
    if output_format is OutputFormat.MARKDOWN:
        lines = wrap_markdown(lines)
    return "\n".join(lines)
