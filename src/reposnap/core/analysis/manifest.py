from __future__ import annotations

"""
Manifest Builder.

Serializes the snapshot tree as a hierarchical JSON document. Key order is
fixed per node type so identical trees always produce identical bytes.
"""

import json
from typing import Any, Dict

from reposnap.domain.tree_models import DirectoryNode, TreeNode


def build_manifest_dict(node: TreeNode) -> Dict[str, Any]:
    """
    Convert a node (and its subtree) into plain JSON-compatible data.

    Args:
        node: Directory or file node.

    Returns:
        Dict[str, Any]: The manifest document for that node.
    """
    if isinstance(node, DirectoryNode):
        return {
            "name": node.name,
            "path": node.path,
            "type": "directory",
            "filesCount": node.files_count,
            "size": node.size,
            "symlink": node.symlink,
            "children": [build_manifest_dict(c) for c in node.children],
        }
    return {
        "name": node.name,
        "path": node.path,
        "type": "file",
        "size": node.size,
        "loc": node.loc,
        "skipped": node.skipped,
        "sample": node.sample,
    }


def render_manifest_json(tree: DirectoryNode, indent: int = 2) -> str:
    """Serialize the whole tree to a JSON string."""
    return json.dumps(build_manifest_dict(tree), ensure_ascii=False, indent=indent)
