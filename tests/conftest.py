from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Synthetic directory trees shared by unit, integration and e2e tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def write_tree(root: Path, layout: Dict[str, Any]) -> Path:
    """
    Materialize a nested dict as files and directories under ``root``.

    String values become UTF-8 text files, bytes values binary files and
    dict values subdirectories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, content in layout.items():
        target = root / name
        if isinstance(content, dict):
            write_tree(target, content)
        elif isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def tree_factory(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    """Return a builder that writes a layout into a fresh 'repo' directory."""
    def _build(layout: Dict[str, Any], name: str = "repo") -> Path:
        return write_tree(tmp_path / name, layout)
    return _build


@pytest.fixture
def ten_line_source() -> str:
    """Ten numbered lines with a trailing newline."""
    return "".join(f"line {i}\n" for i in range(1, 11))


@pytest.fixture
def scenario_repo(tree_factory, ten_line_source) -> Path:
    """
    The reference repository used across scenario tests.

    Structure:
    /repo
      /src
        app.js          (10 lines)
      /node_modules
        /dep
          index.js
      /.git
        HEAD
      README.md
    """
    return tree_factory({
        "src": {"app.js": ten_line_source},
        "node_modules": {"dep": {"index.js": "module.exports = {};\n"}},
        ".git": {"HEAD": "ref: refs/heads/main\n"},
        "README.md": "# Demo\n",
    })


@pytest.fixture
def deep_repo(tree_factory) -> Path:
    """
    A four-level tree with files at every level.

    Structure:
    /repo
      a.txt
      /lvl1
        b.txt
        /lvl2
          c.txt
          /lvl3
            d.txt
            e.py
    """
    return tree_factory({
        "a.txt": "a" * 10,
        "lvl1": {
            "b.txt": "b" * 20,
            "lvl2": {
                "c.txt": "c" * 30,
                "lvl3": {
                    "d.txt": "d" * 40,
                    "e.py": "print('e')\n",
                },
            },
        },
    })
