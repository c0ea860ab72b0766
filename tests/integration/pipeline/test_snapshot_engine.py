from __future__ import annotations

"""
Integration tests for the Snapshot Engine.

Runs complete snapshots against real temporary trees and checks every
output format, the ignore file layers, content probing and determinism.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from reposnap.core.pipeline.engine import render_output, run_snapshot
from reposnap.domain.errors import RootAccessError
from reposnap.domain.snapshot_models import OutputFormat


def _config(root: Path, **overrides: Any) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {"input_path": str(root), "max_workers": 1}
    cfg.update(overrides)
    return cfg


def _paths(node: Dict[str, Any]):
    for child in node.get("children", []):
        yield child["path"]
        yield from _paths(child)

# -----------------------------------------------------------------------------
# SCENARIOS
# -----------------------------------------------------------------------------

def test_default_snapshot_skips_vendor_and_vcs(scenario_repo: Path) -> None:
    result = run_snapshot(_config(scenario_repo))

    assert result.output_format is OutputFormat.TEXT
    assert result.output.split("\n") == [
        "├── 📂 src",
        "│   └── app.js",
        "└── README.md",
    ]
    assert result.tree.files_count == 2
    assert "node_modules" not in result.output
    assert ".git" not in result.output


def test_manifest_counts_and_paths(scenario_repo: Path) -> None:
    result = run_snapshot(_config(scenario_repo, output_format="json", include_loc=True))
    doc = json.loads(result.output)

    assert doc["filesCount"] == 2
    assert list(_paths(doc)) == ["src", "src/app.js", "README.md"]
    app = doc["children"][0]["children"][0]
    assert app["loc"] == 10
    assert app["sample"] is None


def test_extension_allow_list(scenario_repo: Path) -> None:
    result = run_snapshot(_config(scenario_repo, output_format="json", extensions=["js"]))

    assert list(_paths(json.loads(result.output))) == ["src", "src/app.js"]


def test_sample_lines(tree_factory, ten_line_source) -> None:
    root = tree_factory({"app.js": ten_line_source, "logo.png": b"\x89PNG\x00\x00"})

    doc = json.loads(run_snapshot(_config(root, output_format="json", sample_lines=2)).output)
    by_name = {c["name"]: c for c in doc["children"]}

    assert by_name["app.js"]["sample"] == "line 1\nline 2"
    assert by_name["logo.png"]["sample"] is None


def test_size_ceiling_marks_files_skipped(tree_factory) -> None:
    root = tree_factory({"big.txt": "x\n" * 1024, "small.txt": "y\n"})

    doc = json.loads(run_snapshot(_config(
        root, output_format="json", include_loc=True, max_file_size_kb=1,
    )).output)
    by_name = {c["name"]: c for c in doc["children"]}

    assert by_name["big.txt"]["skipped"] is True
    assert by_name["big.txt"]["loc"] is None
    assert by_name["big.txt"]["size"] == 2048
    assert by_name["small.txt"]["loc"] == 1

# -----------------------------------------------------------------------------
# IGNORE FILES
# -----------------------------------------------------------------------------

def test_gitignore_with_negation(tree_factory) -> None:
    root = tree_factory({
        ".gitignore": "*.log\n!keep.log\nbuild/\n",
        "debug.log": "",
        "keep.log": "",
        "build": {"out.js": ""},
        "main.py": "",
    })

    result = run_snapshot(_config(root, output_format="json"))

    assert list(_paths(json.loads(result.output))) == ["keep.log", "main.py"]
    assert [Path(p).name for p in result.ignore_sources] == [".gitignore"]


def test_contents_rule_with_negation_keeps_directory(tree_factory) -> None:
    root = tree_factory({
        ".gitignore": "docs/**\n!docs/keep.md\n",
        "docs": {"keep.md": "", "drop.md": ""},
        "a.txt": "",
    })

    result = run_snapshot(_config(root, output_format="json"))

    assert list(_paths(json.loads(result.output))) == ["docs", "docs/keep.md", "a.txt"]


def test_custom_ignore_file_applies_alongside_gitignore(tree_factory) -> None:
    root = tree_factory({
        ".structignore": "docs/\n",
        ".gitignore": "*.tmp\n",
        "docs": {"a.md": ""},
        "x.tmp": "",
        "y.txt": "",
    })

    result = run_snapshot(_config(root, output_format="json"))

    assert list(_paths(json.loads(result.output))) == ["y.txt"]
    assert len(result.ignore_sources) == 2


def test_explicit_ignore_file_replaces_defaults(tree_factory) -> None:
    root = tree_factory({
        ".gitignore": "*.txt\n",
        ".rules": "*.md\n",
        "a.txt": "",
        "b.md": "",
    })

    result = run_snapshot(_config(root, output_format="json", ignore_files=[".rules"]))

    assert list(_paths(json.loads(result.output))) == ["a.txt"]


def test_exclude_names_at_any_depth(tree_factory) -> None:
    root = tree_factory({"dist": {"a.js": ""}, "pkg": {"dist": {"b.js": ""}, "c.js": ""}})

    result = run_snapshot(_config(root, output_format="json", exclude=["dist"]))

    assert list(_paths(json.loads(result.output))) == ["pkg", "pkg/c.js"]

# -----------------------------------------------------------------------------
# FORMATS AND DETERMINISM
# -----------------------------------------------------------------------------

def test_markdown_is_fenced_text(scenario_repo: Path) -> None:
    text = run_snapshot(_config(scenario_repo)).output
    markdown = run_snapshot(_config(scenario_repo, output_format="markdown")).output

    assert markdown == "```text\n" + text + "\n```"


def test_summary_output(scenario_repo: Path) -> None:
    output = run_snapshot(_config(scenario_repo, output_format="ai-summary")).output

    assert output.startswith("# Repo Summary\nRoot: repo\n")
    assert "**Top-level folders:** src" in output
    assert "**Important files present:** README.md" in output
    assert "**Dominant file type:** js" in output


@pytest.mark.parametrize("fmt", ["text", "json", "summary"])
def test_repeated_runs_are_byte_identical(deep_repo: Path, fmt: str) -> None:
    cfg = _config(deep_repo, output_format=fmt, include_size=True, include_loc=True, max_workers=4)

    assert run_snapshot(cfg).output == run_snapshot(cfg).output


def test_worker_count_does_not_change_output(deep_repo: Path) -> None:
    serial = run_snapshot(_config(deep_repo, output_format="json", include_loc=True, max_workers=1))
    pooled = run_snapshot(_config(deep_repo, output_format="json", include_loc=True, max_workers=8))

    assert serial.output == pooled.output


def test_depth_limit_through_engine(deep_repo: Path) -> None:
    doc = json.loads(run_snapshot(_config(deep_repo, output_format="json", depth=1)).output)

    assert list(_paths(doc)) == ["lvl1", "lvl1/lvl2", "lvl1/b.txt", "a.txt"]


def test_render_output_reuses_tree(scenario_repo: Path) -> None:
    result = run_snapshot(_config(scenario_repo))

    again = render_output(result.tree, OutputFormat.JSON)

    assert json.loads(again)["filesCount"] == result.tree.files_count


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(RootAccessError):
        run_snapshot(_config(tmp_path / "nope"))
