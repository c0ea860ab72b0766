from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream separation (snapshot on stdout, diagnostics on stderr) and the
output file side effect.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "reposnap" / "main.py"


def run_cli(args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["PYTHONIOENCODING"] = "utf-8"

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )

# -----------------------------------------------------------------------------
# OUTPUT FORMATS
# -----------------------------------------------------------------------------

def test_text_tree_on_stdout(scenario_repo: Path) -> None:
    result = run_cli(["-i", str(scenario_repo)])

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == [
        "├── 📂 src",
        "│   └── app.js",
        "└── README.md",
    ]


def test_json_manifest(scenario_repo: Path) -> None:
    result = run_cli(["-i", str(scenario_repo), "--json", "--loc"])

    assert result.returncode == 0, result.stderr
    doc = json.loads(result.stdout)
    assert doc["type"] == "directory"
    assert doc["filesCount"] == 2
    assert doc["children"][0]["children"][0]["loc"] == 10


def test_extension_filter_and_sample(scenario_repo: Path) -> None:
    result = run_cli(["-i", str(scenario_repo), "--format", "json", "--ext", "js", "--sample", "2"])

    doc = json.loads(result.stdout)
    app = doc["children"][0]["children"][0]
    assert [c["name"] for c in doc["children"]] == ["src"]
    assert app["sample"] == "line 1\nline 2"


def test_ai_summary(scenario_repo: Path) -> None:
    result = run_cli(["-i", str(scenario_repo), "--ai-summary"])

    assert result.returncode == 0
    assert result.stdout.startswith("# Repo Summary")


def test_runs_against_current_directory(scenario_repo: Path) -> None:
    result = run_cli(["--md"], cwd=scenario_repo)

    lines = result.stdout.splitlines()
    assert lines[0] == "```text"
    assert lines[-1] == "```"
    assert "└── README.md" in lines

# -----------------------------------------------------------------------------
# SIDE EFFECTS AND ERRORS
# -----------------------------------------------------------------------------

def test_output_file_written(scenario_repo: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "snapshot.txt"

    result = run_cli(["-i", str(scenario_repo), "-o", str(target)])

    assert result.returncode == 0, result.stderr
    assert "Snapshot written to" in result.stdout
    assert target.read_text(encoding="utf-8").endswith("└── README.md\n")


def test_missing_root_fails_with_usage_code(tmp_path: Path) -> None:
    result = run_cli(["-i", str(tmp_path / "does-not-exist")])

    assert result.returncode == 2
    assert result.stdout == ""
    assert "ERROR" in result.stderr


def test_bad_config_file_fails(tmp_path: Path) -> None:
    bad = tmp_path / "conf.json"
    bad.write_text("not json", encoding="utf-8")

    result = run_cli(["--config", str(bad)])

    assert result.returncode == 2
    assert "Malformed config file" in result.stderr


def test_dump_config_merges_file_and_flags(tmp_path: Path) -> None:
    conf = tmp_path / "conf.json"
    conf.write_text(json.dumps({"depth": 3, "output_format": "md"}), encoding="utf-8")

    result = run_cli(["--config", str(conf), "--loc", "--dump-config"])

    assert result.returncode == 0, result.stderr
    dumped = json.loads(result.stdout)
    assert dumped["depth"] == 3
    assert dumped["output_format"] == "markdown"
    assert dumped["include_loc"] is True


def test_verbose_logs_go_to_stderr(scenario_repo: Path) -> None:
    result = run_cli(["-i", str(scenario_repo), "-v"])

    assert result.returncode == 0
    assert "Snapshotting" in result.stderr
    assert "Snapshotting" not in result.stdout


def test_use_defaults_ignores_config_file(tmp_path: Path) -> None:
    conf = tmp_path / "conf.json"
    conf.write_text(json.dumps({"depth": 3}), encoding="utf-8")

    result = run_cli(["--config", str(conf), "--use-defaults", "--dump-config"])

    assert json.loads(result.stdout)["depth"] is None
