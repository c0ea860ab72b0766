from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV string parsing logic.
3. Format shortcuts and repeatable ignore files.
"""

from reposnap.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_unspecified_flags_map_to_none():
    overrides = args_to_overrides(parse_args([]))

    assert overrides["input_path"] is None
    assert overrides["depth"] is None
    assert overrides["output_format"] is None
    assert overrides["ignore_files"] is None
    assert "include_loc" not in overrides


def test_boolean_flags_mapping():
    overrides = args_to_overrides(parse_args(["--size", "--loc", "--counts", "--hidden", "--no-files"]))

    assert overrides["include_size"] is True
    assert overrides["include_loc"] is True
    assert overrides["include_counts"] is True
    assert overrides["include_hidden"] is True
    assert overrides["include_files"] is False


def test_value_flags_mapping():
    overrides = args_to_overrides(parse_args([
        "-i", "/tmp/repo", "-d", "2", "--sample", "5",
        "--max-file-size", "64", "--workers", "3", "-o", "out.txt",
    ]))

    assert overrides["input_path"] == "/tmp/repo"
    assert overrides["depth"] == 2
    assert overrides["sample_lines"] == 5
    assert overrides["max_file_size_kb"] == 64.0
    assert overrides["max_workers"] == 3
    assert overrides["output_file"] == "out.txt"


def test_csv_parsing():
    overrides = args_to_overrides(parse_args(["--ext", "py, js ,", "--exclude", "dist"]))

    assert overrides["extensions"] == ["py", "js"]
    assert overrides["exclude"] == ["dist"]


def test_format_shortcut_wins_over_format():
    assert args_to_overrides(parse_args(["--json"]))["output_format"] == "json"
    assert args_to_overrides(parse_args(["-f", "md", "--ai-summary"]))["output_format"] == "summary"
    assert args_to_overrides(parse_args(["--format", "markdown"]))["output_format"] == "markdown"


def test_ignore_file_is_repeatable():
    overrides = args_to_overrides(parse_args(["--ignore-file", ".a", "--ignore-file", ".b"]))

    assert overrides["ignore_files"] == [".a", ".b"]
