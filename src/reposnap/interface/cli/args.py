from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed argparse
namespace into configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict, List, Optional

from reposnap.domain.constants import DEFAULT_MAX_FILE_SIZE_KB

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the reposnap CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="reposnap",
        description="Snapshot a directory tree as text, a JSON manifest or an AI-ready summary.",
    )

    # --- Target ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Root directory to snapshot (default: current directory).",
    )
    p.add_argument(
        "-d", "--depth",
        type=int,
        default=None,
        help="Directory levels to expand below the root (default: unlimited).",
    )
    p.add_argument(
        "--no-files",
        action="store_true",
        help="List directories only.",
    )

    # --- Format Selection ---
    p.add_argument(
        "-f", "--format",
        dest="output_format",
        default=None,
        help="Output format: text, markdown, json or summary.",
    )
    p.add_argument("--json", dest="format_shortcut", action="store_const", const="json",
                   help="Shortcut for --format json.")
    p.add_argument("--md", dest="format_shortcut", action="store_const", const="markdown",
                   help="Shortcut for --format markdown.")
    p.add_argument("--ai-summary", dest="format_shortcut", action="store_const", const="summary",
                   help="Shortcut for --format summary.")
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Write the snapshot to this file instead of stdout.",
    )

    # --- Metadata ---
    p.add_argument("--size", action="store_true", help="Show file sizes.")
    p.add_argument("--loc", action="store_true", help="Count lines of text files.")
    p.add_argument("--counts", action="store_true", help="Show aggregated file counts on directories.")
    p.add_argument(
        "--sample",
        type=int,
        default=None,
        metavar="N",
        help="Include the first N lines of each text file.",
    )
    p.add_argument(
        "--max-file-size",
        dest="max_file_size_kb",
        type=float,
        default=None,
        metavar="KB",
        help=f"Skip LOC/sample for files above this size (default: {DEFAULT_MAX_FILE_SIZE_KB} KB).",
    )

    # --- Filters ---
    p.add_argument(
        "--extensions", "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated extension allow-list, e.g. 'py,js'.",
    )
    p.add_argument(
        "--exclude",
        default=None,
        help="Comma-separated names to exclude at any depth.",
    )
    p.add_argument(
        "--ignore-file",
        dest="ignore_files",
        action="append",
        default=None,
        help="Gitignore-style file to load (repeatable; default: .structignore then .gitignore).",
    )
    p.add_argument(
        "--hidden",
        action="store_true",
        help="Include dot-prefixed entries (VCS directories stay excluded).",
    )

    # --- Runtime ---
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Threads used to probe files (1 disables concurrency).",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration overrides.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore --config and start from built-in defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration and exit.",
    )

    # --- Diagnostics ---
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    p.add_argument("--log-file", default=None, help="Also write diagnostics to this file.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration overrides dict.

    Keys whose flag was not given are left as None so they never clobber
    values coming from defaults or a config file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "depth": args.depth,
        "output_format": args.format_shortcut or args.output_format,
        "output_file": args.output_file,
        "sample_lines": args.sample,
        "max_file_size_kb": args.max_file_size_kb,
        "extensions": _split_csv(args.extensions),
        "exclude": _split_csv(args.exclude),
        "ignore_files": args.ignore_files,
        "max_workers": args.max_workers,
    }

    if args.no_files:
        overrides["include_files"] = False
    if args.size:
        overrides["include_size"] = True
    if args.loc:
        overrides["include_loc"] = True
    if args.counts:
        overrides["include_counts"] = True
    if args.hidden:
        overrides["include_hidden"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
