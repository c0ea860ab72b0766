from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, optional JSON file, command-line overrides), validation, snapshot
execution and output delivery. Stdout carries only the snapshot itself;
diagnostics go to stderr.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from reposnap.core.pipeline.engine import run_snapshot
from reposnap.core.pipeline.stages.validator import validate_config
from reposnap.domain.config import load_config
from reposnap.domain.errors import ConfigError, RootAccessError
from reposnap.infra.fs import save_text_output
from reposnap.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from reposnap.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (stderr only)
    if args.debug:
        log_level = "DEBUG"
    elif args.verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    # 3. Resolve base configuration (defaults vs JSON file)
    try:
        base_conf = load_config("" if args.use_defaults else (args.config_file or ""))
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    # 4. Merge command-line overrides and validate
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 5. Snapshot execution phase
    try:
        result = run_snapshot(clean_conf, validated=True)
    except RootAccessError as e:
        logger.debug(f"Root rejected: {e.path} ({e.reason})")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Snapshot failed: {e}", exc_info=True)
        print(f"ERROR: Snapshot failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Output delivery phase
    output_file = clean_conf.get("output_file")
    if output_file:
        try:
            save_text_output(output_file, result.output.split("\n"))
        except OSError as e:
            print(f"ERROR: Cannot write '{output_file}': {e}", file=sys.stderr)
            return EXIT_FAILURE
        print(f"Snapshot written to {output_file} ({result.tree.files_count} files)")
    else:
        print(result.output)

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only keys already known to the base configuration are merged, and
    None values (flags not given) never replace existing values.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out


if __name__ == "__main__":
    sys.exit(main())
