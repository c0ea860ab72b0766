from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration (a plain dictionary, which is what
the validator and CLI merge layers operate on) and read-only loading of a
JSON overrides file. Nothing is ever written back to disk.
"""

import json
import logging
import os
from typing import Any, Dict

from reposnap.domain.constants import (
    DEFAULT_IGNORE_FILES,
    DEFAULT_MAX_FILE_SIZE_KB,
    DEFAULT_MAX_WORKERS,
)
from reposnap.domain.errors import ConfigError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Target
        "input_path": os.getcwd(),
        "depth": None,
        "include_files": True,

        # Output
        "output_format": "text",
        "output_file": "",

        # Metadata
        "include_size": False,
        "include_loc": False,
        "include_counts": False,
        "sample_lines": 0,
        "max_file_size_kb": DEFAULT_MAX_FILE_SIZE_KB,

        # Filtering
        "extensions": [],
        "exclude": [],
        "ignore_files": list(DEFAULT_IGNORE_FILES),
        "include_hidden": False,

        # Runtime
        "max_workers": DEFAULT_MAX_WORKERS,
    }

# -----------------------------------------------------------------------------
# Persistence Logic (read-only)
# -----------------------------------------------------------------------------

def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load configuration overrides from a JSON document.

    Args:
        path: Location of the JSON file.

    Returns:
        Dict[str, Any]: The raw overrides (unvalidated).

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON or does
            not hold an object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed config file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a JSON object.")

    logger.debug(f"Loaded {len(data)} configuration keys from {path}")
    return data


def load_config(config_file: str = "") -> Dict[str, Any]:
    """
    Resolve the active configuration: defaults merged with an optional file.
    """
    config = get_default_config()
    if config_file:
        config.update(load_config_file(config_file))
    return config
