from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, human-readable size formatting and
output persistence helpers. Acts as an abstraction over the 'os' module so the
traversal always works with separator-independent, root-relative paths.
"""

import logging
import os
from typing import List, Optional

from reposnap.domain.constants import SIZE_UNITS

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def to_posix(path: str) -> str:
    """Replace platform separators with '/'."""
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    if os.altsep and os.altsep != "/":
        path = path.replace(os.altsep, "/")
    return path


def relative_posix_path(path: str, root: str) -> str:
    """
    Express ``path`` relative to ``root`` using forward slashes.

    Returns:
        str: The relative path, or '.' for the root itself.
    """
    rel = os.path.relpath(path, root)
    return to_posix(rel)


def display_name(path: str) -> str:
    """Basename of a directory path, '.' when it has none (e.g. '/')."""
    return os.path.basename(os.path.normpath(path)) or "."

# -----------------------------------------------------------------------------
# FORMATTING
# -----------------------------------------------------------------------------

def format_bytes(num_bytes: Optional[int], decimals: int = 1) -> str:
    """
    Render a byte count with a binary-scaled unit (B, KB, MB, GB, TB).

    Trailing zeros are dropped, so 1024 renders as '1 KB' and 1536 as '1.5 KB'.

    Args:
        num_bytes: Size in bytes. None renders as an empty string.
        decimals: Maximum number of fractional digits.

    Returns:
        str: Human-readable size.
    """
    if num_bytes is None:
        return ""
    if num_bytes <= 0:
        return "0 B"

    exponent = 0
    value = float(num_bytes)
    while value >= 1024 and exponent < len(SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    text = f"{value:.{max(decimals, 0)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[exponent]}"

# -----------------------------------------------------------------------------
# OUTPUT PERSISTENCE
# -----------------------------------------------------------------------------

def save_text_output(save_path: str, lines: List[str]) -> None:
    """
    Persist rendered output lines to the filesystem.

    Args:
        save_path: Target file path. Parent directories are created.
        lines: Output lines, written with a trailing newline.

    Raises:
        OSError: If the destination cannot be written.
    """
    out_dir = os.path.dirname(os.path.abspath(save_path))
    os.makedirs(out_dir, exist_ok=True)
    with open(save_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.info(f"Snapshot saved to file: {save_path}")
