from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the built-in exclusion tables, default ignore sources, size
ceilings and the heuristic lookup tables used by the summary generator.
All collections are immutable and shared process-wide.
"""

from typing import Dict, FrozenSet, Tuple

# -----------------------------------------------------------------------------
# DEFAULT EXCLUSIONS
# -----------------------------------------------------------------------------

# Version-control metadata, dependency caches and OS metadata files
DEFAULT_IGNORED_NAMES: FrozenSet[str] = frozenset({
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
    ".DS_Store",
    "Thumbs.db",
})

# Compared case-insensitively, always with the leading dot
DEFAULT_BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    ".dll", ".exe", ".bin", ".pak", ".msg", ".ico", ".pyc", ".so", ".dylib",
})

HIDDEN_PREFIX = "."

# -----------------------------------------------------------------------------
# IGNORE SOURCES AND LIMITS
# -----------------------------------------------------------------------------

CUSTOM_IGNORE_FILENAME = ".structignore"
VCS_IGNORE_FILENAME = ".gitignore"
DEFAULT_IGNORE_FILES: Tuple[str, ...] = (CUSTOM_IGNORE_FILENAME, VCS_IGNORE_FILENAME)

DEFAULT_MAX_FILE_SIZE_KB = 200
DEFAULT_MAX_WORKERS = 8

DIRECTORY_GLYPH = "📂 "

# -----------------------------------------------------------------------------
# SUMMARY HEURISTICS
# -----------------------------------------------------------------------------

IMPORTANT_FILES: Tuple[str, ...] = (
    "README",
    "README.md",
    "package.json",
    "Dockerfile",
    "pyproject.toml",
    "requirements.txt",
    "setup.py",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    "build.gradle",
    "Makefile",
)

# Lockfile -> package manager, checked in order when package.json exists
NODE_LOCKFILES: Tuple[Tuple[str, str], ...] = (
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
    ("package-lock.json", "npm"),
)

# Root marker file -> project type, checked in order when package.json is absent
PROJECT_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("pyproject.toml", "poetry/pyproject"),
    ("requirements.txt", "pip (requirements.txt)"),
    ("Cargo.toml", "cargo"),
    ("go.mod", "go modules"),
    ("pom.xml", "maven"),
    ("build.gradle", "gradle"),
)

UNKNOWN_PROJECT_TYPE = "unknown"
TOP_FILES_LIMIT = 5

SIZE_UNITS: Tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")

FORMAT_ALIASES: Dict[str, str] = {
    "tree": "text",
    "tree-text": "text",
    "md": "markdown",
    "tree-markdown-fenced": "markdown",
    "json-manifest": "json",
    "manifest": "json",
    "ai-summary": "summary",
}
