from __future__ import annotations

"""
Domain Error Taxonomy.

Only unrecoverable conditions are modelled as exceptions. Per-entry failures
(unreadable files, missing ignore sources) are absorbed by the traversal and
never reach this hierarchy.
"""


class SnapshotError(Exception):
    """Base class for every error raised by the snapshot engine."""


class RootAccessError(SnapshotError):
    """
    The traversal root does not exist, is not a directory or cannot be listed.

    Attributes:
        path: The offending root path.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot snapshot '{path}': {reason}")


class ConfigError(SnapshotError):
    """Configuration could not be loaded or failed strict validation."""
