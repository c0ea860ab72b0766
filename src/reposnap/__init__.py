from __future__ import annotations

"""
RepoSnap: directory snapshots for humans and AI assistants.
"""

from reposnap.core.pipeline.engine import render_output, run_snapshot
from reposnap.domain.errors import ConfigError, RootAccessError, SnapshotError
from reposnap.domain.snapshot_models import OutputFormat, SnapshotResult

__version__ = "0.3.0"

__all__ = [
    "ConfigError",
    "OutputFormat",
    "RootAccessError",
    "SnapshotError",
    "SnapshotResult",
    "render_output",
    "run_snapshot",
]
