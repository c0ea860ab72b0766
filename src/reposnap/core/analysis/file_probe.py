from __future__ import annotations

"""
Single-File Metadata Probe.

Collects size, line count and a leading-line sample for one file while
bounding the I/O cost: size always comes from a stat call, and content is
only read (once) for files under the configured ceiling. Content that cannot
be read as text is a routine outcome here, reported through ``ReadStatus``
instead of an exception.
"""

import codecs
import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from reposnap.domain.snapshot_models import ProbeOptions
from reposnap.domain.tree_models import FileStats

logger = logging.getLogger(__name__)

_LINE_BREAK_RX = re.compile(r"\r\n|\r|\n")

# -----------------------------------------------------------------------------
# TEXT READ OUTCOME
# -----------------------------------------------------------------------------

class ReadStatus(str, Enum):
    OK = "ok"
    BINARY = "binary"
    UNDECODABLE = "undecodable"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class TextReadResult:
    """Outcome of one attempt to read a file as UTF-8 text."""
    status: ReadStatus
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK


def read_text_content(path: str) -> TextReadResult:
    """
    Read a whole file and decode it as UTF-8.

    Files containing NUL bytes are classified as binary without decoding.
    A leading UTF-8 BOM is dropped.

    Args:
        path: File to read.

    Returns:
        TextReadResult: Decoded text, or the reason it is unavailable.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError:
        return TextReadResult(ReadStatus.UNREADABLE)

    if b"\x00" in data:
        return TextReadResult(ReadStatus.BINARY)

    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8):]
    try:
        return TextReadResult(ReadStatus.OK, data.decode("utf-8"))
    except UnicodeDecodeError:
        return TextReadResult(ReadStatus.UNDECODABLE)

# -----------------------------------------------------------------------------
# LINE HELPERS
# -----------------------------------------------------------------------------

def split_lines(text: str) -> List[str]:
    """
    Split text on CRLF, CR or LF.

    A terminator at the very end does not open an extra empty line, so
    ``"a\\nb\\n"`` has two lines and ``""`` has none.
    """
    if not text:
        return []
    lines = _LINE_BREAK_RX.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def probe_file(path: str, options: Optional[ProbeOptions] = None) -> FileStats:
    """
    Compute the metadata of a single file.

    Args:
        path: Absolute file path.
        options: What to compute and the size ceiling guarding content reads.

    Returns:
        FileStats: Always returned; absent fields signal unavailable data.
    """
    opts = options or ProbeOptions()

    try:
        size = os.stat(path).st_size
    except OSError as e:
        logger.debug(f"Stat failed for {path}: {e}")
        return FileStats()

    limit = opts.max_file_size_bytes
    skipped = limit is not None and size > limit
    if skipped or not opts.needs_content:
        return FileStats(size=size, skipped=skipped)

    result = read_text_content(path)
    if not result.ok:
        logger.debug(f"Content of {path} unavailable ({result.status.value})")
        return FileStats(size=size)

    lines = split_lines(result.text)
    loc = len(lines) if opts.count_loc else None
    sample = "\n".join(lines[:opts.sample_lines]) if opts.sample_lines > 0 and lines else None
    return FileStats(size=size, loc=loc, sample=sample)
