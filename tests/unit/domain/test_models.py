from __future__ import annotations

"""
Unit tests for the snapshot tree data models.
"""

from reposnap.domain.errors import RootAccessError, SnapshotError
from reposnap.domain.snapshot_models import ProbeOptions
from reposnap.domain.tree_models import DirectoryNode, FileNode, FileStats


def test_attach_folds_file_totals() -> None:
    node = DirectoryNode(name="src", path="src")
    node.attach(FileNode(name="a", path="src/a", size=5))
    node.attach(FileNode(name="b", path="src/b", size=7))

    assert node.files_count == 2
    assert node.size == 12


def test_attach_folds_subdirectory_totals() -> None:
    inner = DirectoryNode(name="inner", path="src/inner")
    inner.attach(FileNode(name="x", path="src/inner/x", size=3))
    outer = DirectoryNode(name="src", path="src")
    outer.attach(inner)
    outer.attach(DirectoryNode(name="empty", path="src/empty"))

    assert outer.files_count == 1
    assert outer.size == 3
    assert [c.name for c in outer.children] == ["inner", "empty"]


def test_file_node_from_stats() -> None:
    stats = FileStats(size=9, loc=2, sample="a\nb", skipped=False)

    node = FileNode.from_stats("f.txt", "dir/f.txt", stats)

    assert (node.size, node.loc, node.sample) == (9, 2, "a\nb")


def test_probe_options_content_need() -> None:
    assert ProbeOptions().needs_content is False
    assert ProbeOptions(count_loc=True).needs_content is True
    assert ProbeOptions(sample_lines=2).needs_content is True


def test_root_access_error_message() -> None:
    err = RootAccessError("/nope", "path does not exist")

    assert isinstance(err, SnapshotError)
    assert str(err) == "Cannot snapshot '/nope': path does not exist"
    assert err.path == "/nope"
