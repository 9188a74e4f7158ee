from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies record helpers, stat application, error formatting and result factories.
"""

from duplicacy2ncdu.domain.conversion_models import (
    ConversionStats,
    create_error_result,
    create_success_result,
)
from duplicacy2ncdu.domain.errors import LineParseError, StatLookupError
from duplicacy2ncdu.domain.tree_models import EntryKind, EntryStat, LogRecord, TreeNode


def test_log_record_path_and_kind() -> None:
    rec = LogRecord(segments=("a", "b"), kind=EntryKind.DIRECTORY)

    assert rec.path == "a/b"
    assert rec.is_dir is True


def test_tree_node_apply_stat_copies_metadata() -> None:
    node = TreeNode(name="f", kind=EntryKind.FILE, size=10)
    node.apply_stat(EntryStat(size=10, disk_size=4096, inode=7, device=2, nlink=1, notreg=True))

    assert node.size == 10
    assert (node.disk_size, node.inode, node.device, node.nlink, node.notreg) == (4096, 7, 2, 1, True)


def test_line_error_message() -> None:
    assert str(LineParseError("bad size", 3)) == "line 3: bad size"
    assert str(StatLookupError("gone")) == "gone"


def test_result_factories() -> None:
    cfg = {"log_format": "sized", "source_root": "/r"}
    stats = ConversionStats(lines_read=2, records=2, files=2, total_size=9)

    ok = create_success_result(cfg, stats)
    err = create_error_result("boom", cfg, 3)

    assert ok.ok and ok.exit_code == 0
    assert ok.summary()["total_size"] == 9
    assert not err.ok and err.exit_code == 3
    assert err.format_name == "sized"
    assert err.stats.records == 0
