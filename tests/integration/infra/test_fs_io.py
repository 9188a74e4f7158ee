from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, metadata lookup for enumerated entries and
the stdio-aware stream helpers.
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from duplicacy2ncdu.domain.errors import StatLookupError
from duplicacy2ncdu.infra.fs import (
    is_stdio,
    normalize_path,
    open_input,
    open_output,
    stat_entry,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_normalize_path_expansion() -> None:
    """TC-01: Verify expansion of environment variables."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())


def test_normalize_path_fallback() -> None:
    assert normalize_path("   ", fallback="/tmp") == os.path.abspath("/tmp")


def test_is_stdio() -> None:
    assert is_stdio("-")
    assert is_stdio(None)
    assert not is_stdio("log.txt")

# -----------------------------------------------------------------------------
# METADATA LOOKUP TESTS
# -----------------------------------------------------------------------------

def test_stat_entry_regular_file(source_tree: Path) -> None:
    st = stat_entry(str(source_tree), ("docs", "b.txt"))

    assert st.size == 25
    assert st.notreg is False
    assert st.inode is not None
    assert st.disk_size >= 0


def test_stat_entry_directory_is_regular(source_tree: Path) -> None:
    assert stat_entry(str(source_tree), ("docs",)).notreg is False


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_stat_entry_does_not_follow_symlinks(source_tree: Path) -> None:
    os.symlink(source_tree / "docs" / "b.txt", source_tree / "link")

    st = stat_entry(str(source_tree), ("link",))

    assert st.notreg is True
    assert st.size == len(str(source_tree / "docs" / "b.txt"))


def test_stat_entry_missing_raises(source_tree: Path) -> None:
    with pytest.raises(StatLookupError) as exc_info:
        stat_entry(str(source_tree), ("nope",), line_no=8)

    assert exc_info.value.line_no == 8

# -----------------------------------------------------------------------------
# STREAM TESTS
# -----------------------------------------------------------------------------

def test_open_input_replaces_undecodable_bytes(tmp_path: Path) -> None:
    log = tmp_path / "bin.log"
    log.write_bytes(b"ok 1\n\xff\xfe 2\n")

    with open_input(str(log)) as f:
        lines = list(f)

    assert lines[0] == "ok 1\n"
    assert "�" in lines[1]


def test_open_output_writes_file(tmp_path: Path) -> None:
    target = tmp_path / "out.json"
    with open_output(str(target)) as f:
        f.write("[]")

    assert target.read_text(encoding="utf-8") == "[]"


def test_open_output_stdout() -> None:
    with open_output("-") as f:
        assert f is sys.stdout
