from __future__ import annotations

"""
Unit tests for the Log Format strategies.

Verifies:
1. Duplicacy PATTERN_INCLUDE extraction (files, directories, pattern suffix).
2. Sized listing extraction and malformed size detection.
3. Path normalization shared by all formats, including the depth limit.
"""

import pytest

from duplicacy2ncdu.core.parsing.formats import (
    DuplicacyFormat,
    SizedFormat,
    parse_size,
    split_path,
)
from duplicacy2ncdu.domain.constants import MAX_PATH_DEPTH
from duplicacy2ncdu.domain.errors import LineParseError
from duplicacy2ncdu.domain.tree_models import EntryKind

TS = "2024-05-01 10:00:00.123"

# -----------------------------------------------------------------------------
# DUPLICACY FORMAT
# -----------------------------------------------------------------------------

def test_duplicacy_file_line() -> None:
    """A plain include line yields a file record without size."""
    rec = DuplicacyFormat().match(f"{TS} DEBUG PATTERN_INCLUDE docs/a.txt is included", 4)

    assert rec is not None
    assert rec.segments == ("docs", "a.txt")
    assert rec.kind is EntryKind.FILE
    assert rec.size is None
    assert rec.line_no == 4


def test_duplicacy_directory_line_with_pattern() -> None:
    """A trailing slash marks a directory; the pattern suffix is ignored."""
    line = f"{TS} DEBUG PATTERN_INCLUDE docs/sub/ is included by pattern +docs/*"
    rec = DuplicacyFormat().match(line)

    assert rec is not None
    assert rec.segments == ("docs", "sub")
    assert rec.kind is EntryKind.DIRECTORY


def test_duplicacy_path_with_spaces() -> None:
    rec = DuplicacyFormat().match(f"{TS} DEBUG PATTERN_INCLUDE My Files/report 1.pdf is included")

    assert rec is not None
    assert rec.segments == ("My Files", "report 1.pdf")


def test_duplicacy_ignores_other_lines_but_claims_them() -> None:
    """Other Duplicacy diagnostics are not entries but belong to the format."""
    fmt = DuplicacyFormat()
    line = f"{TS} INFO BACKUP_END Backup for /data at revision 12 completed"

    assert fmt.match(line) is None
    assert fmt.claims(line) is True
    assert fmt.claims("dir/a.txt 100") is False


def test_duplicacy_excluded_line_is_not_an_entry() -> None:
    line = f"{TS} DEBUG PATTERN_EXCLUDE cache/x.tmp is excluded by pattern -cache/"
    assert DuplicacyFormat().match(line) is None

# -----------------------------------------------------------------------------
# SIZED FORMAT
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "line, segments, size",
    [
        ("dir/a.txt 100", ("dir", "a.txt"), 100),
        ("f.txt\t10", ("f.txt",), 10),
        ("My Files/report 1.pdf 2048", ("My Files", "report 1.pdf"), 2048),
        ("./x/y 0  ", ("x", "y"), 0),
    ],
)
def test_sized_extracts_path_and_size(line, segments, size) -> None:
    """The parser returns exactly the path and size encoded in the line."""
    rec = SizedFormat().match(line)

    assert rec is not None
    assert rec.segments == segments
    assert rec.size == size
    assert rec.kind is EntryKind.FILE


def test_sized_directory_entry() -> None:
    rec = SizedFormat().match("dir/sub/ 4096")

    assert rec is not None
    assert rec.kind is EntryKind.DIRECTORY
    assert rec.segments == ("dir", "sub")


@pytest.mark.parametrize("line", ["Listing source directory", "done.", "size: unknown", "   "])
def test_sized_ignores_unrelated_lines(line) -> None:
    assert SizedFormat().match(line) is None


@pytest.mark.parametrize("line", ["dir/a.txt 12abc", "dir/a.txt -5", "dir/a.txt 1.5", "dir/a.txt 1_000"])
def test_sized_malformed_size_raises(line) -> None:
    with pytest.raises(LineParseError):
        SizedFormat().match(line, 9)


def test_sized_guessing_ignores_non_integer_tokens() -> None:
    """In 'auto' mode a trailing '50%' is unrelated output, not a broken entry."""
    fmt = SizedFormat(guessing=True)

    assert fmt.match("Uploaded 50%") is None
    assert fmt.match("dir/a.txt 1_000") is None
    with pytest.raises(LineParseError):
        fmt.match("dir/a.txt -5")

# -----------------------------------------------------------------------------
# SHARED NORMALIZATION
# -----------------------------------------------------------------------------

def test_split_path_drops_empty_and_dot_segments() -> None:
    segments, kind = split_path("/a//./b/")

    assert segments == ("a", "b")
    assert kind is EntryKind.DIRECTORY


@pytest.mark.parametrize("raw", ["/", ".", "./", "a/../b"])
def test_split_path_rejects_invalid_paths(raw) -> None:
    with pytest.raises(LineParseError):
        split_path(raw, 3)


def test_parse_size_error_carries_line_number() -> None:
    with pytest.raises(LineParseError) as exc_info:
        parse_size("ten", 42)

    assert exc_info.value.line_no == 42
    assert "line 42" in str(exc_info.value)


def test_split_path_accepts_maximum_depth() -> None:
    raw = "/".join(["d"] * (MAX_PATH_DEPTH - 1) + ["f"])

    segments, kind = split_path(raw)

    assert len(segments) == MAX_PATH_DEPTH
    assert kind is EntryKind.FILE


def test_split_path_rejects_paths_past_maximum_depth() -> None:
    with pytest.raises(LineParseError) as exc_info:
        split_path("d/" * 1200 + "f", 5)

    assert exc_info.value.line_no == 5
    assert "levels deep" in str(exc_info.value)


def test_parse_size_rejects_non_ascii_digits() -> None:
    with pytest.raises(LineParseError):
        parse_size("١٢")
