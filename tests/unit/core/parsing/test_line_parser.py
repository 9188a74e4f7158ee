from __future__ import annotations

"""
Unit tests for the Line Parser.

Verifies:
1. Format resolution by name and 'auto' ordering.
2. Blank and unrelated lines are skipped.
3. Duplicacy lines are never re-read as sized listings in 'auto' mode.
"""

import pytest

from duplicacy2ncdu.core.parsing.line_parser import (
    LineParser,
    available_formats,
    resolve_formats,
)
from duplicacy2ncdu.domain.errors import LineParseError

TS = "2024-05-01 10:00:00.123"


def test_available_formats_lists_auto_first() -> None:
    assert available_formats() == ["auto", "duplicacy", "sized"]


def test_resolve_auto_tries_duplicacy_then_sized() -> None:
    names = [f.name for f in resolve_formats("auto")]
    assert names == ["duplicacy", "sized"]


def test_resolve_unknown_format_raises() -> None:
    with pytest.raises(ValueError):
        resolve_formats("tar")


def test_parse_strips_line_terminators() -> None:
    rec = LineParser("sized").parse_line("dir/a.txt 100\r\n", 1)

    assert rec is not None
    assert rec.segments == ("dir", "a.txt")
    assert rec.size == 100


@pytest.mark.parametrize("line", ["", "\n", "   \t\n"])
def test_blank_lines_are_skipped(line) -> None:
    assert LineParser().parse_line(line) is None


def test_auto_handles_both_formats() -> None:
    parser = LineParser("auto")

    dup = parser.parse_line(f"{TS} DEBUG PATTERN_INCLUDE a/b.txt is included\n", 1)
    sized = parser.parse_line("a/c.txt 5\n", 2)

    assert dup is not None and dup.size is None
    assert sized is not None and sized.size == 5


def test_auto_does_not_reinterpret_duplicacy_diagnostics() -> None:
    """A Duplicacy line ending in a number must not become a sized entry."""
    line = f"{TS} INFO BACKUP_END Backup for /data at revision 12\n"
    assert LineParser("auto").parse_line(line, 1) is None


def test_duplicacy_only_ignores_sized_lines() -> None:
    assert LineParser("duplicacy").parse_line("dir/a.txt 100") is None


def test_malformed_line_propagates_error() -> None:
    with pytest.raises(LineParseError):
        LineParser("auto").parse_line("dir/a.txt -5", 7)


def test_auto_skips_progress_output_that_sized_rejects() -> None:
    """Only an explicit 'sized' parser treats a non-integer size as malformed."""
    assert LineParser("auto").parse_line("Uploaded 50%\n", 3) is None

    with pytest.raises(LineParseError):
        LineParser("sized").parse_line("Uploaded 50%\n", 3)


def test_underscore_separated_size_is_malformed() -> None:
    with pytest.raises(LineParseError):
        LineParser("sized").parse_line("a.txt 1_000\n", 1)
