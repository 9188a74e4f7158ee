from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, metadata lookup for enumerated entries, and
opening of the input/output streams ('-' selects stdin/stdout).
"""

import os
import stat as stat_mod
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, TextIO

from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.errors import StatLookupError
from duplicacy2ncdu.domain.tree_models import EntryStat

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


def is_stdio(path: Optional[str]) -> bool:
    """Return True when the path designates a standard stream."""
    return not path or path == const.STDIO_PATH

# -----------------------------------------------------------------------------
# METADATA LOOKUP API
# -----------------------------------------------------------------------------

def stat_entry(source_root: str, segments: Sequence[str], line_no: int = 0) -> EntryStat:
    """
    Resolve size and identity metadata of an enumerated entry.

    Symlinks are not followed, matching what the backup tool records.

    Args:
        source_root: Directory the log paths are relative to.
        segments: Normalized path segments of the entry.
        line_no: Originating line number, used for error reporting.

    Returns:
        EntryStat: Resolved metadata.

    Raises:
        StatLookupError: If the entry cannot be stat'ed.
    """
    full_path = os.path.join(source_root, *segments)
    try:
        st = os.lstat(full_path)
    except OSError as e:
        raise StatLookupError(f"cannot stat '{full_path}': {e.strerror or e}", line_no) from e

    blocks = getattr(st, "st_blocks", None)
    disk_size = blocks * const.STAT_BLOCK_SIZE if blocks is not None else st.st_size
    notreg = not (stat_mod.S_ISDIR(st.st_mode) or stat_mod.S_ISREG(st.st_mode))

    return EntryStat(
        size=st.st_size,
        disk_size=disk_size,
        inode=st.st_ino,
        device=st.st_dev,
        nlink=st.st_nlink,
        notreg=notreg,
    )

# -----------------------------------------------------------------------------
# STREAM API
# -----------------------------------------------------------------------------

@contextmanager
def open_input(path: Optional[str]) -> Iterator[TextIO]:
    """
    Open the log source for line iteration.

    Undecodable bytes are replaced so that a stray binary line in the log
    cannot abort the conversion.

    Args:
        path: File path, or '-' / None for stdin.

    Yields:
        TextIO: A text stream positioned at the beginning of the log.
    """
    if is_stdio(path):
        stdin = sys.stdin
        if hasattr(stdin, "reconfigure"):
            stdin.reconfigure(errors="replace")
        yield stdin
        return

    with open(str(path), "r", encoding="utf-8", errors="replace") as f:
        yield f


@contextmanager
def open_output(path: Optional[str]) -> Iterator[TextIO]:
    """
    Open the export destination.

    Args:
        path: File path, or '-' / None for stdout.

    Yields:
        TextIO: A writable text stream.
    """
    if is_stdio(path):
        yield sys.stdout
        return

    with open(str(path), "w", encoding="utf-8") as f:
        yield f
