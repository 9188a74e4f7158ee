from __future__ import annotations

"""
Base Definitions for Log Format Strategies.

Provides the abstract interface every supported enumeration-log grammar 
implements, plus the path and size field normalization shared by them.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.errors import LineParseError
from duplicacy2ncdu.domain.tree_models import EntryKind, LogRecord

SIZE_TOKEN_RE = re.compile(r"-?[0-9]+")


class LogFormat(ABC):
    """
    Abstract base class for a versioned log-line grammar.
    """

    #: Registry key used by the CLI '--format' option
    name: str = ""

    def __init__(self, guessing: bool = False) -> None:
        #: Set when the format is one of several candidates tried in 'auto' mode
        self.guessing = guessing

    @abstractmethod
    def match(self, line: str, line_no: int = 0) -> Optional[LogRecord]:
        """
        Extract an entry from a single log line.

        Args:
            line: Log line without its trailing newline.
            line_no: 1-based position of the line in the stream.

        Returns:
            Optional[LogRecord]: The record, or None if the line is not an entry.

        Raises:
            LineParseError: If the line is an entry with a malformed field.
        """
        pass

    def claims(self, line: str) -> bool:
        """
        Tell whether the line belongs to this format even when it is not an entry.

        A claimed line is never offered to the next format in 'auto' mode.
        """
        return False


# -----------------------------------------------------------------------------
# SHARED FIELD NORMALIZATION
# -----------------------------------------------------------------------------

def split_path(raw_path: str, line_no: int = 0) -> Tuple[Tuple[str, ...], EntryKind]:
    """
    Split a logged path into normalized segments and infer its kind.

    A trailing '/' marks a directory. Empty and '.' segments are dropped;
    '..' is rejected since it would escape the source root. Paths nested
    deeper than MAX_PATH_DEPTH are rejected too.

    Args:
        raw_path: Path as written in the log.
        line_no: Line number for error reporting.

    Returns:
        Tuple: (segments, kind).

    Raises:
        LineParseError: If no segment remains, a '..' segment is present,
                        or the path is too deep.
    """
    kind = EntryKind.DIRECTORY if raw_path.endswith("/") else EntryKind.FILE

    segments = []
    for part in raw_path.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            raise LineParseError(f"parent reference in path '{raw_path}'", line_no)
        segments.append(part)

    if not segments:
        raise LineParseError(f"empty path '{raw_path}'", line_no)
    if len(segments) > const.MAX_PATH_DEPTH:
        raise LineParseError(
            f"path nests {len(segments)} levels deep (limit {const.MAX_PATH_DEPTH})", line_no
        )

    return tuple(segments), kind


def parse_size(raw_size: str, line_no: int = 0) -> int:
    """
    Convert a size field into a non-negative byte count.

    Raises:
        LineParseError: If the field is not a plain non-negative integer.
    """
    if not SIZE_TOKEN_RE.fullmatch(raw_size):
        raise LineParseError(f"malformed size '{raw_size}'", line_no)

    value = int(raw_size)
    if value < 0:
        raise LineParseError(f"negative size '{raw_size}'", line_no)
    return value
