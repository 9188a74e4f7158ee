from __future__ import annotations

"""
Duplicacy Enumeration Log Format.

Recognizes the file inclusion lines printed by
`duplicacy -debug -log backup -enum-only`, e.g.:

    2024-05-01 10:00:00.123 DEBUG PATTERN_INCLUDE docs/a.txt is included
    2024-05-01 10:00:00.124 DEBUG PATTERN_INCLUDE docs/ is included by pattern +docs/

These lines carry no size; it is resolved later from the source tree.
"""

import re
from typing import Optional

from duplicacy2ncdu.core.parsing.formats.base import LogFormat, split_path
from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.tree_models import LogRecord

# Timestamp prefix shared by every line of a Duplicacy log
TIMESTAMP_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} ")

INCLUDE_LINE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} DEBUG PATTERN_INCLUDE "
    r"(?P<path>.*) is included(?: by pattern .*)?$"
)


class DuplicacyFormat(LogFormat):
    """
    PATTERN_INCLUDE lines of a Duplicacy debug log.
    """

    name = const.FORMAT_DUPLICACY

    def match(self, line: str, line_no: int = 0) -> Optional[LogRecord]:
        m = INCLUDE_LINE_RE.match(line)
        if not m:
            return None

        segments, kind = split_path(m.group("path"), line_no)
        return LogRecord(segments=segments, kind=kind, size=None, line_no=line_no)

    def claims(self, line: str) -> bool:
        return bool(TIMESTAMP_PREFIX_RE.match(line))
