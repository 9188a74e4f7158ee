from __future__ import annotations

"""
Sized Path Listing Format.

One entry per line: a path, whitespace, then its size in bytes.

    dir/a.txt 100
    dir/sub/        0

The size is the last whitespace separated token and must start with a digit
or a minus sign for the line to be recognized; anything else is treated as
unrelated output. When guessing in 'auto' mode the token must be a plain
integer, so progress output such as 'Uploaded 50%' is not taken for a
malformed entry. A line such as 'Elapsed 12' still reads as a file.
"""

import re
from typing import Optional

from duplicacy2ncdu.core.parsing.formats.base import (
    SIZE_TOKEN_RE,
    LogFormat,
    parse_size,
    split_path,
)
from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.tree_models import LogRecord

SIZED_LINE_RE = re.compile(r"^(?P<path>\S.*?)\s+(?P<size>-?\d\S*)\s*$")


class SizedFormat(LogFormat):
    """
    '<path> <size>' listings.
    """

    name = const.FORMAT_SIZED

    def match(self, line: str, line_no: int = 0) -> Optional[LogRecord]:
        m = SIZED_LINE_RE.match(line)
        if not m:
            return None
        if self.guessing and not SIZE_TOKEN_RE.fullmatch(m.group("size")):
            return None

        segments, kind = split_path(m.group("path"), line_no)
        size = parse_size(m.group("size"), line_no)
        return LogRecord(segments=segments, kind=kind, size=size, line_no=line_no)
