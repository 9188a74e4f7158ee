from __future__ import annotations

from .base import LogFormat, parse_size, split_path
from .duplicacy import DuplicacyFormat
from .sized import SizedFormat

__all__ = [
    "LogFormat",
    "DuplicacyFormat",
    "SizedFormat",
    "split_path",
    "parse_size",
]
