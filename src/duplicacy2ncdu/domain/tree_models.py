from __future__ import annotations

"""
Directory Tree Data Models.

Provides the parsed log record DTO and the recursive node type used to
rebuild the enumerated directory hierarchy before export.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

# -----------------------------------------------------------------------------
# PARSED LOG RECORDS
# -----------------------------------------------------------------------------

class EntryKind(str, Enum):
    """Kind of filesystem entry reported by a log line."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class EntryStat:
    """
    Filesystem metadata resolved for an entry.

    Attributes:
        size: Apparent size in bytes.
        disk_size: Allocated size in bytes.
        inode: Inode number.
        device: Device identifier.
        nlink: Hard link count.
        notreg: True when the entry is neither a directory nor a regular file.
    """
    size: int
    disk_size: int
    inode: Optional[int] = None
    device: Optional[int] = None
    nlink: Optional[int] = None
    notreg: bool = False


@dataclass(frozen=True)
class LogRecord:
    """
    A single entry extracted from the enumeration log.

    Attributes:
        segments: Normalized, non-empty path segments relative to the source root.
        kind: File or directory.
        size: Apparent size in bytes, or None when the line carries no size.
        line_no: 1-based line number the record came from.
        stat: Optional metadata resolved from the source tree.
    """
    segments: Tuple[str, ...]
    kind: EntryKind
    size: Optional[int] = None
    line_no: int = 0
    stat: Optional[EntryStat] = None

    @property
    def path(self) -> str:
        return "/".join(self.segments)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class TreeNode:
    """
    Mutable node of the reconstructed tree.

    Directory sizes are derived from their children during aggregation;
    file sizes are taken from the log (or the resolved stat).

    Attributes:
        name: Path segment ("" for the root).
        kind: File or directory.
        size: Apparent size in bytes.
        disk_size: Allocated size in bytes, None when unknown.
        inode: Optional inode number.
        device: Optional device identifier.
        nlink: Optional hard link count.
        notreg: Non-regular file flag.
        children: Insertion-ordered children (directories only).
    """
    name: str
    kind: EntryKind = EntryKind.DIRECTORY
    size: int = 0
    disk_size: Optional[int] = None
    inode: Optional[int] = None
    device: Optional[int] = None
    nlink: Optional[int] = None
    notreg: bool = False
    children: Dict[str, "TreeNode"] = field(default_factory=dict)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def apply_stat(self, stat: EntryStat) -> None:
        """Copy resolved filesystem metadata onto the node."""
        self.disk_size = stat.disk_size
        self.inode = stat.inode
        self.device = stat.device
        self.nlink = stat.nlink
        self.notreg = stat.notreg
