from __future__ import annotations

"""
Directory Tree Builder.

Inserts parsed log records into an in-memory tree keyed by path segments.
Intermediate directories are created on demand. A record is validated
against the existing tree before any node is created, so a conflicting
record leaves the tree exactly as it was.
"""

import logging
from typing import Optional

from duplicacy2ncdu.domain.errors import TreeConflictError
from duplicacy2ncdu.domain.tree_models import EntryKind, LogRecord, TreeNode

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Accumulates records under a single anonymous root directory.

    Attributes:
        root: Root directory node (name is empty).
        file_count: Number of distinct file nodes.
        dir_count: Number of directory nodes below the root.
    """

    def __init__(self) -> None:
        self.root = TreeNode(name="", kind=EntryKind.DIRECTORY)
        self.file_count = 0
        self.dir_count = 0

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def insert(self, record: LogRecord) -> TreeNode:
        """
        Insert a record and return its terminal node.

        A file reported twice keeps the last size and metadata. A directory
        record only guarantees the directory exists; its reported size is
        ignored because directory sizes are aggregated from children.

        Args:
            record: Parsed entry with non-empty segments.

        Returns:
            TreeNode: The file or directory node for the record's path.

        Raises:
            TreeConflictError: If the path passes through a file, or the kind
                               of an existing node differs from the record's.
        """
        self._validate(record)
        return self._attach(record)

    @property
    def is_empty(self) -> bool:
        return not self.root.children

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _validate(self, record: LogRecord) -> None:
        """Check the record against existing nodes without mutating anything."""
        node = self.root
        segments = record.segments

        for depth, name in enumerate(segments):
            child = node.children.get(name)
            if child is None:
                return

            is_last = depth == len(segments) - 1
            if not is_last and not child.is_dir:
                blocked = "/".join(segments[:depth + 1])
                raise TreeConflictError(
                    f"'{record.path}' lies below file '{blocked}'", record.line_no
                )
            if is_last and child.kind is not record.kind:
                raise TreeConflictError(
                    f"'{record.path}' reported as {record.kind.value} "
                    f"but already known as {child.kind.value}",
                    record.line_no,
                )
            node = child

    def _attach(self, record: LogRecord) -> TreeNode:
        """Create missing nodes below the validated prefix and update the leaf."""
        node = self.root
        for name in record.segments[:-1]:
            node = self._child_dir(node, name)

        leaf_name = record.segments[-1]
        leaf: Optional[TreeNode] = node.children.get(leaf_name)

        if record.is_dir:
            if leaf is None:
                leaf = TreeNode(name=leaf_name, kind=EntryKind.DIRECTORY)
                node.children[leaf_name] = leaf
                self.dir_count += 1
            if record.stat is not None:
                leaf.apply_stat(record.stat)
            return leaf

        if leaf is None:
            leaf = TreeNode(name=leaf_name, kind=EntryKind.FILE)
            node.children[leaf_name] = leaf
            self.file_count += 1
        else:
            logger.debug(f"Overwriting file entry '{record.path}' (line {record.line_no})")

        _update_file(leaf, record)
        return leaf

    def _child_dir(self, node: TreeNode, name: str) -> TreeNode:
        """Get or create the directory child called name."""
        child = node.children.get(name)
        if child is None:
            child = TreeNode(name=name, kind=EntryKind.DIRECTORY)
            node.children[name] = child
            self.dir_count += 1
        return child


def _update_file(leaf: TreeNode, record: LogRecord) -> None:
    """Overwrite size and metadata of a file node from a record."""
    leaf.size = record.size if record.size is not None else 0
    if record.stat is not None:
        leaf.apply_stat(record.stat)
    else:
        leaf.disk_size = None

