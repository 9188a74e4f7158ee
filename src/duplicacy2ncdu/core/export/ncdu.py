from __future__ import annotations

"""
NCDU JSON Export Emitter.

Aggregates directory sizes and serializes the tree into the NCDU export
schema (format 1.2):

    [1, 2, {"progname": ..., "progver": ..., "timestamp": ...},
     [{"name": "/src", "asize": 150, "dsize": 150},
      [{"name": "dir", "asize": 150, "dsize": 150},
       {"name": "a.txt", "asize": 100, "dsize": 100},
       {"name": "b.txt", "asize": 50, "dsize": 50}]]]

The whole document is rendered to a string before anything is written, so a
failed run never leaves half a document on the output stream.
"""

import json
import logging
import os
import time
from typing import Any, Dict, List, Optional, TextIO, Tuple

from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.errors import OutputWriteError
from duplicacy2ncdu.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# AGGREGATION
# -----------------------------------------------------------------------------

def aggregate_sizes(node: TreeNode) -> int:
    """
    Post-order pass setting each directory's sizes to the sum of its children.

    Directories never keep a size of their own, so every directory ends up
    equal to the total of the files below it. Missing disk sizes count as
    the apparent size. The walk keeps its own stack, so deep trees do not
    hit the interpreter recursion limit.

    Args:
        node: Subtree root.

    Returns:
        int: The aggregated apparent size of the subtree.
    """
    if not node.is_dir:
        return node.size

    stack: List[Tuple[TreeNode, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in current.children.values() if child.is_dir)
            continue

        # Child directories are always finalized before their parent
        current.size = sum(child.size for child in current.children.values())
        current.disk_size = sum(_disk_size(child) for child in current.children.values())

    return node.size

# -----------------------------------------------------------------------------
# DOCUMENT CONSTRUCTION
# -----------------------------------------------------------------------------

def build_metadata(include_timestamp: bool = False, now: Optional[int] = None) -> Dict[str, Any]:
    """
    Build the export header object.

    The timestamp is omitted unless requested or pinned through
    SOURCE_DATE_EPOCH, keeping the output reproducible by default.

    Args:
        include_timestamp: Stamp the export with the current time.
        now: Explicit timestamp (seconds since epoch), mainly for tests.

    Returns:
        Dict[str, Any]: The metadata object.
    """
    meta: Dict[str, Any] = {
        "progname": const.APP_NAME,
        "progver": const.APP_VERSION,
    }

    pinned = _source_date_epoch()
    if now is not None:
        meta["timestamp"] = int(now)
    elif pinned is not None:
        meta["timestamp"] = pinned
    elif include_timestamp:
        meta["timestamp"] = int(time.time())

    return meta


def build_export(root: TreeNode, root_name: str, metadata: Dict[str, Any]) -> List[Any]:
    """
    Assemble the full export document from an aggregated tree.

    Args:
        root: Aggregated root directory.
        root_name: Name written for the root (the source root path).
        metadata: Header object from build_metadata.

    Returns:
        List[Any]: JSON-serializable export document.
    """
    return [
        const.EXPORT_MAJOR_VERSION,
        const.EXPORT_MINOR_VERSION,
        metadata,
        _dir_entry(root, root_name),
    ]


def render_export(document: List[Any]) -> str:
    """Serialize the document as compact JSON with a trailing newline."""
    return json.dumps(document, ensure_ascii=False, separators=(",", ":")) + "\n"


def write_export(text: str, stream: TextIO) -> None:
    """
    Write a rendered export and flush it.

    Raises:
        OutputWriteError: On any I/O failure (including a closed pipe).
    """
    try:
        stream.write(text)
        stream.flush()
    except OSError as e:
        raise OutputWriteError(f"Failed to write export: {e}", e) from e

    logger.debug(f"Export written ({len(text)} characters)")

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _dir_entry(node: TreeNode, name: str) -> List[Any]:
    """Build the nested array for a directory without recursing."""
    entry: List[Any] = [_info_block(node, name)]
    pending: List[Tuple[TreeNode, List[Any]]] = [(node, entry)]

    while pending:
        current, current_entry = pending.pop()
        for child_name, child in current.children.items():
            if child.is_dir:
                child_entry: List[Any] = [_info_block(child, child_name)]
                current_entry.append(child_entry)
                pending.append((child, child_entry))
            else:
                current_entry.append(_info_block(child, child_name))
    return entry


def _info_block(node: TreeNode, name: str) -> Dict[str, Any]:
    info: Dict[str, Any] = {
        "name": name,
        "asize": node.size,
        "dsize": _disk_size(node),
    }
    if node.device is not None:
        info["dev"] = node.device
    if node.inode is not None:
        info["ino"] = node.inode
    if node.nlink is not None:
        info["nlink"] = node.nlink
    if node.notreg:
        info["notreg"] = True
    return info


def _disk_size(node: TreeNode) -> int:
    return node.disk_size if node.disk_size is not None else node.size


def _source_date_epoch() -> Optional[int]:
    raw = os.environ.get(const.SOURCE_DATE_EPOCH_ENV, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {const.SOURCE_DATE_EPOCH_ENV}='{raw}'")
        return None
