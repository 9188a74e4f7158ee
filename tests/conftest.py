from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared log samples and a miniature backup source tree.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Callable, Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

DUPLICACY_TS = "2024-05-01 10:00:00.123"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def include_line() -> Callable[..., str]:
    """
    Return a factory for Duplicacy PATTERN_INCLUDE log lines.

    Returns:
        Callable: f(path, pattern=None) -> log line.
    """
    def _make(path: str, pattern: str | None = None) -> str:
        suffix = f" by pattern {pattern}" if pattern else ""
        return f"{DUPLICACY_TS} DEBUG PATTERN_INCLUDE {path} is included{suffix}\n"

    return _make


@pytest.fixture
def sized_log() -> List[str]:
    """A small '<path> <size>' listing mixed with unrelated output."""
    return [
        "Listing source directory\n",
        "dir/a.txt 100\n",
        "\n",
        "dir/b.txt 50\n",
        "top.bin 7\n",
        "done.\n",
    ]


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """
    Create a dummy backup source.

    Structure:
    /source
      /docs
        a.txt   (10 bytes)
        b.txt   (25 bytes)
      root.txt  (3 bytes)
    """
    root = tmp_path / "source"
    docs = root / "docs"
    docs.mkdir(parents=True)
    (docs / "a.txt").write_bytes(b"x" * 10)
    (docs / "b.txt").write_bytes(b"y" * 25)
    (root / "root.txt").write_bytes(b"abc")
    return root


@pytest.fixture(autouse=True)
def reset_app_logging() -> Iterator[None]:
    """Detach application handlers left behind by CLI invocations."""
    yield
    from duplicacy2ncdu.infra.logging import shutdown_logging
    shutdown_logging()
    logging.getLogger().setLevel(logging.WARNING)
