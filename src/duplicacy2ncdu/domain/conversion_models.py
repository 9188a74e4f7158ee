from __future__ import annotations

"""
Conversion Domain Data Models.

Defines the result object and factory functions used to communicate the
outcome of a conversion run between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from duplicacy2ncdu.domain import constants as const

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class ConversionStats:
    """
    Counters collected while streaming the log.

    Attributes:
        lines_read: Total lines consumed from the input.
        records: Lines recognized as entries and inserted into the tree.
        skipped: Recognized lines dropped because of a per-line error.
        files: File nodes in the final tree.
        directories: Directory nodes in the final tree (root excluded).
        total_size: Aggregated apparent size of the root.
    """
    lines_read: int = 0
    records: int = 0
    skipped: int = 0
    files: int = 0
    directories: int = 0
    total_size: int = 0


@dataclass(frozen=True)
class ConversionResult:
    """
    Unified result object of a complete conversion run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        exit_code: Process exit code the interface should return.
        format_name: Log format the parser was configured with.
        source_root: Root directory the tree is anchored on.
        stats: Streaming and tree counters.
    """
    ok: bool
    error: str
    exit_code: int
    format_name: str
    source_root: str
    stats: ConversionStats = field(default_factory=ConversionStats)

    def summary(self) -> Dict[str, Any]:
        """Flatten the result into a dictionary for logging."""
        return {
            "ok": self.ok,
            "format": self.format_name,
            "source_root": self.source_root,
            "lines_read": self.stats.lines_read,
            "records": self.stats.records,
            "skipped": self.stats.skipped,
            "files": self.stats.files,
            "directories": self.stats.directories,
            "total_size": self.stats.total_size,
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        exit_code: int = const.EXIT_FAILURE,
        stats: Optional[ConversionStats] = None,
) -> ConversionResult:
    """
    Create a failed conversion result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        exit_code: Exit code mapped from the failure category.
        stats: Counters collected before the failure.

    Returns:
        ConversionResult: An immutable error result object.
    """
    return ConversionResult(
        ok=False,
        error=error,
        exit_code=exit_code,
        format_name=cfg.get("log_format", const.FORMAT_AUTO),
        source_root=cfg.get("source_root", ""),
        stats=stats or ConversionStats(),
    )


def create_success_result(cfg: Dict[str, Any], stats: ConversionStats) -> ConversionResult:
    """
    Create a successful conversion result instance.

    Args:
        cfg: Final configuration used during execution.
        stats: Counters collected during the run.

    Returns:
        ConversionResult: An immutable success result object.
    """
    return ConversionResult(
        ok=True,
        error="",
        exit_code=const.EXIT_OK,
        format_name=cfg.get("log_format", const.FORMAT_AUTO),
        source_root=cfg.get("source_root", ""),
        stats=stats,
    )
