from __future__ import annotations

"""
Conversion Error Taxonomy.

Per-line errors (parse, conflict, stat) are recoverable: the offending line 
is skipped and the tree is left untouched. Run-level errors (no entries, 
output failure) abort the conversion.
"""

from typing import Optional


class ConversionError(Exception):
    """Base class for every failure raised by the conversion pipeline."""


# -----------------------------------------------------------------------------
# PER-LINE (RECOVERABLE) ERRORS
# -----------------------------------------------------------------------------

class LineError(ConversionError):
    """
    A failure attributable to a single input line.

    Attributes:
        line_no: 1-based line number in the input stream (0 when unknown).
        reason: Human readable cause.
    """

    def __init__(self, reason: str, line_no: int = 0) -> None:
        self.reason = reason
        self.line_no = line_no
        super().__init__(f"line {line_no}: {reason}" if line_no else reason)


class LineParseError(LineError):
    """A recognized log line carries a malformed path or size field."""


class TreeConflictError(LineError):
    """A record contradicts the kind of a node already present in the tree."""


class StatLookupError(LineError):
    """The size of an entry could not be resolved from the source tree."""


# -----------------------------------------------------------------------------
# RUN-LEVEL (FATAL) ERRORS
# -----------------------------------------------------------------------------

class NoEntriesError(ConversionError):
    """The input was empty or contained no recognizable entries."""


class OutputWriteError(ConversionError):
    """The export document could not be written to its destination."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class ConfigError(ConversionError):
    """A configuration file could not be read or is structurally invalid."""
