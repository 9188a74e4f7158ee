from __future__ import annotations

"""
Domain Constants.

Centralizes application identity, export schema versioning, and process 
exit codes shared by the pipeline engine and the CLI interface.
"""

from typing import Final, Tuple

APP_NAME: Final[str] = "duplicacy2ncdu"
APP_VERSION: Final[str] = "0.1.0"

# -----------------------------------------------------------------------------
# EXPORT SCHEMA
# -----------------------------------------------------------------------------

# NCDU JSON export format 1.2 (readable by NCDU >= 1.16)
EXPORT_MAJOR_VERSION: Final[int] = 1
EXPORT_MINOR_VERSION: Final[int] = 2

# Unix stat block unit used to derive the on-disk size
STAT_BLOCK_SIZE: Final[int] = 512

# Reproducible-build convention for pinning the export timestamp
SOURCE_DATE_EPOCH_ENV: Final[str] = "SOURCE_DATE_EPOCH"

# -----------------------------------------------------------------------------
# LOG FORMATS
# -----------------------------------------------------------------------------

FORMAT_AUTO: Final[str] = "auto"
FORMAT_DUPLICACY: Final[str] = "duplicacy"
FORMAT_SIZED: Final[str] = "sized"

# Order in which 'auto' mode tries the concrete formats
AUTO_FORMAT_ORDER: Final[Tuple[str, ...]] = (FORMAT_DUPLICACY, FORMAT_SIZED)

# Deepest path accepted from the log; the export nests one array per level
MAX_PATH_DEPTH: Final[int] = 512

STDIO_PATH: Final[str] = "-"

# -----------------------------------------------------------------------------
# EXIT CODES
# -----------------------------------------------------------------------------

EXIT_OK: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_USAGE: Final[int] = 2
EXIT_WRITE_FAILURE: Final[int] = 3
EXIT_INTERRUPTED: Final[int] = 130
