from __future__ import annotations

"""
Line Parser.

Routes each input line to the configured log format strategy (or, in 'auto'
mode, to every registered format in turn) and yields structured records.
Unrecognized lines are skipped silently; malformed entries raise
LineParseError for the caller to skip or abort on.
"""

import logging
from typing import Dict, List, Optional, Type

from duplicacy2ncdu.core.parsing.formats import DuplicacyFormat, LogFormat, SizedFormat
from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.tree_models import LogRecord

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FORMAT REGISTRY
# -----------------------------------------------------------------------------

_FORMATS: Dict[str, Type[LogFormat]] = {
    DuplicacyFormat.name: DuplicacyFormat,
    SizedFormat.name: SizedFormat,
}


def available_formats() -> List[str]:
    """Return the names accepted by '--format', 'auto' first."""
    return [const.FORMAT_AUTO] + list(_FORMATS)


def resolve_formats(format_name: str) -> List[LogFormat]:
    """
    Instantiate the strategies a parser should try, in order.

    Args:
        format_name: A registered format name or 'auto'.

    Returns:
        List[LogFormat]: Strategy instances.

    Raises:
        ValueError: If the name is unknown.
    """
    if format_name == const.FORMAT_AUTO:
        return [_FORMATS[name](guessing=True) for name in const.AUTO_FORMAT_ORDER]

    fmt_cls = _FORMATS.get(format_name)
    if fmt_cls is None:
        raise ValueError(
            f"Unknown log format '{format_name}'. Expected one of: {', '.join(available_formats())}"
        )
    return [fmt_cls()]

# -----------------------------------------------------------------------------
# PARSER
# -----------------------------------------------------------------------------

class LineParser:
    """
    Stateless line-to-record translator bound to a set of formats.
    """

    def __init__(self, format_name: str = const.FORMAT_AUTO) -> None:
        self.format_name = format_name
        self._formats = resolve_formats(format_name)
        logger.debug(f"Line parser using formats: {[f.name for f in self._formats]}")

    def parse_line(self, line: str, line_no: int = 0) -> Optional[LogRecord]:
        """
        Parse one line.

        Args:
            line: Raw line, with or without its line terminator.
            line_no: 1-based line number.

        Returns:
            Optional[LogRecord]: The extracted record, or None for unrelated lines.

        Raises:
            LineParseError: On a recognized line with a malformed field.
        """
        text = line.rstrip("\r\n")
        if not text.strip():
            return None

        for fmt in self._formats:
            record = fmt.match(text, line_no)
            if record is not None:
                return record
            if fmt.claims(text):
                return None
        return None
