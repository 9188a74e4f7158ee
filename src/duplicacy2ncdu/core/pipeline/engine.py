from __future__ import annotations

"""
Core conversion pipeline.

This module coordinates the whole translation in a single pass:
1. Validates configuration.
2. Streams the log, parsing each line into a record.
3. Resolves missing sizes from the source tree.
4. Inserts records into the directory tree.
5. Aggregates directory sizes and renders the export document.
6. Writes the document to its destination.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, Optional, TextIO

from duplicacy2ncdu.core.export.ncdu import (
    aggregate_sizes,
    build_export,
    build_metadata,
    render_export,
    write_export,
)
from duplicacy2ncdu.core.parsing.line_parser import LineParser
from duplicacy2ncdu.core.pipeline.stages.validator import validate_config
from duplicacy2ncdu.core.tree.builder import TreeBuilder
from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.conversion_models import (
    ConversionResult,
    ConversionStats,
    create_error_result,
    create_success_result,
)
from duplicacy2ncdu.domain.errors import (
    LineError,
    NoEntriesError,
    OutputWriteError,
    StatLookupError,
)
from duplicacy2ncdu.domain.tree_models import LogRecord
from duplicacy2ncdu.infra.fs import open_input, open_output, stat_entry

logger = logging.getLogger(__name__)


def run_conversion(
        config: Optional[Dict[str, Any]],
        *,
        input_stream: Optional[Iterable[str]] = None,
        output_stream: Optional[TextIO] = None,
) -> ConversionResult:
    """
    Execute the full log-to-export conversion.

    Args:
        config: The configuration dictionary (raw or partial).
        input_stream: Lines to read instead of opening 'input_path'.
        output_stream: Stream to write to instead of opening 'output_path'.

    Returns:
        ConversionResult: Object containing status, exit code and statistics.
    """
    logger.info("Conversion started.")

    # -------------------------------------------------------------------------
    # 1) Config Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    stats = ConversionStats()
    parser = LineParser(cfg["log_format"])

    # -------------------------------------------------------------------------
    # 2) Streaming Parse & Tree Build
    # -------------------------------------------------------------------------
    try:
        if input_stream is not None:
            builder = _consume(input_stream, parser, cfg, stats)
        else:
            with open_input(cfg["input_path"]) as f:
                builder = _consume(f, parser, cfg, stats)
        _ensure_entries(builder, stats, cfg)
    except LineError as e:
        msg = f"Aborting on malformed input ({e})"
        logger.error(msg)
        return create_error_result(msg, cfg, const.EXIT_FAILURE, stats)
    except NoEntriesError as e:
        logger.error(str(e))
        return create_error_result(str(e), cfg, const.EXIT_FAILURE, stats)
    except OSError as e:
        msg = f"Cannot read input '{cfg['input_path']}': {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, const.EXIT_USAGE, stats)

    # -------------------------------------------------------------------------
    # 3) Aggregation & Rendering
    # -------------------------------------------------------------------------
    if cfg["resolve_sizes"]:
        _stat_root(builder, cfg["source_root"])

    stats.total_size = aggregate_sizes(builder.root)
    stats.files = builder.file_count
    stats.directories = builder.dir_count

    metadata = build_metadata(include_timestamp=cfg["include_timestamp"])
    text = render_export(build_export(builder.root, cfg["source_root"], metadata))

    # -------------------------------------------------------------------------
    # 4) Emission
    # -------------------------------------------------------------------------
    try:
        if output_stream is not None:
            write_export(text, output_stream)
        else:
            _write_to_path(text, cfg["output_path"])
    except OutputWriteError as e:
        logger.critical(str(e))
        return create_error_result(str(e), cfg, const.EXIT_WRITE_FAILURE, stats)

    result = create_success_result(cfg, stats)
    logger.info(f"Conversion finished: {result.summary()}")
    return result

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _consume(
        lines: Iterable[str],
        parser: LineParser,
        cfg: Dict[str, Any],
        stats: ConversionStats,
) -> TreeBuilder:
    """
    Parse and insert every line of the stream.

    Per-line errors skip the line, or propagate when 'strict' is set.
    """
    builder = TreeBuilder()

    for line_no, line in enumerate(lines, start=1):
        stats.lines_read += 1
        try:
            record = parser.parse_line(line, line_no)
            if record is None:
                continue
            record = _resolve_size(record, cfg)
            builder.insert(record)
            stats.records += 1
        except LineError as e:
            stats.skipped += 1
            if cfg["strict"]:
                raise
            logger.warning(f"Skipping line {line_no}: {e.reason}")

    logger.debug(
        f"Read {stats.lines_read} lines: {stats.records} entries, {stats.skipped} skipped"
    )
    return builder


def _resolve_size(record: LogRecord, cfg: Dict[str, Any]) -> LogRecord:
    """
    Fill in size and metadata for records whose line carries no size.

    A file that cannot be stat'ed is a per-line error. A directory only
    loses its metadata, since its size comes from its children anyway.
    """
    if record.size is not None or not cfg["resolve_sizes"]:
        return record

    try:
        st = stat_entry(cfg["source_root"], record.segments, record.line_no)
    except StatLookupError as e:
        if record.is_dir:
            logger.debug(f"No metadata for directory '{record.path}': {e.reason}")
            return record
        raise

    return replace(record, size=st.size, stat=st)


def _stat_root(builder: TreeBuilder, source_root: str) -> None:
    """Attach the source root's own metadata to the root node, if it can be stat'ed."""
    try:
        builder.root.apply_stat(stat_entry(source_root, ()))
    except StatLookupError as e:
        logger.debug(f"No metadata for source root: {e}")


def _write_to_path(text: str, path: str) -> None:
    """Open the configured destination and write the rendered export."""
    try:
        with open_output(path) as out:
            write_export(text, out)
    except OSError as e:
        raise OutputWriteError(f"Cannot open output '{path}': {e}", e) from e


def _ensure_entries(builder: TreeBuilder, stats: ConversionStats, cfg: Dict[str, Any]) -> None:
    """Reject a run that produced an empty tree."""
    if builder.is_empty:
        raise NoEntriesError(
            f"No entries found in {stats.lines_read} input line(s) "
            f"using format '{cfg['log_format']}'"
        )
