from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed 
namespace into configuration overrides. Every flag is optional: with no 
arguments the tool reads stdin and writes the export to stdout.
"""

import argparse
from typing import Any, Dict

from duplicacy2ncdu.core.parsing.line_parser import available_formats
from duplicacy2ncdu.domain import constants as const

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the duplicacy2ncdu CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=const.APP_NAME,
        description=(
            "Convert a Duplicacy enumeration log (duplicacy -debug -log backup "
            "-enum-only) into an NCDU JSON export."
        ),
    )

    # --- Streams ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Log file to read ('-' for stdin, the default).",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Where to write the NCDU export ('-' for stdout, the default).",
    )

    # --- Parsing ---
    p.add_argument(
        "-f", "--format",
        dest="log_format",
        choices=available_formats(),
        default=None,
        help=(
            "Log line grammar to recognize (default: auto). In auto mode any "
            "non-Duplicacy line ending in a whole number, such as 'Elapsed 12', "
            "is read as a sized entry; pick a format explicitly for mixed output."
        ),
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first malformed entry instead of skipping it.",
    )

    # --- Tree anchoring ---
    p.add_argument(
        "--root",
        dest="source_root",
        default=None,
        help="Backup source directory; log paths are relative to it (default: cwd).",
    )
    p.add_argument(
        "--no-stat",
        action="store_true",
        help="Do not look up sizes on disk for entries logged without one.",
    )

    # --- Export metadata ---
    p.add_argument(
        "--timestamp",
        action="store_true",
        help="Record the current time in the export header.",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration defaults.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this file (rotated).",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report progress at INFO level.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {const.APP_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Unset options map to None so that the merge step keeps file/default values.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_path"] = args.input_path
    overrides["output_path"] = args.output_path
    overrides["log_format"] = args.log_format
    overrides["source_root"] = args.source_root

    if args.strict:
        overrides["strict"] = True
    if args.no_stat:
        overrides["resolve_sizes"] = False
    if args.timestamp:
        overrides["include_timestamp"] = True

    return overrides


def log_level_for(args: argparse.Namespace) -> str:
    """Map verbosity flags to a logging level name."""
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    return "WARNING"
