from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration 
sources (defaults, optional config file, CLI overrides), conversion and 
exit code mapping. Diagnostics go to stderr; stdout only ever carries a 
complete export document.
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from duplicacy2ncdu.core.pipeline.engine import run_conversion
from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.config import load_config
from duplicacy2ncdu.domain.errors import ConfigError
from duplicacy2ncdu.infra.fs import is_stdio
from duplicacy2ncdu.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from duplicacy2ncdu.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (stderr, optional file)
    logging_conf = LoggingConfig(
        level=cli_args.log_level_for(args),
        console=True,
        log_file=args.log_file,
    )
    configure_logging(logging_conf, force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: argparse.Namespace) -> int:
    """Resolve configuration, run the conversion and map the outcome."""
    # 3. Resolve base configuration (config file, if any)
    base_conf: Dict[str, Any] = {}
    if args.config_file:
        try:
            base_conf = load_config(args.config_file)
        except ConfigError as e:
            logger.error(str(e))
            return const.EXIT_USAGE

    # 4. Map and merge command-line overrides
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    logger.debug(f"Effective overrides: {raw_conf}")

    # 5. Conversion phase
    try:
        result = run_conversion(raw_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return const.EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Conversion failed unexpectedly: {e}", exc_info=True)
        return const.EXIT_FAILURE

    # 6. Outcome mapping (the engine has already logged the failure)
    if not result.ok:
        if result.exit_code == const.EXIT_WRITE_FAILURE and is_stdio(raw_conf.get("output_path")):
            _detach_stdout()
        return result.exit_code

    return const.EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of non-None override values into the base.

    Args:
        base: Values loaded from the config file.
        overrides: Values from the command line.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def _detach_stdout() -> None:
    """
    Point stdout at the null device after a broken pipe.

    Prevents a second BrokenPipeError when the interpreter flushes stdout
    on exit.
    """
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError, AttributeError):
        pass

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
