from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and loading of optional JSON 
configuration files. Precedence: defaults < config file < CLI overrides.
"""

import json
import logging
import os
from typing import Any, Dict

from duplicacy2ncdu.domain import constants as const
from duplicacy2ncdu.domain.errors import ConfigError

logger = logging.getLogger(__name__)

# Keys a configuration file is allowed to set
CONFIG_KEYS = (
    "input_path",
    "output_path",
    "log_format",
    "source_root",
    "strict",
    "resolve_sizes",
    "include_timestamp",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the conversion pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Streams ('-' means stdin/stdout)
        "input_path": const.STDIO_PATH,
        "output_path": const.STDIO_PATH,

        # Parsing
        "log_format": const.FORMAT_AUTO,
        "strict": False,

        # Tree anchoring and size lookup
        "source_root": os.getcwd(),
        "resolve_sizes": True,

        # Export metadata
        "include_timestamp": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration overrides from a JSON file.

    Unknown keys are dropped with a warning so that a stale file cannot
    pollute the runtime configuration.

    Args:
        path: Path to a JSON object file.

    Returns:
        Dict[str, Any]: The recognized overrides (possibly empty).

    Raises:
        ConfigError: If the file is missing, unreadable or not a JSON object.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to load config '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a JSON object.")

    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key in CONFIG_KEYS:
            out[key] = value
        else:
            logger.warning(f"Ignoring unknown config key '{key}' in {path}")

    logger.debug(f"Loaded {len(out)} config keys from {path}")
    return out
