from __future__ import annotations

"""
Configuration Domain Management.

Provides the default audit configuration and loads optional per-project
overrides stored as JSON next to the Cargo manifest. Missing or corrupted
files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from reflectaudit.domain.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CAPABILITY_A,
    DEFAULT_CAPABILITY_ATTRIBUTE,
    DEFAULT_CAPABILITY_B,
    DEFAULT_CARGO_BIN,
    DEFAULT_EXCLUDED_DIRS,
    DEFAULT_EXTENSIONS,
    DEFAULT_REGISTRATION_ATTRIBUTE,
    DEFAULT_SELF_MARKER,
    DEFAULT_SOURCE_ROOT,
    DEFAULT_TEST_GUARD_ATTRIBUTE,
    DEFAULT_TEST_GUARD_MARKER,
    DEFAULT_UNIT_PREFIX,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the audit pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Project Layout
        "project_dir": os.getcwd(),
        "source_root": DEFAULT_SOURCE_ROOT,
        "self_marker": DEFAULT_SELF_MARKER,

        # Discovery
        "unit_prefix": DEFAULT_UNIT_PREFIX,
        "exclude_dirs": list(DEFAULT_EXCLUDED_DIRS),
        "extensions": list(DEFAULT_EXTENSIONS),

        # Reporting Policy
        "public_only": True,

        # Detection Vocabulary
        "capability_attribute": DEFAULT_CAPABILITY_ATTRIBUTE,
        "capability_a": DEFAULT_CAPABILITY_A,
        "capability_b": DEFAULT_CAPABILITY_B,
        "registration_attribute": DEFAULT_REGISTRATION_ATTRIBUTE,
        "test_guard_attribute": DEFAULT_TEST_GUARD_ATTRIBUTE,
        "test_guard_marker": DEFAULT_TEST_GUARD_MARKER,

        # Metadata Source
        "metadata_file": "",
        "cargo_bin": DEFAULT_CARGO_BIN,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def get_config_path(project_dir: str) -> str:
    """Return the conventional location of the per-project config file."""
    return os.path.join(project_dir, CONFIG_FILE_NAME)


def load_config(project_dir: Optional[str] = None, config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration for a project, layered over the defaults.

    Args:
        project_dir: Project directory used to locate ``reflectaudit.json``.
        config_path: Explicit config file path; takes precedence.

    Returns:
        Dict[str, Any]: Defaults updated with the file contents, if any.
    """
    config = get_default_config()
    if project_dir:
        config["project_dir"] = project_dir

    path = config_path or get_config_path(config["project_dir"])
    if not os.path.exists(path):
        logger.debug(f"Config file not found at {path}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{path}'. Using defaults.")
        return config

    # A config file never relocates the project it lives in
    data.pop("project_dir", None)
    config.update(data)
    logger.debug(f"Configuration loaded from {path}")
    return config
