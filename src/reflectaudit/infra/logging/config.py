from __future__ import annotations

"""
Logging Configuration Models.

Holds the settings consumed by the logging orchestrator and the factory the
CLI uses to derive them from its flags. An audit run is short and mostly
quiet, so rotation is small and console lines are prefixed with the tool
name to keep them apart from the findings dump on stdout.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_LOG_FILE_NAME = "reflectaudit.log"

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for one logging setup.

    Attributes:
        level: Minimum severity name (see ``_LEVEL_MAP``).
        console: Emit records on stderr.
        log_file: Rotating file target, or None for console only.
        max_bytes: Rotation threshold of the log file.
        backup_count: Rotated segments kept next to the log file.
        console_fmt: Format of stderr lines.
        file_fmt: Format of file entries, with source location.
        datefmt: Timestamp format of file entries.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 1

    console_fmt: str = "reflectaudit: %(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s"
    datefmt: str = "%Y-%m-%dT%H:%M:%S"


def cli_logging_config(debug: bool = False, log_file: Optional[str] = None) -> LoggingConfig:
    """
    Build the logging settings for a command line run.

    Args:
        debug: Lower the threshold to DEBUG so skipped files become visible.
        log_file: Optional rotating file path; an empty string selects
            ``DEFAULT_LOG_FILE_NAME`` in the working directory.

    Returns:
        LoggingConfig: Console logging plus the optional file target.
    """
    if log_file is not None and not log_file.strip():
        log_file = DEFAULT_LOG_FILE_NAME
    return LoggingConfig(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)
