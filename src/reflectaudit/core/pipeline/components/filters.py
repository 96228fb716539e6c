from __future__ import annotations

"""
Source Discovery Filtering Rules.

Implements the directory pruning and file classification predicates used
while walking Cargo source trees: fixture, example, and test directories are
skipped, and only files carrying a Rust source extension are kept.
"""

import os
from typing import Iterable, List

from reflectaudit.domain.constants import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXTENSIONS

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_extensions() -> List[str]:
    """
    Get the default list of targeted file extensions.

    Returns:
        List[str]: List containing the Rust source extension.
    """
    return list(DEFAULT_EXTENSIONS)


def default_exclude_dirs() -> List[str]:
    """
    Get the directory names pruned during discovery.

    Returns:
        List[str]: Directory names whose whole subtree is never scanned.
    """
    return list(DEFAULT_EXCLUDED_DIRS)

# -----------------------------------------------------------------------------
# CLASSIFICATION LOGIC
# -----------------------------------------------------------------------------

def should_include_dir(dir_name: str, exclude_dirs: Iterable[str]) -> bool:
    """
    Decide whether a directory is descended into.

    Matching is by exact directory name, not by path.

    Args:
        dir_name: Base name of the directory.
        exclude_dirs: Names of directories to prune.

    Returns:
        bool: False if the directory is excluded.
    """
    return dir_name not in set(exclude_dirs)


def is_source_file(file_name: str, extensions: Iterable[str]) -> bool:
    """
    Classify a file as a candidate source file by its extension.

    Args:
        file_name: Target filename.
        extensions: Accepted extensions, dot-prefixed.

    Returns:
        bool: True if the file extension is accepted.
    """
    _, ext = os.path.splitext(file_name)
    return bool(ext) and ext in set(extensions)
