from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and component-wise ancestry checks. Acts as an
abstraction over 'os.path' and 'pathlib' so that path comparisons behave
the same for relative and absolute inputs on every platform.
"""

import os
from pathlib import PurePath
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def path_parts(path: str) -> Tuple[str, ...]:
    """
    Split a path into its components after lexical normalization.

    Leading ``./`` segments and redundant separators are removed so that
    ``./src/lib.rs`` and ``src/lib.rs`` compare equal.
    """
    return PurePath(os.path.normpath(path)).parts


def strip_ancestor(path: str, ancestor: str) -> Optional[Tuple[str, ...]]:
    """
    Remove ``ancestor`` from the front of ``path`` component by component.

    Args:
        path: The descendant path.
        ancestor: The candidate ancestor directory.

    Returns:
        Optional[Tuple[str, ...]]: The remaining components, or None when
        ``ancestor`` is not a component-wise prefix of ``path``.
    """
    parts = path_parts(path)
    prefix = path_parts(ancestor)
    if parts[:len(prefix)] != prefix:
        return None
    return parts[len(prefix):]


def is_within(path: str, ancestor: str) -> bool:
    """Verify that ``ancestor`` is a component-wise prefix of ``path``."""
    return strip_ancestor(path, ancestor) is not None


def resolve_from(path: str, base_dir: str) -> str:
    """
    Resolve a possibly relative path against ``base_dir``.

    Unlike ``normalize_path``, relative inputs are anchored to ``base_dir``
    instead of the current working directory. Absolute inputs, including
    ones produced by ``~`` or variable expansion, are kept as they are.

    Args:
        path: Raw input path string (must be non-empty).
        base_dir: Directory relative inputs are anchored to.

    Returns:
        str: Normalized absolute path.
    """
    p = os.path.expandvars(os.path.expanduser(path.strip()))
    return os.path.abspath(os.path.join(base_dir, p))
