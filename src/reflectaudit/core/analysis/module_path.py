from __future__ import annotations

"""
Module Path Resolution Service.

Maps a source file's location onto its fully-qualified logical module path.
Files inside a compilation unit's root are prefixed with the unit name;
files of the local project are resolved relative to its source root.

When unit roots are nested, the first unit in metadata order whose root
contains the file wins. That order is whatever the metadata resolver
reports and is not guaranteed to be stable.
"""

import logging
import os
from typing import Iterable, Optional, Sequence

from reflectaudit.domain.constants import DEFAULT_SELF_MARKER, DEFAULT_SOURCE_ROOT, PATH_SEPARATOR
from reflectaudit.domain.models import CompilationUnit
from reflectaudit.infra.fs import is_within, strip_ancestor

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_module_path(
        path: str,
        units: Iterable[CompilationUnit],
        source_root: str = DEFAULT_SOURCE_ROOT,
        self_marker: str = DEFAULT_SELF_MARKER,
) -> Optional[str]:
    """
    Resolve the fully-qualified module path of a source file.

    Args:
        path: File path as discovered.
        units: Compilation units in metadata order.
        source_root: Local source root used when no unit owns the file.
        self_marker: File stem representing a directory's own module.

    Returns:
        Optional[str]: ``unit::a::b`` for unit files, ``a::b`` for local
        files, or None when neither a unit root nor the source root contains
        the path.
    """
    unit = find_owning_unit(path, units)
    if unit is not None:
        relative = strip_ancestor(path, unit.root)
        if relative is None:
            return None
        return f"{unit.name}{PATH_SEPARATOR}{relative_path_to_module_path(relative, self_marker)}"

    relative = strip_ancestor(path, source_root)
    if relative is None:
        logger.debug(f"No compilation unit or source root contains {path}")
        return None
    return relative_path_to_module_path(relative, self_marker)


def find_owning_unit(path: str, units: Iterable[CompilationUnit]) -> Optional[CompilationUnit]:
    """
    Find the first unit whose root directory contains ``path``.

    Args:
        path: File path to locate.
        units: Compilation units in metadata order.

    Returns:
        Optional[CompilationUnit]: The owning unit, if any.
    """
    for unit in units:
        if is_within(path, unit.root):
            return unit
    return None


def relative_path_to_module_path(parts: Sequence[str], self_marker: str = DEFAULT_SELF_MARKER) -> str:
    """
    Convert relative path components into a module path.

    The extension of the terminal component is stripped, and a terminal
    self marker (``mod.rs``) is dropped so the file names its directory.

    Args:
        parts: Path components below the root (``("foo", "bar.rs")``).
        self_marker: File stem representing a directory's own module.

    Returns:
        str: ``::``-joined module path (``foo::bar``).
    """
    segments = list(parts)
    if segments:
        stem = os.path.splitext(segments[-1])[0]
        if stem == self_marker:
            segments.pop()
        else:
            segments[-1] = stem
    return PATH_SEPARATOR.join(segments)
