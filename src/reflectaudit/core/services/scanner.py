from __future__ import annotations

"""
Source Discovery Service.

Provides the traversal of the local project source tree and of the source
trees of external compilation units selected by name prefix. Produces a flat
list of candidate file paths; unreadable directories are skipped silently.
"""

import logging
import os
from typing import Iterable, List, Optional

from reflectaudit.core.pipeline.components.filters import (
    default_exclude_dirs,
    default_extensions,
    is_source_file,
    should_include_dir,
)
from reflectaudit.domain.models import CompilationUnit

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def collect_source_files(
        root: str,
        exclude_dirs: Optional[List[str]] = None,
        extensions: Optional[List[str]] = None,
) -> List[str]:
    """
    Recursively collect source files below ``root``.

    Excluded directories are pruned in place so their subtrees are never
    visited. Paths are returned joined onto ``root`` exactly as given, so a
    relative root yields relative paths.

    Args:
        root: Directory to walk.
        exclude_dirs: Directory names to prune (defaults to fixtures/examples/tests).
        extensions: Accepted source extensions (defaults to ``.rs``).

    Returns:
        List[str]: Candidate source file paths. Callers must not rely on order.
    """
    excludes = exclude_dirs if exclude_dirs is not None else default_exclude_dirs()
    exts = extensions if extensions is not None else default_extensions()

    found: List[str] = []
    for current, dirs, files in os.walk(root):
        # In-place directory pruning
        dirs[:] = [d for d in dirs if should_include_dir(d, excludes)]
        dirs.sort()
        files.sort()

        for file_name in files:
            if is_source_file(file_name, exts):
                found.append(os.path.join(current, file_name))

    logger.debug(f"Discovered {len(found)} source files under {root}")
    return found


def select_units(units: Iterable[CompilationUnit], prefix: str) -> List[CompilationUnit]:
    """
    Select the compilation units whose name starts with ``prefix``.

    Args:
        units: Units reported by the metadata resolver.
        prefix: Name prefix acting as a scope limiter.

    Returns:
        List[CompilationUnit]: Matching units in metadata order.
    """
    return [unit for unit in units if unit.name.startswith(prefix)]


def collect_unit_files(
        units: Iterable[CompilationUnit],
        prefix: str,
        exclude_dirs: Optional[List[str]] = None,
        extensions: Optional[List[str]] = None,
) -> List[str]:
    """
    Collect the source files of every unit selected by ``prefix``.

    Each selected unit is scanned from its manifest's parent directory.

    Args:
        units: Units reported by the metadata resolver.
        prefix: Name prefix acting as a scope limiter.
        exclude_dirs: Directory names to prune.
        extensions: Accepted source extensions.

    Returns:
        List[str]: Flat list of absolute source paths across selected units.
    """
    found: List[str] = []
    for unit in select_units(units, prefix):
        logger.debug(f"Scanning unit '{unit.name}' at {unit.root}")
        found.extend(collect_source_files(unit.root, exclude_dirs, extensions))
    return found
