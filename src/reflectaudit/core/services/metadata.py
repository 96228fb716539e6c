from __future__ import annotations

"""
Compilation Unit Metadata Client.

Obtains the list of Cargo packages visible from a project, either by running
``cargo metadata`` or by reading a JSON document previously produced by it.
Any failure is fatal for the audit and surfaces as MetadataError.
"""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional

from reflectaudit.domain.constants import DEFAULT_CARGO_BIN
from reflectaudit.domain.models import CompilationUnit, MetadataError

logger = logging.getLogger(__name__)

CARGO_METADATA_ARGS = ["metadata", "--format-version", "1"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def fetch_units(
        project_dir: str,
        *,
        metadata_file: Optional[str] = None,
        cargo_bin: str = DEFAULT_CARGO_BIN,
) -> List[CompilationUnit]:
    """
    Resolve the compilation units of a project.

    Args:
        project_dir: Directory ``cargo metadata`` is executed in.
        metadata_file: Optional pre-computed ``cargo metadata`` JSON document.
        cargo_bin: Cargo executable name or path.

    Returns:
        List[CompilationUnit]: Units in the order reported by Cargo.

    Raises:
        MetadataError: If the metadata cannot be obtained or decoded.
    """
    if metadata_file:
        data = _read_metadata_file(metadata_file)
    else:
        data = _run_cargo_metadata(project_dir, cargo_bin)

    units = parse_units(data)
    logger.debug(f"Metadata reports {len(units)} compilation units")
    return units


def parse_units(data: Any) -> List[CompilationUnit]:
    """
    Extract compilation units from a decoded ``cargo metadata`` document.

    Args:
        data: Decoded JSON document.

    Returns:
        List[CompilationUnit]: One unit per package entry.

    Raises:
        MetadataError: If the document does not have the expected shape.
    """
    if not isinstance(data, dict) or not isinstance(data.get("packages"), list):
        raise MetadataError("Malformed cargo metadata: missing 'packages' list.")

    units: List[CompilationUnit] = []
    for i, package in enumerate(data["packages"]):
        name = package.get("name") if isinstance(package, dict) else None
        manifest = package.get("manifest_path") if isinstance(package, dict) else None
        if not isinstance(name, str) or not isinstance(manifest, str):
            raise MetadataError(f"Malformed cargo metadata: invalid package entry at index {i}.")
        units.append(CompilationUnit(name=name, manifest_path=manifest))
    return units


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _run_cargo_metadata(project_dir: str, cargo_bin: str) -> Dict[str, Any]:
    """Execute ``cargo metadata`` and decode its stdout."""
    cmd = [cargo_bin] + CARGO_METADATA_ARGS
    logger.debug(f"Running {' '.join(cmd)} in {project_dir}")
    try:
        proc = subprocess.run(
            cmd,
            cwd=project_dir,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
    except OSError as e:
        raise MetadataError(f"Failed to fetch cargo metadata: {e}") from e

    if proc.returncode != 0:
        detail = (proc.stderr or "").strip() or f"exit code {proc.returncode}"
        raise MetadataError(f"Failed to fetch cargo metadata: {detail}")

    try:
        return json.loads(proc.stdout)
    except ValueError as e:
        raise MetadataError(f"Failed to decode cargo metadata: {e}") from e


def _read_metadata_file(path: str) -> Dict[str, Any]:
    """Load a ``cargo metadata`` JSON document from disk."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise MetadataError(f"Cannot read metadata file '{path}': {e}") from e
    except ValueError as e:
        raise MetadataError(f"Failed to decode metadata file '{path}': {e}") from e
