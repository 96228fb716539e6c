from __future__ import annotations

"""
Core audit pipeline.

This module coordinates the whole audit, strictly sequentially:
1. Validates configuration and the project directory.
2. Fetches compilation unit metadata (fatal on failure).
3. Discovers local and selected unit source files.
4. Loads and parses every file, dropping the ones that fail.
5. Resolves module paths and walks each tree for findings.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from reflectaudit.core.analysis.ast_parser import load_sources
from reflectaudit.core.analysis.detector import rules_from_config
from reflectaudit.core.analysis.module_path import resolve_module_path
from reflectaudit.core.analysis.walker import collect_findings
from reflectaudit.core.pipeline.stages.validator import validate_config
from reflectaudit.core.services.metadata import fetch_units
from reflectaudit.core.services.scanner import collect_source_files, collect_unit_files, select_units
from reflectaudit.domain.models import (
    AuditResult,
    MetadataError,
    create_error_result,
    create_success_result,
)
from reflectaudit.infra.fs import normalize_path, resolve_from

logger = logging.getLogger(__name__)


def run_audit(config: Optional[Dict[str, Any]]) -> AuditResult:
    """
    Execute the full audit pipeline.

    Args:
        config: The configuration dictionary (raw or partial).

    Returns:
        AuditResult: Status, findings, and execution counters.
    """
    logger.info("Audit started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    project_dir = normalize_path(cfg["project_dir"], os.getcwd())
    if not os.path.isdir(project_dir):
        msg = f"Invalid project directory: {project_dir}"
        logger.error(msg)
        return create_error_result(msg, project_dir)

    # -------------------------------------------------------------------------
    # 2) Compilation Unit Metadata
    # -------------------------------------------------------------------------
    metadata_file = cfg["metadata_file"]
    try:
        units = fetch_units(
            project_dir,
            metadata_file=resolve_from(metadata_file, project_dir) if metadata_file.strip() else None,
            cargo_bin=cfg["cargo_bin"],
        )
    except MetadataError as e:
        logger.error(str(e))
        return create_error_result(str(e), project_dir)

    # -------------------------------------------------------------------------
    # 3) Source Discovery
    # -------------------------------------------------------------------------
    # Local files stay project-relative so that they resolve against the
    # source root rather than against the project's own unit
    local_root = os.path.join(project_dir, cfg["source_root"])
    source_root_rel = os.path.relpath(local_root, project_dir)

    paths: List[str] = [
        os.path.relpath(p, project_dir)
        for p in collect_source_files(local_root, cfg["exclude_dirs"], cfg["extensions"])
    ]
    local_count = len(paths)
    paths.extend(collect_unit_files(units, cfg["unit_prefix"], cfg["exclude_dirs"], cfg["extensions"]))
    logger.info(f"Discovered {len(paths)} source files ({local_count} local).")

    # -------------------------------------------------------------------------
    # 4) Syntax Loading
    # -------------------------------------------------------------------------
    sources = load_sources(paths, base_dir=project_dir)
    logger.debug(f"Parsed {len(sources)} of {len(paths)} source files.")

    # -------------------------------------------------------------------------
    # 5) Resolution & Walking
    # -------------------------------------------------------------------------
    rules = rules_from_config(cfg)
    findings: List[str] = []
    resolved = 0

    for source in sources:
        module_path = resolve_module_path(source.path, units, source_root_rel, cfg["self_marker"])
        if module_path is None:
            continue
        resolved += 1
        findings.extend(collect_findings(
            source.items,
            module_path,
            rules,
            public_only=cfg["public_only"],
        ))

    summary = {
        "units": len(units),
        "units_scanned": len(select_units(units, cfg["unit_prefix"])),
        "discovered": len(paths),
        "parsed": len(sources),
        "resolved": resolved,
        "findings": len(findings),
    }
    logger.info(f"Audit finished with {len(findings)} findings.")
    return create_success_result(project_dir, findings, summary)
