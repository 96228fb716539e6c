from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, project config file, and CLI
overrides), audit execution, and result rendering. Diagnostics go to
stderr; stdout carries only the findings dump.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from reflectaudit.core.pipeline.engine import run_audit
from reflectaudit.core.pipeline.stages.validator import validate_config
from reflectaudit.domain.config import get_default_config, load_config
from reflectaudit.infra.fs import normalize_path
from reflectaudit.infra.logging import cli_logging_config, configure_logging, get_logger, shutdown_logging
from reflectaudit.interface.cli import args as cli_args

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
        int: Process exit code (0 success, 1 failure, 2 bad project path).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console stderr, optional rotating file)
    configure_logging(cli_logging_config(args.debug, args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults vs project config file)
    project_dir = normalize_path(args.project_dir, os.getcwd())
    if args.use_defaults:
        base_conf = get_default_config()
        base_conf["project_dir"] = project_dir
    else:
        base_conf = load_config(project_dir, args.config_path)

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    # Paths typed on the command line are relative to the shell, not the project
    if overrides.get("metadata_file"):
        overrides["metadata_file"] = normalize_path(overrides["metadata_file"], os.getcwd())
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 6. Pre-flight input verification
    if not os.path.isdir(project_dir):
        msg = f"Project directory does not exist: {project_dir}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    # 7. Audit execution phase
    try:
        result = run_audit(clean_conf)
    except KeyboardInterrupt:
        logger.warning("Audit interrupted by user.")
        return 130

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    # 8. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        print(format_findings(result.findings))
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged and ``None`` means "not given on the CLI".
    """
    out = dict(base)
    keys_to_merge = [
        "project_dir", "source_root", "unit_prefix", "exclude_dirs",
        "extensions", "public_only", "metadata_file", "cargo_bin",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def format_findings(findings: List[str]) -> str:
    """
    Render findings as a single-line debug list: ``["a::B", "c::D"]``.
    """
    return json.dumps(list(findings), ensure_ascii=False)


if __name__ == "__main__":
    sys.exit(main())
