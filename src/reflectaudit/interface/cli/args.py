from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types, and defaults. Provides logic to translate raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the reflectaudit CLI.

    Every argument is optional; running without arguments audits the
    Cargo project in the current directory.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="reflectaudit",
        description=(
            "Report Rust types deriving Reflect and Component "
            "that lack #[reflect(Component)]."
        ),
    )

    # --- Project Layout ---
    p.add_argument(
        "-p", "--project-dir",
        dest="project_dir",
        default=None,
        help="Cargo project to audit (default: current directory).",
    )
    p.add_argument(
        "--src",
        dest="source_root",
        default=None,
        help="Local source root, relative to the project (default: src).",
    )

    # --- Discovery ---
    p.add_argument(
        "--prefix",
        dest="unit_prefix",
        default=None,
        help="Only scan dependency crates whose name starts with this prefix (default: bevy_).",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_dirs",
        default=None,
        help="Comma-separated directory names to skip (default: examples,tests,fixtures).",
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated source extensions (default: .rs).",
    )

    # --- Reporting Policy ---
    p.add_argument(
        "--all",
        dest="include_private",
        action="store_true",
        help="Report qualifying types regardless of visibility.",
    )

    # --- Metadata Source ---
    p.add_argument(
        "--metadata-file",
        dest="metadata_file",
        default=None,
        help="Read 'cargo metadata --format-version 1' output from this file instead of running cargo.",
    )
    p.add_argument(
        "--cargo",
        dest="cargo_bin",
        default=None,
        help="Cargo executable to run (default: cargo).",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file (default: <project>/reflectaudit.json).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore any configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Also write logs to a rotating file (reflectaudit.log when no path is given).",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the full result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["project_dir"] = args.project_dir
    overrides["source_root"] = args.source_root
    overrides["unit_prefix"] = args.unit_prefix
    overrides["metadata_file"] = args.metadata_file
    overrides["cargo_bin"] = args.cargo_bin

    if args.exclude_dirs is not None:
        overrides["exclude_dirs"] = _split_csv(args.exclude_dirs)
    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.include_private:
        overrides["public_only"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
