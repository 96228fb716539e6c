from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV string parsing logic.
3. That running without arguments produces no overrides.
4. Derivation of logging settings from the logging flags.
"""

from reflectaudit.infra.logging import DEFAULT_LOG_FILE_NAME, cli_logging_config
from reflectaudit.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_no_arguments_means_no_overrides():
    args = parse_args([])
    overrides = args_to_overrides(args)

    assert all(v is None for v in overrides.values())
    assert "public_only" not in overrides
    assert args.json_output is False


def test_cli_simple_flags_mapping():
    args = parse_args(["--all", "--prefix", "avian", "--src", "crates/app/src", "-p", "/w"])
    overrides = args_to_overrides(args)

    assert overrides["public_only"] is False
    assert overrides["unit_prefix"] == "avian"
    assert overrides["source_root"] == "crates/app/src"
    assert overrides["project_dir"] == "/w"


def test_cli_csv_list_parsing():
    args = parse_args(["--ext", ".rs, .ron", "--exclude", "benches,examples"])
    overrides = args_to_overrides(args)

    assert overrides["extensions"] == [".rs", ".ron"]
    assert overrides["exclude_dirs"] == ["benches", "examples"]


def test_cli_empty_exclude_clears_exclusions():
    overrides = args_to_overrides(parse_args(["--exclude", ""]))
    assert overrides["exclude_dirs"] == []


def test_cli_metadata_source_arguments():
    args = parse_args(["--metadata-file", "meta.json", "--cargo", "/opt/cargo", "--log-file", "a.log"])
    overrides = args_to_overrides(args)

    assert overrides["metadata_file"] == "meta.json"
    assert overrides["cargo_bin"] == "/opt/cargo"
    assert args.log_file == "a.log"


def test_cli_bare_log_file_selects_default_name():
    args = parse_args(["--log-file"])
    cfg = cli_logging_config(args.debug, args.log_file)

    assert args.log_file == ""
    assert cfg.log_file == DEFAULT_LOG_FILE_NAME
    assert cfg.level == "INFO"


def test_cli_logging_config_follows_debug_flag():
    cfg = cli_logging_config(*_logging_flags(["--debug"]))

    assert cfg.level == "DEBUG"
    assert cfg.log_file is None
    assert cfg.console is True


def _logging_flags(arg_list):
    args = parse_args(arg_list)
    return args.debug, args.log_file
