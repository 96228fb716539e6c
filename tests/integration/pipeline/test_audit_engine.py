from __future__ import annotations

"""
Integration tests for the audit pipeline engine.

Runs discovery, loading, resolution, and walking over the synthetic Cargo
workspace from conftest, using a metadata document instead of cargo.
"""

from pathlib import Path
from typing import Dict
from unittest.mock import patch

from reflectaudit.core.pipeline.engine import run_audit


def _config(ws: Dict[str, Path], **extra):
    cfg = {"project_dir": str(ws["project"]), "metadata_file": str(ws["metadata"])}
    cfg.update(extra)
    return cfg


def test_full_audit_reports_local_and_dependency_types(cargo_workspace: Dict[str, Path]) -> None:
    result = run_audit(_config(cargo_workspace))

    assert result.ok
    assert set(result.findings) == {
        "player::Player",
        "bevy_hud::src::lib::widgets::Anchor",
    }
    assert result.summary["units"] == 3
    assert result.summary["units_scanned"] == 1


def test_audit_is_repeatable_as_a_set(cargo_workspace: Dict[str, Path]) -> None:
    first = run_audit(_config(cargo_workspace))
    second = run_audit(_config(cargo_workspace))
    assert set(first.findings) == set(second.findings)


def test_registration_empties_the_findings(tmp_path: Path, metadata_writer) -> None:
    project = tmp_path / "solo"
    (project / "src").mkdir(parents=True)
    source = project / "src" / "lib.rs"
    source.write_text("#[derive(Component, Reflect)]\npub struct Marker;\n", encoding="utf-8")
    metadata = metadata_writer([("solo", project)])
    cfg = {"project_dir": str(project), "metadata_file": str(metadata)}

    assert run_audit(cfg).findings == ["lib::Marker"]

    source.write_text(
        "#[derive(Component, Reflect)]\n#[reflect(Component)]\npub struct Marker;\n",
        encoding="utf-8",
    )
    assert run_audit(cfg).findings == []


def test_relative_metadata_file_is_read_from_project_dir(
    cargo_workspace: Dict[str, Path], tmp_path: Path, monkeypatch
) -> None:
    project = cargo_workspace["project"]
    (project / "meta.json").write_text(cargo_workspace["metadata"].read_text(encoding="utf-8"), encoding="utf-8")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    result = run_audit({"project_dir": str(project), "metadata_file": "meta.json"})

    assert result.ok, result.error
    assert "player::Player" in result.findings
    assert result.summary["units"] == 3


def test_unparseable_files_are_skipped_silently(cargo_workspace: Dict[str, Path]) -> None:
    (cargo_workspace["project"] / "src" / "broken.rs").write_text("pub struct {", encoding="utf-8")

    result = run_audit(_config(cargo_workspace))

    assert result.ok
    assert result.summary["discovered"] == result.summary["parsed"] + 1


def test_prefix_widens_the_scan(cargo_workspace: Dict[str, Path]) -> None:
    result = run_audit(_config(cargo_workspace, unit_prefix=""))

    assert "serde::src::lib::Ignored" in result.findings
    # The local crate is scanned both as the project and as a unit
    assert "my_game::src::player::Player" in result.findings


def test_public_only_toggle(tmp_path: Path, metadata_writer) -> None:
    project = tmp_path / "vis"
    (project / "src").mkdir(parents=True)
    (project / "src" / "lib.rs").write_text(
        "mod outer {\n"
        "    pub mod inner {\n"
        "        #[derive(Reflect, Component)]\n"
        "        pub struct Hidden;\n"
        "    }\n"
        "}\n",
        encoding="utf-8",
    )
    cfg = {"project_dir": str(project), "metadata_file": str(metadata_writer([]))}

    assert run_audit(cfg).findings == []
    assert run_audit(dict(cfg, public_only=False)).findings == ["lib::outer::inner::Hidden"]


def test_metadata_failure_is_fatal(cargo_workspace: Dict[str, Path]) -> None:
    with patch("reflectaudit.core.services.metadata.subprocess.run", side_effect=FileNotFoundError("cargo")):
        result = run_audit({"project_dir": str(cargo_workspace["project"])})

    assert not result.ok
    assert "cargo metadata" in result.error
    assert result.findings == []


def test_invalid_project_directory(tmp_path: Path) -> None:
    result = run_audit({"project_dir": str(tmp_path / "missing")})
    assert not result.ok
    assert "Invalid project directory" in result.error
