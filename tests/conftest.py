from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A synthetic Cargo workspace (local crate plus dependency crates) and
   the matching 'cargo metadata' document, so no cargo toolchain is needed.
"""

import json
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Sample Sources
# -----------------------------------------------------------------------------
UNREGISTERED_PLAYER = """\
use bevy::prelude::*;

/// Controlled by the local user.
#[derive(Component, Reflect, Default)]
pub struct Player {
    pub speed: f32,
}
"""

REGISTERED_ENEMY = """\
#[derive(Component, Reflect)]
#[reflect(Component)]
pub struct Enemy;
"""


def write_files(root: Path, files: Dict[str, str]) -> None:
    """Create every relative path in ``files`` below ``root``."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


def write_metadata(path: Path, packages: List[Tuple[str, Path]]) -> Path:
    """Write a minimal 'cargo metadata --format-version 1' document."""
    doc = {
        "packages": [
            {
                "name": name,
                "version": "0.1.0",
                "id": f"{name} 0.1.0",
                "manifest_path": str(root / "Cargo.toml"),
            }
            for name, root in packages
        ],
        "workspace_members": [],
        "version": 1,
    }
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def cargo_workspace(tmp_path: Path) -> Dict[str, Path]:
    """
    Build a project with one local crate and two dependency crates.

    Layout:
        game/            local crate 'my_game'
        deps/bevy_hud/   dependency selected by the 'bevy_' prefix
        deps/serde/      dependency never scanned

    Returns:
        Dict[str, Path]: 'project', 'bevy_hud', 'serde' and 'metadata' paths.
    """
    project = tmp_path / "game"
    bevy_hud = tmp_path / "deps" / "bevy_hud"
    serde = tmp_path / "deps" / "serde"

    write_files(project, {
        "Cargo.toml": "[package]\nname = \"my_game\"\n",
        "src/main.rs": "mod player;\nfn main() {}\n",
        "src/player.rs": UNREGISTERED_PLAYER,
        "src/enemies/mod.rs": REGISTERED_ENEMY,
        "src/tests/helpers.rs": "#[derive(Component, Reflect)]\npub struct Fixture;\n",
        "examples/demo.rs": "#[derive(Component, Reflect)]\npub struct Demo;\n",
    })
    write_files(bevy_hud, {
        "Cargo.toml": "[package]\nname = \"bevy_hud\"\n",
        "src/lib.rs": (
            "pub mod widgets {\n"
            "    #[derive(Component, Reflect)]\n"
            "    pub enum Anchor { Top, Bottom }\n"
            "}\n"
            "#[cfg(test)]\n"
            "mod tests {\n"
            "    #[derive(Component, Reflect)]\n"
            "    pub struct Harness;\n"
            "}\n"
        ),
    })
    write_files(serde, {
        "Cargo.toml": "[package]\nname = \"serde\"\n",
        "src/lib.rs": "#[derive(Component, Reflect)]\npub struct Ignored;\n",
    })

    metadata = write_metadata(
        tmp_path / "metadata.json",
        [("my_game", project), ("bevy_hud", bevy_hud), ("serde", serde)],
    )

    return {"project": project, "bevy_hud": bevy_hud, "serde": serde, "metadata": metadata}


@pytest.fixture
def metadata_writer(tmp_path: Path) -> Callable[[List[Tuple[str, Path]]], Path]:
    """Return a helper writing a metadata document for arbitrary packages."""
    def _write(packages: List[Tuple[str, Path]]) -> Path:
        return write_metadata(tmp_path / "custom_metadata.json", packages)
    return _write
