from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to the default detection vocabulary (attribute
and capability names) and Cargo layout conventions.
"""

from typing import List

CONFIG_FILE_NAME = "reflectaudit.json"

# -----------------------------------------------------------------------------
# CARGO LAYOUT CONVENTIONS
# -----------------------------------------------------------------------------
DEFAULT_SOURCE_ROOT = "src"
DEFAULT_UNIT_PREFIX = "bevy_"
DEFAULT_SELF_MARKER = "mod"
DEFAULT_EXTENSIONS: List[str] = [".rs"]
DEFAULT_EXCLUDED_DIRS: List[str] = ["examples", "tests", "fixtures"]
DEFAULT_CARGO_BIN = "cargo"

# Separator used when rendering module paths and findings
PATH_SEPARATOR = "::"

# -----------------------------------------------------------------------------
# DETECTION VOCABULARY
# -----------------------------------------------------------------------------
DEFAULT_CAPABILITY_ATTRIBUTE = "derive"
DEFAULT_CAPABILITY_A = "Reflect"
DEFAULT_CAPABILITY_B = "Component"
DEFAULT_REGISTRATION_ATTRIBUTE = "reflect"
DEFAULT_TEST_GUARD_ATTRIBUTE = "cfg"
DEFAULT_TEST_GUARD_MARKER = "test"
