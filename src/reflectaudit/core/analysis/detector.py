from __future__ import annotations

"""
Annotation Detection Predicates.

Pure functions over a declaration's outer attributes: whether it declares
both audited capabilities through a derive list without the companion
registration attribute, and whether a module is guarded for tests only.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from reflectaudit.domain.constants import (
    DEFAULT_CAPABILITY_A,
    DEFAULT_CAPABILITY_ATTRIBUTE,
    DEFAULT_CAPABILITY_B,
    DEFAULT_REGISTRATION_ATTRIBUTE,
    DEFAULT_TEST_GUARD_ATTRIBUTE,
    DEFAULT_TEST_GUARD_MARKER,
)
from reflectaudit.domain.syntax_models import Attribute

# Leading path of an argument entry: `Component`, `bevy::ecs::Component`, `::x`
_ENTRY_PATH_RX = re.compile(r"^(?:::\s*)?[A-Za-z_][A-Za-z0-9_]*(?:\s*::\s*[A-Za-z_][A-Za-z0-9_]*)*")

_OPENERS = "([{"
_CLOSERS = ")]}"


@dataclass(frozen=True)
class DetectionRules:
    """
    Names driving the detection predicate.

    Attributes:
        capability_attribute: Attribute listing capabilities (``derive``).
        capability_a: First required capability (``Reflect``).
        capability_b: Second required capability (``Component``).
        registration_attribute: Companion attribute (``reflect``) that must
                                list ``capability_b``.
        test_guard_attribute: Conditional-compilation attribute (``cfg``).
        test_guard_marker: Substring marking a test-only guard (``test``).
    """
    capability_attribute: str = DEFAULT_CAPABILITY_ATTRIBUTE
    capability_a: str = DEFAULT_CAPABILITY_A
    capability_b: str = DEFAULT_CAPABILITY_B
    registration_attribute: str = DEFAULT_REGISTRATION_ATTRIBUTE
    test_guard_attribute: str = DEFAULT_TEST_GUARD_ATTRIBUTE
    test_guard_marker: str = DEFAULT_TEST_GUARD_MARKER


def rules_from_config(cfg: Dict[str, Any]) -> DetectionRules:
    """Build detection rules from a validated configuration dictionary."""
    return DetectionRules(
        capability_attribute=cfg["capability_attribute"],
        capability_a=cfg["capability_a"],
        capability_b=cfg["capability_b"],
        registration_attribute=cfg["registration_attribute"],
        test_guard_attribute=cfg["test_guard_attribute"],
        test_guard_marker=cfg["test_guard_marker"],
    )


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def attribute_carries(attributes: Iterable[Attribute], attribute_name: str, identifier: str) -> bool:
    """
    Check whether an attribute named ``attribute_name`` lists ``identifier``.

    An argument entry matches only when its path is exactly the single
    identifier; ``bevy::prelude::Component`` does not match ``Component``.

    Args:
        attributes: Outer attributes of a declaration.
        attribute_name: Attribute path to inspect (``derive``, ``reflect``).
        identifier: Identifier to look for in the argument list.

    Returns:
        bool: True if some matching attribute carries the identifier.
    """
    for attr in attributes:
        if attr.path != attribute_name or attr.arguments is None:
            continue
        if any(entry_path(entry) == identifier for entry in split_arguments(attr.arguments)):
            return True
    return False


def is_unregistered(attributes: List[Attribute], rules: DetectionRules) -> bool:
    """
    Decide whether a type declares both capabilities but lacks registration.

    Args:
        attributes: Outer attributes of a type definition.
        rules: Names of the attributes and capabilities involved.

    Returns:
        bool: ``declares_a and declares_b and not has_registration``.
    """
    declares_a = attribute_carries(attributes, rules.capability_attribute, rules.capability_a)
    declares_b = attribute_carries(attributes, rules.capability_attribute, rules.capability_b)
    has_registration = attribute_carries(attributes, rules.registration_attribute, rules.capability_b)
    return declares_a and declares_b and not has_registration


def has_test_guard(attributes: Iterable[Attribute], rules: DetectionRules) -> bool:
    """
    Detect a test-only conditional compilation guard.

    This is a literal substring match on the guard arguments, so
    ``cfg(not(test))`` counts as a guard as well.
    """
    return any(
        attr.path == rules.test_guard_attribute
        and attr.arguments is not None
        and rules.test_guard_marker in attr.arguments
        for attr in attributes
    )


# -----------------------------------------------------------------------------
# ARGUMENT PARSING HELPERS
# -----------------------------------------------------------------------------

def split_arguments(arguments: Optional[str]) -> List[str]:
    """
    Split a delimited token tree into its top-level comma separated entries.

    Args:
        arguments: Raw text including the outer delimiters, e.g. ``(A, B(c, d))``.

    Returns:
        List[str]: Stripped, non-empty entries (``["A", "B(c, d)"]``).
    """
    if not arguments or len(arguments) < 2:
        return []

    entries: List[str] = []
    current: List[str] = []
    depth = 0
    in_string = False
    escaped = False

    for ch in arguments[1:-1]:
        if in_string:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == "," and depth == 0:
            entries.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    entries.append("".join(current).strip())
    return [e for e in entries if e]


def entry_path(entry: str) -> str:
    """Return the whitespace-free leading path of an argument entry, or ''."""
    match = _ENTRY_PATH_RX.match(entry.strip())
    if not match:
        return ""
    return "".join(match.group(0).split())
