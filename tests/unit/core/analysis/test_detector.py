from __future__ import annotations

"""
Unit tests for the Annotation Detection Predicates.

Verifies the capability/registration truth table, the exact-identifier
matching of attribute arguments, and test-guard detection.
"""

import itertools

import pytest

from reflectaudit.core.analysis.detector import (
    DetectionRules,
    attribute_carries,
    entry_path,
    has_test_guard,
    is_unregistered,
    split_arguments,
)
from reflectaudit.domain.syntax_models import Attribute

RULES = DetectionRules()


def _attrs(declares_a: bool, declares_b: bool, registered: bool):
    derives = [name for flag, name in ((declares_a, "Reflect"), (declares_b, "Component")) if flag]
    attrs = [Attribute("derive", f"(Debug, {', '.join(derives)})")]
    if registered:
        attrs.append(Attribute("reflect", "(Component, Default)"))
    return attrs


@pytest.mark.parametrize(
    "declares_a,declares_b,registered",
    list(itertools.product([True, False], repeat=3)),
)
def test_predicate_truth_table(declares_a: bool, declares_b: bool, registered: bool) -> None:
    """Only (A, B, no registration) qualifies."""
    expected = declares_a and declares_b and not registered
    assert is_unregistered(_attrs(declares_a, declares_b, registered), RULES) is expected


def test_capabilities_may_be_split_across_derives() -> None:
    attrs = [Attribute("derive", "(Reflect)"), Attribute("derive", "(Component)")]
    assert is_unregistered(attrs, RULES)


def test_qualified_paths_do_not_match() -> None:
    """`bevy::prelude::Component` is not the identifier `Component`."""
    attrs = [Attribute("derive", "(Reflect, bevy::prelude::Component)")]
    assert not attribute_carries(attrs, "derive", "Component")
    assert not is_unregistered(attrs, RULES)


def test_registration_on_wrong_attribute_is_ignored() -> None:
    attrs = [Attribute("derive", "(Reflect, Component)"), Attribute("serde", "(Component)")]
    assert is_unregistered(attrs, RULES)


def test_name_value_attribute_carries_nothing() -> None:
    assert not attribute_carries([Attribute("derive", None)], "derive", "Reflect")


def test_custom_rules() -> None:
    rules = DetectionRules(capability_a="Serialize", capability_b="Resource")
    attrs = [Attribute("derive", "(Serialize, Resource)")]
    assert is_unregistered(attrs, rules)
    attrs.append(Attribute("reflect", "(Resource)"))
    assert not is_unregistered(attrs, rules)


def test_split_arguments_respects_nesting_and_strings() -> None:
    entries = split_arguments('(Component, from_reflect = false, doc("a, b"), Nested(x, y))')
    assert entries == ["Component", "from_reflect = false", 'doc("a, b")', "Nested(x, y)"]


def test_split_arguments_handles_empty_input() -> None:
    assert split_arguments(None) == []
    assert split_arguments("()") == []
    assert split_arguments("(Reflect,)") == ["Reflect"]


def test_entry_path_normalizes_whitespace() -> None:
    assert entry_path("bevy :: Component") == "bevy::Component"
    assert entry_path("from_reflect = false") == "from_reflect"
    assert entry_path('"literal"') == ""


@pytest.mark.parametrize("arguments", ["(test)", "(not(test))", "(all(test, feature = \"x\"))"])
def test_test_guard_is_a_substring_match(arguments: str) -> None:
    assert has_test_guard([Attribute("cfg", arguments)], RULES)


def test_non_test_cfg_is_not_a_guard() -> None:
    assert not has_test_guard([Attribute("cfg", '(feature = "serialize")')], RULES)
    assert not has_test_guard([Attribute("cfg_attr", "(test, derive(Debug))")], RULES)
