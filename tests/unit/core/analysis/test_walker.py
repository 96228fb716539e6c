from __future__ import annotations

"""
Unit tests for the Visibility-Propagating Walker.

Builds declaration lists by hand to verify visibility propagation through
nested modules, test-guard pruning, and the public-only toggle.
"""

from typing import List, Optional

from reflectaudit.core.analysis.ast_parser import parse_source
from reflectaudit.core.analysis.detector import DetectionRules
from reflectaudit.core.analysis.walker import collect_findings
from reflectaudit.domain.syntax_models import Attribute, SyntaxItem

RULES = DetectionRules()
QUALIFYING = [Attribute("derive", "(Reflect, Component)")]


def _type(name: str, public: bool = True, kind: str = "struct", attrs=None) -> SyntaxItem:
    return SyntaxItem(kind=kind, name=name, is_public=public,
                      attributes=QUALIFYING if attrs is None else attrs)


def _mod(name: str, items: Optional[List[SyntaxItem]], public: bool = True, attrs=None) -> SyntaxItem:
    return SyntaxItem(kind="mod", name=name, is_public=public, attributes=attrs or [], items=items)


def test_reports_public_structs_and_enums() -> None:
    items = [_type("Player"), _type("State", kind="enum"), SyntaxItem(kind="other")]
    assert collect_findings(items, "game::player", RULES) == [
        "game::player::Player",
        "game::player::State",
    ]


def test_skips_registered_and_private_types() -> None:
    items = [
        _type("Registered", attrs=QUALIFYING + [Attribute("reflect", "(Component)")]),
        _type("Private", public=False),
    ]
    assert collect_findings(items, "m", RULES) == []


def test_nested_public_modules_extend_the_path() -> None:
    items = [_mod("ui", [_mod("widgets", [_type("Anchor")])])]
    assert collect_findings(items, "hud", RULES) == ["hud::ui::widgets::Anchor"]


def test_private_ancestor_hides_public_descendants() -> None:
    items = [_mod("outer", [_mod("inner", [_type("Deep")])], public=False)]

    assert collect_findings(items, "m", RULES) == []
    assert collect_findings(items, "m", RULES, public_only=False) == ["m::outer::inner::Deep"]


def test_parent_visibility_flag_applies_to_top_level() -> None:
    items = [_type("Player")]
    assert collect_findings(items, "m", RULES, parent_is_public=False) == []


def test_test_guarded_module_is_always_skipped() -> None:
    guarded = _mod("tests", [_type("Harness")], attrs=[Attribute("cfg", "(test)")])

    assert collect_findings([guarded], "m", RULES) == []
    assert collect_findings([guarded], "m", RULES, public_only=False) == []


def test_inner_test_guard_skips_inline_module() -> None:
    items = parse_source(
        "pub mod t {\n"
        "    #![cfg(test)]\n"
        "    #[derive(Reflect, Component)]\n"
        "    pub struct A;\n"
        "}\n"
    )

    assert items is not None
    assert collect_findings(items, "m", RULES) == []
    assert collect_findings(items, "m", RULES, public_only=False) == []


def test_module_without_inline_body_is_ignored() -> None:
    assert collect_findings([_mod("player", None)], "m", RULES) == []


def test_public_only_disabled_reports_everything_qualifying() -> None:
    items = [_type("A", public=False), _mod("hidden", [_type("B", public=False)], public=False)]
    assert collect_findings(items, "m", RULES, public_only=False) == ["m::A", "m::hidden::B"]


def test_walker_returns_fresh_lists() -> None:
    items = [_type("Player")]
    first = collect_findings(items, "m", RULES)
    first.append("mutated")
    assert collect_findings(items, "m", RULES) == ["m::Player"]
