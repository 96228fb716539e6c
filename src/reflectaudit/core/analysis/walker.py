from __future__ import annotations

"""
Visibility-Propagating Declaration Walker.

Recursively descends inline module bodies carrying whether every ancestor
scope is externally reachable, and reports type definitions that satisfy
the detection predicate as fully-qualified paths.
"""

from typing import List

from reflectaudit.core.analysis.detector import DetectionRules, has_test_guard, is_unregistered
from reflectaudit.domain.constants import PATH_SEPARATOR
from reflectaudit.domain.syntax_models import KIND_MOD, SyntaxItem


def collect_findings(
        items: List[SyntaxItem],
        module_path: str,
        rules: DetectionRules,
        *,
        public_only: bool = True,
        parent_is_public: bool = True,
) -> List[str]:
    """
    Collect qualifying type definitions within a declaration list.

    Args:
        items: Declarations of a file or inline module body.
        module_path: Fully-qualified path of the enclosing scope.
        rules: Detection predicate configuration.
        public_only: Drop types not reachable from outside their unit.
        parent_is_public: Whether the enclosing scope chain is reachable.

    Returns:
        List[str]: ``module_path::TypeName`` entries in declaration order.
    """
    findings: List[str] = []

    for item in items:
        item_is_public = item.is_public and parent_is_public

        if item.is_type_definition:
            if not is_unregistered(item.attributes, rules):
                continue
            if public_only and not item_is_public:
                continue
            findings.append(f"{module_path}{PATH_SEPARATOR}{item.name}")

        elif item.kind == KIND_MOD:
            # Test-only modules are never part of the public surface
            if has_test_guard(item.attributes, rules):
                continue
            if public_only and not item_is_public:
                continue
            if item.items is None:
                continue
            findings.extend(collect_findings(
                item.items,
                f"{module_path}{PATH_SEPARATOR}{item.name}",
                rules,
                public_only=public_only,
                parent_is_public=item_is_public,
            ))

    return findings
