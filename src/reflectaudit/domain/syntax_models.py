from __future__ import annotations

"""
Syntax Tree Data Models.

Provides the parser-independent declaration nodes consumed by the
visibility-aware walker. Only the shapes the audit cares about are
modelled: type definitions, nested modules, and their outer attributes.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# ITEM KINDS
# -----------------------------------------------------------------------------
KIND_STRUCT = "struct"
KIND_ENUM = "enum"
KIND_MOD = "mod"
KIND_OTHER = "other"

TYPE_KINDS = (KIND_STRUCT, KIND_ENUM)


# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Attribute:
    """
    An outer attribute such as ``#[derive(Reflect, Component)]``.

    Attributes:
        path: Attribute path as written (``derive``, ``bevy::reflect``).
        arguments: Raw text of the delimited token tree, including the
                   delimiters, or None for bare / name-value attributes.
    """
    path: str
    arguments: Optional[str] = None


@dataclass(frozen=True)
class SyntaxItem:
    """
    A single declaration inside a file or inline module body.

    Attributes:
        kind: One of ``struct``, ``enum``, ``mod`` or ``other``.
        name: Declared identifier (empty for ``other``).
        is_public: True only for a bare ``pub`` visibility modifier.
        attributes: Outer attributes attached to the declaration.
        items: Inline body of a module; None for ``mod foo;`` and non-modules.
    """
    kind: str
    name: str = ""
    is_public: bool = False
    attributes: List[Attribute] = field(default_factory=list)
    items: Optional[List["SyntaxItem"]] = None

    @property
    def is_type_definition(self) -> bool:
        return self.kind in TYPE_KINDS
