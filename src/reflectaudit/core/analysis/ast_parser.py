from __future__ import annotations

"""
Syntax Loading Service.

Reads Rust source files and parses them with tree-sitter into the
parser-independent declaration model. Loading is best-effort: files that
cannot be read or that do not parse cleanly are dropped without a
user-facing diagnostic.
"""

import logging
import os
from typing import Any, List, Optional

import tree_sitter
import tree_sitter_rust

from reflectaudit.domain.models import ParsedSource
from reflectaudit.domain.syntax_models import (
    KIND_ENUM,
    KIND_MOD,
    KIND_OTHER,
    KIND_STRUCT,
    Attribute,
    SyntaxItem,
)

logger = logging.getLogger(__name__)

# tree-sitter node types mapped onto declaration kinds
_ITEM_KINDS = {
    "struct_item": KIND_STRUCT,
    "enum_item": KIND_ENUM,
    "mod_item": KIND_MOD,
}

# Nodes that neither are declarations nor break an attribute run
_TRANSPARENT_NODES = frozenset({"line_comment", "block_comment", "inner_attribute_item"})

_RUST_LANGUAGE = tree_sitter.Language(tree_sitter_rust.language())
_PARSER: Optional[tree_sitter.Parser] = None


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_syntax_tree(file_path: str) -> Optional[List[SyntaxItem]]:
    """
    Read and parse a single Rust source file.

    Args:
        file_path: Path to the source file.

    Returns:
        Optional[List[SyntaxItem]]: Top-level declarations, or None when the
        file is unreadable, not valid UTF-8, or contains syntax errors.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping unreadable file {file_path}: {e}")
        return None

    items = parse_source(source)
    if items is None:
        logger.debug(f"Skipping unparseable file {file_path}")
    return items


def parse_source(source: str) -> Optional[List[SyntaxItem]]:
    """
    Parse Rust source text into declarations.

    Args:
        source: Complete file contents.

    Returns:
        Optional[List[SyntaxItem]]: Top-level declarations, or None if the
        syntax tree contains error or missing nodes.
    """
    tree = _get_parser().parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        return None
    return _convert_items(root.named_children)


def load_sources(paths: List[str], base_dir: str = "") -> List[ParsedSource]:
    """
    Load every path, keeping only the files that parsed.

    Args:
        paths: Discovered paths; relative ones are read from ``base_dir``.
        base_dir: Directory relative paths are anchored to.

    Returns:
        List[ParsedSource]: One entry per successfully parsed path, in input order.
    """
    sources: List[ParsedSource] = []
    for path in paths:
        items = load_syntax_tree(os.path.join(base_dir, path) if base_dir else path)
        if items is not None:
            sources.append(ParsedSource(path=path, items=items))
    return sources


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get_parser() -> tree_sitter.Parser:
    """Lazily build the shared Rust parser."""
    global _PARSER
    if _PARSER is None:
        _PARSER = tree_sitter.Parser()
        _PARSER.language = _RUST_LANGUAGE
    return _PARSER


def _text(node: Any) -> str:
    return node.text.decode("utf-8")


def _convert_items(nodes: List[Any]) -> List[SyntaxItem]:
    """
    Convert a sibling list of nodes into declarations.

    Outer attributes are siblings of the item they decorate in tree-sitter,
    so they are buffered until the next declaration node.
    """
    items: List[SyntaxItem] = []
    pending: List[Attribute] = []

    for node in nodes:
        if node.type == "attribute_item":
            attr = _convert_attribute(node)
            if attr is not None:
                pending.append(attr)
            continue
        if node.type in _TRANSPARENT_NODES:
            continue
        items.append(_convert_item(node, pending))
        pending = []

    return items


def _convert_item(node: Any, attributes: List[Attribute]) -> SyntaxItem:
    kind = _ITEM_KINDS.get(node.type, KIND_OTHER)
    if kind == KIND_OTHER:
        return SyntaxItem(kind=KIND_OTHER, attributes=list(attributes))

    name_node = node.child_by_field_name("name")
    body: Optional[List[SyntaxItem]] = None
    if kind == KIND_MOD:
        body_node = node.child_by_field_name("body")
        if body_node is not None:
            attributes = list(attributes) + _inner_attributes(body_node)
            body = _convert_items(body_node.named_children)

    return SyntaxItem(
        kind=kind,
        name=_text(name_node) if name_node is not None else "",
        is_public=_is_public(node),
        attributes=list(attributes),
        items=body,
    )


def _is_public(node: Any) -> bool:
    """Only a bare ``pub`` counts; ``pub(crate)`` and friends are restricted."""
    for child in node.named_children:
        if child.type == "visibility_modifier":
            return _text(child).strip() == "pub"
    return False


def _convert_attribute(node: Any) -> Optional[Attribute]:
    """Extract path and delimited arguments from an ``attribute_item`` node."""
    attr = next((c for c in node.named_children if c.type in ("attribute", "meta_item")), None)
    if attr is None or not attr.named_children:
        return None

    path = "".join(_text(attr.named_children[0]).split())
    args_node = attr.child_by_field_name("arguments")
    if args_node is None:
        args_node = next((c for c in attr.named_children if c.type == "token_tree"), None)

    return Attribute(path=path, arguments=_text(args_node) if args_node is not None else None)


def _inner_attributes(body_node: Any) -> List[Attribute]:
    """
    Collect the ``#![...]`` attributes of an inline module body.

    They belong to the module itself, after its outer attributes. File-level
    inner attributes are not routed here and stay ignored.
    """
    attrs: List[Attribute] = []
    for child in body_node.named_children:
        if child.type != "inner_attribute_item":
            continue
        attr = _convert_attribute(child)
        if attr is not None:
            attrs.append(attr)
    return attrs
