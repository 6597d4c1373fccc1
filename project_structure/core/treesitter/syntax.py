"""
Small helpers for reading tree-sitter TypeScript nodes.
"""

from __future__ import annotations

import re
from typing import List, Optional

from tree_sitter import Node

ANNOTATION_WRAPPERS = {
    "type_annotation",
    "opting_type_annotation",
    "omitting_type_annotation",
    "adding_type_annotation",
    "type_predicate_annotation",
    "asserts_annotation",
}

CLASS_DECLARATIONS = {"class_declaration", "abstract_class_declaration"}
VARIABLE_STATEMENTS = {"lexical_declaration", "variable_declaration"}
JSX_NODES = {"jsx_element", "jsx_self_closing_element", "jsx_fragment"}

_WHITESPACE = re.compile(r"\s+")
_NEWLINE_INDENT = re.compile(r"\n\s*")


def node_text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text)


def collapse_newlines(text: str) -> str:
    return _NEWLINE_INDENT.sub(" ", text)


def truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def named(node: Optional[Node]) -> List[Node]:
    """Named children of a node, comments excluded."""
    if node is None:
        return []
    return [child for child in node.named_children if child.type != "comment"]


def first_named(node: Optional[Node]) -> Optional[Node]:
    children = named(node)
    return children[0] if children else None


def has_token(node: Node, token: str) -> bool:
    """True if an anonymous child token (e.g. 'static', 'async', '?') is present."""
    return any(not child.is_named and child.type == token for child in node.children)


def unwrap_annotation(node: Optional[Node]) -> Optional[Node]:
    """Strip ': T' style wrappers down to the type node itself."""
    while node is not None and node.type in ANNOTATION_WRAPPERS:
        node = first_named(node)
    return node


def unwrap_parentheses(node: Optional[Node]) -> Optional[Node]:
    if node is not None and node.type == "parenthesized_expression":
        return first_named(node)
    return node


def name_of(node: Optional[Node]) -> Optional[Node]:
    if node is None:
        return None
    return node.child_by_field_name("name")


def callee_text(call: Node) -> str:
    return collapse_whitespace(node_text(call.child_by_field_name("function")))


def parameter_nodes(callable_node: Node) -> List[Node]:
    params = callable_node.child_by_field_name("parameters")
    if params is not None:
        return [p for p in named(params) if p.type != "decorator"]
    single = callable_node.child_by_field_name("parameter")
    return [single] if single is not None else []


def parameter_name(param: Node) -> str:
    if param.type == "identifier":
        return node_text(param)
    pattern = param.child_by_field_name("pattern") or param.child_by_field_name("name")
    if pattern is None:
        pattern = first_named(param)
    return node_text(pattern)


def parameter_type(param: Node) -> Optional[Node]:
    if param.type == "identifier":
        return None
    return unwrap_annotation(param.child_by_field_name("type"))


def declaration_statement(node: Node) -> Node:
    """Climb 'declare ...' wrappers to the node an export statement would hold."""
    while node.parent is not None and node.parent.type == "ambient_declaration":
        node = node.parent
    return node
