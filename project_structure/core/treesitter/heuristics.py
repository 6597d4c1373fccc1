"""
Component-likeness heuristic for view-template (.tsx/.jsx) callables.

Two independent tests, either one sufficient:
- the resolved name is PascalCase-ish (first character is an uppercase letter)
- the body returns markup at its top level (a JSX element or fragment,
  optionally parenthesized)

The body search looks only at immediate statements of the callable's body so
a markup return inside a nested callback is never attributed to the outer
declaration.
"""

from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from .syntax import JSX_NODES, first_named, named, unwrap_parentheses


def has_component_name(name: Optional[str]) -> bool:
    if not name:
        return False
    first = name[0]
    return first == first.upper() and first != first.lower()


def is_markup(node: Optional[Node]) -> bool:
    node = unwrap_parentheses(node)
    return node is not None and node.type in JSX_NODES


def returns_markup(callable_node: Node) -> bool:
    body = callable_node.child_by_field_name("body")
    if body is None:
        return False
    if body.type != "statement_block":
        return is_markup(body)
    return any(
        statement.type == "return_statement" and is_markup(first_named(statement))
        for statement in named(body)
    )


def looks_like_component(callable_node: Node, name: Optional[str]) -> bool:
    return has_component_name(name) or returns_markup(callable_node)
