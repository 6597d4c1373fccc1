"""
Depth-bounded rendering of TypeScript type expressions.

Every structural descent spends one unit of the depth budget. Once the budget
reaches zero, nested structure collapses to a fixed placeholder so that
deeply generic or recursive types stay short in signature summaries.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from tree_sitter import Node

from .syntax import (
    collapse_whitespace,
    first_named,
    has_token,
    named,
    node_text,
    parameter_name,
    parameter_type,
    parameter_nodes,
    truncate,
    unwrap_annotation,
)

DEFAULT_TYPE_DEPTH = 2
PLACEHOLDER = "..."
FALLBACK_TEXT_LIMIT = 60
MAPPED_TEXT_LIMIT = 80


def render_type(node: Optional[Node], depth: int = DEFAULT_TYPE_DEPTH) -> str:
    """Render a type node (or its ': T' annotation) within a depth budget."""
    node = unwrap_annotation(node)
    if node is None or depth < 0:
        return PLACEHOLDER
    renderer = _RENDERERS.get(node.type)
    if renderer is None:
        return truncate(collapse_whitespace(node_text(node)), FALLBACK_TEXT_LIMIT)
    return renderer(node, depth)


def render_parameter_list(callable_node: Node, depth: int) -> str:
    """'name: type' pairs joined by ', ', each type rendered at the given depth."""
    return ", ".join(
        f"{parameter_name(p)}: {render_type(parameter_type(p), depth)}"
        for p in parameter_nodes(callable_node)
    )


def render_member(member: Node, depth: int) -> str:
    """Render a property signature as 'name[?]: type'."""
    name = node_text(member.child_by_field_name("name"))
    optional = "?" if has_token(member, "?") else ""
    return f"{name}{optional}: {render_type(member.child_by_field_name('type'), depth)}"


def is_mapped_type(node: Node) -> bool:
    return node.type == "object_type" and any(
        member.type == "index_signature"
        and any(child.type == "mapped_type_clause" for child in member.named_children)
        for member in node.named_children
    )


def _flatten(node: Node, kind: str) -> List[Node]:
    # 'A | B | C' nests left-recursively as ((A | B) | C)
    members: List[Node] = []
    for child in named(node):
        if child.type == kind:
            members.extend(_flatten(child, kind))
        else:
            members.append(child)
    return members


def _render_generic(node: Node, depth: int) -> str:
    name = node_text(node.child_by_field_name("name"))
    arguments = named(node.child_by_field_name("type_arguments"))
    if not arguments:
        return name
    if depth == 0:
        return f"{name}<{PLACEHOLDER}>"
    return f"{name}<{', '.join(render_type(arg, depth - 1) for arg in arguments)}>"


def _render_array(node: Node, depth: int) -> str:
    return f"{render_type(first_named(node), depth)}[]"


def _render_union(node: Node, depth: int) -> str:
    if depth == 0:
        return PLACEHOLDER
    return " | ".join(render_type(member, depth) for member in _flatten(node, "union_type"))


def _render_intersection(node: Node, depth: int) -> str:
    if depth == 0:
        return PLACEHOLDER
    return " & ".join(render_type(member, depth) for member in _flatten(node, "intersection_type"))


def _render_object(node: Node, depth: int) -> str:
    if is_mapped_type(node):
        if depth == 0:
            return "{ [K in ...]: ... }"
        return truncate(collapse_whitespace(node_text(node)), MAPPED_TEXT_LIMIT)
    if depth == 0:
        return "{ ... }"
    members = [
        render_member(member, depth - 1) if member.type == "property_signature" else PLACEHOLDER
        for member in named(node)
    ]
    return f"{{ {'; '.join(members)} }}"


def _render_function(node: Node, depth: int) -> str:
    if depth == 0:
        return "(...) => ..."
    return_node = node.child_by_field_name("return_type")
    if return_node is None:
        trailing = [c for c in named(node) if c.type not in ("type_parameters", "formal_parameters")]
        return_node = trailing[-1] if trailing else None
    params = render_parameter_list(node, depth - 1)
    return f"({params}) => {render_type(return_node, depth - 1)}"


def _render_tuple(node: Node, depth: int) -> str:
    if depth == 0:
        return "[...]"
    return f"[{', '.join(render_type(element, depth - 1) for element in named(node))}]"


def _render_parenthesized(node: Node, depth: int) -> str:
    return f"({render_type(first_named(node), depth)})"


def _render_conditional(node: Node, depth: int) -> str:
    if depth == 0:
        return "... ? ... : ..."
    check, extends, when_true, when_false = (
        render_type(node.child_by_field_name(field), depth - 1)
        for field in ("left", "right", "consequence", "alternative")
    )
    return f"{check} extends {extends} ? {when_true} : {when_false}"


def _render_indexed_access(node: Node, depth: int) -> str:
    parts = named(node)
    if len(parts) != 2:
        return truncate(collapse_whitespace(node_text(node)), FALLBACK_TEXT_LIMIT)
    return f"{render_type(parts[0], depth)}[{render_type(parts[1], depth)}]"


_RENDERERS: Dict[str, Callable[[Node, int], str]] = {
    "generic_type": _render_generic,
    "array_type": _render_array,
    "union_type": _render_union,
    "intersection_type": _render_intersection,
    "object_type": _render_object,
    "function_type": _render_function,
    "tuple_type": _render_tuple,
    "parenthesized_type": _render_parenthesized,
    "conditional_type": _render_conditional,
    "lookup_type": _render_indexed_access,
}
