"""
Signature extraction for functions, methods and arrow functions.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from tree_sitter import Node

from ..models import FunctionSignature, Parameter
from .heuristics import looks_like_component
from .resolvers import find_enclosing_name, is_exported, object_owner_declarator
from .syntax import (
    collapse_newlines,
    name_of,
    node_text,
    parameter_name,
    parameter_nodes,
    parameter_type,
    unwrap_annotation,
)

FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration", "function_signature"}
FUNCTION_EXPRESSIONS = {"function_expression", "function", "generator_function"}
CALLABLE_NODES = FUNCTION_DECLARATIONS | FUNCTION_EXPRESSIONS | {"arrow_function", "method_definition"}

DEFAULT_PARAMETER_TYPE = "any"
DEFAULT_RETURN_TYPE = "void"
INFERRED_RETURN_TYPE = "inferred"
ELEMENT_RETURN_TYPE = "React.JSX.Element"


def extract_function_signature(
    node: Node,
    file_path: str,
    router_name: Optional[str] = None,
    view_template: bool = False,
) -> Optional[FunctionSignature]:
    """
    Build a signature for a callable node, or None when the callable has no
    name it can be documented under (inline callbacks, IIFEs, ...).
    """
    identity = _resolve_identity(node, router_name)
    if identity is None:
        return None
    name, exported, parent_name = identity

    parameters = tuple(_extract_parameters(node))
    return_type = _extract_return_type(node, name, view_template)

    param_string = ", ".join(f"{p.name}: {p.type_text}" for p in parameters)
    full_name = f"{parent_name}.{name}" if parent_name else name

    return FunctionSignature(
        name=name,
        parameters=parameters,
        return_type=return_type,
        full_signature=f"{full_name}({param_string}): {return_type}",
        file_path=file_path,
        is_exported=exported,
        parent_name=parent_name,
        is_procedure=False,
    )


def _resolve_identity(node: Node, router_name: Optional[str]) -> Optional[Tuple[str, bool, Optional[str]]]:
    """(name, is_exported, parent_name) for the ways a callable gets a name."""
    own_name = name_of(node)
    parent = node.parent

    if node.type in FUNCTION_DECLARATIONS and own_name is not None:
        return node_text(own_name), is_exported(node), router_name

    if node.type == "method_definition":
        if own_name is None or own_name.type != "property_identifier":
            return None
        return node_text(own_name), False, find_enclosing_name(node) or router_name

    if node.type in FUNCTION_EXPRESSIONS and own_name is not None:
        return node_text(own_name), False, find_enclosing_name(node) or router_name

    if parent is None or parent.child_by_field_name("value") != node:
        return None

    if parent.type == "variable_declarator":
        var_name = name_of(parent)
        if var_name is None or var_name.type != "identifier":
            return None
        return node_text(var_name), is_exported(parent), find_enclosing_name(node) or router_name

    if parent.type == "pair":
        key = parent.child_by_field_name("key")
        if key is None or key.type != "property_identifier":
            return None
        declarator = object_owner_declarator(parent)
        exported = is_exported(declarator) if declarator is not None else False
        return node_text(key), exported, find_enclosing_name(node) or router_name

    return None


def _extract_parameters(node: Node) -> List[Parameter]:
    parameters = []
    for param in parameter_nodes(node):
        type_node = parameter_type(param)
        type_text = collapse_newlines(node_text(type_node)) if type_node is not None else DEFAULT_PARAMETER_TYPE
        parameters.append(Parameter(name=parameter_name(param) or "_", type_text=type_text))
    return parameters


def _extract_return_type(node: Node, name: str, view_template: bool) -> str:
    annotation = unwrap_annotation(node.child_by_field_name("return_type"))
    if annotation is not None:
        return node_text(annotation)
    if view_template and looks_like_component(node, name):
        return ELEMENT_RETURN_TYPE
    body = node.child_by_field_name("body")
    if node.type == "arrow_function" and body is not None and body.type != "statement_block":
        return INFERRED_RETURN_TYPE
    return DEFAULT_RETURN_TYPE
