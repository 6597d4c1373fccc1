"""
Tree-sitter adapter for TypeScript/TSX source: a single pre-order walk that
dispatches each node to the type, function and procedure extractors.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from tree_sitter import Node, Tree

from ..models import ParseResult
from .function_extractor import CALLABLE_NODES, extract_function_signature
from .procedure_detector import (
    DEFAULT_ROUTER_FACTORIES,
    extract_procedures,
    is_in_procedure_chain,
    is_router_object,
    router_binding_name,
)
from .syntax import CLASS_DECLARATIONS
from .type_extractor import extract_type_signature
from .type_renderer import DEFAULT_TYPE_DEPTH


def extract_signatures(
    tree: Tree,
    file_path: str,
    type_depth: int = DEFAULT_TYPE_DEPTH,
    router_factories: Sequence[str] = DEFAULT_ROUTER_FACTORIES,
    view_template: bool = False,
) -> ParseResult:
    """
    Walk the tree once, depth-first and pre-order.

    The active router name is carried alongside each pending node rather than
    held in shared state: a router definition statement hands its name to its
    own subtree only, and the router's object literal clears it for
    everything beneath it once its procedures have been collected.
    """
    result = ParseResult()
    stack: List[Tuple[Node, Optional[str]]] = [(tree.root_node, None)]

    while stack:
        node, router_name = stack.pop()
        router_name = router_binding_name(node, router_factories) or router_name

        type_signature = extract_type_signature(node, file_path, type_depth)
        if type_signature:
            result.types.append(type_signature)

        if (
            node.type in CALLABLE_NODES
            and not _is_class_member(node)
            and not is_in_procedure_chain(node, router_factories)
        ):
            signature = extract_function_signature(node, file_path, router_name, view_template)
            if signature:
                result.functions.append(signature)

        if router_name and is_router_object(node, router_factories):
            result.functions.extend(extract_procedures(node, file_path, router_name))
            router_name = None

        stack.extend((child, router_name) for child in reversed(node.children))

    return result


def _is_class_member(node: Node) -> bool:
    """
    Methods of a declared class belong to the class signature. An anonymous
    `export default class` is a declaration too, even though it has no name
    to be listed under.
    """
    body = node.parent
    if node.type != "method_definition" or body is None or body.type != "class_body":
        return False
    owner = body.parent
    if owner is None:
        return False
    if owner.type in CLASS_DECLARATIONS:
        return True
    return owner.type == "class" and owner.parent is not None and owner.parent.type == "export_statement"
