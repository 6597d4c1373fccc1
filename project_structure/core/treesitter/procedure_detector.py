"""
Detection of tRPC-style routers and their procedure builder chains.

A router is a variable whose initializer calls a router factory:

    export const userRouter = createTRPCRouter({
        byId: publicProcedure.input(ByIdSchema).query(async ({ input }) => ...),
    })

Each property of the factory's object argument is walked from the outermost
call inward to the base builder, collecting the operation kind and the input
schema.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from tree_sitter import Node

from ..models import FunctionSignature, ProcedureKind
from .syntax import (
    VARIABLE_STATEMENTS,
    callee_text,
    collapse_whitespace,
    name_of,
    named,
    node_text,
)

DEFAULT_ROUTER_FACTORIES = ("createTRPCRouter",)
PROCEDURE_RETURN_TYPE = "unknown"
CHAIN_METHOD_SUFFIXES = (".query", ".mutation", ".input", ".use")


def router_binding_name(node: Node, router_factories: Sequence[str] = DEFAULT_ROUTER_FACTORIES) -> Optional[str]:
    """Name of the variable a router factory call is bound to, if `node` declares one."""
    if node.type not in VARIABLE_STATEMENTS:
        return None
    declarators = [d for d in named(node) if d.type == "variable_declarator"]
    if not declarators:
        return None
    declarator = declarators[0]
    value = declarator.child_by_field_name("value")
    var_name = name_of(declarator)
    if value is None or value.type != "call_expression" or var_name is None:
        return None
    if var_name.type != "identifier" or callee_text(value) not in router_factories:
        return None
    return node_text(var_name)


def is_router_object(node: Node, router_factories: Sequence[str] = DEFAULT_ROUTER_FACTORIES) -> bool:
    """True for an object literal passed to a router factory call."""
    if node.type != "object" or node.parent is None or node.parent.type != "arguments":
        return False
    call = node.parent.parent
    return call is not None and call.type == "call_expression" and callee_text(call) in router_factories


def is_in_procedure_chain(node: Node, router_factories: Sequence[str] = DEFAULT_ROUTER_FACTORIES) -> bool:
    """True when a callable is wiring inside a procedure chain or router definition."""
    parent = node.parent
    while parent is not None:
        if parent.type == "call_expression":
            callee = callee_text(parent)
            if callee.endswith(CHAIN_METHOD_SUFFIXES) or "Procedure" in callee or callee in router_factories:
                return True
        parent = parent.parent
    return False


def extract_procedures(router_object: Node, file_path: str, router_name: str) -> List[FunctionSignature]:
    procedures = []
    for prop in named(router_object):
        if prop.type != "pair":
            continue
        key = prop.child_by_field_name("key")
        if key is None or key.type != "property_identifier":
            continue
        signature = extract_procedure_signature(prop, file_path, router_name)
        if signature:
            procedures.append(signature)
    return procedures


def extract_procedure_signature(prop: Node, file_path: str, router_name: str) -> Optional[FunctionSignature]:
    procedure_name = node_text(prop.child_by_field_name("key"))

    procedure_kind: Optional[ProcedureKind] = None
    has_input = False
    input_schema_name: Optional[str] = None
    input_schema_text: Optional[str] = None

    expr = prop.child_by_field_name("value")
    while expr is not None and expr.type == "call_expression":
        callee = expr.child_by_field_name("function")
        if callee is None or callee.type != "member_expression":
            break
        method_name = node_text(callee.child_by_field_name("property"))

        # The outermost operation is applied last, so it is the one that counts
        if method_name in ("query", "mutation") and procedure_kind is None:
            procedure_kind = ProcedureKind(method_name)

        if method_name == "input":
            has_input = True
            arguments = named(expr.child_by_field_name("arguments"))
            if arguments and arguments[0].type == "identifier":
                input_schema_name = node_text(arguments[0])
            elif arguments:
                input_schema_text = collapse_whitespace(node_text(arguments[0]))

        expr = callee.child_by_field_name("object")

    if procedure_kind is None:
        logging.debug(f"Could not determine procedure type for {router_name}.{procedure_name}, skipping")
        return None

    input_part = ""
    schema = input_schema_name or input_schema_text
    if has_input:
        input_part = f" (input: {schema})" if schema else " (input)"

    return FunctionSignature(
        name=procedure_name,
        parameters=(),
        return_type=PROCEDURE_RETURN_TYPE,
        full_signature=f"{router_name}.{procedure_name}: {procedure_kind.value}{input_part}",
        file_path=file_path,
        is_exported=False,
        parent_name=router_name,
        is_procedure=True,
        procedure_kind=procedure_kind,
        has_input=has_input,
        input_schema_name=input_schema_name,
        input_schema_text=input_schema_text,
    )
