"""
Export and enclosing-scope resolution for declarations.

Both resolvers are approximations over the syntax tree alone: no symbol
table is built, so `export { a as b }` aliasing and re-exports through other
modules are not followed.
"""

from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from .syntax import (
    CLASS_DECLARATIONS,
    VARIABLE_STATEMENTS,
    declaration_statement,
    name_of,
    named,
    node_text,
)

EXPORTABLE_STATEMENTS = VARIABLE_STATEMENTS | CLASS_DECLARATIONS | {
    "function_declaration",
    "generator_function_declaration",
}
SCOPE_BOUNDARIES = {"program", "statement_block"}


def has_export_modifier(node: Node) -> bool:
    """True for `export ...` and `export default ...` declarations."""
    parent = declaration_statement(node).parent
    return parent is not None and parent.type == "export_statement"


def is_exported(node: Node) -> bool:
    if has_export_modifier(node):
        return True

    if _is_named_export_target(node):
        return True

    parent = node.parent
    if node.type == "variable_declarator" and parent is not None and parent.type in VARIABLE_STATEMENTS:
        return is_exported(parent)

    ancestor: Optional[Node] = node
    while ancestor is not None and ancestor.type != "program":
        if ancestor.type in EXPORTABLE_STATEMENTS and has_export_modifier(ancestor):
            return True
        if ancestor.type == "statement_block":
            break
        ancestor = ancestor.parent
    return False


def _is_named_export_target(node: Node) -> bool:
    """Match `export { name }` clauses (without `from`) in the declaring scope."""
    if node.parent is not None and node.parent.type == "export_specifier":
        return True

    name_node = name_of(node)
    if name_node is None or name_node.type not in ("identifier", "type_identifier"):
        return False
    name = node_text(name_node)

    scope = declaration_statement(node).parent
    while scope is not None and scope.type not in SCOPE_BOUNDARIES:
        scope = scope.parent
    if scope is None:
        return False

    for statement in named(scope):
        if statement.type != "export_statement" or statement.child_by_field_name("source") is not None:
            continue
        for clause in named(statement):
            if clause.type != "export_clause":
                continue
            for specifier in named(clause):
                if node_text(specifier.child_by_field_name("name")) == name:
                    return True
    return False


def find_enclosing_name(node: Node) -> Optional[str]:
    """
    Nearest enclosing class name, or the name of the variable whose object
    literal holds this member.
    """
    current: Optional[Node] = node
    while current is not None:
        if current.type in CLASS_DECLARATIONS or current.type == "class":
            class_name = name_of(current)
            if class_name is not None:
                return node_text(class_name)
        if current.type in ("pair", "method_definition"):
            declarator = object_owner_declarator(current)
            var_name = name_of(declarator)
            if var_name is not None and var_name.type == "identifier":
                return node_text(var_name)
        current = current.parent
    return None


def object_owner_declarator(member: Node) -> Optional[Node]:
    """The variable declarator whose object literal holds this property."""
    obj = member.parent
    if obj is None or obj.type != "object":
        return None
    declarator = obj.parent
    if declarator is not None and declarator.type == "variable_declarator":
        return declarator
    return None
