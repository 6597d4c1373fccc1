"""
Signature extraction for interfaces, type aliases, enums, classes,
namespaces and ambient module declarations.

Signatures are rebuilt from structural fields rather than copied from source,
so identical declarations always render to identical strings.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from tree_sitter import Node

from ..models import TypeKind, TypeSignature
from .resolvers import is_exported
from .syntax import (
    CLASS_DECLARATIONS,
    VARIABLE_STATEMENTS,
    collapse_whitespace,
    first_named,
    has_token,
    name_of,
    named,
    node_text,
)
from .type_renderer import (
    DEFAULT_TYPE_DEPTH,
    PLACEHOLDER,
    render_member,
    render_parameter_list,
    render_type,
)

ASYNC_RETURN_TYPE = "Promise<unknown>"
VOID_RETURN_TYPE = "void"
CLASS_METHOD_NODES = {"method_definition", "method_signature", "abstract_method_signature"}
GLOBAL_SCOPE_NAME = "global"


def extract_type_signature(
    node: Node,
    file_path: str,
    depth: int = DEFAULT_TYPE_DEPTH,
) -> Optional[TypeSignature]:
    """Dispatch a declaration node to its extractor; None for anything else."""
    extractor = _EXTRACTORS.get(node.type)
    if extractor is None:
        return None
    return extractor(node, file_path, depth)


def render_generics(node: Node, depth: int) -> str:
    params = [p for p in named(node.child_by_field_name("type_parameters")) if p.type == "type_parameter"]
    if not params:
        return ""
    rendered = []
    for param in params:
        text = node_text(name_of(param))
        for child in named(param):
            if child.type == "constraint":
                text += f" extends {render_type(first_named(child), depth - 1)}"
            elif child.type == "default_type":
                text += f" = {render_type(first_named(child), depth - 1)}"
        rendered.append(text)
    return f"<{', '.join(rendered)}>"


def _heritage_clause(clause: Node, keyword: str) -> str:
    text = collapse_whitespace(node_text(clause)).strip()
    if text.startswith(keyword):
        text = text[len(keyword):].strip()
    return f" {keyword} {text}"


def _extract_interface(node: Node, file_path: str, depth: int) -> TypeSignature:
    name = node_text(name_of(node))

    extends = ""
    clauses = [c for c in named(node) if c.type == "extends_type_clause"]
    if clauses:
        extends = " extends " + ", ".join(node_text(t) for t in named(clauses[0]))

    members = []
    for member in named(node.child_by_field_name("body")):
        if member.type == "property_signature":
            members.append(render_member(member, depth))
        elif member.type == "method_signature":
            members.append(_render_method(member, depth))
        elif member.type == "index_signature":
            members.append(_render_index_signature(member, depth))

    return TypeSignature(
        name=name,
        kind=TypeKind.INTERFACE,
        full_signature=f"interface {name}{render_generics(node, depth)}{extends} {{ {'; '.join(members)} }}",
        file_path=file_path,
        is_exported=is_exported(node),
    )


def _extract_type_alias(node: Node, file_path: str, depth: int) -> TypeSignature:
    name = node_text(name_of(node))
    value = render_type(node.child_by_field_name("value"), depth)
    return TypeSignature(
        name=name,
        kind=TypeKind.TYPE_ALIAS,
        full_signature=f"type {name}{render_generics(node, depth)} = {value}",
        file_path=file_path,
        is_exported=is_exported(node),
    )


def _extract_enum(node: Node, file_path: str, depth: int) -> TypeSignature:
    name = node_text(name_of(node))
    members = []
    for member in named(node.child_by_field_name("body")):
        if member.type == "enum_assignment":
            members.append(f"{node_text(name_of(member))} = {node_text(member.child_by_field_name('value'))}")
        else:
            members.append(node_text(member))
    return TypeSignature(
        name=name,
        kind=TypeKind.ENUM,
        full_signature=f"enum {name} {{ {', '.join(members)} }}",
        file_path=file_path,
        is_exported=is_exported(node),
    )


def _extract_class(node: Node, file_path: str, depth: int) -> Optional[TypeSignature]:
    name_node = name_of(node)
    if name_node is None:
        return None
    name = node_text(name_node)

    heritage = ""
    for clause in named(next((c for c in named(node) if c.type == "class_heritage"), None)):
        if clause.type == "extends_clause":
            heritage += _heritage_clause(clause, "extends")
        elif clause.type == "implements_clause":
            heritage += _heritage_clause(clause, "implements")

    members = []
    for member in named(node.child_by_field_name("body")):
        if member.type == "public_field_definition":
            static = "static " if has_token(member, "static") else ""
            members.append(f"{static}{render_member(member, depth)}")
        elif member.type in CLASS_METHOD_NODES and not _is_accessor(member):
            if node_text(name_of(member)) == "constructor":
                members.append(f"constructor({render_parameter_list(member, depth - 1)})")
            else:
                static = "static " if has_token(member, "static") else ""
                members.append(f"{static}{_render_method(member, depth)}")

    return TypeSignature(
        name=name,
        kind=TypeKind.CLASS,
        full_signature=f"class {name}{render_generics(node, depth)}{heritage} {{ {'; '.join(members)} }}",
        file_path=file_path,
        is_exported=is_exported(node),
    )


def _extract_module(node: Node, file_path: str, depth: int) -> Optional[TypeSignature]:
    name_node = name_of(node)
    if name_node is None:
        return None
    name = node_text(name_node)
    contents = "; ".join(_summarize_module_body(node.child_by_field_name("body"))) or PLACEHOLDER

    if name_node.type == "string":
        kind = TypeKind.MODULE
        full_signature = f"declare module {name} {{ {contents} }}"
    else:
        kind = TypeKind.NAMESPACE
        full_signature = f"namespace {name} {{ {contents} }}"

    return TypeSignature(
        name=name,
        kind=kind,
        full_signature=full_signature,
        file_path=file_path,
        is_exported=is_exported(node),
    )


def _extract_global(node: Node, file_path: str, depth: int) -> Optional[TypeSignature]:
    """`declare global { ... }` augments the global namespace."""
    if not has_token(node, "global"):
        return None
    body = next((child for child in named(node) if child.type == "statement_block"), None)
    contents = "; ".join(_summarize_module_body(body)) or PLACEHOLDER
    return TypeSignature(
        name=GLOBAL_SCOPE_NAME,
        kind=TypeKind.NAMESPACE,
        full_signature=f"namespace {GLOBAL_SCOPE_NAME} {{ {contents} }}",
        file_path=file_path,
        is_exported=is_exported(node),
    )


def _summarize_module_body(body: Optional[Node]) -> List[str]:
    """'kind Name' for each direct child declaration; nested bodies are not expanded."""
    contents = []
    for statement in named(body):
        declaration = statement
        while declaration is not None and declaration.type in ("export_statement", "ambient_declaration"):
            declaration = declaration.child_by_field_name("declaration") or first_named(declaration)
        if declaration is None:
            continue

        kind = declaration.type
        decl_name = name_of(declaration)
        if kind == "interface_declaration":
            contents.append(f"interface {node_text(decl_name)}")
        elif kind == "type_alias_declaration":
            contents.append(f"type {node_text(decl_name)}")
        elif kind == "enum_declaration":
            contents.append(f"enum {node_text(decl_name)}")
        elif kind in CLASS_DECLARATIONS and decl_name is not None:
            contents.append(f"class {node_text(decl_name)}")
        elif kind in ("function_declaration", "generator_function_declaration", "function_signature") and decl_name is not None:
            contents.append(f"function {node_text(decl_name)}")
        elif kind in VARIABLE_STATEMENTS:
            declarators = [d for d in named(declaration) if d.type == "variable_declarator"]
            var_name = name_of(declarators[0]) if declarators else None
            if var_name is not None and var_name.type == "identifier":
                contents.append(f"const {node_text(var_name)}")
    return contents


def _render_method(member: Node, depth: int) -> str:
    params = render_parameter_list(member, depth - 1)
    annotation = member.child_by_field_name("return_type")
    if annotation is not None:
        return_type = render_type(annotation, depth - 1)
    elif has_token(member, "async"):
        return_type = ASYNC_RETURN_TYPE
    else:
        return_type = VOID_RETURN_TYPE
    return f"{node_text(name_of(member))}({params}): {return_type}"


def _render_index_signature(member: Node, depth: int) -> str:
    key = node_text(name_of(member))
    key_type = render_type(member.child_by_field_name("index_type"), depth - 1)
    value_type = render_type(member.child_by_field_name("type"), depth - 1)
    return f"[{key}: {key_type}]: {value_type}"


def _is_accessor(member: Node) -> bool:
    return has_token(member, "get") or has_token(member, "set")


_EXTRACTORS: Dict[str, Callable[[Node, str, int], Optional[TypeSignature]]] = {
    "interface_declaration": _extract_interface,
    "type_alias_declaration": _extract_type_alias,
    "enum_declaration": _extract_enum,
    "class_declaration": _extract_class,
    "abstract_class_declaration": _extract_class,
    "internal_module": _extract_module,
    "module": _extract_module,
    "ambient_declaration": _extract_global,
}
