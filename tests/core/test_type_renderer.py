"""
Unit tests for depth-bounded type rendering.
"""

import pytest

from project_structure.core.treesitter.type_renderer import (
    FALLBACK_TEXT_LIMIT,
    MAPPED_TEXT_LIMIT,
    PLACEHOLDER,
    is_mapped_type,
    render_type,
)


class TestRenderType:

    def test_missing_node_and_negative_depth(self, type_node):
        node = type_node("type A = string;", "predefined_type")
        assert render_type(None, 2) == PLACEHOLDER
        assert render_type(node, -1) == PLACEHOLDER
        assert render_type(node, 0) == "string"

    @pytest.mark.parametrize("depth, expected", [
        (0, "Promise<...>"),
        (1, "Promise<Array<...>>"),
        (2, "Promise<Array<Map<...>>>"),
        (3, "Promise<Array<Map<string, number>>>"),
    ])
    def test_generic_depth_monotonicity(self, type_node, depth, expected):
        node = type_node("type T = Promise<Array<Map<string, number>>>;", "generic_type")
        assert render_type(node, depth) == expected

    def test_array_keeps_depth(self, type_node):
        node = type_node("type T = Array<string>[];", "array_type")
        assert render_type(node, 0) == "Array<...>[]"
        assert render_type(node, 1) == "Array<string>[]"

    def test_union_collapses_at_zero(self, type_node):
        node = type_node("type U = { a: string } | [number, string] | null;", "union_type")
        assert render_type(node, 0) == PLACEHOLDER
        rendered = render_type(node, 1)
        assert rendered == "{ a: string } | [number, string] | null"
        assert render_type(node, 2) == rendered

    def test_intersection(self, type_node):
        node = type_node("type I = A & B & C;", "intersection_type")
        assert render_type(node, 0) == PLACEHOLDER
        assert render_type(node, 1) == "A & B & C"

    def test_object_members(self, type_node):
        node = type_node("type O = { id: number; name?: string; nested: { deep: boolean } };", "object_type")
        assert render_type(node, 0) == "{ ... }"
        assert render_type(node, 1) == "{ id: number; name?: string; nested: { ... } }"
        assert render_type(node, 2) == "{ id: number; name?: string; nested: { deep: boolean } }"

    def test_depth_zero_has_no_nested_separators(self, type_node):
        for source, node_type in [
            ("type U = A | B;", "union_type"),
            ("type O = { a: string; b: number };", "object_type"),
            ("type T = [string, number];", "tuple_type"),
        ]:
            rendered = render_type(type_node(source, node_type), 0)
            assert " | " not in rendered
            assert "; " not in rendered
            assert ", " not in rendered

    def test_function_type(self, type_node):
        node = type_node("type F = (a: string, b: Array<number>) => Promise<void>;", "function_type")
        assert render_type(node, 0) == "(...) => ..."
        assert render_type(node, 1) == "(a: string, b: Array<...>) => Promise<...>"
        assert render_type(node, 2) == "(a: string, b: Array<number>) => Promise<void>"

    def test_tuple(self, type_node):
        node = type_node("type T = [string, Array<number>];", "tuple_type")
        assert render_type(node, 0) == "[...]"
        assert render_type(node, 1) == "[string, Array<...>]"

    def test_conditional(self, type_node):
        node = type_node('type C<T> = T extends string ? "s" : "n";', "conditional_type")
        assert render_type(node, 0) == "... ? ... : ..."
        assert render_type(node, 1) == 'T extends string ? "s" : "n"'

    def test_mapped_type(self, type_node):
        node = type_node("type M<T> = { [K in keyof T]: T[K] };", "object_type")
        assert is_mapped_type(node)
        assert render_type(node, 0) == "{ [K in ...]: ... }"
        assert render_type(node, 2) == "{ [K in keyof T]: T[K] }"

    def test_long_mapped_type_is_truncated(self, type_node):
        source = """type Settings<Configuration> = {
    readonly [Key in keyof Configuration]?: Array<Record<string, Configuration[Key]>> | undefined | null;
};"""
        node = type_node(source, "object_type")
        rendered = render_type(node, 2)
        assert len(rendered) == MAPPED_TEXT_LIMIT + 3
        assert rendered.endswith("...")
        assert rendered.startswith("{ readonly [Key in keyof Configuration]?: Array<")
        assert "\n" not in rendered

    def test_regular_object_is_not_mapped(self, type_node):
        node = type_node("type O = { [key: string]: number };", "object_type")
        assert not is_mapped_type(node)

    def test_fallback_is_truncated(self, type_node):
        name = "a" * 80
        node = type_node(f"type Q = typeof {name};", "type_query")
        rendered = render_type(node, 2)
        assert rendered.endswith("...")
        assert len(rendered) == FALLBACK_TEXT_LIMIT + 3

    def test_fallback_collapses_whitespace(self, type_node):
        node = type_node("type Q = typeof\n    value;", "type_query")
        assert render_type(node, 2) == "typeof value"
