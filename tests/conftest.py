"""
Pytest configuration and fixtures for signature extraction testing.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import List

from tree_sitter import Node

from project_structure.core.treesitter import parse_signatures, parse_source


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def parse():
    """Parse source text as if it lived at `file_path`."""
    def _parse(source: str, file_path: str = "/project/src/module.ts", type_depth: int = 2):
        return parse_signatures(source, file_path, type_depth=type_depth)
    return _parse


@pytest.fixture
def type_node():
    """First node of a given type in a parsed TypeScript snippet."""
    def _find(source: str, node_type: str, language_id: str = "typescript") -> Node:
        nodes = find_nodes(parse_source(source, language_id).root_node, node_type)
        assert nodes, f"no {node_type} node in {source!r}"
        return nodes[0]
    return _find


def find_nodes(root: Node, node_type: str) -> List[Node]:
    found = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == node_type:
            found.append(node)
        stack.extend(reversed(node.children))
    return found


@pytest.fixture
def sample_router_code():
    """tRPC router with every procedure chain shape."""
    return '''
import { z } from "zod";
import { createTRPCRouter, publicProcedure } from "~/server/api/trpc";

export const appRouter = createTRPCRouter({
  create: publicProcedure
    .input(Schema)
    .mutation(async ({ input }) => input)
    .query(() => 1),
  guarded: publicProcedure.input(Schema).use(mw),
  byId: publicProcedure
    .input(z.object({ id: z.string() }))
    .query(({ input }) => input.id),
  list: publicProcedure.input().query(() => []),
  ping: publicProcedure.query(() => "pong"),
});

export function helper(value: string): string {
  return value;
}
'''


@pytest.fixture
def sample_component_code():
    """View-template source with components and plain helpers."""
    return '''
import React from "react";

export const Foo = () => <div/>;

const foo = () => <div/>;

const bar = () => 42;

function Card({ title }: { title: string }) {
  const items = [1, 2].map((n) => <span>{n}</span>);
  return (
    <section>{title}{items}</section>
  );
}

function render(items: string[]) {
  return items.map((item) => {
    return <li>{item}</li>;
  });
}
'''


@pytest.fixture
def sample_types_code():
    """Type-level declarations of every supported kind."""
    return '''
export interface User<T extends object = unknown> extends Base {
  id: number;
  name?: string;
  tags: Array<Map<string, number>>;
  greet(msg: string): void;
  [key: string]: unknown;
}

type Id = string | number;

export enum Color { Red, Green = "g" }

export class Admin extends Person implements Auditable {
  static count: number = 0;
  private name: string;
  constructor(name: string) {
    super();
  }
}

export namespace Utils {
  export function a() {}
  export interface B {}
  const c = 1;
}

declare module 'foo' {
  export function bar(): void;
}
'''


@pytest.fixture
def nodes_of():
    """All nodes of a given type under a root, in pre-order."""
    return find_nodes
