"""
Tests for tRPC router and procedure chain detection.
"""

import pytest

from project_structure.core.models import FunctionSignature, ProcedureKind
from project_structure.core.treesitter import parse_signatures


def _procedures(result):
    return {sig.name: sig for sig in result.functions if sig.is_procedure}


class TestProcedureChains:

    def test_outermost_kind_wins(self, parse, sample_router_code):
        create = _procedures(parse(sample_router_code))["create"]
        assert create.procedure_kind == ProcedureKind.QUERY
        assert create.has_input is True
        assert create.input_schema_name == "Schema"
        assert create.input_schema_text is None
        assert create.full_signature == "appRouter.create: query (input: Schema)"

    def test_chain_without_kind_is_discarded(self, parse, sample_router_code):
        assert "guarded" not in _procedures(parse(sample_router_code))

    def test_inline_input_schema_text(self, parse, sample_router_code):
        by_id = _procedures(parse(sample_router_code))["byId"]
        assert by_id.input_schema_name is None
        assert by_id.input_schema_text == "z.object({ id: z.string() })"
        assert by_id.full_signature == "appRouter.byId: query (input: z.object({ id: z.string() }))"

    def test_input_without_argument(self, parse, sample_router_code):
        listing = _procedures(parse(sample_router_code))["list"]
        assert listing.has_input is True
        assert listing.full_signature == "appRouter.list: query (input)"

    def test_procedure_record_shape(self, parse, sample_router_code):
        ping = _procedures(parse(sample_router_code))["ping"]
        assert ping.parameters == ()
        assert ping.return_type == "unknown"
        assert ping.is_exported is False
        assert ping.parent_name == "appRouter"
        assert ping.has_input is False
        assert ping.full_signature == "appRouter.ping: query"

    def test_chain_callbacks_are_not_functions(self, parse, sample_router_code):
        result = parse(sample_router_code)
        assert [sig.name for sig in result.functions] == ["create", "byId", "list", "ping", "helper"]

    def test_router_context_ends_with_router(self, parse, sample_router_code):
        helper = parse(sample_router_code).functions[-1]
        assert helper.name == "helper"
        assert helper.parent_name is None
        assert helper.is_exported is True

    def test_sibling_routers_keep_their_own_names(self, parse):
        source = '''
export const userRouter = createTRPCRouter({
  me: publicProcedure.query(() => null),
});

export const postRouter = createTRPCRouter({
  add: publicProcedure.input(PostInput).mutation(({ input }) => input),
});
'''
        procedures = _procedures(parse(source))
        assert procedures["me"].parent_name == "userRouter"
        assert procedures["me"].full_signature == "userRouter.me: query"
        assert procedures["add"].parent_name == "postRouter"
        assert procedures["add"].full_signature == "postRouter.add: mutation (input: PostInput)"

    def test_nested_router_entries_are_not_expanded(self, parse):
        source = '''
export const appRouter = createTRPCRouter({
  user: createTRPCRouter({
    me: publicProcedure.query(() => 1),
  }),
  ping: publicProcedure.query(() => "pong"),
});

export const second = createTRPCRouter({
  add: publicProcedure.input(AddInput).mutation(() => 2),
});
'''
        result = parse(source)
        assert [sig.full_signature for sig in result.functions] == [
            "appRouter.ping: query",
            "second.add: mutation (input: AddInput)",
        ]
        assert all(sig.name not in ("me", "user") for sig in result.functions)

    def test_multiline_inline_schema_is_collapsed(self, parse):
        source = '''
const itemRouter = createTRPCRouter({
  byId: publicProcedure
    .input(z.object({
      id: z.string(),
    }))
    .query(({ input }) => input.id),
});
'''
        by_id = _procedures(parse(source))["byId"]
        assert by_id.input_schema_text == "z.object({ id: z.string(), })"
        assert by_id.full_signature == "itemRouter.byId: query (input: z.object({ id: z.string(), }))"

    def test_mutation(self, parse):
        source = '''
const postRouter = createTRPCRouter({
  add: protectedProcedure.input(PostInput).mutation(({ ctx, input }) => ctx.db.post.create(input)),
});
'''
        add = _procedures(parse(source))["add"]
        assert add.procedure_kind == ProcedureKind.MUTATION
        assert add.to_dict()["procedure_kind"] == "mutation"

    def test_custom_router_factory(self):
        source = '''
export const userRouter = router({
  me: authed.query(() => null),
});
'''
        default = parse_signatures(source, "/project/src/user.ts")
        assert [sig for sig in default.functions if sig.is_procedure] == []

        custom = parse_signatures(source, "/project/src/user.ts", router_factories=["router"])
        assert [sig.full_signature for sig in custom.functions] == ["userRouter.me: query"]

    def test_non_router_call_is_ignored(self, parse):
        source = '''
const config = defineConfig({
  load: () => 1,
});
'''
        result = parse(source)
        assert all(not sig.is_procedure for sig in result.functions)


class TestProcedureInvariant:

    def test_procedure_requires_kind(self):
        with pytest.raises(ValueError):
            FunctionSignature(
                name="broken",
                parameters=(),
                return_type="unknown",
                full_signature="r.broken: ",
                file_path="/project/src/r.ts",
                is_procedure=True,
            )
