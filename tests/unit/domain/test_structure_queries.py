"""Unit tests for StructureQueries against builder-derived trees."""

from closure_end_linter.domain.constants import CALL_KIND
from closure_end_linter.domain.entities import Node
from closure_end_linter.domain.structure import StructureQueries
from closure_end_linter.domain.text import SourceBuffer
from tests.structure_builders import (
    chained_calls,
    closure_argument_call,
    trailing_closure_call,
)

TRAILING = "foo(x: 1,\n  y: 2) { bar in\n  baz()\n  }"
CLOSURE_ARGUMENT = "foo(\n    a: { x in\n        x\n      },\n    b: 2\n)\n"
CHAIN = "foo(a: 1,\n    b: 2) {\n    }.bar(c: 3,\n          d: 4) {\n        }\n"


def _first_call(text: str, build) -> tuple[StructureQueries, Node]:
    return StructureQueries(SourceBuffer(text)), build(text).substructure[0]


class TestCallShape:
    """Trailing closures and closure arguments."""

    def test_is_call(self) -> None:
        assert StructureQueries.is_call(Node(kind=CALL_KIND))
        assert not StructureQueries.is_call(Node(kind="source.lang.swift.expr.argument"))

    def test_call_ending_in_brace_has_trailing_closure(self) -> None:
        queries, node = _first_call(TRAILING, trailing_closure_call)
        assert queries.has_trailing_closure(node)

    def test_call_ending_in_paren_has_no_trailing_closure(self) -> None:
        queries, node = _first_call(CLOSURE_ARGUMENT, closure_argument_call)
        assert not queries.has_trailing_closure(node)

    def test_closure_arguments_keep_only_brace_bodies(self) -> None:
        queries, node = _first_call(TRAILING, trailing_closure_call)
        closures = queries.closure_arguments(node)
        assert closures == [node.arguments[-1]]
        assert not queries.is_closure_argument(node.arguments[0])

    def test_trailing_closure_is_the_last_argument(self) -> None:
        queries, node = _first_call(TRAILING, trailing_closure_call)
        assert queries.trailing_closure(node) is node.arguments[-1]

    def test_closure_before_other_arguments_is_not_trailing(self) -> None:
        queries, node = _first_call(CLOSURE_ARGUMENT, closure_argument_call)
        assert queries.trailing_closure(node) is None

    def test_single_line_closure(self) -> None:
        text = "foo(x: 1,\n  y: 2) { bar in baz() }"
        queries, node = _first_call(text, trailing_closure_call)
        end_offset = node.offset + node.length - 1
        assert queries.contains_single_line_closure(node, end_offset)

    def test_multi_line_closure(self) -> None:
        queries, node = _first_call(TRAILING, trailing_closure_call)
        end_offset = node.offset + node.length - 1
        assert not queries.contains_single_line_closure(node, end_offset)


class TestLogicalStart:
    """Where a call visually starts."""

    def test_plain_call_starts_at_its_name(self) -> None:
        queries, node = _first_call(TRAILING, trailing_closure_call)
        assert queries.logical_start_offset(node) == 0

    def test_chained_call_starts_at_last_continuation(self) -> None:
        queries, outer = _first_call(CHAIN, chained_calls)
        continuation_line = CHAIN.index("    }.bar")
        assert queries.logical_start_offset(outer) == continuation_line
        assert queries.line_of(queries.logical_start_offset(outer)) == 3

    def test_receiver_of_chain_starts_at_its_own_name(self) -> None:
        queries, outer = _first_call(CHAIN, chained_calls)
        inner = outer.substructure[0]
        assert queries.logical_start_offset(inner) == 0

    def test_leading_dot_continuation(self) -> None:
        text = "items\n    .map(x: 1) {\n    }"
        buffer = SourceBuffer(text)
        start = text.index(".map")
        node = Node(
            kind=CALL_KIND, offset=0, length=len(text),
            name_offset=0, name_length=start + len(".map"),
        )
        assert StructureQueries(buffer).line_of(StructureQueries(buffer).logical_start_offset(node)) == 2

    def test_missing_name_has_no_start(self) -> None:
        queries = StructureQueries(SourceBuffer("foo()"))
        assert queries.logical_start_offset(Node(kind=CALL_KIND, offset=0, length=5)) is None


class TestArgumentsOnNewline:
    """Detection of `(` followed by a line break."""

    def test_first_argument_on_next_line(self) -> None:
        queries, node = _first_call(CLOSURE_ARGUMENT, closure_argument_call)
        assert queries.is_first_argument_on_newline(node)

    def test_first_argument_on_same_line(self) -> None:
        queries, node = _first_call(TRAILING, trailing_closure_call)
        assert not queries.is_first_argument_on_newline(node)

    def test_incomplete_nodes_answer_no(self) -> None:
        queries = StructureQueries(SourceBuffer("foo(\n  x)"))
        node = Node(kind=CALL_KIND)
        assert not queries.is_first_argument_on_newline(node)
        assert not queries.has_trailing_closure(node)
        assert queries.trailing_closure(node) is None
