"""
Builders for SourceKit-shaped structure trees.

Tests locate positions in the source text with str.index and pass character
offsets here; the builders convert them to UTF-8 byte offsets the way
SourceKit reports them. A builder function (text -> Node) can be wrapped in
TextStructureProvider so the tree is re-derived after every correction pass.
"""

from typing import Callable, Optional, Sequence

from closure_end_linter.domain.constants import ARGUMENT_KIND, CALL_KIND
from closure_end_linter.domain.entities import Node


def byte_offset(text: str, char_offset: int) -> int:
    return len(text[:char_offset].encode("utf-8"))


def root(*children: Node) -> Node:
    return Node(substructure=tuple(children))


def call(
    text: str,
    start: int,
    name_end: int,
    last: int,
    parens: Optional[tuple[int, int]] = None,
    children: Sequence[Node] = (),
) -> Node:
    """
    A call spanning text[start:last + 1] whose name is text[start:name_end].

    parens holds the character offsets of '(' and ')'; the body is what lies
    between them.
    """
    offset = byte_offset(text, start)
    body_offset: Optional[int] = None
    body_length: Optional[int] = None
    if parens is not None:
        body_offset = byte_offset(text, parens[0] + 1)
        body_length = byte_offset(text, parens[1]) - body_offset
    return Node(
        kind=CALL_KIND,
        offset=offset,
        length=byte_offset(text, last + 1) - offset,
        name_offset=offset,
        name_length=byte_offset(text, name_end) - offset,
        body_offset=body_offset,
        body_length=body_length,
        substructure=tuple(children),
    )


def argument(text: str, start: int, last: int, children: Sequence[Node] = ()) -> Node:
    """
    An argument spanning text[start:last + 1].

    `label: value` arguments are named by their label; an argument starting
    with '{' is an unlabeled (trailing) closure with an empty name.
    """
    offset = byte_offset(text, start)
    if text[start] == "{":
        name_length = 0
        value_start = start
    else:
        colon = text.index(":", start)
        name_length = byte_offset(text, colon) - offset
        value_start = colon + 1
        while text[value_start] == " ":
            value_start += 1
    body_offset = byte_offset(text, value_start)
    return Node(
        kind=ARGUMENT_KIND,
        offset=offset,
        length=byte_offset(text, last + 1) - offset,
        name_offset=offset,
        name_length=name_length,
        body_offset=body_offset,
        body_length=byte_offset(text, last + 1) - body_offset,
        substructure=tuple(children),
    )


class TextStructureProvider:
    """StructureProviderProtocol backed by a builder function. Counts calls."""

    def __init__(self, build: Callable[[str], Node]) -> None:
        self.build = build
        self.calls = 0

    def structure(self, contents: str) -> Node:
        self.calls += 1
        return self.build(contents)


# -----------------------------------------------------------------------------
# Shared fixtures' source shapes
# -----------------------------------------------------------------------------


def trailing_closure_call(text: str) -> Node:
    """`foo(x: ..., y: ...) { ... }`: one call with two labeled args and a trailing closure."""
    foo = text.index("foo(")
    open_paren = foo + 3
    close_paren = text.index(")", open_paren)
    comma = text.index(",", open_paren)
    brace = text.index("{", close_paren)
    last = text.rindex("}")
    return root(
        call(
            text, foo, foo + 3, last,
            parens=(open_paren, close_paren),
            children=(
                argument(text, text.index("x:", open_paren), comma - 1),
                argument(text, text.index("y:", comma), close_paren - 1),
                argument(text, brace, last),
            ),
        )
    )


def chained_calls(text: str) -> Node:
    """`foo(a:, b:) { }.bar(c:, d:) { }`: bar's name spans the whole chain, foo is nested in it."""
    foo = text.index("foo(")
    foo_close = text.index(")", foo)
    foo_brace = text.index("{", foo_close)
    foo_last = text.index("}", foo_brace)
    bar = text.index("bar(")
    bar_close = text.index(")", bar)
    bar_brace = text.index("{", bar_close)
    bar_last = text.rindex("}")
    inner = call(
        text, foo, foo + 3, foo_last,
        parens=(foo + 3, foo_close),
        children=(
            argument(text, text.index("a:", foo), text.index(",", foo) - 1),
            argument(text, text.index("b:", foo), foo_close - 1),
            argument(text, foo_brace, foo_last),
        ),
    )
    outer = call(
        text, foo, bar + 3, bar_last,
        parens=(bar + 3, bar_close),
        children=(
            inner,
            argument(text, text.index("c:", bar), text.index(",", bar) - 1),
            argument(text, text.index("d:", bar), bar_close - 1),
            argument(text, bar_brace, bar_last),
        ),
    )
    return root(outer)


def closure_argument_call(text: str) -> Node:
    """`foo(\\n a: { ... },\\n b: 2\\n)`: the first argument is a closure, no trailing closure."""
    foo = text.index("foo(")
    close_paren = text.rindex(")")
    a = text.index("a:", foo)
    a_last = text.index("}", a)
    b = text.index("b:", a_last)
    b_last = b + len("b: 2") - 1
    return root(
        call(
            text, foo, foo + 3, close_paren,
            parens=(foo + 3, close_paren),
            children=(
                argument(text, a, a_last),
                argument(text, b, b_last),
            ),
        )
    )


def nested_calls(text: str) -> Node:
    """`foo(x:, y:) { bar(a:, b:) { ... } }`: bar sits inside foo's trailing closure."""
    foo = text.index("foo(")
    foo_close = text.index(")", foo)
    foo_brace = text.index("{", foo_close)
    foo_last = text.rindex("}")
    bar = text.index("bar(")
    bar_close = text.index(")", bar)
    bar_brace = text.index("{", bar_close)
    bar_last = text.index("}", bar_brace)
    inner = call(
        text, bar, bar + 3, bar_last,
        parens=(bar + 3, bar_close),
        children=(
            argument(text, text.index("a:", bar), text.index(",", bar) - 1),
            argument(text, text.index("b:", bar), bar_close - 1),
            argument(text, bar_brace, bar_last),
        ),
    )
    return root(
        call(
            text, foo, foo + 3, foo_last,
            parens=(foo + 3, foo_close),
            children=(
                argument(text, text.index("x:", foo), text.index(",", foo) - 1),
                argument(text, text.index("y:", foo), foo_close - 1),
                argument(text, foo_brace, foo_last, children=(inner,)),
            ),
        )
    )


def sibling_calls(text: str) -> Node:
    """`foo(x:, y:) { ... }; bar(a:, b:) { ... }`: two top-level calls, bar after foo's brace."""
    foo = text.index("foo(")
    foo_close = text.index(")", foo)
    foo_brace = text.index("{", foo_close)
    foo_last = text.index("}", foo_brace)
    bar = text.index("bar(")
    bar_close = text.index(")", bar)
    bar_brace = text.index("{", bar_close)
    bar_last = text.rindex("}")
    return root(
        call(
            text, foo, foo + 3, foo_last,
            parens=(foo + 3, foo_close),
            children=(
                argument(text, text.index("x:", foo), text.index(",", foo) - 1),
                argument(text, text.index("y:", foo), foo_close - 1),
                argument(text, foo_brace, foo_last),
            ),
        ),
        call(
            text, bar, bar + 3, bar_last,
            parens=(bar + 3, bar_close),
            children=(
                argument(text, text.index("a:", bar), text.index(",", bar) - 1),
                argument(text, text.index("b:", bar), bar_close - 1),
                argument(text, bar_brace, bar_last),
            ),
        ),
    )
