"""Structural queries over call nodes: closures, trailing closures, chain continuations."""

import re
from typing import Optional

from closure_end_linter.domain.constants import (
    ARGUMENTS_ON_NEWLINE_PATTERN,
    CALL_KIND,
    CHAIN_CONTINUATION_PATTERN,
    CLOSURE_BODY_PATTERN,
)
from closure_end_linter.domain.entities import Node
from closure_end_linter.domain.text import SourceBuffer

_CHAIN_CONTINUATION_RE = re.compile(CHAIN_CONTINUATION_PATTERN)
_CLOSURE_BODY_RE = re.compile(CLOSURE_BODY_PATTERN)
_ARGUMENTS_ON_NEWLINE_RE = re.compile(ARGUMENTS_ON_NEWLINE_PATTERN)


class StructureQueries:
    """
    Answers questions about a node against the buffer it was derived from.

    Every query treats a missing offset, or one that does not map onto the
    buffer, as "no": nodes are never required to be complete.
    """

    def __init__(self, buffer: SourceBuffer) -> None:
        self._buffer = buffer

    @staticmethod
    def is_call(node: Node) -> bool:
        return node.kind == CALL_KIND

    def line_of(self, byte_offset: Optional[int]) -> Optional[int]:
        if byte_offset is None:
            return None
        position = self._buffer.line_and_character(byte_offset)
        return position[0] if position else None

    def has_trailing_closure(self, node: Node) -> bool:
        """The call's text ends with something other than ')', i.e. a closure outside the parens."""
        if node.offset is None or node.length is None:
            return False
        text = self._buffer.substring_with_byte_range(node.offset, node.length)
        if text is None:
            return False
        return not text.endswith(")")

    def is_closure_argument(self, argument: Node) -> bool:
        if argument.body_offset is None or argument.body_length is None:
            return False
        body = self._buffer.byte_range_to_char_range(argument.body_offset, argument.body_length)
        if body is None:
            return False
        return self._buffer.match(_CLOSURE_BODY_RE, body) is not None

    def closure_arguments(self, node: Node) -> list[Node]:
        return [argument for argument in node.arguments if self.is_closure_argument(argument)]

    def trailing_closure(self, node: Node) -> Optional[Node]:
        """The only closure argument, when it is also the last argument."""
        arguments = node.arguments
        closures = self.closure_arguments(node)
        if len(closures) == 1 and closures[-1] is arguments[-1]:
            return closures[-1]
        return None

    def is_single_line_closure(self, argument: Node, end_offset: int) -> bool:
        start_line = self.line_of(argument.body_offset)
        end_line = self.line_of(end_offset)
        if start_line is None or end_line is None:
            return False
        return start_line == end_line

    def contains_single_line_closure(self, node: Node, end_offset: int) -> bool:
        closure = self.trailing_closure(node)
        if closure is None:
            return False
        return self.is_single_line_closure(closure, end_offset)

    def logical_start_offset(self, node: Node) -> Optional[int]:
        """
        Byte offset of the line the call visually starts on.

        Normally the callee name. When the name span crosses lines as a method
        chain (`}.map {` or `.filter {` on a continuation line), the last
        continuation token is the start instead.
        """
        if node.name_offset is None or node.name_length is None:
            return None
        name_range = self._buffer.byte_range_to_char_range(node.name_offset, node.name_length)
        if name_range is None:
            return node.name_offset
        last_match = None
        for match in _CHAIN_CONTINUATION_RE.finditer(
            self._buffer.contents, name_range.location, name_range.upper_bound
        ):
            last_match = match
        if last_match is None:
            return node.name_offset
        continuation = self._buffer.char_to_byte(last_match.start(1))
        return continuation if continuation is not None else node.name_offset

    def is_first_argument_on_newline(self, node: Node) -> bool:
        """The argument list opens with `(` followed by a line break before the first argument."""
        name_end = node.name_end
        arguments = node.arguments
        if name_end is None or not arguments or arguments[0].offset is None:
            return False
        between = self._buffer.byte_range_to_char_range(name_end, arguments[0].offset - name_end)
        if between is None:
            return False
        return self._buffer.match(_ARGUMENTS_ON_NEWLINE_RE, between) is not None
