"""Closure End Indentation - detection, correction and reporting for one rule."""

import logging
import re
from typing import Callable, Optional

from closure_end_linter.domain.constants import (
    DEFAULT_MAX_PASSES,
    NOT_WHITESPACE_PATTERN,
    RULE_DESCRIPTION,
    RULE_IDENTIFIER,
    RULE_NAME,
)
from closure_end_linter.domain.entities import (
    ByteRange,
    CharRange,
    Correction,
    CorrectionResult,
    IndentationRanges,
    Node,
    Severity,
    StyleViolation,
)
from closure_end_linter.domain.rules import Violation
from closure_end_linter.domain.source_file import SwiftFile
from closure_end_linter.domain.structure import StructureQueries
from closure_end_linter.domain.text import SourceBuffer

_NOT_WHITESPACE_RE = re.compile(NOT_WHITESPACE_PATTERN)

DEFAULT_MESSAGE_TEMPLATE: str = RULE_DESCRIPTION + " Expected {expected}, got {actual}."


class ClosureEndIndentationRule:
    """
    Closure end should have the same indentation as the line that started it.

    A call's own closing brace is compared with the call's logical start line
    (the callee, or the last `}.`/`.` continuation of a method chain). When a
    call's argument list opens on a new line, each closure argument's closing
    brace is also compared with the line the argument starts on.

    Correctable: edits run in reverse document order and the whole
    detect/correct cycle repeats, because fixing one brace can move the
    reference line of another.
    """

    identifier: str = RULE_IDENTIFIER
    name: str = RULE_NAME
    description: str = RULE_DESCRIPTION

    def __init__(
        self,
        severity: Severity = Severity.WARNING,
        message_template: Optional[str] = None,
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> None:
        self.severity = severity
        self.message_template = message_template or DEFAULT_MESSAGE_TEMPLATE
        self.max_passes = max_passes

    # -------------------------------------------------------------------------
    # Detection
    # -------------------------------------------------------------------------

    def violations(self, file: SwiftFile) -> list[Violation]:
        """All violations for the file's current contents, ignoring suppression."""
        queries = StructureQueries(file.buffer)
        return self._violations_in(file, queries, file.structure)

    def _violations_in(self, file: SwiftFile, queries: StructureQueries, node: Node) -> list[Violation]:
        found: list[Violation] = []
        for child in node.substructure:
            found.extend(self._violations_in(file, queries, child))
            if queries.is_call(child):
                found.extend(self._validate_arguments(file, queries, child))
                call_violation = self._validate_call(file, queries, child)
                if call_violation is not None:
                    found.append(call_violation)
        return found

    def _validate_call(self, file: SwiftFile, queries: StructureQueries, call: Node) -> Optional[Violation]:
        return self._validate_closure_end(
            file,
            queries,
            call,
            start_offset=queries.logical_start_offset(call),
            is_single_line=queries.contains_single_line_closure,
        )

    def _validate_arguments(self, file: SwiftFile, queries: StructureQueries, call: Node) -> list[Violation]:
        if not queries.is_first_argument_on_newline(call):
            return []

        closure_arguments = queries.closure_arguments(call)
        if queries.has_trailing_closure(call) and closure_arguments:
            # the trailing closure's brace is the call's own end
            closure_arguments.pop()

        violations: list[Violation] = []
        for argument in closure_arguments:
            violation = self._validate_closure_end(
                file,
                queries,
                argument,
                start_offset=argument.offset,
                is_single_line=queries.is_single_line_closure,
            )
            if violation is not None:
                violations.append(violation)
        return violations

    def _validate_closure_end(
        self,
        file: SwiftFile,
        queries: StructureQueries,
        node: Node,
        start_offset: Optional[int],
        is_single_line: Callable[[Node, int], bool],
    ) -> Optional[Violation]:
        buffer = file.buffer
        if (
            node.offset is None
            or node.length is None
            or node.body_length is None
            or node.body_length <= 0
            or node.name_end is None
        ):
            return None
        end_offset = node.offset + node.length - 1
        if buffer.substring_with_byte_range(end_offset, 1) != "}":
            return None

        start_line = queries.line_of(start_offset)
        end_position = buffer.line_and_character(end_offset)
        name_end_line = queries.line_of(node.name_end)
        if start_line is None or end_position is None or name_end_line is None:
            return None
        end_line, end_character = end_position
        if start_line == end_line or name_end_line == end_line:
            return None
        if is_single_line(node, end_offset):
            return None

        start = buffer.line(start_line)
        end = buffer.line(end_line)
        if start is None or end is None:
            return None
        match = buffer.search(_NOT_WHITESPACE_RE, start.range)
        if match is None:
            return None
        expected = match.start() - start.range.location
        actual = end_character - 1
        if expected == actual:
            return None

        return Violation(
            location=file.location_for_byte_offset(end_offset),
            indentation_ranges=IndentationRanges(
                expected=CharRange(start.range.location, expected),
                actual=CharRange(end.range.location, actual),
            ),
            end_offset=end_offset,
            range=ByteRange(node.offset, node.length),
        )

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def validate(self, file: SwiftFile) -> list[StyleViolation]:
        """Style violations for every violation whose closing brace is not suppressed."""
        return [
            self.style_violation(violation)
            for violation in self.violations(file)
            if file.rule_enabled(self.identifier, ByteRange(violation.end_offset, 1))
        ]

    def style_violation(self, violation: Violation) -> StyleViolation:
        ranges = violation.indentation_ranges
        reason = self.message_template.format(
            expected=ranges.expected.length, actual=ranges.actual.length
        )
        return StyleViolation(
            rule_identifier=self.identifier,
            rule_name=self.name,
            severity=self.severity,
            location=violation.location,
            reason=reason,
        )

    # -------------------------------------------------------------------------
    # Correction
    # -------------------------------------------------------------------------

    def correct(self, file: SwiftFile, max_passes: Optional[int] = None) -> CorrectionResult:
        """
        Correct the file in place, re-detecting after every pass.

        Stops when a pass finds nothing to correct, when no edit of a pass could
        be applied, or after max_passes passes. In the last two cases the result
        reports converged=False and carries every correction made so far.
        """
        cap = max_passes if max_passes is not None else self.max_passes
        corrections: list[Correction] = []
        passes = 0
        while passes < cap:
            pending = self.correctable_violations(file)
            if not pending:
                return CorrectionResult(corrections=corrections, passes=passes, converged=True)
            passes += 1
            applied = self._correct_pass(file, pending)
            corrections.extend(applied)
            if not applied:
                break

        converged = not self.correctable_violations(file)
        if not converged:
            logging.warning(
                "%s: %s did not converge after %d pass(es); %d correction(s) applied",
                file.path or "<nopath>", self.identifier, passes, len(corrections),
            )
        return CorrectionResult(corrections=corrections, passes=passes, converged=converged)

    def correctable_violations(self, file: SwiftFile) -> list[Violation]:
        """Enabled violations, rightmost closing brace first."""
        enabled = [
            violation for violation in self.violations(file)
            if file.rule_enabled(self.identifier, violation.range)
        ]
        # of two braces on one line, the later one owns the longer actual range
        return sorted(
            enabled,
            key=lambda v: (-v.indentation_ranges.actual.upper_bound, v.range.location),
        )

    def _correct_pass(self, file: SwiftFile, violations: list[Violation]) -> list[Correction]:
        working = SourceBuffer(file.contents)
        resolve = self.expected_resolver(violations)
        corrections: list[Correction] = []
        for violation in violations:
            expected = resolve(violation).indentation_ranges.expected
            actual = violation.indentation_ranges.actual
            if self._correct_range(working, expected, actual):
                corrections.append(
                    Correction(self.identifier, file.location_for_char_offset(actual.location))
                )
        if corrections:
            file.write(working.contents)
        return corrections

    @staticmethod
    def expected_resolver(violations: list[Violation]) -> Callable[[Violation], Violation]:
        """
        Map a violation to the one whose expected range it must copy.

        When v's expected range is exactly another violation's actual range, that
        line is about to be rewritten, so v follows the link to the other
        violation's expected range, transitively. A link back to an already
        visited violation ends the chase.
        """
        by_actual = {v.indentation_ranges.actual: v for v in violations}

        def resolve(violation: Violation) -> Violation:
            current = violation
            visited = {violation.indentation_ranges.actual}
            while True:
                target = by_actual.get(current.indentation_ranges.expected)
                if target is None or target.indentation_ranges.actual in visited:
                    return current
                visited.add(target.indentation_ranges.actual)
                current = target

        return resolve

    @staticmethod
    def _correct_range(buffer: SourceBuffer, expected: CharRange, actual: CharRange) -> bool:
        expected_text = buffer.substring(expected)
        if expected_text is None or not buffer.contains(actual):
            logging.debug("Skipping correction: range %s not in buffer", actual)
            return False

        if buffer.search(_NOT_WHITESPACE_RE, actual) is not None:
            # code precedes the brace: move the brace to its own line
            return buffer.insert(actual.upper_bound, "\n" + expected_text)
        if buffer.substring(actual) == expected_text:
            return False
        return buffer.replace(actual, expected_text)
