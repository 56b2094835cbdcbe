"""Suppression regions from `// swiftlint:disable|enable[:previous|:this|:next] <rules>` comments."""

import re
from dataclasses import dataclass
from typing import Optional

from closure_end_linter.domain.constants import ALL_RULES, COMMAND_PATTERN
from closure_end_linter.domain.entities import ByteRange
from closure_end_linter.domain.text import Line, SourceBuffer

_COMMAND_RE = re.compile(COMMAND_PATTERN)


@dataclass(frozen=True)
class Command:
    """A single enable/disable event at a character offset."""
    offset: int
    action: str
    rule_ids: frozenset[str]


class RegionService:
    """Answers whether a rule is active at a position of one buffer snapshot."""

    def __init__(self, buffer: SourceBuffer) -> None:
        self._buffer = buffer
        self._commands = self._parse_commands()

    @property
    def commands(self) -> list[Command]:
        return list(self._commands)

    def _parse_commands(self) -> list[Command]:
        commands: list[Command] = []
        lines = self._buffer.lines
        for position, line in enumerate(lines):
            match = _COMMAND_RE.search(line.content)
            if not match:
                continue
            action, modifier, raw_ids = match.group(1), match.group(2), match.group(3)
            rule_ids = self._parse_rule_ids(raw_ids)
            if not rule_ids:
                continue
            if modifier is None:
                commands.append(Command(line.range.location + match.start(), action, rule_ids))
                continue
            target_position = {"previous": position - 1, "this": position, "next": position + 1}[modifier]
            if 0 <= target_position < len(lines):
                commands.extend(self._line_scoped(lines[target_position], action, rule_ids))
        return sorted(commands, key=lambda command: command.offset)

    @staticmethod
    def _parse_rule_ids(raw_ids: str) -> frozenset[str]:
        ids: list[str] = []
        for token in raw_ids.split():
            if token == "-":
                # trailing explanation, e.g. "disable rule - reason"
                break
            ids.append(token)
        return frozenset(ids)

    def _line_scoped(self, line: Line, action: str, rule_ids: frozenset[str]) -> list[Command]:
        inverse = "enable" if action == "disable" else "disable"
        following = self._buffer.line(line.index + 1)
        end = following.range.location if following else len(self._buffer.contents) + 1
        return [
            Command(line.range.location, action, rule_ids),
            Command(end, inverse, rule_ids),
        ]

    def is_rule_enabled_at(self, rule_id: str, char_offset: int) -> bool:
        disabled: set[str] = set()
        for command in self._commands:
            if command.offset > char_offset:
                break
            if command.action == "disable":
                disabled |= command.rule_ids
            elif ALL_RULES in command.rule_ids:
                disabled.clear()
            else:
                disabled -= command.rule_ids
        return rule_id not in disabled and ALL_RULES not in disabled

    def is_active(self, rule_id: str, byte_range: ByteRange) -> bool:
        """True when the rule is enabled where byte_range starts. Unmappable ranges count as active."""
        char_offset: Optional[int] = self._buffer.byte_to_char(byte_range.location)
        if char_offset is None:
            return True
        return self.is_rule_enabled_at(rule_id, char_offset)
