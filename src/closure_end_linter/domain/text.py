"""Text/position utilities: byte offsets, character offsets and lines over one mutable buffer."""

import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from itertools import accumulate
from typing import Optional

from closure_end_linter.domain.entities import ByteRange, CharRange

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Line:
    """One line of a buffer. Ranges exclude the line terminator."""
    index: int
    content: str
    range: CharRange
    byte_range: ByteRange


class SourceBuffer:
    """
    Full text of one file plus its derived line table.

    Three coordinate systems meet here: UTF-8 byte offsets (what the syntax
    analyzer reports), character offsets (what edits use) and 1-based
    (line, character) positions (what users see). Every mutation rebuilds the
    derived tables, so offsets taken before an edit are only valid before the
    edit point.
    """

    def __init__(self, contents: str) -> None:
        self._contents = contents
        self._byte_offsets: Optional[list[int]] = None
        self._lines: list[Line] = []
        self._line_starts: list[int] = []
        self._reindex()

    @property
    def contents(self) -> str:
        return self._contents

    @property
    def lines(self) -> list[Line]:
        return self._lines

    @property
    def byte_length(self) -> int:
        if self._byte_offsets is None:
            return len(self._contents)
        return self._byte_offsets[-1]

    def _reindex(self) -> None:
        if self._contents.isascii():
            self._byte_offsets = None
        else:
            self._byte_offsets = [0, *accumulate(len(ch.encode("utf-8")) for ch in self._contents)]
        self._lines = self._split_lines()
        self._line_starts = [line.range.location for line in self._lines]

    def _split_lines(self) -> list[Line]:
        lines: list[Line] = []
        start = 0
        for match in _LINE_BREAK_RE.finditer(self._contents):
            lines.append(self._make_line(len(lines) + 1, start, match.start()))
            start = match.end()
        if start < len(self._contents):
            lines.append(self._make_line(len(lines) + 1, start, len(self._contents)))
        return lines

    def _make_line(self, index: int, start: int, end: int) -> Line:
        byte_start = self._byte_at(start)
        byte_end = self._byte_at(end)
        return Line(
            index=index,
            content=self._contents[start:end],
            range=CharRange(start, end - start),
            byte_range=ByteRange(byte_start, byte_end - byte_start),
        )

    # -- offset conversion -------------------------------------------------

    def char_to_byte(self, char_offset: int) -> Optional[int]:
        """Byte offset of a character offset, or None when out of bounds."""
        if char_offset < 0 or char_offset > len(self._contents):
            return None
        return self._byte_at(char_offset)

    def _byte_at(self, char_offset: int) -> int:
        if self._byte_offsets is None:
            return char_offset
        return self._byte_offsets[char_offset]

    def byte_to_char(self, byte_offset: int) -> Optional[int]:
        """Character offset of a byte offset. None when out of bounds or inside a character."""
        if byte_offset < 0 or byte_offset > self.byte_length:
            return None
        if self._byte_offsets is None:
            return byte_offset
        index = bisect_left(self._byte_offsets, byte_offset)
        if index < len(self._byte_offsets) and self._byte_offsets[index] == byte_offset:
            return index
        return None

    def byte_range_to_char_range(self, start: int, length: int) -> Optional[CharRange]:
        if length < 0:
            return None
        char_start = self.byte_to_char(start)
        char_end = self.byte_to_char(start + length)
        if char_start is None or char_end is None:
            return None
        return CharRange(char_start, char_end - char_start)

    def char_range_to_byte_range(self, char_range: CharRange) -> Optional[ByteRange]:
        if char_range.length < 0:
            return None
        byte_start = self.char_to_byte(char_range.location)
        byte_end = self.char_to_byte(char_range.upper_bound)
        if byte_start is None or byte_end is None:
            return None
        return ByteRange(byte_start, byte_end - byte_start)

    # -- line lookup ---------------------------------------------------------

    def line(self, index: int) -> Optional[Line]:
        """1-indexed line lookup."""
        if index < 1 or index > len(self._lines):
            return None
        return self._lines[index - 1]

    def line_and_character_for_char(self, char_offset: int) -> Optional[tuple[int, int]]:
        """(line, character), both 1-based, for a character offset."""
        if not self._lines or char_offset < 0 or char_offset > len(self._contents):
            return None
        position = bisect_right(self._line_starts, char_offset) - 1
        if position < 0:
            return None
        line = self._lines[position]
        return (line.index, char_offset - line.range.location + 1)

    def line_and_character(self, byte_offset: int) -> Optional[tuple[int, int]]:
        """(line, character), both 1-based, for a byte offset."""
        char_offset = self.byte_to_char(byte_offset)
        if char_offset is None:
            return None
        return self.line_and_character_for_char(char_offset)

    # -- text access -----------------------------------------------------------

    def contains(self, char_range: CharRange) -> bool:
        return (
            char_range.location >= 0
            and char_range.length >= 0
            and char_range.upper_bound <= len(self._contents)
        )

    def substring(self, char_range: CharRange) -> Optional[str]:
        if not self.contains(char_range):
            return None
        return self._contents[char_range.location:char_range.upper_bound]

    def substring_with_byte_range(self, start: int, length: int) -> Optional[str]:
        char_range = self.byte_range_to_char_range(start, length)
        if char_range is None:
            return None
        return self.substring(char_range)

    def search(self, pattern: re.Pattern[str], char_range: CharRange) -> Optional[re.Match[str]]:
        """First match of pattern anywhere inside char_range."""
        if not self.contains(char_range):
            return None
        return pattern.search(self._contents, char_range.location, char_range.upper_bound)

    def match(self, pattern: re.Pattern[str], char_range: CharRange) -> Optional[re.Match[str]]:
        """Match of pattern anchored at the start of char_range."""
        if not self.contains(char_range):
            return None
        return pattern.match(self._contents, char_range.location, char_range.upper_bound)

    # -- mutation ------------------------------------------------------------

    def replace(self, char_range: CharRange, text: str) -> bool:
        """Replace the text of char_range. Returns False when the range is not in the buffer."""
        if not self.contains(char_range):
            return False
        self._contents = (
            self._contents[:char_range.location] + text + self._contents[char_range.upper_bound:]
        )
        self._reindex()
        return True

    def insert(self, char_offset: int, text: str) -> bool:
        """Insert text before char_offset. Returns False when the offset is not in the buffer."""
        return self.replace(CharRange(char_offset, 0), text)
