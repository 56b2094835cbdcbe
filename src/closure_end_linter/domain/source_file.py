"""SwiftFile: one file's buffer, its lazily derived structure tree and suppression regions."""

from typing import Optional

from closure_end_linter.domain.entities import ByteRange, Location, Node
from closure_end_linter.domain.protocols import StructureProviderProtocol
from closure_end_linter.domain.suppression import RegionService
from closure_end_linter.domain.text import SourceBuffer


class SwiftFile:
    """
    Exclusive owner of one buffer for a detect-correct-redetect cycle.

    The structure tree and regions are snapshots of the current contents; write()
    discards both so the next access re-derives them from the new text.
    """

    def __init__(
        self,
        contents: str,
        structure_provider: Optional[StructureProviderProtocol] = None,
        path: Optional[str] = None,
    ) -> None:
        self.path = path
        self._structure_provider = structure_provider
        self._buffer = SourceBuffer(contents)
        self._structure: Optional[Node] = None
        self._regions: Optional[RegionService] = None

    @property
    def contents(self) -> str:
        return self._buffer.contents

    @property
    def buffer(self) -> SourceBuffer:
        return self._buffer

    @property
    def structure(self) -> Node:
        if self._structure is None:
            if self._structure_provider is None:
                self._structure = Node()
            else:
                self._structure = self._structure_provider.structure(self.contents)
        return self._structure

    @property
    def regions(self) -> RegionService:
        if self._regions is None:
            self._regions = RegionService(self._buffer)
        return self._regions

    def write(self, contents: str) -> None:
        """Replace the contents; structure and regions are re-derived on next use."""
        self._buffer = SourceBuffer(contents)
        self._structure = None
        self._regions = None

    def rule_enabled(self, rule_id: str, byte_range: ByteRange) -> bool:
        return self.regions.is_active(rule_id, byte_range)

    def location_for_byte_offset(self, byte_offset: int) -> Location:
        position = self._buffer.line_and_character(byte_offset)
        if position is None:
            return Location(self.path, None, None)
        return Location(self.path, position[0], position[1])

    def location_for_char_offset(self, char_offset: int) -> Location:
        position = self._buffer.line_and_character_for_char(char_offset)
        if position is None:
            return Location(self.path, None, None)
        return Location(self.path, position[0], position[1])
