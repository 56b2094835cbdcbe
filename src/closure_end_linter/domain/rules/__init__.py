"""Domain models for rules and violations."""

from dataclasses import dataclass

__all__ = [
    "Checkable",
    "Correctable",
    "Violation",
]

from typing import TYPE_CHECKING, Optional, Protocol

from closure_end_linter.domain.entities import ByteRange, IndentationRanges, Location

if TYPE_CHECKING:
    from closure_end_linter.domain.entities import CorrectionResult, StyleViolation
    from closure_end_linter.domain.source_file import SwiftFile


@dataclass(frozen=True)
class Violation:
    """A closing brace whose column differs from its reference line's indentation."""

    location: Location
    indentation_ranges: IndentationRanges
    end_offset: int
    """Byte offset of the closing brace."""
    range: ByteRange
    """Byte span of the whole call; suppression is looked up at its start."""


# -----------------------------------------------------------------------------
# Rule protocols: Checkable (detect + report) and Correctable (rewrite buffer).
# -----------------------------------------------------------------------------


class Checkable(Protocol):
    """Detect violations in a file and map them to user-facing style violations."""

    identifier: str
    description: str

    def violations(self, file: "SwiftFile") -> list[Violation]:
        """Unfiltered violations for the file's current contents."""
        ...

    def validate(self, file: "SwiftFile") -> list["StyleViolation"]:
        """Style violations at locations where the rule is enabled."""
        ...


class Correctable(Protocol):
    """Optional capability: the rule can rewrite the file to remove its violations."""

    def correct(self, file: "SwiftFile", max_passes: Optional[int] = None) -> "CorrectionResult":
        """Apply corrections until no violation remains or the pass cap is hit."""
        ...
