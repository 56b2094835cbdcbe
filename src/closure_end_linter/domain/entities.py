from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TypedDict

from closure_end_linter.domain.constants import ARGUMENT_KIND


class Severity(Enum):
    """Severity attached to reported style violations."""
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class CharRange:
    """A (location, length) range in character offsets of a buffer."""
    location: int
    length: int

    @property
    def upper_bound(self) -> int:
        return self.location + self.length


@dataclass(frozen=True)
class ByteRange:
    """A (location, length) range in UTF-8 byte offsets of a buffer."""
    location: int
    length: int

    @property
    def upper_bound(self) -> int:
        return self.location + self.length


@dataclass(frozen=True)
class Node:
    """
    Structural snapshot of one SourceKit entity (call, argument, closure...).

    All offsets are UTF-8 byte offsets into the buffer the node was derived from.
    Any field may be None when the syntax analyzer did not report it; such nodes
    are never eligible for checking.
    """
    kind: Optional[str] = None
    offset: Optional[int] = None
    length: Optional[int] = None
    name_offset: Optional[int] = None
    name_length: Optional[int] = None
    body_offset: Optional[int] = None
    body_length: Optional[int] = None
    substructure: tuple["Node", ...] = ()

    @property
    def arguments(self) -> tuple["Node", ...]:
        """Enclosed arguments, in source order."""
        return tuple(child for child in self.substructure if child.kind == ARGUMENT_KIND)

    @property
    def name_end(self) -> Optional[int]:
        if self.name_offset is None or self.name_length is None:
            return None
        return self.name_offset + self.name_length


@dataclass(frozen=True)
class Location:
    """1-based line/character position in a file."""
    file: Optional[str]
    line: Optional[int]
    character: Optional[int]

    def __str__(self) -> str:
        parts = [self.file or "<nopath>"]
        if self.line is not None:
            parts.append(str(self.line))
            if self.character is not None:
                parts.append(str(self.character))
        return ":".join(parts)


@dataclass(frozen=True)
class IndentationRanges:
    """Reference indentation (expected) and current closing-brace prefix (actual)."""
    expected: CharRange
    actual: CharRange


@dataclass(frozen=True)
class StyleViolation:
    """User-facing violation: what the reporters print."""
    rule_identifier: str
    rule_name: str
    severity: Severity
    location: Location
    reason: str

    def to_dict(self) -> "StyleViolationDict":
        """Convert to dictionary for the JSON reporter."""
        return {
            "file": self.location.file,
            "line": self.location.line,
            "character": self.location.character,
            "severity": self.severity.value,
            "rule_id": self.rule_identifier,
            "reason": self.reason,
        }


class StyleViolationDict(TypedDict):
    """Serialization shape for StyleViolation."""
    file: Optional[str]
    line: Optional[int]
    character: Optional[int]
    severity: str
    rule_id: str
    reason: str


@dataclass(frozen=True)
class Correction:
    """One applied edit. Location is the pre-edit position of the fixed text."""
    rule_identifier: str
    location: Location


@dataclass(frozen=True)
class CorrectionResult:
    """Outcome of a detect-correct-redetect cycle on one file."""
    corrections: list[Correction] = field(default_factory=list)
    passes: int = 0
    converged: bool = True


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be processed (structure unavailable, unreadable...)."""
    path: str
    reason: str


@dataclass(frozen=True)
class AuditResult:
    """Result of linting a target path."""
    violations: list[StyleViolation] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    files_checked: int = 0

    def has_violations(self) -> bool:
        """Check if any violations were found."""
        return bool(self.violations)

    def has_errors(self) -> bool:
        """Check if any violation is error severity (gates CI)."""
        return any(v.severity is Severity.ERROR for v in self.violations)


@dataclass(frozen=True)
class FixResult:
    """Result of correcting a target path."""
    corrections: list[Correction] = field(default_factory=list)
    modified_files: list[str] = field(default_factory=list)
    unconverged_files: list[str] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    def is_complete(self) -> bool:
        """True when every processed file reached zero remaining violations."""
        return not self.unconverged_files and not self.failures
