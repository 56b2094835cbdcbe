from typing import TYPE_CHECKING, Optional, Protocol

from closure_end_linter.domain.registry_types import RuleRegistryEntry

if TYPE_CHECKING:
    from closure_end_linter.domain.entities import AuditResult, FixResult, Node


class StructureProviderProtocol(Protocol):
    """Protocol for the syntax analyzer: buffer text in, structure tree out."""

    def structure(self, contents: str) -> "Node":
        """Return the root node for contents. Raises StructureUnavailableError on failure."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def glob_swift_files(self, path: str, excluded: Optional[list[str]] = None) -> list[str]:
        """Get all Swift files in path (recursive if directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def copy_file(self, source: str, destination: str) -> None:
        """Copy a file (used for .bak backups)."""
        ...


class GuidanceServiceProtocol(Protocol):
    """Protocol for the rule registry (display names, message templates, instructions)."""

    def get_entry(self, rule_id: str) -> Optional[RuleRegistryEntry]: ...
    def get_display_name(self, rule_id: str) -> str: ...
    def get_message_template(self, rule_id: str) -> Optional[str]: ...
    def get_description(self, rule_id: str) -> str: ...
    def get_manual_instructions(self, rule_id: str) -> str: ...


class AuditReporter(Protocol):
    """Protocol for reporting lint/fix results."""

    def report_audit(self, audit_result: "AuditResult") -> None:
        """Report lint results to the user."""
        ...

    def report_fixes(self, fix_result: "FixResult") -> None:
        """Report applied corrections to the user."""
        ...
