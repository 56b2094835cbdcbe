"""Use Case: Check Audit - lint every Swift file under a path and return audit results."""

from typing import TYPE_CHECKING

from closure_end_linter.domain.entities import AuditResult, FileFailure, StyleViolation
from closure_end_linter.domain.errors import ClosureLintError
from closure_end_linter.domain.protocols import (
    FileSystemProtocol,
    StructureProviderProtocol,
    TelemetryPort,
)
from closure_end_linter.domain.source_file import SwiftFile

if TYPE_CHECKING:
    from closure_end_linter.domain.config import ConfigurationLoader
    from closure_end_linter.domain.rules import Checkable


class CheckAuditUseCase:
    """Run the closure end indentation rule over a target path."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        structure_provider: StructureProviderProtocol,
        rule: "Checkable",
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.filesystem = filesystem
        self.structure_provider = structure_provider
        self.rule = rule
        self.telemetry = telemetry
        self.config_loader = config_loader

    def execute(self, target_path: str) -> AuditResult:
        """
        Lint every Swift file under target_path.

        A file whose structure cannot be derived (or that cannot be read) is
        recorded as a failure; the remaining files are still linted.
        """
        self.telemetry.step(f"Starting closure end audit for: {target_path}")
        files = self.filesystem.glob_swift_files(target_path, self.config_loader.excluded)

        violations: list[StyleViolation] = []
        failures: list[FileFailure] = []
        for file_path in files:
            try:
                contents = self.filesystem.read_text(file_path)
                file = SwiftFile(contents, self.structure_provider, path=file_path)
                file_violations = self.rule.validate(file)
            except (OSError, UnicodeDecodeError, ClosureLintError) as e:
                self.telemetry.error(f"file={file_path} status=failed reason={e}")
                failures.append(FileFailure(file_path, str(e)))
                continue
            violations.extend(file_violations)

        self.telemetry.step(
            f"Audit complete. Files checked: {len(files)}, violations: {len(violations)}")
        return AuditResult(violations=violations, failures=failures, files_checked=len(files))
