"""Use Case: Apply Fixes - correct closing brace indentation across a target path."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from closure_end_linter.domain.constants import BACKUP_SUFFIX
from closure_end_linter.domain.entities import Correction, FileFailure, FixResult
from closure_end_linter.domain.errors import ClosureLintError
from closure_end_linter.domain.protocols import (
    FileSystemProtocol,
    StructureProviderProtocol,
    TelemetryPort,
)
from closure_end_linter.domain.source_file import SwiftFile

if TYPE_CHECKING:
    from closure_end_linter.domain.config import ConfigurationLoader
    from closure_end_linter.domain.rules import Correctable


class ApplyFixesUseCase:
    """
    Orchestrate multi-pass correction of every Swift file under a path.

    Each file is corrected in memory until re-detection finds nothing left (or
    the pass cap is hit), then written back once. A .bak copy of the original
    is written first unless backups are disabled.
    """

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        structure_provider: StructureProviderProtocol,
        rule: "Correctable",
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
        create_backups: Optional[bool] = None,
        max_passes: Optional[int] = None,
    ) -> None:
        self.filesystem = filesystem
        self.structure_provider = structure_provider
        self.rule = rule
        self.telemetry = telemetry
        self.config_loader = config_loader
        self.create_backups = (
            config_loader.create_backups if create_backups is None else create_backups
        )
        self.max_passes = config_loader.max_passes if max_passes is None else max_passes

    def execute(self, target_path: str) -> FixResult:
        """Correct every Swift file under target_path. Returns the aggregated FixResult."""
        self.telemetry.step(f"Starting closure end fixes for: {target_path}")
        files = self.filesystem.glob_swift_files(target_path, self.config_loader.excluded)

        corrections: list[Correction] = []
        modified_files: list[str] = []
        unconverged_files: list[str] = []
        failures: list[FileFailure] = []
        for file_path in files:
            try:
                applied, modified, converged = self._fix_file(file_path)
            except (OSError, UnicodeDecodeError, ClosureLintError) as e:
                self.telemetry.error(f"file={self._rel_path(file_path)} status=failed reason={e}")
                failures.append(FileFailure(file_path, str(e)))
                continue
            corrections.extend(applied)
            if modified:
                modified_files.append(file_path)
            if not converged:
                unconverged_files.append(file_path)

        self.telemetry.step(
            f"Fixes complete. Corrections: {len(corrections)}, files modified: {len(modified_files)}")
        return FixResult(
            corrections=corrections,
            modified_files=modified_files,
            unconverged_files=unconverged_files,
            failures=failures,
        )

    def _fix_file(self, file_path: str) -> tuple[list[Correction], bool, bool]:
        """Return (corrections, modified, converged) for one file."""
        original = self.filesystem.read_text(file_path)
        file = SwiftFile(original, self.structure_provider, path=file_path)
        result = self.rule.correct(file, max_passes=self.max_passes)
        rel = self._rel_path(file_path)

        if not result.converged:
            self.telemetry.warning(
                f"file={rel} status=unconverged passes={result.passes} "
                f"corrections={len(result.corrections)}")
        if file.contents == original:
            return (result.corrections, False, result.converged)

        if self.create_backups:
            self._create_backup(file_path)
        self.filesystem.write_text(file_path, file.contents)
        self.telemetry.step(
            f"file={rel} status=fixed corrections={len(result.corrections)} passes={result.passes}")
        return (result.corrections, True, result.converged)

    def _create_backup(self, file_path: str) -> str:
        """Create a .bak backup of the file. Returns backup path string."""
        backup_path = file_path + BACKUP_SUFFIX
        self.filesystem.copy_file(file_path, backup_path)
        return backup_path

    def _rel_path(self, file_path: str) -> str:
        """Return path relative to cwd for logging; fallback to absolute."""
        try:
            return str(Path(file_path).relative_to(Path.cwd()))
        except ValueError:
            return file_path
