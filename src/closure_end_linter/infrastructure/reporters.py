"""Audit and fix reporters: rich tables for terminals, JSON for tooling."""

import json
from collections import Counter
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from closure_end_linter.domain.constants import RULE_IDENTIFIER
from closure_end_linter.domain.entities import Severity

if TYPE_CHECKING:
    from closure_end_linter.domain.entities import AuditResult, FileFailure, FixResult
    from closure_end_linter.domain.protocols import GuidanceServiceProtocol

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.WARNING: "yellow",
    Severity.ERROR: "bold red",
}


class TerminalAuditReporter:
    """Terminal reporter using rich tables."""

    def __init__(
        self,
        guidance_service: "GuidanceServiceProtocol",
        console: Optional[Console] = None,
    ) -> None:
        self._guidance = guidance_service
        self.console = console or Console()

    def report_audit(self, audit_result: "AuditResult") -> None:
        """Print one row per violation, then failures and a summary line."""
        if audit_result.violations:
            display_name = self._guidance.get_display_name(RULE_IDENTIFIER)
            table = Table(
                title=escape(f"[{RULE_IDENTIFIER}] {display_name}"), header_style="bold cyan")
            table.add_column("Location", style="cyan", no_wrap=True)
            table.add_column("Severity")
            table.add_column("Reason")
            for violation in audit_result.violations:
                table.add_row(
                    escape(str(violation.location)),
                    f"[{_SEVERITY_STYLES[violation.severity]}]{violation.severity.value}[/]",
                    escape(violation.reason),
                )
            self.console.print(table)
            self.console.print(
                f"How to fix: {self._guidance.get_manual_instructions(RULE_IDENTIFIER)}",
                markup=False,
            )

        self._report_failures(audit_result.failures)

        counts = Counter(v.severity for v in audit_result.violations)
        self.console.print(
            f"Files checked: {audit_result.files_checked}  "
            f"Violations: {len(audit_result.violations)} "
            f"({counts[Severity.ERROR]} error, {counts[Severity.WARNING]} warning)  "
            f"Failures: {len(audit_result.failures)}",
            markup=False,
        )

    def report_fixes(self, fix_result: "FixResult") -> None:
        """Print applied corrections grouped per file, plus unconverged files."""
        if fix_result.corrections:
            per_file = Counter(c.location.file or "<nopath>" for c in fix_result.corrections)
            table = Table(title="Applied Corrections", header_style="bold cyan")
            table.add_column("File", style="cyan")
            table.add_column("Corrections", justify="right")
            for file_name, count in sorted(per_file.items()):
                table.add_row(escape(file_name), str(count))
            self.console.print(table)

        for file_name in fix_result.unconverged_files:
            self.console.print(
                f"[yellow]Not converged:[/] {escape(file_name)} still has violations after the pass limit")

        self._report_failures(fix_result.failures)

        self.console.print(
            f"Corrections: {len(fix_result.corrections)}  "
            f"Files modified: {len(fix_result.modified_files)}  "
            f"Unconverged: {len(fix_result.unconverged_files)}",
            markup=False,
        )

    def _report_failures(self, failures: list["FileFailure"]) -> None:
        if not failures:
            return
        table = Table(title="Files Not Processed", header_style="bold red")
        table.add_column("File", style="cyan")
        table.add_column("Reason")
        for failure in failures:
            table.add_row(escape(failure.path), escape(failure.reason))
        self.console.print(table)


class JsonAuditReporter:
    """Machine-readable reporter: one JSON document per report on stdout."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(soft_wrap=True)

    def report_audit(self, audit_result: "AuditResult") -> None:
        payload = {
            "files_checked": audit_result.files_checked,
            "violations": [v.to_dict() for v in audit_result.violations],
            "failures": [
                {"file": f.path, "reason": f.reason} for f in audit_result.failures
            ],
        }
        self.console.out(json.dumps(payload, indent=2), highlight=False)

    def report_fixes(self, fix_result: "FixResult") -> None:
        payload = {
            "corrections": [
                {
                    "file": c.location.file,
                    "line": c.location.line,
                    "character": c.location.character,
                    "rule_id": c.rule_identifier,
                }
                for c in fix_result.corrections
            ],
            "modified_files": list(fix_result.modified_files),
            "unconverged_files": list(fix_result.unconverged_files),
            "failures": [
                {"file": f.path, "reason": f.reason} for f in fix_result.failures
            ],
        }
        self.console.out(json.dumps(payload, indent=2), highlight=False)
