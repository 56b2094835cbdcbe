"""CLI entry points for closure-lint - Thin Controller using Typer."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from closure_end_linter.domain.config import ConfigurationLoader
from closure_end_linter.domain.constants import CLOSURE_LINT_BANNER, RULE_IDENTIFIER
from closure_end_linter.domain.protocols import (
    AuditReporter,
    FileSystemProtocol,
    GuidanceServiceProtocol,
    StructureProviderProtocol,
    TelemetryPort,
)
from closure_end_linter.domain.rules.closure_end_indentation import ClosureEndIndentationRule
from closure_end_linter.interface.telemetry import TELEMETRY_LOGGER
from closure_end_linter.use_cases.apply_fixes import ApplyFixesUseCase
from closure_end_linter.use_cases.check_audit import CheckAuditUseCase

_OUTPUT_FORMATS: tuple[str, ...] = ("table", "json")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    structure_provider: StructureProviderProtocol
    guidance_service: GuidanceServiceProtocol
    rule: ClosureEndIndentationRule
    reporter: AuditReporter
    json_reporter: AuditReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_path(path: Optional[Path]) -> str:
        """Resolve target path: explicit path, else Sources/ if exists, else '.' (public API)."""
        if path and str(path) != ".":
            return str(path)
        cwd = Path.cwd()
        sources_dir = cwd / "Sources"
        if sources_dir.exists() and sources_dir.is_dir():
            return "Sources"
        return "."

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        """Route library logging through rich; debug level when verbose."""
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(show_path=False)],
            force=True,
        )
        # telemetry already prints its own console lines
        logging.getLogger(TELEMETRY_LOGGER).disabled = not verbose

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="closure-lint",
            help=f"{CLOSURE_LINT_BANNER}\nclosure-lint: closing brace indentation for Swift",
            add_completion=False,
        )

        @app.callback()
        def main(
            verbose: bool = typer.Option(
                False, "--verbose", "-v", help="Show debug logging"),
        ) -> None:
            CLIAppFactory.configure_logging(verbose)

        @app.command()
        def lint(
            path: Optional[Path] = typer.Argument(None, help="File or directory to lint (default: Sources/ or .)"),  # noqa: B008, RUF100
            output_format: str = typer.Option(
                "table", "--format", "-f", help="Output format: table (default) or json"),
            strict: bool = typer.Option(
                False, "--strict", help="Exit non-zero on any violation, not only errors"),
        ) -> None:
            """Report closing braces that do not line up with the line that opened them."""
            if output_format not in _OUTPUT_FORMATS:
                raise typer.BadParameter(
                    f"expected one of {', '.join(_OUTPUT_FORMATS)}", param_hint="--format")
            if output_format == "table":
                deps.telemetry.handshake()
            target_path = CLIAppFactory.resolve_target_path(path)
            use_case = CheckAuditUseCase(
                filesystem=deps.filesystem,
                structure_provider=deps.structure_provider,
                rule=deps.rule,
                telemetry=deps.telemetry,
                config_loader=deps.config_loader,
            )
            audit_result = use_case.execute(target_path)
            reporter = deps.json_reporter if output_format == "json" else deps.reporter
            reporter.report_audit(audit_result)

            if audit_result.has_errors() or (strict and audit_result.has_violations()):
                sys.exit(1)
            sys.exit(0)

        @app.command()
        def fix(
            path: Optional[Path] = typer.Argument(None, help="File or directory to fix (default: Sources/ or .)"),  # noqa: B008, RUF100
            max_passes: Optional[int] = typer.Option(
                None, "--max-passes", min=1, help="Detect/correct cycles per file (default: config or 10)"),
            no_backup: bool = typer.Option(
                False, "--no-backup", help="Skip creating .bak backup files"),
        ) -> None:
            """Re-indent misaligned closing braces in place."""
            deps.telemetry.handshake()
            deps.config_loader.apply_overrides(
                max_passes=max_passes,
                create_backups=False if no_backup else None,
            )
            target_path = CLIAppFactory.resolve_target_path(path)
            use_case = ApplyFixesUseCase(
                filesystem=deps.filesystem,
                structure_provider=deps.structure_provider,
                rule=deps.rule,
                telemetry=deps.telemetry,
                config_loader=deps.config_loader,
            )
            fix_result = use_case.execute(target_path)
            deps.reporter.report_fixes(fix_result)

            if fix_result.unconverged_files:
                deps.telemetry.warning(
                    "Some files still have violations. Run 'closure-lint lint' to see them.")
                sys.exit(1)
            sys.exit(0)

        @app.command()
        def rules() -> None:
            """Describe the rule this tool enforces."""
            entry = deps.guidance_service.get_entry(RULE_IDENTIFIER) or {}
            typer.echo(f"{RULE_IDENTIFIER}: {deps.guidance_service.get_display_name(RULE_IDENTIFIER)}")
            description = deps.guidance_service.get_description(RULE_IDENTIFIER) or deps.rule.description
            typer.echo(f"  {description}")
            typer.echo(f"  kind: {entry.get('kind', 'style')}  fixable: {entry.get('fixable', True)}  "
                       f"severity: {deps.rule.severity.value}")
            typer.echo(f"  how to fix: {deps.guidance_service.get_manual_instructions(RULE_IDENTIFIER)}")

        return app


def create_app(deps: CLIDependencies) -> typer.Typer:
    """Public API: create Typer app with injected dependencies."""
    return CLIAppFactory.create_app(deps)
