"""Terminal telemetry: the TelemetryPort implementation used by the CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.text import Text

from closure_end_linter.domain.constants import CLOSURE_LINT_BANNER

TELEMETRY_LOGGER: str = "closure_end_linter.telemetry"


class ProjectTelemetry:
    """Prints status lines to stderr so stdout stays clean for reports; mirrors them to logging."""

    def __init__(
        self,
        project_name: str,
        color: str,
        welcome_msg: str,
        console: Optional[Console] = None,
    ) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome_msg = welcome_msg
        self.console = console or Console(stderr=True, highlight=False)
        self.logger = logging.getLogger(TELEMETRY_LOGGER)

    def handshake(self) -> None:
        self.console.print(Text.from_ansi(CLOSURE_LINT_BANNER))
        self.console.print(
            Text.assemble((self.project_name, f"bold {self.color}"), " ", self.welcome_msg))
        self.logger.info("%s: %s", self.project_name, self.welcome_msg)

    def step(self, message: str) -> None:
        self.console.print(Text.assemble((">> ", self.color), message))
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.console.print(Text(f"WARNING: {message}", style="yellow"))
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.console.print(Text(f"ERROR: {message}", style="bold red"))
        self.logger.error(message)
