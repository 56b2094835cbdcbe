"""Load [tool.closure-lint] and [tool] from pyproject.toml. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path
from typing import Optional

from closure_end_linter.domain.errors import ConfigurationError


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml, walking up from a start directory.
    """

    SECTION: str = "closure-lint"

    @staticmethod
    def load_config_from_fs(
        start: Optional[Path] = None,
    ) -> tuple[dict[str, object], dict[str, object]]:
        """Returns (config_dict, tool_section); both empty when nothing is found."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logging.warning("Could not read %s: %s", config_file, e)
                continue
            tool_section = data.get("tool", {}) or {}
            config_dict = tool_section.get(ConfigFileLoader.SECTION, {}) or {}
            if not isinstance(config_dict, dict):
                raise ConfigurationError(
                    f"[tool.{ConfigFileLoader.SECTION}] in {config_file} must be a table")
            if config_dict:
                return (config_dict, tool_section)
        return (empty, empty)
