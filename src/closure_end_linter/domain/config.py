"""Configuration loader for linter settings."""

import logging
from typing import Optional

from closure_end_linter.domain.constants import (
    DEFAULT_MAX_PASSES,
    DEFAULT_SOURCEKITTEN_PATH,
    DEFAULT_SOURCEKITTEN_TIMEOUT,
)
from closure_end_linter.domain.entities import Severity


class ConfigurationLoader:
    """
    Typed view over the [tool.closure-lint] table of pyproject.toml.

    The raw dict is read by infrastructure (ConfigFileLoader) and injected here;
    invalid values fall back to defaults with a logged warning rather than
    stopping a lint run.
    """

    def __init__(
        self,
        config: Optional[dict[str, object]] = None,
        tool_section: Optional[dict[str, object]] = None,
    ) -> None:
        self._config: dict[str, object] = dict(config or {})
        self._tool_section: dict[str, object] = dict(tool_section or {})

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    def apply_overrides(self, **overrides: object) -> None:
        """CLI options win over pyproject values. None means 'not given'."""
        for key, value in overrides.items():
            if value is not None:
                self._config[key] = value

    @property
    def severity(self) -> Severity:
        raw = self._config.get("severity", Severity.WARNING.value)
        try:
            return Severity(str(raw).lower())
        except ValueError:
            logging.warning(
                "Configuration Warning: unknown severity %r, using 'warning'.", raw)
            return Severity.WARNING

    @property
    def max_passes(self) -> int:
        return self._get_positive_int("max_passes", DEFAULT_MAX_PASSES)

    @property
    def sourcekitten_path(self) -> str:
        val = self._config.get("sourcekitten_path", DEFAULT_SOURCEKITTEN_PATH)
        return str(val) if val else DEFAULT_SOURCEKITTEN_PATH

    @property
    def sourcekitten_timeout(self) -> int:
        return self._get_positive_int("sourcekitten_timeout", DEFAULT_SOURCEKITTEN_TIMEOUT)

    @property
    def create_backups(self) -> bool:
        val = self._config.get("create_backups", True)
        return bool(val)

    @property
    def excluded(self) -> list[str]:
        """Glob patterns (relative to the target path) never linted or fixed."""
        raw = self._config.get("excluded", [])
        if not isinstance(raw, (list, tuple, set)):
            return []
        return [item for item in raw if isinstance(item, str)]

    def _get_positive_int(self, key: str, default: int) -> int:
        raw = self._config.get(key, default)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
            logging.warning(
                "Configuration Warning: '%s' must be a positive integer, using %d.", key, default)
            return default
        return raw
