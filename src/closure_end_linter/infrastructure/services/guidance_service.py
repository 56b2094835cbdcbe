"""GuidanceService: loads the rule registry and provides display names, message templates and instructions."""

from pathlib import Path
from typing import Optional, cast

import yaml

from closure_end_linter.domain.constants import REGISTRY_PREFIX
from closure_end_linter.domain.protocols import GuidanceServiceProtocol
from closure_end_linter.domain.registry_types import RuleRegistryEntry


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml and answers lookups by rule id."""

    def __init__(self, registry_path: Optional[str] = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry],
                         data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_id: str) -> Optional[RuleRegistryEntry]:
        """Return the registry entry for a rule id, or None."""
        entry = self._registry.get(f"{REGISTRY_PREFIX}{rule_id}")
        if entry:
            return cast(RuleRegistryEntry, dict(entry))
        return None

    def get_display_name(self, rule_id: str) -> str:
        entry = self.get_entry(rule_id)
        if not entry:
            return rule_id.replace("_", " ").title()
        return str(entry.get("display_name") or rule_id.replace("_", " ").title())

    def get_message_template(self, rule_id: str) -> Optional[str]:
        entry = self.get_entry(rule_id)
        if entry and entry.get("message_template"):
            return str(entry["message_template"])
        return None

    def get_description(self, rule_id: str) -> str:
        entry = self.get_entry(rule_id)
        if entry and entry.get("short_description"):
            return str(entry["short_description"])
        return ""

    def get_manual_instructions(self, rule_id: str) -> str:
        """Return manual fix instructions, falling back to the registry default."""
        entry = self.get_entry(rule_id)
        if entry and "manual_instructions" in entry:
            return str(entry["manual_instructions"])
        default_entry = self._registry.get(f"{REGISTRY_PREFIX}_default")
        if default_entry and "manual_instructions" in default_entry:
            return str(default_entry["manual_instructions"])
        return "Fix the violation at the reported location."
