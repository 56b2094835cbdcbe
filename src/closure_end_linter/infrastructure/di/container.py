from typing import TYPE_CHECKING, Any, Optional, cast

from closure_end_linter.domain.config import ConfigurationLoader
from closure_end_linter.domain.rules.closure_end_indentation import ClosureEndIndentationRule
from closure_end_linter.infrastructure.config_file_loader import ConfigFileLoader
from closure_end_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from closure_end_linter.infrastructure.gateways.sourcekitten_gateway import SourceKittenGateway
from closure_end_linter.infrastructure.reporters import JsonAuditReporter, TerminalAuditReporter
from closure_end_linter.infrastructure.services.guidance_service import GuidanceService
from closure_end_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from closure_end_linter.domain.protocols import (
        AuditReporter,
        FileSystemProtocol,
        GuidanceServiceProtocol,
        StructureProviderProtocol,
        TelemetryPort,
    )


class ClosureLintContainer:
    """Dependency Injection Container for the closure end linter."""

    _instance: Optional["ClosureLintContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict, tool_section = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict, tool_section)
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("CLOSURE-LINT", "cyan", "Brace alignment check online"))
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton(
            "SourceKittenGateway",
            SourceKittenGateway(
                executable=config_loader.sourcekitten_path,
                timeout=config_loader.sourcekitten_timeout,
            ),
        )

        # Rule registry supplies the user-facing message template
        guidance_service = GuidanceService()
        self.register_singleton("GuidanceService", guidance_service)
        rule = ClosureEndIndentationRule(
            severity=config_loader.severity,
            message_template=guidance_service.get_message_template(
                ClosureEndIndentationRule.identifier),
            max_passes=config_loader.max_passes,
        )
        self.register_singleton("ClosureEndIndentationRule", rule)

        self.register_singleton("AuditReporter", TerminalAuditReporter(guidance_service))
        self.register_singleton("JsonAuditReporter", JsonAuditReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_structure_provider(self) -> "StructureProviderProtocol":
        """Return the SourceKitten-backed structure provider."""
        return cast("StructureProviderProtocol", self.get("SourceKittenGateway"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        return cast("GuidanceServiceProtocol", self.get("GuidanceService"))

    def get_rule(self) -> ClosureEndIndentationRule:
        return cast(ClosureEndIndentationRule, self.get("ClosureEndIndentationRule"))

    def get_reporter(self, output_format: str = "table") -> "AuditReporter":
        """Return the reporter for an output format ('table' or 'json')."""
        key = "JsonAuditReporter" if output_format == "json" else "AuditReporter"
        return cast("AuditReporter", self.get(key))

    @classmethod
    def get_instance(cls) -> "ClosureLintContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = ClosureLintContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
