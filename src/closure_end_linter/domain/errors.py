"""Exceptions raised at the infrastructure boundary. The rule core never raises."""


class ClosureLintError(RuntimeError):
    """Base exception for closure-lint errors."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class StructureUnavailableError(ClosureLintError):
    """The syntax analyzer could not produce a structure tree for a buffer."""

    def __init__(self, message: str) -> None:
        super().__init__("structure_unavailable", message)


class ConfigurationError(ClosureLintError):
    """A configuration value could not be used."""

    def __init__(self, message: str) -> None:
        super().__init__("configuration", message)
