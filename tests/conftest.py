"""Pytest configuration and shared fixtures.

pythonpath in pyproject.toml puts src/ and the project root on sys.path, so
tests import the package directly and structure builders as
tests.structure_builders.
"""

from typing import Callable
from unittest.mock import MagicMock

import pytest

from closure_end_linter.domain.config import ConfigurationLoader
from closure_end_linter.domain.entities import Node
from closure_end_linter.domain.rules.closure_end_indentation import ClosureEndIndentationRule
from closure_end_linter.domain.source_file import SwiftFile
from tests.structure_builders import TextStructureProvider


@pytest.fixture
def rule() -> ClosureEndIndentationRule:
    return ClosureEndIndentationRule()


@pytest.fixture
def make_file() -> Callable[..., SwiftFile]:
    """Build a SwiftFile whose structure is re-derived from its text by a builder."""

    def _make(text: str, build: Callable[[str], Node], path: str = "Sources/App.swift") -> SwiftFile:
        return SwiftFile(text, TextStructureProvider(build), path=path)

    return _make


def use_case_required_deps(**overrides: object) -> dict[str, object]:
    """Return required dependency mocks for the use cases. Pass overrides to customize."""
    base: dict[str, object] = {
        "filesystem": MagicMock(),
        "structure_provider": MagicMock(),
        "rule": ClosureEndIndentationRule(),
        "telemetry": MagicMock(),
        "config_loader": ConfigurationLoader({}),
    }
    base.update(overrides)
    return base
