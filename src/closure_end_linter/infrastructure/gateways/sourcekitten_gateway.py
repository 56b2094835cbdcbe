"""SourceKitten Gateway - structure trees from `sourcekitten structure`."""

import json
import subprocess
from typing import Any, Mapping, Optional

from closure_end_linter.domain.constants import DEFAULT_SOURCEKITTEN_PATH, DEFAULT_SOURCEKITTEN_TIMEOUT
from closure_end_linter.domain.entities import Node
from closure_end_linter.domain.errors import StructureUnavailableError
from closure_end_linter.domain.protocols import StructureProviderProtocol


class SourceKittenGateway(StructureProviderProtocol):
    """Runs SourceKitten as a subprocess and maps SourceKit's JSON onto Nodes."""

    def __init__(
        self,
        executable: str = DEFAULT_SOURCEKITTEN_PATH,
        timeout: int = DEFAULT_SOURCEKITTEN_TIMEOUT,
    ) -> None:
        self.executable = executable
        self.timeout = timeout

    def structure(self, contents: str) -> Node:
        """Return the root node for Swift source text."""
        try:
            result = subprocess.run(
                [self.executable, "structure", "--text", contents],
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise StructureUnavailableError(
                f"SourceKitten executable not found: {self.executable}") from None
        except subprocess.TimeoutExpired:
            raise StructureUnavailableError(
                f"SourceKitten timed out after {self.timeout}s") from None

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise StructureUnavailableError(f"SourceKitten failed: {detail}")

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise StructureUnavailableError(f"SourceKitten output is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise StructureUnavailableError("SourceKitten output is not a structure dictionary")
        return self.parse_structure(data)

    @classmethod
    def parse_structure(cls, data: Mapping[str, Any]) -> Node:
        """Map one SourceKit dictionary (and its key.substructure) onto a Node."""
        children = data.get("key.substructure", [])
        if not isinstance(children, list):
            children = []
        return Node(
            kind=cls._str(data.get("key.kind")),
            offset=cls._int(data.get("key.offset")),
            length=cls._int(data.get("key.length")),
            name_offset=cls._int(data.get("key.nameoffset")),
            name_length=cls._int(data.get("key.namelength")),
            body_offset=cls._int(data.get("key.bodyoffset")),
            body_length=cls._int(data.get("key.bodylength")),
            substructure=tuple(
                cls.parse_structure(child) for child in children if isinstance(child, dict)
            ),
        )

    @staticmethod
    def _int(value: object) -> Optional[int]:
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    @staticmethod
    def _str(value: object) -> Optional[str]:
        return value if isinstance(value, str) else None
