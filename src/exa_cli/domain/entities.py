"""Domain entities – responses and manifest entries."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ApiResponse:
    """A successful (2xx) API response, body kept exactly as received."""

    status_code: int
    text: str

    def json(self) -> Any:
        """Decode the body. Raises ``ValueError`` if it is not JSON."""
        return json.loads(self.text)

    def json_or_none(self) -> Any:
        try:
            return self.json()
        except ValueError:
            return None


@dataclass(frozen=True)
class McpTool:
    """One tool exposed by the hosted Exa MCP server."""

    name: str
    description: str
