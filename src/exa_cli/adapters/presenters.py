"""Presenters – format use-case responses for terminal or JSON output.

API bodies are passed through: without ``--pretty`` the text is printed
exactly as the server sent it.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.table import Table

from exa_cli.domain.entities import ApiResponse, McpTool
from exa_cli.domain.errors import RemoteError
from exa_cli.infrastructure.config import redact_secrets

console = Console()


# ---------------------------------------------------------------------------
# API responses
# ---------------------------------------------------------------------------
def present_response(resp: ApiResponse, *, pretty: bool = False) -> None:
    if pretty:
        data = resp.json_or_none()
        if data is not None:
            console.print_json(data=data, indent=2)
            return
    print(resp.text)


# ---------------------------------------------------------------------------
# MCP
# ---------------------------------------------------------------------------
def present_tools(tools: tuple[McpTool, ...], *, pretty: bool = False) -> None:
    if not pretty:
        for tool in tools:
            print(tool.name)
        return

    table = Table(title="Exa MCP tools", show_lines=True)
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for tool in tools:
        table.add_row(tool.name, tool.description)
    console.print(table)


def present_url(url: str) -> None:
    print(url)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
def present_error(exc: BaseException) -> None:
    """Message on stderr; remote error bodies follow verbatim."""
    print(f"ERROR: {redact_secrets(str(exc))}", file=sys.stderr)
    if isinstance(exc, RemoteError) and exc.body:
        print(exc.body, file=sys.stderr)
