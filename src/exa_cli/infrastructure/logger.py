"""Infrastructure: stderr logger with secret redaction.

stdout is reserved for API responses so output can be piped into ``jq``;
every diagnostic line goes to stderr.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

from exa_cli.application.ports import Logger as LoggerPort
from exa_cli.infrastructure.config import redact_secrets

_LEVEL_STYLE = {
    "DEBUG": "dim",
    "INFO": "cyan",
    "WARN": "yellow",
    "ERROR": "red bold",
}


class ConsoleLogger(LoggerPort):
    """Levelled stderr logger. Debug lines only appear with ``verbose``."""

    def __init__(self, verbose: bool = False, console: Console | None = None) -> None:
        self._verbose = verbose
        self._console = console or Console(stderr=True, highlight=False)

    def _emit(self, level: str, msg: str, **kw: Any) -> None:
        line = escape(redact_secrets(msg))
        if kw:
            extras = " ".join(f"{k}={redact_secrets(str(v))}" for k, v in kw.items())
            line += f" [dim]({escape(extras)})[/dim]"
        style = _LEVEL_STYLE[level]
        self._console.print(f"[{style}]\\[{level}][/{style}] {line}")

    def info(self, msg: str, **kw: Any) -> None:
        self._emit("INFO", msg, **kw)

    def warn(self, msg: str, **kw: Any) -> None:
        self._emit("WARN", msg, **kw)

    def error(self, msg: str, **kw: Any) -> None:
        self._emit("ERROR", msg, **kw)

    def debug(self, msg: str, **kw: Any) -> None:
        if self._verbose:
            self._emit("DEBUG", msg, **kw)
