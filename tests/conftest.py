"""Shared test fixtures and conftest for Exa CLI tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from exa_cli.application.ports import HttpResponse, HttpTransport, Logger
from exa_cli.application.use_cases.dispatch_request import DispatchRequest
from exa_cli.domain.value_objects import Credentials

TEST_API_KEY = "test-key-0123456789abcdef"
TEST_API_BASE = "https://stub.exa.test"


# ---------------------------------------------------------------------------
# Stub transport (records every call, replays canned responses)
# ---------------------------------------------------------------------------
class StubTransport(HttpTransport):
    """Replays queued responses in order; exceptions in the queue are raised."""

    def __init__(self, responses: list[Any] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def queue_json(self, data: Any, status_code: int = 200) -> None:
        self.responses.append(HttpResponse(status_code=status_code, text=json.dumps(data)))

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json_body: dict[str, Any] | None = None,
        timeout: float = 30.0,
    ) -> HttpResponse:
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "json_body": json_body,
            "timeout": timeout,
        })
        if not self.responses:
            return HttpResponse(status_code=200, text="{}")
        nxt = self.responses.pop(0)
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


class RecordingLogger(Logger):
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def info(self, msg: str, **kw: Any) -> None:
        self.records.append(("info", msg))

    def warn(self, msg: str, **kw: Any) -> None:
        self.records.append(("warn", msg))

    def error(self, msg: str, **kw: Any) -> None:
        self.records.append(("error", msg))

    def debug(self, msg: str, **kw: Any) -> None:
        self.records.append(("debug", msg))

    def messages(self, level: str) -> list[str]:
        return [m for lvl, m in self.records if lvl == level]


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def credentials():
    return Credentials(api_key=TEST_API_KEY, base_url=TEST_API_BASE)


@pytest.fixture
def dispatcher(transport, credentials, logger):
    return DispatchRequest(transport=transport, credentials=credentials, logger=logger, timeout=5.0)


@pytest.fixture
def body_file(tmp_path):
    """Write JSON text to a temp file and return its path."""

    def _write(text: str, name: str = "body.json") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
