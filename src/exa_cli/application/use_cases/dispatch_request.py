"""Use-case: DispatchRequest – send one merged payload to its endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from exa_cli.application.payload import build_payload
from exa_cli.application.ports import HttpTransport, Logger
from exa_cli.domain.commands import ApiCommand
from exa_cli.domain.entities import ApiResponse
from exa_cli.domain.errors import RemoteError
from exa_cli.domain.value_objects import Credentials, Route

DEFAULT_TIMEOUT = 30.0

ROUTES: dict[str, Route] = {
    "search": Route("POST", "/search"),
    "contents": Route("POST", "/contents"),
    "find-similar": Route("POST", "/findSimilar"),
    "answer": Route("POST", "/answer"),
    "context": Route("POST", "/context"),
    "research-start": Route("POST", "/research/v0/tasks"),
    "research-check": Route("GET", "/research/v0/tasks/{task_id}"),
}


@dataclass
class DispatchResponse:
    route: Route
    payload: dict[str, Any] | None
    response: ApiResponse


class DispatchRequest:
    """Attach credentials, send, and map the status to a result or error."""

    def __init__(
        self,
        transport: HttpTransport,
        credentials: Credentials,
        logger: Logger,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = transport
        self._creds = credentials
        self._log = logger
        self._timeout = timeout

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._creds.api_key}",
            "x-api-key": self._creds.api_key,
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def send(self, route: Route, payload: dict[str, Any] | None = None) -> ApiResponse:
        """Issue *route* once. No retries."""
        url = self._creds.url_for(route.path)
        with_body = route.method != "GET"
        self._log.debug(f"{route.method} {url}", timeout=self._timeout)

        resp = self._transport.send(
            route.method,
            url,
            headers=self._headers(with_body),
            json_body=payload if with_body else None,
            timeout=self._timeout,
        )
        self._log.debug(f"{route.method} {url} -> {resp.status_code}")
        if not resp.ok:
            raise RemoteError(resp.status_code, resp.text)
        return ApiResponse(status_code=resp.status_code, text=resp.text)

    def execute(self, command: ApiCommand) -> DispatchResponse:
        """Build the payload for *command* and post it to its fixed route."""
        route = ROUTES[command.name]
        payload = build_payload(command, self._log)
        response = self.send(route, payload)
        return DispatchResponse(route=route, payload=payload, response=response)
