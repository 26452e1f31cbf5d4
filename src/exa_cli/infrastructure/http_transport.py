"""Infrastructure: httpx-backed implementation of the HttpTransport port."""

from __future__ import annotations

from typing import Any

import httpx

from exa_cli.application.ports import HttpResponse, HttpTransport
from exa_cli.domain.errors import TransportError


class HttpxTransport(HttpTransport):
    """Synchronous transport over an ``httpx.Client``.

    Pass *client* to reuse a configured client (tests hand in one built on
    ``httpx.MockTransport``); otherwise a fresh client is used per call.
    """

    def __init__(self, client: httpx.Client | None = None) -> None:
        self._client = client

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json_body: dict[str, Any] | None = None,
        timeout: float = 30.0,
    ) -> HttpResponse:
        try:
            if self._client is not None:
                resp = self._client.request(method, url, headers=headers, json=json_body, timeout=timeout)
            else:
                with httpx.Client() as client:
                    resp = client.request(method, url, headers=headers, json=json_body, timeout=timeout)
        except httpx.TimeoutException as exc:
            raise TransportError(RuntimeError(f"timed out after {timeout:g}s ({type(exc).__name__})")) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(exc) from exc

        return HttpResponse(status_code=resp.status_code, text=resp.text)
