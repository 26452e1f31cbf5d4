"""Tests for DispatchRequest and the httpx transport."""

from __future__ import annotations

import json

import httpx
import pytest

from exa_cli.application.ports import HttpResponse
from exa_cli.application.use_cases.dispatch_request import ROUTES, DispatchRequest
from exa_cli.domain.commands import (
    AnswerCommand,
    BodyOverride,
    ContentsCommand,
    ContextCommand,
    FindSimilarCommand,
    SearchCommand,
)
from exa_cli.domain.errors import InvalidRawBody, MissingField, RemoteError, TransportError
from exa_cli.domain.value_objects import Credentials
from exa_cli.infrastructure.http_transport import HttpxTransport

from conftest import TEST_API_BASE, TEST_API_KEY


class TestRouting:
    @pytest.mark.parametrize(
        "command, path",
        [
            (SearchCommand(query="q"), "/search"),
            (ContentsCommand(urls=("https://a.com",)), "/contents"),
            (FindSimilarCommand(url="https://a.com"), "/findSimilar"),
            (AnswerCommand(query="q"), "/answer"),
            (ContextCommand(query="q"), "/context"),
        ],
    )
    def test_fixed_post_routes(self, dispatcher, transport, command, path):
        dispatcher.execute(command)
        call = transport.calls[0]
        assert call["method"] == "POST"
        assert call["url"] == TEST_API_BASE + path

    def test_research_routes(self):
        assert ROUTES["research-start"].method == "POST"
        assert ROUTES["research-check"].method == "GET"
        assert ROUTES["research-check"].format(task_id="abc").path == "/research/v0/tasks/abc"

    def test_headers_and_body(self, dispatcher, transport):
        dispatcher.execute(SearchCommand(query="q", body=BodyOverride(inline='{"numResults": 1}')))
        call = transport.calls[0]
        assert call["headers"]["Authorization"] == f"Bearer {TEST_API_KEY}"
        assert call["headers"]["x-api-key"] == TEST_API_KEY
        assert call["headers"]["Content-Type"] == "application/json"
        assert call["json_body"] == {"query": "q", "numResults": 1}
        assert call["timeout"] == 5.0

    def test_base_url_trailing_slash_stripped(self, transport, logger):
        creds = Credentials(api_key="k" * 12, base_url="https://proxy.local/exa/")
        DispatchRequest(transport, creds, logger).execute(SearchCommand(query="q"))
        assert transport.calls[0]["url"] == "https://proxy.local/exa/search"


class TestOutcomes:
    def test_success_body_is_passed_through_verbatim(self, dispatcher, transport):
        text = '{"results": [],  "requestId": "r1"}\n'
        transport.responses.append(HttpResponse(200, text))
        resp = dispatcher.execute(SearchCommand(query="q"))
        assert resp.response.text == text
        assert resp.payload == {"query": "q"}

    def test_non_2xx_is_remote_error_with_exact_body(self, dispatcher, transport):
        body = '{"error": "Invalid API key", "tag": "INVALID_API_KEY"}'
        transport.responses.append(HttpResponse(401, body))
        with pytest.raises(RemoteError) as ei:
            dispatcher.execute(SearchCommand(query="q"))
        assert ei.value.status_code == 401
        assert ei.value.body == body

    def test_non_json_error_body_kept(self, dispatcher, transport):
        transport.responses.append(HttpResponse(502, "<html>Bad Gateway</html>"))
        with pytest.raises(RemoteError) as ei:
            dispatcher.execute(SearchCommand(query="q"))
        assert ei.value.body == "<html>Bad Gateway</html>"

    def test_transport_error_propagates_without_retry(self, dispatcher, transport):
        transport.responses.append(TransportError(ConnectionResetError("reset")))
        with pytest.raises(TransportError):
            dispatcher.execute(SearchCommand(query="q"))
        assert len(transport.calls) == 1

    def test_malformed_body_makes_no_call(self, dispatcher, transport):
        with pytest.raises(InvalidRawBody):
            dispatcher.execute(SearchCommand(query="q", body=BodyOverride(inline="{oops")))
        assert transport.calls == []

    def test_missing_field_makes_no_call(self, dispatcher, transport):
        with pytest.raises(MissingField):
            dispatcher.execute(FindSimilarCommand())
        assert transport.calls == []


# ---------------------------------------------------------------------------
# httpx transport
# ---------------------------------------------------------------------------
def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpxTransport:
    def test_post_sends_json(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, text='{"ok": true}')

        resp = HttpxTransport(_client(handler)).send(
            "POST",
            "https://api.exa.ai/search",
            headers={"Authorization": "Bearer k"},
            json_body={"query": "q"},
        )
        assert resp.ok
        assert resp.text == '{"ok": true}'
        assert seen == {
            "method": "POST",
            "url": "https://api.exa.ai/search",
            "auth": "Bearer k",
            "body": {"query": "q"},
        }

    def test_get_has_no_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.content == b""
            return httpx.Response(200, text="{}")

        resp = HttpxTransport(_client(handler)).send("GET", "https://api.exa.ai/x", headers={})
        assert resp.status_code == 200

    def test_error_status_is_returned_not_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, text="slow down")

        resp = HttpxTransport(_client(handler)).send("GET", "https://api.exa.ai/x", headers={})
        assert not resp.ok
        assert (resp.status_code, resp.text) == (429, "slow down")

    def test_connect_error_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        with pytest.raises(TransportError) as ei:
            HttpxTransport(_client(handler)).send("GET", "https://api.exa.ai/x", headers={})
        assert isinstance(ei.value.cause, httpx.ConnectError)

    def test_timeout_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(TransportError, match="timed out"):
            HttpxTransport(_client(handler)).send("GET", "https://api.exa.ai/x", headers={}, timeout=2)

    @pytest.mark.parametrize(
        "exc_factory",
        [
            lambda request: httpx.DecodingError("bad gzip stream", request=request),
            lambda request: httpx.TooManyRedirects("redirect loop", request=request),
            lambda request: httpx.RemoteProtocolError("peer closed connection", request=request),
        ],
    )
    def test_other_request_errors_become_transport_error(self, exc_factory):
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        with pytest.raises(TransportError) as ei:
            HttpxTransport(_client(handler)).send("GET", "https://api.exa.ai/x", headers={})
        assert isinstance(ei.value.cause, httpx.RequestError)

    def test_invalid_url_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="{}")

        with pytest.raises(TransportError) as ei:
            HttpxTransport(_client(handler)).send("GET", "http://api.exa.ai:notaport/search", headers={})
        assert isinstance(ei.value.cause, httpx.InvalidURL)
