"""Tests for the interceptor chain."""

import httpx
import pytest

from gplaymusic.constants import InterceptorBehaviour
from gplaymusic.exceptions import RemoteError
from gplaymusic.interceptors import (
    ErrorInterceptor,
    HeaderInterceptor,
    Interceptor,
    InterceptorChain,
    ParameterInterceptor,
    remote_error_from_response,
)
from gplaymusic.models import AuthToken


def _client(chain: InterceptorChain) -> httpx.Client:
    return httpx.Client(base_url="https://mclients.googleapis.com/", transport=chain, follow_redirects=False)


def _recording_transport(response: httpx.Response) -> tuple[httpx.MockTransport, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    return httpx.MockTransport(handler), seen


def test_header_interceptor_sets_auth_and_content_type() -> None:
    transport, seen = _recording_transport(httpx.Response(200))
    chain = InterceptorChain(transport, [HeaderInterceptor(AuthToken(token="abc"))])

    _client(chain).get("sj/v1.11/config")

    assert seen[0].headers["Authorization"] == "GoogleLogin auth=abc"
    assert seen[0].headers["Content-Type"] == "application/json"


def test_parameter_interceptor_empty_until_seeded() -> None:
    transport, seen = _recording_transport(httpx.Response(200))
    parameters = ParameterInterceptor()
    client = _client(InterceptorChain(transport, [parameters]))

    client.get("sj/v1.11/config", params={"hl": "en_US"})
    parameters.seed({"dv": "0", "hl": "de_DE", "tier": "fr"})
    client.get("sj/v2.5/query", params={"q": "x"})

    assert dict(seen[0].url.params) == {"hl": "en_US"}
    assert dict(seen[1].url.params) == {"q": "x", "dv": "0", "hl": "de_DE", "tier": "fr"}


def test_parameter_interceptor_seeds_once() -> None:
    parameters = ParameterInterceptor()
    parameters.seed({"dv": "0"})

    with pytest.raises(RuntimeError):
        parameters.seed({"tier": "aa"})
    assert dict(parameters.parameters) == {"dv": "0"}


def test_parameter_snapshot_is_read_only() -> None:
    parameters = ParameterInterceptor()
    source = {"dv": "0"}
    parameters.seed(source)
    source["tier"] = "aa"

    assert "tier" not in parameters.parameters
    with pytest.raises(TypeError):
        parameters.parameters["tier"] = "aa"  # type: ignore[index]


def test_error_interceptor_raises_remote_error() -> None:
    transport, _ = _recording_transport(
        httpx.Response(404, json={"error": {"code": 404, "message": "Track not found"}})
    )
    client = _client(InterceptorChain(transport, [ErrorInterceptor()]))

    with pytest.raises(RemoteError) as exc_info:
        client.get("music/mplay")

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Track not found"
    assert exc_info.value.body == {"error": {"code": 404, "message": "Track not found"}}


def test_error_interceptor_log_mode_passes_response(caplog: pytest.LogCaptureFixture) -> None:
    transport, _ = _recording_transport(httpx.Response(500, text="oops"))
    client = _client(InterceptorChain(transport, [ErrorInterceptor(InterceptorBehaviour.LOG)]))

    with caplog.at_level("WARNING", logger="gplaymusic.interceptors"):
        response = client.get("sj/v2.5/query")

    assert response.status_code == 500
    assert response.text == "oops"
    assert "HTTP 500" in caplog.text


def test_error_interceptor_ignores_redirects() -> None:
    transport, _ = _recording_transport(httpx.Response(302, headers={"Location": "https://stream.test/x"}))
    client = _client(InterceptorChain(transport, [ErrorInterceptor()]))

    response = client.get("music/mplay")

    assert response.status_code == 302
    assert response.headers["Location"] == "https://stream.test/x"


def test_chain_order() -> None:
    """Requests pass interceptors in order, responses in reverse order."""
    events: list[str] = []

    class _Recorder(Interceptor):
        def __init__(self, name: str) -> None:
            self.name = name

        def on_request(self, request: httpx.Request) -> httpx.Request:
            events.append(f"req:{self.name}")
            return request

        def on_response(self, request: httpx.Request, response: httpx.Response) -> httpx.Response:
            events.append(f"resp:{self.name}")
            return response

    transport, _ = _recording_transport(httpx.Response(200))
    _client(InterceptorChain(transport, [_Recorder("a"), _Recorder("b"), _Recorder("c")])).get("x")

    assert events == ["req:a", "req:b", "req:c", "resp:c", "resp:b", "resp:a"]


def test_remote_error_from_plain_text() -> None:
    error = remote_error_from_response(httpx.Response(502, text="Bad Gateway"))

    assert error.status_code == 502
    assert error.body == "Bad Gateway"
    assert error.detail == "Bad Gateway"
    assert "502" in str(error)
