"""Request/response interceptors applied to every call a client makes.

The chain is an ``httpx`` transport wrapping the real one. Outbound
requests pass each interceptor's ``on_request`` in order; responses pass
``on_response`` in reverse order.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

import httpx

from gplaymusic.constants import AUTH_SCHEME, CONTENT_TYPE, InterceptorBehaviour
from gplaymusic.exceptions import RemoteError
from gplaymusic.models import AuthToken

logger = logging.getLogger(__name__)


def _replace(
    request: httpx.Request,
    *,
    url: httpx.URL | None = None,
    headers: httpx.Headers | None = None,
) -> httpx.Request:
    """Return a copy of ``request`` with a new URL and/or headers."""
    return httpx.Request(
        request.method,
        url if url is not None else request.url,
        headers=headers if headers is not None else request.headers,
        stream=request.stream,
        extensions=request.extensions,
    )


def remote_error_from_response(response: httpx.Response) -> RemoteError:
    """Build a :class:`RemoteError` from an error response, parsing its body when possible."""
    response.read()
    body: Any = None
    detail = ""
    try:
        body = response.json()
    except ValueError:
        body = response.text or None
        detail = response.text[:200]
    else:
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            detail = str(body["error"].get("message", ""))
        elif isinstance(body, dict) and "message" in body:
            detail = str(body["message"])
    return RemoteError(status_code=response.status_code, body=body, detail=detail)


class Interceptor:
    """Base interceptor: passes requests and responses through unchanged."""

    def on_request(self, request: httpx.Request) -> httpx.Request:
        return request

    def on_response(self, request: httpx.Request, response: httpx.Response) -> httpx.Response:
        return response


class HeaderInterceptor(Interceptor):
    """Adds the authorization and content-type headers."""

    def __init__(self, token: AuthToken) -> None:
        self._authorization = f"{AUTH_SCHEME} auth={token.token}"

    def on_request(self, request: httpx.Request) -> httpx.Request:
        headers = request.headers.copy()
        headers["Authorization"] = self._authorization
        headers["Content-Type"] = CONTENT_TYPE
        return _replace(request, headers=headers)


class ErrorInterceptor(Interceptor):
    """Normalizes error responses (status >= 400).

    ``THROW_EXCEPTION`` raises :class:`RemoteError`; ``LOG`` logs the failure
    and hands the response back untouched. Redirects are not errors.
    """

    def __init__(self, behaviour: InterceptorBehaviour = InterceptorBehaviour.THROW_EXCEPTION) -> None:
        self._behaviour = InterceptorBehaviour(behaviour)

    @property
    def behaviour(self) -> InterceptorBehaviour:
        return self._behaviour

    def on_response(self, request: httpx.Request, response: httpx.Response) -> httpx.Response:
        if response.status_code < 400:
            return response

        error = remote_error_from_response(response)
        if self._behaviour is InterceptorBehaviour.THROW_EXCEPTION:
            raise error
        logger.warning(
            "%s %s returned HTTP %d: %s",
            request.method,
            request.url.path,
            response.status_code,
            error.detail or "no detail",
            extra={"method": request.method, "path": request.url.path, "status_code": response.status_code},
        )
        return response


class ParameterInterceptor(Interceptor):
    """Appends the session's dynamic query parameters to every request.

    Empty until :meth:`seed` is called once during bootstrap; the seeded
    parameters are an immutable snapshot from then on.
    """

    def __init__(self) -> None:
        self._params: Mapping[str, str] = MappingProxyType({})
        self._seeded = False

    @property
    def parameters(self) -> Mapping[str, str]:
        return self._params

    @property
    def seeded(self) -> bool:
        return self._seeded

    def seed(self, params: Mapping[str, str]) -> None:
        if self._seeded:
            raise RuntimeError("Dynamic parameters have already been seeded")
        self._params = MappingProxyType(dict(params))
        self._seeded = True

    def on_request(self, request: httpx.Request) -> httpx.Request:
        if not self._params:
            return request
        return _replace(request, url=request.url.copy_merge_params(dict(self._params)))


class InterceptorChain(httpx.BaseTransport):
    """Transport applying ``interceptors`` around ``transport``."""

    def __init__(self, transport: httpx.BaseTransport, interceptors: Sequence[Interceptor]) -> None:
        self._transport = transport
        self._interceptors = tuple(interceptors)

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self._interceptors

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        for interceptor in self._interceptors:
            request = interceptor.on_request(request)

        response = self._transport.handle_request(request)
        logger.debug(
            "%s %s -> %d",
            request.method,
            request.url.path,
            response.status_code,
            extra={"method": request.method, "path": request.url.path, "status_code": response.status_code},
        )

        for interceptor in reversed(self._interceptors):
            response = interceptor.on_response(request, response)
        return response

    def close(self) -> None:
        self._transport.close()
