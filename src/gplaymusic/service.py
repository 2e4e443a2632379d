"""Low-level typed RPC surface over an intercepted ``httpx.Client``.

Every method issues exactly one request. Nothing is retried; the outcome
is handed back as an :class:`ApiResponse` so callers can inspect status
and headers as well as the parsed body.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

from gplaymusic.constants import (
    CONFIG_PATH,
    DEVICE_ID_HEADER,
    DEVICES_PATH,
    LOCATION_HEADER,
    PARAM_LOCALE,
    SEARCH_PATH,
    TRACK_LOCATION_PATH,
)
from gplaymusic.exceptions import TransportError
from gplaymusic.models import DeviceList, RemoteConfig, SearchResponse, SearchTypes, SongQuality

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class ApiResponse(Generic[T]):
    """Outcome of a single call: status, headers and the parsed body (if any)."""

    status_code: int
    headers: httpx.Headers
    body: T | None
    raw: httpx.Response

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def location(self) -> str | None:
        return self.headers.get(LOCATION_HEADER)


class ServiceClient:
    """Typed calls against the music service.

    The bound ``httpx.Client`` is expected to carry the interceptor chain
    and to have redirect following disabled.
    """

    def __init__(self, http_client: httpx.Client) -> None:
        self._client = http_client

    @property
    def http_client(self) -> httpx.Client:
        return self._client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ServiceClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        model: type[T] | None,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse[T]:
        try:
            response = self._client.request(method, path, params=params, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, path, exc, extra={"method": method, "path": path})
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        body: T | None = None
        if model is not None and response.is_success and response.content:
            body = model.model_validate(response.json())
        return ApiResponse(status_code=response.status_code, headers=response.headers, body=body, raw=response)

    def search(self, query: str, max_results: int, types: SearchTypes) -> ApiResponse[SearchResponse]:
        """GET sj/v2.5/query."""
        params = {"q": query, "max-results": max_results, "ct": types.to_param()}
        return self._request("GET", SEARCH_PATH, SearchResponse, params=params)

    def get_devices(self) -> ApiResponse[DeviceList]:
        """GET sj/v1.11/devicemanagementinfo."""
        return self._request("GET", DEVICES_PATH, DeviceList)

    def get_config(self, locale: str) -> ApiResponse[RemoteConfig]:
        """GET sj/v1.11/config."""
        return self._request("GET", CONFIG_PATH, RemoteConfig, params={PARAM_LOCALE: locale})

    def get_track_location(
        self,
        android_id: str,
        quality: SongQuality,
        salt: str,
        signature: str,
        store_id: str,
    ) -> ApiResponse[BaseModel]:
        """GET music/mplay. Answers with a redirect whose ``Location`` is the stream URL."""
        params = {
            "opt": SongQuality(quality).value,
            "slt": salt,
            "sig": signature,
            "mjck": store_id,
            "pt": "e",
        }
        return self._request(
            "GET",
            TRACK_LOCATION_PATH,
            None,
            params=params,
            headers={DEVICE_ID_HEADER: android_id},
        )
