"""Public client façade.

Instances are produced by :class:`gplaymusic.bootstrap.GPlayMusicBuilder`
and always carry a complete :class:`Config`.
"""

import logging

from gplaymusic.constants import DEFAULT_MAX_RESULTS
from gplaymusic.models import (
    Config,
    DeviceList,
    ResultType,
    SearchResponse,
    SearchTypes,
    SongQuality,
    Track,
)
from gplaymusic.service import ServiceClient
from gplaymusic.signing import RequestSigner

logger = logging.getLogger(__name__)


class GPlayMusic:
    """Main API: search, registered devices and stream URLs.

    When the client was built with ``InterceptorBehaviour.LOG``, error
    responses do not raise; the methods below return ``None`` instead and
    the raw outcome remains reachable through :attr:`service`.
    """

    def __init__(self, service: ServiceClient, config: Config, signer: RequestSigner) -> None:
        self._service = service
        self._config = config
        self._signer = signer

    @property
    def config(self) -> Config:
        return self._config

    @property
    def service(self) -> ServiceClient:
        """Low-level service used by this client. Check status codes yourself when calling it."""
        return self._service

    def close(self) -> None:
        self._service.close()

    def __enter__(self) -> "GPlayMusic":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def search(
        self,
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        types: SearchTypes | None = None,
    ) -> SearchResponse | None:
        """Query the catalog.

        Args:
            query: Free-text query.
            max_results: Result cap. Higher values make the call slower.
            types: Content types to query for. Defaults to every type.

        Raises:
            TransportError: On connection failures.
            RemoteError: On error responses, unless built with LOG behaviour.
        """
        response = self._service.search(query, max_results, types or SearchTypes.all())
        return response.body

    def search_tracks(self, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> list[Track]:
        """Search restricted to tracks."""
        result = self.search(query, max_results, SearchTypes.of(ResultType.TRACK))
        if result is None:
            return []
        return result.tracks[:max_results]

    def get_registered_devices(self) -> DeviceList | None:
        """Devices registered to the account."""
        return self._service.get_devices().body

    def get_track_url(self, track: Track, quality: SongQuality = SongQuality.HIGH) -> str | None:
        """Return a stream URL for ``track`` in ``quality``.

        The URL is only valid for about a minute and may be used once; do
        not cache it. Returns ``None`` if the service did not answer with a
        ``Location`` header.

        Requires a signing key (see :meth:`GPlayMusicBuilder.set_signing_key`).

        Raises:
            SigningError: If no signing key was configured or the track
                carries no usable store ID. No request is sent in that case.
        """
        signature = self._signer.sign_track(track)
        response = self._service.get_track_location(
            self._config.android_id,
            quality,
            signature.salt,
            signature.signature,
            track.store_id or "",
        )
        location = response.location
        if location is None:
            logger.warning(
                "Track location for %s returned HTTP %d without a Location header",
                track.store_id,
                response.status_code,
            )
        return location
