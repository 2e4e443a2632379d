"""Client for the Google Play Music mobile API.

Build a client with :class:`GPlayMusicBuilder`::

    from gplaymusic import GPlayMusicBuilder

    api = GPlayMusicBuilder().set_auth_token(token).set_signing_key(key).build()
    tracks = api.search_tracks("daft punk", 10)
    url = api.get_track_url(tracks[0])
"""

import logging

from gplaymusic.bootstrap import ClientBootstrapper, GPlayMusicBuilder
from gplaymusic.client import GPlayMusic
from gplaymusic.constants import BootstrapState, InterceptorBehaviour
from gplaymusic.exceptions import (
    GPlayMusicError,
    InitializationError,
    PreconditionError,
    RemoteError,
    SigningError,
    TransportError,
)
from gplaymusic.models import (
    AuthToken,
    Config,
    Device,
    DeviceList,
    ResultType,
    SearchResponse,
    SearchTypes,
    SongQuality,
    SubscriptionTier,
    Track,
)
from gplaymusic.service import ApiResponse, ServiceClient
from gplaymusic.settings import GPlayMusicSettings
from gplaymusic.signing import RequestSigner

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ApiResponse",
    "AuthToken",
    "BootstrapState",
    "ClientBootstrapper",
    "Config",
    "Device",
    "DeviceList",
    "GPlayMusic",
    "GPlayMusicBuilder",
    "GPlayMusicError",
    "GPlayMusicSettings",
    "InitializationError",
    "InterceptorBehaviour",
    "PreconditionError",
    "RemoteError",
    "RequestSigner",
    "ResultType",
    "SearchResponse",
    "SearchTypes",
    "ServiceClient",
    "SigningError",
    "SongQuality",
    "SubscriptionTier",
    "Track",
    "TransportError",
]
