"""Pydantic models for service responses and client-side values.

The wire format uses camelCase keys; fields are snake_case with aliases.
Search result rows are decoded as a tagged union on their ``type`` field.
"""

import enum
from dataclasses import dataclass
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class AuthToken(BaseModel):
    """Opaque bearer credential obtained out of band."""

    model_config = ConfigDict(frozen=True)

    token: str

    def __repr__(self) -> str:
        return "AuthToken(token='***')"

    __str__ = __repr__

    @property
    def is_blank(self) -> bool:
        return not self.token.strip()


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SubscriptionTier(enum.StrEnum):
    """Account tier as sent in the ``tier`` query parameter."""

    ALL_ACCESS = "aa"
    FREE = "fr"


class SongQuality(enum.StrEnum):
    """Stream quality accepted by the track-location endpoint."""

    HIGH = "hi"
    MEDIUM = "med"
    LOW = "low"


class DeviceType(enum.StrEnum):
    ANDROID = "ANDROID"
    IOS = "IOS"
    DESKTOP_APP = "DESKTOP_APP"


class ResultType(enum.IntEnum):
    """Content types that can be requested from search."""

    TRACK = 1
    ARTIST = 2
    ALBUM = 3
    PLAYLIST = 4
    STATION = 6
    VIDEO = 8


@dataclass(frozen=True, slots=True)
class SearchTypes:
    """A set of :class:`ResultType` values, rendered as the ``ct`` parameter."""

    types: frozenset[ResultType]

    @classmethod
    def of(cls, *types: ResultType) -> "SearchTypes":
        if not types:
            raise ValueError("At least one result type is required")
        return cls(frozenset(types))

    @classmethod
    def all(cls) -> "SearchTypes":
        return cls(frozenset(ResultType))

    def to_param(self) -> str:
        return ",".join(str(t.value) for t in sorted(self.types))

    def __contains__(self, item: object) -> bool:
        return item in self.types


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class ConfigEntry(BaseModel):
    """Single key/value pair from the config endpoint."""

    key: str
    value: str | None = None


class _ConfigData(BaseModel):
    entries: list[ConfigEntry] = Field(default_factory=list)


class RemoteConfig(BaseModel):
    """Response from GET sj/v1.11/config."""

    kind: str | None = None
    data: _ConfigData = Field(default_factory=_ConfigData)

    @property
    def entries(self) -> list[ConfigEntry]:
        return self.data.entries

    def get(self, key: str) -> str | None:
        for entry in self.data.entries:
            if entry.key == key:
                return entry.value
        return None

    @property
    def subscription(self) -> SubscriptionTier:
        if (self.get("isNautilusUser") or "").lower() == "true":
            return SubscriptionTier.ALL_ACCESS
        return SubscriptionTier.FREE


class Config(BaseModel):
    """Session configuration of a ready client.

    Immutable and complete; built through :class:`ConfigBuilder`.
    """

    model_config = ConfigDict(frozen=True)

    locale: str = Field(min_length=1)
    android_id: str = Field(min_length=1)
    subscription: SubscriptionTier
    entries: tuple[ConfigEntry, ...] = ()

    def get(self, key: str) -> str | None:
        for entry in self.entries:
            if entry.key == key:
                return entry.value
        return None


class ConfigBuilder:
    """Accumulates the pieces of a :class:`Config` during bootstrap."""

    def __init__(self, remote: RemoteConfig) -> None:
        self._remote = remote
        self._locale: str | None = None
        self._android_id: str | None = None

    @property
    def subscription(self) -> SubscriptionTier:
        return self._remote.subscription

    @property
    def locale(self) -> str | None:
        return self._locale

    def with_locale(self, locale: str) -> "ConfigBuilder":
        self._locale = locale
        return self

    def with_android_id(self, android_id: str) -> "ConfigBuilder":
        self._android_id = android_id
        return self

    def build(self) -> Config:
        missing = [name for name, value in (("locale", self._locale), ("android_id", self._android_id)) if not value]
        if missing:
            raise ValueError(f"Config is missing required fields: {', '.join(missing)}")
        return Config(
            locale=self._locale,
            android_id=self._android_id,
            subscription=self._remote.subscription,
            entries=tuple(self._remote.entries),
        )


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------


class Device(BaseModel):
    """Device registered to the account."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    friendly_name: str | None = Field(default=None, alias="friendlyName")
    type: str | None = None
    last_accessed_time_ms: int | None = Field(default=None, alias="lastAccessedTimeMs")

    @property
    def is_android(self) -> bool:
        return self.type == DeviceType.ANDROID


class _DeviceData(BaseModel):
    items: list[Device] = Field(default_factory=list)


class DeviceList(BaseModel):
    """Response from GET sj/v1.11/devicemanagementinfo."""

    model_config = ConfigDict(frozen=True)

    kind: str | None = None
    data: _DeviceData = Field(default_factory=_DeviceData)

    @property
    def devices(self) -> list[Device]:
        return self.data.items

    def first_android(self) -> Device | None:
        return next((d for d in self.data.items if d.is_android), None)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class Track(BaseModel):
    """Catalog track. ``store_id`` is the seed used for URL signing."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    store_id: str | None = Field(default=None, alias="storeId")
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    album_artist: str | None = Field(default=None, alias="albumArtist")
    track_number: int | None = Field(default=None, alias="trackNumber")
    duration_millis: int | None = Field(default=None, alias="durationMillis")
    year: int | None = None
    genre: str | None = None


class Artist(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    artist_id: str | None = Field(default=None, alias="artistId")
    name: str | None = None


class Album(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    album_id: str | None = Field(default=None, alias="albumId")
    name: str | None = None
    album_artist: str | None = Field(default=None, alias="albumArtist")
    year: int | None = None


class Playlist(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    share_token: str | None = Field(default=None, alias="shareToken")
    owner_name: str | None = Field(default=None, alias="ownerName")


class Station(BaseModel):
    name: str | None = None
    description: str | None = None


class Video(BaseModel):
    id: str | None = None
    title: str | None = None


@dataclass(frozen=True, slots=True)
class Signature:
    """Time-salted signature for one track-location request."""

    salt: str
    signature: str


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class _ResultRow(BaseModel):
    """Common fields of a search result row."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    type: str | None = None
    score: float | None = None


class TrackResult(_ResultRow):
    track: Track


class ArtistResult(_ResultRow):
    artist: Artist


class AlbumResult(_ResultRow):
    album: Album


class PlaylistResult(_ResultRow):
    playlist: Playlist


class StationResult(_ResultRow):
    station: Station


class VideoResult(_ResultRow):
    youtube_video: Video


class UnknownResult(_ResultRow):
    """Search row with an unrecognised ``type``; the payload is kept as extras."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


_RESULT_TAGS = {str(t.value) for t in ResultType}


def _result_tag(value: Any) -> str:
    raw = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    raw = str(raw) if raw is not None else None
    return raw if raw in _RESULT_TAGS else "unknown"


SearchResult = Annotated[
    Union[
        Annotated[TrackResult, Tag(str(ResultType.TRACK.value))],
        Annotated[ArtistResult, Tag(str(ResultType.ARTIST.value))],
        Annotated[AlbumResult, Tag(str(ResultType.ALBUM.value))],
        Annotated[PlaylistResult, Tag(str(ResultType.PLAYLIST.value))],
        Annotated[StationResult, Tag(str(ResultType.STATION.value))],
        Annotated[VideoResult, Tag(str(ResultType.VIDEO.value))],
        Annotated[UnknownResult, Tag("unknown")],
    ],
    Discriminator(_result_tag),
]


class SearchResponse(BaseModel):
    """Response from GET sj/v2.5/query."""

    kind: str | None = None
    entries: list[SearchResult] = Field(default_factory=list)

    def _of(self, cls: type[BaseModel], attr: str) -> list[Any]:
        return [getattr(e, attr) for e in self.entries if isinstance(e, cls)]

    @property
    def tracks(self) -> list[Track]:
        return self._of(TrackResult, "track")

    @property
    def artists(self) -> list[Artist]:
        return self._of(ArtistResult, "artist")

    @property
    def albums(self) -> list[Album]:
        return self._of(AlbumResult, "album")

    @property
    def playlists(self) -> list[Playlist]:
        return self._of(PlaylistResult, "playlist")

    @property
    def stations(self) -> list[Station]:
        return self._of(StationResult, "station")

    @property
    def videos(self) -> list[Video]:
        return self._of(VideoResult, "youtube_video")

    @property
    def unknown(self) -> list[UnknownResult]:
        return [e for e in self.entries if isinstance(e, UnknownResult)]

