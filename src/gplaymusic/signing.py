"""Signature derivation for the track-location endpoint."""

import base64
import hashlib
import hmac
import time
from collections.abc import Callable

from gplaymusic.exceptions import SigningError
from gplaymusic.models import Signature, Track


def _millis() -> int:
    return int(time.time() * 1000)


class RequestSigner:
    """Derives ``{salt, signature}`` pairs for catalog items.

    The salt is the current time in milliseconds. The signature is the
    URL-safe base64 HMAC-SHA1 of ``seed + salt`` with padding stripped.
    Instances hold no mutable state and may be shared across threads.
    """

    def __init__(self, key: bytes | str | None, *, clock: Callable[[], int] = _millis) -> None:
        self._key = key.encode("utf-8") if isinstance(key, str) else key
        self._clock = clock

    def sign(self, seed: str | None) -> Signature:
        """Sign ``seed`` (a store ID) salted with the current time.

        Raises:
            SigningError: If the seed is missing or blank, or no key is configured.
        """
        if not self._key:
            raise SigningError("No signing key configured")
        if seed is None or not isinstance(seed, str) or not seed.strip():
            raise SigningError(f"Invalid signing seed: {seed!r}")

        salt = str(self._clock())
        digest = hmac.new(self._key, (seed + salt).encode("utf-8"), hashlib.sha1).digest()
        signature = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
        return Signature(salt=salt, signature=signature)

    def sign_track(self, track: Track) -> Signature:
        """Sign a track using its store ID as seed."""
        return self.sign(track.store_id)
