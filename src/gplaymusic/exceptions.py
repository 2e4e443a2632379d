"""Client exceptions."""

from typing import Any


class GPlayMusicError(Exception):
    """Base exception for all client errors."""


class PreconditionError(GPlayMusicError):
    """A required builder input (the auth token) is missing."""


class TransportError(GPlayMusicError):
    """The request never produced a response (connection, TLS, timeout)."""


class RemoteError(GPlayMusicError):
    """The service answered with an error status."""

    def __init__(self, status_code: int, body: Any = None, detail: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.detail = detail
        super().__init__(f"Service error: HTTP {status_code}" + (f": {detail}" if detail else ""))


class InitializationError(GPlayMusicError):
    """Building a client failed. The cause is chained via ``__cause__``."""


class SigningError(GPlayMusicError):
    """A request signature could not be derived for a catalog item."""
