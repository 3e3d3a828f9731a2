"""Exception hierarchy for the Spotify catalog client."""

from typing import Optional


class SpotifyError(Exception):
    """Base exception for all client errors."""


class SpotifyConfigurationError(SpotifyError):
    """Raised when a client is built without any way to authenticate."""


class SpotifyAuthError(SpotifyError):
    """Raised when an access token cannot be obtained."""


class SpotifyTransportError(SpotifyError):
    """Raised when a request never produced an HTTP response (connect, timeout, read)."""


class SpotifyApiError(SpotifyError):
    """Raised when the Web API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None):
        self.status_code = int(status_code)
        self.body = body or ""
        super().__init__(message or f"send request failed, http code: {self.status_code}, error message: {self.body}")
