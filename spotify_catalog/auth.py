import json
import threading
from typing import Any, Dict, Optional, Protocol

import httpx

from config import get_request_timeout
from utils.logger import log_info

from .errors import SpotifyAuthError
from .token_manager import TokenInfo, TokenManager


SPOTIFY_ACCOUNTS_BASE_URL = "https://accounts.spotify.com"


class TokenProvider(Protocol):
    """Anything that can hand out a current bearer token."""

    def get_access_token(self) -> str:
        ...


class StaticTokenProvider:
    """Always returns the token it was built with."""

    def __init__(self, access_token: str):
        self.access_token = access_token

    def get_access_token(self) -> str:
        return self.access_token


class SpotifyClientCredentials:
    """OAuth client-credentials flow (app-only token, no user context).

    Tokens are kept in memory and, when cache_tokens is enabled, on disk via
    TokenManager. Concurrent callers share one token; only one of them
    performs a refresh when it expires.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        token_manager: Optional[TokenManager] = None,
        cache_tokens: bool = False,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        client_id = str(client_id or "").strip()
        client_secret = str(client_secret or "").strip()
        if not client_id or not client_secret:
            raise SpotifyAuthError("Client credentials flow needs both a client id and a client secret.")

        self.client_id = client_id
        self.client_secret = client_secret
        self.token_manager = token_manager or TokenManager()
        self.cache_tokens = bool(cache_tokens)
        self.timeout = timeout
        self.transport = transport
        self._token: Optional[TokenInfo] = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs: Any) -> "SpotifyClientCredentials":
        config = config or {}
        token_manager = None
        if config.get("spotify_token_cache_path"):
            token_manager = TokenManager(cache_path=str(config["spotify_token_cache_path"]))
        return cls(
            config.get("spotify_client_id", ""),
            config.get("spotify_client_secret", ""),
            token_manager=token_manager,
            cache_tokens=bool(config.get("spotify_cache_tokens", False)),
            timeout=get_request_timeout(config),
            **kwargs,
        )

    def get_access_token(self) -> str:
        token = self._token
        if token is not None and not token.is_expired():
            return token.access_token

        with self._lock:
            # Another thread may have refreshed while we waited.
            if self._token is None and self.cache_tokens:
                self._token = self.token_manager.load()

            if self._token is None or self._token.is_expired():
                self._token = self.request_access_token()
                if self.cache_tokens:
                    self.token_manager.save(self._token)

            return self._token.access_token

    def request_access_token(self) -> TokenInfo:
        """Exchange the app credentials for a fresh token."""

        log_info("Requesting Spotify client-credentials token")
        payload = self._post_form(
            f"{SPOTIFY_ACCOUNTS_BASE_URL}/api/token",
            {"grant_type": "client_credentials"},
        )

        token = TokenInfo.from_token_response(payload)
        if not token.access_token:
            raise SpotifyAuthError(f"Spotify token request returned no access_token: {payload}")
        return token

    def _post_form(self, url: str, form: Dict[str, Any]) -> Dict[str, Any]:
        data = {k: str(v) for k, v in (form or {}).items() if v is not None}

        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=False, transport=self.transport) as client:
                resp = client.post(
                    url,
                    data=data,
                    auth=(self.client_id, self.client_secret),
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
        except httpx.HTTPError as e:
            raise SpotifyAuthError(f"Spotify token request failed: {e}") from e

        if resp.status_code >= 400:
            raise SpotifyAuthError(f"Spotify token request failed (HTTP {resp.status_code}): {resp.text}")

        try:
            payload = resp.json()
        except json.JSONDecodeError as e:
            raise SpotifyAuthError(f"Spotify token response was not JSON: {resp.text}") from e

        if not isinstance(payload, dict):
            raise SpotifyAuthError(f"Spotify token response was not an object: {payload}")

        return payload
