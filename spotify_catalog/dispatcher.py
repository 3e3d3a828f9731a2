import json
import urllib.parse
from typing import Any, Dict, Mapping, Optional

import httpx

from utils.logger import log_debug, log_error

from .auth import TokenProvider
from .errors import SpotifyApiError, SpotifyTransportError


SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1/"

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")


def encode_params(params: Optional[Mapping[str, Any]]) -> str:
    """Build ``k=v&k=v`` from a mapping, skipping None values.

    Commas and colons stay literal so id lists and URIs read the same as
    plain concatenation; anything else unsafe is percent-encoded.
    """

    pairs = [(str(k), str(v)) for k, v in (params or {}).items() if v is not None]
    return urllib.parse.urlencode(pairs, safe=",:")


class RequestDispatcher:
    """Performs one authenticated JSON round trip against the Web API.

    The token is requested from the provider on every call; nothing is
    cached here. Failures are not retried.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        prefix: str = SPOTIFY_API_BASE_URL,
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.token_provider = token_provider
        self.prefix = prefix
        self.timeout = timeout
        self.transport = transport

    def build_url(self, url: str) -> str:
        if url.startswith("http"):
            return url
        return f"{self.prefix.rstrip('/')}/{url.lstrip('/')}"

    def auth_headers(self) -> Dict[str, str]:
        token = self.token_provider.get_access_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def call(self, method: str, url: str, payload: Any = None) -> str:
        """Send the request and return the raw response body on 2xx.

        Raises SpotifyApiError (status + body) for any other status and
        SpotifyTransportError when no response was received.
        """

        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self.build_url(url)
        log_debug(f"{method} {url}")

        body = json.dumps({} if payload is None else payload)
        headers = self.auth_headers()

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.request(method, url, content=body, headers=headers)
                text = resp.text
        except httpx.HTTPError as e:
            log_error(f"send request failed: {method} {url}: {e}")
            raise SpotifyTransportError(f"send request failed: {method} {url}: {e}") from e

        if resp.is_success:
            return text

        log_error(f"response: HTTP {resp.status_code} for {method} {url}")
        log_error(f"content: {text!r}")
        raise SpotifyApiError(resp.status_code, text)

    def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> str:
        query = encode_params(params)
        if query:
            url = f"{url}{'&' if '?' in url else '?'}{query}"
        return self.call("GET", url, {})

    def post(self, url: str, payload: Any = None) -> str:
        return self.call("POST", url, payload)

    def put(self, url: str, payload: Any = None) -> str:
        return self.call("PUT", url, payload)

    def delete(self, url: str, payload: Any = None) -> str:
        return self.call("DELETE", url, payload)
