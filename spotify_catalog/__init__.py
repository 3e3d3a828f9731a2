"""Typed client for the Spotify Web API catalog endpoints.

Request flow: identifiers are normalized (identifiers.py), sent through
RequestDispatcher (dispatcher.py) with a bearer token from a TokenProvider
(auth.py), and decoded into pydantic models (decoder.py, models.py).
"""

from .auth import SpotifyClientCredentials, StaticTokenProvider, TokenProvider
from .client import ClientConfig, SpotifyClient
from .decoder import DecodedResult, FailureKind, decode, decode_result
from .dispatcher import RequestDispatcher
from .enums import AlbumType, ResourceKind
from .errors import (
    SpotifyApiError,
    SpotifyAuthError,
    SpotifyConfigurationError,
    SpotifyError,
    SpotifyTransportError,
)
from .identifiers import get_id, get_uri
from .token_manager import TokenInfo, TokenManager

__all__ = [
    "AlbumType",
    "ClientConfig",
    "DecodedResult",
    "FailureKind",
    "RequestDispatcher",
    "ResourceKind",
    "SpotifyApiError",
    "SpotifyAuthError",
    "SpotifyClient",
    "SpotifyClientCredentials",
    "SpotifyConfigurationError",
    "SpotifyError",
    "SpotifyTransportError",
    "StaticTokenProvider",
    "TokenInfo",
    "TokenManager",
    "TokenProvider",
    "decode",
    "decode_result",
    "get_id",
    "get_uri",
]
