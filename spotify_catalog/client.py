from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx

from config import CONFIG_PATH, get_log_file, get_request_timeout, load_config, validate_config
from utils.logger import setup_logging

from .auth import SpotifyClientCredentials, StaticTokenProvider, TokenProvider
from .decoder import DecodedResult, decode_result
from .dispatcher import SPOTIFY_API_BASE_URL, RequestDispatcher
from .enums import AlbumType, ResourceKind
from .errors import SpotifyApiError, SpotifyConfigurationError, SpotifyTransportError
from .identifiers import get_id, get_ids, get_uris
from .models import (
    CUDResult,
    FullAlbum,
    FullAlbums,
    FullArtist,
    FullArtists,
    FullPlaylist,
    FullTrack,
    FullTracks,
    Page,
    PlaylistTrack,
    PublicUser,
    SimplifiedAlbum,
    SimplifiedPlaylist,
    SimplifiedTrack,
)

T = TypeVar("T")

DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0


@dataclass(frozen=True)
class ClientConfig:
    """Where to send requests and how to authenticate them.

    At least one of access_token / client_credentials_manager is required.
    A static access_token wins when both are set.
    """

    prefix: str = SPOTIFY_API_BASE_URL
    access_token: Optional[str] = None
    client_credentials_manager: Optional[SpotifyClientCredentials] = None
    timeout: Optional[float] = 30.0

    def __post_init__(self) -> None:
        if not self.access_token and self.client_credentials_manager is None:
            raise SpotifyConfigurationError("access_token and client_credentials_manager are both missing")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ClientConfig":
        config = config or {}
        manager = None
        if config.get("spotify_client_id") and config.get("spotify_client_secret"):
            manager = SpotifyClientCredentials.from_config(config)
        return cls(
            prefix=str(config.get("spotify_api_prefix") or SPOTIFY_API_BASE_URL),
            access_token=(str(config.get("spotify_access_token") or "").strip() or None),
            client_credentials_manager=manager,
            timeout=get_request_timeout(config),
        )

    def with_prefix(self, prefix: str) -> "ClientConfig":
        return replace(self, prefix=prefix)

    def with_access_token(self, access_token: str) -> "ClientConfig":
        return replace(self, access_token=access_token)

    def with_client_credentials_manager(self, manager: SpotifyClientCredentials) -> "ClientConfig":
        return replace(self, client_credentials_manager=manager)

    def token_provider(self) -> TokenProvider:
        if self.access_token:
            return StaticTokenProvider(self.access_token)
        return self.client_credentials_manager


class SpotifyClient:
    """Typed Spotify Web API client.

    Read methods return the decoded model, or None when the request failed or
    the response did not match the model (details go to the log). Methods that
    return the raw body raise SpotifyApiError / SpotifyTransportError instead.
    """

    def __init__(self, config: ClientConfig, *, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.dispatcher = RequestDispatcher(
            config.token_provider(),
            prefix=config.prefix,
            timeout=config.timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs: Any) -> "SpotifyClient":
        return cls(ClientConfig.from_config(config), **kwargs)

    @classmethod
    def from_config_file(cls, path: str = CONFIG_PATH, **kwargs: Any) -> "SpotifyClient":
        """Load config.json, set up logging from it and build a client."""

        config = load_config(path)
        is_valid, errors = validate_config(config)
        if not is_valid:
            raise SpotifyConfigurationError(f"Invalid config {path}: {'; '.join(errors)}")

        setup_logging(config.get("log_level", "INFO"), get_log_file(config))
        return cls.from_config(config, **kwargs)

    # -----------------
    # Generic fetch
    # -----------------

    def fetch(
        self,
        method: str,
        url: str,
        model: Type[T],
        *,
        params: Optional[Dict[str, Any]] = None,
        payload: Any = None,
    ) -> DecodedResult[T]:
        """Dispatch one request and decode the body into ``model``."""

        try:
            if method.upper() == "GET":
                body = self.dispatcher.get(url, params)
            else:
                body = self.dispatcher.call(method, url, payload)
        except (SpotifyApiError, SpotifyTransportError) as e:
            return DecodedResult.from_error(e)
        return decode_result(model, body)

    def _get(self, url: str, model: Type[T], params: Optional[Dict[str, Any]] = None) -> Optional[T]:
        return self.fetch("GET", url, model, params=params).value

    @staticmethod
    def _page_params(limit: Optional[int], offset: Optional[int]) -> Dict[str, Any]:
        return {
            "limit": DEFAULT_LIMIT if limit is None else int(limit),
            "offset": DEFAULT_OFFSET if offset is None else int(offset),
        }

    # -----------------
    # Tracks
    # -----------------

    def track(self, track_id: str) -> Optional[FullTrack]:
        """Return a single track given its ID, URI or URL."""

        trid = get_id(ResourceKind.TRACK, track_id)
        return self._get(f"tracks/{trid}", FullTrack)

    def tracks(self, track_ids: List[str], market: Optional[str] = None) -> Optional[FullTracks]:
        """Return several tracks given a list of IDs, URIs or URLs.

        market: optional ISO 3166-1 alpha-2 country code.
        """

        params = {"ids": ",".join(get_ids(ResourceKind.TRACK, track_ids)), "market": market}
        return self._get("tracks", FullTracks, params)

    # -----------------
    # Artists
    # -----------------

    def artist(self, artist_id: str) -> Optional[FullArtist]:
        trid = get_id(ResourceKind.ARTIST, artist_id)
        return self._get(f"artists/{trid}", FullArtist)

    def artists(self, artist_ids: List[str]) -> Optional[FullArtists]:
        params = {"ids": ",".join(get_ids(ResourceKind.ARTIST, artist_ids))}
        return self._get("artists", FullArtists, params)

    def artist_albums(
        self,
        artist_id: str,
        album_type: Optional[AlbumType] = None,
        country: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Optional[Page[SimplifiedAlbum]]:
        """Albums of an artist.

        album_type: 'album', 'single', 'appears_on' or 'compilation'.
        country: limit the response to one market.
        Only the filters that are given are sent.
        """

        # No limit/offset defaults here: the API applies its own when they are omitted.
        params: Dict[str, Any] = {
            "limit": limit,
            "album_type": AlbumType(album_type).value if album_type is not None else None,
            "offset": offset,
            "country": country,
        }
        trid = get_id(ResourceKind.ARTIST, artist_id)
        return self._get(f"artists/{trid}/albums", Page[SimplifiedAlbum], params)

    def artist_top_tracks(self, artist_id: str, country: Optional[str] = None) -> Optional[FullTracks]:
        """An artist's top tracks by country (defaults to US)."""

        trid = get_id(ResourceKind.ARTIST, artist_id)
        return self._get(f"artists/{trid}/top-tracks", FullTracks, {"country": country or "US"})

    def artist_related_artists(self, artist_id: str) -> Optional[FullArtists]:
        trid = get_id(ResourceKind.ARTIST, artist_id)
        return self._get(f"artists/{trid}/related-artists", FullArtists)

    # -----------------
    # Albums
    # -----------------

    def album(self, album_id: str) -> Optional[FullAlbum]:
        trid = get_id(ResourceKind.ALBUM, album_id)
        return self._get(f"albums/{trid}", FullAlbum)

    def albums(self, album_ids: List[str]) -> Optional[FullAlbums]:
        params = {"ids": ",".join(get_ids(ResourceKind.ALBUM, album_ids))}
        return self._get("albums", FullAlbums, params)

    def album_track(
        self,
        album_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Optional[Page[SimplifiedTrack]]:
        trid = get_id(ResourceKind.ALBUM, album_id)
        return self._get(f"albums/{trid}/tracks", Page[SimplifiedTrack], self._page_params(limit, offset))

    # -----------------
    # Users / playlists
    # -----------------

    def user(self, user_id: str) -> Optional[PublicUser]:
        return self._get(f"users/{user_id}", PublicUser)

    def current_user_playlists(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Optional[Page[SimplifiedPlaylist]]:
        return self._get("me/playlists", Page[SimplifiedPlaylist], self._page_params(limit, offset))

    def user_playlists(
        self,
        user_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Optional[Page[SimplifiedPlaylist]]:
        return self._get(f"users/{user_id}/playlists", Page[SimplifiedPlaylist], self._page_params(limit, offset))

    def user_playlist(
        self,
        user_id: str,
        playlist_id: Optional[str] = None,
        fields: Optional[str] = None,
    ) -> Optional[FullPlaylist]:
        """A user's playlist, or their starred playlist when playlist_id is None."""

        params = {"fields": fields}
        if playlist_id is None:
            return self._get(f"users/{user_id}/starred", FullPlaylist, params)

        plid = get_id(ResourceKind.PLAYLIST, playlist_id)
        return self._get(f"users/{user_id}/playlists/{plid}", FullPlaylist, params)

    def user_playlist_tracks(
        self,
        user_id: str,
        playlist_id: str,
        fields: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        market: Optional[str] = None,
    ) -> Optional[Page[PlaylistTrack]]:
        params = self._page_params(limit, offset)
        params.update({"market": market, "fields": fields})
        plid = get_id(ResourceKind.PLAYLIST, playlist_id)
        return self._get(f"users/{user_id}/playlists/{plid}/tracks", Page[PlaylistTrack], params)

    def create_user_playlist(
        self,
        user_id: str,
        name: str,
        public: Optional[bool] = None,
        description: Optional[str] = None,
    ) -> Optional[FullPlaylist]:
        payload = {
            "name": name,
            "public": True if public is None else bool(public),
            "description": description or "",
        }
        return self.fetch("POST", f"users/{user_id}/playlists", FullPlaylist, payload=payload).value

    def change_user_playlist_detail(
        self,
        user_id: str,
        playlist_id: str,
        name: Optional[str] = None,
        public: Optional[bool] = None,
        description: Optional[str] = None,
        collaborative: Optional[bool] = None,
    ) -> str:
        """Change name/visibility/description; returns the raw response body."""

        payload: Dict[str, Any] = {}
        if name is not None:
            payload["name"] = name
        if public is not None:
            payload["public"] = public
        if collaborative is not None:
            payload["collaborative"] = collaborative
        if description is not None:
            payload["description"] = description
        return self.dispatcher.put(f"users/{user_id}/playlists/{playlist_id}", payload)

    def unfollow_user_playlist(self, user_id: str, playlist_id: str) -> str:
        """Unfollow (delete) a playlist; returns the raw response body."""

        return self.dispatcher.delete(f"users/{user_id}/playlists/{playlist_id}/followers", {})

    def add_tracks_to_playlist(
        self,
        user_id: str,
        playlist_id: str,
        track_ids: List[str],
        position: Optional[int] = None,
    ) -> Optional[CUDResult]:
        """Add tracks (IDs, URIs or URLs) to a playlist, optionally at a position."""

        plid = get_id(ResourceKind.PLAYLIST, playlist_id)
        payload: Dict[str, Any] = {"uris": get_uris(ResourceKind.TRACK, track_ids)}
        if position is not None:
            payload["position"] = int(position)
        return self.fetch("POST", f"users/{user_id}/playlists/{plid}/tracks", CUDResult, payload=payload).value
