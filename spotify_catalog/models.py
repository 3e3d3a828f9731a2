"""Response schemas for the Web API objects this client returns.

Unknown keys are ignored so additions on the API side do not break decoding;
required keys missing from a response make decoding fail.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Image(BaseModel):
    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class Followers(BaseModel):
    href: Optional[str] = None
    total: int


class Page(BaseModel, Generic[T]):
    """Offset-based paging object; follow ``next`` yourself to get more."""

    href: str
    items: List[T]
    limit: int
    next: Optional[str] = None
    offset: int
    previous: Optional[str] = None
    total: int


# -----------------
# Artists
# -----------------

class SimplifiedArtist(BaseModel):
    external_urls: Dict[str, str] = Field(default_factory=dict)
    href: Optional[str] = None
    id: Optional[str] = None
    name: str
    type: str = "artist"
    uri: Optional[str] = None


class FullArtist(BaseModel):
    external_urls: Dict[str, str] = Field(default_factory=dict)
    followers: Followers
    genres: List[str] = Field(default_factory=list)
    href: str
    id: str
    images: List[Image] = Field(default_factory=list)
    name: str
    popularity: int
    type: str
    uri: str


class FullArtists(BaseModel):
    artists: List[Optional[FullArtist]]


# -----------------
# Albums / tracks
# -----------------

class SimplifiedAlbum(BaseModel):
    album_group: Optional[str] = None
    album_type: Optional[str] = None
    artists: List[SimplifiedArtist] = Field(default_factory=list)
    available_markets: List[str] = Field(default_factory=list)
    external_urls: Dict[str, str] = Field(default_factory=dict)
    href: Optional[str] = None
    id: Optional[str] = None
    images: List[Image] = Field(default_factory=list)
    name: str
    release_date: Optional[str] = None
    release_date_precision: Optional[str] = None
    type: str = "album"
    uri: Optional[str] = None


class SimplifiedTrack(BaseModel):
    artists: List[SimplifiedArtist]
    available_markets: List[str] = Field(default_factory=list)
    disc_number: int
    duration_ms: int
    explicit: bool
    external_urls: Dict[str, str] = Field(default_factory=dict)
    href: Optional[str] = None
    id: Optional[str] = None
    is_local: bool = False
    name: str
    preview_url: Optional[str] = None
    track_number: int
    type: str = "track"
    uri: str


class FullTrack(SimplifiedTrack):
    album: SimplifiedAlbum
    external_ids: Dict[str, str] = Field(default_factory=dict)
    popularity: int


class FullTracks(BaseModel):
    tracks: List[Optional[FullTrack]]


class Copyright(BaseModel):
    text: str
    type: str


class FullAlbum(BaseModel):
    album_type: str
    artists: List[SimplifiedArtist]
    available_markets: List[str] = Field(default_factory=list)
    copyrights: List[Copyright] = Field(default_factory=list)
    external_ids: Dict[str, str] = Field(default_factory=dict)
    external_urls: Dict[str, str] = Field(default_factory=dict)
    genres: List[str] = Field(default_factory=list)
    href: str
    id: str
    images: List[Image] = Field(default_factory=list)
    label: Optional[str] = None
    name: str
    popularity: Optional[int] = None
    release_date: str
    release_date_precision: str
    tracks: Page[SimplifiedTrack]
    type: str
    uri: str


class FullAlbums(BaseModel):
    albums: List[Optional[FullAlbum]]


# -----------------
# Users / playlists
# -----------------

class PublicUser(BaseModel):
    display_name: Optional[str] = None
    external_urls: Dict[str, str] = Field(default_factory=dict)
    followers: Optional[Followers] = None
    href: str
    id: str
    images: List[Image] = Field(default_factory=list)
    type: str = "user"
    uri: str


class PlaylistTracksRef(BaseModel):
    href: str
    total: int


class SimplifiedPlaylist(BaseModel):
    collaborative: bool
    description: Optional[str] = None
    external_urls: Dict[str, str] = Field(default_factory=dict)
    href: str
    id: str
    images: Optional[List[Image]] = None
    name: str
    owner: PublicUser
    public: Optional[bool] = None
    snapshot_id: str
    tracks: PlaylistTracksRef
    type: str = "playlist"
    uri: str


class PlaylistTrack(BaseModel):
    added_at: Optional[str] = None
    added_by: Optional[PublicUser] = None
    is_local: bool = False
    track: Optional[FullTrack] = None


class FullPlaylist(BaseModel):
    collaborative: bool
    description: Optional[str] = None
    external_urls: Dict[str, str] = Field(default_factory=dict)
    followers: Optional[Followers] = None
    href: str
    id: str
    images: Optional[List[Image]] = None
    name: str
    owner: PublicUser
    public: Optional[bool] = None
    snapshot_id: str
    tracks: Page[PlaylistTrack]
    type: str = "playlist"
    uri: str


class CUDResult(BaseModel):
    """Result of create/update/delete calls on playlist items."""

    snapshot_id: str
