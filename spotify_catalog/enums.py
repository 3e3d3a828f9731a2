from enum import Enum


class ResourceKind(str, Enum):
    """Kind of catalog object; the value is the token used in URIs, URLs and paths."""

    TRACK = "track"
    ARTIST = "artist"
    ALBUM = "album"
    PLAYLIST = "playlist"
    USER = "user"

    def __str__(self) -> str:
        return self.value


class AlbumType(str, Enum):
    ALBUM = "album"
    SINGLE = "single"
    APPEARS_ON = "appears_on"
    COMPILATION = "compilation"

    def __str__(self) -> str:
        return self.value
