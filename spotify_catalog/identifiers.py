"""Normalize Spotify IDs, URIs and URLs.

Accepted forms for an artist (the same applies to every ResourceKind):
  - 2WX2uTcsvV5OnS0inACecP
  - spotify:artist:2WX2uTcsvV5OnS0inACecP
  - https://open.spotify.com/artist/2WX2uTcsvV5OnS0inACecP

A kind mismatch is only reported; the input is then passed through untouched
and the Web API gets to reject it.
"""

from typing import Iterable, List, Optional

from utils.logger import log_warning

from .enums import ResourceKind

URI_SCHEME = "spotify"


def _match_last_segment(kind: ResourceKind, raw: str, sep: str) -> Optional[str]:
    fields = raw.split(sep)
    if len(fields) < 3:
        return None

    found = fields[-2]
    if found != kind.value:
        log_warning(f"expected id of type {kind.value!r} but found type {found!r} {raw!r}")
        return None

    return fields[-1]


def get_id(kind: ResourceKind, raw: str) -> str:
    """Return the bare Spotify ID for a raw ID, URI or URL of the given kind."""

    raw = str(raw)
    for sep in (":", "/"):
        found = _match_last_segment(kind, raw, sep)
        if found is not None:
            return found
    return raw


def get_uri(kind: ResourceKind, raw: str) -> str:
    """Return the canonical ``spotify:<kind>:<id>`` URI."""

    return f"{URI_SCHEME}:{kind.value}:{get_id(kind, raw)}"


def get_ids(kind: ResourceKind, raws: Iterable[str]) -> List[str]:
    return [get_id(kind, r) for r in (raws or [])]


def get_uris(kind: ResourceKind, raws: Iterable[str]) -> List[str]:
    return [get_uri(kind, r) for r in (raws or [])]
