import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from spotify_catalog.decoder import DecodedResult, FailureKind, decode, decode_result
from spotify_catalog.errors import SpotifyApiError, SpotifyAuthError, SpotifyTransportError
from spotify_catalog.models import CUDResult, Followers, FullArtist, Page, SimplifiedPlaylist

ARTIST = {
    "external_urls": {"spotify": "https://open.spotify.com/artist/0OdUWJ0sBjDrqHygGUXeCF"},
    "followers": {"href": None, "total": 306565},
    "genres": ["indie folk", "indie pop"],
    "href": "https://api.spotify.com/v1/artists/0OdUWJ0sBjDrqHygGUXeCF",
    "id": "0OdUWJ0sBjDrqHygGUXeCF",
    "images": [{"height": 816, "url": "https://i.scdn.co/image/eb266625", "width": 1000}],
    "name": "Band of Horses",
    "popularity": 59,
    "type": "artist",
    "uri": "spotify:artist:0OdUWJ0sBjDrqHygGUXeCF",
}


class TestDecode(unittest.TestCase):
    def test_well_formed_body_decodes(self):
        artist = decode(FullArtist, json.dumps(ARTIST))
        self.assertIsNotNone(artist)
        assert artist is not None

        self.assertEqual(artist.id, ARTIST["id"])
        self.assertEqual(artist.name, "Band of Horses")
        self.assertEqual(artist.followers.total, 306565)
        self.assertEqual(artist.genres, ["indie folk", "indie pop"])
        self.assertEqual(artist.images[0].width, 1000)

    def test_numeric_string_is_not_coerced(self):
        with self.assertLogs("spotify_catalog", level="ERROR"):
            self.assertIsNone(decode(Followers, '{"href": null, "total": "42"}'))
        self.assertEqual(decode(Followers, '{"href": null, "total": 42}').total, 42)

    def test_wrong_scalar_type_is_absent(self):
        payload = dict(ARTIST, popularity="59")
        with self.assertLogs("spotify_catalog", level="ERROR"):
            self.assertIsNone(decode(FullArtist, json.dumps(payload)))

    def test_unknown_keys_are_ignored(self):
        payload = dict(ARTIST, something_new={"a": 1})
        self.assertIsNotNone(decode(FullArtist, json.dumps(payload)))

    def test_missing_required_field_is_absent(self):
        payload = {k: v for k, v in ARTIST.items() if k != "name"}
        with self.assertLogs("spotify_catalog", level="ERROR") as logs:
            self.assertIsNone(decode(FullArtist, json.dumps(payload)))
        self.assertTrue(any("convert result failed" in line for line in logs.output))
        self.assertTrue(any("content:" in line for line in logs.output))

    def test_malformed_json_is_absent(self):
        with self.assertLogs("spotify_catalog", level="ERROR"):
            result = decode_result(CUDResult, '{"snapshot_id": ')
        self.assertFalse(result.ok)
        self.assertIsNone(result.value)
        self.assertEqual(result.failure, FailureKind.DECODE)

    def test_empty_body_is_absent(self):
        with self.assertLogs("spotify_catalog", level="ERROR"):
            self.assertIsNone(decode(CUDResult, ""))

    def test_generic_page(self):
        body = {
            "href": "https://api.spotify.com/v1/me/playlists?offset=0&limit=1",
            "items": [
                {
                    "collaborative": False,
                    "description": "",
                    "external_urls": {"spotify": "https://open.spotify.com/playlist/p1"},
                    "href": "https://api.spotify.com/v1/playlists/p1",
                    "id": "p1",
                    "images": [],
                    "name": "Road trip",
                    "owner": {
                        "display_name": "me",
                        "href": "https://api.spotify.com/v1/users/me",
                        "id": "me",
                        "type": "user",
                        "uri": "spotify:user:me",
                    },
                    "public": True,
                    "snapshot_id": "snap",
                    "tracks": {"href": "https://api.spotify.com/v1/playlists/p1/tracks", "total": 12},
                    "type": "playlist",
                    "uri": "spotify:playlist:p1",
                }
            ],
            "limit": 1,
            "next": "https://api.spotify.com/v1/me/playlists?offset=1&limit=1",
            "offset": 0,
            "previous": None,
            "total": 3,
        }
        page = decode(Page[SimplifiedPlaylist], json.dumps(body))
        self.assertIsNotNone(page)
        assert page is not None
        self.assertEqual(page.total, 3)
        self.assertEqual(page.items[0].name, "Road trip")
        self.assertEqual(page.items[0].tracks.total, 12)
        self.assertEqual(page.items[0].owner.id, "me")


class TestDecodedResult(unittest.TestCase):
    def test_success(self):
        result = decode_result(CUDResult, '{"snapshot_id": "abc"}')
        self.assertTrue(result.ok)
        self.assertIsNone(result.failure)
        self.assertEqual(result.value.snapshot_id, "abc")

    def test_from_remote_rejection(self):
        result = DecodedResult.from_error(SpotifyApiError(401, '{"error": "expired"}'))
        self.assertFalse(result.ok)
        self.assertIsNone(result.value)
        self.assertEqual(result.failure, FailureKind.REMOTE_REJECTION)
        self.assertEqual(result.status_code, 401)
        self.assertEqual(result.detail, '{"error": "expired"}')

    def test_from_transport_error(self):
        result = DecodedResult.from_error(SpotifyTransportError("connection refused"))
        self.assertEqual(result.failure, FailureKind.TRANSPORT)
        self.assertIn("connection refused", result.detail)

    def test_other_errors_propagate(self):
        with self.assertRaises(SpotifyAuthError):
            DecodedResult.from_error(SpotifyAuthError("bad secret"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
