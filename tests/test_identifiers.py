import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from spotify_catalog.enums import ResourceKind
from spotify_catalog.identifiers import get_id, get_ids, get_uri, get_uris

SAMPLE_ID = "2WX2uTcsvV5OnS0inACecP"


class TestGetId(unittest.TestCase):
    def test_bare_id_is_returned_unchanged(self):
        for kind in ResourceKind:
            self.assertEqual(get_id(kind, SAMPLE_ID), SAMPLE_ID)

    def test_uri_form(self):
        self.assertEqual(get_id(ResourceKind.ARTIST, f"spotify:artist:{SAMPLE_ID}"), SAMPLE_ID)
        self.assertEqual(get_id(ResourceKind.PLAYLIST, "spotify:playlist:59ZbFPES4DQwEjBpWHzrtC"), "59ZbFPES4DQwEjBpWHzrtC")

    def test_uri_form_for_every_kind(self):
        for kind in ResourceKind:
            self.assertEqual(get_id(kind, f"svc:{kind.value}:{SAMPLE_ID}"), SAMPLE_ID)
            self.assertEqual(get_id(kind, f"svc/{kind.value}/{SAMPLE_ID}"), SAMPLE_ID)

    def test_slash_form(self):
        self.assertEqual(get_id(ResourceKind.ALBUM, f"spotify/album/{SAMPLE_ID}"), SAMPLE_ID)

    def test_url_form(self):
        url = f"https://open.spotify.com/track/{SAMPLE_ID}"
        self.assertEqual(get_id(ResourceKind.TRACK, url), SAMPLE_ID)

    def test_user_uri_with_extra_segments(self):
        uri = "spotify:user:someone:playlist:59ZbFPES4DQwEjBpWHzrtC"
        self.assertEqual(get_id(ResourceKind.PLAYLIST, uri), "59ZbFPES4DQwEjBpWHzrtC")

    def test_kind_mismatch_returns_input_and_warns(self):
        raw = f"spotify:album:{SAMPLE_ID}"
        with self.assertLogs("spotify_catalog", level="WARNING") as logs:
            self.assertEqual(get_id(ResourceKind.ARTIST, raw), raw)
        self.assertTrue(any("expected id of type 'artist' but found type 'album'" in line for line in logs.output))

    def test_kind_mismatch_in_url_returns_input(self):
        raw = f"https://open.spotify.com/album/{SAMPLE_ID}"
        with self.assertLogs("spotify_catalog", level="WARNING"):
            self.assertEqual(get_id(ResourceKind.TRACK, raw), raw)

    def test_uri_mismatch_falls_through_to_slash_form(self):
        # colon form names the wrong kind, slash form names the right one
        raw = f"x:album:y/track/{SAMPLE_ID}"
        with self.assertLogs("spotify_catalog", level="WARNING"):
            self.assertEqual(get_id(ResourceKind.TRACK, raw), SAMPLE_ID)

    def test_hyphenated_string_is_a_bare_id(self):
        raw = f"spotify-album-{SAMPLE_ID}"
        self.assertEqual(get_id(ResourceKind.ARTIST, raw), raw)

    def test_two_segments_is_a_bare_id(self):
        self.assertEqual(get_id(ResourceKind.TRACK, "track:abc"), "track:abc")
        self.assertEqual(get_id(ResourceKind.TRACK, "track/abc"), "track/abc")


class TestGetUri(unittest.TestCase):
    def test_builds_canonical_uri(self):
        self.assertEqual(get_uri(ResourceKind.TRACK, SAMPLE_ID), f"spotify:track:{SAMPLE_ID}")
        self.assertEqual(
            get_uri(ResourceKind.TRACK, f"https://open.spotify.com/track/{SAMPLE_ID}"),
            f"spotify:track:{SAMPLE_ID}",
        )

    def test_uri_resolves_back_to_id(self):
        for raw in (SAMPLE_ID, f"spotify:track:{SAMPLE_ID}", f"open.spotify.com/track/{SAMPLE_ID}"):
            self.assertEqual(get_id(ResourceKind.TRACK, get_uri(ResourceKind.TRACK, raw)), SAMPLE_ID)

    def test_list_helpers(self):
        raws = ["a", "spotify:track:b", "https://open.spotify.com/track/c"]
        self.assertEqual(get_ids(ResourceKind.TRACK, raws), ["a", "b", "c"])
        self.assertEqual(get_uris(ResourceKind.TRACK, raws), ["spotify:track:a", "spotify:track:b", "spotify:track:c"])
        self.assertEqual(get_ids(ResourceKind.TRACK, []), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
