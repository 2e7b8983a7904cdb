import unittest

from debridkit.clients.debridlink import DebridLinkClient
from debridkit.exceptions import AuthenticationError, NotReady, ProviderError, RemoteItemError
from tests.fakes import INFO_HASH, MAGNET, FakeApi, form, query

CACHED = {"success": True, "value": {INFO_HASH: {
    "name": "Movie",
    "hashString": INFO_HASH,
    "files": [{"name": "Movie.mkv", "size": 2048}, {"name": "Subs/en.srt", "size": 12}],
}}}


def seedbox(percent=100):
    return {
        "id": "dl-1",
        "name": "Movie",
        "hashString": INFO_HASH,
        "downloadPercent": percent,
        "files": [
            {"id": "f1", "name": "Movie.mkv", "size": 2048, "downloadUrl": "https://dl.debrid-link.com/f1/Movie.mkv"},
            {"id": "f2", "name": "Subs/en.srt", "size": 12, "downloadUrl": "https://dl.debrid-link.com/f2/en.srt"},
        ],
    }


class TestDebridLinkClient(unittest.TestCase):
    def setUp(self):
        self.api = FakeApi("/api/v2")
        self.client = DebridLinkClient("dl-token", http=self.api.http(), retry_delay=0)

    def test_cached_files(self):
        self.api.add("GET", "/seedbox/cached", CACHED)

        files = self.client.get_cached_files(MAGNET)

        self.assertEqual([(f.path, f.size) for f in files], [("Movie.mkv", 2048), ("Subs/en.srt", 12)])
        check = self.api.calls("GET", "/seedbox/cached")[0]
        self.assertEqual(query(check), {"url": INFO_HASH})
        self.assertEqual(check.headers["Authorization"], "Bearer dl-token")

    def test_not_cached(self):
        self.api.add("GET", "/seedbox/cached", {"success": True, "value": {}})
        self.assertEqual(self.client.get_cached_files(MAGNET), [])

    def test_get_link_adds_cached_torrent(self):
        self.api.add("GET", "/seedbox/cached", CACHED)
        self.api.add("GET", "/seedbox/list", {"success": True, "value": []})
        self.api.add("GET", "/seedbox/list", {"success": True, "value": [seedbox()]})
        self.api.add("POST", "/seedbox/add", {"success": True, "value": {"id": "dl-1"}})

        self.assertEqual(self.client.get_link(MAGNET, "Subs/en.srt"), "https://dl.debrid-link.com/f2/en.srt")
        add = form(self.api.calls("POST", "/seedbox/add")[0])
        self.assertEqual(add, {"url": MAGNET, "async": "true"})
        info = self.api.calls("GET", "/seedbox/list")[1]
        self.assertEqual(query(info), {"ids": "dl-1"})

    def test_get_link_while_downloading(self):
        self.api.add("GET", "/seedbox/cached", CACHED)
        self.api.add("GET", "/seedbox/list", {"success": True, "value": [seedbox(35)]})
        with self.assertRaises(NotReady) as ctx:
            self.client.get_link(MAGNET, "Movie.mkv")
        self.assertEqual(ctx.exception.status, "35%")

    def test_get_link_of_failed_torrent(self):
        failed = dict(seedbox(40), errorId=2)
        self.api.add("GET", "/seedbox/cached", CACHED)
        self.api.add("GET", "/seedbox/list", {"success": True, "value": [failed]})
        with self.assertRaises(RemoteItemError) as ctx:
            self.client.get_link(MAGNET, "Movie.mkv")
        self.assertEqual(ctx.exception.code, "error 2")
        self.assertEqual(ctx.exception.provider, "DebridLink")

    def test_add_magnet(self):
        self.api.add("GET", "/seedbox/list", {"success": True, "value": [seedbox()]})
        self.assertEqual(self.client.add_magnet(MAGNET), "dl-1")
        self.assertEqual(self.api.calls("POST", "/seedbox/add"), [])

    def test_error_payloads(self):
        self.api.add("GET", "/seedbox/cached", {"success": False, "error": "badToken"}, 401)
        with self.assertRaises(AuthenticationError):
            self.client.get_cached_files(MAGNET)

        self.api.add("GET", "/seedbox/list", {"success": True, "value": []})
        self.api.add("POST", "/seedbox/add", {"success": False, "error": "maxTorrent"})
        with self.assertRaises(ProviderError) as ctx:
            self.client.add_magnet(MAGNET)
        self.assertEqual(ctx.exception.code, "maxTorrent")
        self.assertEqual(ctx.exception.provider, "DebridLink")


if __name__ == "__main__":
    unittest.main()
