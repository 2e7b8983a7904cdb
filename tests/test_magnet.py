import unittest

from debridkit.exceptions import InvalidMagnet
from debridkit.magnet import Magnet, extract_info_hash
from debridkit.models import DebridFile

HASH = "34ff1fae9661d72152fb1fc31e27c15297072654"


class TestMagnet(unittest.TestCase):
    def test_extract_hash_is_case_insensitive(self):
        magnet = f"magnet:?xt=urn:btih:{HASH.upper()}&dn=Movie"
        self.assertEqual(extract_info_hash(magnet), HASH)

    def test_extract_hash_is_idempotent(self):
        magnet = f"magnet:?xt=URN:BTIH:{HASH.upper()}"
        first = extract_info_hash(magnet)
        self.assertEqual(extract_info_hash(f"magnet:?xt=urn:btih:{first}"), first)

    def test_rejects_missing_or_short_hash(self):
        for magnet in ["", "test-magnet", "magnet:?xt=urn:btih:ABC123DEF456&dn=Movie",
                       f"magnet:?xt=urn:btih:{HASH}ff", f"magnet:?xt=urn:btih:{HASH[:-1]}z"]:
            with self.subTest(magnet=magnet):
                with self.assertRaises(InvalidMagnet):
                    extract_info_hash(magnet)

    def test_parse_reads_display_name(self):
        magnet = Magnet.parse(f"magnet:?xt=urn:btih:{HASH}&dn=Some+Movie&tr=udp%3A%2F%2Ft")
        self.assertEqual(magnet.info_hash, HASH)
        self.assertEqual(magnet.display_name, "Some Movie")

    def test_from_hash(self):
        magnet = Magnet.from_hash(HASH.upper(), name="movie")
        self.assertEqual(magnet.uri, f"magnet:?xt=urn:btih:{HASH.upper()}&dn=movie")
        self.assertEqual(magnet.info_hash, HASH)
        self.assertEqual(str(magnet), magnet.uri)


class TestDebridFile(unittest.TestCase):
    def setUp(self):
        self.file = DebridFile("test/video/movie.mp4", 1024 * 1024 * 100, {"id": "123"})

    def test_filename(self):
        self.assertEqual(self.file.filename, "movie.mp4")
        self.assertEqual(DebridFile("very/deep/nested/path/file.txt", 1).filename, "file.txt")

    def test_extension(self):
        self.assertEqual(self.file.extension, "mp4")
        self.assertEqual(DebridFile("test/file", 1).extension, "")
        self.assertEqual(DebridFile("archive.tar.gz", 1).extension, "gz")

    def test_formatted_size(self):
        self.assertEqual(self.file.formatted_size, "100 MB")
        self.assertEqual(DebridFile("a", 512).formatted_size, "512 B")
        self.assertEqual(DebridFile("a", 1536).formatted_size, "1.5 KB")
        self.assertEqual(DebridFile("a", 1572864).formatted_size, "1.5 MB")


if __name__ == "__main__":
    unittest.main()
